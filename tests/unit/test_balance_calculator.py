"""Тесты для Balance Calculator

Покрытие:
- Сценарий трёх участников с дрейфом округления
- Пустые входы и участники без расходов
- Политика коррекции дрейфа (первый кредитор, иначе первый участник)
- Инвариант нулевой суммы и сохранение сумм
- InvalidReference
- Конфигурация округления
"""

import datetime
from decimal import ROUND_DOWN, Decimal

import pytest

from tripsettle.core.domain import Expense, Participant
from tripsettle.engine import (
    BalanceCalculator,
    BalanceCalculatorConfig,
    InvalidReference,
    compute_balances,
)


DAY = datetime.date(2024, 7, 1)


def expense(payer_id, amount: str, expense_id=None) -> Expense:
    return Expense(id=expense_id, amount=amount, date=DAY, payer_id=payer_id)


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def calculator():
    """Balance Calculator с default-конфигурацией."""
    return BalanceCalculator()


@pytest.fixture
def three_participants():
    """Juan, María, Carlos."""
    return [
        Participant(id=1, name="Juan"),
        Participant(id=2, name="María"),
        Participant(id=3, name="Carlos"),
    ]


@pytest.fixture
def three_expenses():
    """75.00 / 90.00 / 125.00 — итого 290.00."""
    return [
        expense(1, "75.00", 201),
        expense(2, "90.00", 202),
        expense(3, "125.00", 203),
    ]


# =============================================================================
# SCENARIOS
# =============================================================================


class TestThreeParticipantScenario:
    """Juan/María/Carlos: fair share 96.67, дрейф -0.01 уходит Carlos."""

    def test_totals_and_fair_share(self, calculator, three_participants, three_expenses):
        balances = calculator.compute(three_participants, three_expenses)

        assert [b.total_paid for b in balances] == [
            Decimal("75.00"),
            Decimal("90.00"),
            Decimal("125.00"),
        ]
        assert all(b.fair_share == Decimal("96.67") for b in balances)
        assert calculator.total_amount(three_expenses) == Decimal("290.00")

    def test_balances_after_drift_correction(
        self, calculator, three_participants, three_expenses
    ):
        balances = calculator.compute(three_participants, three_expenses)

        assert [b.participant_id for b in balances] == [1, 2, 3]
        assert [b.name for b in balances] == ["Juan", "María", "Carlos"]
        assert [b.balance for b in balances] == [
            Decimal("-21.67"),
            Decimal("-6.67"),
            Decimal("28.34"),
        ]
        assert sum(b.balance for b in balances) == 0

    def test_module_function_matches_class(self, three_participants, three_expenses):
        assert compute_balances(three_participants, three_expenses) == BalanceCalculator().compute(
            three_participants, three_expenses
        )


class TestEdgeCases:
    """Граничные случаи"""

    def test_no_participants(self, calculator):
        assert calculator.compute([], []) == []

    def test_no_expenses_all_zero(self, calculator, three_participants):
        balances = calculator.compute(three_participants, [])
        assert len(balances) == 3
        for b in balances:
            assert b.total_paid == 0
            assert b.fair_share == 0
            assert b.balance == 0

    def test_single_participant_single_expense(self, calculator):
        balances = calculator.compute([Participant(id="solo", name="Ana")], [expense("solo", "50.00")])

        assert len(balances) == 1
        assert balances[0].total_paid == Decimal("50.00")
        assert balances[0].fair_share == Decimal("50.00")
        assert balances[0].balance == 0
        assert balances[0].is_settled

    def test_non_paying_participant_owes_fair_share(self, calculator, three_participants):
        balances = calculator.compute(three_participants, [expense(1, "30.00")])

        assert balances[1].total_paid == 0
        assert balances[1].balance == Decimal("-10.00")
        assert balances[2].balance == Decimal("-10.00")
        assert balances[0].balance == Decimal("20.00")

    def test_multiple_expenses_per_payer_aggregated(self, calculator, three_participants):
        expenses = [expense(1, "10.00"), expense(2, "5.00"), expense(1, "15.00")]
        balances = calculator.compute(three_participants, expenses)

        assert balances[0].total_paid == Decimal("25.00")
        assert balances[1].total_paid == Decimal("5.00")
        assert balances[2].total_paid == 0

    def test_no_fair_share_division_without_participants(self):
        calculator = BalanceCalculator()
        assert calculator.fair_share(Decimal("100.00"), 0) == 0


# =============================================================================
# DRIFT CORRECTION POLICY
# =============================================================================


class TestDriftCorrection:
    """Коррекция дрейфа: первый участник с balance > 0, иначе первый участник"""

    def test_first_positive_absorbs_when_creditor_not_first(self, calculator):
        # 10.00 / 3 = 3.33; сырые балансы -3.33, +6.67, -3.33; дрейф +0.01
        participants = [
            Participant(id="a", name="A"),
            Participant(id="b", name="B"),
            Participant(id="c", name="C"),
        ]
        balances = calculator.compute(participants, [expense("b", "10.00")])

        assert [b.balance for b in balances] == [
            Decimal("-3.33"),
            Decimal("6.66"),
            Decimal("-3.33"),
        ]

    def test_only_first_of_several_creditors_adjusted(self, calculator):
        # 20.00 / 3 = 6.67; сырые балансы +3.33, +3.33, -6.67; дрейф -0.01
        participants = [
            Participant(id=1, name="A"),
            Participant(id=2, name="B"),
            Participant(id=3, name="C"),
        ]
        balances = calculator.compute(participants, [expense(1, "10.00"), expense(2, "10.00")])

        assert [b.balance for b in balances] == [
            Decimal("3.34"),
            Decimal("3.33"),
            Decimal("-6.67"),
        ]

    def test_custom_rounding_mode(self):
        # 0.04 / 3 = 0.01 (ROUND_DOWN); сырые -0.01, -0.01, +0.03; дрейф +0.01
        calculator = BalanceCalculator(BalanceCalculatorConfig(rounding=ROUND_DOWN))
        participants = [
            Participant(id="a", name="A"),
            Participant(id="b", name="B"),
            Participant(id="c", name="C"),
        ]
        balances = calculator.compute(participants, [expense("c", "0.04")])
        assert [b.balance for b in balances] == [
            Decimal("-0.01"),
            Decimal("-0.01"),
            Decimal("0.02"),
        ]

    def test_no_creditor_falls_back_to_first_participant(self, calculator):
        # 0.01 / 2 = 0.005 → 0.01 (half-up); сырые 0.00, -0.01; дрейф -0.01.
        # Положительных балансов нет → корректируется первый участник.
        participants = [Participant(id=1, name="A"), Participant(id=2, name="B")]
        balances = calculator.compute(participants, [expense(1, "0.01")])

        assert [b.balance for b in balances] == [Decimal("0.01"), Decimal("-0.01")]
        assert balances[0].fair_share == Decimal("0.01")

    def test_no_correction_when_exact(self, calculator):
        participants = [Participant(id=1, name="A"), Participant(id=2, name="B")]
        balances = calculator.compute(participants, [expense(1, "10.00")])

        assert [b.balance for b in balances] == [Decimal("5.00"), Decimal("-5.00")]

    def test_participant_order_decides_who_absorbs(self, calculator, three_expenses):
        reordered = [
            Participant(id=3, name="Carlos"),
            Participant(id=2, name="María"),
            Participant(id=1, name="Juan"),
        ]
        balances = calculator.compute(reordered, three_expenses)

        assert [b.participant_id for b in balances] == [3, 2, 1]
        assert [b.balance for b in balances] == [
            Decimal("28.34"),
            Decimal("-6.67"),
            Decimal("-21.67"),
        ]


# =============================================================================
# INVARIANTS
# =============================================================================


EXPENSE_SETS = [
    [("p1", "75.00"), ("p2", "90.00"), ("p3", "125.00")],
    [("p1", "0.01")],
    [("p2", "100.00"), ("p2", "0.01"), ("p4", "33.33")],
    [("p1", "19.99"), ("p2", "0.05"), ("p3", "7.77"), ("p4", "1000.00"), ("p5", "0.03")],
    [("p5", "12.345"), ("p1", "0.001")],
    [("p3", "1"), ("p3", "1"), ("p3", "1")],
]


@pytest.mark.parametrize("rows", EXPENSE_SETS)
@pytest.mark.parametrize("size", [1, 2, 3, 4, 5, 7])
def test_zero_sum_and_conservation(rows, size):
    """Σ balance == 0 точно; Σ total_paid == total_amount."""
    participants = [Participant(id=f"p{i}", name=f"P{i}") for i in range(1, size + 1)]
    ids = {p.id for p in participants}
    expenses = [expense(pid, amount) for pid, amount in rows if pid in ids]

    calculator = BalanceCalculator()
    balances = calculator.compute(participants, expenses)

    assert len(balances) == size
    assert sum(b.balance for b in balances) == 0
    assert sum(b.total_paid for b in balances) == calculator.total_amount(expenses)


def test_deterministic(three_participants, three_expenses):
    first = compute_balances(three_participants, three_expenses)
    second = compute_balances(three_participants, three_expenses)
    assert first == second
    assert [str(b.balance) for b in first] == [str(b.balance) for b in second]


def test_inputs_not_mutated(three_participants, three_expenses):
    participants_before = list(three_participants)
    expenses_before = list(three_expenses)

    compute_balances(three_participants, three_expenses)

    assert three_participants == participants_before
    assert three_expenses == expenses_before


# =============================================================================
# ERRORS
# =============================================================================


class TestInvalidReference:
    """Плательщик вне списка участников"""

    def test_unknown_payer(self, calculator, three_participants):
        with pytest.raises(InvalidReference) as exc_info:
            calculator.compute(three_participants, [expense(1, "10.00"), expense(99, "5.00")])
        assert exc_info.value.payer_id == 99

    def test_payer_with_no_participants(self, calculator):
        with pytest.raises(InvalidReference):
            calculator.compute([], [expense(1, "10.00")])

    def test_id_type_matters(self, calculator):
        """id 1 и "1" — разные участники"""
        with pytest.raises(InvalidReference):
            calculator.compute([Participant(id=1, name="Juan")], [expense("1", "10.00")])

    def test_duplicate_participant_ids(self, calculator):
        participants = [Participant(id=1, name="Juan"), Participant(id=1, name="Juan bis")]
        with pytest.raises(InvalidReference, match="Duplicate"):
            calculator.compute(participants, [])
