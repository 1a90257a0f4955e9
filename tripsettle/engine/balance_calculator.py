"""Balance Calculator: расходы → балансы участников

Порядок вычислений:
1. total_amount = Σ expense.amount (точно, без округления)
2. total_paid[p] = Σ expense.amount, где payer == p (0 для неплативших)
3. fair_share = round(total_amount / N, 2, HALF_UP); 0 при N == 0
4. balance[p] = total_paid[p] - fair_share
5. Коррекция дрейфа: drift = Σ balance. Если drift != 0, он вычитается из
   баланса первого (в порядке входа) участника с balance > 0, а если таких
   нет, то из баланса первого участника.

Порядок участников на входе — часть контракта: он определяет, кто
поглощает дрейф округления. Результат идёт в том же порядке.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Sequence

from tripsettle.core.domain.balance import ParticipantBalance
from tripsettle.core.domain.expense import Expense
from tripsettle.core.domain.participant import EntityId, Participant
from tripsettle.core.math.money import (
    DEFAULT_ROUNDING,
    MONEY_SCALE,
    ZERO,
    divide_money,
    is_positive,
    is_zero,
    sum_money,
)
from tripsettle.engine.errors import InvalidReference

logger = logging.getLogger(__name__)


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class BalanceCalculatorConfig:
    """Конфигурация Balance Calculator.

    Defaults воспроизводят политику округления fair share: 2 знака, half-up.
    """

    money_scale: int = MONEY_SCALE
    rounding: str = DEFAULT_ROUNDING


# =============================================================================
# BALANCE CALCULATOR
# =============================================================================


class BalanceCalculator:
    """Balance Calculator: чистая функция над снапшотом участников и расходов."""

    def __init__(self, config: BalanceCalculatorConfig | None = None):
        """Инициализация.

        Args:
            config: конфигурация (опционально, используется default)
        """
        self.config = config or BalanceCalculatorConfig()

    def total_amount(self, expenses: Sequence[Expense]) -> Decimal:
        """Общая сумма трат поездки (точная)."""
        return sum_money(e.amount for e in expenses)

    def fair_share(self, total_amount: Decimal, participant_count: int) -> Decimal:
        """Равная доля на участника; 0 для поездки без участников."""
        if participant_count == 0:
            return ZERO
        return divide_money(
            total_amount,
            participant_count,
            scale=self.config.money_scale,
            rounding=self.config.rounding,
        )

    def compute(
        self,
        participants: Sequence[Participant],
        expenses: Sequence[Expense],
    ) -> list[ParticipantBalance]:
        """Расчёт балансов участников.

        Args:
            participants: участники поездки (порядок значим)
            expenses: расходы поездки

        Returns:
            Список ParticipantBalance в порядке participants, Σ balance == 0

        Raises:
            InvalidReference: плательщик расхода не входит в participants,
                либо id участников повторяются
        """
        paid: dict[EntityId, Decimal] = {}
        for p in participants:
            if p.id in paid:
                raise InvalidReference(f"Duplicate participant id: {p.id!r}", payer_id=p.id)
            paid[p.id] = ZERO

        for expense in expenses:
            if expense.payer_id not in paid:
                logger.error(
                    "Expense %r references unknown payer %r", expense.id, expense.payer_id
                )
                raise InvalidReference(
                    f"Expense payer {expense.payer_id!r} is not a participant of this trip",
                    payer_id=expense.payer_id,
                )
            paid[expense.payer_id] += expense.amount

        if not participants:
            return []

        total = self.total_amount(expenses)
        share = self.fair_share(total, len(participants))

        balances = [
            ParticipantBalance(
                participant_id=p.id,
                name=p.name,
                total_paid=paid[p.id],
                fair_share=share,
                balance=paid[p.id] - share,
            )
            for p in participants
        ]

        logger.debug(
            "Computed balances: participants=%d total=%s fair_share=%s",
            len(participants), total, share,
        )

        return self._correct_drift(balances)

    def _correct_drift(self, balances: list[ParticipantBalance]) -> list[ParticipantBalance]:
        """Перенос дрейфа округления на одного участника."""
        drift = sum_money(b.balance for b in balances)
        if is_zero(drift):
            return balances

        target = next(
            (i for i, b in enumerate(balances) if is_positive(b.balance)),
            0,
        )
        corrected = balances[target].with_balance(balances[target].balance - drift)

        logger.debug(
            "Rounding drift %s absorbed by participant %r (%s -> %s)",
            drift, corrected.participant_id, balances[target].balance, corrected.balance,
        )

        balances[target] = corrected
        return balances


def compute_balances(
    participants: Sequence[Participant],
    expenses: Sequence[Expense],
    config: BalanceCalculatorConfig | None = None,
) -> list[ParticipantBalance]:
    """Балансы участников с default-политикой округления.

    Raises:
        InvalidReference: если плательщик расхода не входит в participants
    """
    return BalanceCalculator(config).compute(participants, expenses)
