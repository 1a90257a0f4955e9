"""
Trip views — итоговое представление поездки и план расчётов

Представления, которые отдаёт сервисный слой поверх движка:
- TripSummary: общая сумма, fair share, балансы участников
- TripSettlement: упорядоченные платежи должников кредиторам

TripSettlement строится только из балансов TripSummary; расходы
повторно не читаются.

Сериализация (to_contract) отдаёт суммы fixed-point строками, никогда float,
и соответствует схемам trip_summary.json / trip_settlement.json.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Final, Sequence

from tripsettle.core.domain.balance import ParticipantBalance, PaymentInstruction
from tripsettle.core.domain.expense import Expense
from tripsettle.core.domain.participant import EntityId, Participant
from tripsettle.core.domain.trip import Trip
from tripsettle.core.math.money import ZERO, format_amount, is_positive
from tripsettle.engine.balance_calculator import BalanceCalculator
from tripsettle.engine.settlement_planner import SettlementPlanner


# Версия контрактов представлений
VIEW_SCHEMA_VERSION: Final[str] = "1"


# =============================================================================
# VIEWS
# =============================================================================


@dataclass(frozen=True)
class TripSummary:
    """Итоги поездки."""

    trip_id: EntityId
    trip_name: str
    currency: str

    total_amount: Decimal
    fair_share: Decimal
    balances: list[ParticipantBalance] = field(default_factory=list)

    def to_contract(self) -> Dict[str, Any]:
        """Сериализация в trip_summary контракт."""
        return {
            "schema_version": VIEW_SCHEMA_VERSION,
            "trip_id": self.trip_id,
            "trip_name": self.trip_name,
            "currency": self.currency,
            "total_amount": format_amount(self.total_amount),
            "fair_share": format_amount(self.fair_share),
            "participants": [
                {
                    "id": b.participant_id,
                    "name": b.name,
                    "total_paid": format_amount(b.total_paid),
                    "balance": format_amount(b.balance),
                }
                for b in self.balances
            ],
        }


@dataclass(frozen=True)
class TripSettlement:
    """План расчётов по поездке."""

    trip_id: EntityId
    trip_name: str
    currency: str

    payments: list[PaymentInstruction] = field(default_factory=list)

    @property
    def is_settled(self) -> bool:
        """Платежи не нужны: все балансы нулевые."""
        return not self.payments

    def to_contract(self) -> Dict[str, Any]:
        """Сериализация в trip_settlement контракт."""
        return {
            "schema_version": VIEW_SCHEMA_VERSION,
            "trip_id": self.trip_id,
            "trip_name": self.trip_name,
            "currency": self.currency,
            "payments": [
                {
                    "payer_id": p.payer_id,
                    "payer_name": p.payer_name,
                    "receiver_id": p.receiver_id,
                    "receiver_name": p.receiver_name,
                    "amount": format_amount(p.amount),
                }
                for p in self.payments
            ],
        }


# =============================================================================
# BUILDERS
# =============================================================================


def build_trip_summary(
    trip: Trip,
    participants: Sequence[Participant],
    expenses: Sequence[Expense],
    calculator: BalanceCalculator | None = None,
) -> TripSummary:
    """
    Итоги поездки по снапшоту участников и расходов.

    Raises:
        InvalidReference: если плательщик расхода не входит в participants
    """
    calculator = calculator or BalanceCalculator()

    balances = calculator.compute(participants, expenses)
    total = calculator.total_amount(expenses)
    share = balances[0].fair_share if balances else ZERO

    return TripSummary(
        trip_id=trip.id,
        trip_name=trip.name,
        currency=trip.currency,
        total_amount=total,
        fair_share=share,
        balances=balances,
    )


def settle_summary(
    summary: TripSummary,
    planner: SettlementPlanner | None = None,
) -> TripSettlement:
    """
    План расчётов по готовым итогам.

    Raises:
        InternalInconsistency: если балансы итогов не сходятся в ноль
    """
    planner = planner or SettlementPlanner()

    return TripSettlement(
        trip_id=summary.trip_id,
        trip_name=summary.trip_name,
        currency=summary.currency,
        payments=planner.plan(summary.balances),
    )


def build_trip_settlement(
    trip: Trip,
    participants: Sequence[Participant],
    expenses: Sequence[Expense],
    calculator: BalanceCalculator | None = None,
    planner: SettlementPlanner | None = None,
) -> TripSettlement:
    """
    План расчётов по снапшоту участников и расходов.

    Raises:
        InvalidReference: если плательщик расхода не входит в participants
    """
    summary = build_trip_summary(trip, participants, expenses, calculator)
    return settle_summary(summary, planner)


# =============================================================================
# TEXT RENDERING
# =============================================================================


def format_money(amount: Decimal, currency: str, signed: bool = False) -> str:
    """
    Сумма с кодом валюты: "21.67 EUR".

    Args:
        amount: Сумма
        currency: Код валюты
        signed: Явный "+" для положительных сумм (для балансов)

    Examples:
        >>> format_money(Decimal("21.67"), "EUR")
        '21.67 EUR'
        >>> format_money(Decimal("28.34"), "EUR", signed=True)
        '+28.34 EUR'
    """
    text = format_amount(amount)
    if signed and is_positive(amount):
        text = f"+{text}"
    return f"{text} {currency}"


def render_settlement_text(summary: TripSummary, settlement: TripSettlement) -> str:
    """Текстовый отчёт по итогам и плану расчётов."""
    currency = summary.currency

    lines = [
        f"Trip: {summary.trip_name}",
        f"Total expenses: {format_money(summary.total_amount, currency)}",
        f"Participants: {len(summary.balances)}",
        f"Fair share: {format_money(summary.fair_share, currency)}",
        "",
        "Balances:",
    ]
    for b in summary.balances:
        lines.append(f"  {b.name}: {format_money(b.balance, currency, signed=True)}")

    lines.append("")
    lines.append("Payments:")
    if settlement.is_settled:
        lines.append("  (none)")
    for p in settlement.payments:
        lines.append(f"  {p.payer_name} -> {p.receiver_name}: {format_money(p.amount, currency)}")

    return "\n".join(lines)
