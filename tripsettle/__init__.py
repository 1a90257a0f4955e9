"""
tripsettle — расчёт общих трат поездки и плана взаиморасчётов.

Публичный API движка:
- compute_balances(participants, expenses) -> list[ParticipantBalance]
- plan_settlement(balances) -> list[PaymentInstruction]
"""

from tripsettle.core.domain import (
    Expense,
    Participant,
    ParticipantBalance,
    PaymentInstruction,
    Trip,
)
from tripsettle.engine import (
    InternalInconsistency,
    InvalidReference,
    SettlementEngineError,
    compute_balances,
    plan_settlement,
)

__version__ = "0.1.0"

__all__ = [
    "Trip",
    "Participant",
    "Expense",
    "ParticipantBalance",
    "PaymentInstruction",
    "compute_balances",
    "plan_settlement",
    "SettlementEngineError",
    "InvalidReference",
    "InternalInconsistency",
]
