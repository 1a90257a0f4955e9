"""
Domain models and value objects.

Contains the trip entities (Trip, Participant, Expense) and the derived
settlement results (ParticipantBalance, PaymentInstruction).
"""

from tripsettle.core.domain.balance import ParticipantBalance, PaymentInstruction
from tripsettle.core.domain.expense import Expense
from tripsettle.core.domain.participant import EntityId, Participant
from tripsettle.core.domain.trip import DEFAULT_CURRENCY, Trip

__all__ = [
    # Entities
    "EntityId",
    "Participant",
    "Expense",
    "Trip",
    "DEFAULT_CURRENCY",
    # Derived results
    "ParticipantBalance",
    "PaymentInstruction",
]
