"""
Contract Validation Module

Модуль для валидации JSON контрактов представлений поездки.
"""

from .validators import (
    ContractValidator,
    SchemaLoader,
    TripSettlementValidator,
    TripSummaryValidator,
    validate_trip_settlement,
    validate_trip_summary,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "TripSummaryValidator",
    "TripSettlementValidator",
    # Functions
    "validate_trip_summary",
    "validate_trip_settlement",
]
