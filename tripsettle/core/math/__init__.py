"""
Core math modules для tripsettle

Денежные примитивы на точном Decimal.
"""

from tripsettle.core.math.money import (
    DEFAULT_ROUNDING,
    MONEY_SCALE,
    ZERO,
    divide_money,
    format_amount,
    is_negative,
    is_positive,
    is_zero,
    money_quantum,
    quantize_money,
    sum_money,
    to_money,
    validate_non_negative,
    validate_positive,
)

__all__ = [
    # Constants
    "DEFAULT_ROUNDING",
    "MONEY_SCALE",
    "ZERO",
    # Conversion
    "to_money",
    "money_quantum",
    # Rounding and division
    "quantize_money",
    "divide_money",
    "sum_money",
    # Exact comparisons
    "is_zero",
    "is_positive",
    "is_negative",
    # Serialization
    "format_amount",
    # Validation
    "validate_positive",
    "validate_non_negative",
]
