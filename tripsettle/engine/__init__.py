"""Engine — расчёт балансов и плана расчётов по поездке.

Поток данных строго однонаправленный:
    participants + expenses → BalanceCalculator → balances
    balances → SettlementPlanner → payments
"""

from .balance_calculator import (
    BalanceCalculator,
    BalanceCalculatorConfig,
    compute_balances,
)
from .errors import InternalInconsistency, InvalidReference, SettlementEngineError
from .settlement_planner import (
    SettlementPlanner,
    apply_payments,
    plan_settlement,
    verify_settlement,
)

__all__ = [
    # Balance Calculator
    "BalanceCalculator",
    "BalanceCalculatorConfig",
    "compute_balances",
    # Settlement Planner
    "SettlementPlanner",
    "plan_settlement",
    "apply_payments",
    "verify_settlement",
    # Errors
    "SettlementEngineError",
    "InvalidReference",
    "InternalInconsistency",
]
