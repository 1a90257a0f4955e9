"""
Производные результаты расчёта: ParticipantBalance и PaymentInstruction

Frozen dataclasses, вычисляются заново при каждом вызове движка и никогда
не сохраняются.

Знак баланса:
    balance > 0  → кредитор (ему должны)
    balance < 0  → должник (должен сам)
    balance == 0 → расчёт не требуется
"""

from dataclasses import dataclass, replace
from decimal import Decimal

from tripsettle.core.domain.participant import EntityId
from tripsettle.core.math.money import is_negative, is_positive, is_zero


@dataclass(frozen=True)
class ParticipantBalance:
    """Чистая позиция участника по поездке."""

    participant_id: EntityId
    name: str

    total_paid: Decimal  # Сумма расходов, оплаченных участником
    fair_share: Decimal  # Равная доля от общих трат (округлённая)
    balance: Decimal  # total_paid - fair_share (+ коррекция дрейфа)

    @property
    def is_creditor(self) -> bool:
        return is_positive(self.balance)

    @property
    def is_debtor(self) -> bool:
        return is_negative(self.balance)

    @property
    def is_settled(self) -> bool:
        return is_zero(self.balance)

    def with_balance(self, balance: Decimal) -> "ParticipantBalance":
        """Копия с другим балансом (используется коррекцией округления)."""
        return replace(self, balance=balance)


@dataclass(frozen=True)
class PaymentInstruction:
    """Один прямой платёж должника кредитору."""

    payer_id: EntityId
    payer_name: str
    receiver_id: EntityId
    receiver_name: str
    amount: Decimal  # Всегда > 0
