"""
Ошибки движка расчёта

Таксономия:
- InvalidReference: вход ссылается на участника вне списка. Исправляется
  только вызывающей стороной, внутри не ретраится.
- InternalInconsistency: нарушен инвариант нулевой суммы балансов. Это
  сигнал дефекта, он всегда всплывает к вызывающей стороне.
"""

from decimal import Decimal

from tripsettle.core.domain.participant import EntityId


class SettlementEngineError(Exception):
    """Базовый класс ошибок движка."""
    pass


class InvalidReference(SettlementEngineError):
    """
    Расход ссылается на плательщика, которого нет среди участников поездки
    (или список участников содержит дубликаты id).
    """

    def __init__(self, message: str, payer_id: EntityId | None = None):
        super().__init__(message)
        self.payer_id = payer_id


class InternalInconsistency(SettlementEngineError):
    """
    Балансы не сходятся в ноль на входе в планировщик, либо план платежей
    не закрывает балансы полностью.
    """

    def __init__(self, message: str, drift: Decimal | None = None):
        super().__init__(message)
        self.drift = drift
