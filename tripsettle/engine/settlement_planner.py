"""Settlement Planner: балансы → платежи должников кредиторам

Жадное сопоставление двумя курсорами:
1. Разбиение на должников (balance < 0, храним |balance|) и кредиторов
   (balance > 0) с сохранением исходного порядка; нулевые балансы отбрасываются
2. amount = min(debtor.remaining, creditor.remaining); при amount > 0 —
   PaymentInstruction(debtor → creditor, amount)
3. amount вычитается из обоих остатков; курсор сдвигается, когда его остаток
   ровно ноль (оба курсора могут сдвинуться за один шаг)
4. Остановка, когда один из списков исчерпан

Не гарантирует теоретический минимум числа платежей, но детерминирован и
прост для аудита. Работает только со списком ParticipantBalance и никогда не
пересчитывает суммы из исходных расходов.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Sequence

from tripsettle.core.domain.balance import ParticipantBalance, PaymentInstruction
from tripsettle.core.domain.participant import EntityId
from tripsettle.core.math.money import is_positive, is_zero, sum_money
from tripsettle.engine.errors import InternalInconsistency

logger = logging.getLogger(__name__)


@dataclass
class _Side:
    """Сторона сопоставления с изменяемым остатком."""

    participant_id: EntityId
    name: str
    remaining: Decimal


# =============================================================================
# SETTLEMENT PLANNER
# =============================================================================


class SettlementPlanner:
    """Settlement Planner: stateless, без зависимостей."""

    def plan(self, balances: Sequence[ParticipantBalance]) -> list[PaymentInstruction]:
        """Построение плана платежей.

        Args:
            balances: балансы участников (результат Balance Calculator)

        Returns:
            Упорядоченный список PaymentInstruction (может быть пустым)

        Raises:
            InternalInconsistency: Σ balance != 0, либо курсоры не исчерпались
                одновременно
        """
        drift = sum_money(b.balance for b in balances)
        if not is_zero(drift):
            logger.error("Balances do not sum to zero (drift=%s)", drift)
            raise InternalInconsistency(
                f"Balances must sum to exactly zero, got drift {drift}", drift=drift
            )

        debtors: list[_Side] = []
        creditors: list[_Side] = []
        for b in balances:
            if b.is_debtor:
                debtors.append(_Side(b.participant_id, b.name, -b.balance))
            elif b.is_creditor:
                creditors.append(_Side(b.participant_id, b.name, b.balance))

        payments: list[PaymentInstruction] = []
        di = 0
        ci = 0

        while di < len(debtors) and ci < len(creditors):
            debtor = debtors[di]
            creditor = creditors[ci]

            amount = min(debtor.remaining, creditor.remaining)

            if is_positive(amount):
                payments.append(
                    PaymentInstruction(
                        payer_id=debtor.participant_id,
                        payer_name=debtor.name,
                        receiver_id=creditor.participant_id,
                        receiver_name=creditor.name,
                        amount=amount,
                    )
                )

            debtor.remaining -= amount
            creditor.remaining -= amount

            if is_zero(debtor.remaining):
                di += 1
            if is_zero(creditor.remaining):
                ci += 1

        if di != len(debtors) or ci != len(creditors):
            logger.error(
                "Settlement cursors not exhausted together: debtors %d/%d, creditors %d/%d",
                di, len(debtors), ci, len(creditors),
            )
            raise InternalInconsistency(
                "Settlement left unmatched balances: "
                f"debtors {di}/{len(debtors)}, creditors {ci}/{len(creditors)}"
            )

        logger.debug(
            "Planned %d payments for %d debtors and %d creditors",
            len(payments), len(debtors), len(creditors),
        )
        return payments


def plan_settlement(balances: Sequence[ParticipantBalance]) -> list[PaymentInstruction]:
    """План платежей для списка балансов.

    Raises:
        InternalInconsistency: если балансы не сходятся в ноль
    """
    return SettlementPlanner().plan(balances)


# =============================================================================
# ПРОВЕРКА ПЛАНА
# =============================================================================


def apply_payments(
    balances: Sequence[ParticipantBalance],
    payments: Sequence[PaymentInstruction],
) -> dict[EntityId, Decimal]:
    """Применение плана к балансам.

    Плательщик погашает долг (его баланс растёт на amount), получатель
    получает причитающееся (его баланс уменьшается на amount).

    Returns:
        Остаточные балансы participant_id → Decimal

    Raises:
        InternalInconsistency: платёж ссылается на неизвестного участника
    """
    residual: dict[EntityId, Decimal] = {b.participant_id: b.balance for b in balances}

    for payment in payments:
        for participant_id in (payment.payer_id, payment.receiver_id):
            if participant_id not in residual:
                raise InternalInconsistency(
                    f"Payment references unknown participant {participant_id!r}"
                )
        residual[payment.payer_id] += payment.amount
        residual[payment.receiver_id] -= payment.amount

    return residual


def verify_settlement(
    balances: Sequence[ParticipantBalance],
    payments: Sequence[PaymentInstruction],
) -> None:
    """Проверка, что план полностью закрывает все балансы.

    Raises:
        InternalInconsistency: самоплатёж, неположительная сумма, неизвестный
            участник или ненулевой остаток после применения плана
    """
    for payment in payments:
        if payment.payer_id == payment.receiver_id:
            raise InternalInconsistency(
                f"Self-payment for participant {payment.payer_id!r}"
            )
        if not is_positive(payment.amount):
            raise InternalInconsistency(
                f"Payment amount must be positive, got {payment.amount}"
            )

    residual = apply_payments(balances, payments)
    unsettled = {pid: amount for pid, amount in residual.items() if not is_zero(amount)}
    if unsettled:
        raise InternalInconsistency(
            f"Settlement leaves non-zero balances: {unsettled}",
            drift=sum_money(unsettled.values()),
        )
