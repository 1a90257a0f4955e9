"""
Expense — Модель расхода поездки

Immutable Pydantic модель. Каждый расход оплачен ровно одним участником
(payer_id) и делится поровну между всеми участниками поездки.

Сумма хранится как точный Decimal; float на входе отклоняется.
"""

import datetime
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from tripsettle.core.domain.participant import EntityId
from tripsettle.core.math.money import to_money


# =============================================================================
# EXPENSE MODEL
# =============================================================================


class Expense(BaseModel):
    """
    Модель расхода.

    Immutable модель (frozen=True). Движок расчёта рассматривает список
    расходов как read-only снапшот на одно вычисление.
    """

    id: EntityId | None = Field(default=None, description="Идентификатор расхода (если сохранён)")
    amount: Decimal = Field(..., gt=0, description="Сумма расхода (точный decimal, > 0)")
    date: datetime.date = Field(..., description="Дата расхода")
    description: str | None = Field(default=None, max_length=255, description="Описание")
    payer_id: EntityId = Field(..., description="Идентификатор участника-плательщика")

    model_config = {"frozen": True}

    @field_validator("amount", mode="before")
    @classmethod
    def validate_amount_exact(cls, v: object) -> Decimal:
        """
        Сумма должна приходить в точном виде (Decimal, int или строка).

        float отклоняется до того, как pydantic успеет его сконвертировать.
        """
        try:
            return to_money(v)  # type: ignore[arg-type]
        except TypeError as e:
            raise ValueError(str(e)) from e
