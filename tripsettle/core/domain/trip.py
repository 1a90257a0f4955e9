"""
Trip — Модель поездки

Immutable Pydantic модель: метаданные поездки (название, валюта, даты).
Участники и расходы передаются в движок отдельными списками.
"""

import datetime
from typing import Final

from pydantic import BaseModel, Field, model_validator

from tripsettle.core.domain.participant import EntityId


# Валюта по умолчанию
DEFAULT_CURRENCY: Final[str] = "EUR"


# =============================================================================
# TRIP MODEL
# =============================================================================


class Trip(BaseModel):
    """
    Модель поездки.

    Инварианты:
    - start_date <= end_date, если обе даты заданы
    - currency — 3-буквенный код ISO 4217 в верхнем регистре
    """

    id: EntityId = Field(..., description="Идентификатор поездки")
    name: str = Field(..., min_length=1, max_length=120, description="Название поездки")
    description: str | None = Field(default=None, max_length=500, description="Описание")
    currency: str = Field(
        default=DEFAULT_CURRENCY,
        pattern=r"^[A-Z]{3}$",
        description="Валюта поездки (ISO 4217)",
    )
    start_date: datetime.date | None = Field(default=None, description="Дата начала")
    end_date: datetime.date | None = Field(default=None, description="Дата окончания")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_dates_order(self) -> "Trip":
        """start_date не может быть позже end_date."""
        if (
            self.start_date is not None
            and self.end_date is not None
            and self.start_date > self.end_date
        ):
            raise ValueError(
                f"start_date {self.start_date} cannot be after end_date {self.end_date}"
            )
        return self

    def contains_date(self, day: datetime.date) -> bool:
        """
        Попадает ли дата в окно поездки.

        Незаданная граница окна не ограничивает дату.
        """
        if self.start_date is not None and day < self.start_date:
            return False
        if self.end_date is not None and day > self.end_date:
            return False
        return True

    def validate_expense_date(self, day: datetime.date) -> None:
        """
        Проверка даты расхода при его создании.

        Raises:
            ValueError: Если дата вне окна поездки
        """
        if not self.contains_date(day):
            raise ValueError(
                f"Expense date {day} must be within trip dates "
                f"({self.start_date} .. {self.end_date})"
            )
