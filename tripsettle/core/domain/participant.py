"""
Participant — Участник поездки

Immutable Pydantic модель. Участник принадлежит ровно одной поездке и
идентифицируется непрозрачным id (int или непустая строка), который
назначает внешний слой хранения.
"""

from typing import Union

from pydantic import BaseModel, Field, field_validator


# Непрозрачный идентификатор сущности (id из хранилища или внешний ключ)
EntityId = Union[int, str]


# =============================================================================
# PARTICIPANT MODEL
# =============================================================================


class Participant(BaseModel):
    """
    Участник поездки.

    Immutable модель (frozen=True): после того как на участника сослался
    расход, его идентичность не меняется.
    """

    id: EntityId = Field(..., description="Идентификатор участника")
    name: str = Field(..., min_length=1, max_length=120, description="Отображаемое имя")
    email: str | None = Field(
        default=None,
        pattern=r"^[^@\s]+@[^@\s]+$",
        description="Контактный email (опционально)",
    )

    model_config = {"frozen": True}

    @field_validator("id")
    @classmethod
    def validate_id_not_blank(cls, v: EntityId) -> EntityId:
        """Строковый id не может быть пустым."""
        if isinstance(v, str) and not v.strip():
            raise ValueError("participant id must not be blank")
        return v

    @field_validator("name")
    @classmethod
    def validate_name_not_blank(cls, v: str) -> str:
        """Имя из одних пробелов недопустимо."""
        if not v.strip():
            raise ValueError("participant name must not be blank")
        return v
