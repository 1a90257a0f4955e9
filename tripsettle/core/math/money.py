"""
Money — точная десятичная арифметика для денежных сумм

Модуль обеспечивает детерминированную работу с деньгами:
- Конверсия входных значений в Decimal (float запрещён)
- Квантование до валютной точности (2 знака, ROUND_HALF_UP)
- Деление суммы на N частей с воспроизводимым округлением
- Точные суммы и сравнения с нулём
- Сериализация в fixed-point строки

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Двоичный float никогда не попадает в денежные вычисления
2. Сравнения с нулём точные (без epsilon)
3. NaN/Infinity отклоняются на входе
4. Все операции детерминированы и воспроизводимы
"""

from decimal import ROUND_DOWN, ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Final, Iterable

# =============================================================================
# ПАРАМЕТРЫ ВАЛЮТНОЙ ТОЧНОСТИ
# =============================================================================

# Количество дробных знаков минорной единицы валюты (центы)
MONEY_SCALE: Final[int] = 2

# Политика округления fair share: half-up, без вариантов
DEFAULT_ROUNDING: Final[str] = ROUND_HALF_UP

# Точный ноль для сумм
ZERO: Final[Decimal] = Decimal("0")

# Запас точности для промежуточного деления
_DIVISION_GUARD_DIGITS: Final[int] = 10


# =============================================================================
# КОНВЕРСИЯ
# =============================================================================


def to_money(value: Decimal | int | str) -> Decimal:
    """
    Конверсия значения в Decimal без потери точности.

    Принимает Decimal, int или строку. float отклоняется: двоичное
    представление 0.1 + 0.2 != 0.3 недопустимо для денег.

    Args:
        value: Исходное значение

    Returns:
        Decimal с исходной точностью (без квантования)

    Raises:
        TypeError: Если value — float, bool или неподдерживаемый тип
        ValueError: Если строка не парсится или значение NaN/Infinity

    Examples:
        >>> to_money("75.00")
        Decimal('75.00')
        >>> to_money(3)
        Decimal('3')
    """
    if isinstance(value, bool) or isinstance(value, float):
        raise TypeError(f"Money amounts must not be {type(value).__name__}, got {value!r}")

    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, str)):
        try:
            result = Decimal(value)
        except InvalidOperation:
            raise ValueError(f"Invalid money amount: {value!r}") from None
    else:
        raise TypeError(f"Unsupported money type: {type(value).__name__}")

    if not result.is_finite():
        raise ValueError(f"Money amount must be finite, got {value!r}")

    return result


def money_quantum(scale: int = MONEY_SCALE) -> Decimal:
    """Шаг квантования для заданной точности (scale=2 → 0.01)."""
    if scale < 0:
        raise ValueError(f"scale must be non-negative, got {scale}")
    return Decimal(1).scaleb(-scale)


# =============================================================================
# ОКРУГЛЕНИЕ И ДЕЛЕНИЕ
# =============================================================================


def quantize_money(
    value: Decimal,
    scale: int = MONEY_SCALE,
    rounding: str = DEFAULT_ROUNDING,
) -> Decimal:
    """
    Округление до валютной точности.

    Args:
        value: Сумма
        scale: Количество дробных знаков (default: 2)
        rounding: Режим округления decimal (default: ROUND_HALF_UP)

    Returns:
        Сумма ровно с `scale` дробными знаками

    Examples:
        >>> quantize_money(Decimal("96.665"))
        Decimal('96.67')
        >>> quantize_money(Decimal("-0.005"))
        Decimal('-0.01')
    """
    return value.quantize(money_quantum(scale), rounding=rounding)


def divide_money(
    amount: Decimal,
    parts: int,
    scale: int = MONEY_SCALE,
    rounding: str = DEFAULT_ROUNDING,
) -> Decimal:
    """
    Деление суммы на `parts` равных долей с округлением до валютной точности.

    Промежуточное частное усекается (ROUND_DOWN) с запасом точности, поэтому
    ложная "половина" при двойном округлении не возникает: точная половина
    минорной единицы остаётся точной, всё остальное округляется корректно.

    Args:
        amount: Делимая сумма
        parts: Количество долей (> 0)
        scale: Количество дробных знаков
        rounding: Режим финального округления

    Returns:
        Доля, округлённая до `scale` знаков

    Raises:
        ValueError: Если parts <= 0

    Examples:
        >>> divide_money(Decimal("290.00"), 3)
        Decimal('96.67')
        >>> divide_money(Decimal("100"), 8)
        Decimal('12.50')
    """
    if parts <= 0:
        raise ValueError(f"parts must be positive, got {parts}")

    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, amount.adjusted() + scale + _DIVISION_GUARD_DIGITS)
        ctx.rounding = ROUND_DOWN
        quotient = amount / Decimal(parts)

    return quantize_money(quotient, scale=scale, rounding=rounding)


def sum_money(values: Iterable[Decimal]) -> Decimal:
    """
    Точная сумма денежных значений.

    В отличие от builtin sum() стартует с Decimal("0"), поэтому пустая
    последовательность даёт Decimal, а не int.
    """
    total = ZERO
    for value in values:
        total += value
    return total


# =============================================================================
# ТОЧНЫЕ СРАВНЕНИЯ
# =============================================================================


def is_zero(value: Decimal) -> bool:
    """Точная проверка на ноль (0.00 == 0)."""
    return value == ZERO


def is_positive(value: Decimal) -> bool:
    """Строго больше нуля."""
    return value > ZERO


def is_negative(value: Decimal) -> bool:
    """Строго меньше нуля."""
    return value < ZERO


# =============================================================================
# СЕРИАЛИЗАЦИЯ
# =============================================================================


def format_amount(value: Decimal, scale: int = MONEY_SCALE) -> str:
    """
    Fixed-point строка для контрактов и отчётов.

    Значения с большей точностью, чем `scale`, не усекаются: строка
    сохраняет все значащие дробные знаки, чтобы сериализация была
    обратимой.

    Examples:
        >>> format_amount(Decimal("28.34"))
        '28.34'
        >>> format_amount(Decimal("5"))
        '5.00'
        >>> format_amount(Decimal("0.125"))
        '0.125'
    """
    exponent = value.as_tuple().exponent
    if isinstance(exponent, int) and -exponent > scale:
        return f"{value:f}"
    return f"{value.quantize(money_quantum(scale)):f}"


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_positive(value: Decimal, name: str) -> None:
    """
    Валидация, что сумма строго положительная.

    Raises:
        ValueError: Если value <= 0
    """
    if not is_positive(value):
        raise ValueError(f"{name} must be positive, got {value}")


def validate_non_negative(value: Decimal, name: str) -> None:
    """
    Валидация, что сумма неотрицательная.

    Raises:
        ValueError: Если value < 0
    """
    if is_negative(value):
        raise ValueError(f"{name} must be non-negative, got {value}")
