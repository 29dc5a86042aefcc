"""
Number Syntax — синтаксическая проверка и конвертация числовых полей

Синтаксический пре-чек перед конвертацией:
- Пробелы игнорируются
- Не более одной десятичной точки
- Минус допустим только первым символом токена
- Все остальные символы — ASCII цифры

Токен, прошедший пре-чек, но не сконвертированный (".", " ", "-"),
отклоняется так же, как синтаксически невалидный: NumberInvalid.
Молчаливой коэрции нет.
"""

from typing import Callable, Final, Optional, TypeVar

from src.core.errors import NumberInvalid

T = TypeVar("T")

_ASCII_DIGITS: Final[frozenset[str]] = frozenset("0123456789")


def is_valid_number(token: str) -> bool:
    """
    Синтаксическая проверка числового токена.

    Args:
        token: Сырое поле строки данных

    Returns:
        True если токен синтаксически допустим

    Examples:
        >>> is_valid_number("-12.3")
        True
        >>> is_valid_number(" 12 ")
        True
        >>> is_valid_number("12.3.4")
        False
        >>> is_valid_number(" -1")
        False
        >>> is_valid_number("1e5")
        False
    """
    dots = 0
    for position, char in enumerate(token):
        if char == " ":
            continue
        if char == ".":
            dots += 1
            if dots > 1:
                return False
            continue
        if position == 0 and char == "-":
            continue
        if char not in _ASCII_DIGITS:
            return False
    return True


def parse_number(
    token: str,
    number_type: Callable[[str], T] = float,
    *,
    row: Optional[int] = None,
    col: Optional[int] = None,
) -> T:
    """
    Конвертация числового токена в T.

    Конвертируется токен без внешних пробелов; внутренние пробелы
    ("1 2") конвертацию не проходят.

    Args:
        token: Сырое поле строки данных
        number_type: Конструктор T из десятичной строки (float, Decimal, Fraction)
        row: Номер строки данных (с 1), для диагностики
        col: Номер колонки (с 1), для диагностики

    Raises:
        NumberInvalid: токен не прошёл пре-чек или конвертацию
    """
    if not is_valid_number(token):
        raise NumberInvalid(token, row=row, col=col)
    try:
        return number_type(token.strip())
    except (ValueError, ArithmeticError) as exc:
        # Decimal сообщает об ошибке через InvalidOperation (ArithmeticError)
        raise NumberInvalid(token, row=row, col=col) from exc
