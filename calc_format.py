"""
Форматирование чисел для дисплея и истории калькулятора.

Правило: целое значение выводится без точки, дробное — не более 10 знаков
после точки (округление half-up), хвостовые нули отбрасываются.
"""

import math
from decimal import Decimal, ROUND_HALF_UP

FRACTION_DIGITS = 10
_QUANT = Decimal(1).scaleb(-FRACTION_DIGITS)  # 1E-10


def is_finite(value: float) -> bool:
    return not (math.isinf(value) or math.isnan(value))


def format_number(value: float) -> str:
    if not is_finite(value):
        raise ValueError("Нельзя отформатировать %r" % value)
    if value == int(value):
        # -0.0 тоже попадает сюда и превращается в "0"
        return str(int(value))
    # repr даёт кратчайшую запись float, с неё и округляем
    d = Decimal(repr(value)).quantize(_QUANT, rounding=ROUND_HALF_UP)
    if d == 0:
        return "0"
    s = format(d, "f")
    if "." in s:
        s = s.rstrip("0").rstrip(".")
    return s


def parse_operand(text: str) -> float:
    """Строка ввода -> float. Принимает и запятую как десятичный разделитель."""
    return float(text.replace(",", "."))
