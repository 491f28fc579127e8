"""
Движок калькулятора: состояние ввода, один бинарный оператор, история.

Движок не знает ничего про виджеты. Слой отображения подписывается через
subscribe() и после каждого действия читает display_text, pending_label
и history.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from calc_format import format_number, is_finite, parse_operand
from calc_history import DEFAULT_CAPACITY, HistoryEntry, HistoryLog

log = logging.getLogger("calculator.engine")

ERROR_TOKEN = "Ошибка"
DIGITS = "0123456789"


# ------------------ ОШИБКИ ------------------
class CalculatorError(Exception):
    """Ошибка вычисления. После неё движок показывает ERROR_TOKEN и сбрасывается."""


class DivisionByZeroError(CalculatorError):
    pass


class CalculatorOverflowError(CalculatorError):
    pass


# ------------------ ОПЕРАТОРЫ ------------------
class OperatorKind(Enum):
    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "×"
    DIVIDE = "÷"

    @property
    def symbol(self) -> str:
        return self.value

    @classmethod
    def from_key(cls, key: str) -> "OperatorKind":
        """Клавиша клавиатуры ('+', '-', '*', '/') или символ кнопки -> оператор."""
        aliases = {"*": cls.MULTIPLY, "/": cls.DIVIDE}
        if key in aliases:
            return aliases[key]
        return cls(key)

    def apply(self, a: float, b: float) -> float:
        if self is OperatorKind.ADD:
            res = a + b
        elif self is OperatorKind.SUBTRACT:
            res = a - b
        elif self is OperatorKind.MULTIPLY:
            res = a * b
        else:
            if b == 0:
                raise DivisionByZeroError("Деление на ноль: %s / %s" % (a, b))
            res = a / b
        log.debug("Вычисление: %s %s %s = %s", a, self.symbol, b, res)
        return res


# ------------------ СОСТОЯНИЕ ------------------
@dataclass
class CalculatorState:
    current_input: str = ""
    current_operator: Optional[OperatorKind] = None
    # задан, пока ждём второй операнд или держим результат для цепочки
    first_value: Optional[float] = None
    is_new_entry: bool = True

    def reset(self):
        self.current_input = ""
        self.current_operator = None
        self.first_value = None
        self.is_new_entry = True


class CalculatorEngine:
    def __init__(self, history_capacity: int = DEFAULT_CAPACITY):
        self.state = CalculatorState()
        self.history = HistoryLog(history_capacity)
        self.display_text = "0"
        self.pending_label = ""
        self._listeners: List[Callable[["CalculatorEngine"], None]] = []

    def subscribe(self, callback: Callable[["CalculatorEngine"], None]):
        self._listeners.append(callback)

    # ------------------ ВВОД ------------------
    def press_digit(self, d):
        d = str(d)
        if len(d) != 1 or d not in DIGITS:
            raise ValueError("Ожидалась цифра 0-9, получено %r" % d)
        st = self.state
        if st.is_new_entry:
            st.current_input = d
            st.is_new_entry = False
        else:
            st.current_input += d
        log.debug("Нажата цифра: %s -> current=%s", d, st.current_input)
        self._changed()

    def press_decimal(self):
        st = self.state
        if st.is_new_entry:
            st.current_input = "0."
            st.is_new_entry = False
        elif "." not in st.current_input:
            st.current_input += "."
        else:
            log.debug("Игнорирована точка: уже есть в %s", st.current_input)
        self._changed()

    def backspace(self):
        st = self.state
        if not st.current_input:
            return
        s = st.current_input[:-1]
        if s in ("", "-"):
            st.current_input = "0"
            st.is_new_entry = True
        else:
            st.current_input = s
        log.debug("Backspace -> current=%s", st.current_input)
        self._changed()

    def toggle_sign(self):
        st = self.state
        if st.current_input in ("", "0"):
            return
        # на экране результат, от которого пойдёт цепочка: меняем знак и у него
        held = (st.current_operator is None and st.first_value is not None
                and st.current_input == format_number(st.first_value))
        if held:
            st.first_value = -st.first_value
        if st.current_input.startswith("-"):
            st.current_input = st.current_input[1:]
        else:
            st.current_input = "-" + st.current_input
        log.debug("Смена знака: current=%s", st.current_input)
        self._changed()

    # ------------------ ОПЕРАЦИИ ------------------
    def press_operator(self, op: OperatorKind):
        if not isinstance(op, OperatorKind):
            raise TypeError("Ожидался OperatorKind, получено %r" % (op,))
        if not self.state.current_input:
            log.debug("Оператор %s проигнорирован: нет операнда", op.symbol)
            return

        if self.state.first_value is not None:
            # Цепочка слева направо, без приоритетов
            self.equals()
            if self.state.first_value is None:
                # equals() упал и сбросил состояние
                return
        else:
            try:
                self.state.first_value = self._operand(self.state.current_input)
            except CalculatorError as exc:
                self._fail(exc)
                return

        st = self.state
        st.current_operator = op
        self.pending_label = "%s %s" % (format_number(st.first_value), op.symbol)
        st.current_input = ""
        st.is_new_entry = True
        log.info("Установка оператора: %s", self.pending_label)
        # дисплей не трогаем: на экране остаётся последнее число
        self._notify()

    def equals(self):
        st = self.state
        if st.first_value is None or not st.current_input or st.current_operator is None:
            log.debug("= проигнорировано: нет ожидающей операции")
            return

        op = st.current_operator
        try:
            second = self._operand(st.current_input)
            result = op.apply(st.first_value, second)
            text = self._result_text(result)
        except CalculatorError as exc:
            self._fail(exc)
            return

        entry = HistoryEntry(
            "%s %s %s" % (format_number(st.first_value), op.symbol, format_number(second)),
            text,
        )
        self.history.append(entry)
        self.pending_label = str(entry)

        st.current_input = text
        st.first_value = result
        st.current_operator = None
        st.is_new_entry = True
        log.info("= нажато: %s", entry)
        self._changed()

    def percent(self):
        st = self.state
        if not st.current_input:
            return
        try:
            value = self._operand(st.current_input)
            if st.first_value is not None and st.current_operator is not None:
                # процент от первого операнда
                result = st.first_value * value / 100
                expression = "%s %s %s%%" % (
                    format_number(st.first_value), st.current_operator.symbol, format_number(value))
            else:
                result = value / 100
                expression = "%s%%" % format_number(value)
            text = self._result_text(result)
        except CalculatorError as exc:
            self._fail(exc)
            return

        st.current_input = text
        self.history.append(HistoryEntry(expression, text))
        st.is_new_entry = True
        log.info("Процент: %s = %s", expression, text)
        self._changed()

    # ------------------ СБРОС И ИСТОРИЯ ------------------
    def clear(self):
        self.state.reset()
        self.display_text = "0"
        self.pending_label = ""
        log.info("Полный сброс")
        self._notify()

    def clear_history(self):
        self.history.clear()
        self.pending_label = ""
        self._notify()

    def select_history_entry(self, index: int):
        if not 0 <= index < len(self.history):
            log.warning("Нет записи истории с индексом %s", index)
            return
        entry = self.history[index]
        self.state.current_input = entry.result
        self.pending_label = str(entry)
        log.info("Из истории выбрано: %s", entry)
        self._changed()

    # ------------------ ВНУТРЕННЕЕ ------------------
    def _operand(self, text: str) -> float:
        value = parse_operand(text)
        if not is_finite(value):
            raise CalculatorOverflowError("Операнд вне диапазона: %s" % text)
        return value

    def _result_text(self, value: float) -> str:
        if not is_finite(value):
            raise CalculatorOverflowError("Переполнение: результат %s" % value)
        return format_number(value)

    def _fail(self, exc: CalculatorError):
        log.warning("%s", exc)
        self.state.reset()
        self.display_text = ERROR_TOKEN
        self.pending_label = ""
        self._notify()

    def _changed(self):
        self.display_text = self.state.current_input or "0"
        self._notify()

    def _notify(self):
        for callback in self._listeners:
            callback(self)
