#!/usr/bin/env python3
"""
Калькулятор на четыре действия с историей вычислений.

Особенности:
- Окно на Tkinter (без внешних зависимостей).
- Вся логика в CalculatorEngine (calc_engine.py); окно только подписывается
  на его поля: дисплей, строку ожидающей операции и историю.
- Поддержка ввода с клавиатуры: 0-9, . , + - * / %, Enter/Return (=),
  Esc (очистка), Backspace (⌫).
- История последних вычислений (по умолчанию 50), клик по записи
  подставляет результат в ввод.

Переменные окружения:
- CALC_LOG_LEVEL — уровень логирования (по умолчанию INFO).
- CALC_HISTORY_SIZE — размер истории (по умолчанию 50).
- CALC_LOG_DIR — каталог для calculator.log (см. calc_config.py).
"""

import tkinter as tk
from tkinter import font as tkfont

from calc_engine import CalculatorEngine, OperatorKind
from calc_config import history_size, setup_logging


log = setup_logging()


class CalculatorApp(tk.Tk):
    def __init__(self, engine=None):
        super().__init__()
        self.title("Калькулятор")
        self.configure(bg="#1c1c1c")
        self.minsize(560, 520)

        self.engine = engine or CalculatorEngine(history_size())

        # Шрифты
        self.font_display = tkfont.Font(family="SF Pro Text", size=36, weight="bold")
        self.font_pending = tkfont.Font(family="SF Pro Text", size=14)
        self.font_btn = tkfont.Font(family="SF Pro Text", size=16, weight="bold")

        # Виджеты
        self._build_ui()
        self._bind_keys()
        self.engine.subscribe(self._render)
        self._render(self.engine)
        log.info("Приложение запущено")

    # ------------------ UI ------------------
    def _build_ui(self):
        # Строка ожидающей операции и дисплей
        self.pending_var = tk.StringVar()
        tk.Label(
            self, textvariable=self.pending_var, anchor="e",
            bg="#1c1c1c", fg="#a5a5a5", padx=16, font=self.font_pending
        ).grid(row=0, column=0, columnspan=4, sticky="nsew")

        self.display_var = tk.StringVar()
        tk.Label(
            self, textvariable=self.display_var, anchor="e",
            bg="#1c1c1c", fg="white", padx=16, font=self.font_display
        ).grid(row=1, column=0, columnspan=4, sticky="nsew")

        # Настройка сетки
        self.rowconfigure(0, weight=0, minsize=30)
        self.rowconfigure(1, weight=0, minsize=80)
        for i in range(2, 7):
            self.rowconfigure(i, weight=1, minsize=70)
        for j in range(4):
            self.columnconfigure(j, weight=1, minsize=80)
        self.columnconfigure(4, weight=1, minsize=200)

        # Цвета macOS-like
        color_fn = "#a5a5a5"   # светло-серые функциональные (C, ⌫, %)
        color_num = "#333333"  # тёмно-серые цифры
        color_op = "#ff9f0a"   # оранжевые операции
        color_op_active = "#c77800"

        def make_btn(text, r, c, w=1, color="#333333", cmd=None):
            btn = tk.Button(
                self, text=text, bg=color, fg="white",
                activebackground=color_op_active if color == color_op else "#4a4a4a",
                activeforeground="white", bd=0, font=self.font_btn
            )
            btn.grid(row=r, column=c, columnspan=w, sticky="nsew", padx=6, pady=6)

            def on_click(lab=text, c=cmd):
                log.debug("Нажата кнопка: %s", lab)
                c()
            btn.configure(command=on_click)
            return btn

        e = self.engine

        make_btn("C", 2, 0, color=color_fn, cmd=e.clear)
        make_btn("⌫", 2, 1, color=color_fn, cmd=e.backspace)
        make_btn("%", 2, 2, color=color_fn, cmd=e.percent)
        make_btn("÷", 2, 3, color=color_op, cmd=lambda: e.press_operator(OperatorKind.DIVIDE))

        rows = [("789", OperatorKind.MULTIPLY), ("456", OperatorKind.SUBTRACT), ("123", OperatorKind.ADD)]
        for r, (digits, op) in enumerate(rows, start=3):
            for c, d in enumerate(digits):
                make_btn(d, r, c, color=color_num, cmd=lambda x=d: e.press_digit(x))
            make_btn(op.symbol, r, 3, color=color_op, cmd=lambda o=op: e.press_operator(o))

        make_btn("+/-", 6, 0, color=color_num, cmd=e.toggle_sign)
        make_btn("0", 6, 1, color=color_num, cmd=lambda: e.press_digit("0"))
        make_btn(".", 6, 2, color=color_num, cmd=e.press_decimal)
        make_btn("=", 6, 3, color=color_op, cmd=e.equals)

        # История
        self.history_list = tk.Listbox(
            self, bg="#1c1c1c", fg="white", bd=0, highlightthickness=0,
            selectbackground="#4a4a4a", activestyle="none", font=self.font_pending
        )
        self.history_list.grid(row=0, column=4, rowspan=6, sticky="nsew", padx=6, pady=6)
        self.history_list.bind("<<ListboxSelect>>", self._on_history_select)
        make_btn("Очистить историю", 6, 4, color=color_fn, cmd=e.clear_history)

    def _on_history_select(self, _event):
        selection = self.history_list.curselection()
        if selection:
            self.engine.select_history_entry(selection[0])

    def _bind_keys(self):
        e = self.engine

        # Хелпер для биндов с логированием нажатий клавиш
        def bind_with_log(sequence: str, func, label: str = None):
            def handler(_e, f=func, lab=(label or sequence)):
                log.debug("Нажата клавиша: %s", lab)
                f()
            self.bind(sequence, handler)

        # Цифры
        for d in "0123456789":
            bind_with_log(d, lambda x=d: e.press_digit(x), label=d)
        # Точка и запятая
        bind_with_log(".", e.press_decimal, label=".")
        bind_with_log(",", e.press_decimal, label=",")
        # Операции
        for sym in ["+", "-", "*", "/"]:
            bind_with_log(sym, lambda x=sym: e.press_operator(OperatorKind.from_key(x)), label=sym)
        bind_with_log("<percent>", e.percent, label="%")
        # Равно / Enter
        bind_with_log("=", e.equals, label="=")
        bind_with_log("<Return>", e.equals, label="Enter")
        # Очистка
        bind_with_log("<Escape>", e.clear, label="Esc")
        # Backspace
        bind_with_log("<BackSpace>", e.backspace, label="Backspace")

    # ------------------ ОТОБРАЖЕНИЕ ------------------
    def _render(self, engine):
        self.display_var.set(engine.display_text)
        self.pending_var.set(engine.pending_label)
        lines = engine.history.lines()
        if list(self.history_list.get(0, tk.END)) != lines:
            self.history_list.delete(0, tk.END)
            for line in lines:
                self.history_list.insert(tk.END, line)


def main():
    try:
        app = CalculatorApp()
        app.mainloop()
    finally:
        log.info("Приложение завершено")


if __name__ == "__main__":
    main()
