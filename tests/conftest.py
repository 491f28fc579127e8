import pytest

from calc_engine import CalculatorEngine, OperatorKind


@pytest.fixture
def engine():
    return CalculatorEngine()


@pytest.fixture
def notifications(engine):
    """Снимки (display_text, pending_label) после каждого уведомления движка."""
    seen = []
    engine.subscribe(lambda e: seen.append((e.display_text, e.pending_label)))
    return seen


@pytest.fixture
def press(engine):
    """Прогоняет строку клавиш через движок: числа, '.', '+ - * /', '%', '='."""
    def _press(keys):
        for k in keys.split():
            if k.isdigit():
                for d in k:
                    engine.press_digit(d)
            elif k == ".":
                engine.press_decimal()
            elif k == "%":
                engine.percent()
            elif k == "=":
                engine.equals()
            else:
                engine.press_operator(OperatorKind.from_key(k))
        return engine
    return _press
