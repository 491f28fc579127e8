import pytest

from calc_history import HistoryEntry, HistoryLog


def test_entry_renders_expression_and_result():
    assert str(HistoryEntry("7 + 3", "10")) == "7 + 3 = 10"


def test_entry_is_immutable():
    entry = HistoryEntry("1 + 1", "2")
    with pytest.raises(AttributeError):
        entry.result = "3"


def test_newest_first_and_capacity():
    h = HistoryLog(capacity=3)
    for i in range(5):
        h.append(HistoryEntry(str(i), str(i)))
    assert len(h) == 3
    assert [e.result for e in h] == ["4", "3", "2"]
    assert h[0].result == "4"
    assert h[-1].result == "2"


def test_clear():
    h = HistoryLog()
    h.append(HistoryEntry("1 + 1", "2"))
    h.clear()
    assert len(h) == 0
    assert h.lines() == []


def test_invalid_capacity():
    with pytest.raises(ValueError):
        HistoryLog(capacity=0)
