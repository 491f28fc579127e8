"""История вычислений: новые записи сверху, ёмкость ограничена."""

import logging
from collections import deque
from dataclasses import dataclass

log = logging.getLogger("calculator.history")

DEFAULT_CAPACITY = 50


@dataclass(frozen=True)
class HistoryEntry:
    expression: str
    result: str

    def __str__(self) -> str:
        return f"{self.expression} = {self.result}"


class HistoryLog:
    """Журнал завершённых операций. Изменяется только через append() и clear()."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        if capacity <= 0:
            raise ValueError("Ёмкость истории должна быть положительной: %r" % capacity)
        self.capacity = capacity
        # maxlen сам выбрасывает самую старую запись (она справа)
        self._entries = deque(maxlen=capacity)

    def append(self, entry: HistoryEntry):
        if len(self._entries) == self.capacity:
            log.debug("История заполнена, вытеснена запись: %s", self._entries[-1])
        self._entries.appendleft(entry)
        log.debug("В историю добавлено: %s", entry)

    def clear(self):
        self._entries.clear()
        log.info("История очищена")

    def __len__(self):
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)

    def __getitem__(self, index: int) -> HistoryEntry:
        return self._entries[index]

    def lines(self):
        return [str(e) for e in self._entries]
