"""Key-value stores for progress that survives between sessions.

The engine only needs ``get``, ``set`` and ``clear`` over string keys.
Keys in use:

    law <name>       text the law was unlocked with (UNLOCKED, PROVED)
    <exercise>       ``unlocked`` or ``solved``
    lines <exercise> length of the shortest non-circular proof found
    proof <exercise> that proof, one line per entry
    true false       ``unlocked`` once TRUE and FALSE are offered as formulas
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class KeyValueStore(Protocol):
    """Interface of a string key-value store."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def clear(self) -> None: ...

    def items(self) -> dict[str, str]: ...


class MemoryStore(KeyValueStore):
    """A store that lives as long as the process."""

    def __init__(self, data: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(data) if data else {}

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = str(value)

    def clear(self) -> None:
        self._data.clear()

    def items(self) -> dict[str, str]:
        return dict(self._data)


class JsonFileStore(MemoryStore):
    """A store backed by a JSON object file, rewritten on every change.

    A missing file is treated as an empty store and created on first write.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        data: dict[str, str] = {}
        if self.path.exists():
            with open(self.path) as f:
                loaded = json.load(f)
            if not isinstance(loaded, dict):
                raise ValueError(f"{self.path}: expected a JSON object")
            data = {str(k): str(v) for k, v in loaded.items()}
            logger.debug("Loaded %d entries from %s", len(data), self.path)
        super().__init__(data)

    def set(self, key: str, value: str) -> None:
        super().set(key, value)
        self._save()

    def clear(self) -> None:
        super().clear()
        self._save()

    def _save(self) -> None:
        with open(self.path, "w") as f:
            json.dump(self._data, f, indent=2, sort_keys=True)
        logger.debug("Saved store to %s", self.path)
