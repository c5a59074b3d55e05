from __future__ import annotations

import itertools
import sqlite3
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .notifier import ChangeNotifier

MEMORY_PATH = ":memory:"

_memory_ids = itertools.count(1)


@dataclass
class DBConfig:
    path: str


def _dict_factory(cursor: sqlite3.Cursor, row: tuple) -> Dict[str, Any]:
    return {col[0]: row[idx] for idx, col in enumerate(cursor.description)}


class DatabaseConnection:
    """Connection factory for the embedded SQLite store.

    Note: We create short-lived connections per operation. An in-memory
    database is opened as a named shared-cache database and kept alive by a
    single keeper connection for the lifetime of this object.
    """

    _instances: Dict[str, "DatabaseConnection"] = {}

    def __init__(self, config: DBConfig):
        self._config = config
        self._keeper: Optional[sqlite3.Connection] = None
        self.notifier = ChangeNotifier()

        if config.path == MEMORY_PATH:
            self._target = f"file:classroom_attendance_{next(_memory_ids)}?mode=memory&cache=shared"
            self._uri = True
            self._keeper = self._open()
        else:
            self._target = config.path
            self._uri = False

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if config.path == MEMORY_PATH:
            return DatabaseConnection(config)
        if config.path not in cls._instances:
            cls._instances[config.path] = DatabaseConnection(config)
        return cls._instances[config.path]

    @property
    def path(self) -> str:
        return self._config.path

    def _open(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._target, uri=self._uri, check_same_thread=False)
        conn.row_factory = _dict_factory
        conn.execute("PRAGMA foreign_keys = ON")
        return conn

    def connect(self) -> sqlite3.Connection:
        return self._open()

    def close(self) -> None:
        if self._keeper is not None:
            self._keeper.close()
            self._keeper = None
