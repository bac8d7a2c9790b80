from __future__ import annotations

import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from ..core.exceptions import PersistenceError
from .models import Base


@dataclass
class DBConfig:
    url: str


class DatabaseConnection:
    """Singleton-like engine and session factory for the roster database.

    Note: Sessions are short-lived, one per repository operation. Tables are
    created on first use so a missing database file is simply an empty store.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config
        self._engine: Engine = create_engine(config.url)
        self._sessions = sessionmaker(bind=self._engine, expire_on_commit=False)
        self._schema_lock = threading.Lock()
        self._schema_ready = False

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None or cls._instance.url != config.url:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    @property
    def url(self) -> str:
        return self._config.url

    @property
    def engine(self) -> Engine:
        return self._engine

    def sqlite_path(self) -> Optional[Path]:
        """File behind a SQLite URL, None for other backends or in-memory DBs."""

        url = make_url(self._config.url)
        if url.get_backend_name() != "sqlite" or not url.database or url.database == ":memory:":
            return None
        return Path(url.database)

    def ensure_schema(self) -> None:
        with self._schema_lock:
            if self._schema_ready:
                return
            try:
                path = self.sqlite_path()
                if path is not None:
                    path.parent.mkdir(parents=True, exist_ok=True)
                Base.metadata.create_all(self._engine)
            except (OSError, SQLAlchemyError) as e:
                raise PersistenceError(f"Cannot open the database at {self._config.url}") from e
            self._schema_ready = True

    def session(self) -> Session:
        self.ensure_schema()
        return self._sessions()
