"""SQLite-backed store for environments.

Each environment is one row; its variables are kept as a JSON list of
``[key, value]`` pairs so their order survives a round trip.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from sqlalchemy import Engine, Integer, Text, create_engine, inspect, select, text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column, sessionmaker

from .errors import PersistenceError
from .models import EnvironmentBinding, Pair

logger = logging.getLogger(__name__)

APP_DIR_NAME = "http_courier"
DATABASE_FILE_NAME = "courier.db"

# Columns added after the first release; created on open when missing.
_ADDITIVE_COLUMNS = {"default_endpoint": "TEXT"}


class Base(DeclarativeBase):
    pass


class EnvironmentRow(Base):
    __tablename__ = "environments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    variables: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    default_endpoint: Mapped[str | None] = mapped_column(Text, nullable=True)


def default_database_path() -> Path:
    override = os.environ.get("HTTP_COURIER_DATA_DIR")
    if override:
        return Path(override) / DATABASE_FILE_NAME
    base = os.environ.get("XDG_DATA_HOME")
    if base:
        return Path(base) / APP_DIR_NAME / DATABASE_FILE_NAME
    return Path.home() / ".local" / "share" / APP_DIR_NAME / DATABASE_FILE_NAME


def dump_variables(variables: list[Pair]) -> str:
    return json.dumps([[key, value] for key, value in variables])


def load_variables(raw: str) -> list[Pair]:
    try:
        data = json.loads(raw or "[]")
    except ValueError as exc:
        raise PersistenceError(f"Stored variables are not valid JSON: {exc}") from exc
    if not isinstance(data, list):
        raise PersistenceError("Stored variables must be a JSON list.")
    pairs: list[Pair] = []
    for item in data:
        if not isinstance(item, list) or len(item) != 2 or not all(isinstance(part, str) for part in item):
            raise PersistenceError(f"Stored variable is not a [key, value] pair of strings: {item!r}")
        pairs.append((item[0], item[1]))
    return pairs


def _to_binding(row: EnvironmentRow) -> EnvironmentBinding:
    return EnvironmentBinding(
        id=row.id,
        name=row.name,
        variables=load_variables(row.variables),
        default_base_url=row.default_endpoint,
    )


class EnvironmentStore:
    def __init__(self, path: Path | str | None = None) -> None:
        self.path = Path(path).expanduser() if path is not None else default_database_path()
        self._engine: Engine | None = None
        self._sessions: sessionmaker[Session] | None = None

    def init(self) -> EnvironmentStore:
        """Open the database, creating the file, table and any missing columns."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            engine = create_engine(f"sqlite:///{self.path}")
            Base.metadata.create_all(engine)
            _add_missing_columns(engine)
        except (OSError, SQLAlchemyError) as exc:
            logger.warning("Could not open environment store at %s: %s", self.path, exc)
            raise PersistenceError(f"Could not open environment store: {exc}") from exc
        self._engine = engine
        self._sessions = sessionmaker(engine, expire_on_commit=False)
        logger.debug("Environment store ready at %s", self.path)
        return self

    def close(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
            self._sessions = None

    def create(self, name: str) -> EnvironmentBinding:
        name = name.strip()
        if not name:
            raise PersistenceError("Environment name must not be empty.")
        with self._transaction("create") as session:
            row = EnvironmentRow(name=name, variables=dump_variables([]), default_endpoint=None)
            session.add(row)
            session.flush()
            return _to_binding(row)

    def list_all(self) -> list[EnvironmentBinding]:
        with self._transaction("list") as session:
            rows = session.scalars(select(EnvironmentRow).order_by(EnvironmentRow.id)).all()
            return [_to_binding(row) for row in rows]

    def update(self, binding: EnvironmentBinding) -> None:
        with self._transaction("update") as session:
            row = session.get(EnvironmentRow, binding.id)
            if row is None:
                raise PersistenceError(f"Environment {binding.id} does not exist.")
            row.name = binding.name
            row.variables = dump_variables(binding.variables)
            row.default_endpoint = binding.default_base_url

    def delete(self, environment_id: int) -> None:
        with self._transaction("delete") as session:
            row = session.get(EnvironmentRow, environment_id)
            if row is not None:
                session.delete(row)

    @contextmanager
    def _transaction(self, operation: str) -> Iterator[Session]:
        if self._sessions is None:
            raise PersistenceError("Environment store is not initialised; call init() first.")
        try:
            with self._sessions() as session, session.begin():
                yield session
        except IntegrityError as exc:
            logger.warning("Environment %s rejected: %s", operation, exc.orig)
            raise PersistenceError(f"Environment {operation} failed: {exc.orig}") from exc
        except SQLAlchemyError as exc:
            logger.warning("Environment %s failed: %s", operation, exc)
            raise PersistenceError(f"Environment {operation} failed: {exc}") from exc


def _add_missing_columns(engine: Engine) -> None:
    existing = {column["name"] for column in inspect(engine).get_columns(EnvironmentRow.__tablename__)}
    with engine.begin() as connection:
        for name, ddl_type in _ADDITIVE_COLUMNS.items():
            if name not in existing:
                logger.debug("Adding column %s to %s", name, EnvironmentRow.__tablename__)
                connection.execute(text(f"ALTER TABLE {EnvironmentRow.__tablename__} ADD COLUMN {name} {ddl_type}"))
