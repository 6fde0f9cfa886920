from __future__ import annotations

import json
import os
import tempfile
from typing import Protocol, Sequence

import structlog
from pydantic import ValidationError
from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from pricewatch.core.config import settings
from pricewatch.core.errors import StoreUnavailable
from pricewatch.db.base import Base, make_engine, make_session_factory
from pricewatch.db.models import TrackedItemRow
from pricewatch.models.tracked_item import TrackedItem

logger = structlog.get_logger(__name__)


class Store(Protocol):
    """Whole-collection persistence; load/save are atomic at that granularity."""

    def load(self) -> list[TrackedItem]: ...

    def save(self, items: Sequence[TrackedItem]) -> None: ...


class JsonFileStore:
    def __init__(self, path: str):
        self.path = path

    def load(self) -> list[TrackedItem]:
        if not os.path.exists(self.path):
            return []

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                contents = f.read()
        except OSError as exc:
            raise StoreUnavailable(f"cannot read {self.path}: {exc}") from exc

        if not contents.strip():
            return []

        try:
            documents = json.loads(contents)
            if not isinstance(documents, list):
                raise ValueError("product list must be a JSON array")
            return [TrackedItem.model_validate(doc) for doc in documents]
        except (ValueError, ValidationError) as exc:
            logger.error("store.corrupt", path=self.path, error=str(exc))
            raise StoreUnavailable(f"{self.path} is corrupted: {exc}") from exc

    def save(self, items: Sequence[TrackedItem]) -> None:
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)

        payload = json.dumps(
            [item.to_document() for item in items], indent=2, ensure_ascii=False
        )

        fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".products-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
        except OSError as exc:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise StoreUnavailable(f"cannot write {self.path}: {exc}") from exc

        logger.debug("store.saved", path=self.path, items=len(items))


class SqlStore:
    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    @classmethod
    def from_url(cls, url: str) -> "SqlStore":
        engine = make_engine(url)
        try:
            Base.metadata.create_all(engine)
        except SQLAlchemyError as exc:
            raise StoreUnavailable(f"cannot reach {engine.url}: {exc}") from exc
        return cls(make_session_factory(engine))

    def load(self) -> list[TrackedItem]:
        try:
            with self.session_factory() as db:
                rows = db.scalars(
                    select(TrackedItemRow).order_by(TrackedItemRow.position)
                ).all()
                return [row.to_item() for row in rows]
        except SQLAlchemyError as exc:
            raise StoreUnavailable(f"load failed: {exc}") from exc

    def save(self, items: Sequence[TrackedItem]) -> None:
        try:
            with self.session_factory() as db, db.begin():
                db.execute(delete(TrackedItemRow))
                db.add_all(
                    [
                        TrackedItemRow.from_item(item, position)
                        for position, item in enumerate(items)
                    ]
                )
        except SQLAlchemyError as exc:
            raise StoreUnavailable(f"save failed: {exc}") from exc

        logger.debug("store.saved", backend="sql", items=len(items))


def store_from_settings() -> Store:
    if settings.STORE_BACKEND == "sql":
        return SqlStore.from_url(settings.DATABASE_URL)
    return JsonFileStore(settings.PRODUCTS_FILE)
