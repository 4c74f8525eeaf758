"""Persistence helpers for raw key-value entries."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from sqlalchemy.orm import Session

from compliance_feed.infrastructure.models import KeyValueEntryModel


class KeyValueRepository:
    """Read and write serialized values stored under string keys."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, key: str) -> str | None:
        model = self.session.get(KeyValueEntryModel, key)
        if model is None:
            return None
        return model.value

    def set(self, key: str, value: str) -> None:
        self.set_many({key: value})

    def set_many(self, entries: Mapping[str, str]) -> None:
        """Write every entry of ``entries`` in a single transaction."""

        for key, value in entries.items():
            model = self.session.get(KeyValueEntryModel, key)
            if model is None:
                model = KeyValueEntryModel(key=key, value=value)
            else:
                model.value = value
            self.session.add(model)
        self.session.commit()

    def delete_many(self, keys: Iterable[str]) -> None:
        ids = [key for key in keys if key]
        if not ids:
            return
        self.session.query(KeyValueEntryModel).filter(
            KeyValueEntryModel.key.in_(ids)
        ).delete(synchronize_session=False)
        self.session.commit()


__all__ = ["KeyValueRepository"]
