from typing import Optional

from config.database.session import SessionLocal
from tracking.application.port.key_value_store_port import KeyValueStorePort
from tracking.infrastructure.orm.models import KeyValueORM


class SqlKeyValueStore(KeyValueStorePort):
    """String values under string keys, one row per key in the kv_store table."""

    def __init__(self, session_factory=SessionLocal):
        self.session_factory = session_factory

    def get(self, key: str) -> Optional[str]:
        with self.session_factory() as db:
            orm = db.get(KeyValueORM, key)
            return orm.value if orm is not None else None

    def set(self, key: str, value: str) -> None:
        with self.session_factory() as db:
            orm = db.get(KeyValueORM, key)
            if orm is None:
                orm = KeyValueORM(key=key)
                db.add(orm)
            orm.value = value
            db.commit()

    def remove(self, key: str) -> None:
        with self.session_factory() as db:
            orm = db.get(KeyValueORM, key)
            if orm is None:
                return
            db.delete(orm)
            db.commit()
