from datetime import datetime, timezone
from sqlalchemy import Column, String, Text, DateTime

from config.database.session import Base


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class KeyValueORM(Base):
    __tablename__ = "kv_store"

    key = Column(String(255), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utc_now, onupdate=_utc_now)
