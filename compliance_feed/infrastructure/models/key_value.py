"""SQLAlchemy model for the durable key-value store."""

from sqlalchemy import Column, DateTime, String, Text

from compliance_feed.infrastructure.database import Base
from compliance_feed.utils import now_in_app_timezone


class KeyValueEntryModel(Base):
    """Serialized value stored under a namespaced key."""

    __tablename__ = "key_value_entry"

    key = Column(String(255), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=now_in_app_timezone,
        onupdate=now_in_app_timezone,
    )


__all__ = ["KeyValueEntryModel"]
