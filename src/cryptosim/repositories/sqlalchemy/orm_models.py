"""SQLAlchemy ORM model definitions."""

from sqlalchemy import Column, String, Text

from cryptosim.repositories.sqlalchemy.database import Base


class LocalStorageORM(Base):
    """
    String key/value table standing in for browser local storage.

    Values are whole JSON documents; nothing is ever partially updated.
    """

    __tablename__ = "local_storage"

    key = Column(String(255), primary_key=True)
    value = Column(Text, nullable=False)
