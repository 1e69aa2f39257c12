from __future__ import annotations

from datetime import datetime

from sqlalchemy import String, Text, TIMESTAMP, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase): pass


class CollectionORM(Base):
    """Одна строка на коллекцию: ключ и весь JSON-документ."""
    __tablename__ = "collections"

    key: Mapped[str] = mapped_column(String(64), primary_key=True)
    payload: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )

    def __repr__(self) -> str:
        return f"CollectionORM(key={self.key!r})"


__all__ = ["Base", "CollectionORM"]
