from __future__ import annotations

from collections.abc import Iterator
from datetime import datetime

from sqlalchemy import DateTime, Integer, String, Text, create_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column, sessionmaker

from . import settings
from .codec import EMPTY, decode_lists, encode_lists
from .utils import new_uuid, now_utc


class Base(DeclarativeBase):
    pass


class Board(Base):
    __tablename__ = "boards"
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_uuid)
    owner: Mapped[str] = mapped_column(String(128), index=True)
    name: Mapped[str] = mapped_column(String(140))
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    custom_title: Mapped[str | None] = mapped_column(String(140), nullable=True)
    position: Mapped[int] = mapped_column(Integer, default=0)
    # Serialized list/task tree; read and written only through ``lists``.
    lists_raw: Mapped[str] = mapped_column("lists", Text, default=EMPTY)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=now_utc)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    @property
    def lists(self) -> list:
        """A freshly decoded copy of the tree; assign it back to persist changes."""
        return decode_lists(self.lists_raw)

    @lists.setter
    def lists(self, value) -> None:
        self.lists_raw = encode_lists(value)


engine = create_engine(
    settings.DATABASE_URL,
    connect_args={"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {},
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db() -> None:
    Base.metadata.create_all(bind=engine)


def get_session() -> Iterator[Session]:
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
