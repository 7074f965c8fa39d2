"""
ORM — table custom_pages.
SQLAlchemy 2.x : blocs et config stockés en JSON (Text), NULL toléré.
"""
import uuid
from datetime import datetime
from typing import Optional

import sqlalchemy as sa
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

_DEFAULT_CONFIG = '{"layout": "standard", "theme": "default"}'


class Base(DeclarativeBase):
    pass


class CustomPageDB(Base):
    __tablename__ = "custom_pages"
    id:         Mapped[str]           = mapped_column(sa.String, primary_key=True, default=lambda: str(uuid.uuid4()))
    title:      Mapped[str]           = mapped_column(sa.String, nullable=False)
    path:       Mapped[str]           = mapped_column(sa.String, nullable=False, unique=True, index=True)
    content:    Mapped[Optional[str]] = mapped_column(sa.Text, nullable=True, default="[]")
    config:     Mapped[Optional[str]] = mapped_column(sa.Text, nullable=True, default=_DEFAULT_CONFIG)
    created_at: Mapped[datetime]      = mapped_column(sa.DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime]      = mapped_column(sa.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
