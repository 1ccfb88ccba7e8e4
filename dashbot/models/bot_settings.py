"""BotSettings model – the singleton runtime configuration row."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from dashbot.db.base import Base

SINGLETON_ID = 1


class BotSettings(Base):
    __tablename__ = "bot_settings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, default=SINGLETON_ID)
    token: Mapped[str | None] = mapped_column(Text, nullable=True)
    prefix: Mapped[str] = mapped_column(String(32), default="!", nullable=False)
    status: Mapped[str] = mapped_column(String(20), default="online", nullable=False)
    status_message: Mapped[str] = mapped_column(
        String(255), default="Serving commands!", nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.now(), onupdate=func.now(), nullable=False
    )

    def __repr__(self) -> str:
        return f"<BotSettings prefix={self.prefix!r} status={self.status}>"
