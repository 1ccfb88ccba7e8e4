"""Request payloads accepted by the dashboard API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

MASKED_TOKEN = "••••••••••••••••••••••••••"


class BotConfigIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    token: str | None = None
    prefix: str | None = Field(default=None, min_length=1, max_length=32)
    status: str | None = Field(default=None, max_length=20)
    status_message: str | None = Field(default=None, alias="statusMessage", max_length=255)


class CommandIn(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = Field(min_length=1, max_length=64, pattern=r"^\S+$")
    description: str
    enabled: bool = True


class CommandPatch(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str | None = Field(default=None, min_length=1, max_length=64, pattern=r"^\S+$")
    description: str | None = None
    enabled: bool | None = None


class ErrorLogIn(BaseModel):
    model_config = ConfigDict(extra="ignore")

    message: str = Field(min_length=1)
    stack: str | None = None
