"""Dashboard HTTP API – bot config, command records and error logs as JSON."""

from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Any

import redis.asyncio as aioredis
from aiohttp import web
from pydantic import ValidationError

from dashbot.config import settings
from dashbot.runtime import BotRuntime
from dashbot.services.config_store import (
    DEFAULT_STATUS,
    DEFAULT_STATUS_MESSAGE,
    BotConfig,
    CommandNameConflict,
    ConfigStore,
    CommandRecord,
    ErrorLogEntry,
)
from dashbot.web.schemas import (
    MASKED_TOKEN,
    BotConfigIn,
    CommandIn,
    CommandPatch,
    ErrorLogIn,
)

logger = logging.getLogger(__name__)

routes = web.RouteTableDef()


# ── Serialisation ─────────────────────────────────────────────────────


def _config_json(config: BotConfig | None) -> dict[str, Any]:
    if config is None:
        return {
            "token": MASKED_TOKEN if settings.BOT_TOKEN else "",
            "prefix": settings.DEFAULT_PREFIX,
            "status": DEFAULT_STATUS,
            "statusMessage": DEFAULT_STATUS_MESSAGE,
        }
    return {
        "token": MASKED_TOKEN if config.token else "",
        "prefix": config.prefix,
        "status": config.status,
        "statusMessage": config.status_message,
        "updatedAt": config.updated_at.isoformat() if config.updated_at else None,
    }


def _command_json(cmd: CommandRecord) -> dict[str, Any]:
    return asdict(cmd)


def _log_json(entry: ErrorLogEntry) -> dict[str, Any]:
    return {
        "id": entry.id,
        "message": entry.message,
        "stack": entry.stack,
        "timestamp": entry.timestamp.isoformat(),
    }


def _error(status: int, message: str, **extra: Any) -> web.Response:
    return web.json_response({"message": message, **extra}, status=status)


async def _read_json(request: web.Request) -> Any:
    try:
        return await request.json()
    except ValueError:
        return None


def _command_id(request: web.Request) -> int | None:
    try:
        return int(request.match_info["command_id"])
    except ValueError:
        return None


def _store(request: web.Request) -> ConfigStore:
    return request.app["store"]


# ── Bot config & status ───────────────────────────────────────────────


@routes.get("/api/bot")
async def get_bot_config(request: web.Request) -> web.Response:
    config = await _store(request).get_config()
    return web.json_response(_config_json(config))


@routes.post("/api/bot")
async def update_bot_config(request: web.Request) -> web.Response:
    payload = await _read_json(request)
    try:
        data = BotConfigIn.model_validate(payload)
    except ValidationError as exc:
        return _error(400, "Invalid bot configuration data", errors=exc.errors(include_url=False))

    # The masked placeholder round-trips from the UI; never store it.
    token = data.token if data.token and data.token != MASKED_TOKEN else None
    config = await _store(request).upsert_config(
        prefix=data.prefix,
        status=data.status,
        status_message=data.status_message,
        token=token,
    )

    runtime: BotRuntime | None = request.app.get("runtime")
    if runtime is not None:
        await runtime.apply_status(config.status, config.status_message)
    return web.json_response(_config_json(config))


@routes.get("/api/bot/status")
async def get_bot_status(request: web.Request) -> web.Response:
    runtime: BotRuntime | None = request.app.get("runtime")
    if runtime is None:
        return web.json_response({"isOnline": False, "lastRestart": None})
    return web.json_response(
        {"isOnline": runtime.is_online, "lastRestart": runtime.last_restart.isoformat()}
    )


@routes.post("/api/bot/restart")
async def restart_bot(request: web.Request) -> web.Response:
    runtime: BotRuntime | None = request.app.get("runtime")
    if runtime is None:
        return _error(503, "Bot runtime is not available")
    if not await runtime.restart():
        return _error(500, "Failed to restart bot")
    return web.json_response({"message": "Bot restarting..."})


# ── Commands ──────────────────────────────────────────────────────────


@routes.get("/api/commands")
async def list_commands(request: web.Request) -> web.Response:
    commands = await _store(request).list_commands()
    return web.json_response([_command_json(c) for c in commands])


@routes.get("/api/commands/{command_id}")
async def get_command(request: web.Request) -> web.Response:
    command_id = _command_id(request)
    if command_id is None:
        return _error(400, "Invalid command ID")
    cmd = await _store(request).get_command(command_id)
    if cmd is None:
        return _error(404, "Command not found")
    return web.json_response(_command_json(cmd))


@routes.post("/api/commands")
async def create_command(request: web.Request) -> web.Response:
    payload = await _read_json(request)
    try:
        data = CommandIn.model_validate(payload)
    except ValidationError as exc:
        return _error(400, "Invalid command data", errors=exc.errors(include_url=False))

    try:
        cmd = await _store(request).create_command(data.name, data.description, data.enabled)
    except CommandNameConflict:
        return _error(409, "Command with this name already exists")
    logger.info("Command %r created via dashboard", cmd.name)
    return web.json_response(_command_json(cmd), status=201)


@routes.patch("/api/commands/{command_id}")
async def update_command(request: web.Request) -> web.Response:
    command_id = _command_id(request)
    if command_id is None:
        return _error(400, "Invalid command ID")

    payload = await _read_json(request)
    try:
        data = CommandPatch.model_validate(payload)
    except ValidationError as exc:
        return _error(400, "Invalid command data", errors=exc.errors(include_url=False))

    try:
        cmd = await _store(request).update_command(
            command_id, **data.model_dump(exclude_none=True)
        )
    except CommandNameConflict:
        return _error(409, "Command with this name already exists")
    if cmd is None:
        return _error(404, "Command not found")
    return web.json_response(_command_json(cmd))


@routes.delete("/api/commands/{command_id}")
async def delete_command(request: web.Request) -> web.Response:
    command_id = _command_id(request)
    if command_id is None:
        return _error(400, "Invalid command ID")
    if not await _store(request).delete_command(command_id):
        return _error(404, "Command not found")
    return web.Response(status=204)


# ── Error logs ────────────────────────────────────────────────────────


@routes.get("/api/logs")
async def list_logs(request: web.Request) -> web.Response:
    logs = await _store(request).list_error_logs()
    return web.json_response([_log_json(e) for e in logs])


@routes.post("/api/logs")
async def create_log(request: web.Request) -> web.Response:
    payload = await _read_json(request)
    try:
        data = ErrorLogIn.model_validate(payload)
    except ValidationError as exc:
        return _error(400, "Invalid error log data", errors=exc.errors(include_url=False))
    entry = await _store(request).append_error_log(data.message, data.stack)
    return web.json_response(_log_json(entry), status=201)


@routes.delete("/api/logs")
async def clear_logs(request: web.Request) -> web.Response:
    await _store(request).clear_error_logs()
    return web.Response(status=204)


# ── Health ────────────────────────────────────────────────────────────


@routes.get("/health")
async def health(request: web.Request) -> web.Response:
    """Health check endpoint for monitoring / container probes."""
    info: dict[str, Any] = {"status": "ok"}
    runtime: BotRuntime | None = request.app.get("runtime")
    if runtime is not None:
        info["bot"] = "online" if runtime.is_online else "offline"
    redis_conn: aioredis.Redis | None = request.app.get("redis")
    if redis_conn is not None:
        try:
            await redis_conn.ping()
            info["redis"] = "ok"
        except Exception:
            info["redis"] = "error"
    return web.json_response(info)


def create_app(
    store: ConfigStore,
    runtime: BotRuntime | None = None,
    redis: aioredis.Redis | None = None,
) -> web.Application:
    app = web.Application()
    app["store"] = store
    app["runtime"] = runtime
    app["redis"] = redis
    app.add_routes(routes)
    return app
