"""FastAPI adapter – notification, health and metrics routers."""
from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING, Any, Awaitable, Callable

if TYPE_CHECKING:
    from streamflow.application.service import NotificationService

logger = logging.getLogger(__name__)


def _require_fastapi() -> None:
    try:
        import fastapi  # noqa: F401
    except ImportError as exc:
        raise ImportError(
            "Install 'streamflow[fastapi]' to use the FastAPI adapter"
        ) from exc


ReadinessCheck = Callable[[], Awaitable[bool]]


def _records(records: list[Any]) -> list[dict[str, Any]]:
    return [r.to_dict() for r in records]


def NotificationRouter(
    service: "NotificationService",
    prefix: str = "/api/v1/notify",
    tags: list[str] | None = None,
) -> Any:
    """Return the notification API router bound to *service*.

    Routes
    ------
    ``POST   {prefix}``                               queue a notification
    ``GET    {prefix}/recent``                        recent cache, newest first
    ``GET    {prefix}/recent/records?n=``             newest records from the store
    ``GET    {prefix}/history?page=&size=``           zero-based pages, newest first
    ``GET    {prefix}/filter/type/{type}``
    ``GET    {prefix}/filter/user/{user_id}``
    ``GET    {prefix}/filter/channel/{channel}``
    ``GET    {prefix}/filter/type/{type}/user/{user_id}``
    ``GET    {prefix}/filter/timerange?start=&end=``  exclusive bounds, ISO 8601
    ``GET    {prefix}/stats``
    """
    _require_fastapi()
    from fastapi import APIRouter, Body, Query  # type: ignore[import-untyped]

    from streamflow.application.queries import DEFAULT_PAGE_SIZE, DEFAULT_RECENT

    router = APIRouter(prefix=prefix, tags=tags or ["notifications"])

    @router.post("")
    async def submit(payload: dict[str, Any] = Body(...)) -> dict[str, Any]:
        ack = await service.submit_raw(payload)
        return ack.to_dict()

    @router.get("/recent")
    async def recent() -> list[str]:
        return await service.recent()

    @router.get("/recent/records")
    async def recent_records(n: int = Query(default=DEFAULT_RECENT)) -> list[dict[str, Any]]:
        return _records(await service.recent_records(n))

    @router.get("/history")
    async def history(page: int = Query(default=0), size: int = Query(default=DEFAULT_PAGE_SIZE)) -> dict[str, Any]:
        result = await service.history(page, size)
        return result.to_dict(lambda r: r.to_dict())

    @router.get("/filter/type/{type}")
    async def by_type(type: str) -> list[dict[str, Any]]:
        return _records(await service.by_type(type))

    @router.get("/filter/user/{user_id}")
    async def by_user(user_id: str) -> list[dict[str, Any]]:
        return _records(await service.by_user(user_id))

    @router.get("/filter/channel/{channel}")
    async def by_channel(channel: str) -> list[dict[str, Any]]:
        return _records(await service.by_channel(channel))

    @router.get("/filter/type/{type}/user/{user_id}")
    async def by_type_and_user(type: str, user_id: str) -> list[dict[str, Any]]:
        return _records(await service.by_type_and_user(type, user_id))

    @router.get("/filter/timerange")
    async def by_time_range(start: datetime = Query(...), end: datetime = Query(...)) -> list[dict[str, Any]]:
        return _records(await service.by_time_range(start, end))

    @router.get("/stats")
    async def stats() -> dict[str, int]:
        return (await service.stats()).to_dict()

    return router


def FastAPIHealthRouter(
    path: str = "/health",
    readiness_checks: list[ReadinessCheck] | None = None,
    tags: list[str] | None = None,
) -> Any:
    """Return a liveness + readiness health-check router.

    Parameters
    ----------
    path:
        Base path prefix.  Liveness is at ``{path}/live``, readiness at
        ``{path}/ready``.
    readiness_checks:
        Optional list of async callables returning ``bool`` (store and
        cache pings, typically).  All must return ``True`` for readiness to
        answer 200; otherwise it answers 503.
    """
    _require_fastapi()
    from fastapi import APIRouter  # type: ignore[import-untyped]
    from fastapi.responses import JSONResponse  # type: ignore[import-untyped]

    router = APIRouter(tags=tags or ["ops"])
    checks = readiness_checks or []

    @router.get(f"{path}/live")
    async def liveness() -> dict[str, str]:
        return {"status": "ok"}

    @router.get(f"{path}/ready")
    async def readiness() -> Any:
        results: dict[str, bool] = {}
        for check in checks:
            name = getattr(check, "__qualname__", repr(check))
            try:
                ok = await check()
            except Exception as exc:  # noqa: BLE001 – a failing check means not ready
                logger.warning("health.check_failed check=%s error=%r", name, exc)
                ok = False
            results[name] = bool(ok)

        all_ok = all(results.values())
        return JSONResponse(
            status_code=200 if all_ok else 503,
            content={"status": "ok" if all_ok else "degraded", "checks": results},
        )

    return router


def FastAPIMetricsRouter(path: str = "/metrics", registry: Any = None) -> Any:
    """Return a Prometheus exposition router (requires prometheus-client)."""
    _require_fastapi()
    from fastapi import APIRouter  # type: ignore[import-untyped]
    from fastapi.responses import Response  # type: ignore[import-untyped]

    from streamflow.adapters.prometheus.metrics import _require_prometheus

    prom = _require_prometheus()
    target = registry if registry is not None else prom.REGISTRY
    router = APIRouter()

    @router.get(path, tags=["ops"])
    async def metrics() -> Any:
        return Response(content=prom.generate_latest(target), media_type=prom.CONTENT_TYPE_LATEST)

    return router


__all__ = ["FastAPIHealthRouter", "FastAPIMetricsRouter", "NotificationRouter", "ReadinessCheck"]
