from __future__ import annotations

import inspect
import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncContextManager

from fastapi import FastAPI

from paye.config import Settings, get_settings
from paye.counter import CounterStore, build_counter_store

Hook = Callable[[FastAPI], Awaitable[None] | None]
StoreFactory = Callable[[Settings], CounterStore]

_STATE_ATTRS = ("settings", "counter_store", "telemetry_handler", "app_label")


def _open_telemetry_sink(logger: logging.Logger, log_dir: str | None, app_label: str) -> logging.Handler | None:
    if not log_dir:
        return None
    logs_dir = Path(log_dir)
    try:
        logs_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        logger.warning("Unable to create logs directory %s: %s", logs_dir, exc)
        return None
    handler = logging.FileHandler(logs_dir / f"{app_label}.log", encoding="utf-8")
    handler.setLevel(logging.INFO)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s - %(message)s"))
    package_logger = logging.getLogger("paye")
    if package_logger.level == logging.NOTSET:
        package_logger.setLevel(logging.INFO)
    package_logger.addHandler(handler)
    return handler


async def _invoke_hook(hook: Hook | None, app: FastAPI) -> None:
    if hook is None:
        return
    try:
        result = hook(app)
        if inspect.isawaitable(result):
            await result  # type: ignore[func-returns-value]
    except Exception:  # pragma: no cover - hooks are user provided
        logging.getLogger("paye").exception("Application lifecycle hook failed")


def build_application_lifespan(
    app_label: str,
    *,
    startup_hook: Hook | None = None,
    shutdown_hook: Hook | None = None,
    store_factory: StoreFactory = build_counter_store,
) -> Callable[[FastAPI], AsyncContextManager[None]]:
    base_logger = logging.getLogger("paye")

    @asynccontextmanager
    async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
        settings = get_settings()
        logger = base_logger.getChild(app_label)
        telemetry_handler = _open_telemetry_sink(logger, settings.log_dir, app_label)
        counter_store = store_factory(settings)
        await counter_store.connect()

        app.state.settings = settings
        app.state.counter_store = counter_store
        app.state.telemetry_handler = telemetry_handler
        app.state.app_label = app_label

        logger.info(
            "Startup complete: counter_backend=%s zero_income_deductions=%s default_period=%s",
            counter_store.backend,
            settings.zero_income_deductions,
            settings.default_period,
        )

        try:
            await _invoke_hook(startup_hook, app)
            yield
        finally:
            await _invoke_hook(shutdown_hook, app)
            await counter_store.close()
            logger.info("Shutdown complete")
            if telemetry_handler is not None:
                base_logger.removeHandler(telemetry_handler)
                telemetry_handler.close()
            for attr in _STATE_ATTRS:
                if hasattr(app.state, attr):
                    delattr(app.state, attr)

    return _lifespan
