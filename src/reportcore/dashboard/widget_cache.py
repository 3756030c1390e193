"""DashboardWidgetCache — serve one widget from cache or recompute it."""

import logging
import time
from datetime import timedelta
from typing import Optional

from reportcore.clock import Clock, SystemClock
from reportcore.dashboard.cache import WidgetCacheStore, widget_cache_key
from reportcore.dashboard.executor import WidgetQueryExecutor
from reportcore.domain.models.dashboard import WIDGET_ERROR_PAYLOAD, CachedWidget, WidgetDefinition, WidgetResult

logger = logging.getLogger(__name__)


def effective_refresh_interval(widget: WidgetDefinition, default_refresh_interval: int) -> int:
    return widget.data_source.refresh_interval or default_refresh_interval


class DashboardWidgetCache:
    def __init__(
        self,
        store: WidgetCacheStore,
        executor: WidgetQueryExecutor,
        clock: Optional[Clock] = None,
        namespace: str = "reportcore",
    ) -> None:
        self._store = store
        self._executor = executor
        self._clock = clock or SystemClock()
        self._namespace = namespace

    async def load(
        self, widget: WidgetDefinition, default_refresh_interval: int, tenant_id: str, dashboard_id: str
    ) -> WidgetResult:
        """Never raises: a failing widget yields the error payload in its own slot."""
        started = time.perf_counter()
        try:
            return await self._load(widget, default_refresh_interval, tenant_id, dashboard_id, started)
        except Exception:
            logger.exception("Error loading widget %s", widget.id)
            return WidgetResult(
                id=widget.id,
                data=dict(WIDGET_ERROR_PAYLOAD),
                last_updated=self._clock.now(),
                load_time_ms=_since(started),
                failed=True,
            )

    async def _load(
        self, widget: WidgetDefinition, default_refresh_interval: int, tenant_id: str, dashboard_id: str, started: float
    ) -> WidgetResult:
        interval = effective_refresh_interval(widget, default_refresh_interval)
        key = widget_cache_key(self._namespace, tenant_id, dashboard_id, widget.id)

        cached = await self._store.get(key)
        if cached is not None and self._clock.now() - cached.cached_at < timedelta(seconds=interval):
            return WidgetResult(
                id=widget.id,
                data=cached.data,
                last_updated=cached.cached_at,
                load_time_ms=_since(started),
                cache_hit=True,
            )

        data = await self._executor.execute(widget)
        now = self._clock.now()
        await self._store.set(key, CachedWidget(data=data, cached_at=now), ttl=interval)
        return WidgetResult(id=widget.id, data=data, last_updated=now, load_time_ms=_since(started))


def _since(started: float) -> float:
    return (time.perf_counter() - started) * 1000
