from dependency_injector import containers, providers

from reportcore.clock import SystemClock
from reportcore.config import Settings
from reportcore.dashboard.cache import InMemoryWidgetCache, RedisWidgetCache
from reportcore.dashboard.executor import SampleWidgetExecutor
from reportcore.db.session import build_engine, build_session_factory
from reportcore.metrics.computation import SampleMetricComputation
from reportcore.report.renderer import ExcelRenderer


class Container(containers.DeclarativeContainer):
    wiring_config = containers.WiringConfiguration(modules=["reportcore.api.deps"])

    settings = providers.Singleton(Settings)

    engine = providers.Singleton(
        build_engine,
        database_url=settings.provided.database_url,
        echo=settings.provided.debug,
    )

    session_factory = providers.Singleton(
        build_session_factory,
        engine=engine,
    )

    clock = providers.Singleton(SystemClock)

    widget_cache_store = providers.Selector(
        settings.provided.widget_cache_backend,
        memory=providers.Singleton(InMemoryWidgetCache, clock=clock),
        redis=providers.Singleton(RedisWidgetCache, redis_url=settings.provided.redis_url),
    )

    widget_executor = providers.Singleton(SampleWidgetExecutor)

    renderer = providers.Singleton(ExcelRenderer, output_dir=settings.provided.reports_dir)

    metric_computation = providers.Singleton(SampleMetricComputation)
