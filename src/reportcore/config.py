from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    db_host: str = "localhost"
    db_port: int = 54377
    db_user: str = "postgres"
    db_password: str = "postgres"
    db_name: str = "reportcore"
    redis_url: str = "redis://localhost:6379/0"
    widget_cache_backend: str = "memory"  # memory / redis
    cache_namespace: str = "reportcore"
    default_refresh_interval: int = 300  # seconds
    widget_concurrency: int = 4
    reports_dir: str = "reports"
    recent_reports_limit: int = 10
    overview_window_days: int = 30
    schedule_dispatch_interval: int = 60  # seconds between beat runs
    debug: bool = True

    @property
    def database_url(self) -> str:
        return f"postgresql+asyncpg://{self.db_user}:{self.db_password}@{self.db_host}:{self.db_port}/{self.db_name}"

    class Config:
        env_file = ".env"


settings = Settings()
