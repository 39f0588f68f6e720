from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_name: str = "projectflow-resources"

    # ---------------------------------------------------------------------
    # API contract / OpenAPI
    # ---------------------------------------------------------------------

    api_version: str = "1.0.0"
    api_description: str = (
        "ProjectFlow resource management API.\n\n"
        "Allocations, weekly availability and time-off requests. "
        "Required headers: X-Actor-User-Id, X-Role."
    )

    env: str = "local"
    debug: bool = True
    log_level: str = "INFO"

    db_host: str = "127.0.0.1"
    db_port: int = 5432
    db_name: str = "projectflow"
    db_user: str = "projectflow"
    db_password: str = "projectflow"

    # full URL override, e.g. sqlite:///./projectflow.db for local runs
    db_url: str | None = None
    db_statement_timeout_ms: int = 5000

    # ---------------------------------------------------------------------
    # Resource scheduling
    # ---------------------------------------------------------------------

    lock_timeout_seconds: float = 5.0
    calendar_max_days: int = 366

    @property
    def database_url(self) -> str:
        if self.db_url:
            return self.db_url
        return (
            f"postgresql+psycopg://{self.db_user}:{self.db_password}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}"
        )


settings = Settings()
