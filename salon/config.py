from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):

    # Database
    database_url: str


    # Session token
    session_token_expire_days: int = 30
    jwt_algorithm: str = 'HS256'
    secret_key: str

    # Shared salon password (bcrypt hash)
    access_password_hash: str

    # Login throttling
    rate_limit_enabled: bool = True
    login_rate_limit: str = "10/minute"

    # App
    app_name: str = 'Vera Salon Scheduler'
    debug: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",

    )

    # Customer ledger (path or http(s) URL)
    ledger_source: str = "all.csv"
    ledger_timeout_seconds: int = 10

    # Re-sampling of "now" for upcoming/past views
    clock_refresh_seconds: int = 60

    # Logging
    log_dir: str = "logs"
    log_file: str = "salon.log"
    log_max_bytes: int = 10_000_000
    log_backup_count: int = 5


settings = Settings()
