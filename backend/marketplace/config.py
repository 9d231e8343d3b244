from pathlib import Path
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    db_path: Path = Path("marketplace.sqlite")
    api_prefix: str = "/api"
    environment: str = "development"
    log_level: str = "INFO"

    jwt_secret: str = "dev-secret-change-this"
    jwt_refresh_secret: str = "dev-refresh-secret"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 15
    refresh_token_expire_days: int = 7

    # Flat surcharge added to every paid event ticket (IDR).
    event_admin_fee: int = 2500

    default_page_limit: int = 10
    max_page_limit: int = 100

    # When False, an admin cannot verify a payment that is already VERIFIED.
    allow_payment_reverification: bool = False

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    model_config = {"env_prefix": "MARKET_"}


settings = Settings()
