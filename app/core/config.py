from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    APP_NAME: str = "storefront-core"
    DB_URL: str
    DB_ECHO: bool = False
    LOG_LEVEL: str = "INFO"

    # used when the settings row has not been created yet
    DEFAULT_TAX_PERCENT: float = 19.0
    DEFAULT_SHIPPING_FIXED_CENT: int = 0


settings = Settings()
