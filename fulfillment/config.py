from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    log_level: str = "INFO"
    debug: bool = False
    default_locale: str = "en-US"
    include_version_metadata: bool = False
    webhook_path: str = "/fulfillment"

    class Config:
        env_file = ".env"
        env_prefix = "FULFILLMENT_"
        extra = "ignore"


settings = Settings()
