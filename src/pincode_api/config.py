from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "Pincode Lookup API"
    pincode_data_source: str = Field(default="data/pincode-lookup.json")
    upstream_timeout_seconds: float = Field(default=3.0)
    preload_on_startup: bool = Field(default=False)
    cors_allow_origins: list[str] = Field(default_factory=lambda: ["*"])
    log_level: str = Field(default="INFO")


settings = Settings()
