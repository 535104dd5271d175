from pathlib import Path

from huggingface_hub import constants as hf_constants
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


PACKAGE_DIR = Path(__file__).resolve().parents[1]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=None, case_sensitive=False)

    # HF_ENDPOINT is honoured by huggingface_hub itself; HUB_ENDPOINT overrides it for this app only.
    hub_endpoint: str = Field(default=hf_constants.ENDPOINT, validation_alias="HUB_ENDPOINT")
    hub_page_size: int = Field(default=30, validation_alias="HUB_PAGE_SIZE")
    hub_timeout_seconds: float = Field(default=15.0, validation_alias="HUB_TIMEOUT_SECONDS")
    max_params_billions: float = Field(default=20.0, validation_alias="MAX_PARAMS_BILLIONS")

    catalog_path: Path = Field(default=PACKAGE_DIR / "data" / "models.json", validation_alias="CATALOG_PATH")

    search_debounce_ms: int = Field(default=300, validation_alias="SEARCH_DEBOUNCE_MS")
    copy_feedback_ms: int = Field(default=2000, validation_alias="COPY_FEEDBACK_MS")

    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    host: str = Field(default="127.0.0.1", validation_alias="HOST")
    port: int = Field(default=8000, validation_alias="PORT")

    def hub_models_url(self) -> str:
        return f"{self.hub_endpoint.rstrip('/')}/api/models"

    def hub_page_url(self, model_id: str) -> str:
        return f"{self.hub_endpoint.rstrip('/')}/{model_id}"

    @field_validator("hub_page_size", mode="before")
    @classmethod
    def _clamp_page_size(cls, v):
        if v is None:
            return 30
        return max(1, min(int(v), 100))

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, v):
        if isinstance(v, str) and v.strip():
            return v.strip().upper()
        return "INFO"


settings = Settings()
