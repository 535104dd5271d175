from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


Category = Literal["llm", "embedding", "ocr", "tts", "stt"]
CategoryFilter = Literal["all", "llm", "embedding", "ocr", "tts", "stt"]
Source = Literal["recommended", "trending", "new"]


class ModelEntry(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: str
    category: Category = "llm"
    params: str = "Unknown"
    description: str | None = None
    use_cases: list[str] = []
    recommended: bool = False

    downloads: int | None = None
    likes: int | None = None
    last_modified: str | None = Field(default=None, alias="lastModified")
    from_api: bool = Field(default=False, alias="fromApi")

    install_cmd: str | None = None
    python_code: str | None = None


class CatalogFile(BaseModel):
    models: list[ModelEntry]

