from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    database_url: str = Field("sqlite:///backend/visual_bible.db")
    bible_corpus_path: Path = Field(Path("bible/kjv_full.csv"))
    base_image_path: Path = Field(Path("data/output/base-bible.png"))
    log_level: str = Field("INFO")


@lru_cache()
def get_settings() -> Settings:
    return Settings()
