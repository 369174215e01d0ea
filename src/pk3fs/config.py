import tempfile
from pathlib import Path

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _default_temp_dir() -> Path:
    return Path(tempfile.gettempdir()) / "pk3fs"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PK3FS_",
        extra="ignore",
    )

    temp_dir: Path = Path("")
    archive_root: Path | None = None
    default_buffer_size: int = Field(default=1024, gt=0)
    copy_buffer_size: int = Field(default=4096, gt=0)
    temp_extension: str = "tmp"
    cache_entry_names: bool = False
    log_level: str = "INFO"

    @model_validator(mode="after")
    def _resolve_temp_dir(self) -> "Settings":
        if self.temp_dir == Path(""):
            self.temp_dir = _default_temp_dir()
        return self


settings = Settings()
