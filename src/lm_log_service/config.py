import os
import sys
from pathlib import Path

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _platform_data_dir() -> Path:
    if sys.platform == "win32":
        base = Path(os.environ.get("LOCALAPPDATA", Path.home() / "AppData" / "Local"))
    else:
        base = Path(os.environ.get("XDG_DATA_HOME", Path.home() / ".local" / "share"))
    return base / "lm-log-service"


class Settings(BaseSettings):
    """Service settings, read from ``LMLOG_*`` variables and ``.env``.

    ``data_dir`` and ``db_path`` are optional; when unset they resolve to the
    platform data directory and ``<data_dir>/lm-log.db``.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="LMLOG_",
        extra="ignore",
    )

    data_dir: Path | None = None
    db_path: Path | None = None
    host: str = "127.0.0.1"
    port: int = 5000
    log_level: str = "INFO"
    sql_echo: bool = False

    @model_validator(mode="after")
    def _resolve_paths(self) -> "Settings":
        if self.data_dir is None:
            self.data_dir = _platform_data_dir()
        if self.db_path is None:
            self.db_path = self.data_dir / "lm-log.db"
        return self

    @property
    def database_url(self) -> str:
        return f"sqlite:///{self.db_path}"


settings = Settings()
