"""Configuration loaded from environment (.env) and defaults."""

from datetime import date
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Locate the project root .env file regardless of CWD
_THIS_DIR = Path(__file__).resolve().parent          # rtcatalog/
_PROJECT_ROOT = _THIS_DIR.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE) if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Data directory: product bundle, comment and assignment stores
    rtcat_data_dir: str = "./data"

    # Product collection: a JSON file or a directory of JSON/YAML files.
    # Defaults to <data_dir>/products.json
    rtcat_products_path: str | None = None

    # Optional YAML vocabulary overriding the built-in registry
    rtcat_vocabulary_path: str | None = None

    # Date substituted for products that were never revised
    rtcat_revision_sentinel: date = date(2000, 1, 1)

    # Location/modality facets only test the first selected value when true
    rtcat_filter_first_value_only: bool = False

    rtcat_log_level: str = "INFO"

    # CORS origins (comma-separated). Defaults to localhost dev.
    cors_origins: str = "http://localhost:3000,http://127.0.0.1:3000,http://localhost:5173"

    # Server port
    port: int = 8000

    @property
    def data_dir(self) -> Path:
        """Get data directory as Path.

        Relative paths are resolved against the project root (not CWD).
        """
        p = Path(self.rtcat_data_dir)
        if not p.is_absolute():
            return (_PROJECT_ROOT / p).resolve()
        return p.resolve()

    @property
    def products_path(self) -> Path:
        if self.rtcat_products_path:
            return Path(self.rtcat_products_path).resolve()
        return self.data_dir / "products.json"

    @property
    def vocabulary_path(self) -> Path | None:
        if self.rtcat_vocabulary_path:
            return Path(self.rtcat_vocabulary_path).resolve()
        return None

    @property
    def cors_origin_list(self) -> list[str]:
        """Parse comma-separated CORS origins into a list."""
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    def ensure_dirs(self) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)


def get_settings() -> Settings:
    settings = Settings()
    settings.ensure_dirs()
    return settings
