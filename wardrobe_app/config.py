"""Configuration helpers for the wardrobe service."""

from dataclasses import dataclass
from pathlib import Path
import os
from typing import Optional

DEFAULT_GEMINI_MODEL = "gemini-1.5-flash"
DEFAULT_MAX_UPLOAD_BYTES = 5 * 1024 * 1024


@dataclass
class AppConfig:
    """Configuration values for the wardrobe service.

    Every field has a local default so the service boots without any
    environment; only ``gemini_api_key`` is needed for real model calls.
    """

    gemini_api_key: Optional[str] = None
    model: str = DEFAULT_GEMINI_MODEL
    wardrobe_db_path: str = "data/wardrobe.db"
    upload_dir: str = "data/uploads"
    saved_outfits_dir: str = "data/saved_outfits"
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES
    environment: str | None = None

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Build a config from environment variables or an environment YAML file.

        Environment specific files live in ``config/environments/<env>.yaml`` by
        default. Environment variables take precedence over file values so that
        the API key can be injected by the runtime.
        """

        env_name = os.getenv("APP_ENV")
        config_path = os.getenv("APP_CONFIG_PATH")
        config_dir = Path(os.getenv("WARDROBE_CONFIG_DIR", "config/environments"))
        file_config: dict = {}

        if config_path:
            path = Path(config_path)
        elif env_name:
            path = config_dir / f"{env_name}.yaml"
        else:
            path = None

        if path and path.exists():
            file_config = cls._load_yaml_config(path)

        def get_value(key: str, default: Optional[str] = None) -> Optional[str]:
            return os.getenv(key.upper(), file_config.get(key, default))

        max_upload = get_value("max_upload_bytes")
        try:
            max_upload_bytes = int(max_upload) if max_upload else DEFAULT_MAX_UPLOAD_BYTES
        except ValueError as exc:
            raise ValueError(f"MAX_UPLOAD_BYTES must be an integer, got {max_upload!r}") from exc

        return cls(
            gemini_api_key=get_value("gemini_api_key"),
            model=str(get_value("gemini_model") or DEFAULT_GEMINI_MODEL),
            wardrobe_db_path=str(get_value("wardrobe_db_path") or "data/wardrobe.db"),
            upload_dir=str(get_value("upload_dir") or "data/uploads"),
            saved_outfits_dir=str(get_value("saved_outfits_dir") or "data/saved_outfits"),
            max_upload_bytes=max_upload_bytes,
            environment=env_name,
        )

    @staticmethod
    def _load_yaml_config(path: Path) -> dict:
        """Parse flat ``key: value`` lines; nested YAML is not supported."""

        config: dict[str, str] = {}
        for line in path.read_text().splitlines():
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            if ":" not in stripped:
                continue
            key, raw_value = stripped.split(":", 1)
            value = raw_value.strip()
            if (value.startswith("\"") and value.endswith("\"")) or (
                value.startswith("'") and value.endswith("'")
            ):
                value = value[1:-1]
            config[key.strip()] = value
        return config


__all__ = ["AppConfig", "DEFAULT_GEMINI_MODEL", "DEFAULT_MAX_UPLOAD_BYTES"]
