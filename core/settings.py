from __future__ import annotations
import logging
import os
import yaml
from pathlib import Path
from typing import Dict
from pydantic import BaseModel

DEFAULT_SETTINGS_PATH = Path(__file__).resolve().parents[1] / "config" / "settings.yaml"

ENV_SETTINGS_PATH = "SCHOOL_ADMIN_SETTINGS"
ENV_BASE_URL = "SCHOOL_ADMIN_API_BASE_URL"
ENV_DEBUG = "SCHOOL_ADMIN_DEBUG"

class AppConfig(BaseModel):
    name: str = "School Admin Console"
    environment: str = "development"
    debug: bool = False

class ApiConfig(BaseModel):
    base_url: str
    timeout_seconds: float = 15
    image_path: str = "/images/"

class AuthConfig(BaseModel):
    admin_key: str = "genius_admin"
    token_key: str = "token"
    placeholder_avatar: str = "https://i.pravatar.cc/150?img=7"

class UiConfig(BaseModel):
    default_page_size: int = 10
    page_sizes: Dict[str, int] = {}

    def page_size(self, resource_key: str, default: int | None = None) -> int:
        return int(self.page_sizes.get(resource_key, default or self.default_page_size))

class LoggingConfig(BaseModel):
    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"

class Settings(BaseModel):
    app: AppConfig
    api: ApiConfig
    auth: AuthConfig
    ui: UiConfig
    logging: LoggingConfig

    @property
    def debug(self) -> bool:
        return self.app.debug

def _truthy(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}

def load_settings(path: str | Path | None = None) -> Settings:
    if path is None:
        path = os.environ.get(ENV_SETTINGS_PATH) or DEFAULT_SETTINGS_PATH
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    api = dict(data.get("api") or {})
    app = dict(data.get("app") or {})
    # Environment wins over the file for deploy-specific values
    if os.environ.get(ENV_BASE_URL):
        api["base_url"] = os.environ[ENV_BASE_URL]
    if os.environ.get(ENV_DEBUG):
        app["debug"] = _truthy(os.environ[ENV_DEBUG])
    api["base_url"] = str(api.get("base_url", "")).rstrip("/")

    return Settings(
        app=AppConfig(**app),
        api=ApiConfig(**api),
        auth=AuthConfig(**(data.get("auth") or {})),
        ui=UiConfig(**(data.get("ui") or {})),
        logging=LoggingConfig(**(data.get("logging") or {})),
    )

def configure_logging(settings: Settings) -> None:
    """Install the root handler once; later calls are no-ops."""
    level = logging.DEBUG if settings.debug else getattr(logging, settings.logging.level.upper(), logging.INFO)
    logging.basicConfig(level=level, format=settings.logging.format)
