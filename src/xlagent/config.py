"""Settings: environment variables, optional .env and xlagent.yaml."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from xlagent.contracts.common import ConfigError
from xlagent.engine.history import DEFAULT_SYSTEM_PROMPT
from xlagent.io.fileops import read_config_text

DEFAULT_API_URL = "https://api.deepseek.com/v1/chat/completions"
DEFAULT_MODEL = "deepseek-coder"
CONFIG_FILENAME = "xlagent.yaml"

API_KEY_ENV = "DEEPSEEK_API_KEY"
API_URL_ENV = "DEEPSEEK_API_URL"
MODEL_ENV = "DEEPSEEK_MODEL"

# Keys accepted from the YAML file
FILE_KEYS = ("model", "temperature", "max_tokens", "timeout", "window", "system_prompt", "events")


class Settings(BaseModel):
    """Runtime configuration for the agent."""

    api_key: str = Field(min_length=1)
    api_url: str = DEFAULT_API_URL
    model: str = DEFAULT_MODEL
    temperature: float = Field(default=0.7, ge=0, le=2)
    max_tokens: int = Field(default=500, ge=1)
    timeout: Optional[float] = Field(default=None, gt=0)
    window: Optional[int] = Field(default=None, ge=1)
    system_prompt: str = DEFAULT_SYSTEM_PROMPT
    events: bool = False


def load_config_file(path: str | Path) -> dict[str, Any]:
    """Load the YAML config file. Unknown keys are rejected."""
    try:
        data = yaml.safe_load(read_config_text(path)) or {}
    except OSError as e:
        raise ConfigError(f"No se pudo leer {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise ConfigError(f"{path} no está en UTF-8") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"YAML no válido en {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"{path} debe contener un mapa de opciones")
    unknown = sorted(set(data) - set(FILE_KEYS))
    if unknown:
        raise ConfigError(f"Opciones desconocidas en {path}: {', '.join(unknown)}")
    return data


def load_settings(
    *,
    config_path: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
    cwd: str | Path | None = None,
) -> Settings:
    """Build Settings from the config file and environment.

    ``.env`` in ``cwd`` is loaded into the process environment first
    (variables already set win). Without ``config_path``, ``xlagent.yaml``
    in ``cwd`` is used when present. Environment variables override the file.
    """
    base = Path(cwd) if cwd is not None else Path.cwd()
    if environ is None:
        load_dotenv(base / ".env", override=False)
        environ = os.environ

    values: dict[str, Any] = {}
    if config_path is not None:
        values.update(load_config_file(config_path))
    elif (base / CONFIG_FILENAME).exists():
        values.update(load_config_file(base / CONFIG_FILENAME))

    api_key = environ.get(API_KEY_ENV, "")
    if not api_key:
        raise ConfigError(f"No se encontró {API_KEY_ENV} en el entorno")
    values["api_key"] = api_key
    if environ.get(API_URL_ENV):
        values["api_url"] = environ[API_URL_ENV]
    if environ.get(MODEL_ENV):
        values["model"] = environ[MODEL_ENV]

    try:
        return Settings(**values)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise ConfigError(f"Configuración no válida: {problems}") from e
