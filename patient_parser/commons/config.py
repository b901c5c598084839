import os
import sys
from typing import Any, Dict, Optional

import yaml

from patient_parser.commons.types import Settings

DEFAULT_SETTINGS = "patient_parser/configs/settings.yaml"


def resource_path(relative_path: str) -> str:
    """Devuelve la ruta absoluta a un recurso, ya sea ejecutando como .exe o en desarrollo"""
    if os.path.isabs(relative_path):
        return relative_path
    if hasattr(sys, "_MEIPASS"):
        # Si es un ejecutable generado por PyInstaller
        base_path = sys._MEIPASS
    else:
        # Si es ejecución normal (dev)
        base_path = os.path.abspath(".")

    return os.path.join(base_path, relative_path)


def _apply_env(raw: Dict[str, Any]) -> Dict[str, Any]:
    # Variables de entorno mandan sobre el YAML
    if os.getenv("LOG_LEVEL"):
        raw.setdefault("app", {})["log_level"] = os.environ["LOG_LEVEL"].upper()
    if os.getenv("PORT"):
        raw.setdefault("http", {})["port"] = int(os.environ["PORT"])
    return raw


def load_cfg(path_or_obj: Optional[Any] = None) -> Settings:
    """Load settings from a YAML path, a dict already loaded, or defaults (None)."""
    if isinstance(path_or_obj, Settings):
        return path_or_obj
    if isinstance(path_or_obj, dict):
        raw = dict(path_or_obj)
    else:
        config_path = resource_path(path_or_obj or DEFAULT_SETTINGS)
        with open(config_path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    return Settings.model_validate(_apply_env(raw))
