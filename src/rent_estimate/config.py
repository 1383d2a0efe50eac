"""Configuration loader."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml

from .models import EstimationSettings

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config.yaml"
DEFAULT_REFERENCE_CITY = "Belo Horizonte"


def load_config(config_path: Path | str | None = None) -> dict[str, Any]:
    """Load config from YAML file.

    Resolution order: explicit path, ``RENT_ESTIMATE_CONFIG``, project root ``config.yaml``.
    The file's own path is kept under ``_path`` so relative paths can be resolved.
    """
    env_path = os.environ.get("RENT_ESTIMATE_CONFIG")
    path = Path(config_path or env_path or DEFAULT_CONFIG_PATH)
    if not path.exists():
        raise FileNotFoundError(f"Config not found: {path}")
    with open(path, encoding="utf-8") as f:
        cfg = yaml.safe_load(f) or {}
    cfg["_path"] = str(path.resolve())
    return cfg


def get_estimation_settings(config: dict[str, Any]) -> EstimationSettings:
    """Extract margin and building-age rules from config."""
    est = config.get("estimation", {}) or {}
    defaults = EstimationSettings()
    return EstimationSettings(
        margin=float(est.get("margin", defaults.margin)),
        min_year_built=int(est.get("min_year_built", defaults.min_year_built)),
        new_building_max_age=int(est.get("new_building_max_age", defaults.new_building_max_age)),
        new_building_bonus=float(est.get("new_building_bonus", defaults.new_building_bonus)),
        old_building_min_age=int(est.get("old_building_min_age", defaults.old_building_min_age)),
        old_building_penalty=float(est.get("old_building_penalty", defaults.old_building_penalty)),
    )


def get_reference_city(config: dict[str, Any]) -> str:
    """City assumed when the caller does not supply one."""
    city = config.get("reference_city")
    if isinstance(city, str) and city.strip():
        return city.strip()
    return DEFAULT_REFERENCE_CITY


def get_parameters_path(config: dict[str, Any]) -> Path:
    """Path of the neighborhood parameter catalogue.

    ``RENT_ESTIMATE_PARAMETERS`` wins over the config value. Relative paths are
    resolved against the config file's directory.
    """
    raw = os.environ.get("RENT_ESTIMATE_PARAMETERS") or config.get("parameters_path", "data/parameters.yaml")
    path = Path(raw)
    if not path.is_absolute():
        base = Path(config["_path"]).parent if config.get("_path") else DEFAULT_CONFIG_PATH.parent
        path = base / path
    return path


def get_debounce_seconds(config: dict[str, Any]) -> float:
    """Interactive recompute delay (config value is in milliseconds)."""
    session = config.get("session", {}) or {}
    return float(session.get("debounce_ms", 500)) / 1000


def get_display_options(config: dict[str, Any]) -> dict[str, str]:
    """Currency formatting options for rendered estimates."""
    display = config.get("display", {}) or {}
    return {
        "symbol": str(display.get("currency_symbol", "R$")),
        "thousands_sep": str(display.get("thousands_sep", ".")),
        "decimal_sep": str(display.get("decimal_sep", ",")),
    }
