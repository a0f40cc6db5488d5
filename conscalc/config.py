"""Configuration management for ConsCalc.

Loads paths and calculator settings from config/config.yaml if present,
otherwise falls back to the defaults below.
"""
from __future__ import annotations

import math
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

import yaml

DEFAULT_CONFIG_PATH = os.path.join('config', 'config.yaml')


@dataclass
class Paths:
    processed_dir: str = os.path.join('data', 'processed')
    visuals_dir: str = os.path.join('data', 'processed', 'visualizations')
    exports_dir: str = os.path.join('data', 'processed', 'exports')


@dataclass
class Settings:
    # None disables the upper variance bound at validation
    max_variance: Optional[float] = None
    display_precision: int = 6
    detail_precision: int = 4
    default_mean: float = 5.0
    default_variance: float = 1.5
    sweep_points: int = 41


@dataclass
class AppConfig:
    paths: Paths
    settings: Settings


def _load_yaml(path: str) -> Optional[Dict[str, Any]]:
    if not os.path.exists(path):
        return None
    with open(path, encoding='utf-8') as fh:
        return yaml.safe_load(fh) or {}


def _optional_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    value = float(value)
    if math.isnan(value):
        raise ValueError("max_variance must be a number or null, got NaN")
    return value


def load_config(path: Optional[str] = None, create_dirs: bool = False) -> AppConfig:
    cfg = _load_yaml(path or DEFAULT_CONFIG_PATH) or {}

    paths_cfg = cfg.get('paths', {}) if isinstance(cfg, dict) else {}
    settings_cfg = cfg.get('settings', {}) if isinstance(cfg, dict) else {}

    paths = Paths(
        processed_dir=paths_cfg.get('processed_dir', Paths.processed_dir),
        visuals_dir=paths_cfg.get('visuals_dir', Paths.visuals_dir),
        exports_dir=paths_cfg.get('exports_dir', Paths.exports_dir),
    )
    settings = Settings(
        max_variance=_optional_float(settings_cfg.get('max_variance', Settings.max_variance)),
        display_precision=int(settings_cfg.get('display_precision', Settings.display_precision)),
        detail_precision=int(settings_cfg.get('detail_precision', Settings.detail_precision)),
        default_mean=float(settings_cfg.get('default_mean', Settings.default_mean)),
        default_variance=float(settings_cfg.get('default_variance', Settings.default_variance)),
        sweep_points=int(settings_cfg.get('sweep_points', Settings.sweep_points)),
    )
    if settings.sweep_points < 2:
        raise ValueError(f"sweep_points must be at least 2, got {settings.sweep_points}")

    if create_dirs:
        os.makedirs(paths.visuals_dir, exist_ok=True)
        os.makedirs(paths.exports_dir, exist_ok=True)

    return AppConfig(paths=paths, settings=settings)
