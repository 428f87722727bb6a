"""Configuration loader — reads config.yaml, interpolates env vars, validates."""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

SUPPORTED_PROVIDERS = ("pyth",)

# ---------------------------------------------------------------------------
# Frozen config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class EngineConfig:
    collateral_assets: tuple[str, ...] = ()
    price_feeds: tuple[str, ...] = ()
    debt_token: str = "SUSD"


@dataclass(frozen=True)
class PythConfig:
    hermes_url: str = "https://hermes.pyth.network/v2/updates/price/latest"
    feeds: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class PriceOracleConfig:
    provider: str = "pyth"
    pyth: PythConfig = field(default_factory=PythConfig)


@dataclass(frozen=True)
class FeedServiceConfig:
    refresh_interval_seconds: int = 60


@dataclass(frozen=True)
class AppConfig:
    engine: EngineConfig = field(default_factory=EngineConfig)
    price_oracle: PriceOracleConfig = field(default_factory=PriceOracleConfig)
    feed_service: FeedServiceConfig = field(default_factory=FeedServiceConfig)


# ---------------------------------------------------------------------------
# Env interpolation
# ---------------------------------------------------------------------------

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)}")


def _interpolate_env(value: Any) -> Any:
    """Recursively replace ${VAR} references with environment variable values."""
    if isinstance(value, str):
        return _ENV_VAR_RE.sub(lambda m: os.environ.get(m.group(1), ""), value)
    if isinstance(value, dict):
        return {k: _interpolate_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_interpolate_env(item) for item in value]
    return value


# ---------------------------------------------------------------------------
# YAML → dataclass builders
# ---------------------------------------------------------------------------


def _build_engine(raw: dict[str, Any]) -> EngineConfig:
    return EngineConfig(
        collateral_assets=tuple(raw.get("collateral_assets", [])),
        price_feeds=tuple(raw.get("price_feeds", [])),
        debt_token=raw.get("debt_token", "SUSD"),
    )


def _build_price_oracle(raw: dict[str, Any]) -> PriceOracleConfig:
    pyth_raw = raw.get("pyth", {})
    return PriceOracleConfig(
        provider=raw.get("provider", "pyth"),
        pyth=PythConfig(
            hermes_url=pyth_raw.get("hermes_url", PythConfig.hermes_url),
            feeds=dict(pyth_raw.get("feeds", {})),
        ),
    )


def _build_feed_service(raw: dict[str, Any]) -> FeedServiceConfig:
    return FeedServiceConfig(
        refresh_interval_seconds=int(raw.get("refresh_interval_seconds", 60)),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """Load and validate application configuration from YAML + .env.

    Args:
        config_path: Path to config.yaml. Defaults to ``config.yaml`` in the
            project root (two levels up from this file).
    """
    load_dotenv()

    if config_path is None:
        config_path = Path(__file__).resolve().parent.parent / "config.yaml"
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    raw = _interpolate_env(raw)

    cfg = AppConfig(
        engine=_build_engine(raw.get("engine", {})),
        price_oracle=_build_price_oracle(raw.get("price_oracle", {})),
        feed_service=_build_feed_service(raw.get("feed_service", {})),
    )

    _validate(cfg)
    logger.info("Configuration loaded from %s", config_path)
    return cfg


def _validate(cfg: AppConfig) -> None:
    """Raise on invalid configuration.

    Asset/feed list lengths are not checked here; the engine rejects a
    mismatch when it is constructed.
    """
    if cfg.price_oracle.provider not in SUPPORTED_PROVIDERS:
        raise ValueError(f"Unsupported price oracle provider '{cfg.price_oracle.provider}'")

    if not cfg.engine.collateral_assets:
        raise ValueError("At least one collateral asset must be configured")

    for feed in cfg.engine.price_feeds:
        if feed not in cfg.price_oracle.pyth.feeds:
            raise ValueError(f"Price feed '{feed}' has no Pyth price id configured")

    if cfg.feed_service.refresh_interval_seconds <= 0:
        raise ValueError("refresh_interval_seconds must be positive")
