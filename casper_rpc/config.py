"""Configuration loader — reads config.yaml, interpolates env vars, validates."""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Frozen config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class NodeConfig:
    rpc_url: str = ""
    rpc_timeout: int = 30
    headers: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class AppConfig:
    node: NodeConfig = field(default_factory=NodeConfig)


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


def _build_node(raw: dict[str, Any]) -> NodeConfig:
    # Headers left empty by a missing env var are not sent at all.
    headers = {
        str(k): str(v) for k, v in (raw.get("headers") or {}).items() if v not in (None, "")
    }
    return NodeConfig(
        rpc_url=str(raw.get("rpc_url", "")).strip(),
        rpc_timeout=int(raw.get("rpc_timeout", 30)),
        headers=headers,
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """Load and validate client configuration from YAML + .env.

    Args:
        config_path: Path to config.yaml. Defaults to ``config.yaml`` in the
            project root (one level up from this package).
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

    cfg = AppConfig(node=_build_node(raw.get("node") or {}))

    validate_node(cfg.node)
    logger.info("Configuration loaded from %s", config_path)
    return cfg


def validate_node(node: NodeConfig) -> None:
    """Raise on invalid node settings."""
    if not node.rpc_url:
        raise ValueError("Node rpc_url must be configured")

    scheme = urlparse(node.rpc_url).scheme
    if scheme not in ("http", "https"):
        raise ValueError(
            f"Node rpc_url must use http or https, got '{node.rpc_url}'"
        )

    if node.rpc_timeout <= 0:
        raise ValueError(f"rpc_timeout must be positive, got {node.rpc_timeout}")
