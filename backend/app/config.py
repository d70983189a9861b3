"""Process configuration read from environment variables."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 8080
DEFAULT_FRESHNESS_SECONDS = 600.0
DEFAULT_UPSTREAM_TIMEOUT = 30.0

# Alpha Vantage 'compact' responses carry this many trading days
COMPACT_OUTPUT_DAYS = 100


class ConfigError(ValueError):
    """A required environment variable is missing or malformed."""


@dataclass(frozen=True, slots=True)
class Settings:
    window_size: int
    symbol: str
    api_key: str = ""
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    freshness_seconds: float = DEFAULT_FRESHNESS_SECONDS
    upstream_timeout: float = DEFAULT_UPSTREAM_TIMEOUT
    env: str = "prod"

    @property
    def output_size(self) -> str:
        """Alpha Vantage outputsize large enough to cover the window."""
        return "full" if self.window_size > COMPACT_OUTPUT_DAYS else "compact"


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build Settings from the environment.

    Required: NDAYS (int >= 1), SYMBOL.
    Optional: API_KEY (blank selects the simulator), HOST, PORT,
    FRESHNESS_SECONDS, UPSTREAM_TIMEOUT_SECONDS, ENV ('dev' for debug logs).
    """
    env = os.environ if environ is None else environ

    ndays = _require(env, "NDAYS")
    try:
        window_size = int(ndays)
    except ValueError:
        raise ConfigError(f"NDAYS not an integer: {ndays!r}") from None
    if window_size < 1:
        raise ConfigError(f"NDAYS must be at least 1, got {window_size}")

    symbol = _require(env, "SYMBOL").strip().upper()
    if not symbol:
        raise ConfigError("SYMBOL must not be blank")

    port_raw = env.get("PORT", str(DEFAULT_PORT))
    try:
        port = int(port_raw)
    except ValueError:
        raise ConfigError(f"error converting PORT to an integer: {port_raw!r}") from None

    return Settings(
        window_size=window_size,
        symbol=symbol,
        api_key=env.get("API_KEY", "").strip(),
        host=env.get("HOST", DEFAULT_HOST),
        port=port,
        freshness_seconds=_positive_float(env, "FRESHNESS_SECONDS", DEFAULT_FRESHNESS_SECONDS),
        upstream_timeout=_positive_float(env, "UPSTREAM_TIMEOUT_SECONDS", DEFAULT_UPSTREAM_TIMEOUT),
        env=env.get("ENV", "prod").strip().lower(),
    )


def _require(env: Mapping[str, str], name: str) -> str:
    try:
        return env[name]
    except KeyError:
        raise ConfigError(f"{name} environment variable is required and not found") from None


def _positive_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ConfigError(f"{name} not a number: {raw!r}") from None
    if not value > 0:
        raise ConfigError(f"{name} must be greater than 0, got {raw!r}")
    return value
