"""Configuration schema and resolution for outcomes.

Layers, lowest precedence first:
- Schema defaults (``Settings``)
- Environment (``OUTCOMES_*``, after an optional ``.env`` load)
- Programmatic overrides

Resolution produces an immutable ``FrozenConfig``. ``get_config()`` prefers an
ambient scope set with ``config_scope()`` and otherwise returns a cached
resolution, so hot paths pay for the environment lookup once.
"""

from __future__ import annotations

from contextlib import contextmanager
import contextvars
from dataclasses import dataclass
from functools import cache
import os
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ValidationError

from outcomes.errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Generator, Mapping

ENV_PREFIX = "OUTCOMES_"

_TRUE_STRINGS = {"1", "true", "yes", "on"}
_FALSE_STRINGS = {"0", "false", "no", "off", ""}


class Settings(BaseModel):
    """Pydantic schema: the single source of truth for fields and defaults."""

    warn_on_misuse: bool = True
    strict: bool = False
    telemetry_enabled: bool = False

    model_config = {"extra": "forbid"}


@dataclass(frozen=True)
class FrozenConfig:
    """Validated, immutable configuration read by the core types."""

    warn_on_misuse: bool
    strict: bool
    telemetry_enabled: bool


_AMBIENT: contextvars.ContextVar[FrozenConfig | None] = contextvars.ContextVar(
    "outcomes_ambient_config", default=None
)

_DOTENV_LOADED: bool = False


def _try_load_dotenv() -> None:
    """Load a ``.env`` file once per process."""
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    from dotenv import load_dotenv

    load_dotenv()
    _DOTENV_LOADED = True


def _coerce_bool(key: str, value: str) -> bool:
    v = value.strip().lower()
    if v in _TRUE_STRINGS:
        return True
    if v in _FALSE_STRINGS:
        return False
    raise ConfigurationError(
        f"{key} must be a boolean, got {value!r}",
        hint="Use one of 1/0, true/false, yes/no, on/off.",
    )


def load_env() -> dict[str, Any]:
    """Read ``OUTCOMES_*`` variables that name a known settings field."""
    config: dict[str, Any] = {}
    for key, value in os.environ.items():
        if not key.startswith(ENV_PREFIX):
            continue
        field_name = key[len(ENV_PREFIX) :].lower()
        # OUTCOMES_TELEMETRY is an alias for OUTCOMES_TELEMETRY_ENABLED
        if field_name == "telemetry":
            field_name = "telemetry_enabled"
        info = Settings.model_fields.get(field_name)
        if info is None:
            continue
        config[field_name] = (
            _coerce_bool(key, value) if info.annotation is bool else value
        )
    return config


def resolve_config(overrides: Mapping[str, Any] | None = None) -> FrozenConfig:
    """Resolve defaults, environment and overrides into a ``FrozenConfig``.

    Raises:
        ConfigurationError: If the merged values fail schema validation.
    """
    _try_load_dotenv()
    merged = {**load_env(), **(overrides or {})}
    try:
        settings = Settings.model_validate(merged)
    except ValidationError as e:
        err = e.errors()[0]
        loc = ".".join(str(p) for p in err.get("loc", ()))
        raise ConfigurationError(
            f"Configuration validation failed: {loc}: {err.get('msg')}",
            hint=f"Known fields: {', '.join(sorted(Settings.model_fields))}",
        ) from e
    return FrozenConfig(**settings.model_dump())


@cache
def _cached_config() -> FrozenConfig:
    return resolve_config()


def get_config() -> FrozenConfig:
    """Return the ambient config if one is active, else the cached resolution."""
    ambient = _AMBIENT.get()
    if ambient is not None:
        return ambient
    return _cached_config()


def reset_config_cache() -> None:
    """Forget the cached resolution so the environment is read again."""
    _cached_config.cache_clear()


@contextmanager
def config_scope(
    cfg_or_overrides: Mapping[str, Any] | FrozenConfig | None = None,
    **overrides: Any,
) -> Generator[FrozenConfig]:
    """Run a block with a specific configuration without touching global state.

    Example:
        with config_scope(strict=True):
            Outcome.failure(None)  # raises InvalidArgumentError
    """
    if isinstance(cfg_or_overrides, FrozenConfig):
        cfg = cfg_or_overrides
    else:
        cfg = resolve_config({**(cfg_or_overrides or {}), **overrides})
    token = _AMBIENT.set(cfg)
    try:
        yield cfg
    finally:
        _AMBIENT.reset(token)


__all__ = [
    "FrozenConfig",
    "Settings",
    "config_scope",
    "get_config",
    "load_env",
    "reset_config_cache",
    "resolve_config",
]
