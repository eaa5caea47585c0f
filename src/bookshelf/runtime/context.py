"""Per-context access to the service configuration.

The configuration lives in a ``ContextVar`` so tests and tools can swap it
for the duration of a block without touching module globals.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, replace
from typing import Any

from pydantic import BaseModel

from src.bookshelf.runtime.config.config_data import ConfigData
from src.bookshelf.runtime.config.config_template import load_config
from src.bookshelf.runtime.settings import EnvironmentVariables


@dataclass(frozen=True)
class AppContext:
    """Process-wide state visible to the current execution context."""

    config: ConfigData


_current: ContextVar[AppContext] = ContextVar(
    "bookshelf_context",
    default=AppContext(config=load_config(EnvironmentVariables().config_file)),
)


def get_context() -> AppContext:
    return _current.get()


def set_context(context: AppContext) -> Token[AppContext]:
    """Make ``context`` current; pass the returned token to reset it."""
    return _current.set(context)


def _explicit_fields(model: BaseModel) -> dict[str, Any]:
    """Collect the fields of ``model`` that were given explicitly.

    A nested model counts as given when any of its own fields were, so
    ``ConfigData(store=StoreConfig(seed=False))`` yields only
    ``{"store": {"seed": False}}``.
    """
    given: dict[str, Any] = {}
    for name in type(model).model_fields:
        value = getattr(model, name)
        if isinstance(value, BaseModel):
            nested = _explicit_fields(value)
            if nested:
                given[name] = nested
                continue
        if name in model.model_fields_set:
            given[name] = value.model_dump() if isinstance(value, BaseModel) else value
    return given


def _deep_merge(base: dict[str, Any], changes: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in changes.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = _deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def overlay_config(base: ConfigData, override: ConfigData) -> ConfigData:
    """Return ``base`` with the explicitly given fields of ``override`` applied."""
    merged = _deep_merge(base.model_dump(), _explicit_fields(override))
    return ConfigData.model_validate(merged)


@contextmanager
def with_context(config_override: ConfigData | None = None) -> Iterator[None]:
    """Run a block with part of the configuration overridden.

    Fields not given on ``config_override`` keep their current values. Nested
    uses stack, and the previous context comes back when the block exits.

    Example:
        with with_context(ConfigData(store=StoreConfig(seed=False))):
            app = create_app()  # starts with an empty store
    """
    if config_override is None:
        yield
        return
    if not isinstance(config_override, ConfigData):
        raise ValueError(
            f"config_override must be ConfigData or None, got {type(config_override)}"
        )

    context = get_context()
    token = set_context(
        replace(context, config=overlay_config(context.config, config_override))
    )
    try:
        yield
    finally:
        _current.reset(token)


def set_config(config: ConfigData) -> None:
    """Replace the whole configuration of the current context."""
    set_context(replace(get_context(), config=config))


def get_config() -> ConfigData:
    return get_context().config
