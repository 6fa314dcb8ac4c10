"""Configuration for the wrapping engine."""

from __future__ import annotations

import os
from dataclasses import dataclass

from pi.wrap.utils import DEFAULT_TAB_WIDTH

_TRUE_VALUES = ("1", "true", "yes", "on")


@dataclass
class WrapConfig:
    """Wrapping options.

    ``width`` is used by ``wrap_all()`` when no width is given and nothing
    has been wrapped yet.  ``check_invariants`` validates the whole table
    after every pass, which costs a full scan per edit.
    """

    width: int = 80
    tab_width: int = DEFAULT_TAB_WIDTH
    check_invariants: bool = False

    @classmethod
    def from_env(cls) -> WrapConfig:
        """Build a config from ``PI_WRAP_*`` environment variables, defaults for unset ones."""
        config = cls()
        width = os.environ.get("PI_WRAP_WIDTH")
        if width:
            config.width = _parse_int("PI_WRAP_WIDTH", width)
        tab_width = os.environ.get("PI_WRAP_TAB_WIDTH")
        if tab_width:
            config.tab_width = _parse_int("PI_WRAP_TAB_WIDTH", tab_width)
        check = os.environ.get("PI_WRAP_CHECK_INVARIANTS")
        if check:
            config.check_invariants = check.strip().lower() in _TRUE_VALUES
        return config


def _parse_int(name: str, value: str) -> int:
    try:
        parsed = int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}") from None
    if parsed < 0:
        raise ValueError(f"{name} must not be negative, got {parsed}")
    return parsed
