"""Option value helpers shared by the YAML, environment, and CLI config sources."""

from __future__ import annotations

import re
from typing import Mapping


BOOLEAN_TOKENS: Mapping[str, bool] = {
    "1": True,
    "true": True,
    "yes": True,
    "on": True,
    "0": False,
    "false": False,
    "no": False,
    "off": False,
}
_ACCEPTED_BOOLEANS = ", ".join(f"`{token}`" for token in BOOLEAN_TOKENS)
_WHITESPACE_RE = re.compile(r"\s")


def clean_option(value: object) -> str | None:
    """Strip an option value; missing and blank values both mean "not provided"."""

    if value is None:
        return None
    return str(value).strip() or None


def read_boolean_option(value: object) -> bool | None:
    """Map a YAML bool or a textual token to a boolean, `None` if unrecognized."""

    if isinstance(value, bool):
        return value
    token = clean_option(value)
    if token is None:
        return None
    return BOOLEAN_TOKENS.get(token.lower())


def require_boolean_option(value: object, field_name: str, source: str) -> bool:
    """Parse a boolean option or raise a `ValueError` naming where it came from.

    Args:
        value: Raw option value.
        field_name: Resolver config field, e.g. `empty_as_unset`.
        source: Human-readable origin, e.g. `` `ENVCFG_EMPTY_AS_UNSET` ``.
    """

    parsed = read_boolean_option(value)
    if parsed is not None:
        return parsed

    raise ValueError(
        f"`{field_name}` must be a boolean, got `{value}` from {source} "
        f"(accepted: {_ACCEPTED_BOOLEANS})."
    )


def contains_whitespace(value: str) -> bool:
    return _WHITESPACE_RE.search(value) is not None
