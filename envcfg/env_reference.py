"""Environment reference extraction.

Responsibilities:
- Detect whether a token is an environment reference (`ENV:<name>`).
- Look up the referenced variable without collapsing "unset" into "empty".

Key types:
- `EnvLookup`: three-way result of extracting a possibly prefixed token.
- `EnvLookupState`: tag for `EnvLookup`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import os
from typing import Mapping


DEFAULT_ENV_PREFIX = "ENV:"


class EnvLookupState(Enum):
    """Outcome of extracting a token that may carry the environment prefix."""

    NO_PREFIX = "no_prefix"
    UNSET = "unset"
    SET = "set"


@dataclass(frozen=True, slots=True)
class EnvLookup:
    """Tagged environment lookup result.

    Attributes:
        state: Which of the three outcomes occurred.
        value: Variable value for `SET`; the empty string otherwise.
        name: Referenced variable name, or `None` when no prefix was present.
    """

    state: EnvLookupState
    value: str = ""
    name: str | None = None

    @classmethod
    def no_prefix(cls) -> EnvLookup:
        return cls(state=EnvLookupState.NO_PREFIX)

    @classmethod
    def unset(cls, name: str) -> EnvLookup:
        return cls(state=EnvLookupState.UNSET, name=name)

    @classmethod
    def of(cls, name: str, value: str) -> EnvLookup:
        return cls(state=EnvLookupState.SET, value=value, name=name)

    @property
    def prefix_present(self) -> bool:
        """Whether the token was an environment reference at all."""

        return self.state is not EnvLookupState.NO_PREFIX

    @property
    def is_set(self) -> bool:
        """Whether the referenced variable exists, even if its value is empty."""

        return self.state is EnvLookupState.SET

    def as_pair(self) -> tuple[str, bool]:
        """Return the `(value, prefix_present)` pair form of this result."""

        return self.value, self.prefix_present


def extract_env_if_prefix(
    token: str,
    prefix: str = DEFAULT_ENV_PREFIX,
    environ: Mapping[str, str] | None = None,
) -> EnvLookup:
    """Resolve `token` through the environment when it starts with `prefix`.

    Args:
        token: Raw directive token, e.g. `ENV:DATABASE_URL` or `localhost`.
        prefix: Environment reference prefix.
        environ: Environment mapping to read; defaults to `os.environ`.

    Returns:
        `NO_PREFIX` when the token is shorter than or does not start with the
        prefix, `UNSET` when the named variable is missing, otherwise `SET`
        with the variable's value (which may be the empty string).
    """

    if len(token) < len(prefix) or not token.startswith(prefix):
        return EnvLookup.no_prefix()

    env_map: Mapping[str, str] = os.environ if environ is None else environ
    name = token[len(prefix):]
    value = env_map.get(name)
    if value is None:
        return EnvLookup.unset(name)
    return EnvLookup.of(name, value)
