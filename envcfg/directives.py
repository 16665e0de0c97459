"""Line tokenizer and directive model for ecfg files.

Responsibilities:
- Trim and classify raw lines (blank, comment, directive).
- Split directive lines into at most three whitespace-separated fields.

Key types:
- `Flag`, `Assignment`, `EnvWithDefault`: parsed directive variants.
- `LineTokenizer`: turns raw lines into directives using instance-owned settings.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import re
from typing import Iterable, Iterator, Union


MAX_FIELDS = 3
_LINE_TERMINATORS = "\r\n"
_HORIZONTAL_WHITESPACE = " \t"


@dataclass(frozen=True, slots=True)
class Flag:
    """A key-only directive, implicitly true.

    Attributes:
        key: Setting name.
        line_number: 1-based source line.
        line: Trimmed source line.
    """

    key: str
    line_number: int
    line: str


@dataclass(frozen=True, slots=True)
class Assignment:
    """A `KEY VALUE` directive where the value may be an environment reference."""

    key: str
    value: str
    line_number: int
    line: str


@dataclass(frozen=True, slots=True)
class EnvWithDefault:
    """A `KEY ENV:NAME DEFAULT` directive.

    Attributes:
        key: Setting name.
        env_ref: Second field; must be an environment reference to be legal.
        default: Remainder of the line, kept verbatim.
        line_number: 1-based source line.
        line: Trimmed source line.
    """

    key: str
    env_ref: str
    default: str
    line_number: int
    line: str


Directive = Union[Flag, Assignment, EnvWithDefault]


def directive_kind(directive: Directive) -> str:
    """Return a short stable name for a directive variant, used in logs."""

    if isinstance(directive, Flag):
        return "flag"
    if isinstance(directive, Assignment):
        return "assignment"
    return "env_default"


@dataclass(frozen=True, slots=True)
class LineTokenizer:
    """Classify raw ecfg lines and split directive lines into fields."""

    comment_prefix: str = "#"
    split_pattern: re.Pattern[str] = field(
        default_factory=lambda: re.compile(r"\s+", re.ASCII)
    )

    def trim(self, raw_line: str) -> str:
        """Drop line terminators and surrounding spaces and tabs."""

        return raw_line.rstrip(_LINE_TERMINATORS).strip(_HORIZONTAL_WHITESPACE)

    def is_skipped(self, line: str) -> bool:
        """Whether a trimmed line is blank or a comment."""

        return not line or line.startswith(self.comment_prefix)

    def split(self, line: str) -> list[str]:
        """Split a trimmed line into at most `MAX_FIELDS` fields."""

        return self.split_pattern.split(line, maxsplit=MAX_FIELDS - 1)

    def parse_line(self, raw_line: str, line_number: int) -> Directive | None:
        """Parse one raw line, returning `None` for blank and comment lines."""

        line = self.trim(raw_line)
        if self.is_skipped(line):
            return None

        fields = self.split(line)
        if len(fields) == 1:
            return Flag(key=fields[0], line_number=line_number, line=line)
        if len(fields) == 2:
            return Assignment(
                key=fields[0],
                value=fields[1],
                line_number=line_number,
                line=line,
            )
        return EnvWithDefault(
            key=fields[0],
            env_ref=fields[1],
            default=fields[2],
            line_number=line_number,
            line=line,
        )

    def iter_directives(self, lines: Iterable[str]) -> Iterator[Directive]:
        """Yield directives from raw lines in order, skipping blanks and comments."""

        for line_number, raw_line in enumerate(lines, start=1):
            directive = self.parse_line(raw_line, line_number)
            if directive is not None:
                yield directive
