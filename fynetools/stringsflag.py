"""A command line flag value holding a list of possibly quoted fields."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

_SPACE = re.compile(r"[ \t\n\r]*")
_FIELD = re.compile(r"\"([^\"]*)\"|'([^']*)'|([^ \t\n\r\"'][^ \t\n\r]*)")


def split_quoted_fields(s: str) -> list[str]:
    """Split ``s`` on whitespace, allowing '' or "" around whole fields.

    Quotes inside a field do not count and nothing is unescaped. Raises
    ValueError for an unterminated quoted field.
    """
    fields = []
    pos = 0
    while True:
        pos = _SPACE.match(s, pos).end()
        if pos == len(s):
            return fields
        match = _FIELD.match(s, pos)
        if match is None:
            raise ValueError(f"unterminated {s[pos]} string")
        fields.append(next(group for group in match.groups() if group is not None))
        pos = match.end()


@dataclass
class StringsFlag:
    """Flag value that parses its argument into quoted fields."""

    values: list[str] = field(default_factory=list)

    def set(self, s: str) -> None:
        """Replace the values with the fields of ``s``; on error they are emptied."""
        try:
            self.values = split_quoted_fields(s)
        except ValueError:
            self.values = []
            raise

    def __iter__(self):
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)

    def __str__(self) -> str:
        return "<stringsFlag>"