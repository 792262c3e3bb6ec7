"""Checks that probe output contains, or does not contain, a text or pattern."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

__all__ = ["TextChecker", "TextCheckError", "RegexpError", "check_empty"]

_LOOKAROUNDS = ("(?<=", "(?<!", "(?=", "(?!")


class TextCheckError(Exception):
    """The checked text failed a contain / not-contain rule."""


class RegexpError(ValueError):
    """A configured pattern could not be compiled."""


def _reject_unsupported(pattern: str) -> None:
    """Reject the Perl constructs that the pattern dialect does not accept."""
    i = 0
    in_class = False
    while i < len(pattern):
        char = pattern[i]
        if char == "\\":
            nxt = pattern[i + 1 : i + 2]
            if not in_class and nxt in "123456789" and nxt:
                raise RegexpError(f"error parsing regexp: invalid escape sequence: `\\{nxt}`")
            i += 2
            continue
        if in_class:
            if char == "]":
                in_class = False
        elif char == "[":
            in_class = True
            j = i + 1
            if pattern[j : j + 1] == "^":
                j += 1
            if pattern[j : j + 1] == "]":
                j += 1
            i = j
            continue
        elif pattern.startswith("(?", i):
            for construct in _LOOKAROUNDS:
                if pattern.startswith(construct, i):
                    raise RegexpError(
                        f"error parsing regexp: invalid or unsupported Perl syntax: `{construct}`"
                    )
        i += 1


def _compile(pattern: str) -> re.Pattern[str]:
    _reject_unsupported(pattern)
    try:
        return re.compile(pattern, re.ASCII)
    except re.error as exc:
        raise RegexpError(f"error parsing regexp: {exc}") from exc


@dataclass
class TextChecker:
    """Checks output text in plain-text or regular-expression mode."""

    contain: str = ""
    not_contain: str = ""
    regexp: bool = False

    _contain_re: re.Pattern[str] | None = field(default=None, init=False, repr=False, compare=False)
    _not_contain_re: re.Pattern[str] | None = field(
        default=None, init=False, repr=False, compare=False
    )

    def config(self) -> None:
        """Compile the patterns when in regular-expression mode."""
        if not self.regexp:
            return

        if not self.contain:
            self._contain_re = None
        else:
            try:
                self._contain_re = _compile(self.contain)
            except RegexpError:
                self._contain_re = None
                raise

        if not self.not_contain:
            self._not_contain_re = None
        else:
            try:
                self._not_contain_re = _compile(self.not_contain)
            except RegexpError:
                self._not_contain_re = None
                raise

    def check(self, text: str) -> None:
        """Check the text; raise TextCheckError when a rule is broken."""
        if self.regexp:
            self.check_regexp(text)
        else:
            self.check_text(text)

    def check_text(self, output: str) -> None:
        """Plain substring check."""
        if self.contain and self.contain not in output:
            raise TextCheckError(f"the output does not contain [{self.contain}]")
        if self.not_contain and self.not_contain in output:
            raise TextCheckError(f"the output contains [{self.not_contain}]")

    def check_regexp(self, output: str) -> None:
        """Regular-expression check using the compiled patterns."""
        if self.contain and self._contain_re is not None and not self._contain_re.search(output):
            raise TextCheckError(f"the output does not match the pattern [{self.contain}]")
        if (
            self.not_contain
            and self._not_contain_re is not None
            and self._not_contain_re.search(output)
        ):
            raise TextCheckError(f"the output match the pattern [{self.not_contain}]")

    def __str__(self) -> str:
        mode = "RegExp Mode" if self.regexp else "Text Mode"
        return f"{mode} - Contain:[{self.contain}], NotContain:[{self.not_contain}]"


def check_empty(s: str) -> str:
    """Return "empty" for a blank string, otherwise the string itself."""
    if not s.strip():
        return "empty"
    return s