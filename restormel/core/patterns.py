"""
Restormel Pattern Catalog

Two fixed, ordered rule lists:
- secret patterns: every match is counted
- dangerous patterns: presence only, reported by display name

The secret patterns favour recall over precision. Long hashes, UUIDs and
minified identifiers will trip the 20+ character token heuristic.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from re import Pattern
from typing import Iterable

from restormel.core.errors import PatternError


@dataclass(frozen=True)
class SecretPattern:
    regex: Pattern[str]

    def count(self, content: str) -> int:
        return sum(1 for _ in self.regex.finditer(content))


@dataclass(frozen=True)
class DangerousPattern:
    name: str
    regex: Pattern[str]


# (pattern, flags)
DEFAULT_SECRET_PATTERNS: list[tuple[str, int]] = [
    (r"""(?:api[_-]?key|apikey)\s*[:=]\s*["'`][^"'`]+["'`]""", re.IGNORECASE),
    (r"""(?:password|passwd|pwd)\s*[:=]\s*["'`][^"'`]+["'`]""", re.IGNORECASE),
    (r"""(?:secret|token)\s*[:=]\s*["'`][^"'`]+["'`]""", re.IGNORECASE),
    (r"[a-zA-Z0-9_-]{20,}", 0),
]

# (display name, pattern); word boundaries are ASCII-only, as in JavaScript
DEFAULT_DANGEROUS_PATTERNS: list[tuple[str, str]] = [
    ("eval()", r"(?<![A-Za-z0-9_])eval\s*\("),
    ("dangerouslySetInnerHTML", r"dangerouslySetInnerHTML"),
    ("innerHTML", r"innerHTML\s*="),
    ("document.write", r"document\.write"),
    ("new Function()", r"new Function\s*\("),
]


def _compile(pattern: str, flags: int = 0) -> Pattern[str]:
    try:
        return re.compile(pattern, flags)
    except re.error as exc:
        raise PatternError(pattern, str(exc)) from exc


class PatternCatalog:
    """
    Immutable set of compiled detection rules.

    Built once at startup. Compiled patterns carry no match position, so
    one catalog can be shared by every scan.
    """

    def __init__(
        self,
        secret: Iterable[SecretPattern],
        dangerous: Iterable[DangerousPattern],
    ) -> None:
        self.secret: tuple[SecretPattern, ...] = tuple(secret)
        self.dangerous: tuple[DangerousPattern, ...] = tuple(dangerous)

    @classmethod
    def default(cls) -> "PatternCatalog":
        return cls(
            secret=[SecretPattern(_compile(p, f)) for p, f in DEFAULT_SECRET_PATTERNS],
            dangerous=[
                DangerousPattern(name, _compile(p)) for name, p in DEFAULT_DANGEROUS_PATTERNS
            ],
        )

    def with_extra(
        self,
        secret: Iterable[str] = (),
        dangerous: Iterable[tuple[str, str]] = (),
    ) -> "PatternCatalog":
        """
        Return a new catalog with user patterns appended after these.

        Args:
            secret: Extra secret regexes, matched case-insensitively.
            dangerous: Extra (display name, regex) pairs.

        Raises:
            PatternError: If any regex does not compile.
        """
        extra_secret = [SecretPattern(_compile(p, re.IGNORECASE)) for p in secret]
        extra_dangerous = [DangerousPattern(name, _compile(p)) for name, p in dangerous]

        names = {d.name for d in self.dangerous}
        for pattern in extra_dangerous:
            if pattern.name in names:
                raise PatternError(pattern.regex.pattern, f"duplicate name {pattern.name!r}")
            names.add(pattern.name)

        return PatternCatalog(
            secret=self.secret + tuple(extra_secret),
            dangerous=self.dangerous + tuple(extra_dangerous),
        )
