# fintrack/search/pattern_compiler.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging
import re
from typing import Optional, Union

logger = logging.getLogger(__name__)

# "g" et "u" sont acceptés mais sans effet : finditer est déjà global, str est déjà unicode
_FLAG_BITS = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "g": 0,
    "u": 0,
}

EMPTY_PATTERN_ERROR = "Pattern cannot be empty"


class InvalidReason(str, Enum):
    EMPTY = "EMPTY"
    MALFORMED = "MALFORMED"


@dataclass(frozen=True)
class Matcher:
    pattern: re.Pattern

    @property
    def source(self) -> str:
        return self.pattern.pattern

    def test(self, text: str) -> bool:
        return self.pattern.search(text) is not None

    def find_all(self, text: str) -> list[tuple[int, int]]:
        """Spans (start, end) de gauche à droite, sans chevauchement."""
        return [m.span() for m in self.pattern.finditer(text)]


@dataclass(frozen=True)
class Compiled:
    matcher: Matcher
    flags: str

    def test(self, text: str) -> bool:
        return self.matcher.test(text)

    def find_all(self, text: str) -> list[tuple[int, int]]:
        return self.matcher.find_all(text)


@dataclass(frozen=True)
class Invalid:
    reason: InvalidReason
    message: Optional[str] = None


CompiledMatcher = Union[Compiled, Invalid]


@dataclass(frozen=True)
class PatternCheck:
    valid: bool
    error: Optional[str] = None


def parse_flags(flags: str) -> int:
    if not isinstance(flags, str):
        raise ValueError("flags must be a string")

    bits = 0
    seen: set[str] = set()
    for ch in flags:
        if ch not in _FLAG_BITS:
            raise ValueError(f"Invalid flag {ch!r}")
        if ch in seen:
            raise ValueError(f"Duplicate flag {ch!r}")
        seen.add(ch)
        bits |= _FLAG_BITS[ch]
    return bits


def unwrap_literal(text: str) -> str:
    """'/abc/' -> 'abc'. '/abc' ou '/' restent tels quels."""
    if len(text) >= 2 and text.startswith("/") and text.endswith("/"):
        return text[1:-1]
    return text


def compile_pattern(text: Optional[str], flags: str = "i") -> CompiledMatcher:
    """
    Compile une saisie utilisateur en matcher, sans jamais lever d'exception.

    - vide (après strip) -> Invalid(EMPTY), ce n'est pas une erreur
    - forme littérale /.../ -> on retire un seul slash de chaque côté
    - erreur du moteur regex -> Invalid(MALFORMED) + warning dans les logs
    """
    if not isinstance(text, str):
        return Invalid(InvalidReason.EMPTY)

    raw = text.strip()
    if raw == "":
        return Invalid(InvalidReason.EMPTY)

    body = unwrap_literal(raw)
    if body == "":
        return Invalid(InvalidReason.EMPTY)

    try:
        bits = parse_flags(flags)
        compiled = re.compile(body, bits)
    except (re.error, ValueError, OverflowError, RecursionError) as e:
        logger.warning("Invalid regex pattern %r: %s", body, e)
        return Invalid(InvalidReason.MALFORMED, str(e))

    return Compiled(matcher=Matcher(compiled), flags=flags)


def is_valid_pattern(pattern: Optional[str]) -> PatternCheck:
    if not isinstance(pattern, str) or pattern.strip() == "":
        return PatternCheck(valid=False, error=EMPTY_PATTERN_ERROR)

    result = compile_pattern(pattern)
    if isinstance(result, Compiled):
        return PatternCheck(valid=True)

    if result.reason == InvalidReason.EMPTY:
        # ex: "//" -> corps vide après déballage
        return PatternCheck(valid=False, error=EMPTY_PATTERN_ERROR)
    return PatternCheck(valid=False, error=result.message)
