"""Identifier casing: detection, normalization, and conversion.

Two tiers decide how generated column names are cased:

1. An explicit case from configuration always wins.
2. Only when no conversion is configured, the case is guessed from the
   spelling of a sample field (``detect_case``). The guess is lazy on
   purpose: ``notlowercamelcase`` counts as lower camel.

Usage:
    >>> convert_case("has_no_id_id", Case.LOWER_CAMEL)
    'hasNoIdId'
    >>> normalize_case("createdAt") == normalize_case("created_at")
    True
"""

import re
from enum import Enum

from gql_spansql.schema.models import FieldDef

_SPANNER_IDENT_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9_]+$")
_LOWER_CAMEL_RE = re.compile(r"^[a-z][a-zA-Z0-9]+$")
_UPPER_CAMEL_RE = re.compile(r"^[A-Z][a-zA-Z0-9]+$")

# Acronym runs, capitalized words, lowercase runs, digit runs.
# Anything else (underscores, dashes, spaces) separates words.
_WORD_RE = re.compile(r"[A-Z]+(?![a-z])|[A-Z]?[a-z]+|\d+")


class Case(Enum):
    """Identifier case styles."""

    SNAKE = "snake"
    LOWER_CAMEL = "lowercamel"
    UPPER_CAMEL = "uppercamel"
    UNKNOWN = "unknown"
    NO_CONVERT = ""


def parse_case(name: str) -> Case:
    """Map a configuration value to a Case; unrecognized values are UNKNOWN."""
    for case in (Case.SNAKE, Case.LOWER_CAMEL, Case.UPPER_CAMEL, Case.NO_CONVERT):
        if name == case.value:
            return case
    return Case.UNKNOWN


def detect_case(name: str) -> Case:
    """Guess the case style of an identifier.

    Examples:
        >>> detect_case("snake_case")
        <Case.SNAKE: 'snake'>
        >>> detect_case("kebab-case")
        <Case.UNKNOWN: 'unknown'>
    """
    if not _SPANNER_IDENT_RE.match(name):
        return Case.UNKNOWN
    if "_" in name:
        return Case.SNAKE
    if _LOWER_CAMEL_RE.match(name):
        return Case.LOWER_CAMEL
    if _UPPER_CAMEL_RE.match(name):
        return Case.UPPER_CAMEL
    return Case.UNKNOWN


def detect_field_case(field: FieldDef) -> Case:
    return detect_case(field.name)


def resolve_column_case(configured: Case, sample: FieldDef | None) -> Case:
    """Return the configured case, or a guess from *sample* when none is set."""
    if configured is not Case.NO_CONVERT:
        return configured
    if sample is None:
        return Case.UNKNOWN
    return detect_field_case(sample)


def split_words(name: str) -> list[str]:
    return _WORD_RE.findall(name)


def to_snake(name: str) -> str:
    return "_".join(word.lower() for word in split_words(name))


def to_upper_camel(name: str) -> str:
    return "".join(word[0].upper() + word[1:] for word in split_words(name))


def to_lower_camel(name: str) -> str:
    words = split_words(name)
    if not words:
        return ""
    head, *rest = words
    return head.lower() + "".join(word[0].upper() + word[1:] for word in rest)


def normalize_case(name: str) -> str:
    """Canonical form used for case-insensitive identifier comparison."""
    return to_snake(name)


def convert_case(name: str, case: Case) -> str:
    """Rewrite *name* in the given case. NO_CONVERT and UNKNOWN are identity."""
    if case is Case.SNAKE:
        return to_snake(name)
    if case is Case.LOWER_CAMEL:
        return to_lower_camel(name)
    if case is Case.UPPER_CAMEL:
        return to_upper_camel(name)
    return name
