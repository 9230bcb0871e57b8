"""
Token naming: turn slash-separated variable names into token paths.
"""

from __future__ import annotations

import re

from .ir.settings import NamingConvention

_LOWER_UPPER_RE = re.compile(r"([a-z0-9])([A-Z])")
_ACRONYM_RE = re.compile(r"([A-Z]+)([A-Z][a-z])")
_SEPARATOR_RUN_RE = re.compile(r"[\s_]+")
_HYPHEN_RUN_RE = re.compile(r"-+")
_SIGILS_RE = re.compile(r"[{}$]")
_WHITESPACE_RE = re.compile(r"\s+")

FLAT_JOINERS: dict[str, str] = {
    NamingConvention.KEBAB: "-",
    NamingConvention.SNAKE: "_",
    NamingConvention.ORIGINAL: "-",
    NamingConvention.CAMEL: "-",
}


def to_kebab(text: str) -> str:
    """Normalize to kebab-case.

    >>> to_kebab("BorderColor")
    'border-color'
    >>> to_kebab("HTMLParser")
    'html-parser'
    >>> to_kebab("font_size large")
    'font-size-large'
    """
    text = _LOWER_UPPER_RE.sub(r"\1-\2", text)
    text = _ACRONYM_RE.sub(r"\1-\2", text)
    text = _SIGILS_RE.sub("", text.lower()).replace(".", "-")
    text = _SEPARATOR_RUN_RE.sub("-", text)
    text = _HYPHEN_RUN_RE.sub("-", text)
    return text.strip("-")


def to_snake(text: str) -> str:
    return to_kebab(text).replace("-", "_")


def to_camel(text: str) -> str:
    """camelCase from the kebab form: "border-color" -> "borderColor"."""
    head, *rest = to_kebab(text).split("-")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def to_original(text: str) -> str:
    """Keep the author's casing; drop reference sigils, hyphenate dots and whitespace."""
    text = _SIGILS_RE.sub("", text).replace(".", "-").strip()
    return _WHITESPACE_RE.sub("-", text)


_CONVERTERS = {
    NamingConvention.KEBAB: to_kebab,
    NamingConvention.CAMEL: to_camel,
    NamingConvention.SNAKE: to_snake,
    NamingConvention.ORIGINAL: to_original,
}


def apply_convention(segment: str, convention: str) -> str:
    """Apply *convention* to a single path segment (unknown conventions act as kebab)."""
    converter = _CONVERTERS.get(convention, to_kebab)
    return converter(segment)


def token_segments(name: str, convention: str) -> list[str]:
    """Split a variable name on "/" and convert each non-empty segment."""
    segments = (apply_convention(part, convention) for part in name.split("/"))
    return [segment for segment in segments if segment]


def flat_key(segments: list[str], convention: str) -> str:
    """Join converted segments into one flat token key."""
    if convention == NamingConvention.CAMEL:
        return to_camel("-".join(segments))
    return FLAT_JOINERS.get(convention, "-").join(segments)


def dotted_path(segments: list[str]) -> str:
    return ".".join(segments)


def extract_component(name: str) -> str | None:
    """First path segment, lowercased, when the name has more than one segment.

    "button/background/default" -> "button"
    """
    parts = name.split("/")
    if len(parts) > 1 and parts[0].strip():
        return parts[0].strip().lower()
    return None
