from __future__ import annotations

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class CleanRule:
    name: str
    pattern: re.Pattern[str]
    replacement: str

    def apply(self, text: str) -> str:
        return self.pattern.sub(self.replacement, text)


# Front matter is only recognised at the very start of the note.
STRIP_FRONT_MATTER = CleanRule("front_matter", re.compile(r"^---[\s\S]+?---\s*"), "")
STRIP_HEADINGS = CleanRule("headings", re.compile(r"^#+\s+", re.MULTILINE), "")
STRIP_BOLD = CleanRule("bold", re.compile(r"(\*\*|__)(.*?)\1"), r"\2")
STRIP_ITALIC = CleanRule("italic", re.compile(r"(\*|_)(.*?)\1"), r"\2")
STRIP_INLINE_CODE = CleanRule("inline_code", re.compile(r"`([^`]+)`"), r"\1")
STRIP_STRIKETHROUGH = CleanRule("strikethrough", re.compile(r"~~(.*?)~~"), r"\1")
UNWRAP_LINKS = CleanRule("links", re.compile(r"\[([^\]]+)\]\([^)]+\)"), r"\1")

# Order matters: bold must run before italic.
CLEAN_RULES: tuple[CleanRule, ...] = (
    STRIP_FRONT_MATTER,
    STRIP_HEADINGS,
    STRIP_BOLD,
    STRIP_ITALIC,
    STRIP_INLINE_CODE,
    STRIP_STRIKETHROUGH,
    UNWRAP_LINKS,
)


def find_rule(name: str) -> CleanRule:
    for rule in CLEAN_RULES:
        if rule.name == name:
            return rule
    raise KeyError(name)


def clean(text: str, rules: tuple[CleanRule, ...] = CLEAN_RULES) -> str:
    """Strip front matter and inline markdown syntax from ``text``."""
    for rule in rules:
        text = rule.apply(text)
    return text
