from __future__ import annotations

from .constants import SENTENCE_TERMINATORS


def split_words(text: str) -> list[str]:
    return text.split()


def join_words(words) -> str:
    return " ".join(words)


def ends_sentence(word: str) -> bool:
    return bool(word) and word[-1] in SENTENCE_TERMINATORS


def split_long_word(word: str, max_length: int) -> list[str]:
    """Slice ``word`` left to right into ``max_length``-wide parts.

    The last part may be shorter. No attempt is made to respect syllables,
    hyphens or URLs inside the word.
    """
    return [word[idx : idx + max_length] for idx in range(0, len(word), max_length)]
