"""Greedy word packing of cleaned text into tweet-sized chunks.

Words are packed left to right. When the next word would overflow the limit
the chunk is cut after the most recent word ending in ``.``, ``!`` or ``?``
(if the chunk has one) and the words after it carry over into the next
chunk. Words longer than the limit are sliced into fixed-width parts.

The packing is written as a fold: :func:`step` takes one word and returns a
new :class:`SegmentState`, so every intermediate state can be inspected.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from functools import reduce

from .text_utils import ends_sentence, join_words, split_long_word, split_words


@dataclass(frozen=True)
class SegmentState:
    buffer: tuple[str, ...] = ()
    sentence_break: int | None = None
    output: tuple[str, ...] = ()


def _fits(buffer: tuple[str, ...], word: str, max_length: int) -> bool:
    return len(join_words(buffer + (word,))) <= max_length


def _push(buffer: tuple[str, ...], sentence_break: int | None, word: str):
    buffer = buffer + (word,)
    if ends_sentence(word):
        sentence_break = len(buffer) - 1
    return buffer, sentence_break


def _emit(output: list[str], words: tuple[str, ...]) -> None:
    output.append(join_words(words).strip())


def step(state: SegmentState, word: str, max_length: int) -> SegmentState:
    if _fits(state.buffer, word, max_length):
        buffer, sentence_break = _push(state.buffer, state.sentence_break, word)
        return replace(state, buffer=buffer, sentence_break=sentence_break)

    output = list(state.output)
    buffer = state.buffer
    if state.sentence_break is not None:
        cut = state.sentence_break + 1
        _emit(output, buffer[:cut])
        buffer = buffer[cut:]
    elif buffer:
        _emit(output, buffer)
        buffer = ()
    sentence_break: int | None = None

    if len(word) > max_length:
        for index, part in enumerate(split_long_word(word, max_length)):
            # only the first part may join the carried-over words
            if index == 0 and buffer and _fits(buffer, part, max_length):
                buffer, sentence_break = _push(buffer, sentence_break, part)
                continue
            if buffer:
                _emit(output, buffer)
                buffer = ()
                sentence_break = None
            output.append(part)
    else:
        # the carried-over words hold no sentence break of their own
        if buffer and not _fits(buffer, word, max_length):
            _emit(output, buffer)
            buffer = ()
        buffer, sentence_break = _push(buffer, sentence_break, word)

    return SegmentState(buffer=buffer, sentence_break=sentence_break, output=tuple(output))


def finish(state: SegmentState) -> list[str]:
    output = list(state.output)
    if state.buffer:
        _emit(output, state.buffer)
    return output


def segment(text: str, max_length: int) -> list[str]:
    """Split ``text`` into chunks of at most ``max_length`` characters.

    ``max_length`` must be a positive integer; callers validate it (see
    :func:`tweetthread.config.resolve_max_tweet_length`). Whitespace between
    words is collapsed to a single space. Empty or whitespace-only text
    yields an empty list.
    """
    state = reduce(
        lambda current, word: step(current, word, max_length),
        split_words(text),
        SegmentState(),
    )
    return finish(state)
