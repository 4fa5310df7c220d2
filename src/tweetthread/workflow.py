from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .cleaner import clean
from .config import SettingsStore
from .constants import COMMAND_ID, COMMAND_NAME, EMPTY_NOTICE, SUCCESS_NOTICE
from .errors import ErrorCode, TweetThreadError
from .host import Host
from .segmenter import segment
from .thread_writer import ThreadWriter


@dataclass
class ThreadResult:
    path: str | None
    max_length: int
    chunks: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        return {
            "path": self.path,
            "max_length": self.max_length,
            "chunk_count": len(self.chunks),
            "chunk_lengths": [len(chunk) for chunk in self.chunks],
        }


def create_thread(host: Host, max_length: int, logger: logging.Logger) -> ThreadResult:
    document = host.read_active_document()
    if document is None:
        raise TweetThreadError(ErrorCode.SOURCE_NOT_FOUND, "no active note to convert")

    chunks = segment(clean(document.content()), max_length)
    logger.debug(
        f"segmented {document.name or 'note'} into {len(chunks)} chunks",
        extra={"event": "segmented", "chunk_count": len(chunks)},
    )

    if not chunks:
        host.notify_user(EMPTY_NOTICE)
        return ThreadResult(path=None, max_length=max_length)

    path = ThreadWriter(host, logger).write(chunks, document.name)
    host.notify_user(SUCCESS_NOTICE)
    return ThreadResult(path=path, max_length=max_length, chunks=chunks)


def register_commands(
    host: Host,
    settings_store: SettingsStore,
    logger: logging.Logger,
    max_length: int | None = None,
) -> list[ThreadResult]:
    """Register the convert command on ``host``.

    ``max_length`` overrides the stored setting when given. Returns the list
    that collects a :class:`ThreadResult` per run.
    """
    results: list[ThreadResult] = []

    def convert(checking: bool) -> bool:
        if host.read_active_document() is None:
            return False
        if checking:
            return True
        limit = max_length if max_length is not None else settings_store.load().max_tweet_length
        results.append(create_thread(host, limit, logger))
        return True

    host.register_command(COMMAND_ID, COMMAND_NAME, convert)
    return results
