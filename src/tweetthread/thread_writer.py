from __future__ import annotations

import logging
import re
from datetime import date, datetime, timezone
from pathlib import PurePosixPath

from .constants import NOTE_EXT, THREAD_DIVIDER, THREADS_DIRNAME, UNKNOWN_SOURCE_NAME
from .errors import ErrorCode, TweetThreadError
from .host import Host

_ILLEGAL_FILENAME_CHARS = re.compile(r'[\\/:*?"<>|]')


def sanitize_file_name(name: str) -> str:
    return _ILLEGAL_FILENAME_CHARS.sub("", name)


def format_thread(chunks: list[str]) -> str:
    total = len(chunks)
    sections = [
        f"**Chunk {index} of {total}: {len(chunk)} characters**\n{chunk}"
        for index, chunk in enumerate(chunks, start=1)
    ]
    return THREAD_DIVIDER.join(sections)


def thread_base_name(source_name: str | None, day: date | None = None) -> str:
    day = day or datetime.now(timezone.utc).date()
    name = sanitize_file_name(source_name) if source_name else UNKNOWN_SOURCE_NAME
    return f"Twitter Thread {day.isoformat()} for {name}"


class ThreadWriter:
    def __init__(self, host: Host, logger: logging.Logger, folder: str = THREADS_DIRNAME):
        self.host = host
        self.logger = logger
        self.folder = folder

    def ensure_folder(self) -> None:
        try:
            self.host.create_folder(self.folder)
        except FileExistsError:
            self.logger.debug(
                f"folder already exists: {self.folder}",
                extra={"event": "folder_exists", "error_code": ErrorCode.RESOURCE_UNAVAILABLE.value},
            )

    def next_free_path(self, base_name: str) -> str:
        path = str(PurePosixPath(self.folder) / f"{base_name}{NOTE_EXT}")
        counter = 1
        while self.host.exists(path):
            self.logger.debug(
                f"note exists, trying next name: {path}",
                extra={"event": "name_conflict", "error_code": ErrorCode.RESOURCE_CONFLICT.value},
            )
            path = str(PurePosixPath(self.folder) / f"{base_name} ({counter}){NOTE_EXT}")
            counter += 1
        return path

    def write(self, chunks: list[str], source_name: str | None, day: date | None = None) -> str:
        self.ensure_folder()

        base_name = thread_base_name(source_name, day)
        content = format_thread(chunks)

        path = self.next_free_path(base_name)
        try:
            self.host.write_document(path, content)
        except TweetThreadError as exc:
            if exc.code != ErrorCode.RESOURCE_CONFLICT:
                raise
            # lost a race with another writer; pick the next name once more
            path = self.next_free_path(base_name)
            self.host.write_document(path, content)

        self.logger.info(
            "thread note written",
            extra={"event": "thread_written", "path": path, "chunk_count": len(chunks)},
        )
        self.host.open_document(path)
        return path
