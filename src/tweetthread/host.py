"""Capabilities the thread workflow needs from its host application."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Protocol, TextIO

from .errors import ErrorCode, TweetThreadError

CommandCallback = Callable[[bool], bool]


@dataclass(frozen=True)
class ActiveDocument:
    name: str | None
    text: str
    selection: str = ""

    def content(self) -> str:
        return self.selection or self.text


class Host(Protocol):
    def register_command(self, command_id: str, name: str, callback: CommandCallback) -> None: ...

    def notify_user(self, message: str) -> None: ...

    def read_active_document(self) -> ActiveDocument | None: ...

    def write_document(self, path: str, content: str) -> None: ...

    def exists(self, path: str) -> bool: ...

    def create_folder(self, path: str) -> None: ...

    def open_document(self, path: str) -> None: ...


@dataclass
class RegisteredCommand:
    command_id: str
    name: str
    callback: CommandCallback


class FileSystemHost:
    """Host backed by a directory of markdown notes.

    Paths passed to the document methods are relative to ``vault_root``.
    The active document is ``source_path`` (if any) with an optional
    ``selection`` standing in for the editor selection.
    """

    def __init__(
        self,
        vault_root: Path,
        *,
        source_path: Path | None = None,
        selection: str = "",
        logger: logging.Logger | None = None,
        stream: TextIO | None = None,
    ):
        self.vault_root = vault_root
        self.source_path = source_path
        self.selection = selection
        self.logger = logger or logging.getLogger("tweetthread.host")
        self.stream = stream
        self.commands: dict[str, RegisteredCommand] = {}
        self.opened: list[str] = []

    def _resolve(self, path: str) -> Path:
        return self.vault_root / path

    def register_command(self, command_id: str, name: str, callback: CommandCallback) -> None:
        self.commands[command_id] = RegisteredCommand(command_id, name, callback)

    def run_command(self, command_id: str) -> bool:
        command = self.commands.get(command_id)
        if command is None:
            raise TweetThreadError(ErrorCode.INVALID_INPUT, f"unknown command: {command_id}")
        if not command.callback(True):
            return False
        command.callback(False)
        return True

    def notify_user(self, message: str) -> None:
        self.logger.info(message, extra={"event": "notice"})
        print(message, file=self.stream or sys.stderr)

    def read_active_document(self) -> ActiveDocument | None:
        if self.source_path is None:
            return None
        if not self.source_path.is_file():
            return None

        try:
            text = self.source_path.read_text(encoding="utf-8")
        except OSError as exc:
            raise TweetThreadError(
                ErrorCode.SOURCE_NOT_FOUND,
                f"failed to read note: {self.source_path}",
                cause=exc,
            ) from exc
        return ActiveDocument(name=self.source_path.stem, text=text, selection=self.selection)

    def exists(self, path: str) -> bool:
        return self._resolve(path).exists()

    def create_folder(self, path: str) -> None:
        # raises FileExistsError like the vault API does
        self._resolve(path).mkdir(parents=True)

    def write_document(self, path: str, content: str) -> None:
        target = self._resolve(path)
        try:
            with target.open("x", encoding="utf-8") as fp:
                fp.write(content)
        except FileExistsError as exc:
            raise TweetThreadError(
                ErrorCode.RESOURCE_CONFLICT,
                f"note already exists: {path}",
                cause=exc,
            ) from exc
        except OSError as exc:
            raise TweetThreadError(
                ErrorCode.WRITE_FAIL,
                f"failed to write note: {path}",
                cause=exc,
            ) from exc

    def open_document(self, path: str) -> None:
        self.opened.append(path)
        self.logger.debug(f"opened {path}", extra={"event": "note_opened", "path": path})
