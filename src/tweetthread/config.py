from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .constants import (
    DEFAULT_MAX_TWEET_LENGTH,
    LOG_FILE,
    LOGS_DIRNAME,
    MAX_TWEET_LENGTH_KEY,
    SETTINGS_FILE,
    STATE_DIRNAME,
    THREADS_DIRNAME,
)
from .errors import ErrorCode, TweetThreadError

_logger = logging.getLogger("tweetthread.config")


@dataclass(frozen=True)
class RuntimePaths:
    vault_root: Path
    threads_dir: Path
    state_dir: Path
    settings_file: Path
    logs_dir: Path

    @property
    def log_file(self) -> Path:
        return self.logs_dir / LOG_FILE

    def ensure(self) -> None:
        self.vault_root.mkdir(parents=True, exist_ok=True)
        self.state_dir.mkdir(parents=True, exist_ok=True)
        self.logs_dir.mkdir(parents=True, exist_ok=True)


def resolve_runtime_paths(vault_root: str | Path | None = None) -> RuntimePaths:
    root = Path(vault_root) if vault_root is not None else Path.cwd()
    root = root.expanduser().resolve()

    state_dir = root / STATE_DIRNAME
    return RuntimePaths(
        vault_root=root,
        threads_dir=root / THREADS_DIRNAME,
        state_dir=state_dir,
        settings_file=state_dir / SETTINGS_FILE,
        logs_dir=state_dir / LOGS_DIRNAME,
    )


@dataclass(frozen=True)
class Settings:
    max_tweet_length: int = DEFAULT_MAX_TWEET_LENGTH

    def to_dict(self) -> dict[str, Any]:
        return {MAX_TWEET_LENGTH_KEY: self.max_tweet_length}


DEFAULT_SETTINGS = Settings()


def _parse_positive_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    if isinstance(value, str):
        try:
            parsed = int(value.strip())
        except ValueError:
            return None
        return parsed if parsed > 0 else None
    return None


def resolve_max_tweet_length(value: Any, logger: logging.Logger | None = None) -> int:
    """Return ``value`` as a positive int, or the default when it is not one."""
    parsed = _parse_positive_int(value)
    if parsed is not None:
        return parsed

    (logger or _logger).warning(
        f"invalid {MAX_TWEET_LENGTH_KEY} {value!r}, using {DEFAULT_MAX_TWEET_LENGTH}",
        extra={"event": "invalid_configuration", "error_code": ErrorCode.INVALID_CONFIGURATION.value},
    )
    return DEFAULT_MAX_TWEET_LENGTH


class SettingsStore:
    def __init__(self, path: Path, logger: logging.Logger | None = None):
        self.path = path
        self.logger = logger or _logger

    def load(self) -> Settings:
        if not self.path.exists():
            return DEFAULT_SETTINGS

        try:
            with self.path.open("r", encoding="utf-8") as fp:
                data = json.load(fp)
        except (OSError, ValueError) as exc:
            self.logger.warning(
                f"settings file is unreadable, using defaults: {self.path}",
                extra={"event": "settings_unreadable", "error_code": ErrorCode.INVALID_CONFIGURATION.value},
            )
            self.logger.debug("settings read failure", exc_info=exc)
            return DEFAULT_SETTINGS

        if not isinstance(data, dict):
            self.logger.warning(
                f"settings file is not an object, using defaults: {self.path}",
                extra={"event": "settings_unreadable", "error_code": ErrorCode.INVALID_CONFIGURATION.value},
            )
            return DEFAULT_SETTINGS

        merged = {**DEFAULT_SETTINGS.to_dict(), **data}
        return Settings(
            max_tweet_length=resolve_max_tweet_length(merged[MAX_TWEET_LENGTH_KEY], self.logger),
        )

    def save(self, settings: Settings) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("w", encoding="utf-8") as fp:
                json.dump(settings.to_dict(), fp, ensure_ascii=True, indent=2)
        except OSError as exc:
            raise TweetThreadError(
                ErrorCode.WRITE_FAIL,
                f"failed to write settings: {self.path}",
                cause=exc,
            ) from exc

    def update_max_tweet_length(self, raw: Any) -> Settings:
        settings = Settings(max_tweet_length=resolve_max_tweet_length(raw, self.logger))
        self.save(settings)
        return settings

