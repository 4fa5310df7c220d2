from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrorCode(str, Enum):
    INVALID_INPUT = "INVALID_INPUT"
    INVALID_CONFIGURATION = "INVALID_CONFIGURATION"
    SOURCE_NOT_FOUND = "SOURCE_NOT_FOUND"
    RESOURCE_CONFLICT = "RESOURCE_CONFLICT"
    RESOURCE_UNAVAILABLE = "RESOURCE_UNAVAILABLE"
    WRITE_FAIL = "WRITE_FAIL"
    INTERNAL_ERROR = "INTERNAL_ERROR"


EXIT_CODE_BY_ERROR = {
    ErrorCode.INVALID_INPUT: 2,
    ErrorCode.INVALID_CONFIGURATION: 3,
    ErrorCode.SOURCE_NOT_FOUND: 4,
    ErrorCode.RESOURCE_CONFLICT: 5,
    ErrorCode.RESOURCE_UNAVAILABLE: 6,
    ErrorCode.WRITE_FAIL: 7,
    ErrorCode.INTERNAL_ERROR: 99,
}


@dataclass
class TweetThreadError(Exception):
    code: ErrorCode
    message: str
    retryable: bool = False
    cause: Exception | None = None

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"

    def to_dict(self) -> dict[str, str]:
        data = {
            "error_code": self.code.value,
            "message": self.message,
        }
        if self.cause is not None:
            data["cause"] = str(self.cause)
        return data


def exit_code_for(err: TweetThreadError) -> int:
    return EXIT_CODE_BY_ERROR.get(err.code, EXIT_CODE_BY_ERROR[ErrorCode.INTERNAL_ERROR])
