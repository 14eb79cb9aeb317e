"""Classification of directory walk failures."""

import errno
from enum import Enum


class FailureKind(str, Enum):
    PERMISSION_DENIED = "permission_denied"
    NOT_FOUND = "not_found"
    NOT_A_DIRECTORY = "not_a_directory"
    LOOP = "loop"
    IO_ERROR = "io_error"
    OTHER = "other"


def classify_error(error: BaseException) -> FailureKind:
    if isinstance(error, PermissionError):
        return FailureKind.PERMISSION_DENIED
    elif isinstance(error, FileNotFoundError):
        return FailureKind.NOT_FOUND
    elif isinstance(error, NotADirectoryError):
        return FailureKind.NOT_A_DIRECTORY
    elif isinstance(error, OSError) and error.errno == errno.ELOOP:
        return FailureKind.LOOP
    elif isinstance(error, OSError):
        return FailureKind.IO_ERROR
    else:
        return FailureKind.OTHER


class DiagnosticsSummary:
    def __init__(self):
        self.failures: dict[FailureKind, int] = {kind: 0 for kind in FailureKind}

    def record(self, kind: FailureKind) -> None:
        self.failures[kind] += 1

    @property
    def total(self) -> int:
        return sum(self.failures.values())

    def get_failure_stats(self) -> dict[FailureKind, int]:
        return dict(self.failures)

    def top_failures(self, n: int = 5) -> list[tuple[str, int]]:
        sorted_failures = sorted(
            ((kind, count) for kind, count in self.failures.items() if count),
            key=lambda x: x[1],
            reverse=True
        )
        return [(kind.value, count) for kind, count in sorted_failures[:n]]
