"""Reads component source text with a size guard. Never raises."""

import logging
from dataclasses import dataclass
from pathlib import Path

from .config import ComplensError
from .models import ErrorKind

logger = logging.getLogger(__name__)


class FileTooLargeError(ComplensError):
    """Raised when a file exceeds the configured size limit."""

    def __init__(self, file_path: Path, size: int, limit: int):
        self.file_path = file_path
        self.size = size
        self.limit = limit
        super().__init__(
            f"File {file_path} is too large: {size:,} bytes exceeds limit of {limit:,} bytes"
        )


@dataclass
class LoadResult:
    """Text of one source unit, or the reason it could not be loaded."""

    path: Path
    text: str | None = None
    size: int = 0
    error: str | None = None
    warning: str | None = None

    @property
    def ok(self) -> bool:
        return self.text is not None


def _safe_decode(data: bytes) -> str:
    """Decode UTF-8, replacing invalid bytes instead of failing."""
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return data.decode("utf-8", errors="replace")


def _check_size(file_path: Path, limit: int) -> int:
    size = file_path.stat().st_size
    if size > limit:
        raise FileTooLargeError(file_path, size, limit)
    return size


def load_source(
    file_path: str | Path, max_size: int, log: logging.Logger | None = None
) -> LoadResult:
    """Read one file, checking its size before any content is read.

    Args:
        file_path: File to read.
        max_size: Largest accepted size in bytes.
        log: Logger to report through; defaults to this module's logger.

    Returns:
        LoadResult with ``text`` set on success. On failure ``text`` is None
        and ``error`` holds a plain message string.
    """
    log = log or logger
    path = Path(file_path)

    try:
        size = _check_size(path, max_size)
        with open(path, "rb") as f:
            data = f.read()
    except FileTooLargeError as e:
        log.warning(f"Skipping {path}: file too large ({e.size:,} bytes)")
        return LoadResult(
            path=path,
            size=e.size,
            error=ErrorKind.FILE_TOO_LARGE.message(str(e)),
            warning=f"file too large: {path}",
        )
    except OSError as e:
        log.error(f"Could not read {path}: {e}")
        return LoadResult(path=path, error=ErrorKind.FILE_UNREADABLE.message(str(e)))

    return LoadResult(path=path, text=_safe_decode(data), size=size)
