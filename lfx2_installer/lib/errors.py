from __future__ import annotations


class FileSystemError(RuntimeError):
    """A fatal filesystem failure during an install run.

    ``operation`` is one of ``mkdir``, ``read``, ``copy``, ``serialize`` or ``write``.
    """

    def __init__(self, operation: str, path: str, reason: str) -> None:
        super().__init__(f"{operation} failed for {path}: {reason}")
        self.operation = operation
        self.path = path
        self.reason = reason


def describe_os_error(e: BaseException) -> str:
    if isinstance(e, OSError) and e.strerror:
        return e.strerror
    return str(e) or type(e).__name__
