"""Exception types shared by the storage, command and CLI layers."""

from __future__ import annotations


class TermStorageError(Exception):
    """Error reported by the host taxonomy storage layer.

    Mirrors the host platform's error objects: a machine readable ``code`` and
    a human readable ``message``, optionally with the HTTP status returned by
    a remote backend.
    """

    def __init__(self, code: str, message: str, *, status: int | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.status = status

    def __repr__(self) -> str:
        return f"TermStorageError(code={self.code!r}, message={self.message!r})"


class TermCommandError(Exception):
    """Failure raised by a taxonomy command and rendered to the operator."""

    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message

    @classmethod
    def from_storage_error(cls, error: TermStorageError) -> "TermCommandError":
        return cls(error.code, error.message)

    def __str__(self) -> str:
        return f"{self.message} ({self.code})"


__all__ = ["TermCommandError", "TermStorageError"]
