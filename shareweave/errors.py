"""Error kinds and the result wrapper used between layers.

Entry-level errors (InvalidBase, InvalidDigit, MalformedEntry) drop a single
share and let the batch continue. Batch-level errors (MissingQuorum,
InsufficientShares, SourceUnreadable) and DivisionByZero end the batch.
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional


class ShareError(Exception):
    """Base class for every failure the reconstruction pipeline reports."""

    @property
    def kind(self) -> str:
        return type(self).__name__

    def describe(self) -> str:
        detail = str(self)
        return f"{self.kind}: {detail}" if detail else self.kind


class EntryError(ShareError):
    """A single share record could not be turned into a share."""

    def __init__(self, message: str, label: Optional[str] = None):
        super().__init__(message)
        self.label = label


class InvalidBase(EntryError, ValueError):
    pass


class InvalidDigit(EntryError, ValueError):
    pass


class MalformedEntry(EntryError, ValueError):
    pass


class BatchError(ShareError):
    """The batch as a whole cannot produce a secret."""


class MissingQuorum(BatchError):
    pass


class InsufficientShares(BatchError, ValueError):
    pass


class SourceUnreadable(BatchError):
    pass


class DivisionByZero(ShareError, ZeroDivisionError):
    """Inversion of zero in the field, e.g. from colliding x-coordinates."""


@dataclass(frozen=True)
class Result:
    """Either a value or the ShareError that prevented it."""

    value: Any = None
    error: Optional[ShareError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: Any) -> "Result":
        return cls(value=value)

    @classmethod
    def failure(cls, error: ShareError) -> "Result":
        return cls(error=error)

    @classmethod
    def capture(cls, func: Callable[..., Any], *args: Any, **kwargs: Any) -> "Result":
        """Call func, turning a raised ShareError into a failed result.

        Anything that is not a ShareError propagates unchanged.
        """
        try:
            return cls.success(func(*args, **kwargs))
        except ShareError as e:
            return cls.failure(e)
