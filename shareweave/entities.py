from dataclasses import dataclass, field
from typing import List, NamedTuple, Optional, Tuple

from shareweave.errors import EntryError, ShareError


class Share(NamedTuple):
    """A decoded point (x, y) with y already in the field."""
    x: int
    y: int


@dataclass(frozen=True)
class RawShareRecord:
    """A share as it appears in a batch, before decoding."""
    label: str
    base: object
    value: object


@dataclass
class IngestReport:
    k: int
    shares: List[Share] = field(default_factory=list)
    rejected: List[Tuple[str, EntryError]] = field(default_factory=list)
    duplicates: List[str] = field(default_factory=list)

    def rejected_summary(self):
        return [{"label": label, "error": error.kind, "detail": str(error)}
                for label, error in self.rejected]


@dataclass
class BatchOutcome:
    """What came of a single batch: a secret, or the error that ended it."""
    name: str
    secret: Optional[int] = None
    error: Optional[ShareError] = None
    report: Optional[IngestReport] = None
    shares_used: List[Share] = field(default_factory=list)

    @property
    def ok(self):
        return self.error is None

    def describe(self):
        if self.ok:
            return f"Secret from {self.name}: {self.secret}"
        return f"Failed {self.name}: {self.error.describe()}"
