from dataclasses import dataclass
from enum import Enum


class RunState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"


@dataclass(frozen=True)
class BatchResult:
    """Outcome counts of one batch. ``degraded`` results are also ``processed``."""

    processed: int = 0
    failed: int = 0
    degraded: int = 0

    def __add__(self, other: "BatchResult") -> "BatchResult":
        return BatchResult(
            processed=self.processed + other.processed,
            failed=self.failed + other.failed,
            degraded=self.degraded + other.degraded,
        )


@dataclass(frozen=True)
class SyncRunResult:
    job_id: str
    processed: int
    failed: int
    degraded: int
    duration_ms: int
