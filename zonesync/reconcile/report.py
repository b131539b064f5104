"""Per-phase outcome counters."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from enum import Enum

from zonesync.base.models import Action


class Outcome(str, Enum):
    """Terminal state of one change task."""

    APPLIED = "applied"
    DRY_RUN = "dry_run"
    LOCATE_FAILED = "locate_failed"
    REMOTE_FAILED = "remote_failed"
    CANCELLED = "cancelled"


@dataclass
class BatchReport:
    """Counts of task outcomes for one change kind, safe to update from workers."""

    action: Action
    applied: int = 0
    dry_run: int = 0
    locate_failed: int = 0
    remote_failed: int = 0
    cancelled: int = 0
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def record(self, outcome: Outcome) -> None:
        with self._lock:
            setattr(self, outcome.value, getattr(self, outcome.value) + 1)

    @property
    def total(self) -> int:
        return self.applied + self.dry_run + self.locate_failed + self.remote_failed + self.cancelled

    @property
    def failed(self) -> int:
        return self.locate_failed + self.remote_failed

    def as_dict(self) -> dict[str, int | str]:
        return {
            "action": self.action.value,
            "applied": self.applied,
            "dry_run": self.dry_run,
            "locate_failed": self.locate_failed,
            "remote_failed": self.remote_failed,
            "cancelled": self.cancelled,
        }


@dataclass
class ApplyReport:
    """Reports of the phases that ran during one ``apply_changes`` call.

    A phase with no endpoints has no entry.
    """

    phases: dict[Action, BatchReport] = field(default_factory=dict)

    def add(self, report: BatchReport) -> None:
        self.phases[report.action] = report

    def get(self, action: Action) -> BatchReport | None:
        return self.phases.get(action)

    @property
    def failed(self) -> int:
        return sum(r.failed for r in self.phases.values())

    def as_dict(self) -> dict[str, dict[str, int | str]]:
        return {action.value: report.as_dict() for action, report in self.phases.items()}
