"""Aggregate counts over submissions."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SubmissionCounts:
    """Raw counts returned by the submission repository."""

    feeding: int = 0
    maintenance: int = 0
    today: int = 0

    @property
    def total(self) -> int:
        return self.feeding + self.maintenance


@dataclass(frozen=True)
class SubmissionStats:
    """Dashboard statistics for managers."""

    total: int
    feeding: int
    maintenance: int
    today_count: int
    active_agents: int
