"""Aggregation of per-entry outcomes into a summary."""

from collections.abc import Iterable

from pydantic import BaseModel, Field

from linksmith.core.schemas import LinkOutcome, LinkStatus


class LinkSummary(BaseModel):
    """Counts of outcomes from one batch, plus the outcomes themselves."""

    installed_count: int = 0
    skipped_count: int = 0
    failed_count: int = 0
    backed_up_count: int = 0
    outcomes: list[LinkOutcome] = Field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def has_failures(self) -> bool:
        return self.failed_count > 0

    @property
    def failures(self) -> list[LinkOutcome]:
        return [o for o in self.outcomes if o.status == LinkStatus.FAILED]


def summarize(outcomes: Iterable[LinkOutcome]) -> LinkSummary:
    """Count outcomes by status, keeping their original order."""
    ordered = list(outcomes)
    counts = {status: 0 for status in LinkStatus}
    for outcome in ordered:
        counts[outcome.status] += 1

    return LinkSummary(
        installed_count=counts[LinkStatus.INSTALLED],
        skipped_count=counts[LinkStatus.SKIPPED],
        failed_count=counts[LinkStatus.FAILED],
        backed_up_count=counts[LinkStatus.BACKED_UP],
        outcomes=ordered,
    )
