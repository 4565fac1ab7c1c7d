"""Branch and date filters used by every ledger computation."""

from calendar import monthrange
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum

from src.domain.models.ledger import Branch


class Granularity(str, Enum):
    """Reporting period size."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"


class DateRangePreset(str, Enum):
    """Named date ranges offered to report consumers."""

    THIS_MONTH = "this_month"
    LAST_MONTH = "last_month"
    LAST_30_DAYS = "last_30_days"
    THIS_YEAR = "this_year"
    CUSTOM = "custom"
    ALL_TIME = "all_time"


@dataclass(frozen=True)
class BranchFilter:
    """Either every branch or exactly one.

    Build it with ``BranchFilter.all()`` or ``BranchFilter.only(branch)``.
    """

    branch: Branch | None = None

    @classmethod
    def all(cls) -> "BranchFilter":
        return cls(branch=None)

    @classmethod
    def only(cls, branch: Branch) -> "BranchFilter":
        return cls(branch=Branch.parse(branch))

    @property
    def is_all(self) -> bool:
        return self.branch is None

    def matches(self, branch: Branch) -> bool:
        if self.branch is None:
            return True
        return branch is self.branch

    def __str__(self) -> str:
        return "ALL" if self.branch is None else self.branch.value


@dataclass(frozen=True)
class DateRange:
    """Inclusive calendar date range; a missing bound is open."""

    start: date | None = None
    end: date | None = None

    def contains(self, value: date) -> bool:
        if self.start is not None and value < self.start:
            return False
        if self.end is not None and value > self.end:
            return False
        return True

    def __call__(self, value: date) -> bool:
        return self.contains(value)

    @classmethod
    def all_time(cls) -> "DateRange":
        return cls()

    @classmethod
    def for_period(
        cls,
        reference: date,
        granularity: Granularity,
    ) -> "DateRange":
        """Return the bounds of the period containing ``reference``.

        Weeks run Sunday through Saturday regardless of locale.

        Args:
            reference: Any day inside the period.
            granularity: Period size.

        Returns:
            DateRange: Closed period bounds.
        """
        if granularity is Granularity.DAY:
            return cls(start=reference, end=reference)
        if granularity is Granularity.WEEK:
            # date.weekday() is 0 for Monday; shift so Sunday is 0.
            offset = (reference.weekday() + 1) % 7
            start = reference - timedelta(days=offset)
            return cls(start=start, end=start + timedelta(days=6))
        if granularity is Granularity.MONTH:
            last_day = monthrange(reference.year, reference.month)[1]
            return cls(
                start=reference.replace(day=1),
                end=reference.replace(day=last_day),
            )
        raise ValueError(f"Unsupported granularity: {granularity!r}")


def previous_reference(reference: date, granularity: Granularity) -> date:
    """Return a day inside the period preceding the one holding ``reference``.

    Args:
        reference: Any day inside the current period.
        granularity: Period size.

    Returns:
        date: A day in the immediately preceding period.
    """
    if granularity is Granularity.DAY:
        return reference - timedelta(days=1)
    if granularity is Granularity.WEEK:
        return reference - timedelta(days=7)
    if granularity is Granularity.MONTH:
        return reference.replace(day=1) - timedelta(days=1)
    raise ValueError(f"Unsupported granularity: {granularity!r}")


def resolve_date_range(
    preset: DateRangePreset,
    today: date,
    custom_start: date | None = None,
    custom_end: date | None = None,
) -> DateRange:
    """Translate a named preset into concrete bounds.

    Args:
        preset: Requested preset.
        today: Calendar date in the reference timezone.
        custom_start: Lower bound for ``CUSTOM``.
        custom_end: Upper bound for ``CUSTOM``.

    Returns:
        DateRange: Resolved inclusive range.
    """
    if preset is DateRangePreset.THIS_MONTH:
        return DateRange.for_period(today, Granularity.MONTH)
    if preset is DateRangePreset.LAST_MONTH:
        return DateRange.for_period(
            previous_reference(today, Granularity.MONTH),
            Granularity.MONTH,
        )
    if preset is DateRangePreset.LAST_30_DAYS:
        return DateRange(start=today - timedelta(days=30), end=today)
    if preset is DateRangePreset.THIS_YEAR:
        return DateRange(
            start=date(today.year, 1, 1),
            end=date(today.year, 12, 31),
        )
    if preset is DateRangePreset.CUSTOM:
        return DateRange(start=custom_start, end=custom_end)
    if preset is DateRangePreset.ALL_TIME:
        return DateRange.all_time()
    raise ValueError(f"Unsupported date range preset: {preset!r}")


__all__ = [
    "Granularity",
    "DateRangePreset",
    "BranchFilter",
    "DateRange",
    "previous_reference",
    "resolve_date_range",
]
