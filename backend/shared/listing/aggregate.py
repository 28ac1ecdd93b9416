"""Grouping of birthday records by calendar date."""

from collections import defaultdict
from collections.abc import Iterable, Iterator

from shared.models.birthday import BirthdayRecord, ListingGroup


def _make_group(records: list[BirthdayRecord]) -> ListingGroup:
    first = records[0]
    # Ordinal ignore-case: compare upper-cased code points, ties keep input order
    names = sorted((r.display_name for r in records), key=str.upper)
    return ListingGroup(
        month=first.month,
        day=first.day,
        date_index=first.date_index,
        names=tuple(names),
    )


class BirthdayIndex:
    """Records bucketed by date index for per-day lookups."""

    def __init__(self, records: Iterable[BirthdayRecord]):
        self._by_index: dict[int, list[BirthdayRecord]] = defaultdict(list)
        for record in records:
            self._by_index[record.date_index].append(record)

    def __len__(self) -> int:
        return sum(len(v) for v in self._by_index.values())

    def records_on(self, index: int) -> list[BirthdayRecord]:
        return list(self._by_index.get(index, ()))

    def groups_in_window(self, indices: Iterable[int]) -> Iterator[ListingGroup]:
        """Yield a group for each scanned index that has birthdays, in scan order."""
        for index in indices:
            records = self._by_index.get(index)
            if not records:
                continue
            yield _make_group(records)

    def groups(self) -> list[ListingGroup]:
        return [_make_group(self._by_index[i]) for i in sorted(self._by_index)]


def group(records: Iterable[BirthdayRecord]) -> list[ListingGroup]:
    """Group records by date, in calendar order."""
    return BirthdayIndex(records).groups()
