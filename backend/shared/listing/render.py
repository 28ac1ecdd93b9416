"""Size-capped rendering of the recent and upcoming birthdays message."""

from collections.abc import Iterable

from shared.models.birthday import ListingGroup

from .dates import format_month_day

# Leaves room under Discord's 2000 character message limit
DEFAULT_MAX_SIZE = 970

UPCOMING_HEADER = "Recent and upcoming birthdays:"
TRUNCATION_NOTICE = "Not all birthdays have been shown as there are too many to list."
NO_UPCOMING_MESSAGE = (
    "There are no recent or upcoming birthdays (within the last 7 days and/or next 14 days)."
)


class RenderBuffer:
    """Append-only text buffer that reports when it has grown past ``max_size``."""

    def __init__(self, max_size: int = DEFAULT_MAX_SIZE):
        self.max_size = max_size
        self._parts: list[str] = []
        self._length = 0

    def append(self, text: str) -> None:
        self._parts.append(text)
        self._length += len(text)

    def append_line(self, text: str = "") -> None:
        self.append(text + "\n")

    @property
    def is_full(self) -> bool:
        return self._length > self.max_size

    def __len__(self) -> int:
        return self._length

    def getvalue(self) -> str:
        return "".join(self._parts)


def render_upcoming(groups: Iterable[ListingGroup], max_size: int = DEFAULT_MAX_SIZE) -> str:
    """Render grouped birthdays, stopping at the first name that overflows ``max_size``.

    Groups are consumed lazily, so nothing after the overflowing name is
    looked up. Returns ``NO_UPCOMING_MESSAGE`` when ``groups`` is empty.
    """
    buffer = RenderBuffer(max_size)
    buffer.append_line(UPCOMING_HEADER)
    matched = 0

    for group in groups:
        matched += group.count
        buffer.append_line()
        buffer.append(f"● `{format_month_day(group.month, group.day)}`: ")
        for i, name in enumerate(group.names):
            if i:
                buffer.append(", ")
            buffer.append(name)
            if buffer.is_full:
                buffer.append_line()
                buffer.append(TRUNCATION_NOTICE)
                return buffer.getvalue()

    if matched == 0:
        return NO_UPCOMING_MESSAGE
    return buffer.getvalue()
