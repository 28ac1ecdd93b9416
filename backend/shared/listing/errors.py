"""Errors raised by the birthday listing commands.

Each error carries the message shown to the user, so the cog can reply
with ``str(error)`` without knowing which failure happened.
"""


class ListingError(Exception):
    """Base class for listing failures with a user-facing message."""

    default_message = "An error occurred while listing birthdays."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidRecord(ListingError):
    default_message = "That is not a valid birthday date."

    def __init__(self, month: int, day: int):
        self.month = month
        self.day = day
        super().__init__(f"Invalid birthday date: month={month}, day={day}")


class UserNotFound(ListingError):
    default_message = ":x: Unable to find user. Specify their `@` mention, their ID, or their username."


class NoBirthdayData(ListingError):
    default_message = "I do not have birthday information for that user."


class UnsupportedExportFormat(ListingError):
    default_message = ":x: That is not available as an export format."

    def __init__(self, fmt: str):
        self.format = fmt
        super().__init__(f":x: `{fmt}` is not available as an export format. Use `csv` or `txt`.")


class DeliveryPermissionDenied(ListingError):
    default_message = (
        ":x: Unable to send list due to a permissions issue. Check the 'Attach Files' permission."
    )


class DeliveryUnexpectedFailure(ListingError):
    default_message = ":x: An unknown error occurred while sending the list."
