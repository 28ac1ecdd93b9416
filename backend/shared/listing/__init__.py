"""Birthday listing: date indexing, window scans, grouping, rendering and export."""

from .aggregate import BirthdayIndex, group
from .dates import (
    MONTH_NAMES,
    UPCOMING_DAYS_BEFORE,
    UPCOMING_DAYS_TOTAL,
    date_index,
    format_day_month,
    format_month_day,
    scan,
    today_index,
)
from .errors import (
    DeliveryPermissionDenied,
    DeliveryUnexpectedFailure,
    InvalidRecord,
    ListingError,
    NoBirthdayData,
    UnsupportedExportFormat,
    UserNotFound,
)
from .export import ExportFormat, export_csv, export_file, export_filename, export_text
from .lookup import find_member, format_display_name, format_when, parse_user_id
from .render import (
    DEFAULT_MAX_SIZE,
    NO_UPCOMING_MESSAGE,
    TRUNCATION_NOTICE,
    RenderBuffer,
    render_upcoming,
)

__all__ = [
    # Dates
    "MONTH_NAMES",
    "UPCOMING_DAYS_BEFORE",
    "UPCOMING_DAYS_TOTAL",
    "date_index",
    "format_day_month",
    "format_month_day",
    "scan",
    "today_index",
    # Grouping
    "BirthdayIndex",
    "group",
    # Rendering
    "DEFAULT_MAX_SIZE",
    "NO_UPCOMING_MESSAGE",
    "TRUNCATION_NOTICE",
    "RenderBuffer",
    "render_upcoming",
    # Export
    "ExportFormat",
    "export_csv",
    "export_file",
    "export_filename",
    "export_text",
    # Lookup
    "find_member",
    "format_display_name",
    "format_when",
    "parse_user_id",
    # Errors
    "DeliveryPermissionDenied",
    "DeliveryUnexpectedFailure",
    "InvalidRecord",
    "ListingError",
    "NoBirthdayData",
    "UnsupportedExportFormat",
    "UserNotFound",
]
