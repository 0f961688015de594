"""Custom exceptions for the Norfork report feed."""


class NorforkFeedException(Exception):
    """Base exception for all application errors."""

    pass


class NetworkError(NorforkFeedException):
    """Fetching a report failed (transport error, timeout or bad status)."""

    pass


class ReportFormatError(NorforkFeedException):
    """Expected report structure is absent, likely upstream layout drift."""

    pass


class SectionNotFoundError(ReportFormatError):
    """Section marker line not found in report text."""

    pass


class ColumnNotFoundError(ReportFormatError):
    """Generation-unit column header not found near the section marker."""

    pass


class RowParseError(NorforkFeedException):
    """A data row failed its required-field parse."""

    pass


class DateResolutionError(NorforkFeedException):
    """Date and time tokens do not form a valid instant."""

    pass


class InvalidDayError(NorforkFeedException):
    """Requested schedule day is not a known day key."""

    pass


class ConfigurationError(NorforkFeedException):
    """Configuration error."""

    pass
