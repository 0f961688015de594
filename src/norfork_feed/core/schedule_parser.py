"""Parser for the SWPA projected loading schedule."""

import re
from typing import NamedTuple, Optional

import structlog

from norfork_feed.models.domain_models import ScheduleEntry, ScheduleReport
from norfork_feed.utils.exceptions import ColumnNotFoundError, SectionNotFoundError

logger = structlog.get_logger()

DAY_KEYS = ("sun", "mon", "tue", "wed", "thu", "fri", "sat")


class ColumnAnchor(NamedTuple):
    """Character window of the tracked unit column.

    The table is aligned by character position, not by whitespace, so values
    are read from a fixed window around the header token's offset.
    """

    offset: int
    left: int = 2
    right: int = 5

    def slice(self, line: str) -> str:
        return line[max(self.offset - self.left, 0) : self.offset + self.right]


class ScheduleParser:
    """Parser for hourly megawatts of one generation unit."""

    SECTION_MARKER = "PROJECTED LOADING SCHEDULE"
    HEADER_SEARCH_LINES = 10
    DATE_SEARCH_LINES = 20

    END_MARKERS = ("TOTAL",)
    END_PHRASE = "PROJECT TABLE"

    HOUR_PATTERN = re.compile(r"^(\d{1,2})\s+")
    YEAR_PATTERN = re.compile(r"\d{4}")

    # Header clutter removed from the date label
    LABEL_NOISE_PATTERNS = (
        re.compile(r"PROJECTED\s+LOADING\s+SCHEDULE", re.IGNORECASE),
        re.compile(r"EST\.?\s+SYSTEM\s+PEAK.*$", re.IGNORECASE),
        # Trailing location and temperature, e.g. "TULSA, OK 45F" or "TULSA 45 DEG F"
        re.compile(r"[A-Z][A-Z .,]*\s-?\d{1,3}\s*(?:°|DEG\.?|DEGREES)?\s*F\b.*$"),
    )

    def __init__(self, unit_column: str = "NFD"):
        self.unit_column = unit_column

    def parse(self, text: str, day: str) -> ScheduleReport:
        """Parse schedule plaintext for the tracked unit column.

        Args:
            text: Extracted report plaintext
            day: Three-letter day key (case-insensitive)

        Returns:
            ScheduleReport with entries in source order

        Raises:
            SectionNotFoundError: If the schedule section marker is missing
            ColumnNotFoundError: If the unit column header is missing
            ValueError: If day is not a three-letter weekday key
        """
        day_key = day.strip().lower()
        if day_key not in DAY_KEYS:
            raise ValueError(f"Unknown day key: {day!r}")

        lines = text.splitlines()

        section_index = self._find_section(lines)
        header_index, anchor = self._find_column_anchor(lines, section_index)
        date_label = self._extract_date_label(lines, day_key)

        entries = self._parse_rows(lines[header_index + 1 :], anchor)

        logger.info(
            "schedule_report_parsed",
            day=day_key,
            date=date_label,
            unit_column=self.unit_column,
            column_offset=anchor.offset,
            entries=len(entries),
        )

        return ScheduleReport(day=day_key, date_label=date_label, entries=entries)

    def _find_section(self, lines: list[str]) -> int:
        for index, line in enumerate(lines):
            if self.SECTION_MARKER in line:
                return index

        raise SectionNotFoundError(f"Could not find {self.SECTION_MARKER} section")

    def _find_column_anchor(self, lines: list[str], start: int) -> tuple[int, ColumnAnchor]:
        """Locate the header line holding the unit column near the section marker."""
        window = lines[start : start + self.HEADER_SEARCH_LINES]
        for index, line in enumerate(window, start):
            offset = line.find(self.unit_column)
            if offset != -1:
                logger.debug(
                    "schedule_column_found",
                    unit_column=self.unit_column,
                    line_index=index,
                    offset=offset,
                )
                return index, ColumnAnchor(offset=offset)

        raise ColumnNotFoundError(
            f"Could not find {self.unit_column} column within "
            f"{self.HEADER_SEARCH_LINES} lines of {self.SECTION_MARKER}"
        )

    def _extract_date_label(self, lines: list[str], day_key: str) -> str:
        """Best-effort date label, e.g. "WEDNESDAY DECEMBER 03, 2025"."""
        day_pattern = re.compile(rf"{day_key}\w*", re.IGNORECASE)

        for line in lines[: self.DATE_SEARCH_LINES]:
            if day_pattern.search(line) and self.YEAR_PATTERN.search(line):
                label = line
                for pattern in self.LABEL_NOISE_PATTERNS:
                    label = pattern.sub(" ", label)
                return " ".join(label.split())

        logger.debug("schedule_date_label_missing", day=day_key)
        return ""

    def _parse_rows(self, lines: list[str], anchor: ColumnAnchor) -> list[ScheduleEntry]:
        entries: list[ScheduleEntry] = []

        for line in lines:
            trimmed = line.strip()
            if trimmed.startswith(self.END_MARKERS) or self.END_PHRASE in line:
                break

            match = self.HOUR_PATTERN.match(trimmed)
            if not match:
                continue

            hour = int(match.group(1))
            if not 1 <= hour <= 24:
                continue

            megawatts = self._read_value(line, anchor)
            if megawatts is None:
                logger.debug("schedule_row_blank", hour=hour)
                continue

            entries.append(ScheduleEntry(hour_ending=hour, megawatts=megawatts))

        return entries

    def _read_value(self, line: str, anchor: ColumnAnchor) -> Optional[int]:
        """Read the leading integer within the anchor window, if any."""
        match = re.match(r"\d+", anchor.slice(line).strip())
        if not match:
            return None
        return int(match.group(0))
