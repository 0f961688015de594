"""Parser for the USACE Norfork reservoir tabular report."""

import math
import re
from typing import NamedTuple, Optional

import structlog

from norfork_feed.core.timestamps import normalize_timestamp
from norfork_feed.models.domain_models import ReservoirMeta, ReservoirReading, ReservoirReport
from norfork_feed.utils.exceptions import DateResolutionError, RowParseError

logger = structlog.get_logger()


class ReservoirColumns(NamedTuple):
    """Positional layout of a whitespace-split data row.

    Typical header: DATE TIME ELEV TW PRECIP GEN(MWH) GEN(CFS) SPILL RELEASE(CFS)
    """

    date: int = 0
    time: int = 1
    elevation: int = 2
    tailwater: int = 3
    generation_mwh: int = 5
    generation_cfs: int = 6
    total_release_cfs: int = 8


DEFAULT_COLUMNS = ReservoirColumns()

_NUMBER = re.compile(r"^-?(\d+\.?\d*|\.\d+)$")


class ReservoirParser:
    """Parser for reservoir elevation, tailwater and release readings."""

    # Pool levels use the report's fixed NNN.NN format
    TOP_FLOOD_POOL_PATTERN = re.compile(r"Top\s+Flood\s+Pool.*?(\d{3}\.\d{2})")
    CURRENT_POWER_POOL_PATTERN = re.compile(r"Current\s+Power\s+Pool.*?(\d{3}\.\d{2})")

    # Data row anchor: "06DEC2025 1500  553.43 ..."
    ROW_PATTERN = re.compile(r"^(\d{2}[A-Z]{3}\d{4})\s+(\d{4})\s+([\d.]+)")

    def __init__(self, max_readings: int = 48, columns: ReservoirColumns = DEFAULT_COLUMNS):
        self.max_readings = max_readings
        self.columns = columns

    def parse(self, text: str) -> ReservoirReport:
        """Parse report plaintext into pool metadata and hourly readings.

        Args:
            text: Extracted report plaintext

        Returns:
            ReservoirReport with readings newest first, truncated to max_readings.
            An empty readings list is returned when no data rows are found.
        """
        top_flood_pool: Optional[float] = None
        current_power_pool: Optional[float] = None
        readings: list[ReservoirReading] = []
        dropped = 0

        for line in text.splitlines():
            if top_flood_pool is None:
                match = self.TOP_FLOOD_POOL_PATTERN.search(line)
                if match:
                    top_flood_pool = float(match.group(1))
            if current_power_pool is None:
                match = self.CURRENT_POWER_POOL_PATTERN.search(line)
                if match:
                    current_power_pool = float(match.group(1))

            trimmed = line.strip()
            if not self.ROW_PATTERN.match(trimmed):
                continue

            try:
                readings.append(self._parse_row(trimmed, self.columns))
            except (RowParseError, DateResolutionError) as e:
                dropped += 1
                logger.debug("reservoir_row_dropped", line=trimmed, reason=str(e))

        readings.sort(key=lambda reading: reading.timestamp, reverse=True)
        kept = readings[: self.max_readings]

        meta = ReservoirMeta(
            top_flood_pool_ft=top_flood_pool,
            current_power_pool_ft=current_power_pool,
        )

        if not kept:
            logger.warning("reservoir_report_empty", dropped_rows=dropped)
        else:
            logger.info(
                "reservoir_report_parsed",
                rows=len(readings),
                kept=len(kept),
                dropped_rows=dropped,
                newest=kept[0].timestamp.isoformat(),
            )

        return ReservoirReport(meta=meta, readings=kept)

    def _parse_row(self, line: str, columns: ReservoirColumns) -> ReservoirReading:
        """Build a reading from an anchored data row.

        Args:
            line: Trimmed data row
            columns: Field positions within the whitespace-split row

        Returns:
            ReservoirReading

        Raises:
            RowParseError: If the elevation field is not numeric
            DateResolutionError: If date/time tokens do not resolve
        """
        parts = line.split()

        elevation = self._parse_float(parts, columns.elevation)
        if elevation is None:
            raise RowParseError(f"Invalid elevation in row: {line!r}")

        date_token = parts[columns.date]
        time_token = parts[columns.time]

        return ReservoirReading(
            timestamp=normalize_timestamp(date_token, time_token),
            source_date=date_token,
            source_time=time_token,
            elevation_ft=elevation,
            tailwater_ft=self._parse_float(parts, columns.tailwater),
            generation_mwh=self._parse_float(parts, columns.generation_mwh),
            generation_cfs=self._parse_float(parts, columns.generation_cfs),
            total_release_cfs=self._parse_float(parts, columns.total_release_cfs),
        )

    def _parse_float(self, parts: list[str], index: int) -> Optional[float]:
        """Parse a positional field, returning None when absent or non-numeric."""
        if index >= len(parts):
            return None

        value = parts[index].replace(",", "")
        if not _NUMBER.match(value):
            return None

        number = float(value)
        if not math.isfinite(number):
            return None
        return number
