"""Report pipeline: fetch, extract, parse and cache."""

import structlog

from norfork_feed.clients.http_client import DocumentFetcher
from norfork_feed.configuration.settings import Settings
from norfork_feed.core.cache import ResultCache
from norfork_feed.core.reservoir_parser import ReservoirParser
from norfork_feed.core.schedule_parser import ScheduleParser
from norfork_feed.core.text_extractor import extract_text
from norfork_feed.models.domain_models import ReservoirReport, ScheduleReport

logger = structlog.get_logger()

RESERVOIR_CACHE_KEY = "norfork-lake"
SCHEDULE_CACHE_KEY = "swpa-schedule-{day}"


class ReportService:
    """Serves cached reservoir and schedule reports."""

    def __init__(self, settings: Settings, fetcher: DocumentFetcher, cache: ResultCache):
        self.settings = settings
        self.fetcher = fetcher
        self.cache = cache
        self.reservoir_parser = ReservoirParser(max_readings=settings.reservoir.max_readings)
        self.schedule_parser = ScheduleParser(unit_column=settings.schedule.unit_column)

    def reservoir_report(self) -> ReservoirReport:
        """Get the reservoir report, serving the last good copy on failure."""
        return self.cache.get_or_fetch(RESERVOIR_CACHE_KEY, self._load_reservoir_report)

    def schedule_report(self, day: str) -> ScheduleReport:
        """Get the schedule for a day key (sun..sat)."""
        day_key = day.lower()
        return self.cache.get_or_fetch(
            SCHEDULE_CACHE_KEY.format(day=day_key),
            lambda: self._load_schedule_report(day_key),
        )

    def schedule_url(self, day_key: str) -> str:
        sources = self.settings.sources
        return f"{sources.schedule_base_url}{day_key}{sources.schedule_extension}"

    def _load_reservoir_report(self) -> ReservoirReport:
        url = self.settings.sources.reservoir_url
        logger.info("reservoir_report_loading", url=url)
        text = extract_text(self.fetcher.fetch(url))
        return self.reservoir_parser.parse(text)

    def _load_schedule_report(self, day_key: str) -> ScheduleReport:
        url = self.schedule_url(day_key)
        logger.info("schedule_report_loading", day=day_key, url=url)
        text = extract_text(self.fetcher.fetch(url))
        return self.schedule_parser.parse(text, day_key)
