"""API routes for Norfork lake and generation schedule reports."""

import asyncio
from concurrent.futures import ThreadPoolExecutor

import structlog
from fastapi import APIRouter, Depends

from norfork_feed.api.dependencies import get_report_service, validate_day
from norfork_feed.core.report_service import ReportService
from norfork_feed.models.domain_models import ReservoirReport, ScheduleReport

logger = structlog.get_logger()

router = APIRouter()

# Thread pool for blocking fetch and parse work
executor = ThreadPoolExecutor(max_workers=4)


@router.get(
    "/norfork/lake",
    response_model=ReservoirReport,
    summary="Norfork Lake levels",
    description="Pool metadata and the most recent hourly readings, newest first",
)
async def lake_endpoint(
    service: ReportService = Depends(get_report_service),
) -> ReservoirReport:
    """Get the cached reservoir report.

    Args:
        service: Report service

    Returns:
        Reservoir report
    """
    logger.info("lake_request_received")
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(executor, service.reservoir_report)


@router.get(
    "/norfork/schedule/{day}",
    response_model=ScheduleReport,
    summary="Norfork generation schedule",
    description="Projected hourly generation for sun..sat, today or tomorrow",
)
async def schedule_endpoint(
    day_key: str = Depends(validate_day),
    service: ReportService = Depends(get_report_service),
) -> ScheduleReport:
    """Get the cached schedule for a day.

    Args:
        day_key: Resolved day key
        service: Report service

    Returns:
        Schedule report
    """
    logger.info("schedule_request_received", day=day_key)
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(executor, service.schedule_report, day_key)
