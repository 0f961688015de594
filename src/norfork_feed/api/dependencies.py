"""API dependencies for report access and day validation."""

from fastapi import HTTPException, Request, status
import structlog

from norfork_feed.core.report_service import ReportService
from norfork_feed.utils.days import resolve_day_key
from norfork_feed.utils.exceptions import InvalidDayError

logger = structlog.get_logger()


def get_report_service(request: Request) -> ReportService:
    """Get the report service owned by the application.

    Args:
        request: Incoming request

    Returns:
        ReportService constructed in create_app()
    """
    return request.app.state.report_service  # type: ignore[no-any-return]


def validate_day(day: str, request: Request) -> str:
    """Resolve the path day parameter into a day key.

    Raises:
        HTTPException: If the day is invalid (400 Bad Request)
    """
    service = get_report_service(request)
    try:
        return resolve_day_key(day, timezone=service.settings.schedule.timezone)
    except InvalidDayError as e:
        logger.warning("invalid_day_requested", day=day)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
