"""Domain models for reservoir and generation-schedule reports."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ReservoirReading(BaseModel):
    """One hourly lake observation."""

    timestamp: datetime = Field(..., description="Observation instant (UTC)")
    source_date: str = Field(..., alias="sourceDate", description="Original date token")
    source_time: str = Field(..., alias="sourceTime", description="Original HHMM token")
    elevation_ft: float = Field(..., alias="elevationFt", description="Pool elevation in feet")
    tailwater_ft: Optional[float] = Field(
        None, alias="tailwaterFt", description="Tailwater elevation in feet"
    )
    generation_mwh: Optional[float] = Field(
        None, alias="generationMwh", description="Generation over the hour in MWh"
    )
    generation_cfs: Optional[float] = Field(
        None, alias="generationCfs", description="Generation flow in CFS"
    )
    total_release_cfs: Optional[float] = Field(
        None, alias="totalReleaseCfs", description="Total release flow in CFS"
    )

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class ReservoirMeta(BaseModel):
    """Report-wide pool constants."""

    top_flood_pool_ft: Optional[float] = Field(
        None, alias="topFloodPoolFt", description="Top of flood pool elevation"
    )
    current_power_pool_ft: Optional[float] = Field(
        None, alias="currentPowerPoolFt", description="Current power pool elevation"
    )

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class ReservoirReport(BaseModel):
    """Reservoir report: metadata plus newest-first hourly readings."""

    meta: ReservoirMeta = Field(default_factory=ReservoirMeta, description="Pool metadata")
    readings: list[ReservoirReading] = Field(
        default_factory=list, alias="hourly", description="Hourly readings, newest first"
    )

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "meta": {"topFloodPoolFt": 580.0, "currentPowerPoolFt": 555.75},
                "hourly": [
                    {
                        "timestamp": "2025-12-06T21:00:00Z",
                        "sourceDate": "06DEC2025",
                        "sourceTime": "1500",
                        "elevationFt": 553.43,
                        "tailwaterFt": 371.2,
                        "generationMwh": 0.0,
                        "generationCfs": 0.0,
                        "totalReleaseCfs": None,
                    }
                ],
            }
        },
    )


class ScheduleEntry(BaseModel):
    """One hour of a generation-unit schedule."""

    hour_ending: int = Field(..., ge=1, le=24, alias="hourEnding", description="Hour ending 1-24")
    megawatts: int = Field(..., ge=0, description="Scheduled generation in MW")

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class ScheduleReport(BaseModel):
    """Projected loading schedule for one day and one generation unit."""

    day: str = Field(..., description="Requested day key (sun..sat)")
    date_label: str = Field("", alias="date", description="Date label from the report header")
    entries: list[ScheduleEntry] = Field(
        default_factory=list, alias="schedule", description="Hourly entries in source order"
    )

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "day": "wed",
                "date": "WEDNESDAY DECEMBER 03, 2025",
                "schedule": [{"hourEnding": 1, "megawatts": 0}],
            }
        },
    )
