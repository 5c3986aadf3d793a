"""Typed records mapped from spreadsheet rows."""

from datetime import date
from typing import List, Optional
from pydantic import BaseModel, Field

from src.models.enums import ActivityType, FundingType, ReportStatus


class RosterRecord(BaseModel):
    nip: str
    name: str
    position: str
    unit: str


class ScheduleRecord(BaseModel):
    nip: str
    letter_number: str
    activity_type: ActivityType
    description: str
    location: str
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    signee: str
    basis: str
    funding_type: Optional[FundingType] = None


class DisciplineRecord(BaseModel):
    nip: str
    attendance: float = 0.0
    assembly: float = 0.0
    daily_log: float = 0.0
    report: float = 0.0


class ReportRecord(BaseModel):
    letter_number: str
    details_raw: str = ""
    report_date: Optional[str] = None
    creator_nip: Optional[str] = None
    photos: List[str] = Field(default_factory=list)
    status: Optional[ReportStatus] = None
