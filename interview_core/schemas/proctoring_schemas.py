"""
Description:
Schemas for proctoring event ingestion, listings and summaries.

Dependencies:
- pydantic: For data validation and settings management.
"""
import uuid
from datetime import datetime
from typing import Any, Dict, List
from pydantic import BaseModel, ConfigDict, Field
from interview_core.models.interview_models import Severity


class RecordEventRequest(BaseModel):
    session_id: uuid.UUID
    event_type: str = Field(..., min_length=1, max_length=50)
    data: Dict[str, Any] = Field(default_factory=dict)
    severity: Severity = Severity.LOW


class RecordEventResponse(BaseModel):
    success: bool = True
    logged: bool = True
    suspicious: bool
    message: str


class ProctoringPermissions(BaseModel):
    camera: bool = False
    microphone: bool = False
    screen: bool = False


class StartProctoringRequest(BaseModel):
    session_id: uuid.UUID
    device_info: Dict[str, Any] = Field(default_factory=dict)
    permissions: ProctoringPermissions = Field(default_factory=ProctoringPermissions)


class ProctoringConfig(BaseModel):
    video_enabled: bool
    audio_enabled: bool
    screen_recording: bool
    face_detection: bool = True
    anomaly_detection: bool = True


class StartProctoringResponse(BaseModel):
    success: bool = True
    message: str = "Proctoring session started"
    config: ProctoringConfig


class ProctoringSummary(BaseModel):
    total: int = 0
    high: int = 0
    medium: int = 0
    low: int = 0
    event_types: Dict[str, int] = Field(default_factory=dict)


class ProctoringEventResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    event_type: str
    severity: Severity
    data: Dict[str, Any]
    timestamp: datetime


class ProctoringLogsResponse(BaseModel):
    success: bool = True
    logs: List[ProctoringEventResponse]
    summary: ProctoringSummary
