from datetime import datetime, timezone
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# Set by the server; a client value for any of these is dropped.
RESERVED_KEYS = frozenset({"_id", "id", "ownerId", "userId", "createdAt", "updatedAt"})

Alert = Literal["abruptChange", "outOfRange", "stagnation", "missingFollowUp", "abnormalHealth"]


def check_field_names(value: Any) -> None:
    """Free-form keys must be plain field names: no operators, paths or NULs."""
    if isinstance(value, dict):
        for key, item in value.items():
            if not isinstance(key, str) or not key or key.startswith("$") or "." in key or "\x00" in key:
                raise ValueError(f"invalid field name {key!r}")
            check_field_names(item)
    elif isinstance(value, list):
        for item in value:
            check_field_names(item)


class FreeForm(BaseModel):
    """Keeps unknown fields, as long as they are safe to store."""
    model_config = ConfigDict(extra="allow")

    @model_validator(mode="after")
    def extra_field_names(self):
        check_field_names(self.model_extra or {})
        return self


class MeasurementIn(FreeForm):
    """Common part of every measurement body; unknown fields are kept."""

    athleteId: Optional[str] = None
    date: Optional[datetime] = None

    @field_validator("date")
    @classmethod
    def assume_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        # naive timestamps are taken as UTC
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    def to_document(self) -> dict:
        data = self.model_dump(exclude_unset=True)
        return {k: v for k, v in data.items() if k not in RESERVED_KEYS}


# --- anthropometric ----------------------------------------------------------
class BodyMeasurements(FreeForm):
    chest: Optional[float] = None
    waist: Optional[float] = None
    hips: Optional[float] = None
    biceps: Optional[float] = None
    thighs: Optional[float] = None
    calves: Optional[float] = None


class HealthIndicators(BaseModel):
    bloodPressure: Optional[str] = None
    heartRate: Optional[float] = None
    notes: Optional[str] = None


class AnthropometricUpdate(MeasurementIn):
    weight: Optional[float] = Field(None, gt=0)
    height: Optional[float] = Field(None, gt=0)
    bodyFatPercentage: Optional[float] = Field(None, ge=0, le=100)
    measurements: Optional[BodyMeasurements] = None
    healthIndicators: Optional[HealthIndicators] = None
    comments: Optional[str] = None
    alerts: Optional[List[Alert]] = None


class AnthropometricIn(AnthropometricUpdate):
    weight: float = Field(gt=0)
    height: float = Field(gt=0)
    bodyFatPercentage: float = Field(ge=0, le=100)


# --- performance -------------------------------------------------------------
class PerformanceIn(MeasurementIn):
    testType: Optional[str] = None
    sport: Optional[str] = None
    sprintTime: Optional[float] = Field(None, ge=0)
    verticalJump: Optional[float] = Field(None, ge=0)
    benchPress: Optional[float] = Field(None, ge=0)
    squat: Optional[float] = Field(None, ge=0)
    vo2Max: Optional[float] = Field(None, ge=0)
    endurance: Optional[float] = None
    agility: Optional[float] = None
    flexibility: Optional[float] = None
    notes: Optional[str] = None


# --- health ------------------------------------------------------------------
class HealthIn(MeasurementIn):
    bloodPressure: Optional[str] = None
    heartRate: Optional[float] = Field(None, ge=0)
    restingHeartRate: Optional[float] = Field(None, ge=0)
    bloodOxygen: Optional[float] = Field(None, ge=0, le=100)
    sleepHours: Optional[float] = Field(None, ge=0, le=24)
    stressLevel: Optional[int] = Field(None, ge=0, le=10)
    injuries: Optional[str] = None
    medications: Optional[str] = None
    notes: Optional[str] = None
