"""Pydantic schemas for punch records, derived view state and the kiosk API."""

from __future__ import annotations

from typing import Any, Dict

from pydantic import BaseModel, Field, StrictBool, StrictStr, TypeAdapter, model_validator

UNPUNCHED_LABEL = "unpunched"


# ── Persisted record ────────────────────────────────────────────────
class DailyRecord(BaseModel):
    """Attendance fact for one (user, date) pair.

    Serialised with the camelCase field names of the storage blob. Unknown
    keys (``userName``, ``department``, ``timestamp`` ...) are kept as extras
    so a load/save cycle never drops them.
    """

    start_time: StrictStr | None = Field(default=None, alias="startTime")
    finish_time: StrictStr | None = Field(default=None, alias="finishTime")
    punched_in: StrictBool = Field(default=False, alias="punchedIn")

    model_config = {"populate_by_name": True, "extra": "allow"}

    @model_validator(mode="after")
    def _check_lifecycle(self) -> "DailyRecord":
        if self.start_time is not None and not self.punched_in:
            raise ValueError("startTime is set but punchedIn is false")
        if self.punched_in and self.start_time is None:
            raise ValueError("punchedIn is true but startTime is missing")
        if self.finish_time is not None and (not self.punched_in or self.start_time is None):
            raise ValueError("finishTime is set before a punch-in")
        return self

    def annotate(self, **extras: Any) -> None:
        """Attach denormalised display fields (ignored by the state logic)."""
        for name, value in extras.items():
            setattr(self, name, value)

    def to_storage(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


# UserId -> DateKey -> DailyRecord
AttendanceDataset = Dict[str, Dict[str, DailyRecord]]

dataset_adapter: TypeAdapter[AttendanceDataset] = TypeAdapter(AttendanceDataset)


# ── Derived (never persisted) ───────────────────────────────────────
class UIViewState(BaseModel):
    punch_in_enabled: bool
    punch_out_enabled: bool
    start_label: str
    finish_label: str


class CardIndicators(BaseModel):
    in_active: bool
    out_active: bool


# ── Cards ───────────────────────────────────────────────────────────
class CardRead(BaseModel):
    user_id: str
    name: str
    department: str
    date: str
    start_time: str | None
    finish_time: str | None
    indicators: CardIndicators
    view: UIViewState


class CardListResponse(BaseModel):
    date: str
    cards: list[CardRead]
    message: str | None = None


# ── Modal ───────────────────────────────────────────────────────────
class ModalResponse(BaseModel):
    user_id: str
    name: str
    department: str
    known_user: bool
    date: str
    view: UIViewState


class CloseModalResponse(BaseModel):
    closed: bool
    selected_user_id: str | None = None


# ── Punch ───────────────────────────────────────────────────────────
class PunchResponse(BaseModel):
    success: bool
    event: str  # IN | OUT
    user_id: str | None = None
    name: str | None = None
    department: str | None = None
    date: str
    time: str | None = None
    view: UIViewState | None = None
    detail: str | None = None


# ── Attendance list ─────────────────────────────────────────────────
class AttendanceRow(BaseModel):
    user_id: str
    name: str
    department: str
    date: str
    start_time: str = UNPUNCHED_LABEL
    finish_time: str = UNPUNCHED_LABEL


class AttendanceListResponse(BaseModel):
    today: str
    rows: list[AttendanceRow]
    message: str | None = None


# ── Clock / Health ──────────────────────────────────────────────────
class ClockResponse(BaseModel):
    date_key: str
    date_display: str
    time_display: str


class HealthResponse(BaseModel):
    storage: bool
    persistence_scope: str
