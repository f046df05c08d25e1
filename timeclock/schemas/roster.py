"""Pydantic schemas for roster entries."""

from __future__ import annotations

from pydantic import BaseModel, field_validator


class RosterEntry(BaseModel):
    name: str
    department: str

    @field_validator("name", "department")
    @classmethod
    def _strip(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be empty")
        return v
