"""
SQLAlchemy declarative base shared by all models.
"""

from __future__ import annotations

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    # Models annotate Column attributes with plain types, not Mapped[]
    __allow_unmapped__ = True
