"""
V1 API router aggregator — wires all endpoint modules together.
"""

from fastapi import APIRouter

from timeclock.api.v1.endpoints import cards, punch, system

api_router = APIRouter()

# Roster cards, attendance list
api_router.include_router(cards.router)

# Modal selection, punch in / out
api_router.include_router(punch.router)

# Clock, health
api_router.include_router(system.router)
