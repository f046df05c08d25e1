"""Timeclock — employee punch-in / punch-out kiosk service."""
