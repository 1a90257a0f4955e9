"""Reporting — представления поездки поверх движка расчёта."""

from .trip_views import (
    VIEW_SCHEMA_VERSION,
    TripSettlement,
    TripSummary,
    build_trip_settlement,
    build_trip_summary,
    format_money,
    render_settlement_text,
    settle_summary,
)

__all__ = [
    "VIEW_SCHEMA_VERSION",
    "TripSummary",
    "TripSettlement",
    "build_trip_summary",
    "build_trip_settlement",
    "settle_summary",
    "format_money",
    "render_settlement_text",
]
