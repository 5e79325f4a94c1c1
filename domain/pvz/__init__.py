"""Pickup point domain exports."""
from .entity import City, PickupPoint, parse_city
from .repository import PickupPointRepository
from .report import PickupPointReport, ReceptionReport, ReportFilter, ReportRepository

__all__ = [
    "City",
    "PickupPoint",
    "parse_city",
    "PickupPointRepository",
    "PickupPointReport",
    "ReceptionReport",
    "ReportFilter",
    "ReportRepository",
]
