"""Infrastructure models package exports."""
from .base import Base, metadata
from .user import UserModel
from .pickup_point import PickupPointModel
from .reception import ReceptionModel, ProductModel

__all__ = [
    "Base",
    "metadata",
    "UserModel",
    "PickupPointModel",
    "ReceptionModel",
    "ProductModel",
]
