"""Reception domain exports."""
from .entity import Product, ProductCategory, Reception, ReceptionStatus, parse_category
from .repository import ProductRepository, ReceptionFilter, ReceptionRepository
from .service import ReceptionDomainService

__all__ = [
    "Product",
    "ProductCategory",
    "Reception",
    "ReceptionStatus",
    "parse_category",
    "ProductRepository",
    "ReceptionFilter",
    "ReceptionRepository",
    "ReceptionDomainService",
]
