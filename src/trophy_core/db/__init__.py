from .engine import Database
from .models import Base, CatalogApp

__all__ = ["Base", "CatalogApp", "Database"]
