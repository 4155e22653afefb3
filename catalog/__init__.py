from .model import TRANSLATED_STATE, Catalog, CatalogEntry, LocalizationUnit

__all__ = [
    "TRANSLATED_STATE",
    "Catalog",
    "CatalogEntry",
    "LocalizationUnit",
]
