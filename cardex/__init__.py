from . import csv_utils

__all__ = ["CatalogClient", "csv_utils"]


def __getattr__(name: str):
    if name == "CatalogClient":
        from .client import CatalogClient  # noqa: WPS433 - lazy import

        return CatalogClient
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
