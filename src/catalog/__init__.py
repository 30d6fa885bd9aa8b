"""Site-repository record conversion."""

from .records import (
    SITE_COLUMNS,
    site_from_record,
    sites_from_dataframe,
    sites_from_records,
    sites_to_dataframe,
)

__all__ = [
    "SITE_COLUMNS",
    "site_from_record",
    "sites_from_dataframe",
    "sites_from_records",
    "sites_to_dataframe",
]
