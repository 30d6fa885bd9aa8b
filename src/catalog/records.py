"""
Conversion of site-repository rows into :class:`~src.spatial.models.Site`.

The repository exposes the ``sites_with_categories`` view with snake_case
columns and nullable coordinates. Rows can arrive as plain mappings (API
payloads) or as a :class:`~pandas.DataFrame` (batch exports); both paths
normalise missing values (None / NaN) the same way.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional

import pandas as pd

from ..spatial.geodesy import coordinates_from
from ..spatial.models import Site


SITE_COLUMNS = (
    "id",
    "name",
    "local_name",
    "category_name",
    "category_color",
    "latitude",
    "longitude",
    "cultural_significance_score",
    "preservation_status",
)


def _clean(value: Any) -> Any:
    """Map pandas/NumPy missing markers to None."""
    if value is None:
        return None
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        # list-like values are not scalars; keep them as they are
        return value
    return value


def _optional_float(value: Any) -> Optional[float]:
    value = _clean(value)
    return None if value is None else float(value)


def _optional_str(value: Any) -> Optional[str]:
    value = _clean(value)
    return None if value is None else str(value)


def site_from_record(record: Mapping[str, Any]) -> Site:
    """
    Build a Site from one repository row.

    Args:
        record: Mapping with the ``sites_with_categories`` columns; missing
            keys are treated as null

    Raises:
        ValueError: If the row has no ``id``
    """
    site_id = _clean(record.get("id"))
    if site_id is None:
        raise ValueError("Site record is missing 'id'")

    return Site(
        id=str(site_id),
        name=_optional_str(record.get("name")),
        local_name=_optional_str(record.get("local_name")),
        category_name=_optional_str(record.get("category_name")),
        category_color=_optional_str(record.get("category_color")),
        coordinates=coordinates_from(
            _optional_float(record.get("latitude")),
            _optional_float(record.get("longitude")),
        ),
        significance_score=_optional_float(record.get("cultural_significance_score")),
        preservation_status=_optional_str(record.get("preservation_status")),
    )


def sites_from_records(records: Iterable[Mapping[str, Any]]) -> List[Site]:
    """Convert an iterable of repository rows, preserving order."""
    return [site_from_record(record) for record in records]


def sites_from_dataframe(df: pd.DataFrame) -> List[Site]:
    """
    Convert a DataFrame of repository rows, preserving row order.

    Columns outside :data:`SITE_COLUMNS` are ignored; absent columns are
    treated as null.
    """
    if df.empty:
        return []
    columns = [column for column in SITE_COLUMNS if column in df.columns]
    return sites_from_records(df[columns].to_dict("records"))


def sites_to_dataframe(sites: Iterable[Site]) -> pd.DataFrame:
    """Inverse of :func:`sites_from_dataframe` (untagged sites keep NaN coordinates)."""
    rows = [
        {
            "id": site.id,
            "name": site.name,
            "local_name": site.local_name,
            "category_name": site.category_name,
            "category_color": site.category_color,
            "latitude": site.latitude,
            "longitude": site.longitude,
            "cultural_significance_score": site.significance_score,
            "preservation_status": site.preservation_status,
        }
        for site in sites
    ]
    return pd.DataFrame(rows, columns=list(SITE_COLUMNS))


__all__ = [
    "SITE_COLUMNS",
    "site_from_record",
    "sites_from_dataframe",
    "sites_from_records",
    "sites_to_dataframe",
]
