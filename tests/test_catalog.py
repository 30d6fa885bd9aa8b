"""
Unit Tests for Site Records (src/catalog)

Tests conversion of repository rows (mappings and DataFrames) into Sites.
"""

import math

import pandas as pd
import pytest

from src.catalog import (
    SITE_COLUMNS,
    site_from_record,
    sites_from_dataframe,
    sites_from_records,
    sites_to_dataframe,
)
from src.spatial import ABSENT, GeoPoint, Present


class TestSiteFromRecord:
    """Test single-row conversion."""

    def test_geotagged_record(self, sample_site_records):
        """Test a full row maps onto Site fields."""
        site = site_from_record(sample_site_records[0])

        assert site.id == "rec-1"
        assert site.name == "Masjid Kuno Bayan Beleq"
        assert site.local_name == "Masjid Bayan Beleq"
        assert site.category_name == "Mosque"
        assert site.category_color == "#0ea5e9"
        assert site.coordinates == Present(GeoPoint(-8.2746, 116.4192))
        assert site.significance_score == 9.5

    def test_null_coordinates_are_absent(self, sample_site_records):
        """Test null coordinates produce an untagged site."""
        site = site_from_record(sample_site_records[1])

        assert site.coordinates == ABSENT
        assert site.is_geotagged is False
        assert site.significance_score is None

    def test_nan_coordinates_are_absent(self):
        site = site_from_record({"id": "n", "latitude": float("nan"), "longitude": 116.3})
        assert site.coordinates == ABSENT

    def test_zero_coordinates_are_kept(self):
        """Test a site at latitude 0 is still geotagged."""
        site = site_from_record({"id": "z", "latitude": 0.0, "longitude": 0.0})
        assert site.point == GeoPoint(0.0, 0.0)

    def test_missing_keys_are_null(self):
        site = site_from_record({"id": 42})
        assert site.id == "42"
        assert site.name is None
        assert site.is_geotagged is False

    @pytest.mark.parametrize("record", [{}, {"id": None}, {"id": float("nan")}])
    def test_missing_id_raises(self, record):
        """Test rows without an id are rejected."""
        with pytest.raises(ValueError, match="id"):
            site_from_record(record)

    def test_records_keep_order(self, sample_site_records):
        sites = sites_from_records(sample_site_records)
        assert [s.id for s in sites] == ["rec-1", "rec-2"]


class TestDataFrames:
    """Test DataFrame conversion."""

    def test_from_dataframe(self, sample_site_df):
        """Test pandas NaN in coordinates gives Absent."""
        sites = sites_from_dataframe(sample_site_df)

        assert [s.id for s in sites] == ["rec-1", "rec-2"]
        assert sites[0].is_geotagged
        assert sites[1].coordinates == ABSENT
        assert sites[1].local_name is None

    def test_extra_columns_ignored(self, sample_site_df):
        df = sample_site_df.assign(created_at="2024-01-01")
        assert len(sites_from_dataframe(df)) == 2

    def test_empty_dataframe(self):
        assert sites_from_dataframe(pd.DataFrame(columns=list(SITE_COLUMNS))) == []

    def test_to_dataframe_and_back(self, sample_site_df):
        """Test sites survive a DataFrame round trip."""
        sites = sites_from_dataframe(sample_site_df)
        df = sites_to_dataframe(sites)

        assert list(df.columns) == list(SITE_COLUMNS)
        assert math.isnan(df.loc[1, "latitude"])
        assert sites_from_dataframe(df) == sites
