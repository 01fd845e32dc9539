"""Tests for jurisdiction precedence ranking."""
import pytest
from jurismap.core.boundaries import build_boundary
from jurismap.core.models import Point
from jurismap.core.ranker import JurisdictionRanker, rank

from helpers import raw_record, square

ORIGIN = Point(latitude=0, longitude=0)


def ids(polygons):
    return [polygon.id for polygon in polygons]


def make(feature_id, jurisdiction_type, size):
    return build_boundary(raw_record(feature_id, [square(-size, -size, size, size)], jurisdiction_type))


def test_city_before_county():
    city = make("C", "municipal", 1)
    county = make("Q", "county", 5)

    assert ids(rank(ORIGIN, [county, city])) == ["C", "Q"]


def test_full_precedence_order():
    polygons = [
        make("other", "other", 1),
        make("fire", "fire-district", 2),
        make("state", "state", 3),
        make("county", "county", 4),
        make("city", "municipal", 5),
    ]

    assert ids(rank(ORIGIN, polygons)) == ["city", "county", "state", "fire", "other"]


def test_smaller_area_wins_within_a_layer():
    outer_city = make("big", "municipal", 3)
    inner_city = make("small", "municipal", 1)

    assert ids(rank(ORIGIN, [outer_city, inner_city])) == ["small", "big"]


def test_id_breaks_exact_ties():
    a = make("a", "county", 2)
    b = make("b", "county", 2)

    assert ids(rank(ORIGIN, [b, a])) == ["a", "b"]


def test_empty_matches():
    assert rank(ORIGIN, []) == []


def test_custom_precedence():
    ranker = JurisdictionRanker(["fire-district", "municipal"])
    fire = make("fire", "fire-district", 5)
    city = make("city", "municipal", 1)
    county = make("county", "county", 2)

    assert ids(ranker.rank(ORIGIN, [county, city, fire])) == ["fire", "city", "county"]


def test_precedence_accepts_aliases():
    ranker = JurisdictionRanker(["city", "parish", "state", "fire_district", "other"])
    city = make("city", "municipal", 3)
    county = make("county", "county", 1)

    assert ids(ranker.rank(ORIGIN, [county, city])) == ["city", "county"]


def test_unknown_precedence_entry_is_rejected():
    with pytest.raises(ValueError, match="munciipal"):
        JurisdictionRanker(["munciipal", "county", "state"])
