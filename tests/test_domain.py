"""Tests for coordinate, cell and domain value types."""

import pytest
from geohash16.domain import (
    Coordinate,
    Cell,
    Domain,
    DEFAULT_DOMAIN,
    CARDINALS,
    DIRECTIONS,
)


class TestCell:
    """Tests for Cell class."""

    def test_basic_creation(self):
        """Test basic cell creation and spans."""
        cell = Cell(Coordinate(13.5, 75.5), Coordinate(21.0, 83.0))
        assert cell.lat_span == 7.5
        assert cell.lon_span == 7.5

    def test_invalid_cell(self):
        """Test that unordered corners raise errors."""
        with pytest.raises(ValueError):
            Cell(Coordinate(21.0, 75.5), Coordinate(13.5, 83.0))

        with pytest.raises(ValueError):
            Cell(Coordinate(13.5, 83.0), Coordinate(21.0, 75.5))

        with pytest.raises(ValueError):
            Cell(Coordinate(10.0, 70.0), Coordinate(10.0, 80.0))

    def test_center(self):
        """Test the unrounded midpoint."""
        cell = Cell(Coordinate(13.5, 75.5), Coordinate(21.0, 83.0))
        assert cell.center == Coordinate(17.25, 79.25)

    def test_contains(self):
        """Test point containment, edges included."""
        cell = Cell(Coordinate(0.0, 0.0), Coordinate(10.0, 10.0))
        assert cell.contains(5.0, 5.0)
        assert cell.contains(0.0, 0.0)
        assert cell.contains(10.0, 10.0)
        assert not cell.contains(10.5, 5.0)
        assert not cell.contains(5.0, -0.5)

    def test_contains_cell(self):
        """Test cell containment."""
        outer = Cell(Coordinate(0.0, 0.0), Coordinate(10.0, 10.0))
        inner = Cell(Coordinate(0.0, 5.0), Coordinate(5.0, 10.0))
        overlapping = Cell(Coordinate(5.0, 5.0), Coordinate(15.0, 15.0))
        assert outer.contains_cell(inner)
        assert not inner.contains_cell(outer)
        assert not outer.contains_cell(overlapping)


class TestDomain:
    """Tests for the working domain configuration."""

    def test_default_domain(self):
        """Test the default domain is the fixed working region."""
        assert DEFAULT_DOMAIN.lat_min == 6
        assert DEFAULT_DOMAIN.lat_max == 36
        assert DEFAULT_DOMAIN.lon_min == 68
        assert DEFAULT_DOMAIN.lon_max == 98
        assert DEFAULT_DOMAIN.max_precision == 12

    def test_as_cell(self):
        """Test the domain as a cell."""
        cell = DEFAULT_DOMAIN.as_cell()
        assert cell.sw == Coordinate(6, 68)
        assert cell.ne == Coordinate(36, 98)

    def test_invalid_domain(self):
        """Test that invalid domains raise errors."""
        with pytest.raises(ValueError):
            Domain(lat_min=36, lat_max=6)

        with pytest.raises(ValueError):
            Domain(lon_min=98, lon_max=98)

        with pytest.raises(ValueError):
            Domain(max_precision=0)


class TestDirections:
    """Tests for direction constants."""

    def test_cardinals(self):
        assert CARDINALS == ("n", "e", "s", "w")

    def test_directions(self):
        """Test all 8 compass directions, clockwise from north."""
        assert DIRECTIONS == ("n", "ne", "e", "se", "s", "sw", "w", "nw")
