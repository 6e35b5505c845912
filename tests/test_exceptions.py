"""Tests for exception classes."""

from gridlayout.exceptions import (
    ErrorCode,
    GridLayoutError,
    LineNameNotFoundError,
    OverlappingAreasError,
    PlacementError,
    PlacementOutOfRangeError,
)


class TestGridLayoutError:
    """Tests for GridLayoutError."""

    def test_defaults(self):
        """Test creating a basic error."""
        exc = GridLayoutError("Test error")

        assert exc.message == "Test error"
        assert exc.code == ErrorCode.GRID_ERROR
        assert exc.details == {}
        assert str(exc) == "Test error"

    def test_to_dict(self):
        """Test the structured form."""
        exc = GridLayoutError("bad", ErrorCode.CONFIG_ERROR, {"axis": "row"})

        assert exc.to_dict() == {"error": "CONFIG_ERROR", "message": "bad", "details": {"axis": "row"}}


class TestPlacementErrors:
    """Tests for placement error subclasses."""

    def test_line_name_not_found(self):
        """Test the message names the identifier and available names."""
        exc = LineNameNotFoundError("row", "nav", ["top", "bottom"])

        assert isinstance(exc, PlacementError)
        assert exc.code == ErrorCode.LINE_NAME_NOT_FOUND
        assert exc.message == (
            'line-name for specified row identifier not found in any tracks; row: "nav"; line-names: [top, bottom]'
        )

    def test_out_of_range_is_placement_error(self):
        """Test the out-of-range error hierarchy."""
        exc = PlacementOutOfRangeError("out", {"index": 0})

        assert isinstance(exc, PlacementError)
        assert isinstance(exc, GridLayoutError)
        assert exc.code == ErrorCode.PLACEMENT_OUT_OF_RANGE

    def test_overlapping_areas(self):
        """Test the overlap error details."""
        exc = OverlappingAreasError("a", "b", 2, 3)

        assert exc.code == ErrorCode.OVERLAPPING_AREAS
        assert exc.details == {"areas": ["a", "b"], "row": 2, "column": 3}
