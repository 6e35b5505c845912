"""Exceptions raised by the grid layout engine."""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(str, Enum):
    """Error codes for structured error output."""

    GRID_ERROR = "GRID_ERROR"

    # Template construction
    INVALID_TRACK_SIZE = "INVALID_TRACK_SIZE"
    INVALID_GRID_AREA = "INVALID_GRID_AREA"
    OVERLAPPING_AREAS = "OVERLAPPING_AREAS"

    # Cell placement
    PLACEMENT_ERROR = "PLACEMENT_ERROR"
    LINE_NAME_NOT_FOUND = "LINE_NAME_NOT_FOUND"
    PLACEMENT_OUT_OF_RANGE = "PLACEMENT_OUT_OF_RANGE"

    # Layout description
    CONFIG_ERROR = "CONFIG_ERROR"
    LAYOUT_FILE_ERROR = "LAYOUT_FILE_ERROR"


class GridLayoutError(Exception):
    """Base exception for grid layout errors.

    All errors raised by this package inherit from this class so that
    callers can catch a single type at the placement boundary.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.GRID_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ):
        """Initialize grid layout error.

        Args:
            message: Human-readable error message
            code: Error code from ErrorCode enum
            details: Additional error context (offending values, valid ranges)
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to a dictionary for structured output."""
        return {
            "error": self.code.value,
            "message": self.message,
            "details": self.details,
        }


class InvalidTrackSizeError(GridLayoutError):
    """A track size or repeat count is not valid."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code=ErrorCode.INVALID_TRACK_SIZE, details=details)


class InvalidGridAreaError(GridLayoutError):
    """A grid area has a non-positive coordinate or span, or a bad name."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code=ErrorCode.INVALID_GRID_AREA, details=details)


class OverlappingAreasError(GridLayoutError):
    """Two named areas cover the same cell (strict builders only)."""

    def __init__(self, first: str, second: str, row: int, column: int):
        super().__init__(
            f"grid areas overlap; areas: \"{first}\", \"{second}\"; cell (row, column): ({row}, {column})",
            code=ErrorCode.OVERLAPPING_AREAS,
            details={"areas": [first, second], "row": row, "column": column},
        )


class PlacementError(GridLayoutError):
    """A grid cell could not be placed."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.PLACEMENT_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, code=code, details=details)


class LineNameNotFoundError(PlacementError):
    """A row or column line name is not present in any track."""

    def __init__(self, axis: str, identifier: str, line_names: list):
        names = ", ".join(line_names)
        super().__init__(
            f"line-name for specified {axis} identifier not found in any tracks; "
            f"{axis}: \"{identifier}\"; line-names: [{names}]",
            code=ErrorCode.LINE_NAME_NOT_FOUND,
            details={"axis": axis, "identifier": identifier, "line_names": list(line_names)},
        )


class PlacementOutOfRangeError(PlacementError):
    """A row/column index or span lies outside the template."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code=ErrorCode.PLACEMENT_OUT_OF_RANGE, details=details)


class GridConfigurationError(GridLayoutError):
    """The layout description cannot produce a grid."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code=ErrorCode.CONFIG_ERROR, details=details)


class LayoutFileError(GridLayoutError):
    """A layout file could not be read or decoded."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code=ErrorCode.LAYOUT_FILE_ERROR, details=details)
