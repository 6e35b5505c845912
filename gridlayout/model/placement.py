"""Resolves where a grid cell sits and how large it is.

A cell is placed either by the name of an area in the grid template areas or
by an explicit row and column (a 1-based index or a grid line-name) with
optional spans. Both paths end in a validated GridArea whose indices are
numbers, and from that in a pixel box computed from the track templates.
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional, Tuple

from gridlayout.exceptions import LineNameNotFoundError, PlacementError, PlacementOutOfRangeError
from gridlayout.model.area_template import GridArea, NamedAreaTemplate
from gridlayout.model.track_template import (
    TrackIdentifier,
    TrackTemplate,
    cell_dimension_for,
    grid_line_names_for,
    track_index_for,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CellBox:
    """Position and size of a cell's content in pixels, relative to the grid origin."""
    x: int
    y: int
    width: int
    height: int

    def as_tuple(self) -> Tuple[int, int, int, int]:
        return self.x, self.y, self.width, self.height


def grid_cell_placement_from(template: Optional[NamedAreaTemplate], area_name: Optional[str]) -> Optional[GridArea]:
    """
    Looks up the area for a cell placed by name.

    Returns:
        The area, or None when the template is empty, no name was given, or
        the name is not in the template. None means the caller falls back to
        the explicit row and column.
    """
    if template is None or template.is_empty() or not area_name:
        return None
    return template.get(area_name)


def _resolve_index(axis: str, identifier: TrackIdentifier, template: TrackTemplate) -> int:
    index = track_index_for(identifier, template)
    if index is None:
        raise LineNameNotFoundError(axis, identifier, grid_line_names_for(template))
    if isinstance(index, bool) or not isinstance(index, int):
        raise PlacementError(
            f"{axis} must be an integer index or a grid line-name; {axis}: {identifier!r}",
            details={"axis": axis, "identifier": identifier},
        )
    return index


def _check_range(axis: str, index: int, spanned: int, count: int, identifier):
    if index < 1 or index > count:
        raise PlacementOutOfRangeError(
            f"cell {axis} must be between 1 and the number of {axis}s; "
            f"number of {axis}s: {count}; {axis}: {identifier}",
            details={"axis": axis, "index": index, "identifier": identifier, "valid_range": [1, count]},
        )
    if isinstance(spanned, bool) or not isinstance(spanned, int) or spanned < 1:
        raise PlacementOutOfRangeError(
            f"the number of {axis}s spanned by the cell must be 1 or larger; {axis}s spanned: {spanned}",
            details={"axis": axis, "spanned": spanned},
        )


def resolve_cell_placement(
    rows: TrackTemplate,
    columns: TrackTemplate,
    areas: Optional[NamedAreaTemplate] = None,
    *,
    row: Optional[TrackIdentifier] = None,
    column: Optional[TrackIdentifier] = None,
    rows_spanned: Optional[int] = None,
    columns_spanned: Optional[int] = None,
    area_name: Optional[str] = None,
) -> GridArea:
    """
    Resolves a cell's placement to numeric, range-checked indices.

    Args:
        rows: The grid-template-rows
        columns: The grid-template-columns
        areas: The grid-template-areas (may be empty)
        row: The 1-based row index or a row line-name
        column: The 1-based column index or a column line-name
        rows_spanned: Number of rows the cell spans (default 1)
        columns_spanned: Number of columns the cell spans (default 1)
        area_name: Name of the grid area holding the cell; takes precedence
            over row and column when found

    Returns:
        The cell's GridArea

    Raises:
        PlacementError: Neither a known area nor both a row and column were given
        LineNameNotFoundError: A row or column line-name is not in its template
        PlacementOutOfRangeError: An index lies outside the template or a span is below 1
    """
    area = grid_cell_placement_from(areas, area_name)
    if area is None and (row is None or column is None):
        raise PlacementError(
            "cell must name an area in the grid template areas or specify both a row and a column; "
            f"area name: {area_name!r}; row: {row!r}; column: {column!r}",
            details={"area_name": area_name, "row": row, "column": column},
        )

    if area is not None:
        row_index, column_index = area.row, area.column
        spanned_rows, spanned_columns = area.rows_spanned, area.columns_spanned
        row, column = area.row, area.column
    else:
        row_index = _resolve_index("row", row, rows)
        column_index = _resolve_index("column", column, columns)
        spanned_rows = 1 if rows_spanned is None else rows_spanned
        spanned_columns = 1 if columns_spanned is None else columns_spanned

    _check_range("row", row_index, spanned_rows, len(rows), row)
    _check_range("column", column_index, spanned_columns, len(columns), column)

    return GridArea(row_index, column_index, spanned_rows, spanned_columns)


def cell_box_for(
    placement: GridArea,
    width: float,
    height: float,
    rows: TrackTemplate,
    columns: TrackTemplate,
    row_gap: float = 0,
    column_gap: float = 0,
) -> CellBox:
    """Pixel box of a placed cell inside a grid of the given width and height."""
    x = columns.track_offsets(width, column_gap)[placement.column - 1]
    y = rows.track_offsets(height, row_gap)[placement.row - 1]
    box = CellBox(
        x=math.floor(x),
        y=math.floor(y),
        width=cell_dimension_for(width, placement.column, column_gap, placement.columns_spanned, columns),
        height=cell_dimension_for(height, placement.row, row_gap, placement.rows_spanned, rows),
    )
    logger.debug("Cell %s placed at %s", placement, box)
    return box
