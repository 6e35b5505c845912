import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

from gridlayout.exceptions import GridConfigurationError
from gridlayout.model.area_template import GridArea
from gridlayout.model.data_model import GridLayout
from gridlayout.model.placement import CellBox, cell_box_for, resolve_cell_placement
from gridlayout.model.track_template import (
    TrackTemplate,
    grid_track_template_builder,
    with_fraction,
    with_grid_track,
)

logger = logging.getLogger(__name__)


@dataclass
class LayoutResult:
    # Map cell ID to its pixel box
    cell_rects: Dict[str, CellBox] = field(default_factory=dict)
    # Map cell ID to its resolved (numeric) placement
    placements: Dict[str, GridArea] = field(default_factory=dict)
    row_sizes: List[float] = field(default_factory=list)
    column_sizes: List[float] = field(default_factory=list)
    width: float = 0
    height: float = 0
    row_gap: float = 0
    column_gap: float = 0
    grid_template_rows: str = ""
    grid_template_columns: str = ""
    grid_template_areas: str = ""

    def css_properties(self) -> Dict[str, Union[str, float]]:
        """CSS properties for the grid container; empty templates are left out."""
        css: Dict[str, Union[str, float]] = {"display": "grid"}
        if self.grid_template_rows:
            css["grid-template-rows"] = self.grid_template_rows
        if self.grid_template_columns:
            css["grid-template-columns"] = self.grid_template_columns
        if self.grid_template_areas:
            css["grid-template-areas"] = self.grid_template_areas
        css["row-gap"] = self.row_gap
        css["column-gap"] = self.column_gap
        css["min-width"] = self.width
        css["min-height"] = self.height
        return css


class LayoutEngine:
    @staticmethod
    def default_track_template(count: int) -> TrackTemplate:
        """``count`` equal fraction tracks."""
        return grid_track_template_builder().repeat_for(count, with_grid_track(with_fraction(1))).build()

    @staticmethod
    def template_for(template: Optional[TrackTemplate], layout: GridLayout, axis: str) -> TrackTemplate:
        """
        Returns the layout's template for the axis ("row" or "column"), or,
        when it has none, equal fraction tracks enough for every cell.
        """
        if template is not None:
            return template

        count = 0
        for cell in layout.cells:
            if not cell.is_visible:
                continue
            area = layout.areas.get(cell.area_name) if cell.area_name else None
            if area is not None:
                start = area.row if axis == "row" else area.column
                spanned = area.rows_spanned if axis == "row" else area.columns_spanned
            else:
                start = cell.row if axis == "row" else cell.column
                spanned = cell.rows_spanned if axis == "row" else cell.columns_spanned
            if isinstance(start, int) and not isinstance(start, bool):
                count = max(count, start + (spanned or 1) - 1)

        if count <= 0:
            raise GridConfigurationError(
                f"{axis}s defined by the cells must be 1 or larger, or the grid-template-{axis}s must be set; "
                f"specified {axis}s: {count}",
                details={"axis": axis, "count": count},
            )
        logger.debug("No grid-template-%ss given; using %d equal tracks", axis, count)
        return LayoutEngine.default_track_template(count)

    @staticmethod
    def calculate_layout(layout: GridLayout, width: float, height: float) -> LayoutResult:
        """
        Calculates the pixel box of every visible cell in the layout.
        Rows are solved against the height and columns against the width.
        """
        rows = LayoutEngine.template_for(layout.rows, layout, "row")
        columns = LayoutEngine.template_for(layout.columns, layout, "column")

        result = LayoutResult(
            row_sizes=rows.track_sizes(height, layout.row_gap),
            column_sizes=columns.track_sizes(width, layout.column_gap),
            width=width,
            height=height,
            row_gap=layout.row_gap,
            column_gap=layout.column_gap,
            grid_template_rows=rows.as_string(),
            grid_template_columns=columns.as_string(),
            grid_template_areas=layout.areas.as_string(),
        )

        for cell in layout.cells:
            if not cell.is_visible:
                continue
            placement = resolve_cell_placement(
                rows, columns, layout.areas,
                row=cell.row,
                column=cell.column,
                rows_spanned=cell.rows_spanned,
                columns_spanned=cell.columns_spanned,
                area_name=cell.area_name,
            )
            result.placements[cell.id] = placement
            result.cell_rects[cell.id] = cell_box_for(
                placement, width, height, rows, columns, layout.row_gap, layout.column_gap
            )

        logger.debug(
            "Laid out %d cells in %sx%s; rows: %s; columns: %s",
            len(result.cell_rects), width, height, result.row_sizes, result.column_sizes
        )
        return result
