import json
import logging
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from gridlayout.exceptions import InvalidGridAreaError, InvalidTrackSizeError, LayoutFileError
from gridlayout.model.area_template import GridArea, NamedAreaTemplate, empty_named_area_template
from gridlayout.model.enums import TrackSizeType
from gridlayout.model.migrations import migrate_layout_data
from gridlayout.model.track_template import GridTrack, LineNames, TrackSize, TrackTemplate
from gridlayout.version import APP_VERSION

logger = logging.getLogger(__name__)


def track_template_to_dict(template: TrackTemplate) -> Dict[str, Any]:
    # Amounts are stored unrounded; as_string() floors them
    return {
        "tracks": [
            {
                "size_type": track.size.size_type.value,
                "amount": track.size.amount,
                "line_names": list(track.line_names.names) if track.line_names else [],
            }
            for track in template.tracks
        ],
        "last_line_names": list(template.last_line_names.names) if template.last_line_names else [],
    }


def _size_type_from(value: Any) -> TrackSizeType:
    try:
        return TrackSizeType(value)
    except ValueError as e:
        raise InvalidTrackSizeError(
            f"unsupported track size type; expected px, % or fr; size_type: {value!r}",
            details={"size_type": value},
        ) from e


def track_template_from_dict(data: Union[str, Dict[str, Any], None]) -> Optional[TrackTemplate]:
    """Accepts the stored form or a CSS track list such as ``"[nav] 200px 1fr"``."""
    if data is None:
        return None
    if isinstance(data, str):
        return TrackTemplate.parse(data)
    tracks = []
    for t in data.get("tracks", []):
        names = t.get("line_names") or []
        tracks.append(GridTrack(
            TrackSize(_size_type_from(t.get("size_type", "fr")), t.get("amount", 1)),
            LineNames(names) if names else None
        ))
    last = data.get("last_line_names") or []
    return TrackTemplate(tuple(tracks), LineNames(last) if last else None)


def named_area_template_to_dict(template: NamedAreaTemplate) -> Dict[str, Any]:
    return {
        "areas": {
            name: [area.row, area.column, area.rows_spanned, area.columns_spanned]
            for name, area in template.areas.items()
        },
        "num_rows": template.num_rows,
        "num_columns": template.num_columns,
    }


def named_area_template_from_dict(data: Union[str, Dict[str, Any], None]) -> NamedAreaTemplate:
    """Accepts the stored form or grid-template-areas text."""
    if not data:
        return empty_named_area_template()
    if isinstance(data, str):
        return NamedAreaTemplate.parse(data)
    areas = {}
    for name, values in data.get("areas", {}).items():
        if not isinstance(values, (list, tuple)) or not 2 <= len(values) <= 4:
            raise InvalidGridAreaError(
                f"grid area must be stored as [row, column, rows_spanned, columns_spanned]; "
                f"area: \"{name}\"; values: {values!r}",
                details={"area": name, "values": values},
            )
        areas[name] = GridArea(*values)
    return NamedAreaTemplate(areas, data.get("num_rows"), data.get("num_columns"))


@dataclass
class GridCellSpec:
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    # Placement, either by row/column (index or line-name) or by area name
    row: Optional[Union[int, str]] = None
    column: Optional[Union[int, str]] = None
    rows_spanned: int = 1
    columns_spanned: int = 1
    area_name: Optional[str] = None

    is_visible: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "row": self.row,
            "column": self.column,
            "rows_spanned": self.rows_spanned,
            "columns_spanned": self.columns_spanned,
            "area_name": self.area_name,
            "is_visible": self.is_visible,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GridCellSpec':
        cell = cls(
            row=data.get("row"),
            column=data.get("column"),
            rows_spanned=data.get("rows_spanned", 1),
            columns_spanned=data.get("columns_spanned", 1),
            area_name=data.get("area_name"),
            is_visible=data.get("is_visible", True),
        )
        if data.get("id"):
            cell.id = data["id"]
        return cell


@dataclass
class GridLayout:
    name: str = "Untitled Grid"

    # Templates; rows or columns left as None are derived from the cells
    rows: Optional[TrackTemplate] = None
    columns: Optional[TrackTemplate] = None
    areas: NamedAreaTemplate = field(default_factory=empty_named_area_template)

    # Pixels between rows and between columns
    row_gap: float = 0
    column_gap: float = 0

    show_grid: bool = False

    cells: List[GridCellSpec] = field(default_factory=list)

    def get_cell(self, cell_id: str) -> Optional[GridCellSpec]:
        for cell in self.cells:
            if cell.id == cell_id:
                return cell
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "file_version": APP_VERSION,
            "name": self.name,
            "rows": track_template_to_dict(self.rows) if self.rows is not None else None,
            "columns": track_template_to_dict(self.columns) if self.columns is not None else None,
            "areas": named_area_template_to_dict(self.areas),
            "row_gap": self.row_gap,
            "column_gap": self.column_gap,
            "show_grid": self.show_grid,
            "cells": [c.to_dict() for c in self.cells],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GridLayout':
        data = migrate_layout_data(dict(data))

        g = cls()
        g.name = data.get("name", "Untitled Grid")
        g.rows = track_template_from_dict(data.get("rows"))
        g.columns = track_template_from_dict(data.get("columns"))
        g.areas = named_area_template_from_dict(data.get("areas"))
        g.row_gap = data.get("row_gap", 0)
        g.column_gap = data.get("column_gap", 0)
        g.show_grid = data.get("show_grid", False)
        g.cells = [GridCellSpec.from_dict(c) for c in data.get("cells", [])]
        return g

    def save_to_file(self, filepath: str):
        with open(filepath, 'w', encoding='utf-8') as f:
            json.dump(self.to_dict(), f, indent=4)
        logger.info("Saved grid layout \"%s\" to %s", self.name, filepath)

    @classmethod
    def load_from_file(cls, filepath: str) -> 'GridLayout':
        try:
            with open(filepath, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except OSError as e:
            raise LayoutFileError(f"unable to read layout file; path: {filepath}; error: {e}", details={"path": filepath}) from e
        except json.JSONDecodeError as e:
            raise LayoutFileError(f"layout file is not valid JSON; path: {filepath}; error: {e}", details={"path": filepath}) from e
        if not isinstance(data, dict):
            raise LayoutFileError(f"layout file must hold a JSON object; path: {filepath}", details={"path": filepath})

        layout = cls.from_dict(data)
        logger.info("Loaded grid layout \"%s\" from %s (%d cells)", layout.name, filepath, len(layout.cells))
        return layout
