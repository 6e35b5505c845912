import logging
import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

from gridlayout.exceptions import InvalidGridAreaError, OverlappingAreasError

logger = logging.getLogger(__name__)

EMPTY_CELL = "."

_ROW_RE = re.compile(r'"([^"]*)"')


@dataclass(frozen=True)
class GridArea:
    """A rectangular region of the grid. Rows and columns are 1-based."""
    row: int
    column: int
    rows_spanned: int = 1
    columns_spanned: int = 1

    def __post_init__(self):
        for name in ("row", "column", "rows_spanned", "columns_spanned"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise InvalidGridAreaError(
                    f"grid area {name.replace('_', ' ')} must be an integer of 1 or larger; {name}: {value!r}",
                    details={name: value},
                )

    @property
    def last_row(self) -> int:
        return self.row + self.rows_spanned - 1

    @property
    def last_column(self) -> int:
        return self.column + self.columns_spanned - 1

    def cells(self) -> Iterator[Tuple[int, int]]:
        """Every (row, column) covered by the area."""
        for r in range(self.row, self.last_row + 1):
            for c in range(self.column, self.last_column + 1):
                yield r, c


def grid_area(row: int, column: int, spanned_rows: Optional[int] = None, spanned_columns: Optional[int] = None) -> GridArea:
    return GridArea(row, column, spanned_rows or 1, spanned_columns or 1)


@dataclass(frozen=True)
class NamedAreaTemplate:
    """
    A grid-template-areas value: the named areas in insertion order and the
    optional minimum matrix size used when rendering.
    """
    areas: Mapping[str, GridArea] = field(default_factory=dict)
    num_rows: Optional[int] = None
    num_columns: Optional[int] = None

    def __post_init__(self):
        object.__setattr__(self, "areas", MappingProxyType(dict(self.areas)))

    def __len__(self) -> int:
        return len(self.areas)

    def get(self, name: str) -> Optional[GridArea]:
        return self.areas.get(name)

    def is_empty(self) -> bool:
        return len(self.areas) == 0

    def is_non_empty(self) -> bool:
        return not self.is_empty()

    def row_bounds(self) -> Tuple[int, int]:
        """(first row, last row) covered by the areas; (0, 0) when empty."""
        if self.is_empty():
            return 0, 0
        return (
            min(area.row for area in self.areas.values()),
            max(area.last_row for area in self.areas.values()),
        )

    def column_bounds(self) -> Tuple[int, int]:
        """(first column, last column) covered by the areas; (0, 0) when empty."""
        if self.is_empty():
            return 0, 0
        return (
            min(area.column for area in self.areas.values()),
            max(area.last_column for area in self.areas.values()),
        )

    def overlaps(self) -> List[Tuple[str, str, int, int]]:
        """
        Finds the cells claimed by more than one area.

        Returns:
            (earlier area, later area, row, column) for each cell where a later
            area overwrites an earlier one.
        """
        owners: Dict[Tuple[int, int], str] = {}
        found = []
        for name, area in self.areas.items():
            for cell in area.cells():
                if cell in owners:
                    found.append((owners[cell], name, cell[0], cell[1]))
                owners[cell] = name
        return found

    def matrix(self, num_rows: Optional[int] = None, num_columns: Optional[int] = None) -> List[List[str]]:
        """
        Builds the row-major matrix of area names.

        The matrix is large enough to hold every area and at least the requested
        number of rows and columns. Unoccupied cells hold ".". Where areas
        overlap, the one added last wins.
        """
        num_rows = self.num_rows if num_rows is None else num_rows
        num_columns = self.num_columns if num_columns is None else num_columns

        _, row_upper = self.row_bounds()
        _, column_upper = self.column_bounds()
        row_max = row_upper if num_rows is None or num_rows < 1 else max(row_upper, num_rows)
        column_max = column_upper if num_columns is None or num_columns < 1 else max(column_upper, num_columns)

        matrix = [[EMPTY_CELL] * column_max for _ in range(row_max)]
        for name, area in self.areas.items():
            for r, c in area.cells():
                matrix[r - 1][c - 1] = name
        return matrix

    def as_string(self, num_rows: Optional[int] = None, num_columns: Optional[int] = None) -> str:
        """Render the areas in grid-template-areas syntax, one quoted row per line."""
        matrix = self.matrix(num_rows, num_columns)
        return "\n".join(f'"{" ".join(row)}"' for row in matrix if row)

    @classmethod
    def parse(cls, text: str) -> 'NamedAreaTemplate':
        """
        Read grid-template-areas text back into a template.

        Every name must cover a filled rectangle. The matrix size is kept as the
        template's row and column hints so trailing empty rows survive.
        """
        rows = [row.split() for row in _ROW_RE.findall(text or "")]
        if not rows:
            return cls()

        num_columns = len(rows[0])
        cells: Dict[str, List[Tuple[int, int]]] = {}
        for r, row in enumerate(rows, start=1):
            if len(row) != num_columns:
                raise InvalidGridAreaError(
                    f"every row of the grid template areas must have the same number of columns; "
                    f"row: {r}; expected columns: {num_columns}; found columns: {len(row)}",
                    details={"row": r, "expected": num_columns, "found": len(row)},
                )
            for c, name in enumerate(row, start=1):
                if set(name) == {EMPTY_CELL}:
                    continue
                cells.setdefault(name, []).append((r, c))

        areas = {}
        for name, positions in cells.items():
            first_row = min(r for r, _ in positions)
            last_row = max(r for r, _ in positions)
            first_column = min(c for _, c in positions)
            last_column = max(c for _, c in positions)
            area = GridArea(first_row, first_column, last_row - first_row + 1, last_column - first_column + 1)
            if len(positions) != area.rows_spanned * area.columns_spanned:
                raise InvalidGridAreaError(
                    f"grid area must form a rectangle; area: \"{name}\"",
                    details={"area": name, "cells": positions},
                )
            areas[name] = area
        return cls(areas, len(rows), num_columns)


def empty_named_area_template() -> NamedAreaTemplate:
    return NamedAreaTemplate()


class NamedAreaTemplateBuilder:
    """
    Builds a NamedAreaTemplate. Each call returns a new builder; re-adding a
    name replaces its area.

    In strict mode, names that cannot appear in grid-template-areas text and
    areas that overlap an existing area are rejected.
    """

    def __init__(self, areas: Optional[Mapping[str, GridArea]] = None, strict: bool = False):
        self._areas: Dict[str, GridArea] = dict(areas or {})
        self.strict = strict

    @property
    def template(self) -> NamedAreaTemplate:
        return NamedAreaTemplate(self._areas)

    def add_area(self, name: str, area: GridArea) -> 'NamedAreaTemplateBuilder':
        if self.strict:
            self._check_name(name)
            self._check_overlap(name, area)
        areas = dict(self._areas)
        areas[name] = area
        return NamedAreaTemplateBuilder(areas, self.strict)

    def build(self, num_rows: Optional[int] = None, num_columns: Optional[int] = None) -> NamedAreaTemplate:
        template = NamedAreaTemplate(self._areas, num_rows, num_columns)
        for first, second, row, column in template.overlaps():
            logger.warning(
                "Grid area \"%s\" overwrites \"%s\" at (row, column): (%d, %d)",
                second, first, row, column
            )
        return template

    @staticmethod
    def _check_name(name: str):
        if not isinstance(name, str) or not name or set(name) == {EMPTY_CELL} or any(ch.isspace() or ch == '"' for ch in name):
            raise InvalidGridAreaError(
                f"grid area name must be a non-empty identifier without whitespace, quotes, or only dots; name: {name!r}",
                details={"name": name},
            )

    def _check_overlap(self, name: str, area: GridArea):
        claimed = set(area.cells())
        for other_name, other in self._areas.items():
            if other_name == name:
                continue
            for row, column in other.cells():
                if (row, column) in claimed:
                    raise OverlappingAreasError(other_name, name, row, column)


def grid_template_areas_builder(strict: bool = False) -> NamedAreaTemplateBuilder:
    return NamedAreaTemplateBuilder(strict=strict)
