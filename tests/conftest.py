"""Pytest configuration and shared fixtures."""

import pytest

from gridlayout.model.area_template import grid_area, grid_template_areas_builder
from gridlayout.model.data_model import GridCellSpec, GridLayout
from gridlayout.model.track_template import (
    grid_track_template_builder,
    with_fraction,
    with_grid_track,
    with_line_names,
    with_pixels,
)


@pytest.fixture
def nav_template():
    """[nav] 200px [one two] 1fr [one two] 1fr [end]"""
    return (
        grid_track_template_builder()
        .add_track(with_pixels(200), with_line_names("nav"))
        .repeat_for(2, with_grid_track(with_fraction(1), "one", "two"))
        .build(with_line_names("end"))
    )


@pytest.fixture
def holy_grail_areas():
    """Header, sidebar/main/aside, footer over a 3x3 grid."""
    return (
        grid_template_areas_builder()
        .add_area("header", grid_area(1, 1, 1, 3))
        .add_area("sidebar", grid_area(2, 1))
        .add_area("main", grid_area(2, 2))
        .add_area("aside", grid_area(2, 3))
        .add_area("footer", grid_area(3, 1, 1, 3))
        .build()
    )


@pytest.fixture
def holy_grail_layout(holy_grail_areas):
    """Layout with 50px header/footer rows, 200px side columns and 10px gaps."""
    rows = (
        grid_track_template_builder()
        .add_track(with_pixels(50), with_line_names("top"))
        .add_track(with_fraction(1), with_line_names("content"))
        .add_track(with_pixels(50), with_line_names("bottom"))
        .build()
    )
    columns = (
        grid_track_template_builder()
        .add_track(with_pixels(200), with_line_names("left"))
        .add_track(with_fraction(1), with_line_names("center"))
        .add_track(with_pixels(200), with_line_names("right"))
        .build()
    )
    return GridLayout(
        name="holy grail",
        rows=rows,
        columns=columns,
        areas=holy_grail_areas,
        row_gap=10,
        column_gap=10,
        cells=[
            GridCellSpec(id="header", area_name="header"),
            GridCellSpec(id="sidebar", area_name="sidebar"),
            GridCellSpec(id="main", row="content", column="center"),
            GridCellSpec(id="aside", row=2, column=3),
            GridCellSpec(id="footer", area_name="footer"),
        ],
    )
