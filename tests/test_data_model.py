"""Tests for layout persistence and file migrations."""

import json

import pytest

from gridlayout.exceptions import InvalidGridAreaError, InvalidTrackSizeError, LayoutFileError
from gridlayout.model.area_template import grid_area
from gridlayout.model.data_model import (
    GridCellSpec,
    GridLayout,
    track_template_from_dict,
    track_template_to_dict,
)
from gridlayout.model.migrations import migrate_layout_data
from gridlayout.model.track_template import grid_track_template_builder, with_fraction, with_line_names
from gridlayout.version import APP_VERSION


class TestTrackTemplateStorage:
    """Tests for storing track templates."""

    def test_fractional_amounts_are_kept(self):
        """Test that stored amounts are not floored like the CSS text."""
        template = grid_track_template_builder().add_track(with_fraction(1.5), with_line_names("a")).build()

        restored = track_template_from_dict(track_template_to_dict(template))
        assert restored == template
        assert restored.tracks[0].size.amount == 1.5

    def test_css_text_accepted(self, nav_template):
        """Test that a CSS track list may be written by hand."""
        assert track_template_from_dict("[nav] 200px [one two] 1fr [one two] 1fr [end]") == nav_template

    def test_none(self):
        """Test that a missing template stays missing."""
        assert track_template_from_dict(None) is None

    def test_unknown_size_type(self):
        """Test that an unsupported unit is a track size error naming it."""
        with pytest.raises(InvalidTrackSizeError) as exc_info:
            track_template_from_dict({"tracks": [{"size_type": "em", "amount": 1}]})
        assert exc_info.value.details == {"size_type": "em"}


class TestGridLayout:
    """Tests for GridLayout dict and file round trips."""

    def test_dict_round_trip(self, holy_grail_layout):
        """Test that to_dict and from_dict preserve the layout."""
        restored = GridLayout.from_dict(holy_grail_layout.to_dict())

        assert restored.name == "holy grail"
        assert restored.rows == holy_grail_layout.rows
        assert restored.columns == holy_grail_layout.columns
        assert dict(restored.areas) == dict(holy_grail_layout.areas)
        assert restored.row_gap == 10
        assert [c.to_dict() for c in restored.cells] == [c.to_dict() for c in holy_grail_layout.cells]

    def test_to_dict_stamps_version(self, holy_grail_layout):
        """Test that saved layouts carry the current file version."""
        assert holy_grail_layout.to_dict()["file_version"] == APP_VERSION

    def test_file_round_trip(self, holy_grail_layout, tmp_path):
        """Test saving and loading a layout file."""
        path = tmp_path / "layout.json"
        holy_grail_layout.save_to_file(str(path))

        restored = GridLayout.load_from_file(str(path))
        assert restored.areas.as_string() == holy_grail_layout.areas.as_string()
        assert restored.get_cell("main").row == "content"

    def test_hand_written_file(self, tmp_path):
        """Test a layout using CSS text for its templates."""
        path = tmp_path / "layout.json"
        path.write_text(json.dumps({
            "rows": "[top] 100px 1fr",
            "columns": "1fr 1fr",
            "areas": '"head head"\n"left right"',
            "row_gap": 4,
            "cells": [{"id": "h", "area_name": "head"}, {"id": "r", "row": 2, "column": 2}],
        }), encoding="utf-8")

        layout = GridLayout.load_from_file(str(path))
        assert layout.areas.get("head") == grid_area(1, 1, 1, 2)
        assert layout.rows.as_string() == "[top] 100px 1fr"
        assert layout.column_gap == 0
        assert layout.cells[1].column == 2

    def test_missing_file(self, tmp_path):
        """Test that an unreadable file is a layout file error."""
        with pytest.raises(LayoutFileError):
            GridLayout.load_from_file(str(tmp_path / "missing.json"))

    def test_invalid_json(self, tmp_path):
        """Test that a malformed file is a layout file error."""
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(LayoutFileError):
            GridLayout.load_from_file(str(path))

    def test_non_object_json(self, tmp_path):
        """Test that the file must hold an object."""
        path = tmp_path / "list.json"
        path.write_text("[]", encoding="utf-8")

        with pytest.raises(LayoutFileError):
            GridLayout.load_from_file(str(path))

    @pytest.mark.parametrize("values", [[1], [1, 1, 1, 1, 9], 3])
    def test_malformed_area_values(self, tmp_path, values):
        """Test that stored areas must hold two to four numbers."""
        path = tmp_path / "layout.json"
        path.write_text(json.dumps({"areas": {"areas": {"a": values}}}), encoding="utf-8")

        with pytest.raises(InvalidGridAreaError) as exc_info:
            GridLayout.load_from_file(str(path))
        assert exc_info.value.details["area"] == "a"

    def test_cell_ids_generated(self):
        """Test that cells without an id get a unique one."""
        first = GridCellSpec.from_dict({"row": 1, "column": 1})
        second = GridCellSpec.from_dict({"row": 1, "column": 1})
        assert first.id and second.id and first.id != second.id


class TestMigrations:
    """Tests for layout file migrations."""

    def test_unversioned_file(self):
        """Test that legacy files gain defaults and the current version."""
        data = migrate_layout_data({"gap": 8, "template_rows": "1fr"})

        assert data["file_version"] == APP_VERSION
        assert data["row_gap"] == 8
        assert data["column_gap"] == 8
        assert data["rows"] == "1fr"
        assert "gap" not in data

    def test_1_0_0_file(self):
        """Test upgrading a 1.0.0 file."""
        data = migrate_layout_data({"file_version": "1.0.0", "gap": 3, "template_areas": '"a"'})

        assert data["row_gap"] == 3
        assert data["areas"] == '"a"'
        assert data["file_version"] == APP_VERSION

    def test_current_file_untouched(self):
        """Test that current files are not migrated."""
        data = {"file_version": APP_VERSION, "row_gap": 2, "column_gap": 5}
        assert migrate_layout_data(dict(data)) == data

    def test_legacy_layout_loads(self):
        """Test that from_dict applies migrations."""
        layout = GridLayout.from_dict({"gap": 6, "template_columns": "1fr 2fr", "cells": []})

        assert layout.row_gap == 6
        assert layout.column_gap == 6
        assert layout.columns.as_string() == "1fr 2fr"
