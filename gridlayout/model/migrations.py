"""
Layout file migration system.

Each migration function upgrades a layout dict from one version to the next.
Register migrations in MIGRATIONS as (from_version, to_version, function).
They are applied sequentially when loading an older file.
"""

from typing import Dict, Any, List, Tuple, Callable, Optional

from gridlayout.version import APP_VERSION


def _ver(s: str) -> Tuple[int, ...]:
    """Parse a version string like '1.2.3' into a comparable tuple."""
    return tuple(int(x) for x in s.split("."))

# ──────────────────────────────────────────────
# Migration functions
# ──────────────────────────────────────────────
# Each function receives the raw layout dict and returns the mutated dict.
# Convention: def _migrate_X_to_Y(data: dict) -> dict

def _migrate_none_to_1_0_0(data: Dict[str, Any]) -> Dict[str, Any]:
    """Upgrade pre-versioned files to 1.0.0 schema."""
    data.setdefault("gap", 0)
    data.setdefault("show_grid", False)
    data.setdefault("cells", [])
    return data


def _migrate_1_0_0_to_1_1_0(data: Dict[str, Any]) -> Dict[str, Any]:
    """1.1.0 splits the single gap into row and column gaps and renames the templates."""
    gap = data.pop("gap", 0)
    data.setdefault("row_gap", gap)
    data.setdefault("column_gap", gap)
    for old, new in (("template_rows", "rows"), ("template_columns", "columns"), ("template_areas", "areas")):
        if old in data:
            data.setdefault(new, data.pop(old))
    return data


# ──────────────────────────────────────────────
# Migration registry
# ──────────────────────────────────────────────
# (from_version_str | None, to_version_str, migration_func)
# None means "no version tag" (legacy files).
MIGRATIONS: List[Tuple[Optional[str], str, Callable[[Dict[str, Any]], Dict[str, Any]]]] = [
    (None, "1.0.0", _migrate_none_to_1_0_0),
    ("1.0.0", "1.1.0", _migrate_1_0_0_to_1_1_0),
]


def migrate_layout_data(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Apply all necessary migrations to bring *data* up to APP_VERSION.
    Returns the (mutated) data dict with ``file_version`` set to APP_VERSION.
    """
    file_ver_str = data.get("file_version", None)
    target = _ver(APP_VERSION)

    for from_ver, to_ver, func in MIGRATIONS:
        if from_ver is None:
            # Applies only when the file has no version tag
            if file_ver_str is not None:
                continue
        else:
            if file_ver_str is None or _ver(file_ver_str) >= _ver(to_ver):
                continue

        data = func(data)
        data["file_version"] = to_ver
        file_ver_str = to_ver

        if _ver(to_ver) >= target:
            break

    data["file_version"] = APP_VERSION
    return data
