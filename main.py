import argparse
import sys
from typing import List, Optional

from gridlayout.exceptions import GridLayoutError
from gridlayout.export.image_exporter import ImageExporter
from gridlayout.logging_config import setup_logging
from gridlayout.model.data_model import GridLayout
from gridlayout.model.layout_engine import LayoutEngine


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Solve a grid layout file and print the CSS templates and cell boxes."
    )
    parser.add_argument("layout", help="Path to the layout JSON file")
    parser.add_argument("--width", type=float, required=True, help="Grid width in pixels")
    parser.add_argument("--height", type=float, required=True, help="Grid height in pixels")
    parser.add_argument("--export", dest="export_path", help="Write a preview image to this path")
    parser.add_argument("--format", default="PNG", choices=["PNG", "JPG", "JPEG", "TIFF"], type=str.upper)
    parser.add_argument("--log-level", default="WARNING")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        layout = GridLayout.load_from_file(args.layout)
        result = LayoutEngine.calculate_layout(layout, args.width, args.height)

        for name, value in result.css_properties().items():
            if name == "grid-template-areas":
                value = " ".join(str(value).splitlines())
            print(f"{name}: {value};")
        for cell_id, box in result.cell_rects.items():
            x, y, w, h = box.as_tuple()
            print(f"{cell_id}: x={x} y={y} width={w} height={h}")

        if args.export_path:
            ImageExporter.export(layout, int(args.width), int(args.height), args.export_path, args.format)
    except GridLayoutError as e:
        print(f"error: {e.message}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
