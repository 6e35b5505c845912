import logging
import math
from typing import Optional, Tuple

from PIL import Image, ImageDraw, ImageFont

from gridlayout.model.data_model import GridLayout
from gridlayout.model.enums import ExportFormat
from gridlayout.model.layout_engine import LayoutEngine, LayoutResult
from gridlayout.model.placement import CellBox

logger = logging.getLogger(__name__)

CELL_OUTLINE = (96, 96, 96)
GRID_OUTLINE = (211, 211, 211)  # lightgrey
LABEL_COLOR = (0, 0, 0)
DASH_LENGTH = 4


class ImageExporter:
    """Export a solved grid layout as a preview image (PNG, JPEG, TIFF)."""

    @staticmethod
    def export(layout: GridLayout, width: int, height: int, output_path: str, format: str = "PNG", dpi: int = 96) -> LayoutResult:
        """
        Draw every visible cell of the layout and save the image.

        Args:
            layout: The grid layout to draw
            width: Grid width in pixels
            height: Grid height in pixels
            output_path: Output file path
            format: Image format - "PNG", "JPG", "JPEG", or "TIFF"
            dpi: Resolution stored in the image metadata

        Returns:
            The layout result that was drawn
        """
        export_format = ExportFormat.from_name(format)
        result = LayoutEngine.calculate_layout(layout, width, height)

        logger.info("Exporting %s preview: %dx%d pixels to %s", export_format.value, width, height, output_path)

        image = ImageExporter.render(layout, result)

        if export_format == ExportFormat.TIFF:
            image.save(output_path, "TIFF", dpi=(dpi, dpi), compression="tiff_lzw")
        elif export_format == ExportFormat.JPEG:
            image.save(output_path, "JPEG", quality=95, dpi=(dpi, dpi))
        else:
            image.save(output_path, "PNG", dpi=(dpi, dpi))
        return result

    @staticmethod
    def render(layout: GridLayout, result: LayoutResult) -> Image.Image:
        """Draw the layout result onto a new white RGB image."""
        image = Image.new("RGB", (max(1, math.ceil(result.width)), max(1, math.ceil(result.height))), "white")
        draw = ImageDraw.Draw(image)
        font = ImageFont.load_default()

        if layout.show_grid:
            ImageExporter._draw_tracks(draw, result)

        for cell in layout.cells:
            box = result.cell_rects.get(cell.id)
            if box is None or box.width <= 0 or box.height <= 0:
                continue
            if layout.show_grid:
                ImageExporter._draw_dashed_rect(draw, box, GRID_OUTLINE)
            else:
                draw.rectangle(ImageExporter._corners(box), outline=CELL_OUTLINE)
            label = cell.area_name or cell.id
            draw.text((box.x + 2, box.y + 2), label, fill=LABEL_COLOR, font=font)

        return image

    @staticmethod
    def _draw_tracks(draw: ImageDraw.ImageDraw, result: LayoutResult):
        """Shade the gaps between tracks."""
        x = 0
        for size in result.column_sizes[:-1]:
            x += size
            if result.column_gap > 0:
                draw.rectangle((x, 0, x + result.column_gap - 1, result.height), fill=(245, 245, 245))
            x += result.column_gap
        y = 0
        for size in result.row_sizes[:-1]:
            y += size
            if result.row_gap > 0:
                draw.rectangle((0, y, result.width, y + result.row_gap - 1), fill=(245, 245, 245))
            y += result.row_gap

    @staticmethod
    def _corners(box: CellBox) -> Tuple[int, int, int, int]:
        return box.x, box.y, box.x + box.width - 1, box.y + box.height - 1

    @staticmethod
    def _draw_dashed_rect(draw: ImageDraw.ImageDraw, box: CellBox, color, dash: Optional[int] = None):
        dash = dash or DASH_LENGTH
        x0, y0, x1, y1 = ImageExporter._corners(box)
        for start in range(x0, x1 + 1, dash * 2):
            end = min(start + dash - 1, x1)
            draw.line((start, y0, end, y0), fill=color)
            draw.line((start, y1, end, y1), fill=color)
        for start in range(y0, y1 + 1, dash * 2):
            end = min(start + dash - 1, y1)
            draw.line((x0, start, x0, end), fill=color)
            draw.line((x1, start, x1, end), fill=color)
