"""BMI chart and history table images."""
import io
import logging
from datetime import tzinfo
from typing import Optional
from PIL import Image, ImageDraw, ImageFont
from bmi_bot.models import Record
from bmi_bot.services.bmi_calc import format_date_display
from bmi_bot.services.history_service import ChartSeries, classification_color

logger = logging.getLogger(__name__)

FONT_REGULAR = "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf"
FONT_BOLD = "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf"

# Colours
COLOR_TEXT = "#3a4e8c"
COLOR_LINE = (58, 78, 140)
COLOR_DOT = "#5577cc"
COLOR_GRID = "#cccccc"
GRADIENT_FROM = (0xE3, 0xE6, 0xF3)
GRADIENT_TO = (0xD6, 0xDA, 0xFB)

MIN_CHART_WIDTH = 660
POINT_SPACING = 70
PLOT_HEIGHT = 220
GRID_LINES = 4


def _load_font(path: str, size: int):
    try:
        return ImageFont.truetype(path, size)
    except OSError:
        return ImageFont.load_default()


def _to_png(img: Image.Image) -> bytes:
    img_bytes = io.BytesIO()
    img.save(img_bytes, format="PNG")
    img_bytes.seek(0)
    return img_bytes.getvalue()


def _draw_gradient(draw: ImageDraw.ImageDraw, width: int, height: int) -> None:
    for y in range(height):
        ratio = y / max(height - 1, 1)
        color = tuple(
            round(start + (end - start) * ratio) for start, end in zip(GRADIENT_FROM, GRADIENT_TO)
        )
        draw.line([(0, y), (width, y)], fill=color)


def generate_bmi_chart(series: ChartSeries) -> Optional[bytes]:
    """Draw the BMI line chart as PNG.

    Args:
        series: labels, values and legend from chart_series()

    Returns:
        PNG bytes or None if drawing failed
    """
    try:
        labels = series["labels"]
        values = series["values"]

        width = max(MIN_CHART_WIDTH, POINT_SPACING * len(values))
        legend_height = 40
        left, right = 70, 30
        top = legend_height + 15
        bottom = 45
        height = top + PLOT_HEIGHT + bottom

        img = Image.new("RGB", (width, height), color="white")
        draw = ImageDraw.Draw(img)
        _draw_gradient(draw, width, height)

        font_label = _load_font(FONT_REGULAR, 13)
        font_legend = _load_font(FONT_BOLD, 15)

        # Value range with a little headroom
        low, high = min(values), max(values)
        if high == low:
            low, high = low - 1, high + 1
        margin = (high - low) * 0.1
        low, high = low - margin, high + margin

        plot_width = width - left - right

        def x_at(index: int) -> float:
            if len(values) == 1:
                return left + plot_width / 2
            return left + plot_width * index / (len(values) - 1)

        def y_at(value: float) -> float:
            return top + PLOT_HEIGHT * (high - value) / (high - low)

        # Grid and y axis labels
        for step in range(GRID_LINES + 1):
            value = high - (high - low) * step / GRID_LINES
            y = y_at(value)
            draw.line([(left, y), (width - right, y)], fill=COLOR_GRID, width=1)
            draw.text((8, y - 8), f"{value:.2f}", font=font_label, fill=COLOR_TEXT)

        # Line and points
        points = [(x_at(i), y_at(value)) for i, value in enumerate(values)]
        if len(points) > 1:
            draw.line(points, fill=COLOR_LINE, width=2)
        for x, y in points:
            draw.ellipse([(x - 6, y - 6), (x + 6, y + 6)], fill="white", outline=COLOR_DOT, width=2)

        # X axis labels
        for (x, _), label in zip(points, labels):
            text_width = draw.textlength(label, font=font_label)
            draw.text((x - text_width / 2, top + PLOT_HEIGHT + 15), label, font=font_label, fill=COLOR_TEXT)

        # Legend
        draw.ellipse([(left, 15), (left + 12, 27)], fill=COLOR_DOT)
        draw.text((left + 20, 12), series["legend"], font=font_legend, fill=COLOR_TEXT)

        return _to_png(img)

    except (OSError, ValueError, KeyError) as e:
        logger.error(f"Chart generation failed: {e}")
        return None


def generate_history_table(
    records: list[Record], latest_id: Optional[str] = None, tz: Optional[tzinfo] = None
) -> Optional[bytes]:
    """Draw the per-user history table as PNG.

    Rows are tinted by classification and the latest record is outlined.
    """
    try:
        width = 640
        header_height = 40
        row_height = 42
        padding = 10
        height = padding + header_height + len(records) * row_height + padding

        img = Image.new("RGB", (width, height), color="#f0f0f5")
        draw = ImageDraw.Draw(img)

        font_header = _load_font(FONT_BOLD, 14)
        font_data = _load_font(FONT_REGULAR, 14)
        font_bmi = _load_font(FONT_BOLD, 14)

        col_widths = [190, 130, 110, 190]  # Date, Weight, BMI, Classification
        col_x = [padding]
        for w in col_widths[:-1]:
            col_x.append(col_x[-1] + w)

        # === HEADER ===
        y = padding
        draw.rectangle([(0, y), (width, y + header_height)], fill="#e3e6f3")
        headers = ["Date", "Weight (kg)", "BMI", "Classification"]
        for header, x in zip(headers, col_x):
            draw.text((x + 5, y + 12), header, font=font_header, fill=COLOR_TEXT)
        y += header_height
        draw.line([(0, y), (width, y)], fill=COLOR_DOT, width=2)

        # === ROWS ===
        for record in records:
            draw.rectangle(
                [(0, y), (width, y + row_height)], fill=classification_color(record.classification)
            )
            draw.line([(0, y + row_height), (width, y + row_height)], fill=COLOR_GRID, width=1)

            cells = [
                (format_date_display(record.date, tz), font_data),
                (f"{record.weight:g}", font_data),
                (record.imc, font_bmi),
                (record.classification.value, font_data),
            ]
            for (text, font), x in zip(cells, col_x):
                draw.text((x + 5, y + 13), text, font=font, fill="#333333")

            if record.id == latest_id:
                draw.rectangle(
                    [(2, y + 2), (width - 3, y + row_height - 2)], outline=COLOR_TEXT, width=2
                )

            y += row_height

        return _to_png(img)

    except (OSError, ValueError) as e:
        logger.error(f"History table generation failed: {e}")
        return None
