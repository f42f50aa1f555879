"""Chart generation utilities for the dashboard."""

from typing import Optional, Sequence

BARS = " ▁▂▃▄▅▆▇█"


def sparkline(series: Sequence[int], height: int = 1, width: Optional[int] = None) -> str:
    """Render a series of non-negative numbers as a block-glyph sparkline.

    Bars are scaled to the largest value in the series and drawn ``height`` rows tall.
    When ``width`` is given only the most recent ``width`` values are shown.
    """
    if len(series) == 0 or height < 1:
        return ""
    if width is not None:
        if width < 1:
            return ""
        series = series[-width:]

    peak = max(series)
    steps = len(BARS) - 1
    # eighths of a row filled for each value
    levels = [value * height * steps // peak if peak > 0 else 0 for value in series]

    rows = []
    for row in range(height - 1, -1, -1):
        floor = row * steps
        rows.append("".join(BARS[min(max(level - floor, 0), steps)] for level in levels))
    return "\n".join(rows)
