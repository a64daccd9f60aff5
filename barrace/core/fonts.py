"""Font helpers for visuals."""

from matplotlib.font_manager import FontProperties


def get_fonts(
    font_family: str, year_size: float, month_size: float
) -> tuple[FontProperties, FontProperties, FontProperties]:
    """Build the fonts used across the race scene.

    Args:
        font_family: Family used for the period and sub-period texts.
        year_size: Period text size in points.
        month_size: Sub-period text size in points.

    Returns:
        tuple[FontProperties, FontProperties, FontProperties]:
        (period_font, sub_period_font, label_font).
    """
    period = FontProperties(
        family=[font_family, "sans-serif"],
        weight="bold",
        size=year_size,
    )
    sub_period = FontProperties(
        family=[font_family, "sans-serif"],
        weight="normal",
        size=month_size,
    )
    labels = FontProperties(family="sans-serif", weight="semibold", size="medium")
    return period, sub_period, labels
