"""Common engine and layout constants used across modules."""

# Time keys
KEY_PRECISION: int = 10
TIME_STEP: float = 0.01

# Layout defaults (pixels)
MARGIN_TOP: int = 20
MARGIN_RIGHT: int = 0
MARGIN_BOTTOM: int = 5
MARGIN_LEFT: int = 0
LABEL_RESERVE: int = 65
WIDE_VIEWPORT: int = 500
TICKS_WIDE: int = 5
TICKS_NARROW: int = 2
BAR_OFFSET: int = 5

# Export defaults
dpi: int = 60
interp_steps: int = 12
facecolor: str = "#F0F0F0"

WAITING_MESSAGE = "Visual will load when all the data fields are provided."
