"""Global constants for the application."""

# Animation settings
DEFAULT_FPS = 30  # Default frames per second for previews
MAX_FPS = 1000  # Frames must last at least 1 ms
DEFAULT_PREVIEW_DURATION_MS = 3000  # Length of a rendered preview
DEFAULT_START_DELAY_MS = 310  # Lets the tile appear/pop animation finish first

# Board layout (pixels)
GRID_SIZE = 4  # Cells per row and column
DEFAULT_TILE_SIZE = 107
TILE_SPACING = 15
BOARD_PADDING = 15

# Text fitting
REFERENCE_FONT_SIZE = 100  # Size words are measured at before scaling
TEXT_FIT_WIDTH_RATIO = 0.8  # Widest word fills 80% of the tile width
TEXT_FIT_MAX_RATIO = 0.38  # Never larger than 38% of the tile width
TEXT_FIT_MIN_SIZE = 6
LINE_HEIGHT_RATIO = 1.2

# Overlay fitting
OVERLAY_WIDTH_RATIO = 0.90
OVERLAY_HEIGHT_RATIO = 0.85
OVERLAY_DEFAULT_FONT_SIZE = 72
OVERLAY_MIN_FONT_SIZE = 8
OVERLAY_DEFAULT_OPACITY = 0.5

# Resize handling
RESIZE_DEBOUNCE_MS = 150

# Fonts
DEFAULT_FONT_FAMILY = "Clear Sans, Helvetica Neue, Arial, sans-serif"
DEFAULT_FONT_WEIGHT = "bold"
DEFAULT_TILE_FONT_SIZE = 55

# Colors
BOARD_BACKGROUND_COLOR = (187, 173, 160)
EMPTY_CELL_COLOR = (205, 193, 180)
TILE_TEXT_COLOR = (249, 246, 242)
DARK_TILE_TEXT_COLOR = (119, 110, 101)
TILE_COLORS = {
    2: (238, 228, 218),
    4: (237, 224, 200),
    8: (242, 177, 121),
    16: (245, 149, 99),
    32: (246, 124, 95),
    64: (246, 94, 59),
    128: (237, 207, 114),
    256: (237, 204, 97),
    512: (237, 200, 80),
    1024: (237, 197, 63),
    2048: (237, 194, 46),
}
SUPER_TILE_COLOR = (60, 58, 50)  # Ranks above 2048
