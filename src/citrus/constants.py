BOARD_SIZE = 8
INITIAL_MOVES = 20
TARGET_SCORE_BASE = 400
TARGET_SCORE_INCREMENT = 250

# Minimum number of candy types for a match-free fill to always exist.
MIN_CANDY_TYPES = 3
MIN_RUN_LENGTH = 3

# ============================================================================
# LAYOUT
# ============================================================================
TILE_SIZE = 64
MIN_TILE_SIZE = 20
BOTTOM_MARGIN = 20
# Board footprint caps relative to the window.
BOARD_MAX_WIDTH_PCT = 0.75
BOARD_MAX_HEIGHT_PCT = 0.80
# Space reserved above the board for the HUD and status line.
HUD_HEIGHT = 72
WINDOW_WIDTH = 720
WINDOW_HEIGHT = 720
WINDOW_TITLE = "Citrus Crush"
