from citrus.constants import (
    BOARD_MAX_HEIGHT_PCT,
    BOARD_MAX_WIDTH_PCT,
    BOTTOM_MARGIN,
    HUD_HEIGHT,
    MIN_TILE_SIZE,
)


def compute_board_geometry(window_width: int, window_height: int, size: int):
    """Return (tile_size, start_x, start_y) for a size×size board.

    Shared by RenderSystem and InputSystem so clicks map onto drawn cells.
    The board is centred horizontally and sits on the bottom margin.
    """
    max_board_w = window_width * BOARD_MAX_WIDTH_PCT
    max_board_h = (window_height - BOTTOM_MARGIN - HUD_HEIGHT) * BOARD_MAX_HEIGHT_PCT
    tile_size = int(min(max_board_w / size, max_board_h / size))
    if tile_size < MIN_TILE_SIZE:
        tile_size = MIN_TILE_SIZE
    total_width = size * tile_size
    start_x = (window_width - total_width) / 2
    start_y = BOTTOM_MARGIN
    return tile_size, start_x, start_y


def cell_at_point(x: float, y: float, window_width: int, window_height: int, size: int):
    """Map a window point to a cell index, or None outside the board.

    Row 0 is drawn at the top of the board.
    """
    tile_size, start_x, start_y = compute_board_geometry(window_width, window_height, size)
    total = size * tile_size
    if x < start_x or x >= start_x + total:
        return None
    if y < start_y or y >= start_y + total:
        return None
    col = int((x - start_x) // tile_size)
    row_from_bottom = int((y - start_y) // tile_size)
    row = size - 1 - row_from_bottom
    return row * size + col


def cell_origin(index: int, window_width: int, window_height: int, size: int):
    """Bottom-left corner of the cell at ``index`` in window coordinates."""
    tile_size, start_x, start_y = compute_board_geometry(window_width, window_height, size)
    row, col = divmod(index, size)
    return start_x + col * tile_size, start_y + (size - 1 - row) * tile_size
