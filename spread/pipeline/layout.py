"""
Card geometry.

Heights are computed up front from the preview's line count so rows can
be packed and virtualized without measuring any widget.
"""
from spread.core.config import SpreadSettings

CARD_MIN_WIDTH = 250
CARD_GAP = 12
HEADER_HEIGHT = 39
PREVIEW_PADDING = 24
LINE_HEIGHT = 20
CARD_BORDER = 2


def card_height(line_count: int, settings: SpreadSettings) -> int:
    """
    Pixel height of a card showing ``line_count`` preview lines.

    Lines beyond ``settings.preview_lines`` are not counted.
    """
    header = HEADER_HEIGHT if settings.show_file_name else 0
    content_lines = min(line_count, settings.preview_lines)
    return header + PREVIEW_PADDING + content_lines * LINE_HEIGHT + CARD_BORDER
