"""
Preview pipeline: raw entries -> previews -> card heights -> rows.
"""
from spread.pipeline.normalizer import normalize, strip_frontmatter, strip_markup
from spread.pipeline.extractor import PreviewExtractor, BINARY_EXTENSIONS
from spread.pipeline.layout import card_height
from spread.pipeline.packer import pack_rows, cards_per_row, card_width
from spread.pipeline.fingerprint import compute_fingerprint

__all__ = [
    "normalize",
    "strip_frontmatter",
    "strip_markup",
    "PreviewExtractor",
    "BINARY_EXTENSIONS",
    "card_height",
    "pack_rows",
    "cards_per_row",
    "card_width",
    "compute_fingerprint",
]
