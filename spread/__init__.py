"""
Spread - Virtualized grid of text-preview cards for large file collections.

Packages:
    spread.core      models, settings, host protocols, logging
    spread.pipeline  preview extraction, card geometry, row packing, fingerprint
    spread.ui        the windowed view and its widgets
    spread.host      standalone folder browser (python -m spread)
"""
__version__ = "0.1.0"
