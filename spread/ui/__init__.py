"""
Spread UI - Virtualized text-preview card grid.

Usage:
    from spread.ui import SpreadView

    view = SpreadView(data_source, reader, navigator, settings_store)
    view.attach()
    ...
    view.on_data_updated()
    ...
    view.detach()
"""
from spread.ui.scheduler import RenderScheduler
from spread.ui.virtualizer import RowVirtualizer, VirtualRow, VirtualWindow
from spread.ui.widget_pool import WidgetPool
from spread.ui.card_widget import CardWidget
from spread.ui.row_widget import RowWidget
from spread.ui.spread_view import SpreadView, ViewState
from spread.ui.registry import ViewRegistry, ViewRegistration, register_spread_view

__all__ = [
    # Main widget
    "SpreadView",
    "ViewState",
    # Item widgets
    "CardWidget",
    "RowWidget",
    # Virtualization
    "RowVirtualizer",
    "VirtualRow",
    "VirtualWindow",
    "WidgetPool",
    "RenderScheduler",
    # Registration
    "ViewRegistry",
    "ViewRegistration",
    "register_spread_view",
]
