"""
WidgetPool - Row widget recycling for the windowed view.

Only the rows inside the current window own a widget. Rows scrolling out
return their widget to the free list; rows scrolling in take one from it.
"""
from typing import Callable, Generic, Hashable, Optional, TypeVar
from loguru import logger
from PySide6.QtWidgets import QWidget


W = TypeVar('W', bound=QWidget)


class WidgetPool(Generic[W]):
    """
    Recycles QWidget instances keyed by row index.

    The pool grows on demand. ``soft_limit`` only controls when a warning
    is logged: a window larger than the limit means the overscan or the
    viewport is unusually large, not that rendering must fail.

    Example:
        pool = WidgetPool(factory=lambda: RowWidget(layer), soft_limit=64)
        widget = pool.acquire(12)
        widget.bind_row(rows[12], settings, width)
        pool.release_outside({10, 11, 12, 13})
    """

    def __init__(self, factory: Callable[[], W], soft_limit: int = 64):
        """
        Args:
            factory: Creates a new widget
            soft_limit: Active-widget count above which a warning is logged
        """
        self._create = factory
        self._soft_limit = soft_limit
        self._idle: list[W] = []
        self._by_key: dict[Hashable, W] = {}
        self._warned = False

    @property
    def active_count(self) -> int:
        return len(self._by_key)

    @property
    def free_count(self) -> int:
        return len(self._idle)

    @property
    def total_count(self) -> int:
        return len(self._by_key) + len(self._idle)

    @property
    def active_keys(self) -> set:
        return set(self._by_key)

    def acquire(self, key: Hashable) -> W:
        """Widget bound to ``key``; an idle one is reused before creating."""
        widget = self._by_key.get(key)
        if widget is not None:
            return widget

        widget = self._idle.pop() if self._idle else self._create()
        self._by_key[key] = widget

        if len(self._by_key) > self._soft_limit and not self._warned:
            self._warned = True
            logger.warning(
                f"Widget pool holds {len(self._by_key)} active widgets "
                f"(soft limit {self._soft_limit})"
            )
        return widget

    def release(self, key: Hashable) -> bool:
        """
        Unbind the widget for ``key`` and park it.

        Returns:
            False if no widget was bound to ``key``
        """
        widget = self._by_key.pop(key, None)
        if widget is None:
            return False
        reset = getattr(widget, "reset", None)
        if reset is not None:
            reset()
        widget.hide()
        self._idle.append(widget)
        return True

    def release_outside(self, keep: set) -> int:
        """
        Release every bound widget whose key is not in ``keep``.

        Returns:
            How many widgets were parked
        """
        stale = [key for key in self._by_key if key not in keep]
        for key in stale:
            self.release(key)
        if stale:
            logger.trace(f"Parked {len(stale)} out-of-window row widgets")
        return len(stale)

    def get_widget(self, key: Hashable) -> Optional[W]:
        return self._by_key.get(key)

    def is_active(self, key: Hashable) -> bool:
        return key in self._by_key

    def clear(self):
        """Park every bound widget; nothing is destroyed."""
        for key in list(self._by_key):
            self.release(key)
        self._warned = False
