from typing import Callable
from loguru import logger


class Signal:
    """
    Synchronous observer used outside of QObject hierarchies.

    The folder data source and the config manager are plain Python
    objects and cannot declare Qt signals. Handlers run in the order they
    were connected; a handler that raises is logged and skipped.

    Example:
        updated = Signal("FolderUpdated")
        unsubscribe = updated.connect(view.on_data_updated)
        updated.emit()
        unsubscribe()
    """

    def __init__(self, name: str = "Signal"):
        self.name = name
        self._handlers: list[Callable] = []

    @property
    def subscriber_count(self) -> int:
        return len(self._handlers)

    def connect(self, handler: Callable) -> Callable[[], None]:
        """
        Subscribe ``handler``; connecting the same handler twice is a no-op.

        Returns:
            Callable that disconnects the handler
        """
        if handler not in self._handlers:
            self._handlers.append(handler)
        return lambda: self.disconnect(handler)

    def disconnect(self, handler: Callable):
        try:
            self._handlers.remove(handler)
        except ValueError:
            pass

    def disconnect_all(self):
        self._handlers.clear()

    def emit(self, *args, **kwargs):
        for handler in tuple(self._handlers):
            try:
                handler(*args, **kwargs)
            except Exception as e:
                logger.error(f"{self.name}: handler {handler!r} raised {e!r}")
