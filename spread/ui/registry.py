"""
View Registry - Maps view types to factories and option schemas.

A host keeps one registry, lets plugins register their view types, and
creates one view instance per scrollable region it wants to fill.
"""
from typing import Any, Callable, Dict, List, Optional
from loguru import logger
from pydantic import BaseModel, ConfigDict
from PySide6.QtWidgets import QWidget

from spread.ui.spread_view import SpreadView


class ViewRegistration(BaseModel):
    """
    Registration record for one view type.

    Attributes:
        view_type: Unique identifier (e.g. "spread-view")
        name: Display name for the host's view switcher
        icon: Icon identifier
        factory: Callable(**collaborators) -> QWidget
        options: Callable returning the option schema
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)

    view_type: str
    name: str
    icon: str = ""
    factory: Callable[..., QWidget]
    options: Callable[[], List[Dict[str, Any]]]


class ViewRegistry:
    """
    Holds view registrations.

    Usage:
        registry = ViewRegistry()
        register_spread_view(registry)

        view = registry.create(
            "spread-view",
            data_source=source,
            reader=reader,
            navigator=navigator,
        )
    """

    def __init__(self):
        self._registrations: Dict[str, ViewRegistration] = {}

    def register(self, registration: ViewRegistration) -> None:
        """
        Register a view type. Re-registering replaces the previous entry.
        """
        if registration.view_type in self._registrations:
            logger.warning(f"View type re-registered: {registration.view_type}")
        self._registrations[registration.view_type] = registration
        logger.debug(f"Registered view type: {registration.view_type}")

    def unregister(self, view_type: str) -> bool:
        return self._registrations.pop(view_type, None) is not None

    def get(self, view_type: str) -> Optional[ViewRegistration]:
        return self._registrations.get(view_type)

    @property
    def view_types(self) -> List[str]:
        return list(self._registrations.keys())

    def options_for(self, view_type: str) -> List[Dict[str, Any]]:
        """
        Option schema of a registered view type.

        Raises:
            KeyError: If the view type is not registered
        """
        return self._require(view_type).options()

    def create(self, view_type: str, **collaborators: Any) -> QWidget:
        """
        Create a new view instance.

        Args:
            view_type: Registered view type
            **collaborators: Passed to the factory

        Raises:
            KeyError: If the view type is not registered
        """
        view = self._require(view_type).factory(**collaborators)
        logger.debug(f"Created view: {view_type}")
        return view

    def _require(self, view_type: str) -> ViewRegistration:
        registration = self._registrations.get(view_type)
        if registration is None:
            raise KeyError(f"Unknown view type: {view_type}")
        return registration


def register_spread_view(registry: ViewRegistry) -> ViewRegistration:
    """Register the Spread card grid."""
    registration = ViewRegistration(
        view_type=SpreadView.VIEW_TYPE,
        name="Spread",
        icon="file-text",
        factory=SpreadView,
        options=SpreadView.get_view_options,
    )
    registry.register(registration)
    return registration
