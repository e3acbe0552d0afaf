from typing import Any, Dict, List, Literal, Optional
import json
import os
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from loguru import logger
from .events import Signal

PREVIEW_LINES_MIN = 1
PREVIEW_LINES_MAX = 20


# --- View Settings ---
class SpreadSettings(BaseModel):
    """
    Per-view display settings.

    Field names are snake_case in Python; the host-facing keys are the
    camelCase aliases (``previewLines``, ``showFileName`` ...).
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    preview_lines: int = Field(5, ge=PREVIEW_LINES_MIN, le=PREVIEW_LINES_MAX)
    show_file_name: bool = True
    strip_frontmatter: bool = True
    mono_font: bool = False

    def to_store(self) -> Dict[str, Any]:
        """Host-facing representation (camelCase keys)."""
        return self.model_dump(by_alias=True)


def read_settings(store: Optional[Any], current: SpreadSettings) -> SpreadSettings:
    """
    Merge values from a host settings store over ``current``.

    Absent or wrong-typed values keep the current value; ``previewLines``
    is clamped into range. Never raises.

    Args:
        store: Object with ``get(key)``, or None when the host has no store
        current: Settings in effect before this read

    Returns:
        New SpreadSettings instance
    """
    if store is None:
        return current

    update: Dict[str, Any] = {}

    lines = _safe_get(store, "previewLines")
    # bool is an int subclass; a toggle value is not a line count
    if isinstance(lines, (int, float)) and not isinstance(lines, bool):
        if lines == lines:  # NaN
            update["preview_lines"] = int(max(PREVIEW_LINES_MIN, min(PREVIEW_LINES_MAX, lines)))

    for key, field in (
        ("showFileName", "show_file_name"),
        ("stripFrontmatter", "strip_frontmatter"),
        ("monoFont", "mono_font"),
    ):
        value = _safe_get(store, key)
        if isinstance(value, bool):
            update[field] = value

    if not update:
        return current
    return current.model_copy(update=update)


def _safe_get(store: Any, key: str) -> Any:
    try:
        return store.get(key)
    except Exception as e:
        logger.debug(f"Settings store failed for '{key}': {e}")
        return None


# --- Option Schema ---
class ViewOption(BaseModel):
    """One entry of the option schema rendered by the host's settings UI."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    display_name: str
    type: Literal["group", "slider", "toggle"]
    key: Optional[str] = None
    min: Optional[int] = None
    max: Optional[int] = None
    step: Optional[int] = None
    default: Optional[Any] = None
    items: Optional[List["ViewOption"]] = None

    def to_schema(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


def build_view_options() -> List[ViewOption]:
    """Static option schema describing SpreadSettings."""
    defaults = SpreadSettings()
    return [
        ViewOption(
            display_name="Preview",
            type="group",
            items=[
                ViewOption(
                    display_name="Lines to show",
                    type="slider",
                    key="previewLines",
                    min=PREVIEW_LINES_MIN,
                    max=PREVIEW_LINES_MAX,
                    step=1,
                    default=defaults.preview_lines,
                ),
                ViewOption(
                    display_name="Show file name",
                    type="toggle",
                    key="showFileName",
                    default=defaults.show_file_name,
                ),
                ViewOption(
                    display_name="Strip frontmatter",
                    type="toggle",
                    key="stripFrontmatter",
                    default=defaults.strip_frontmatter,
                ),
                ViewOption(
                    display_name="Monospace font",
                    type="toggle",
                    key="monoFont",
                    default=defaults.mono_font,
                ),
            ],
        )
    ]


# --- Host Application Settings ---
class GeneralSettings(BaseModel):
    debug_mode: bool = False
    log_dir: str = "logs"
    diagnostic_log: bool = False  # writes .spread-debug.log into the library root

class WindowSettings(BaseModel):
    width: int = 1100
    height: int = 800

class LibrarySettings(BaseModel):
    root: str = "."
    recursive: bool = True
    watch: bool = True

class AppConfig(BaseModel):
    general: GeneralSettings = Field(default_factory=GeneralSettings)
    window: WindowSettings = Field(default_factory=WindowSettings)
    library: LibrarySettings = Field(default_factory=LibrarySettings)
    # Raw host-side values; validated leniently by read_settings()
    view: Dict[str, Any] = Field(default_factory=lambda: SpreadSettings().to_store())


# --- Manager ---
class ConfigManager:
    """
    Manages the standalone host configuration with persistence and reactivity.
    """
    def __init__(self, filepath: str = "spread.json"):
        self.filepath = filepath
        self._data = AppConfig()
        self.on_changed = Signal("ConfigChanged")
        self._load()

    @property
    def data(self) -> AppConfig:
        return self._data

    def update(self, section: str, key: str, value: Any):
        """Update a setting, autosave, and emit change event."""
        if not hasattr(self._data, section):
            raise ValueError(f"Invalid section: {section}")

        section_obj = getattr(self._data, section)
        if isinstance(section_obj, dict):
            section_obj[key] = value
        else:
            if not hasattr(section_obj, key):
                raise ValueError(f"Invalid key: {key} in section {section}")
            setattr(section_obj, key, value)

        self._save()
        self.on_changed.emit(section, key, value)

    def get(self, section: str, key: str) -> Any:
        section_obj = getattr(self._data, section)
        if isinstance(section_obj, dict):
            return section_obj.get(key)
        return getattr(section_obj, key)

    def settings_store(self) -> "ConfigSettingsStore":
        return ConfigSettingsStore(self)

    def _load(self):
        """Load settings from JSON or TOML file if present; otherwise keep defaults."""
        if os.path.isfile(self.filepath):
            try:
                if self.filepath.endswith('.toml'):
                    import tomllib
                    with open(self.filepath, "rb") as f:
                        raw = tomllib.load(f)
                else:
                    with open(self.filepath, "r", encoding="utf-8") as f:
                        raw = json.load(f)
                self._data = AppConfig.model_validate(raw)
                logger.debug(f"Loaded config from {self.filepath}")
            except Exception as e:
                logger.error(f"Failed to load config from {self.filepath}: {e}")
                self._save()
        else:
            self._save()

    def _save(self):
        """Persist current config as JSON (TOML paths are read-only)."""
        if self.filepath.endswith('.toml'):
            return
        try:
            dirname = os.path.dirname(self.filepath)
            if dirname:
                os.makedirs(dirname, exist_ok=True)
            with open(self.filepath, "w", encoding="utf-8") as f:
                json.dump(self._data.model_dump(), f, indent=4)
        except Exception as e:
            logger.error(f"Failed to save config to {self.filepath}: {e}")


class ConfigSettingsStore:
    """Exposes the ``view`` section of a ConfigManager as a SettingsStore."""

    def __init__(self, manager: ConfigManager):
        self._manager = manager

    def get(self, key: str) -> Optional[Any]:
        return self._manager.data.view.get(key)
