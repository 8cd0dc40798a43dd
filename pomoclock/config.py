import json
import logging
import os
import platform
import tempfile
from dataclasses import asdict, dataclass, replace
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

logger = logging.getLogger("pomoclock.config")


class Theme(str, Enum):
    BLUE = "blue"
    PURPLE = "purple"
    GREEN = "green"
    RED = "red"
    ORANGE = "orange"
    CYAN = "cyan"


# cycling order in the config editor
THEMES = tuple(Theme)

# field -> (minimum, maximum)
BOUNDS: Dict[str, Tuple[int, int]] = {
    "work_minutes": (1, 120),
    "short_break_minutes": (1, 60),
    "long_break_minutes": (1, 120),
    "cycles_before_long_break": (1, 10),
}


class ConfigSaveError(Exception):
    """Raised when the settings file cannot be written."""


@dataclass(frozen=True)
class Settings:
    theme: Theme = Theme.BLUE
    work_minutes: int = 25
    short_break_minutes: int = 5
    long_break_minutes: int = 15
    cycles_before_long_break: int = 4

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["theme"] = self.theme.value
        return data

    def __post_init__(self) -> None:
        # accept plain strings; unknown names raise ValueError
        object.__setattr__(self, "theme", Theme(self.theme))


DEFAULT_SETTINGS = Settings()


def get_config_path() -> Path:
    override = os.environ.get("POMOCLOCK_CONFIG")
    if override:
        return Path(override).expanduser()
    system = platform.system().lower()
    if system == "darwin":
        base = Path.home() / "Library" / "Application Support"
    elif system == "windows":
        appdata = os.environ.get("APPDATA")
        if appdata:
            base = Path(appdata)
        else:
            base = Path.home() / "AppData" / "Roaming"
    else:
        base = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    return base / "pomoclock" / "config.json"


def clamp(field: str, value: int) -> int:
    low, high = BOUNDS[field]
    return max(low, min(high, value))


def settings_from_dict(data: Dict[str, Any]) -> Settings:
    """Build Settings from a decoded config object, repairing each field."""
    theme = data.get("theme")
    try:
        parsed = Theme(theme.lower()) if isinstance(theme, str) else None
    except ValueError:
        parsed = None
    if parsed is None:
        if theme is not None:
            logger.warning("Unknown theme %r in config, using %s", theme, DEFAULT_SETTINGS.theme.value)
        parsed = DEFAULT_SETTINGS.theme
    values: Dict[str, Any] = {"theme": parsed}
    for field in BOUNDS:
        raw = data.get(field)
        # bool is an int subclass but never a valid duration
        if isinstance(raw, bool) or not isinstance(raw, int):
            if raw is not None:
                logger.warning("Ignoring invalid %s=%r in config", field, raw)
            values[field] = getattr(DEFAULT_SETTINGS, field)
            continue
        values[field] = clamp(field, raw)
    return Settings(**values)


def load_settings(path: Optional[Path] = None) -> Settings:
    path = path or get_config_path()
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        logger.info("No config at %s, using defaults", path)
        return DEFAULT_SETTINGS
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        logger.warning("Malformed config at %s (%s), using defaults", path, exc)
        return DEFAULT_SETTINGS
    except OSError as exc:
        logger.warning("Cannot read config at %s (%s), using defaults", path, exc)
        return DEFAULT_SETTINGS
    if not isinstance(data, dict):
        logger.warning("Config at %s is not an object, using defaults", path)
        return DEFAULT_SETTINGS
    return settings_from_dict(data)


def save_settings(settings: Settings, path: Optional[Path] = None) -> None:
    """Rewrite the whole config file via a temp file and an atomic rename."""
    path = path or get_config_path()
    tmp_name = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=".config-", suffix=".tmp", dir=path.parent)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(settings.to_dict(), f, indent=2, sort_keys=True)
            f.write("\n")
        os.replace(tmp_name, path)
        tmp_name = None
    except OSError as exc:
        raise ConfigSaveError(f"cannot write {path}: {exc.strerror or exc}") from exc
    finally:
        if tmp_name is not None:
            try:
                os.unlink(tmp_name)
            except OSError:
                pass
    logger.info("Saved settings to %s", path)


def ensure_config_file(path: Optional[Path] = None) -> Settings:
    """Load settings, writing the defaults first when no file exists yet."""
    path = path or get_config_path()
    if not path.exists():
        try:
            save_settings(DEFAULT_SETTINGS, path)
        except ConfigSaveError as exc:
            logger.error("Could not create default config: %s", exc)
        return DEFAULT_SETTINGS
    return load_settings(path)


def with_field(settings: Settings, field: str, value: Any) -> Settings:
    return replace(settings, **{field: value})
