"""Persistent program settings and command-line argument helpers."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Iterable, Optional, Sequence, Union

from platformdirs import user_config_dir

CFG_FILE = "configFile"
SESSION_INTVL = "sessionInterval"
SERIES_INTVL = "seriesInterval"
IMAGE_FILTER = "imagesFilter"

DEFAULT_CONFIG_FILE = "config.xml"
DEFAULT_SESSION_INTERVAL = 60 * 20
DEFAULT_SERIES_INTERVAL = 60 * 2
DEFAULT_IMAGE_FILTERS = ["*.jpg", "*.png"]

_FILTER_SEPARATOR = "; "


def default_settings_path() -> Path:
    """Location of the per-user settings file."""
    return Path(user_config_dir("ArcherAssistant", "Home")) / "settings.json"


def find_arg(args: Iterable[str], name: str) -> Optional[str]:
    """Look up argument ``name``.

    Returns ``name`` itself when given bare, the value when given as
    ``name=value``, and None when absent.
    """
    args = list(args)
    if name in args:
        return name
    prefix = name + "="
    for arg in args:
        if arg.startswith(prefix):
            return arg.split("=")[1]
    return None


def is_gui(args: Iterable[str]) -> bool:
    """True unless ``--nogui`` is among the arguments."""
    return "--nogui" not in list(args)


def parse_image_filters(text: str) -> list[str]:
    """Split a ``"; "``-separated filter string, dropping empty parts."""
    return [part for part in text.split(_FILTER_SEPARATOR) if part]


def format_image_filters(filters: Iterable[str]) -> str:
    """Join image filters into the ``"; "``-separated form."""
    return _FILTER_SEPARATOR.join(filters)


class SettingsManager:
    """Settings kept between program runs, with defaults filled in on start."""

    def __init__(
        self,
        args: Optional[Sequence[str]] = None,
        path: Union[str, "os.PathLike[str]", None] = None,
    ):
        self.args = list(args or [])
        self.gui = is_gui(self.args)
        self.path = Path(path) if path is not None else default_settings_path()
        self._values: dict[str, Any] = self._load()
        self.setup_config_file()
        self.setup_intervals()

    def _load(self) -> dict[str, Any]:
        try:
            with self.path.open(encoding="utf-8") as handle:
                data = json.load(handle)
        except (OSError, json.JSONDecodeError):
            return {}
        return data if isinstance(data, dict) else {}

    def _save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as handle:
            json.dump(self._values, handle, indent=2)

    def _store(self, name: str, value: Any) -> None:
        self._values[name] = value
        self._save()

    def arg(self, name: str) -> Optional[str]:
        return find_arg(self.args, name)

    def get(self, name: str) -> Any:
        """Value of setting ``name``, or None if it is not set."""
        return self._values.get(name)

    def set(self, name: str, value: Any) -> bool:
        """Change an existing setting; returns False if ``name`` is unknown."""
        if name not in self._values:
            return False
        self._store(name, value)
        return True

    def setup_config_file(self, filename: Optional[str] = None) -> None:
        """Record the data file: ``filename``, else an existing ``cfg=`` argument, else the default."""
        if filename:
            self._store(CFG_FILE, filename)
        else:
            for arg in self.args:
                if arg.startswith("cfg="):
                    candidate = arg[len("cfg="):]
                    if os.path.exists(candidate):
                        self._store(CFG_FILE, candidate)
                        break
        if CFG_FILE not in self._values:
            self._store(CFG_FILE, DEFAULT_CONFIG_FILE)

    def setup_intervals(self) -> None:
        """Fill in the default session and series intervals where missing."""
        if SESSION_INTVL not in self._values:
            self._store(SESSION_INTVL, DEFAULT_SESSION_INTERVAL)
        if SERIES_INTVL not in self._values:
            self._store(SERIES_INTVL, DEFAULT_SERIES_INTERVAL)

    def setup_image_file_extensions(self) -> None:
        """Fill in the default image file filters where missing."""
        if IMAGE_FILTER not in self._values:
            self._store(IMAGE_FILTER, list(DEFAULT_IMAGE_FILTERS))

    def session_interval(self) -> int:
        """Seconds between images after which a new session starts."""
        return int(self._values[SESSION_INTVL])

    def series_interval(self) -> int:
        """Seconds between images after which a new series starts."""
        return int(self._values[SERIES_INTVL])