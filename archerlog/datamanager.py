"""Direct access to the XML data file: basic structure, image paths, latest results."""

from __future__ import annotations

import copy
import os
import xml.etree.ElementTree as ET
from datetime import date, datetime, time
from pathlib import Path
from typing import Optional, Union

ROOT_NAME = "ArcherAssistant"
SESSIONS_NODE = "sessions"
IMAGE_PATHS_NODE = "imagePaths"

PathLike = Union[str, "os.PathLike[str]"]


def _element_datetime(element: ET.Element) -> Optional[datetime]:
    """Combine the ``Date`` and ``Time`` attributes; a missing time means midnight."""
    date_text = element.get("Date")
    if date_text is None:
        return None
    time_text = element.get("Time")
    try:
        day = date.fromisoformat(date_text)
        moment = time.fromisoformat(time_text) if time_text else time()
    except ValueError:
        return None
    return datetime.combine(day, moment)


class DataManager:
    """Keeps the XML data file open and saves it on close if it was modified."""

    def __init__(self) -> None:
        self.path: Optional[Path] = None
        self.opened = False
        self._modified = False
        self._tree: Optional[ET.ElementTree] = None

    def __enter__(self) -> "DataManager":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def _root(self) -> ET.Element:
        if self._tree is None:
            raise RuntimeError("no data file opened")
        return self._tree.getroot()

    def open_config_file(self, filename: PathLike) -> bool:
        """Load ``filename``; on success make sure the basic structure is present."""
        self.path = Path(filename)
        self._modified = False
        try:
            self._tree = ET.parse(self.path)
        except (OSError, ET.ParseError):
            self._tree = None
            self.opened = False
            return False
        self.opened = True
        self.set_basic_structure()
        return True

    def set_basic_structure(self) -> None:
        """Name the document element and add a ``sessions`` element where missing."""
        root = self._root()
        if root.tag != ROOT_NAME:
            root.tag = ROOT_NAME
            self._modified = True
        if root.find(SESSIONS_NODE) is None:
            ET.SubElement(root, SESSIONS_NODE)
            self._modified = True

    def is_modified(self) -> bool:
        return self._modified

    def image_paths(self) -> list[Path]:
        """Directories listed under ``imagePaths``.

        Relative entries are resolved against the data file's directory and
        kept if they exist; entries that do not exist there are kept only
        when absolute.
        """
        root = self._root()
        base = self.path.parent if self.path is not None else Path(".")
        found: list[Path] = []
        paths_node = root.find(IMAGE_PATHS_NODE)
        if paths_node is None:
            return found
        for element in paths_node.findall("path"):
            value = element.get("dir", "")
            candidate = Path(os.path.abspath(base / value))
            if candidate.is_dir():
                found.append(candidate)
            elif Path(value).is_absolute():
                found.append(Path(value))
        return found

    def last_result(self, not_younger_than: Optional[datetime] = None) -> Optional[datetime]:
        """Date of the latest session, or of its latest series not after ``not_younger_than``."""
        if not_younger_than is None:
            not_younger_than = datetime.now()
        sessions = self._root().find(SESSIONS_NODE)
        latest: Optional[datetime] = None
        latest_node: Optional[ET.Element] = None
        for session in sessions.findall("session") if sessions is not None else []:
            stamp = _element_datetime(session)
            if stamp is None:
                continue
            if latest is None or stamp > latest:
                latest, latest_node = stamp, session
        if latest_node is not None:
            for series in list(latest_node.findall("series")):
                stamp = _element_datetime(series)
                if stamp is None:
                    continue
                if stamp > latest and stamp <= not_younger_than:
                    latest = stamp
        return latest

    def close(self) -> None:
        """Save the file if it was opened and modified."""
        if self.opened and self._modified and self._tree is not None and self.path is not None:
            element = copy.deepcopy(self._tree.getroot())
            ET.indent(element, space="  ")
            ET.ElementTree(element).write(self.path, encoding="utf-8", xml_declaration=True)
            self._modified = False