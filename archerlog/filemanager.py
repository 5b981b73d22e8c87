"""Image directories recorded in the data file and the images found in them."""

from __future__ import annotations

import fnmatch
import os
from datetime import datetime
from typing import Optional

from archerlog.exif import ExifReader
from archerlog.settings import CFG_FILE, IMAGE_FILTER, SettingsManager
from archerlog.treemodel import ModelIndex, TreeModel
from archerlog.treenode import TreeNode

ATTRIBUTE_DIR = "dir"
NODE_PATH = "path"
PARENTNODE_PATH = "imagePaths"


class FileManager:
    """Keeps the list of image directories and finds the images in them."""

    node_name = PARENTNODE_PATH

    def __init__(self, settings: SettingsManager):
        self.settings = settings
        self.model: Optional[TreeModel] = None
        self.node: Optional[TreeNode] = None
        self.config_dir = ""
        self._paths: list[str] = []
        self.update_config_file()

    def set_model(self, model: TreeModel) -> None:
        """Work on ``model`` and pick up the existing directories recorded in it."""
        node = model.root().child_named(PARENTNODE_PATH)
        if node is None:
            raise ValueError(f"data model has no <{PARENTNODE_PATH}> element")
        self.model = model
        self.node = node
        self._paths = []
        self.paths()

    def _require_model(self) -> tuple[TreeModel, TreeNode]:
        if self.model is None or self.node is None:
            raise RuntimeError("no model set")
        return self.model, self.node

    def set_path(self, path: str) -> None:
        """Record a new image directory; known directories are ignored."""
        model, _ = self._require_model()
        if path in self._paths:
            return
        new_index = model.insert_element(NODE_PATH, self.node_index())
        model.node_from_index(new_index).set_attribute(ATTRIBUTE_DIR, path)
        self._paths.append(path)

    def paths(self) -> list[str]:
        """Absolute paths of the recorded directories that exist."""
        _, node = self._require_model()
        for child in node.children(NODE_PATH):
            directory = child.attribute(ATTRIBUTE_DIR)
            if directory and os.path.isdir(directory):
                absolute = os.path.abspath(directory)
                if absolute not in self._paths:
                    self._paths.append(absolute)
        return list(self._paths)

    def update_config_file(self) -> None:
        """Refresh the directory of the data file after it changed."""
        config_file = self.settings.get(CFG_FILE) or ""
        self.config_dir = os.path.dirname(str(config_file)) or "."

    def _name_filters(self) -> list[str]:
        value = self.settings.get(IMAGE_FILTER)
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return [str(item) for item in value]

    def _files_in(self, directory: str, filters: list[str]) -> list[str]:
        patterns = [pattern.lower() for pattern in filters]
        try:
            entries = [entry for entry in os.scandir(directory) if entry.is_file()]
        except OSError:
            return []
        matching = [
            entry
            for entry in entries
            if not patterns or any(fnmatch.fnmatchcase(entry.name.lower(), p) for p in patterns)
        ]
        matching.sort(key=lambda entry: entry.stat().st_mtime)
        return [os.path.abspath(entry.path) for entry in matching]

    def image_files(self) -> dict[datetime, str]:
        """Images with an EXIF capture date, keyed and ordered by that date."""
        filters = self._name_filters()
        files = [name for path in self._paths for name in self._files_in(path, filters)]
        reader = ExifReader()
        found: dict[datetime, str] = {}
        for name in files:
            if not reader.open_file(name):
                continue
            taken = reader.original_datetime()
            if taken is not None:
                found[taken] = name
        return dict(sorted(found.items()))

    def node_index(self) -> ModelIndex:
        """Model index of the directories element."""
        model, node = self._require_model()
        return model.index_from_node(node)