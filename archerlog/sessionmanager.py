"""Grouping dated images into training sessions and shooting series."""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from archerlog.settings import SERIES_INTVL, SESSION_INTVL, SettingsManager
from archerlog.treemodel import TreeModel
from archerlog.treenode import TreeNode

PARENTNODE_SESSIONS = "sessions"
DATE_FORMAT = "%Y.%m.%d %H:%M:%S"
DATETIME_ATTRIBUTE = "DateTime"
EARLIEST = datetime(1970, 1, 1)


class ImageSource(Protocol):
    def image_files(self) -> dict[datetime, str]: ...


class SessionManager:
    """Builds ``session``/``series``/``image`` elements from dated image files.

    Images closer in time than the series interval share a series; a gap of
    at least the session interval starts a new session.
    """

    def __init__(self, settings: SettingsManager):
        self.settings = settings
        self.model: Optional[TreeModel] = None
        self.file_manager: Optional[ImageSource] = None
        self.sessions_node: Optional[TreeNode] = None

    def set_model(self, model: TreeModel) -> None:
        node = model.root().child_named(PARENTNODE_SESSIONS)
        if node is None:
            raise ValueError(f"data model has no <{PARENTNODE_SESSIONS}> element")
        self.model = model
        self.sessions_node = node

    def set_file_manager(self, file_manager: ImageSource) -> None:
        self.file_manager = file_manager

    def _require_model(self) -> tuple[TreeModel, TreeNode]:
        if self.model is None or self.sessions_node is None:
            raise RuntimeError("no model set")
        return self.model, self.sessions_node

    def node_datetime(self, node: TreeNode) -> Optional[datetime]:
        """The node's ``DateTime`` attribute, or None if absent or malformed."""
        text = node.attribute(DATETIME_ATTRIBUTE)
        if not text:
            return None
        try:
            return datetime.strptime(text, DATE_FORMAT)
        except ValueError:
            return None

    def update_sessions(self, start: Optional[datetime] = None, end: Optional[datetime] = None) -> None:
        """Rebuild the sessions for images taken between ``start`` and ``end``.

        Sessions dated in that range are removed first; new ones are inserted
        after the last session dated before ``start``.
        """
        model, sessions_node = self._require_model()
        if self.file_manager is None:
            raise RuntimeError("no file manager set")

        images = [
            (taken, name)
            for taken, name in sorted(self.file_manager.image_files().items())
            if (start is None or taken >= start) and (end is None or taken <= end)
        ]
        previous = start if start is not None else EARLIEST

        first_to_clear: Optional[int] = None
        count_to_clear = 0
        insert_after = -1
        for row, session in enumerate(sessions_node.children()):
            stamp = self.node_datetime(session)
            if first_to_clear is None:
                if start is None or (stamp is not None and stamp >= start):
                    first_to_clear = row
                    count_to_clear += 1
                else:
                    insert_after = row
            elif end is not None and stamp is not None and stamp > end:
                break
            else:
                count_to_clear += 1

        sessions_index = model.index_from_node(sessions_node)
        if first_to_clear is not None and count_to_clear:
            model.remove_rows(first_to_clear, count_to_clear, sessions_index)

        session_interval = int(self.settings.get(SESSION_INTVL))
        series_interval = int(self.settings.get(SERIES_INTVL))

        session: Optional[TreeNode] = None
        series: Optional[TreeNode] = None
        for taken, name in images:
            gap = int((taken - previous).total_seconds())
            if series is None or gap >= session_interval:
                session = self.create_session(insert_after, taken)
                insert_after += 1
                series = self.create_series(session, taken)
                previous = taken
            elif gap >= series_interval:
                series = self.create_series(session, taken)
                previous = taken
            self.append_image(series, taken, name)

    def last_result(self) -> datetime:
        """Date of the latest recorded image or series; the epoch when there is none."""
        _, sessions_node = self._require_model()
        for session in reversed(sessions_node.children("session")):
            for series in reversed(session.children("series")):
                images = series.children("image")
                if not images:
                    continue
                for image in reversed(images):
                    stamp = self.node_datetime(image)
                    if stamp is not None:
                        return stamp
                stamp = self.node_datetime(series)
                if stamp is not None:
                    return stamp
        return EARLIEST

    def _new_child(self, name: str, parent: TreeNode, dt: datetime, row: int = -1) -> TreeNode:
        model, _ = self._require_model()
        index = model.insert_element(name, model.index_from_node(parent), row)
        node = model.node_from_index(index)
        node.is_new = True
        node.set_attribute(DATETIME_ATTRIBUTE, dt.strftime(DATE_FORMAT))
        return node

    def create_session(self, after: int, dt: datetime) -> TreeNode:
        """Insert a session dated ``dt`` right after row ``after``."""
        _, sessions_node = self._require_model()
        return self._new_child("session", sessions_node, dt, after + 1)

    def create_series(self, session: TreeNode, dt: datetime) -> TreeNode:
        """Append a series dated ``dt`` to ``session``."""
        return self._new_child("series", session, dt)

    def append_image(self, series: TreeNode, dt: datetime, image_name: str) -> TreeNode:
        """Append an image element for file ``image_name`` to ``series``."""
        image = self._new_child("image", series, dt)
        image.set_attribute("file", image_name)
        return image