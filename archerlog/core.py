"""Central object tying settings, the data model and the managers together."""

from __future__ import annotations

import os
import sys
from datetime import timedelta
from typing import Optional, Sequence, Union

from archerlog.filemanager import FileManager
from archerlog.sessionmanager import PARENTNODE_SESSIONS, SessionManager
from archerlog.settings import CFG_FILE, SettingsManager, find_arg, is_gui
from archerlog.treemodel import TreeModel
from archerlog.treenode import TreeNode
from archerlog.views import series_display_text


class Core:
    """Owns the settings, the data model and the file and session managers."""

    def __init__(
        self,
        args: Optional[Sequence[str]] = None,
        settings_path: Union[str, "os.PathLike[str]", None] = None,
    ):
        self.args = list(args or [])
        self.gui = is_gui(self.args)
        self.settings = SettingsManager(self.args, settings_path)
        self.file_manager = FileManager(self.settings)
        self.session_manager = SessionManager(self.settings)
        self.model: Optional[TreeModel] = None
        self.reset()

    def reset(self) -> None:
        """Reload the data file and add sessions for images newer than the last result."""
        if self.model is None:
            self.model = TreeModel()
        self.model.clear(include_root=True)
        self.model.read_file(str(self.settings.get(CFG_FILE)))

        self.file_manager.update_config_file()
        self.file_manager.set_model(self.model)
        self.session_manager.set_model(self.model)
        self.session_manager.set_file_manager(self.file_manager)

        start = self.session_manager.last_result() + timedelta(milliseconds=1)
        self.session_manager.update_sessions(start)


def _outline(node: TreeNode, depth: int = 0) -> list[str]:
    lines = ["  " * depth + series_display_text(node, node.name())]
    for child in node:
        lines.extend(_outline(child, depth + 1))
    return lines


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Load the data file and group new images into sessions.

    Arguments: ``cfg=<file>`` selects the data file, ``settings=<file>`` the
    settings file, and ``--nogui`` suppresses the session listing.
    """
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        core = Core(args, find_arg(args, "settings"))
    except (ValueError, RuntimeError, OSError) as error:
        print(f"error: {error}", file=sys.stderr)
        return 1
    if core.gui:
        sessions = core.model.root().child_named(PARENTNODE_SESSIONS)
        if sessions is not None:
            print("\n".join(_outline(sessions)))
    return 0


if __name__ == "__main__":
    sys.exit(main())