import pytest

from archerlog.treemodel import ModelIndex, TreeModel
from archerlog.treenode import TreeNode
from archerlog.views import (
    path_display,
    path_exists,
    path_row_accepted,
    series_display_text,
    series_row_accepted,
)

_DOCUMENT = (
    "<ArcherAssistant>"
    '<imagePaths><path dir="photos"/></imagePaths>'
    '<sessions><session DateTime="2020.01.02 03:04:05"><series><image/></series></session></sessions>'
    "</ArcherAssistant>"
)


@pytest.fixture
def model(tmp_path):
    path = tmp_path / "data.xml"
    path.write_text(_DOCUMENT, encoding="utf-8")
    tree = TreeModel()
    assert tree.read_file(path)
    return tree


def test_path_rows(model):
    top = ModelIndex()
    assert path_row_accepted(model, 0, top) is True
    assert path_row_accepted(model, 1, top) is False
    paths_index = model.index(0, 0, top)
    assert path_row_accepted(model, 0, paths_index) is True
    sessions_index = model.index(1, 0, top)
    assert path_row_accepted(model, 0, sessions_index) is False


def test_path_rows_without_model():
    assert path_row_accepted(None, 0, ModelIndex()) is False


def test_path_display(model):
    node = model.root().child(0).child(0)
    assert path_display(node) == "photos"


def test_path_exists(tmp_path):
    node = TreeNode()
    node.set_attribute("dir", str(tmp_path))
    assert path_exists(node) is True
    node.set_attribute("dir", str(tmp_path / "missing"))
    assert path_exists(node) is False


def test_series_rows(model):
    top = ModelIndex()
    assert series_row_accepted(model, 1, top) is True
    assert series_row_accepted(model, 0, top) is False
    sessions_index = model.index(1, 0, top)
    assert series_row_accepted(model, 0, sessions_index) is True
    session_index = model.index(0, 0, sessions_index)
    assert series_row_accepted(model, 0, session_index) is True
    series_index = model.index(0, 0, session_index)
    assert series_row_accepted(model, 0, series_index) is False


def test_series_rows_without_model():
    assert series_row_accepted(None, 0, ModelIndex()) is True


def test_series_display_text(model):
    session = model.root().child(1).child(0)
    assert series_display_text(session, "session") == "session (2020.01.02 03:04:05)"
    series = session.child(0)
    assert series_display_text(series, "series") == "series"