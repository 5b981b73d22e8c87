import xml.etree.ElementTree as ET
from datetime import datetime

import pytest

from archerlog.datamanager import DataManager


def _write(path, text):
    path.write_text(text, encoding="utf-8")
    return path


def test_missing_file_is_not_opened(tmp_path):
    manager = DataManager()
    assert manager.open_config_file(tmp_path / "none.xml") is False
    assert manager.opened is False


def test_malformed_file_is_not_opened(tmp_path):
    path = _write(tmp_path / "bad.xml", "<a><b></a>")
    manager = DataManager()
    assert manager.open_config_file(path) is False


def test_basic_structure_added_and_saved(tmp_path):
    path = _write(tmp_path / "data.xml", "<Foo><imagePaths/></Foo>")
    with DataManager() as manager:
        assert manager.open_config_file(path) is True
        assert manager.is_modified() is True
    root = ET.parse(path).getroot()
    assert root.tag == "ArcherAssistant"
    assert root.find("sessions") is not None
    assert root.find("imagePaths") is not None


def test_complete_file_not_rewritten(tmp_path):
    text = "<ArcherAssistant><sessions/></ArcherAssistant>"
    path = _write(tmp_path / "data.xml", text)
    manager = DataManager()
    assert manager.open_config_file(path)
    assert manager.is_modified() is False
    manager.close()
    assert path.read_text(encoding="utf-8") == text


def test_close_clears_modified_flag(tmp_path):
    path = _write(tmp_path / "data.xml", "<Other/>")
    manager = DataManager()
    manager.open_config_file(path)
    manager.close()
    assert manager.is_modified() is False


def test_image_paths(tmp_path):
    (tmp_path / "images").mkdir()
    absent_absolute = tmp_path / "elsewhere" / "missing"
    path = _write(
        tmp_path / "data.xml",
        "<ArcherAssistant><sessions/><imagePaths>"
        '<path dir="images"/>'
        '<path dir="nothing_here"/>'
        f'<path dir="{absent_absolute}"/>'
        "</imagePaths></ArcherAssistant>",
    )
    manager = DataManager()
    manager.open_config_file(path)
    assert manager.image_paths() == [tmp_path / "images", absent_absolute]


def test_image_paths_without_file_raises():
    with pytest.raises(RuntimeError):
        DataManager().image_paths()


_SESSIONS = (
    "<ArcherAssistant><sessions>"
    '<session Date="2020-01-01" Time="09:00:00"/>'
    '<session Date="2020-03-01" Time="10:00:00">'
    '<series Date="2020-03-01" Time="11:00:00"/>'
    '<series Date="2020-03-01" Time="12:00:00"/>'
    "</session>"
    "<session/>"
    "</sessions></ArcherAssistant>"
)


def test_last_result_latest_series(tmp_path):
    path = _write(tmp_path / "data.xml", _SESSIONS)
    manager = DataManager()
    manager.open_config_file(path)
    assert manager.last_result() == datetime(2020, 3, 1, 12, 0, 0)


def test_last_result_respects_limit(tmp_path):
    path = _write(tmp_path / "data.xml", _SESSIONS)
    manager = DataManager()
    manager.open_config_file(path)
    assert manager.last_result(datetime(2020, 3, 1, 11, 30)) == datetime(2020, 3, 1, 11, 0, 0)
    assert manager.last_result(datetime(2020, 3, 1, 10, 30)) == datetime(2020, 3, 1, 10, 0, 0)


def test_last_result_none_without_dated_sessions(tmp_path):
    path = _write(tmp_path / "data.xml", "<ArcherAssistant><sessions><session/></sessions></ArcherAssistant>")
    manager = DataManager()
    manager.open_config_file(path)
    assert manager.last_result() is None