from datetime import datetime

from PIL import Image

from archerlog.exif import ExifReader, parse_exif_datetime


def _write_jpeg(path, original=None, image=None, digitized=None):
    picture = Image.new("RGB", (8, 8), "white")
    exif = Image.Exif()
    if image:
        exif[0x0132] = image
    sub = {}
    if original:
        sub[0x9003] = original
    if digitized:
        sub[0x9004] = digitized
    if sub:
        exif[0x8769] = sub
    picture.save(path, "JPEG", exif=exif)


def test_parse_exif_datetime():
    assert parse_exif_datetime("2020:05:01 10:20:30") == datetime(2020, 5, 1, 10, 20, 30)


def test_parse_exif_datetime_rejects_other_forms():
    assert parse_exif_datetime("") is None
    assert parse_exif_datetime(None) is None
    assert parse_exif_datetime("2020-05-01 10:20:30") is None
    assert parse_exif_datetime("2020:13:01 10:20:30") is None
    assert parse_exif_datetime("2020:5:1 10:20:30") is None


def test_reads_all_stamps(tmp_path):
    path = tmp_path / "shot.jpg"
    _write_jpeg(
        path,
        original="2021:06:07 08:09:10",
        image="2021:06:07 09:00:00",
        digitized="2021:06:07 08:09:11",
    )
    reader = ExifReader()
    assert reader.open_file(path) is True
    assert reader.original_datetime() == datetime(2021, 6, 7, 8, 9, 10)
    assert reader.image_datetime() == datetime(2021, 6, 7, 9, 0, 0)
    assert reader.digitized_datetime() == datetime(2021, 6, 7, 8, 9, 11)


def test_missing_stamp_is_none(tmp_path):
    path = tmp_path / "shot.jpg"
    _write_jpeg(path, image="2021:06:07 09:00:00")
    reader = ExifReader()
    assert reader.open_file(path) is True
    assert reader.original_datetime() is None
    assert reader.image_datetime() == datetime(2021, 6, 7, 9, 0, 0)


def test_missing_file(tmp_path):
    assert ExifReader().open_file(tmp_path / "none.jpg") is False


def test_jpeg_without_exif(tmp_path):
    path = tmp_path / "plain.jpg"
    Image.new("RGB", (8, 8), "black").save(path, "JPEG")
    assert ExifReader().open_file(path) is False


def test_png_is_rejected(tmp_path):
    path = tmp_path / "image.png"
    Image.new("RGB", (8, 8), "black").save(path, "PNG")
    assert ExifReader().open_file(path) is False


def test_text_file_is_rejected(tmp_path):
    path = tmp_path / "notes.jpg"
    path.write_text("not an image", encoding="utf-8")
    assert ExifReader().open_file(path) is False


def test_failed_open_keeps_previous_stamps(tmp_path):
    good = tmp_path / "good.jpg"
    _write_jpeg(good, original="2019:01:02 03:04:05")
    reader = ExifReader()
    reader.open_file(good)
    assert reader.open_file(tmp_path / "none.jpg") is False
    assert reader.original_datetime() == datetime(2019, 1, 2, 3, 4, 5)