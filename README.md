# archerlog

archerlog keeps a log of archery training in one XML database. It scans
the image directories listed in the database and reads the time each
photo was taken from its EXIF data. It then groups the photos into
training **sessions** and shooting **series**. Hit positions on an image
are stored as fractions of the image's width and height.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Command line

```
archerlog cfg=path/to/config.xml
```

Arguments:

- `cfg=<file>` sets the XML database. It is used only if the file exists.
  If it is not used, the database remembered in the settings applies, or
  `config.xml` when no database is remembered.
- `settings=<file>` sets the JSON file that holds the settings. The
  default is `settings.json` in the per-user configuration directory for
  `ArcherAssistant`.
- `--nogui` turns off the listing that is printed at the end.

The command loads the database and takes the date of the latest image (or
series) already recorded. It removes any sessions dated after that point.
It then adds sessions, series and image elements for every photo taken
since then. Without `--nogui` it prints the `sessions` element as an
indented outline, with each element's `DateTime` in brackets. The exit
status is 0 on success. If the database cannot be used, for example
because it has no `imagePaths` or no `sessions` element, the command
prints an error and exits with status 1.

The changes are held in memory only. The command does not write the
database back to disk. To save, call `TreeModel.write_file`.

## The database

A minimal database:

```xml
<?xml version="1.0"?>
<ArcherAssistant>
  <imagePaths>
    <path dir="/home/archer/photos" />
  </imagePaths>
  <sessions />
</ArcherAssistant>
```

Each `session`, `series` and `image` element has a `DateTime` attribute
in the form `YYYY.MM.DD hh:mm:ss`. Image elements also have a `file`
attribute. Hit elements under an image have `X` and `Y` attributes, which
are positions relative to the image.

## How photos are grouped

Only JPEG files that have an EXIF "date taken" (original date and time)
are used. They are sorted by that date. The first photo starts a session.

Each later photo is compared with the start of the current series:

- If it was taken at least the *session interval* later, it starts a new
  session.
- If it was taken at least the *series interval* later, it starts a new
  series.
- Otherwise it joins the current series.

The default intervals are 20 minutes for sessions and 2 minutes for
series.

By default every file in the image directories is checked. To limit the
scan, set the `imagesFilter` setting to a list of glob patterns. The
patterns are matched without regard to case.
`SettingsManager.setup_image_file_extensions()` fills in `*.jpg` and
`*.png` if no filter is set.

```python
from archerlog.settings import SettingsManager, IMAGE_FILTER

settings = SettingsManager(["cfg=training.xml"])
settings.setup_image_file_extensions()
print(settings.session_interval(), settings.series_interval())
print(settings.get(IMAGE_FILTER))
```

`SettingsManager.set` changes only settings that already exist. It
returns `False` for an unknown name.

## Using the library

```python
from archerlog.core import Core

core = Core(["cfg=training.xml"])
sessions = core.model.root().child_named("sessions")
for session in sessions.children("session"):
    print(session.attribute("DateTime"))
core.model.write_file("training.xml")
```

The modules:

- `archerlog.treenode`: `TreeNode`, an XML element with its attributes,
  children and file reading and writing.
- `archerlog.treemodel`: `TreeModel` and `ModelIndex`, which present the
  tree as rows and columns. Rows can be inserted, removed and moved, and
  `move_up` and `move_down` move a row by one place.
- `archerlog.settings`: `SettingsManager`, plus the helpers `find_arg`,
  `is_gui`, `parse_image_filters` and `format_image_filters`.
- `archerlog.exif`: `ExifReader` and `parse_exif_datetime`.
- `archerlog.filemanager`: `FileManager`, which keeps the image
  directories and finds dated photos in them.
- `archerlog.sessionmanager`: `SessionManager`, which builds the
  session, series and image elements.
- `archerlog.datamanager`: `DataManager`, direct access to the database
  file. It can be used as a context manager, and it saves the file on
  close if it was changed.
- `archerlog.durations`: `split_seconds` and `join_seconds`.
- `archerlog.views`: row filters and display text for path lists and
  session trees.
- `archerlog.geometry`: `Rect`, `relative_position`, `absolute_position`,
  `existing_hit_positions` and `zoom_factor`.
- `archerlog.core`: `Core`, which connects the parts, and `main`.

## What it does not do

archerlog has no graphical interface. It has no image viewer and no way
to mark hits on a photo interactively. The `geometry` and `views` modules
provide only the calculations that such a program would need.