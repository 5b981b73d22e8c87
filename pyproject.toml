[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "archerlog"
version = "0.1.0"
description = "Group archery training photos into sessions and series by EXIF date in an XML database"
requires-python = ">=3.10"
keywords = ["archery", "training", "exif", "xml", "sessions"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Utilities",
]
dependencies = [
    "pillow",
    "platformdirs",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pillow",
]

[project.scripts]
archerlog = "archerlog.core:main"

[tool.hatch.build.targets.wheel]
packages = ["archerlog"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
