[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ytdlmini"
version = "0.1.0"
description = "A minimalist YouTube download manager built around the yt-dlp command"
requires-python = ">=3.10"
keywords = ["youtube", "yt-dlp", "downloader", "video"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Video",
]
dependencies = [
    "platformdirs",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[project.scripts]
ytdl-mini = "ytdlmini.app:main"

[tool.hatch.build.targets.wheel]
packages = ["ytdlmini"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
