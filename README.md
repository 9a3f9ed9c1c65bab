# ytdlmini

A minimalist YouTube download manager built around the `yt-dlp` command line
tool. It validates YouTube links, keeps a queue of download entries, stores
the preferred resolution and download folder as JSON, and runs `yt-dlp` to
fetch metadata, list formats and download videos.

## Installation

```
pip install .
```

The only runtime dependency is `platformdirs`. `yt-dlp` itself is looked up
on your `PATH` by `YtDlp.initialize()`; if it is missing, that method runs
`pip install yt-dlp` and looks again.

## The terminal front end

```
ytdl-mini
ytdl-mini --url https://www.youtube.com/watch?v=dQw4w9WgXcQ
```

This draws a text window with a URL input (pre-filled with a sample link, or
with the value of `--url`), an empty downloads table and an optional settings
panel, then reads commands from standard input, one per line:

- any other text replaces the contents of the URL input;
- an empty line checks the URL input: a valid YouTube URL clears the input,
  an invalid one prints `Invalid YouTube URL: ...`;
- `:settings` (`:s`) shows or hides the settings panel, which lists the
  resolutions 1080p, 720p, 1440p and 4K (1080p marked as selected) and the
  download path `~/Downloads/ytdl-mini`;
- `:browse` (`:b`) prints the download path with `~` expanded;
- `:backspace` (`:bs`) deletes the last character of the URL input;
- `:quit` (`:q`) exits, as does the end of input.

## Using it as a library

```python
import asyncio

from ytdlmini.url_validator import is_valid_youtube_url, extract_video_id
from ytdlmini.file_utils import sanitize_filename
from ytdlmini.ytdlp import YtDlp

url = "https://www.youtube.com/watch?v=dQw4w9WgXcQ"
assert is_valid_youtube_url(url)
print(extract_video_id(url))               # dQw4w9WgXcQ
print(sanitize_filename("Title/With:Bad"))  # Title_With_Bad


async def fetch() -> None:
    ytdlp = YtDlp()
    await ytdlp.initialize()
    metadata = await ytdlp.get_metadata(url)
    print(metadata.title)
    print(await ytdlp.download_video(url, "videos/", "1280x720"))


asyncio.run(fetch())
```

The modules:

- `ytdlmini.url_validator`: `is_valid_youtube_url` accepts `www.youtube.com`,
  `youtube.com`, `youtu.be`, `m.youtube.com` and `music.youtube.com` links;
  `extract_video_id` returns the ID from a `youtu.be/<id>` path or a `v=`
  query parameter, or `None`.
- `ytdlmini.file_utils`: `get_downloads_dir` (the platform download folder
  plus `ytdl-mini`), `ensure_dir_exists`, `sanitize_filename` (replaces
  unsafe and control characters with `_`, trims, caps at 200 bytes, falls
  back to `video`) and `get_file_extension` (`mp4`, `webm`, `mkv`, `avi`,
  `mov`, otherwise `mp4`).
- `ytdlmini.settings`: the `Settings` dataclass (`default_resolution`
  `1920x1080`, `download_path`, `max_concurrent_downloads` 3) with
  `Settings.load(path=None)`, `save(path=None)`, `set_resolution` and
  `set_download_path`. Without a path the file is `config.json` in a
  `ytdl-mini` folder of the user configuration directory. Problems raise
  `SettingsError`.
- `ytdlmini.download_manager`: `DownloadManager`, `DownloadItem`,
  `DownloadStatus` and `DownloadState`. `add_download` (async) raises
  `InvalidUrlError` for non-YouTube URLs; the manager allows three
  concurrent downloads by default, never fewer than one.
- `ytdlmini.app_state`: `AppState`, async lock-guarded access to a download
  manager, the settings and the current URL.
- `ytdlmini.ytdlp`: `YtDlp` with `initialize`, `is_available`,
  `get_metadata`, `download_video` and `get_formats`, plus the helpers
  `parse_metadata`, `format_selector` and `extract_filename`. Failures raise
  `YtDlpError`.

## What it does not do

- The terminal front end does not queue or download anything: accepting a
  URL only validates it and clears the input, and the downloads table always
  shows its empty state. Settings shown there are not read from or saved to
  the configuration file, and `:browse` opens no file picker.
- `DownloadManager` does not run `yt-dlp`. Starting a download marks it as
  downloading and waits a fixed simulated time (two seconds by default); the
  entry's status, progress and file path change only through the
  `update_download_*` methods. Finished downloads do not start the next
  pending one.
- To actually download a video, call `YtDlp.download_video` yourself.

## Running the tests

```
pip install ".[test]"
pytest
```