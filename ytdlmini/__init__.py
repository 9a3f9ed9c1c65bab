"""A minimalist YouTube download manager around the yt-dlp command line tool."""

__version__ = "0.1.0"