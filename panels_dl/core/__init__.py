"""
Core application engine for orchestrating the download process.

The `DownloadManager` drives a run from fetching the manifest to the last
image, delegating each transfer to the `Downloader`.
"""
