"""
panels-dl: a sequential batch downloader for the Panels wallpaper manifest.
"""

__version__ = "1.0.0"
