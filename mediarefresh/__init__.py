"""Refresh, search and rename media in Plex, Sonarr and Bazarr from a file or folder path."""

__version__ = "1.0.0"
