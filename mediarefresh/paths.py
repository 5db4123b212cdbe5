"""Path helpers: root remapping, comparison form and show-folder extraction."""

import re

from .console import get_default

# A tuple of video file extensions, used to tell a file path from a folder path.
VIDEO_EXTS = ('.mkv', '.mp4', '.avi', '.m4v', '.iso', '.ts', '.wmv', '.mov', '.webm')

# Folder names that sit between a show folder and its episodes.
SEASON_FOLDER = re.compile(r'^(?:season[\s._-]*\d+|s\d{1,3}|specials)$', re.IGNORECASE)


def _forward(path):
    return (path or '').replace('\\', '/')


def remap_path(path, source_root, target_root, log=None):
    """
    Swaps source_root for target_root at the start of path.
    Anything missing, or a path outside source_root, comes back unchanged.
    """
    log = log or get_default()
    if not path or not source_root or not target_root:
        return path

    norm_root = _forward(source_root)
    norm_path = _forward(path)
    if norm_path.lower().startswith(norm_root.lower()):
        # Keep the remainder exactly as the caller wrote it
        remapped = target_root + path[len(norm_root):]
        log.debug(f"Remapped {path} -> {remapped}")
        return remapped

    log.debug(f"No remap applied to {path}")
    return path


def comparison_path(path):
    """Forward-slash, lower-case form used only to compare paths."""
    return _forward(path).lower()


def file_name(path):
    """Last path segment, whatever the separator style."""
    return _forward(path).rstrip('/').split('/')[-1]


def parent_dir(path):
    """Everything before the last separator. A bare name is returned as is."""
    if not path: return path
    cut = max(path.rfind('/'), path.rfind('\\'))
    if cut <= 0:
        return path if cut < 0 else path[:1]
    return path[:cut]


def show_folder_name(path, is_file=None):
    """
    Finds the show folder in a file or folder path.
    '/tv/The Show (2019)/Season 01/ep1.mkv' -> 'The Show (2019)'
    is_file=True always drops the last segment. Left as None, it is only
    dropped when it carries a known video extension.
    """
    parts = [p for p in _forward(path).split('/') if p]
    if parts and (is_file or (is_file is None and parts[-1].lower().endswith(VIDEO_EXTS))):
        parts.pop()
    while len(parts) > 1 and SEASON_FOLDER.match(parts[-1]):
        parts.pop()
    return parts[-1] if parts else ''
