"""Finds the episode that owns a file, in a flat episode list or a show/season/episode tree."""

from .console import get_default
from .paths import comparison_path, file_name


def match_by_path(entities, target_path, log=None):
    """
    First entity whose file is target_path.
    Filenames are compared case-insensitively. Failing that, one full path
    ending with the other also counts (different roots, same tail).
    """
    log = log or get_default()
    target = comparison_path(target_path)
    if not target:
        return None
    target_file = file_name(target)

    for entity in entities or []:
        if not entity.path:
            log.debug(f"Entity {entity.id} has no path")
            continue
        candidate = comparison_path(entity.path)
        if file_name(candidate) == target_file:
            log.ok(f'Matched "{entity.title}" by filename (id={entity.id})')
            return entity
        # Heuristic: can also pair files from different shows sharing a tail
        if candidate.endswith(target) or target.endswith(candidate):
            log.ok(f'Matched "{entity.title}" by path suffix (id={entity.id})')
            return entity
    return None


def match_in_tree(root_key, target_file_name, list_children, log=None):
    """
    Walks show -> seasons -> episodes and returns the key of the first
    episode with a file named target_file_name.
    list_children(key) returns a Reply of nodes exposing key, type and file_paths().
    Each season is only listed when the walk reaches it.
    """
    log = log or get_default()
    wanted = file_name(target_file_name).lower()
    if not root_key or not wanted:
        return None

    reply = list_children(root_key)
    if not reply.ok:
        log.warn(f"Could not list seasons for key={root_key}")
        return None
    seasons = [n for n in reply.data if n.type == 'season']
    log.debug(f"Found {len(seasons)} season(s) under key={root_key}")

    for season in seasons:
        reply = list_children(season.key)
        if not reply.ok:
            log.debug(f"Skipping season key={season.key}, listing failed")
            continue
        for episode in reply.data:
            if episode.type != 'episode':
                continue
            for path in episode.file_paths():
                if file_name(path).lower() == wanted:
                    log.ok(f'Matched episode by filename "{target_file_name}" (key={episode.key})')
                    return episode.key
    return None
