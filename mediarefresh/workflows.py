"""
End-to-end flows.

Each flow degrades step by step instead of failing outright, and always
ends in an Outcome: SUCCESS, NOT_FOUND (nothing matched or nothing to
do) or FAILURE. Nothing raised by a client gets past a flow.
"""

import traceback
from functools import wraps

from .commands import CommandRunner
from .matcher import match_by_path, match_in_tree
from .models import Outcome
from .paths import file_name, parent_dir, remap_path, show_folder_name
from .resolver import resolve_series
from .titles import strip_year


def workflow(name):
    """Turns any exception escaping a flow into a logged Outcome.FAILURE."""

    def decorator(func):
        @wraps(func)
        def wrapper(client, *args, **kwargs):
            try:
                return func(client, *args, **kwargs)
            except Exception as e:
                log = kwargs.get('log') or client.log
                log.error(f"Error in {name}: {e}")
                log.debug(traceback.format_exc())
                return Outcome.FAILURE
        return wrapper
    return decorator


def _outcome(ok):
    return Outcome.SUCCESS if ok else Outcome.FAILURE


# --- PLEX ---

def find_episode_key(plex, section_id, path, log):
    """Show by folder name, then episode by filename. None when either step misses."""
    show = strip_year(show_folder_name(path, is_file=True))
    log.info(f'Resolving show="{show}" filename="{file_name(path)}"')
    resolution = resolve_series(show, plex.search, lambda: plex.list_section(section_id), log=log)
    if not resolution:
        return None
    return match_in_tree(resolution.entity_id, file_name(path), plex.list_children, log=log)


def refresh_episode(plex, section_id, key, path, log):
    """Item refresh, then its parent season, then the folder the file lives in."""
    if key:
        # 1. The episode itself
        if plex.refresh_item(key):
            log.ok(f"Item refresh accepted for key={key}")
            return True

        # 2. Its season
        meta = plex.get_metadata(key)
        if meta.ok and meta.data.parent_id:
            log.info(f"Refreshing parent season key={meta.data.parent_id}")
            if plex.refresh_item(meta.data.parent_id):
                log.ok(f"Season refresh accepted for key={meta.data.parent_id}")
                return True
        else:
            log.debug(f"No parent found for key={key}")

    # 3. The containing folder
    folder = parent_dir(path)
    log.info(f"Section path refresh: section={section_id} path={folder}")
    ok = plex.refresh_section_path(section_id, folder)
    if ok:
        log.ok(f"Path refresh accepted for {folder}")
    return ok


@workflow("Plex refresh")
def plex_refresh(plex, section_id, file_path, source_root=None, target_root=None, log=None):
    """Path-first Plex refresh of the library entry for file_path. No path refreshes the whole section."""
    log = log or plex.log
    if not file_path:
        log.info(f"No file given, refreshing entire section {section_id}")
        return _outcome(plex.refresh_section(section_id))

    remapped = remap_path(file_path, source_root, target_root, log=log)
    log.info(f"Resolving ratingKey for {file_path} -> {remapped}")

    # A miss here still leaves the path refresh
    key = find_episode_key(plex, section_id, remapped, log)
    log.info(f"Refreshing via path-first strategy{f' (key={key})' if key else ''}")
    return _outcome(refresh_episode(plex, section_id, key, remapped, log))


# --- BAZARR ---

@workflow("Bazarr search")
def bazarr_search(bazarr, file_path, source_root=None, target_root=None, log=None):
    """Triggers a subtitle provider search for the episode that owns file_path."""
    log = log or bazarr.log
    if not file_path:
        log.warn("No file given, cannot trigger Bazarr search")
        return Outcome.NOT_FOUND

    remapped = remap_path(file_path, source_root, target_root, log=log)
    name = strip_year(show_folder_name(remapped, is_file=True))
    log.info(f'Resolving Sonarr series id using name="{name}"')

    resolution = resolve_series(name, bazarr.search, bazarr.list_series, log=log)
    if not resolution:
        return Outcome.NOT_FOUND

    reply = bazarr.episodes(resolution.entity_id)
    if not reply.ok:
        log.error(f"Could not list episodes for seriesId={resolution.entity_id}")
        return Outcome.FAILURE
    log.debug(f"Bazarr returned {len(reply.data)} episodes for seriesId={resolution.entity_id}")

    episode = match_by_path(reply.data, remapped, log=log)
    if episode is None:
        log.warn(f"No episode match found for path={remapped}")
        return Outcome.NOT_FOUND
    return _outcome(bazarr.provider_search(episode.id))


# --- SONARR ---

@workflow("Sonarr refresh/rename")
def sonarr_refresh_rename(sonarr, folder_path, runner=None, select=None, log=None):
    """
    Refreshes the series that owns folder_path, then renames any of its
    files whose names differ from Sonarr's naming preview.
    select, if given, narrows the list of pending renames (interactive mode).
    """
    log = log or sonarr.log
    runner = runner or CommandRunner.for_client(sonarr)

    name = strip_year(show_folder_name(folder_path))
    log.info(f'Looking up series by name: "{name}"')
    resolution = resolve_series(name, sonarr.lookup, sonarr.all_series, log=log)
    if not resolution:
        log.warn(f"Series not found for path: {folder_path}")
        return Outcome.NOT_FOUND
    series = resolution.entity
    log.info(f"Series found: {series.title} (id={series.id})")

    refresh = {"seriesIds": [series.id], "isNewSeries": False}
    if not runner.submit_and_await("RefreshSeries", refresh):
        log.error("Refresh failed")
        return Outcome.FAILURE

    preview = sonarr.rename_preview(series.id)
    if not preview.ok:
        log.error(f"Rename preview failed for seriesId={series.id}")
        return Outcome.FAILURE
    pending = [x for x in preview.data if x.needs_rename and x.file_id is not None]
    log.info(f"Found {len(pending)} file(s) needing rename for seriesId={series.id}")

    if pending and select is not None:
        pending = list(select(pending) or [])
    if not pending:
        log.ok("No episode files need renaming.")
        return Outcome.SUCCESS

    file_ids = [x.file_id for x in pending]
    log.info(f"RenameFiles for seriesId={series.id}, count={len(file_ids)}")
    if not runner.submit_and_await("RenameFiles", {"seriesId": series.id, "files": file_ids}):
        log.error("RenameFiles command failed or timed out.")
        return Outcome.FAILURE

    log.ok(f"Renamed {len(file_ids)} file(s) for seriesId={series.id}")
    return Outcome.SUCCESS
