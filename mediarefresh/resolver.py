"""Resolves a show name to a remote entity: targeted search first, full listing on a miss."""

from .console import get_default
from .models import Resolution
from .titles import titles_match


def first_match(candidates, name):
    """First candidate whose title (or slug) matches name and which has an id."""
    for c in candidates or []:
        if c is None or c.id in (None, '', 0):
            continue
        if titles_match(c.title, name) or (c.slug and titles_match(c.slug, name)):
            return c
    return None


def resolve_series(name, search, list_all, log=None):
    """
    search(term) and list_all() return Replies of RemoteEntity lists.
    The listing is only fetched when the search finds nothing usable.
    No match is a normal result: Resolution() is falsy.
    """
    log = log or get_default()
    if not name:
        return Resolution()

    # 1. Targeted search with the name as given
    reply = search(name)
    if reply.ok:
        match = first_match(reply.data, name)
        if match:
            log.ok(f'Matched "{match.title}" via search (id={match.id})')
            return Resolution(match, "search")
        log.debug(f'Search for "{name}" returned {len(reply.data or [])} result(s), none matched')
    else:
        log.debug(f'Search for "{name}" failed, falling back to full listing')

    # 2. Scan everything the service knows about
    reply = list_all()
    if reply.ok:
        match = first_match(reply.data, name)
        if match:
            log.ok(f'Matched "{match.title}" via full listing (id={match.id})')
            return Resolution(match, "listing")

    log.warn(f'Unable to resolve a series for "{name}"')
    return Resolution()
