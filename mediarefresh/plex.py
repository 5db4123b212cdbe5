"""
Plex client.

Plex answers in XML. Responses are parsed once into PlexNode trees so the
matching code can walk children by tag and read attributes without caring
about the raw text.
"""

from xml.etree import ElementTree as ET

from .api import ApiClient
from .models import RemoteEntity, Reply

# Directory types that count as a show when resolving a folder name
SHOW_TYPES = ('show', 'movie', 'video')


class PlexNode:
    """One XML element. Attribute names are lower-cased on the way in."""

    def __init__(self, tag, attrs=None, children=None):
        self.tag = tag
        self.attrs = {k.lower(): v for k, v in (attrs or {}).items()}
        self.children = children or []

    @classmethod
    def from_element(cls, el):
        return cls(el.tag, el.attrib, [cls.from_element(c) for c in el])

    @classmethod
    def parse(cls, text):
        try:
            return cls.from_element(ET.fromstring(text))
        except ET.ParseError as e:
            raise ValueError(f"bad XML: {e}") from e

    def get(self, name, default=None):
        return self.attrs.get(name.lower(), default)

    @property
    def key(self):
        return self.get('ratingKey')

    @property
    def type(self):
        return (self.get('type') or '').strip().lower()

    def find(self, tag):
        return [c for c in self.children if c.tag == tag]

    def walk(self, tag):
        """All descendants with the given tag, depth first."""
        for child in self.children:
            if child.tag == tag:
                yield child
            yield from child.walk(tag)

    def file_paths(self):
        """Part/@file values under this node, i.e. the media files of an episode."""
        return [p.get('file') for p in self.walk('Part') if p.get('file')]

    def to_entity(self):
        files = self.file_paths()
        return RemoteEntity(
            id=self.get('ratingKey'),
            title=self.get('title') or '',
            path=files[0] if files else None,
            kind=self.type or None,
            slug=self.get('slug'),
            parent_id=parent_key(self),
        )

    def __repr__(self):
        return f"PlexNode({self.tag!r}, type={self.type!r}, key={self.get('ratingKey')!r})"


def parent_key(node):
    """parentRatingKey, or the id at the end of parentKey ('/library/metadata/123')."""
    key = node.get('parentRatingKey')
    if key:
        return key
    parent = node.get('parentKey') or ''
    if parent.startswith('/library/metadata/'):
        tail = parent.rsplit('/', 1)[-1]
        return tail or None
    return None


class Plex(ApiClient):
    """Plex Media Server endpoints used by the refresh workflow."""

    def __init__(self, base_url, token, **kwargs):
        headers = {"X-Plex-Token": token, "Accept": "application/xml"}
        super().__init__(base_url, headers=headers, **kwargs)
        self.log.debug(f"Plex client ready for {self.base_url}")

    def decode(self, response):
        # Raw bytes so the parser honours the XML encoding declaration
        return PlexNode.parse(response.content)

    # --- Listings ---

    def _directories(self, reply, types=None):
        if not reply.ok or not isinstance(reply.data, PlexNode):
            return Reply(False, [], reply.status, reply.error)
        nodes = reply.data.find('Directory')
        if types:
            nodes = [n for n in nodes if n.type in types]
        return Reply(True, [n.to_entity() for n in nodes], reply.status)

    def search(self, query):
        """Shows matching a free-text query."""
        return self._directories(self.get("/search", {"query": query}), SHOW_TYPES)

    def list_section(self, section_id):
        """Every show in a library section."""
        return self._directories(self.get(f"/library/sections/{section_id}/all"), SHOW_TYPES)

    def list_children(self, key):
        """Children of a show or season, as PlexNodes (Directory for seasons, Video for episodes)."""
        reply = self.get(f"/library/metadata/{key}/children")
        if not reply.ok or not isinstance(reply.data, PlexNode):
            return Reply(False, [], reply.status, reply.error)
        return Reply(True, reply.data.children, reply.status)

    def get_metadata(self, key):
        """The metadata record for a single item, as a RemoteEntity."""
        reply = self.get(f"/library/metadata/{key}")
        if not reply.ok or not isinstance(reply.data, PlexNode) or not reply.data.children:
            return Reply(False, None, reply.status, reply.error)
        return Reply(True, reply.data.children[0].to_entity(), reply.status)

    # --- Refresh endpoints ---

    def refresh_item(self, key):
        return self.get(f"/library/metadata/{key}/refresh").ok

    def refresh_section(self, section_id):
        return self.get(f"/library/sections/{section_id}/refresh").ok

    def refresh_section_path(self, section_id, path):
        return self.get(f"/library/sections/{section_id}/refresh", {"path": path}).ok
