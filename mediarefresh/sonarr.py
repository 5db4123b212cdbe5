"""Sonarr v3 client: series lookup, command protocol and rename preview."""

from .api import ApiClient, data_list
from .models import Command, CommandStatus, RemoteEntity, RenameItem, Reply


def series_entity(s):
    return RemoteEntity(id=s.get('id'), title=s.get('title') or '', path=s.get('path'),
                        kind='series', slug=s.get('titleSlug'))


class Sonarr(ApiClient):

    def __init__(self, base_url, api_key, **kwargs):
        super().__init__(f"{(base_url or '').rstrip('/')}/api/v3", headers={"X-Api-Key": api_key}, **kwargs)

    def _series(self, reply):
        if not reply.ok:
            return Reply(False, [], reply.status, reply.error)
        return Reply(True, [series_entity(s) for s in data_list(reply.data)], reply.status)

    def lookup(self, term):
        """Series lookup. Results that are not in the library yet carry no id."""
        return self._series(self.get("/series/lookup", {"term": term}))

    def all_series(self):
        return self._series(self.get("/series"))

    # --- Commands ---

    def send_command(self, name, payload=None):
        """Queues a command. Reply.data is a Command, or None if Sonarr gave no id."""
        body = dict(payload or {}, name=name)
        reply = self.post("/command", body)
        if not reply.ok:
            return reply
        data = reply.data if isinstance(reply.data, dict) else {}
        if data.get('id') is None:
            return Reply(True, None, reply.status)
        return Reply(True, Command(data['id'], name, CommandStatus.parse(data.get('status'))), reply.status)

    def command_status(self, command_id):
        reply = self.get(f"/command/{command_id}")
        if not reply.ok:
            return reply
        data = reply.data if isinstance(reply.data, dict) else {}
        return Reply(True, CommandStatus.parse(data.get('status')), reply.status)

    # --- Renaming ---

    def rename_preview(self, series_id):
        """Existing vs. proposed path for each episode file of a series."""
        reply = self.get("/rename", {"seriesId": series_id})
        if not reply.ok:
            return Reply(False, [], reply.status, reply.error)
        items = [RenameItem(x.get('episodeFileId'), x.get('existingPath'), x.get('newPath'))
                 for x in data_list(reply.data)]
        return Reply(True, items, reply.status)
