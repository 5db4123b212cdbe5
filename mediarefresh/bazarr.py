"""Bazarr client. Series and episodes are keyed by their Sonarr ids."""

from .api import ApiClient, data_list
from .models import RemoteEntity, Reply


class Bazarr(ApiClient):

    def __init__(self, base_url, api_key, **kwargs):
        super().__init__(base_url, headers={"X-API-KEY": api_key}, **kwargs)

    def _series(self, reply):
        if not reply.ok:
            return Reply(False, [], reply.status, reply.error)
        found = [RemoteEntity(id=s.get('sonarrSeriesId'), title=s.get('title') or '', path=s.get('path'), kind='series')
                 for s in data_list(reply.data)]
        self.log.debug(f"Bazarr returned {len(found)} series")
        return Reply(True, found, reply.status)

    def search(self, query):
        """Global search. Movies come back too, but without a sonarrSeriesId."""
        return self._series(self.get("/api/system/searches", {"query": query}))

    def list_series(self):
        return self._series(self.get("/api/series"))

    def episodes(self, series_id):
        reply = self.get("/api/episodes", {"seriesid[]": series_id})
        if not reply.ok:
            return Reply(False, [], reply.status, reply.error)
        found = [RemoteEntity(id=e.get('sonarrEpisodeId'), title=e.get('title') or '', path=e.get('path'),
                              kind='episode', parent_id=series_id)
                 for e in data_list(reply.data)]
        return Reply(True, found, reply.status)

    def provider_search(self, episode_id):
        """Asks Bazarr to search its subtitle providers for one episode."""
        ok = self.get("/api/providers/episodes", {"episodeid": episode_id}).ok
        if ok:
            self.log.ok(f"Bazarr provider search triggered for episodeId={episode_id}")
        else:
            self.log.warn(f"Bazarr provider search failed for episodeId={episode_id}")
        return ok
