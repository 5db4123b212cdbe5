"""HTTP plumbing shared by the Plex, Sonarr and Bazarr clients."""

import requests

from .console import get_default
from .models import Reply

# Seconds before a single HTTP request is abandoned.
REQUEST_TIMEOUT = 30


class ApiClient:
    """
    Thin wrapper around a requests.Session.
    Every call returns a Reply; transport errors, bad statuses and
    undecodable bodies all come back as Reply(ok=False).
    """

    def __init__(self, base_url, headers=None, session=None, timeout=REQUEST_TIMEOUT, log=None):
        self.base_url = (base_url or '').rstrip('/')
        self.timeout = timeout
        self.log = log or get_default()
        self.session = session or requests.Session()
        if headers:
            self.session.headers.update(headers)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def close(self):
        self.session.close()

    def url(self, endpoint):
        return f"{self.base_url}/{endpoint.lstrip('/')}"

    def decode(self, response):
        """Turns a response body into Python data. Subclasses pick the format."""
        return response.json()

    def request(self, method, endpoint, params=None, json_data=None):
        url = self.url(endpoint)
        self.log.debug(f"{method} {url} {params or ''}")
        try:
            res = self.session.request(method, url, params=params, json=json_data, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            self.log.warn(f"{method} {endpoint} failed: {e}")
            return Reply(False, None, 0, str(e))

        # Check for successful status codes (202 is 'Accepted')
        if res.status_code not in (200, 201, 202, 204):
            self.log.warn(f"{method} {endpoint} failed: HTTP {res.status_code}")
            return Reply(False, None, res.status_code, res.text)

        if res.status_code == 204 or not res.content:
            return Reply(True, None, res.status_code)
        try:
            data = self.decode(res)
        except ValueError as e:
            # Malformed payloads count the same as a failed call
            self.log.warn(f"{method} {endpoint} returned an unreadable body: {e}")
            return Reply(False, None, res.status_code, str(e))
        self.log.debug(f"{method} {endpoint} -> HTTP {res.status_code}")
        return Reply(True, data, res.status_code)

    def get(self, endpoint, params=None):
        return self.request("GET", endpoint, params=params)

    def post(self, endpoint, json_data=None):
        return self.request("POST", endpoint, json_data=json_data)


def data_list(data, key="data"):
    """Accepts either a bare JSON array or an object wrapping one under key."""
    if isinstance(data, dict):
        data = data.get(key)
    return [x for x in data if isinstance(x, dict)] if isinstance(data, list) else []
