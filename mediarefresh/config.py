"""Settings: built-in defaults, then environment variables, then command-line flags."""

import os
from dataclasses import dataclass, fields

from .api import REQUEST_TIMEOUT
from .commands import COMMAND_TIMEOUT, POLL_INTERVAL

# --- CONFIGURATION -----------------------------------------------------------
# URL of your Plex server, its token (Settings -> Troubleshooting -> XML) and
# the id of the TV library section to refresh.
PLEX_URL = "http://localhost:32400"
PLEX_TOKEN = ""
PLEX_SECTION_ID = "1"

# Sonarr and Bazarr instances. API keys are under Settings -> General.
SONARR_URL = "http://localhost:8989"
SONARR_API_KEY = ""
BAZARR_URL = "http://localhost:6767"
BAZARR_API_KEY = ""

# Paths handed to us may live under a different root than the one the media
# servers see (e.g. a Windows share mounted on Linux). Leave empty to skip.
SOURCE_ROOT = ""
TARGET_ROOT = ""
# -----------------------------------------------------------------------------


@dataclass
class Settings:
    plex_url: str = PLEX_URL
    plex_token: str = PLEX_TOKEN
    plex_section_id: str = PLEX_SECTION_ID
    sonarr_url: str = SONARR_URL
    sonarr_api_key: str = SONARR_API_KEY
    bazarr_url: str = BAZARR_URL
    bazarr_api_key: str = BAZARR_API_KEY
    source_root: str = SOURCE_ROOT
    target_root: str = TARGET_ROOT
    command_timeout: float = COMMAND_TIMEOUT
    poll_interval: float = POLL_INTERVAL
    request_timeout: float = REQUEST_TIMEOUT
    verbose: bool = False

    @classmethod
    def load(cls, args=None, environ=None):
        """Defaults, overridden by matching upper-case env vars, overridden by CLI args."""
        environ = os.environ if environ is None else environ
        settings = cls()

        for f in fields(cls):
            raw = environ.get(f.name.upper())
            if raw is None or raw == "":
                continue
            setattr(settings, f.name, _coerce(f.name, raw, getattr(settings, f.name)))

        if args is not None:
            for f in fields(cls):
                value = getattr(args, f.name, None)
                if value is not None and value is not False:
                    setattr(settings, f.name, value)
        return settings


def _coerce(name, raw, current):
    if isinstance(current, bool):
        return raw.strip().lower() in ("1", "true", "yes", "on")
    if isinstance(current, (int, float)):
        try:
            return float(raw)
        except ValueError:
            raise ValueError(f"{name.upper()} must be a number, got {raw!r}") from None
    return raw
