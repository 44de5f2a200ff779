import logging

import requests
import urllib3

from cf_memory_usage.config import Settings

log = logging.getLogger(__name__)


class CloudFoundryClient:
    """
    Minimal CF v2 API client.

    `get` fetches a single resource, `list` walks a paginated collection by
    following `next_url`. Non-2xx responses and undecodable bodies raise
    `requests.RequestException` subclasses; nothing is retried.
    """

    def __init__(self, settings: Settings, session: requests.Session = None, quiet: bool = False):
        self.api = settings.api
        self.timeout = settings.timeout
        self.session = session or requests.Session()
        self.session.headers.update(
            {"Authorization": settings.authorization, "Accept": "application/json"}
        )
        if settings.skip_ssl_validation:
            if not quiet:
                log.warning("warning: skipping TLS validation...")
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)
            self.session.verify = False

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def close(self):
        self.session.close()

    def get(self, path: str) -> dict:
        url = self.api + path
        log.info("GET %s", url)
        r = self.session.get(url, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def list(self, path: str):
        """Yield every resource across pages, starting at `path`."""
        while path:
            page = self.get(path)
            yield from page.get("resources") or []
            path = page.get("next_url")
