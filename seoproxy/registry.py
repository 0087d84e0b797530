import logging
import threading

from . import util


class PathRegistry:
    """Set of canonical URLs that have been served successfully.

    Shared by all requests handled by one middleware instance. It only ever grows.
    """

    def __init__(self):
        self._urls = set()
        self._lock = threading.Lock()

    def record(self, url):
        with self._lock:
            if url in self._urls:
                return
            self._urls.add(url)
        logging.info("recorded %s for sitemap", url)

    def snapshot(self, origin=None):
        # Copy under the lock; filtering (and anything the caller does with the
        # result) happens outside it.
        with self._lock:
            urls = set(self._urls)
        if origin is not None:
            urls = {u for u in urls if util.in_origin(u, origin)}
        return urls

    def __len__(self):
        with self._lock:
            return len(self._urls)

    def __contains__(self, url):
        with self._lock:
            return url in self._urls
