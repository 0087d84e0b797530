import logging
import os
import pathlib
import tempfile

import gevent

from . import sitemap


_DEFAULT_INTERVAL_SEC = 60


class SitemapWriter:
    """Periodically writes the full (unfiltered) sitemap to a file.

    The write itself runs on the hub's thread pool and nobody waits for it, so
    a slow or hung disk can't hold up request handling.
    """

    def __init__(self, build, path, interval=_DEFAULT_INTERVAL_SEC):
        self._build = build
        self._path = pathlib.Path(path)
        self._interval = interval
        self._pending = None
        self._loop = None

    def start_loop(self):
        logging.info("writing sitemap to %s every %ss", self._path, self._interval)
        self._loop = gevent.spawn_later(self._interval, self._tick)

    def stop_loop(self):
        if self._loop is not None:
            self._loop.kill()
            self._loop = None

    def _tick(self):
        try:
            self.write()
        finally:
            self._loop = gevent.spawn_later(self._interval, self._tick)

    def write(self):
        if self._pending is not None and not self._pending.ready():
            logging.warning(
                "previous write of %s still in progress, skipping", self._path
            )
            return None
        try:
            content = self._build()
        except sitemap.SitemapError:
            logging.exception("failed to build sitemap for %s", self._path)
            return None
        self._pending = gevent.get_hub().threadpool.spawn(
            _write_logged, self._path, content
        )
        return self._pending


def write_atomically(path, content):
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(content)
        os.chmod(tmp_name, 0o644)
        os.replace(tmp_name, path)
    except BaseException:
        os.unlink(tmp_name)
        raise


def _write_logged(path, content):
    try:
        write_atomically(path, content)
    except OSError:
        logging.exception("failed to write sitemap to %s", path)
        return False
    logging.info("wrote sitemap (%d bytes) to %s", len(content), path)
    return True
