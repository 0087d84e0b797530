import logging
from http import HTTPStatus

import werkzeug.exceptions
import werkzeug.wrappers

from . import interceptor
from . import matcher
from . import registry as registry_
from . import rewrite
from . import robots
from . import sitemap
from . import util


class SeoMiddleware:
    """WSGI middleware that learns a site's pages from the traffic it serves.

    Requests for the sitemap and robots.txt paths are answered directly. All
    other requests go to the wrapped app; paths it serves with a 200 (and which
    aren't ignored) end up in the sitemap, and HTML responses get the analytics
    snippets if a container ID is configured.
    """

    def __init__(self, app, config, registry=None):
        self._app = app
        self._sitemap_path = config.sitemap_path
        self._robots_path = config.robots_path
        self._ignores = matcher.MatcherSet.compile(config.ignore)
        self._snippets = None
        if config.analytics_container_id:
            self._snippets = rewrite.Snippets(config.analytics_container_id)
        self.registry = registry if registry is not None else registry_.PathRegistry()
        logging.info(
            "sitemap at %s, robots.txt at %s, %d ignore patterns, analytics %s",
            self._sitemap_path,
            self._robots_path,
            len(self._ignores),
            "enabled" if self._snippets else "disabled",
        )

    def __call__(self, environ, start_response):
        req = werkzeug.wrappers.Request(environ)
        if req.path == self._sitemap_path:
            resp = self._handle_sitemap(req)
        elif req.path == self._robots_path:
            resp = self._handle_robots(req)
        else:
            return self._forward(req, environ, start_response)
        return resp(environ, start_response)

    def sitemap(self):
        return sitemap.build(self.registry.snapshot())

    def _handle_sitemap(self, req):
        scheme, host = util.external_scheme(req), util.request_host(req)
        urls = self.registry.snapshot(util.origin(scheme, host))
        try:
            content = sitemap.build(urls, scheme, host)
        except sitemap.SitemapError:
            logging.exception("failed to build sitemap for %s://%s", scheme, host)
            return werkzeug.exceptions.InternalServerError()
        logging.info("serving sitemap for %s://%s", scheme, host)
        return werkzeug.wrappers.Response(content, mimetype="application/xml")

    def _handle_robots(self, req):
        content = robots.build(
            util.external_scheme(req), util.request_host(req), self._sitemap_path
        )
        return werkzeug.wrappers.Response(content, mimetype="text/plain")

    def _forward(self, req, environ, start_response):
        ignored = self._ignores.matches(req.path)
        url = util.canonical_url(
            util.external_scheme(req), util.request_host(req), req.path
        )

        sink = interceptor.ResponseSink().capture(self._app, environ)
        status = sink.status_code

        result = self._maybe_rewrite(sink, status, start_response)
        if result is None:
            result = sink.replay(start_response)

        if not ignored and status == HTTPStatus.OK:
            self.registry.record(url)
        return result

    def _maybe_rewrite(self, sink, status, start_response):
        if self._snippets is None or status != HTTPStatus.OK:
            return None
        if not rewrite.is_html(sink.headers.get("Content-Type", "")):
            return None
        gzipped = rewrite.is_gzip(sink.headers.get("Content-Encoding", ""))
        body = rewrite.rewrite(sink.body, self._snippets, gzipped=gzipped)
        if body is None:
            return None
        headers = sink.headers.copy()
        # The length changed; let the server fall back to chunked framing.
        headers.remove("Content-Length")
        return sink.replay(start_response, body=body, headers=headers)
