# Forward requests to the upstream site and hand back its response untouched.

import logging
import urllib.parse

import flask
import werkzeug.datastructures
import werkzeug.exceptions

from . import http
from . import util


METHODS = ("GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS")

# https://www.rfc-editor.org/rfc/rfc9110#section-7.6.1
_HOP_BY_HOP = frozenset(
    (
        "connection",
        "keep-alive",
        "proxy-authenticate",
        "proxy-authorization",
        "proxy-connection",
        "te",
        "trailer",
        "transfer-encoding",
        "upgrade",
    )
)


class Proxy:
    def __init__(self, client, upstream):
        self._client = client
        self._upstream = upstream.rstrip("/")

    def handle(self, path=""):
        req = flask.request
        url = self._upstream + _request_uri(req)
        try:
            resp = self._client.request(
                req.method, url, req.get_data(), _upstream_headers(req)
            )
        except http.HttpError:
            logging.warning("upstream request for %s failed", req.path)
            raise werkzeug.exceptions.BadGateway()

        headers = [(k, v) for k, v in resp.headers if k.lower() not in _HOP_BY_HOP]
        out = flask.Response(resp.body, status=resp.status_code)
        # Replace rather than merge: flask would otherwise invent a content type
        # and overwrite Content-Length with len(body), which is wrong for HEAD.
        out.headers = werkzeug.datastructures.Headers(headers)
        return out


def _request_uri(req):
    # gunicorn keeps the undecoded request target around; prefer it.
    if raw := req.environ.get("RAW_URI") or req.environ.get("REQUEST_URI"):
        return raw
    path = urllib.parse.quote(req.path)
    return f"{path}?{req.query_string.decode()}" if req.query_string else path


def _upstream_headers(req):
    headers = {}
    for name, value in req.headers.items():
        if name.lower() in _HOP_BY_HOP or name.lower() == "content-length":
            continue
        if name in headers:
            headers[name] += ", " + value
        else:
            headers[name] = value
    if forwarded_for := req.headers.get("X-Forwarded-For"):
        headers["X-Forwarded-For"] = f"{forwarded_for}, {req.remote_addr}"
    elif req.remote_addr:
        headers["X-Forwarded-For"] = req.remote_addr
    # Otherwise httpx asks for compression the client may not have wanted.
    headers.setdefault("Accept-Encoding", "identity")
    headers.setdefault("X-Forwarded-Proto", util.external_scheme(req))
    headers.setdefault("X-Forwarded-Host", util.request_host(req))
    return headers
