from http import HTTPStatus

import werkzeug.datastructures


_DEFAULT_STATUS = f"{HTTPStatus.OK.value} {HTTPStatus.OK.phrase}"


class ResponseSink:
    """Buffers everything a WSGI app emits instead of sending it to the client.

    The body has to be complete before it can be rewritten, and rewriting
    changes its length, so nothing can go out until the app is done.
    """

    def __init__(self):
        self.status = None
        self.headers = werkzeug.datastructures.Headers()
        self._chunks = []

    def start_response(self, status, headers, exc_info=None):
        # Nothing has reached the client yet, so a later call (with exc_info)
        # simply replaces what the app declared earlier.
        self.status = status
        self.headers = werkzeug.datastructures.Headers(headers)
        return self._chunks.append

    def capture(self, app, environ):
        app_iter = app(environ, self.start_response)
        try:
            for chunk in app_iter:
                if chunk:
                    self._chunks.append(chunk)
        finally:
            if hasattr(app_iter, "close"):
                app_iter.close()
        if self.status is None:
            self.status = _DEFAULT_STATUS
        return self

    @property
    def status_code(self):
        return int(self.status.split(None, 1)[0])

    @property
    def body(self):
        return b"".join(self._chunks)

    def replay(self, start_response, body=None, headers=None):
        if headers is None:
            headers = self.headers
        start_response(self.status, headers.to_wsgi_list())
        return [self.body if body is None else body]
