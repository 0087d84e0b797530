import logging

import httpx


_TIMEOUT_SEC = 30


class HttpClient:
    def __init__(self, concurrency):
        # Runs cooperatively once gevent has monkey-patched the socket module.
        self._client = httpx.Client(
            limits=httpx.Limits(max_connections=concurrency),
            timeout=httpx.Timeout(_TIMEOUT_SEC),
            follow_redirects=False,
        )

    def request(self, method, url, body, headers):
        try:
            request = self._client.build_request(
                method, url, content=body, headers=headers
            )
            response = self._client.send(request, stream=True)
            try:
                return HttpResponse(response, url)
            finally:
                response.close()
        except httpx.HTTPError as e:
            logging.error(e)
            raise HttpError(e, url)

    def close(self):
        self._client.close()


class HttpResponse:
    def __init__(self, response, url):
        self.url = url
        self.status_code = response.status_code
        self.headers = response.headers.multi_items()
        # Raw bytes as sent by the upstream: no gzip/br decoding.
        self.body = b"".join(response.iter_raw())


class HttpError(RuntimeError):
    def __init__(self, e, url):
        self._e = e
        self._url = url

    def __str__(self):
        return f"Failed HTTP request for {self._url}: {self._e}"
