import datetime


def external_scheme(request):
    # The first hop's value wins when proxies have appended to the header.
    if forwarded := request.headers.get("X-Forwarded-Proto"):
        return forwarded.split(",")[0].strip()
    return request.scheme


def request_host(request):
    # The Host header as sent; werkzeug's Request.host drops a default port
    # judged against the transport scheme, not the forwarded one.
    return request.headers.get("Host") or request.host


def origin(scheme, host):
    return f"{scheme}://{host}"


def canonical_url(scheme, host, path):
    return origin(scheme, host) + path.removesuffix("/")


def in_origin(url, base):
    return url == base or url.startswith(base + "/")


def format_lastmod(t):
    return t.astimezone(datetime.UTC).strftime("%Y-%m-%dT%H:%M:%SZ")
