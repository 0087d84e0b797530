# Generate 'sitemap.xml' on the fly from the URLs observed so far.

import datetime
import re
import xml.etree.ElementTree as ET

from . import util


SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"

_XML_DECLARATION = b'<?xml version="1.0" encoding="UTF-8"?>\n'

# Anything outside the XML 1.0 Char production; ElementTree would happily
# write these out and produce a document no parser accepts.
_INVALID_XML_CHARS = re.compile(
    "[^\t\n\r\u0020-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]"
)

ROOT_PRIORITY = 1.0
DEFAULT_PRIORITY = 0.8


class SitemapError(RuntimeError):
    pass


def build(urls, scheme=None, host=None, now=None):
    """Serialize *urls* as a sitemap document.

    With a *host*, only URLs under ``scheme://host`` are included and the bare
    origin is always present. Without one, every URL is included as is.
    """
    base = None
    if host is not None:
        base = util.origin(scheme, host)
        urls = {u for u in urls if util.in_origin(u, base)}
        urls.add(base)

    lastmod = util.format_lastmod(now or datetime.datetime.now(datetime.UTC))

    urlset = ET.Element("urlset", xmlns=SITEMAP_NS)
    for loc in sorted(urls):
        if _INVALID_XML_CHARS.search(loc):
            raise SitemapError(f"cannot represent {loc!r} in XML")
        priority = ROOT_PRIORITY if loc == base else DEFAULT_PRIORITY
        url = ET.SubElement(urlset, "url")
        ET.SubElement(url, "loc").text = loc
        ET.SubElement(url, "lastmod").text = lastmod
        ET.SubElement(url, "priority").text = f"{priority:.1f}"
    ET.indent(urlset, space="  ")

    try:
        body = ET.tostring(urlset, encoding="unicode").encode()
    except (TypeError, ValueError) as e:
        raise SitemapError(f"failed to serialize sitemap: {e}") from e
    return _XML_DECLARATION + body
