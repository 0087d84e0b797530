# Inject the Google Tag Manager snippets into HTML responses.

import gzip
import logging
import re
import zlib


_SCRIPT_TEMPLATE = """<!-- Google Tag Manager -->
<script>(function(w,d,s,l,i){{w[l]=w[l]||[];w[l].push({{'gtm.start':
new Date().getTime(),event:'gtm.js'}});var f=d.getElementsByTagName(s)[0],
j=d.createElement(s),dl=l!='dataLayer'?'&l='+l:'';j.async=true;j.src=
'https://www.googletagmanager.com/gtm.js?id='+i+dl;f.parentNode.insertBefore(j,f);
}})(window,document,'script','dataLayer','{id}');</script>
<!-- End Google Tag Manager -->"""

_NOSCRIPT_TEMPLATE = """<!-- Google Tag Manager (noscript) -->
<noscript><iframe src="https://www.googletagmanager.com/ns.html?id={id}"
height="0" width="0" style="display:none;visibility:hidden"></iframe></noscript>
<!-- End Google Tag Manager (noscript) -->"""

_HEAD_END = b"</head>"
_BODY_START_RE = re.compile(rb"(?i)<body\b[^>]*>")


class Snippets:
    def __init__(self, container_id):
        self.container_id = container_id
        self.script = _SCRIPT_TEMPLATE.format(id=container_id).encode()
        self.noscript = _NOSCRIPT_TEMPLATE.format(id=container_id).encode()


def inject(html, snippets):
    # Work on bytes so the document's charset never has to be known.
    html = html.replace(_HEAD_END, snippets.script + _HEAD_END, 1)
    if m := _BODY_START_RE.search(html):
        html = html[: m.end()] + snippets.noscript + html[m.end() :]
    return html


def rewrite(body, snippets, gzipped=False):
    """Return *body* with the snippets injected, or None if it can't be done.

    None means the original bytes should be sent unchanged.
    """
    if gzipped:
        # An empty gzip body (e.g. the answer to HEAD) has nothing to rewrite.
        if not body:
            return None
        try:
            body = gzip.decompress(body)
        except (OSError, EOFError, zlib.error) as e:
            logging.warning("cannot decompress gzip body, passing through: %s", e)
            return None
    body = inject(body, snippets)
    if gzipped:
        try:
            body = gzip.compress(body)
        except (OSError, zlib.error) as e:
            logging.warning("cannot recompress gzip body, passing through: %s", e)
            return None
    return body


def is_html(content_type):
    return content_type.lower().startswith("text/html")


def is_gzip(content_encoding):
    return content_encoding.strip().lower() == "gzip"
