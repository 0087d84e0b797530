# Generate 'robots.txt' on the fly, pointing crawlers at the sitemap.

from . import util


def build(scheme, host, sitemap_path):
    return f"User-agent: *\nSitemap: {util.origin(scheme, host)}{sitemap_path}\n"
