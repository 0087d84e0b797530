import pytest

from seoproxy import config
from seoproxy import matcher


@pytest.fixture
def defaults():
    return matcher.MatcherSet.compile()


@pytest.mark.parametrize(
    "path",
    [
        "/image.png",
        "/.env",
        "/backup/site.BAK",
        "/wp-login",
        "/WP-admin/x",
        "/_next/static/chunk",
        "/app.config",
        "/index.php",
        "/foo/undefined",
        "/sitemap_index",
        "/docs/page.html",
    ],
)
def test_default_patterns_ignore(defaults, path):
    assert defaults.matches(path)


@pytest.mark.parametrize("path", ["/", "/products", "/blog/2024/hello-world"])
def test_default_patterns_allow(defaults, path):
    assert not defaults.matches(path)


def test_extension_pattern_is_case_sensitive(defaults):
    assert defaults.matches("/logo.png")
    assert not defaults.matches("/logo.PNG")


def test_user_patterns_are_added_to_defaults():
    m = matcher.MatcherSet.compile([r"^/admin/.*"])
    assert m.matches("/admin/x")
    assert m.matches("/image.png")
    assert not m.matches("/products")
    assert len(m) == len(matcher.DEFAULT_PATTERNS) + 1
    assert next(iter(m)) == r"^/admin/.*"


def test_patterns_are_unanchored():
    m = matcher.MatcherSet.compile(["private"])
    assert m.matches("/a/private/b")
    assert m.matches("/privately")


def test_invalid_pattern():
    with pytest.raises(config.ConfigError, match="invalid ignore regex"):
        matcher.MatcherSet.compile(["/ok", "(unclosed"])
