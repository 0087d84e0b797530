import json

import pytest

from seoproxy import config


def test_defaults():
    cfg = config.Config.from_env({})
    assert cfg.sitemap_path == "/sitemap.xml"
    assert cfg.robots_path == "/robots.txt"
    assert cfg.ignore == ()
    assert cfg.analytics_container_id == ""
    assert cfg.output_file is None
    assert cfg.persist_interval == 60


def test_env_vars():
    cfg = config.Config.from_env(
        {
            "SEOPROXY_UPSTREAM": "http://app:3000",
            "SEOPROXY_SITEMAP_PATH": "/map.xml",
            "SEOPROXY_IGNORE": '["^/admin/", "\\\\.cgi$"]',
            "SEOPROXY_GTM_ID": "GTM-XYZ",
            "SEOPROXY_OUTPUT_FILE": "/var/lib/seoproxy/sitemap.xml",
            "SEOPROXY_PERSIST_INTERVAL": "300",
        }
    )
    assert cfg.upstream == "http://app:3000"
    assert cfg.sitemap_path == "/map.xml"
    assert cfg.ignore == ("^/admin/", r"\.cgi$")
    assert cfg.analytics_container_id == "GTM-XYZ"
    assert cfg.output_file == "/var/lib/seoproxy/sitemap.xml"
    assert cfg.persist_interval == 300


def test_empty_paths_fall_back_to_defaults():
    cfg = config.Config(sitemap_path="", robots_path="")
    assert cfg.sitemap_path == "/sitemap.xml"
    assert cfg.robots_path == "/robots.txt"


def test_json_file_then_env_overrides(tmp_path):
    path = tmp_path / "seoproxy.json"
    path.write_text(
        json.dumps(
            {
                "sitemapPath": "/s.xml",
                "robotsPath": "/r.txt",
                "ignore": ["^/private"],
                "gtmID": "GTM-FILE",
                "outputFile": "out/sitemap.xml",
            }
        )
    )
    cfg = config.Config.from_env(
        {"SEOPROXY_CONFIG": str(path), "SEOPROXY_GTM_ID": "GTM-ENV"}
    )
    assert cfg.sitemap_path == "/s.xml"
    assert cfg.robots_path == "/r.txt"
    assert cfg.ignore == ("^/private",)
    assert cfg.analytics_container_id == "GTM-ENV"
    assert cfg.output_file == "out/sitemap.xml"


@pytest.mark.parametrize(
    "environ",
    [
        {"SEOPROXY_IGNORE": "not json"},
        {"SEOPROXY_IGNORE": '"^/admin"'},
        {"SEOPROXY_IGNORE": "[1, 2]"},
        {"SEOPROXY_PERSIST_INTERVAL": "soon"},
        {"SEOPROXY_PERSIST_INTERVAL": "0"},
        {"SEOPROXY_CONCURRENCY": "-1"},
        {"SEOPROXY_CONFIG": "/nonexistent/seoproxy.json"},
    ],
)
def test_invalid_env(environ):
    with pytest.raises(config.ConfigError):
        config.Config.from_env(environ)


def test_unknown_json_key(tmp_path):
    path = tmp_path / "seoproxy.json"
    path.write_text('{"sitemap": "/x.xml"}')
    with pytest.raises(config.ConfigError, match="unknown key"):
        config.Config.from_env({"SEOPROXY_CONFIG": str(path)})


def test_json_file_must_be_object(tmp_path):
    path = tmp_path / "seoproxy.json"
    path.write_text("[]")
    with pytest.raises(config.ConfigError):
        config.Config.from_env({"SEOPROXY_CONFIG": str(path)})
