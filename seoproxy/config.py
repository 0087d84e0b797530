import dataclasses
import json
import os


DEFAULT_SITEMAP_PATH = "/sitemap.xml"
DEFAULT_ROBOTS_PATH = "/robots.txt"

# Keys understood in the JSON file named by SEOPROXY_CONFIG, mapped to field names.
_JSON_KEYS = {
    "upstream": "upstream",
    "sitemapPath": "sitemap_path",
    "robotsPath": "robots_path",
    "ignore": "ignore",
    "gtmID": "analytics_container_id",
    "outputFile": "output_file",
    "persistInterval": "persist_interval",
    "concurrency": "concurrency",
}

_ENV_VARS = {
    "SEOPROXY_UPSTREAM": "upstream",
    "SEOPROXY_SITEMAP_PATH": "sitemap_path",
    "SEOPROXY_ROBOTS_PATH": "robots_path",
    "SEOPROXY_IGNORE": "ignore",
    "SEOPROXY_GTM_ID": "analytics_container_id",
    "SEOPROXY_OUTPUT_FILE": "output_file",
    "SEOPROXY_PERSIST_INTERVAL": "persist_interval",
    "SEOPROXY_CONCURRENCY": "concurrency",
}


class ConfigError(ValueError):
    pass


@dataclasses.dataclass(frozen=True)
class Config:
    upstream: str = "http://127.0.0.1:8080"
    sitemap_path: str = DEFAULT_SITEMAP_PATH
    robots_path: str = DEFAULT_ROBOTS_PATH
    ignore: tuple = ()
    analytics_container_id: str = ""
    output_file: str | None = None
    persist_interval: int = 60
    concurrency: int = 10

    def __post_init__(self):
        # Empty paths mean "use the default", as with an unset option.
        if not self.sitemap_path:
            object.__setattr__(self, "sitemap_path", DEFAULT_SITEMAP_PATH)
        if not self.robots_path:
            object.__setattr__(self, "robots_path", DEFAULT_ROBOTS_PATH)
        if not isinstance(self.ignore, (list, tuple)) or not all(
            isinstance(p, str) for p in self.ignore
        ):
            raise ConfigError(f"ignore must be a list of strings, got {self.ignore!r}")
        object.__setattr__(self, "ignore", tuple(self.ignore))
        for name in "persist_interval", "concurrency":
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ConfigError(f"{name} must be a positive integer, got {value!r}")

    @classmethod
    def from_env(cls, environ=None):
        if environ is None:
            environ = os.environ
        values = {}
        if path := environ.get("SEOPROXY_CONFIG"):
            values.update(_load_json_file(path))
        for var, field in _ENV_VARS.items():
            if (raw := environ.get(var)) is not None:
                values[field] = _parse_env_value(var, field, raw)
        try:
            return cls(**values)
        except TypeError as e:
            raise ConfigError(str(e)) from e


def _load_json_file(path):
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise ConfigError(f"cannot read config file {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config file {path} must contain a JSON object")
    values = {}
    for key, value in data.items():
        if key not in _JSON_KEYS:
            raise ConfigError(f"unknown key {key!r} in config file {path}")
        values[_JSON_KEYS[key]] = value
    return values


def _parse_env_value(var, field, raw):
    if field == "ignore":
        try:
            value = json.loads(raw) if raw.strip() else []
        except ValueError as e:
            raise ConfigError(f"{var} must be a JSON list of patterns: {e}") from e
        if not isinstance(value, list):
            raise ConfigError(f"{var} must be a JSON list of patterns")
        return value
    if field in ("persist_interval", "concurrency"):
        try:
            return int(raw)
        except ValueError as e:
            raise ConfigError(f"{var} must be an integer, got {raw!r}") from e
    if field == "output_file":
        return raw or None
    return raw
