# Ignore patterns deciding which request paths never make it into the sitemap.

import re

from .config import ConfigError


# Always active, appended after any user-supplied patterns.
DEFAULT_PATTERNS = (
    r"(?i)\.env",
    r"(?i)\.bak",
    r"(?i)\.old",
    r"(?i)\.example",
    r"(?i)\.exmaple",
    r"(?i)\.sample",
    r"(?i)\.tmpl",
    r"(?i)\.tpl",
    r"(?i)\.dist",
    r"(?i)\.~",
    r"(?i)\.php",
    r"(?i)\.aspx",
    r"(?i)config",
    r"(?i)wp-",
    r"(?i)sitemap",
    r"(?i)undefined",
    r"^/_next/*",
    r"\.(jpg|jpeg|png|gif|webp|svg|bmp|tif|tiff|ico|txt|php|exe|css|js|json|pdf|doc"
    r"|docx|xls|xlsx|ppt|pptx|mp3|mp4|avi|mov|zip|rar|tar|gz|env|html|xml)$",
)


class MatcherSet:
    def __init__(self, regexes):
        self._regexes = tuple(regexes)

    @classmethod
    def compile(cls, patterns=()):
        regexes = []
        for pattern in patterns:
            try:
                regexes.append(re.compile(pattern))
            except re.error as e:
                raise ConfigError(f"invalid ignore regex {pattern}: {e}") from e
        regexes.extend(re.compile(p) for p in DEFAULT_PATTERNS)
        return cls(regexes)

    def matches(self, path):
        # Unanchored: a pattern only has to match somewhere in the path.
        return any(r.search(path) for r in self._regexes)

    def __len__(self):
        return len(self._regexes)

    def __iter__(self):
        return (r.pattern for r in self._regexes)
