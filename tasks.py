# Use with https://www.pyinvoke.org/

from invoke import task  # ty:ignore[unresolved-import]

import os
import pathlib


os.chdir(pathlib.Path(__file__).parent)


DEV_ENV = {
    "PYTHONDEVMODE": "1",
    "PYTHONWARNINGS": (
        "default,"
        "ignore:unclosed:ResourceWarning:sys,"
        "ignore:This process (pid=:DeprecationWarning:gevent.os"
    ),
    "FLASK_DEBUG": "1",
    "SEOPROXY_UPSTREAM": "http://127.0.0.1:8080",
    "SEOPROXY_OUTPUT_FILE": "var/sitemap.xml",
}


@task
def lint(c):
    """Run linters."""
    c.run("uv sync --locked")
    c.run("ruff check .", pty=True)
    c.run("ruff format --check", pty=True)


@task(help={"k": "Only run tests matching this expression"})
def test(c, k=None):
    """Run the test suite."""
    cmd = "uv run pytest"
    if k:
        cmd += f" -k '{k}'"
    c.run(cmd, pty=True)


@task(
    help={
        "gunicorn": "Run using gunicorn instead of 'flask run'",
        "upstream": "URL of the site to proxy (default: http://127.0.0.1:8080)",
        "gtm_id": "Google Tag Manager container ID to inject",
    },
)
def run(c, gunicorn=False, upstream=None, gtm_id=None):
    """Run the proxy locally."""
    if gunicorn:
        cmd = "uv run gunicorn -c gunicorn.conf.dev.py"
    else:
        cmd = "uv run flask --app seoproxy.webapp --debug run"
    env = dict(DEV_ENV)
    if upstream:
        env["SEOPROXY_UPSTREAM"] = upstream
    if gtm_id:
        env["SEOPROXY_GTM_ID"] = gtm_id
    c.run(cmd, env=env, pty=True)


@task
def clean(c):
    """Clean up build artefacts."""
    to_remove = (
        ".pytest_cache",
        ".ruff_cache",
        ".venv",
        "__pycache__",
        "seoproxy/__pycache__",
        "seoproxy.egg-info",
        "tests/__pycache__",
        "var",
    )
    for d in to_remove:
        if pathlib.Path(d).exists():
            c.run(f"rm -rf {d}")
