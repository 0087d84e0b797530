import gevent.monkey

gevent.monkey.patch_all()

import flask  # noqa: E402

import logging  # noqa: E402


def create_app(config=None) -> flask.Flask:
    from . import config as config_
    from . import http
    from . import middleware
    from . import persist
    from . import proxy

    logging.basicConfig(level=logging.INFO)

    if config is None:
        config = config_.Config.from_env()

    app = flask.Flask("seoproxy", static_folder=None)

    proxy_ = proxy.Proxy(http.HttpClient(config.concurrency), config.upstream)
    app.add_url_rule(
        "/",
        defaults={"path": ""},
        view_func=proxy_.handle,
        methods=proxy.METHODS,
        endpoint="proxy",
    )
    app.add_url_rule(
        "/<path:path>", view_func=proxy_.handle, methods=proxy.METHODS, endpoint="proxy"
    )

    # Wrapping wsgi_app (rather than using before/after_request hooks) lets the
    # middleware see the final bytes flask sends, error pages included.
    seo = middleware.SeoMiddleware(app.wsgi_app, config)
    app.wsgi_app = seo

    if config.output_file:
        writer = persist.SitemapWriter(
            seo.sitemap, config.output_file, config.persist_interval
        )
        writer.start_loop()

    logging.info("app initialised, proxying to %s", config.upstream)

    return app
