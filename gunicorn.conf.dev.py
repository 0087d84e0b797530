import traceback


bind = "127.0.0.1:8000"
loglevel = "debug"
reload = True
timeout = 15
worker_class = "gevent"
wsgi_app = "seoproxy.webapp:create_app()"


def worker_abort(worker):
    traceback.print_stack()
