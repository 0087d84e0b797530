import gevent.monkey

# Must happen before anything imports threading/socket users, same as in the app.
gevent.monkey.patch_all()
