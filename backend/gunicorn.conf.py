"""Gunicorn settings for serving ``restaurant_auth:create_app()``.

Run from ``backend/``::

    gunicorn -c gunicorn.conf.py "restaurant_auth:create_app()"

More than one worker process requires ``REDIS_URL``: the in-memory denylist
is per process, so a logout seen by one worker would be unknown to the rest.
"""

import os

bind = os.getenv("GUNICORN_BIND", "0.0.0.0:8000")
workers = int(os.getenv("GUNICORN_WORKERS", "2" if os.getenv("REDIS_URL") else "1"))
threads = int(os.getenv("GUNICORN_THREADS", "4"))
timeout = 30
graceful_timeout = 30
keepalive = 5

# Logs to stdout/stderr; the app itself emits JSON lines
accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()

# ProxyFix in the app trusts one hop; gunicorn must forward the headers
forwarded_allow_ips = os.getenv("FORWARDED_ALLOW_IPS", "127.0.0.1")
proxy_protocol = False
