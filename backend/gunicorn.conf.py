import os

# Bind & workers
bind = os.getenv("GUNICORN_BIND", "0.0.0.0:8000")
workers = int(os.getenv("GUNICORN_WORKERS", "2"))
threads = int(os.getenv("GUNICORN_THREADS", "4"))
timeout = 60
graceful_timeout = 30
keepalive = 5

# WSGI entrypoint: gunicorn -c gunicorn.conf.py "fleetbook:create_app()"
wsgi_app = "fleetbook:create_app()"

# Logs to stdout/stderr for the container runtime
accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()

# Trust proxy headers; ProxyFix in the app decides how many hops count
forwarded_allow_ips = "*"
proxy_protocol = False
