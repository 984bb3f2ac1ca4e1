import os

# Bind & workers
bind = os.getenv("GUNICORN_BIND", "0.0.0.0:3000")
wsgi_app = "sessionauth:create_app()"
workers = int(os.getenv("GUNICORN_WORKERS", "2"))
threads = 1
timeout = 60
graceful_timeout = 30
keepalive = 5

# Logs to stdout/stderr (collected by Docker)
accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()

# Trust proxy headers; the app applies ProxyFix for one hop
forwarded_allow_ips = "*"
proxy_protocol = False
