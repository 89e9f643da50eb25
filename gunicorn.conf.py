# Gunicorn settings for the booking site: gunicorn -c gunicorn.conf.py run:app
import os

bind = f"0.0.0.0:{os.environ.get('PORT', '3000')}"
workers = int(os.environ.get('WEB_CONCURRENCY', '2'))
worker_class = "sync"
timeout = int(os.environ.get('GUNICORN_TIMEOUT', '30'))
keepalive = 2

# Recycle workers now and then; uploads and invoice rendering hold memory
max_requests = 500
max_requests_jitter = 50

# sqlite schema is created once in the master before forking
preload_app = True

accesslog = "-"
errorlog = "-"
loglevel = os.environ.get('LOG_LEVEL', 'info').lower()

proc_name = "shining_star"

# Portfolio photos are capped at MAX_CONTENT_LENGTH by Flask
limit_request_line = 4094
limit_request_fields = 100
