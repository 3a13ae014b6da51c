"""Gunicorn configuration for production deployment."""

import os

# Server socket
bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"

# SQLite allows one writer at a time; a few threaded workers are enough
workers = int(os.environ.get('GUNICORN_WORKERS', 2))
threads = 4
worker_class = 'gthread'

# Provider calls run inside the request; keep above NOTIFICATION_TIMEOUT
timeout = 60
graceful_timeout = 30
keepalive = 5

# Logging
accesslog = 'logs/gunicorn-access.log'
errorlog = 'logs/gunicorn-error.log'
loglevel = 'info'

# Process naming
proc_name = 'rosegarden-reservations'

# Schema is ensured once in wsgi.py before workers fork
preload_app = True

max_requests = 1000
max_requests_jitter = 50
