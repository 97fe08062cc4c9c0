"""Gunicorn configuration for Flask-SocketIO"""

import os
import sys
import traceback

# Worker class - threaded worker to match SocketIO async_mode='threading'
worker_class = 'gthread'
threads = int(os.environ.get('GUNICORN_THREADS', 100))

# Number of worker processes
workers = 1  # queues and rooms live in memory, one worker owns them

# Binding
bind = f"0.0.0.0:{os.environ.get('PORT', 3000)}"

# Logging
accesslog = '-'
errorlog = '-'
loglevel = os.environ.get('LOG_LEVEL', 'info').lower()

# Websocket connections are long lived
timeout = 120
graceful_timeout = 30
keepalive = 5

# Never recycle the worker: restarting it drops every queue and room
max_requests = 0

reload = False
preload_app = False


def on_starting(server):
    """Called just before the master process is initialized."""
    server.log.info("🚀 Gunicorn master process starting...")


def when_ready(server):
    """Called just after the server is started."""
    server.log.info("✅ Gunicorn server ready to accept connections")


def worker_abort(worker):
    """Called when a worker receives the SIGABRT signal (timeout)."""
    worker.log.error("❌ WORKER TIMEOUT: Worker %s aborted!", worker.pid)
    traceback.print_stack(file=sys.stderr)


def on_exit(server):
    """Called just before the master process exits."""
    server.log.info("🛑 Gunicorn master process shutting down...")
