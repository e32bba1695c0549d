"""WSGI entrypoint for Gunicorn.

Draw sessions live in process memory, so run a single worker process
(threads are fine):
  gunicorn -w 1 --threads 4 -b 0.0.0.0:8000 wsgi:app
"""

from rifa import create_app

app = create_app()
