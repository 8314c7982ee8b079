"""WSGI entrypoint for Gunicorn.

Usage:
  gunicorn -w 2 -b 0.0.0.0:8000 wsgi:app

Schedule ``scripts/check_results.py`` separately (cron); the web process
only settles bets when /api/check-bets or /api/insert-result is called.
"""

from app import create_app

app = create_app()
