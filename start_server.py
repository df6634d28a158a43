"""Production server startup script for the expiry notifier service.

This module provides the entry point for starting the Django application
with Gunicorn in production environments (Docker containers, Kubernetes).
"""

import os
import sys

from gunicorn.app.wsgiapp import run


def main():
    """Start the expiry notifier using Gunicorn.

    Queue jobs send messages sequentially, so a single process run can last
    well over a minute. The worker timeout is therefore generous, and
    overridable through GUNICORN_TIMEOUT. PORT and GUNICORN_WORKERS are
    honoured as well.
    """
    sys.argv = [
        "gunicorn",
        "expiry_notifier.wsgi:application",
        "--bind",
        f"0.0.0.0:{os.getenv('PORT', '8000')}",
        "--workers",
        os.getenv("GUNICORN_WORKERS", "2"),
        "--threads",
        "2",
        "--timeout",
        os.getenv("GUNICORN_TIMEOUT", "300"),
        "--access-logfile",
        "-",
        "--error-logfile",
        "-",
    ]
    run()


if __name__ == "__main__":
    main()
