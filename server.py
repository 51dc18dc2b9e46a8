#!/usr/bin/env python3
"""
Waitress WSGI server startup script for the cellular automaton renderer.

Host, port and thread count come from the config file and can be
overridden with WOLFRAM_CA_HOST, WOLFRAM_CA_PORT and WOLFRAM_CA_THREADS.
"""

import os
import sys

from waitress import serve

from app import make_app
from config import load_settings


def main():
    """Start the Waitress server."""
    try:
        settings = load_settings()
    except (FileNotFoundError, ValueError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)

    host = os.environ.get('WOLFRAM_CA_HOST', settings.host)
    port = int(os.environ.get('WOLFRAM_CA_PORT', settings.port))
    threads = int(os.environ.get('WOLFRAM_CA_THREADS', settings.threads))

    print(f"Starting Waitress WSGI server...")
    print(f"  Host: {host}")
    print(f"  Port: {port}")
    print(f"  Threads: {threads}")
    print(f"  Render log: {settings.log_file or 'disabled'}")
    print(f"  URL: http://{host}:{port}/")
    print()
    print("Press Ctrl+C to stop the server")
    print()

    serve(
        make_app(settings),
        host=host,
        port=port,
        threads=threads,
        url_scheme='http',
        ident='WolframCA/1.0',
    )


if __name__ == '__main__':
    try:
        main()
    except KeyboardInterrupt:
        print("\nShutting down server...")
        sys.exit(0)
