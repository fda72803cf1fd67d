#!/usr/bin/env python3
"""
Entry point for running the Page Inspector web UI.

Usage:
    python -m page_inspector.web.run --host 0.0.0.0 --port 3000
"""

import argparse
import os

from page_inspector.web.app import run_app


def parse_arguments(argv=None) -> argparse.Namespace:
    """Parse command line arguments for the web runner."""
    parser = argparse.ArgumentParser(
        description='Run the Page Inspector web UI'
    )
    parser.add_argument(
        '--host',
        default='127.0.0.1',
        help='Host to bind to (default: 127.0.0.1)'
    )
    parser.add_argument(
        '--port', '-p',
        type=int,
        default=int(os.environ.get('PORT', 3000)),
        help='Port to listen on (default: $PORT or 3000)'
    )
    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug mode'
    )
    return parser.parse_args(argv)


def main():
    """Parse arguments and run the web application."""
    args = parse_arguments()

    print(f"Starting Page Inspector Web UI at http://{args.host}:{args.port}")
    run_app(host=args.host, port=args.port, debug=args.debug)


if __name__ == '__main__':
    main()
