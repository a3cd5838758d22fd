#!/usr/bin/env python3
"""Entry point for the iframe relay web server.

Usage:
    python -m relay_web.run [--port 3000] [--config-file config.json]

Examples:
    iframe-relay                                   # serve on http://127.0.0.1:3000
    iframe-relay --host 0.0.0.0 --no-browser       # headless server
    iframe-relay --cache-file /var/lib/relay/video_cache.json

Opens the viewer page in your default browser unless --no-browser is given.
"""

import argparse
import os
import threading
import time
import webbrowser

from relay_web.backend.config import DEFAULT_HOST, DEFAULT_PORT


def main():
    parser = argparse.ArgumentParser(description="Iframe relay: cached headless-browser iframe URL extraction")
    parser.add_argument("--host", default=DEFAULT_HOST, help=f"Host to bind to (default: {DEFAULT_HOST})")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help=f"Port to run on (default: {DEFAULT_PORT})")
    parser.add_argument("--config-file", default=None, help="Path to config.json holding the tracked URL")
    parser.add_argument("--cache-file", default=None, help="Path to the iframe URL cache file")
    parser.add_argument("--log-dir", default=None, help="Folder for log files")
    parser.add_argument("--no-browser", action="store_true", help="Don't auto-open browser")
    args = parser.parse_args()

    # Hand file locations to the app through the environment
    if args.config_file:
        os.environ["RELAY_CONFIG_FILE"] = args.config_file
    if args.cache_file:
        os.environ["RELAY_CACHE_FILE"] = args.cache_file
    if args.log_dir:
        os.environ["RELAY_LOG_DIR"] = args.log_dir

    if not args.no_browser:
        def open_browser():
            time.sleep(1.0)
            webbrowser.open(f"http://{args.host}:{args.port}")
        threading.Thread(target=open_browser, daemon=True).start()

    import uvicorn
    uvicorn.run(
        "relay_web.backend.app:app",
        host=args.host,
        port=args.port,
        reload=False,
        log_level="info",
    )


if __name__ == "__main__":
    main()
