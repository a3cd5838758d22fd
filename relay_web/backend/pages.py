"""HTML for the viewer page."""

from __future__ import annotations
from html import escape

PAGE_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
  <meta charset="UTF-8">
  <title>Rutube iframe</title>
  <style>
    body {{ font-family: sans-serif; padding: 20px; }}
    iframe {{ border: none; margin-top: 10px; }}
  </style>
</head>
<body>
  <h3>Rutube iframe:</h3>
  <iframe src="{iframe_url}" width="800" height="450" allowfullscreen></iframe>
  <p>Video source: <a href="{source_url}" target="_blank">{source_url}</a></p>
</body>
</html>
"""


def render_viewer(iframe_url: str, source_url: str) -> str:
    return PAGE_TEMPLATE.format(
        iframe_url=escape(iframe_url, quote=True),
        source_url=escape(source_url, quote=True),
    )


def render_error(message: str) -> str:
    return f"<h1>Error: {escape(message)}</h1>"
