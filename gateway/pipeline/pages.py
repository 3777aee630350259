"""Self-contained error page served in place of a page that failed to load."""

from __future__ import annotations

import html

_ERROR_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <title>Page Could Not Be Loaded</title>
  <style>
    body {{ font-family: -apple-system, sans-serif; display:flex; align-items:center; justify-content:center; min-height:100vh; margin:0; background:#f8fafc; }}
    .card {{ max-width:480px; padding:3rem 2rem; text-align:center; background:white; border-radius:1.5rem; box-shadow:0 4px 24px rgba(0,0,0,0.08); border:1px solid #e2e8f0; }}
    .icon {{ font-size:3rem; margin-bottom:1rem; }}
    h2 {{ font-size:1.25rem; margin:0 0 0.75rem; color:#0f172a; }}
    p {{ font-size:0.95rem; line-height:1.6; color:#64748b; margin:0; }}
  </style>
</head>
<body>
  <div class="card">
    <div class="icon">🔒</div>
    <h2>Page Could Not Be Loaded</h2>
    <p>{message}</p>
  </div>
</body>
</html>"""


def error_page(message: str) -> str:
    """Render *message* (HTML-escaped) as a standalone error document."""
    return _ERROR_TEMPLATE.format(message=html.escape(message))
