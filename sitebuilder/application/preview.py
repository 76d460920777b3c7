"""Render a stored project as a standalone HTML page."""
from __future__ import annotations

import re

from sitebuilder.domain.entities import ProjectEntity
from sitebuilder.generation.templates import render

PLACEHOLDER_BODY = (
    '<div class="p-8 text-center"><h1 class="text-2xl font-bold">Generated WebApp</h1>'
    "<p>Your AI-generated web application preview.</p></div>"
)

_FULL_DOCUMENT = re.compile(r"^\s*(<!doctype|<html)", re.IGNORECASE)
_HEAD_CLOSE = re.compile(r"</head\s*>", re.IGNORECASE)
_BODY_CLOSE = re.compile(r"</body\s*>", re.IGNORECASE)


def _inject_before(pattern: re.Pattern, document: str, snippet: str) -> str:
    """Insert ``snippet`` before the last match of ``pattern``, or append it."""
    matches = list(pattern.finditer(document))
    if not matches:
        return document + snippet
    at = matches[-1].start()
    return document[:at] + snippet + document[at:]


def render_preview_page(project: ProjectEntity) -> str:
    """
    Wrap the project's HTML, CSS and JS in one page.

    A stored full document keeps its own head and body and gets the CSS
    injected before ``</head>`` and the JS before ``</body>``. A fragment is
    placed in the standard shell with the Tailwind CDN.
    """
    html_code = project.get("html_code") or ""
    css_code = project.get("css_code") or ""
    js_code = project.get("js_code") or ""

    if html_code and _FULL_DOCUMENT.match(html_code):
        page = html_code
        if css_code:
            page = _inject_before(_HEAD_CLOSE, page, f"<style>\n{css_code}\n</style>\n")
        if js_code:
            page = _inject_before(_BODY_CLOSE, page, f"<script>\n{js_code}\n</script>\n")
        return page

    return render(
        "preview.html.j2",
        title=project.get("title") or "Preview",
        html_code=html_code or PLACEHOLDER_BODY,
        css_code=css_code,
        js_code=js_code,
    )
