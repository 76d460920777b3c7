"""Static fallback content rendered from the Jinja2 templates next to this module.

Used whenever the AI provider is not configured or fails: every function here
is pure and always returns complete, well-formed output.
"""
from __future__ import annotations

import re
from datetime import date
from pathlib import Path
from typing import Any, Dict, List

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from sitebuilder.domain.entities import BackendCode, GeneratedWebsite

_TEMPLATE_DIR = Path(__file__).parent / "templates"

_env = Environment(
    loader=FileSystemLoader(str(_TEMPLATE_DIR)),
    # Only HTML is escaped; component, CSS and JS sources are emitted verbatim
    autoescape=select_autoescape(enabled_extensions=("html.j2",), default_for_string=False),
    undefined=StrictUndefined,
    keep_trailing_newline=False,
    trim_blocks=True,
    lstrip_blocks=True,
)

COMPONENT_TEMPLATES: Dict[str, str] = {
    "Hero Section": "components/hero_section.tsx.j2",
    "Navigation Bar": "components/navigation_bar.tsx.j2",
    "Card Component": "components/card_component.tsx.j2",
}
DEFAULT_COMPONENT = "Hero Section"

# First keyword found in the prompt picks the mock site's title
WEBAPP_TITLES = (
    ("portfolio", "Portfolio Website"),
    ("e-commerce", "E-commerce Store"),
    ("blog", "Blog Platform"),
    ("dashboard", "Admin Dashboard"),
)
DEFAULT_WEBAPP_TITLE = "Modern Web App"

WEBAPP_FEATURES = [
    {"name": "Lightning Fast", "text": "Built with modern web technologies for optimal performance and user experience."},
    {"name": "User Friendly", "text": "Intuitive design and seamless user experience crafted with attention to detail."},
    {"name": "AI-Powered", "text": "Generated by artificial intelligence to match your specific requirements perfectly."},
]

FLOW_STEPS: List[Dict[str, str]] = [
    {"type": "start", "content": "Begin Process"},
    {"type": "process", "content": "User Input"},
    {"type": "decision", "content": "Validate Input?"},
    {"type": "process", "content": "Process Data"},
    {"type": "end", "content": "Complete"},
]

DOCUMENT_DATABASES = {"mongodb", "mongo"}


def render(template_name: str, **context: Any) -> str:
    """Render one template from the package template directory."""
    return _env.get_template(template_name).render(**context).strip()


def mock_component(component_type: str, framework: str = "React") -> str:
    """Static component source for ``component_type``; unknown types get the hero section."""
    template_name = COMPONENT_TEMPLATES.get(component_type, COMPONENT_TEMPLATES[DEFAULT_COMPONENT])
    return render(template_name, framework=framework)


def webapp_title(prompt: str) -> str:
    lowered = prompt.lower()
    for keyword, title in WEBAPP_TITLES:
        if keyword in lowered:
            return title
    return DEFAULT_WEBAPP_TITLE


def mock_website(prompt: str, mode: str = "webapp") -> GeneratedWebsite:
    """
    Build a complete static site for ``prompt``.

    Args:
        prompt: the user's description; shown (escaped) on the page
        mode: "flow" for a workflow chart, anything else for a web app

    Returns:
        GeneratedWebsite whose html_code is a full <!DOCTYPE html> document
    """
    if mode == "flow":
        title = "User Workflow"
        return GeneratedWebsite(
            title=title,
            description="AI-generated workflow based on your prompt",
            components=[dict(step) for step in FLOW_STEPS],
            html_code=render("website/flow.html.j2", title=title, prompt=prompt, steps=FLOW_STEPS),
            css_code=render("website/flow.css.j2"),
            js_code=render("website/flow.js.j2"),
        )

    title = webapp_title(prompt)
    context = {
        "title": title,
        "prompt": prompt,
        "features": WEBAPP_FEATURES,
        "email_slug": re.sub(r"\s+", "", title.lower()),
        "year": date.today().year,
    }
    return GeneratedWebsite(
        title=title,
        description=f"AI-generated {title.lower()} with interactive features",
        components=[
            {"type": "header", "content": "Navigation Header"},
            {"type": "hero", "content": "Hero Section"},
            {"type": "content", "content": "Main Content"},
            {"type": "footer", "content": "Footer"},
        ],
        html_code=render("website/webapp.html.j2", **context),
        css_code=render("website/webapp.css.j2", **context),
        js_code=render("website/webapp.js.j2", **context),
    )


def mock_backend(database: str, framework: str, features: Dict[str, bool]) -> BackendCode:
    """Routes, models and middleware sources with sections toggled by ``features``."""
    flags = {name: bool(enabled) for name, enabled in features.items()}
    for name in ("userAuth", "crudOps", "fileUpload", "emailIntegration"):
        flags.setdefault(name, False)

    return BackendCode(
        routes=render("backend/routes.ts.j2", database=database, framework=framework, features=flags),
        models=render(
            "backend/models.ts.j2",
            database=database,
            is_document_db=database.strip().lower() in DOCUMENT_DATABASES,
        ),
        middleware=render("backend/middleware.ts.j2", framework=framework, features=flags),
    )
