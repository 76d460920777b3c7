"""Generation module: prompt the model, clean its output, fall back to templates.

AI failures never reach the caller. A missing key, a transport error, an
empty answer or unparsable JSON all end in the static mock for the request,
logged at WARNING.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

from sitebuilder.domain.entities import BackendCode, GeneratedWebsite
from sitebuilder.domain.errors import GenerationError
from sitebuilder.domain.ports import TextGenerator
from sitebuilder.generation import prompts, templates
from sitebuilder.generation.markdown import extract_json_object, strip_code_fences

logger = logging.getLogger(__name__)

DEFAULT_HTML = "<!DOCTYPE html><html><head><title>Generated Site</title></head><body><h1>Generated Content</h1></body></html>"
DEFAULT_CSS = "/* Generated styles */"
DEFAULT_JS = "// Generated JavaScript"

BACKEND_ERROR_FALLBACK = BackendCode(
    routes="// Mock routes due to API error",
    models="// Mock models due to API error",
    middleware="// Mock middleware due to API error",
)


class GenerationService:
    """Turns user requests into code through an optional TextGenerator."""

    def __init__(self, generator: Optional[TextGenerator] = None) -> None:
        self._generator = generator

    @property
    def is_available(self) -> bool:
        return self._generator is not None

    @property
    def model_name(self) -> Optional[str]:
        return self._generator.model if self._generator else None

    def _ask(self, prompt: str) -> str:
        """Send ``prompt`` to the model; raises GenerationError on an empty answer."""
        if self._generator is None:
            raise GenerationError("AI client not initialized")
        logger.debug("Sending prompt to %s: %s...", self._generator.model, prompt[:300])
        text = self._generator.generate(prompt)
        if not text or not text.strip():
            raise GenerationError("AI returned an empty response")
        return text

    def generate_component(self, component_type: str, framework: str, style_preferences: str) -> str:
        if not self.is_available:
            logger.info("Using mock %s component (no valid API key)", component_type)
            return templates.mock_component(component_type, framework)

        try:
            raw = self._ask(prompts.component_prompt(component_type, framework, style_preferences))
            code = strip_code_fences(raw)
            if not code:
                raise GenerationError("Component code became empty after removing markdown")
            return code
        except Exception as exc:
            logger.warning("Component generation failed (%s), falling back to mock", exc)
            return templates.mock_component(component_type, framework)

    def generate_backend(self, database: str, framework: str, features: Dict[str, bool]) -> BackendCode:
        if not self.is_available:
            logger.info("Generating mock %s backend with %s", framework, database)
            return templates.mock_backend(database, framework, features)

        try:
            generated = {}
            for part, prompt in prompts.backend_prompts(database, framework, features).items():
                generated[part] = strip_code_fences(self._generator.generate(prompt) or "")
            return BackendCode(
                routes=generated["routes"] or "// Error generating routes",
                models=generated["models"] or "// Error generating models",
                middleware=generated["middleware"] or "// Error generating middleware",
            )
        except Exception as exc:
            logger.warning("Backend generation failed (%s), falling back to mock", exc)
            return BackendCode(**BACKEND_ERROR_FALLBACK)

    def build_from_prompt(self, prompt: str, mode: str = "webapp") -> Tuple[GeneratedWebsite, bool]:
        """
        Generate a whole site from a natural-language prompt.

        Returns:
            (website, used_fallback) where used_fallback is True when the
            static template was served instead of model output
        """
        if not self.is_available:
            logger.info("Using mock %s website (no valid API key)", mode)
            return templates.mock_website(prompt, mode), True

        try:
            raw = self._ask(prompts.website_prompt(prompt, mode))
            result = extract_json_object(raw)
            return self._normalize_website(result), False
        except Exception as exc:
            logger.warning("Building from prompt failed (%s), falling back to mock", exc)
            return templates.mock_website(prompt, mode), True

    @staticmethod
    def _normalize_website(result: Dict[str, Any]) -> GeneratedWebsite:
        components = result.get("components") or []
        if not isinstance(components, list):
            components = []
        clean_components: List[Dict[str, Any]] = [c for c in components if isinstance(c, dict)]

        def code_field(key: str, default: str) -> str:
            value = result.get(key)
            if not isinstance(value, str) or not value.strip():
                return default
            return strip_code_fences(value) or default

        return GeneratedWebsite(
            title=str(result.get("title") or "Generated Project"),
            description=str(result.get("description") or "Generated using AI"),
            components=clean_components,
            html_code=code_field("htmlCode", DEFAULT_HTML),
            css_code=code_field("cssCode", DEFAULT_CSS),
            js_code=code_field("jsCode", DEFAULT_JS),
        )

    def optimize_code(self, code: str, code_type: str) -> str:
        """Ask the model for an optimized version of ``code``; returns ``code`` unchanged on failure."""
        if not self.is_available:
            return code
        try:
            return strip_code_fences(self._ask(prompts.optimize_prompt(code, code_type))) or code
        except Exception as exc:
            logger.warning("Code optimization failed (%s), returning original code", exc)
            return code
