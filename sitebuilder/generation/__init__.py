"""
Generation module: prompts the external model and post-processes its output.

- prompts.py: prompt builders
- client.py: Gemini adapter (TextGenerator port)
- markdown.py: code fence stripping and JSON recovery
- templates.py + templates/: static fallback content
- service.py: GenerationService tying it together
"""
from sitebuilder.generation.service import GenerationService

__all__ = ["GenerationService"]
