"""Prompt templates sent to the generative model."""
from typing import Dict

COMPONENT_PROMPT = """Generate a modern {component_type} component using {framework}.

Style preferences: {style_preferences}

Requirements:
- Use TypeScript
- Include proper TypeScript types
- Use Tailwind CSS for styling
- Make it responsive and accessible
- Include proper JSX structure
- Add data-testid attributes for interactive elements
- Follow modern React best practices

Return only the component code, no explanations."""

BACKEND_ROUTES_PROMPT = """Generate {framework} API routes for a web application with {database} database.

Features to include: {features}

Requirements:
- Use TypeScript
- Include proper error handling
- Add input validation
- Use modern async/await patterns
- Include proper HTTP status codes
- Add middleware for authentication where needed

Generate the routes file with all necessary endpoints."""

BACKEND_MODELS_PROMPT = """Generate {database} database models/schemas for a web application.

Features: {features}

Requirements:
- Use TypeScript
- Include proper field types
- Add relationships between models
- Include timestamps
- Add validation rules where appropriate

Generate the models/schema file."""

BACKEND_MIDDLEWARE_PROMPT = """Generate middleware functions for a {framework} application.

Features: {features}

Requirements:
- Use TypeScript
- Include authentication middleware
- Add error handling middleware
- Include request logging
- Add CORS configuration if needed

Generate the middleware file."""

FLOW_PROMPT = """You are an expert workflow designer. Based on this user request, generate a complete workflow/flowchart structure:

"{prompt}"

Please provide a JSON response with:
1. A suitable title for the workflow
2. A brief description
3. An array of flow components (start, process, decision, end nodes)
4. HTML structure representing the flowchart
5. CSS for styling the flow elements
6. JavaScript for any interactive features

Make the flowchart clear, logical, and professional. Include proper flow elements like:
- Start/End nodes (oval shapes)
- Process steps (rectangles)
- Decision points (diamonds)
- Connectors and arrows

Return ONLY valid JSON in this exact format:
{{
  "title": "Workflow Title",
  "description": "Brief description",
  "components": [{{"type": "start", "content": "..."}}, {{"type": "process", "content": "..."}}, {{"type": "decision", "content": "..."}}, {{"type": "end", "content": "..."}}],
  "htmlCode": "<!DOCTYPE html>...",
  "cssCode": "/* CSS styles */",
  "jsCode": "// JavaScript code"
}}"""

WEBAPP_PROMPT = """You are an expert web developer. Based on this user request, generate a complete web application:

"{prompt}"

Please provide a JSON response with:
1. A suitable title for the web application
2. A brief description
3. An array of web components that should be included (header, hero, content sections, footer, etc.)
4. Complete HTML code for a fully interactive web application
5. Complete CSS code using Tailwind CSS classes and custom styles
6. JavaScript code for interactive features and functionality

Generate a COMPLETE, INTERACTIVE WEB APPLICATION with:
- Modern, responsive design using Tailwind CSS
- Interactive features (forms, buttons, navigation, etc.)
- Professional styling and layout
- Functional JavaScript for user interactions
- Mobile-responsive design
- Proper semantic HTML structure
- Smooth animations and transitions
- Working contact forms, navigation menus, and other interactive elements

IMPORTANT: Generate a complete, standalone HTML website that can be viewed in a browser immediately. Include all necessary styling and JavaScript inline or via CDN.

Return ONLY valid JSON in this exact format:
{{
  "title": "Web App Title",
  "description": "Brief description",
  "components": [{{"type": "header", "content": "Navigation header"}}, {{"type": "hero", "content": "Hero section"}}, {{"type": "content", "content": "Main content sections"}}, {{"type": "footer", "content": "Footer"}}],
  "htmlCode": "<!DOCTYPE html>...",
  "cssCode": "/* Complete CSS styles */",
  "jsCode": "// Complete JavaScript functionality"
}}"""

OPTIMIZE_PROMPT = """Analyze and optimize the following {code_type} code:

{code}

Please provide optimized version with:
- Better performance
- Improved readability
- Modern best practices
- Proper error handling
- Security improvements (if applicable)

Return only the optimized code, no explanations."""


def component_prompt(component_type: str, framework: str, style_preferences: str) -> str:
    return COMPONENT_PROMPT.format(
        component_type=component_type,
        framework=framework,
        style_preferences=style_preferences,
    )


def enabled_features(features: Dict[str, bool]) -> str:
    """Comma separated names of the switched-on feature flags."""
    return ", ".join(name for name, enabled in features.items() if enabled)


def backend_prompts(database: str, framework: str, features: Dict[str, bool]) -> Dict[str, str]:
    """One prompt per generated backend file, keyed like the response."""
    feature_text = enabled_features(features) or "none"
    return {
        "routes": BACKEND_ROUTES_PROMPT.format(framework=framework, database=database, features=feature_text),
        "models": BACKEND_MODELS_PROMPT.format(database=database, features=feature_text),
        "middleware": BACKEND_MIDDLEWARE_PROMPT.format(framework=framework, features=feature_text),
    }


def website_prompt(prompt: str, mode: str) -> str:
    template = FLOW_PROMPT if mode == "flow" else WEBAPP_PROMPT
    return template.format(prompt=prompt)


def optimize_prompt(code: str, code_type: str) -> str:
    return OPTIMIZE_PROMPT.format(code=code, code_type=code_type)
