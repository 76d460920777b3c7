"""Tests for the static fallback templates."""
import pytest

from sitebuilder.generation import templates


class TestMockComponent:
    """Test mock_component selection."""

    @pytest.mark.parametrize("component_type,marker", [
        ("Hero Section", "const HeroSection"),
        ("Navigation Bar", "export default Navigation"),
        ("Card Component", "export default Card"),
    ])
    def test_known_types(self, component_type, marker):
        assert marker in templates.mock_component(component_type)

    def test_unknown_type_falls_back_to_hero(self):
        """Test that anything unknown gets the hero section."""
        assert templates.mock_component("Pricing Table") == templates.mock_component("Hero Section")

    def test_is_pure(self):
        """Test that the same input always renders the same source."""
        assert templates.mock_component("Card Component") == templates.mock_component("Card Component")


class TestMockWebsite:
    """Test mock_website."""

    @pytest.mark.parametrize("prompt,title", [
        ("My photography PORTFOLIO", "Portfolio Website"),
        ("an e-commerce store", "E-commerce Store"),
        ("a blog about tea", "Blog Platform"),
        ("sales dashboard", "Admin Dashboard"),
        ("something else", "Modern Web App"),
    ])
    def test_title_from_keywords(self, prompt, title):
        site = templates.mock_website(prompt)
        assert site["title"] == title
        assert site["description"] == f"AI-generated {title.lower()} with interactive features"

    def test_webapp_is_complete_document(self):
        """Test the web-app fallback document."""
        site = templates.mock_website("a blog")
        html = site["html_code"]

        assert html.startswith("<!DOCTYPE html>")
        assert html.endswith("</html>")
        assert "info@blogplatform.com" in html
        assert [c["type"] for c in site["components"]] == ["header", "hero", "content", "footer"]
        assert site["css_code"] and site["js_code"]

    def test_prompt_is_escaped(self):
        """Test that user text cannot inject markup."""
        html = templates.mock_website('<img src=x onerror="alert(1)">')["html_code"]
        assert "<img src=x" not in html
        assert "&lt;img src=x" in html

    def test_flow_mode(self):
        """Test the workflow fallback."""
        site = templates.mock_website("<b>signup</b>", mode="flow")

        assert site["title"] == "User Workflow"
        assert len(site["components"]) == 5
        assert site["html_code"].startswith("<!DOCTYPE html>")
        assert site["html_code"].endswith("</html>")
        assert "<b>signup</b>" not in site["html_code"]

    def test_components_are_copies(self):
        """Test that callers cannot mutate the shared step list."""
        site = templates.mock_website("x", mode="flow")
        site["components"][0]["content"] = "changed"
        assert templates.FLOW_STEPS[0]["content"] == "Begin Process"


class TestMockBackend:
    """Test mock_backend."""

    def test_feature_sections_toggle(self):
        """Test that routes include only the enabled features."""
        code = templates.mock_backend("PostgreSQL", "Express", {"userAuth": True, "crudOps": False})

        assert "/auth/login" in code["routes"]
        assert "/users" not in code["routes"]
        assert "authMiddleware" in code["middleware"]

    def test_no_features(self):
        code = templates.mock_backend("PostgreSQL", "Express", {})

        assert "/auth/login" not in code["routes"]
        assert "authMiddleware" not in code["middleware"]
        assert "Generated Express Routes with PostgreSQL" in code["routes"]

    @pytest.mark.parametrize("database,marker", [
        ("MongoDB", "mongoose"),
        ("mongo", "mongoose"),
        ("PostgreSQL", "pgTable"),
        ("MySQL", "pgTable"),
    ])
    def test_models_variant(self, database, marker):
        """Test document vs. relational models."""
        assert marker in templates.mock_backend(database, "Express", {})["models"]
