"""Unit tests for TemplateRegistry class."""

import pytest
from pathlib import Path
from jinja2 import TemplateNotFound, UndefinedError

from resumetyp.contexts.templating.registries import TemplateRegistry
from resumetyp.contexts.templating.resume_data_structure import ColorSettings, FontSettings


@pytest.mark.unit
def test_template_registry_init():
    """Test TemplateRegistry initialization."""
    registry = TemplateRegistry()
    assert registry.templates_path.exists()
    assert registry._cache == {}


@pytest.mark.unit
def test_get_template_preamble():
    """Test loading preamble template."""
    registry = TemplateRegistry()
    template = registry.get_template("preamble")

    assert template is not None
    assert "preamble" in registry._cache


@pytest.mark.unit
def test_template_caching():
    """Test that templates are cached after first load."""
    registry = TemplateRegistry()

    # First load
    template1 = registry.get_template("document")
    assert registry.is_cached("document")

    # Second load should return same object from cache
    template2 = registry.get_template("document")
    assert template1 is template2


@pytest.mark.unit
def test_get_template_not_found():
    """Test error handling for missing template."""
    registry = TemplateRegistry()

    with pytest.raises(TemplateNotFound, match="nonexistent"):
        registry.get_template("nonexistent")


@pytest.mark.unit
def test_get_template_path():
    """Test getting template file path."""
    registry = TemplateRegistry()
    path = registry.get_template_path("preamble")

    assert isinstance(path, Path)
    assert path.name == "preamble.typ.jinja"
    assert path.exists()


@pytest.mark.unit
def test_clear_cache():
    """Test cache clearing."""
    registry = TemplateRegistry()

    registry.get_template("preamble")
    assert len(registry._cache) == 1

    registry.clear_cache()
    assert len(registry._cache) == 0


@pytest.mark.unit
def test_custom_templates_path(tmp_path):
    """Test loading templates from another directory."""
    (tmp_path / "greeting.typ.jinja").write_text("#let who = <<< name | typst_str >>>\n")
    registry = TemplateRegistry(tmp_path)

    result = registry.get_template("greeting").render(name='"Ada" #1')
    assert result == '#let who = "\\"Ada\\" \\#1"\n'


@pytest.mark.unit
def test_custom_delimiters(tmp_path):
    """Test that Typst braces, brackets and hashes pass through untouched."""
    (tmp_path / "raw.typ.jinja").write_text(
        "#let f(x) = { [#x] }\n{{ not jinja }} {% nor this %}\n<# dropped #>#f(<<< size | typst_size >>>)\n"
    )
    registry = TemplateRegistry(tmp_path)

    result = registry.get_template("raw").render(size=10.5)
    assert result == "#let f(x) = { [#x] }\n{{ not jinja }} {% nor this %}\n#f(10.5pt)\n"


@pytest.mark.unit
def test_preamble_rendering():
    """Test that the preamble renders color and size bindings."""
    registry = TemplateRegistry()
    result = registry.get_template("preamble").render(
        colors=ColorSettings(link_color="#abcdef"), fonts=FontSettings(base_size=11)
    )

    assert '#let link-color = rgb("#abcdef")' in result
    assert "#let font-size = 11pt" in result
    assert "#let resume(" in result


@pytest.mark.unit
def test_missing_variable_is_error():
    """StrictUndefined turns missing context into an error instead of blank output."""
    registry = TemplateRegistry()

    with pytest.raises(UndefinedError):
        registry.get_template("preamble").render(colors=ColorSettings())
