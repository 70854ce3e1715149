"""
Templating Registries

Loads and caches the Jinja2 structure templates that make up the fixed part
of every generated Typst document (color/size bindings, helper library and
the page template invocation).
"""

from pathlib import Path
from typing import Dict

from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template, TemplateNotFound

from resumetyp.contexts.templating.typst_patterns import format_size, quote

STRUCTURE_TEMPLATES_PATH = Path(__file__).parent / "template" / "structure"


class TemplateRegistry:
    """
    Registry for loading and caching Jinja2 templates for Typst generation.

    Templates are stored in template/structure/{name}.typ.jinja and use custom
    delimiters to avoid conflicts with Typst syntax (``#``, ``{}``, ``[]``):
    - Variable: <<< var >>>
    - Block: <%% block %%>
    - Comment: <# comment #>

    Filters:
    - typst_str: escape a value and wrap it in a Typst string literal
    - typst_size: format a number as a point length (10 -> 10pt)
    """

    def __init__(self, templates_path: Path = None):
        """
        Initialize the template registry.

        Args:
            templates_path: Directory holding the structure templates. Defaults
                            to the templates shipped with the package
        """
        if templates_path is None:
            templates_path = STRUCTURE_TEMPLATES_PATH

        self.templates_path = Path(templates_path)
        self._cache: Dict[str, Template] = {}

        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_path)),
            # Catches silent failures
            undefined=StrictUndefined,
            variable_start_string="<<<",
            variable_end_string=">>>",
            block_start_string="<%%",
            block_end_string="%%>",
            comment_start_string="<#",
            comment_end_string="#>",
            trim_blocks=False,
            lstrip_blocks=False,
            keep_trailing_newline=True,
            autoescape=False,
        )
        self.env.filters["typst_str"] = lambda value: quote(str(value))
        self.env.filters["typst_size"] = format_size

    def get_template(self, name: str) -> Template:
        """
        Get a template by name, loading and caching it if necessary.

        Args:
            name: Template name without extension (e.g., 'preamble')

        Returns:
            Jinja2 Template object

        Raises:
            TemplateNotFound: If template file doesn't exist
            TemplateSyntaxError: If template has Jinja2 syntax errors
        """
        if name in self._cache:
            return self._cache[name]

        template_file = f"{name}.typ.jinja"

        try:
            template = self.env.get_template(template_file)
        except TemplateNotFound as e:
            raise TemplateNotFound(
                f"Structure template '{name}' not found at {self.templates_path / template_file}"
            ) from e

        self._cache[name] = template
        return template

    def get_template_path(self, name: str) -> Path:
        """Return the file path for a structure template."""
        return self.templates_path / f"{name}.typ.jinja"

    def clear_cache(self):
        """Clear the template cache."""
        self._cache.clear()

    def is_cached(self, name: str) -> bool:
        """Check if a template is in the cache."""
        return name in self._cache
