"""Custom exceptions for the templating context."""

from pathlib import Path
from typing import Optional


class TemplateRenderError(Exception):
    """
    Exception raised when a structure template cannot be rendered.

    Attributes:
        message: Error description
        template_name: Name of the structure template (e.g., 'preamble')
        template_path: Path to the template file
        original_error: The original Jinja2 error
    """

    def __init__(
        self,
        message: str,
        template_name: Optional[str] = None,
        template_path: Optional[Path] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.template_name = template_name
        self.template_path = template_path
        self.original_error = original_error

        parts = [message]

        if template_name and template_path:
            parts.append(f"\nTemplate: {template_path}")
            parts.append(f"Name: {template_name}")

        if original_error:
            parts.append(f"\nOriginal error: {str(original_error)}")

        super().__init__("\n".join(parts))


class InvalidResumeDataError(ValueError):
    """
    Exception raised when a resume data document cannot be loaded.

    Raised by the loader only (e.g., unknown section ids in ``sectionOrder``
    or a document that is not a mapping). Generation itself never raises.
    """

    def __init__(self, message: str, source: Optional[Path] = None):
        self.message = message
        self.source = source
        if source is not None:
            message = f"{message} (in {source})"
        super().__init__(message)
