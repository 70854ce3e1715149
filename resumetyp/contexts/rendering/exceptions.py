"""Exceptions raised by the rendering context."""

from typing import Any, List, Optional


class RenderingError(Exception):
    """Base class for compiler adapter failures."""


class InitializationError(RenderingError):
    """
    The Typst engine could not be brought up.

    Carries the original failure's message. Once raised, the compiler keeps
    re-raising the same instance for the rest of the process.
    """


class CompilationError(RenderingError):
    """
    The engine produced no artifact for a document.

    Attributes:
        diagnostics: Raw diagnostics reported by the engine (may be empty)
    """

    def __init__(self, message: str, diagnostics: Optional[List[Any]] = None):
        self.message = message
        self.diagnostics = list(diagnostics or [])
        super().__init__(message)
