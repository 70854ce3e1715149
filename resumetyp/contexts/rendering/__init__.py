"""
Rendering Context

Responsibilities:
- Brings up the Typst engine once per process
- Compiles Typst source to PDF bytes or SVG text
- Maps compiler diagnostics to application errors
- Saves artifacts to disk

Owns: Typst compilation, engine lifecycle, artifact output
Never: Modifies document source
"""

from resumetyp.contexts.rendering.compiler import (
    TypstCompiler,
    format_diagnostics,
    get_compiler,
)
from resumetyp.contexts.rendering.engine import (
    Diagnostic,
    EngineResult,
    TypstCliEngine,
    TypstEngine,
)
from resumetyp.contexts.rendering.exceptions import (
    CompilationError,
    InitializationError,
    RenderingError,
)
from resumetyp.contexts.rendering.output import download_artifact

__all__ = [
    "TypstCompiler",
    "get_compiler",
    "format_diagnostics",
    "TypstEngine",
    "TypstCliEngine",
    "EngineResult",
    "Diagnostic",
    "RenderingError",
    "InitializationError",
    "CompilationError",
    "download_artifact",
]
