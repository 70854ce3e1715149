"""
Typst Compilation Module

Wraps a TypstEngine with one-time initialization and maps engine diagnostics
to application errors.

Initialization rules (on a TypstCompiler instance):
- the first caller of ensure_ready() starts the engine bring-up
- concurrent callers await that same in-flight bring-up
- after success, ensure_ready() returns immediately
- after failure, the stored InitializationError is re-raised without retrying
- a bring-up abandoned before finishing (cancelled, or orphaned when its
  event loop shut down) is started again by the next caller

Compilation failures are not sticky: every compile call is independent.
Anything the engine raises while compiling surfaces as CompilationError.
"""

import asyncio
import time
from functools import lru_cache
from typing import Any, Iterable, Mapping, Optional

from resumetyp.contexts.rendering.engine import MAIN_SOURCE_PATH, TypstCliEngine, TypstEngine
from resumetyp.contexts.rendering.exceptions import CompilationError, InitializationError
from resumetyp.contexts.rendering.logger import (
    _log_debug,
    _log_error,
    _log_info,
    _log_warning,
    log_compilation_result,
    log_compilation_start,
)
from resumetyp.contexts.templating.resume_data_structure import ResumeData
from resumetyp.contexts.templating.typst_generator import generate_typst

UNKNOWN_COMPILATION_ERROR = "Unknown compilation error"


def _diagnostic_message(diagnostic: Any) -> str:
    if isinstance(diagnostic, str):
        return diagnostic
    if isinstance(diagnostic, Mapping):
        return str(diagnostic.get("message", diagnostic))
    return str(getattr(diagnostic, "message", diagnostic))


def format_diagnostics(diagnostics: Optional[Iterable[Any]]) -> str:
    """
    Join diagnostic messages into one error message.

    Each diagnostic is a plain string, a mapping with a "message" key, or an
    object with a ``message`` attribute.

    Returns:
        Newline-joined messages, or "Unknown compilation error" when there are none
    """
    messages = [_diagnostic_message(d) for d in diagnostics or []]
    if not messages:
        return UNKNOWN_COMPILATION_ERROR
    return "\n".join(messages)


class TypstCompiler:
    """
    Compiler adapter owning a Typst engine.

    Use get_compiler() for the process-wide instance; construct directly to
    supply a different engine.
    """

    def __init__(self, engine: TypstEngine = None, verbose: bool = False):
        self.engine = engine if engine is not None else TypstCliEngine()
        self.verbose = verbose
        self._ready = False
        self._init_task: Optional[asyncio.Future] = None
        self._init_error: Optional[InitializationError] = None

    @property
    def is_ready(self) -> bool:
        return self._ready

    @property
    def init_error(self) -> Optional[InitializationError]:
        return self._init_error

    async def _bring_up(self) -> None:
        _log_info(f"Initializing Typst engine ({type(self.engine).__name__})")
        start_time = time.time()
        try:
            await self.engine.init()
        except Exception as e:
            self._init_error = InitializationError(str(e) or type(e).__name__)
            self._init_error.__cause__ = e
            _log_error(f"Engine initialization failed: {self._init_error}")
            raise self._init_error
        self._ready = True
        _log_debug(f"Engine initialized in {time.time() - start_time:.2f}s")

    @staticmethod
    def _abandoned(task: asyncio.Future) -> bool:
        # Cancelled, or left pending on an event loop that has since closed
        if task.cancelled():
            return True
        return not task.done() and task.get_loop().is_closed()

    async def ensure_ready(self) -> None:
        """
        Make sure the engine is initialized.

        Raises:
            InitializationError: If bring-up failed now or in an earlier call
        """
        if self._ready:
            return
        if self._init_error is not None:
            raise self._init_error
        if self._init_task is not None and self._abandoned(self._init_task):
            _log_warning("Previous engine bring-up was abandoned, starting a new one")
            self._init_task = None
        if self._init_task is None:
            self._init_task = asyncio.ensure_future(self._bring_up())
        # Shielded so one cancelled waiter does not abort the shared bring-up
        await asyncio.shield(self._init_task)

    async def _compile(self, source: str, target: str):
        await self.ensure_ready()

        log_compilation_start(target, source)
        start_time = time.time()
        try:
            self.engine.reset()
            self.engine.add_source(MAIN_SOURCE_PATH, source)
            result = await self.engine.compile(target)
        except Exception as e:
            message = str(e) or type(e).__name__
            _log_error(f"{target.upper()} compilation raised {type(e).__name__}: {message}")
            raise CompilationError(message, [message]) from e
        log_compilation_result(target, result, time.time() - start_time, verbose=self.verbose)

        if result.artifact is None:
            raise CompilationError(format_diagnostics(result.diagnostics), result.diagnostics)
        return result.artifact

    async def compile_to_pdf(self, source: str) -> bytes:
        """
        Compile Typst source to PDF.

        Args:
            source: Complete Typst document

        Returns:
            PDF bytes

        Raises:
            InitializationError: If the engine cannot be brought up
            CompilationError: If the engine failed or produced no PDF
        """
        return await self._compile(source, "pdf")

    async def compile_to_svg(self, source: str) -> str:
        """
        Compile Typst source to SVG.

        Returns:
            SVG text (multi-page documents are concatenated in page order)

        Raises:
            InitializationError: If the engine cannot be brought up
            CompilationError: If the engine failed or produced no SVG
        """
        return await self._compile(source, "svg")

    async def compile_resume(self, data: ResumeData, output_format: str = "pdf"):
        """
        Generate Typst for a resume and compile it.

        Args:
            data: Resume record
            output_format: "pdf" (returns bytes) or "svg" (returns text)
        """
        source = generate_typst(data)
        if output_format == "pdf":
            return await self.compile_to_pdf(source)
        if output_format == "svg":
            return await self.compile_to_svg(source)
        raise ValueError(f"Unsupported output format '{output_format}'. Expected 'pdf' or 'svg'")


@lru_cache(maxsize=1)
def get_compiler() -> TypstCompiler:
    """Return the process-wide compiler, creating it on first use."""
    return TypstCompiler()
