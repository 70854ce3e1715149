"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from utils.logger directly.
"""

import os
import shutil
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger

from resumetyp.utils.logger import setup_logger as _setup_logger

load_dotenv()

CONTEXT_PREFIX = "[render]"


def setup_rendering_logger(log_dir: Path, verbose: bool = False) -> Path:
    """
    Setup logger for rendering context.

    Configures loguru with provenance tracking and rendering-specific context:
    the configured Typst binary, where it resolves on PATH and the extra
    font directory.

    Args:
        log_dir: Directory for this rendering session
        verbose: Show DEBUG messages on the console as well

    Returns:
        Path to log file
    """
    binary = os.getenv("TYPST_BIN", "typst")
    return _setup_logger(
        context_name="render",
        log_dir=log_dir,
        extra_provenance={
            "Typst binary": binary,
            "Typst executable": shutil.which(binary) or "not found on PATH",
            "Typst font path": os.getenv("TYPST_FONT_PATH"),
        },
        console_level="DEBUG" if verbose else "INFO",
    )


# Wrapper functions with automatic [render] prefix


def _log_info(message: str) -> None:
    """Log info message with [render] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [render] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [render] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [render] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level rendering-specific logging helpers


def log_compilation_start(target: str, source: str) -> None:
    """Log start of compilation with context."""
    _log_info(f"Compiling document to {target.upper()}")
    _log_debug(f"  Source: {len(source.splitlines())} lines, {len(source)} characters")


def log_compilation_result(
    target: str,
    result,  # EngineResult
    elapsed_time: float,
    verbose: bool = False,
) -> None:
    """
    Log compilation result with diagnostics.

    Args:
        target: Output kind ("pdf" or "svg")
        result: EngineResult from TypstEngine.compile()
        elapsed_time: Time taken to compile
        verbose: Show more diagnostics (default: False)
    """
    if result.artifact is not None:
        _log_success(f"{target.upper()} compilation succeeded ({elapsed_time:.2f}s)")
        _log_debug(f"  Artifact size: {len(result.artifact)}")
    else:
        _log_error(
            f"{target.upper()} compilation failed: {len(result.diagnostics)} errors ({elapsed_time:.2f}s)"
        )
        error_limit = 10 if verbose else 5
        for i, diagnostic in enumerate(result.diagnostics[:error_limit], 1):
            _log_error(f"  Error {i}: {diagnostic}")
        if len(result.diagnostics) > error_limit:
            _log_error(f"  ... and {len(result.diagnostics) - error_limit} more errors")

    if result.warnings:
        _log_warning(f"{len(result.warnings)} warnings detected")
        warning_limit = 10 if verbose else 3
        for i, warn in enumerate(result.warnings[:warning_limit], 1):
            _log_debug(f"  Warning {i}: {warn}")
        if len(result.warnings) > warning_limit:
            _log_debug(f"  ... and {len(result.warnings) - warning_limit} more warnings")

    # Raw compiler output bypasses the format template to keep its own layout
    if (verbose or result.artifact is None) and result.stderr:
        logger.opt(raw=True).debug(
            f"\n{'=' * 80}\nTYPST STDERR:\n{'=' * 80}\n{result.stderr}\n"
        )
