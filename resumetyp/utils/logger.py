"""
Generic logger setup utilities.

Provides reusable loguru configuration with provenance tracking.
Context-specific wrappers should be defined in contexts/{context}/logger.py.

Each session gets its own directory holding one ``<context>.log`` file that
captures everything at DEBUG; the console shows INFO and above (DEBUG when a
command runs verbose).
"""

import platform
import sys
from pathlib import Path

from loguru import logger

from resumetyp import __version__

# Default level colors for console output
LEVEL_COLORS = {
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
CONSOLE_FORMAT = "{time:HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>"


def setup_logger(
    context_name: str,
    log_dir: Path,
    extra_provenance: dict = None,
    level_colors: dict = None,
    console_level: str = "INFO",
) -> Path:
    """
    Configure loguru for one resumetyp session.

    Replaces every existing sink with a session log file and a colorized
    stderr sink (stdout stays free for generated output such as Typst source),
    then writes the provenance header.

    Args:
        context_name: Context identifier (e.g., "render", "template")
        log_dir: Directory for this logging session
        extra_provenance: Additional key-value pairs for provenance header
        level_colors: Override default level colors (e.g., {"INFO": "<cyan>"})
        console_level: Minimum level shown on the console

    Returns:
        Path to log file

    Example:
        from resumetyp.utils.logger import setup_logger

        log_file = setup_logger(
            context_name="render",
            log_dir=Path("outs/logs/render_20251114_123456"),
            extra_provenance={"Typst binary": "typst"},
            console_level="DEBUG",
        )
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()

    for level_name, color in {**LEVEL_COLORS, **(level_colors or {})}.items():
        logger.level(level_name, color=color)

    logger.add(log_file, format=FILE_FORMAT, level="DEBUG", encoding="utf-8")
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=console_level.upper(), colorize=True)

    log_provenance({"Context": context_name, **(extra_provenance or {})})

    return log_file


def provenance() -> dict:
    """Standard provenance fields for the current process."""
    return {
        "resumetyp": __version__,
        "Script": sys.argv[0],
        "Command": " ".join(sys.argv),
        "Working directory": str(Path.cwd()),
        "Python": sys.version.split()[0],
        "Platform": platform.platform(),
    }


def log_provenance(extra_context: dict = None) -> None:
    """
    Log execution provenance to the current logger.

    Writes the standard fields from provenance() followed by any
    context-specific pairs (Typst executable, font path, phase, ...).
    Empty values are logged as "(unset)".

    Args:
        extra_context: Additional key-value pairs to log
    """
    logger.info("=" * 80)
    for key, value in {**provenance(), **(extra_context or {})}.items():
        logger.info(f"{key}: {value if value not in (None, '') else '(unset)'}")
    logger.info("=" * 80)
