"""
Typst Engine Bindings

Defines the engine contract the compiler adapter drives, and the default
binding to the ``typst`` command-line compiler.

Contract:
- init(): one-time bring-up, raises on failure
- reset(): drop all registered sources
- add_source(path, text): register a virtual file
- compile(target): compile ``/main.typ`` to "pdf" or "svg"; returns an
  EngineResult whose artifact is None on failure. Implementations must
  snapshot the registered sources before their first suspension point.
"""

import asyncio
import os
import re
import shutil
import tempfile
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from dotenv import load_dotenv

from resumetyp.contexts.rendering.logger import _log_debug, _log_info

load_dotenv()

TYPST_BIN = os.getenv("TYPST_BIN", "typst")
TYPST_FONT_PATH = os.getenv("TYPST_FONT_PATH")

OUTPUT_TARGETS = ("pdf", "svg")
MAIN_SOURCE_PATH = "/main.typ"

# Short diagnostic format: "main.typ:12:3: error: unknown variable: foo"
DIAGNOSTIC_PATTERN = re.compile(
    r"^(?:(?P<location>\S+?:\d+:\d+):\s*)?(?P<severity>error|warning):\s*(?P<message>.+)$",
    re.MULTILINE,
)

SVG_PAGE_PATTERN = re.compile(r"page-(\d+)\.svg$")


@dataclass(frozen=True)
class Diagnostic:
    """A single compiler message."""

    severity: str
    message: str
    location: Optional[str] = None

    def __str__(self) -> str:
        return self.message


@dataclass
class EngineResult:
    """
    Outcome of one engine compilation.

    Attributes:
        artifact: PDF bytes or SVG text; None when compilation failed
        diagnostics: Error diagnostics (strings, mappings with "message",
                     or objects with a ``message`` attribute)
        warnings: Warning diagnostics
        stderr: Raw compiler output, when the engine has one
    """

    artifact: Optional[Union[bytes, str]] = None
    diagnostics: List[Any] = field(default_factory=list)
    warnings: List[Any] = field(default_factory=list)
    stderr: str = ""


def parse_diagnostics(output: str) -> Tuple[List[Diagnostic], List[Diagnostic]]:
    """
    Parse Typst compiler output in short diagnostic format.

    Args:
        output: stderr from ``typst compile --diagnostic-format short``

    Returns:
        Tuple of (errors, warnings)
    """
    errors = []
    warnings = []
    for match in DIAGNOSTIC_PATTERN.finditer(output):
        location = match.group("location")
        text = match.group("message").strip()
        message = f"{location}: {text}" if location else text
        diagnostic = Diagnostic(match.group("severity"), message, location)
        if diagnostic.severity == "error":
            errors.append(diagnostic)
        else:
            warnings.append(diagnostic)
    return errors, warnings


class TypstEngine(ABC):
    """Abstract Typst engine driven by the compiler adapter."""

    @abstractmethod
    async def init(self) -> None:
        """Bring the engine up. Raises on failure."""

    @abstractmethod
    def reset(self) -> None:
        """Forget every registered source."""

    @abstractmethod
    def add_source(self, path: str, text: str) -> None:
        """Register ``text`` as the file at virtual ``path``."""

    @abstractmethod
    async def compile(self, target: str) -> EngineResult:
        """Compile the main source to ``target`` ("pdf" or "svg")."""


class TypstCliEngine(TypstEngine):
    """
    Engine backed by the ``typst`` command-line compiler.

    Sources are written to a temporary project root for every compilation,
    so nothing is left on disk afterwards.
    """

    def __init__(self, binary: str = TYPST_BIN, font_path: Optional[str] = TYPST_FONT_PATH):
        self.binary = binary
        self.font_path = font_path
        self.executable: Optional[str] = None
        self.version: Optional[str] = None
        self._sources: Dict[str, str] = {}

    async def _run(self, cmd: List[str], cwd: Optional[Path] = None) -> Tuple[int, str, str]:
        process = await asyncio.create_subprocess_exec(
            *cmd,
            cwd=str(cwd) if cwd else None,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        stdout, stderr = await process.communicate()
        # Replace invalid UTF-8 bytes instead of crashing
        return (
            process.returncode,
            stdout.decode("utf-8", errors="replace"),
            stderr.decode("utf-8", errors="replace"),
        )

    async def init(self) -> None:
        executable = shutil.which(self.binary)
        if executable is None:
            raise FileNotFoundError(
                f"Typst compiler not found: '{self.binary}'. Install typst or set TYPST_BIN."
            )

        returncode, stdout, stderr = await self._run([executable, "--version"])
        if returncode != 0:
            raise RuntimeError(
                f"'{self.binary} --version' exited with code {returncode}: {stderr.strip()}"
            )

        self.executable = executable
        self.version = stdout.strip()
        _log_info(f"Typst engine ready: {self.version}")
        _log_debug(f"  Executable: {executable}")

    def reset(self) -> None:
        self._sources.clear()

    def add_source(self, path: str, text: str) -> None:
        relative = Path(path.lstrip("/"))
        if relative.is_absolute() or ".." in relative.parts:
            raise ValueError(f"Source path escapes the project root: {path}")
        self._sources[relative.as_posix()] = text

    def _build_command(self, root: Path, main: Path, output: Path, target: str) -> List[str]:
        cmd = [
            self.executable,
            "compile",
            "--root",
            str(root),
            "--format",
            target,
            "--diagnostic-format",
            "short",
        ]
        if self.font_path:
            cmd.extend(["--font-path", str(self.font_path)])
        cmd.extend([str(main), str(output)])
        return cmd

    @staticmethod
    def _collect_svg(root: Path) -> Optional[str]:
        pages = []
        for path in root.glob("page-*.svg"):
            match = SVG_PAGE_PATTERN.search(path.name)
            if match:
                pages.append((int(match.group(1)), path))
        if not pages:
            return None
        return "\n".join(path.read_text(encoding="utf-8") for _, path in sorted(pages))

    async def compile(self, target: str) -> EngineResult:
        if target not in OUTPUT_TARGETS:
            raise ValueError(f"Unsupported output format '{target}'. Expected one of {OUTPUT_TARGETS}")
        if self.executable is None:
            raise RuntimeError("Typst engine used before init()")

        main_name = MAIN_SOURCE_PATH.lstrip("/")
        sources = dict(self._sources)
        if main_name not in sources:
            return EngineResult(diagnostics=[f"No main source registered at {MAIN_SOURCE_PATH}"])

        with tempfile.TemporaryDirectory(prefix="resumetyp_") as tmp:
            root = Path(tmp)
            for relative, text in sources.items():
                source_path = root / relative
                source_path.parent.mkdir(parents=True, exist_ok=True)
                source_path.write_text(text, encoding="utf-8")

            output = root / ("document.pdf" if target == "pdf" else "page-{p}.svg")
            cmd = self._build_command(root, root / main_name, output, target)
            _log_debug(f"Running: {' '.join(cmd)}")

            returncode, _, stderr = await self._run(cmd, cwd=root)
            errors, warnings = parse_diagnostics(stderr)

            if returncode != 0:
                if not errors and stderr.strip():
                    errors = [stderr.strip()]
                return EngineResult(diagnostics=errors, warnings=warnings, stderr=stderr)

            if target == "pdf":
                artifact = output.read_bytes() if output.exists() else None
            else:
                artifact = self._collect_svg(root)

            return EngineResult(
                artifact=artifact, diagnostics=errors, warnings=warnings, stderr=stderr
            )
