#!/usr/bin/env python3
"""
Resume Build CLI

Generates Typst source from a resume data file and compiles it to PDF or SVG.

Commands:
    generate - Write the generated Typst source (or print it)
    compile  - Generate, compile and save the artifact
    sections - List section ids in default order

Examples:\n

    build_resume.py generate data/resume.yaml                     # Print Typst source

    build_resume.py generate data/resume.yaml -o resume.typ       # Write Typst source

    build_resume.py compile data/resume.yaml                      # Compile to PDF

    build_resume.py compile data/resume.json --format svg         # Compile to SVG
"""

import asyncio
import os
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from resumetyp.contexts.rendering import CompilationError, InitializationError, get_compiler
from resumetyp.contexts.rendering.logger import setup_rendering_logger
from resumetyp.contexts.rendering.output import download_artifact
from resumetyp.contexts.templating import (
    InvalidResumeDataError,
    ResumeToTypstConverter,
    SectionId,
    load_resume_data,
)
from resumetyp.contexts.templating.logger import log_generation_result, setup_templating_logger
from resumetyp.utils.timestamp import now

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))


app = typer.Typer(
    help="Generate Typst resumes from structured data and compile them to PDF or SVG",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _load(resume_file: Path):
    try:
        return load_resume_data(resume_file)
    except (FileNotFoundError, InvalidResumeDataError) as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


def _generate(resume_file: Path) -> str:
    data = _load(resume_file)
    converter = ResumeToTypstConverter()
    sections = converter.render_sections(data)
    source = converter.generate_document(data, sections=sections)
    log_generation_result(resume_file.stem, source, [s.value for s, _ in sections])
    return source


@app.command("generate")
def generate_command(
    resume_file: Annotated[
        Path,
        typer.Argument(help="Resume data file (YAML or JSON)"),
    ],
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Write Typst source here instead of stdout"),
    ] = None,
):
    """
    Generate Typst source for a resume.

    Examples:\n

        $ build_resume.py generate data/resume.yaml

        $ build_resume.py generate data/resume.yaml -o resume.typ
    """
    setup_templating_logger(LOGS_PATH / f"generate_{now()}")
    source = _generate(resume_file)

    if output is None:
        typer.echo(source, nl=False)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(source, encoding="utf-8")
    typer.secho(f"✓ Typst source written to {output}", fg=typer.colors.GREEN, bold=True)


@app.command("compile")
def compile_command(
    resume_file: Annotated[
        Path,
        typer.Argument(help="Resume data file (YAML or JSON)"),
    ],
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: pdf or svg"),
    ] = "pdf",
    output_dir: Annotated[
        Optional[Path],
        typer.Option("--output-dir", "-d", help="Directory for the artifact (default: RESULTS_PATH/<date>)"),
    ] = None,
    filename: Annotated[
        Optional[str],
        typer.Option("--filename", help="Artifact file name (default: resume.pdf / resume.svg)"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show detailed compiler output"),
    ] = False,
):
    """
    Generate and compile a resume.

    Examples:\n

        $ build_resume.py compile data/resume.yaml

        $ build_resume.py compile data/resume.yaml --format svg -d outs/preview
    """
    output_format = output_format.lower()
    if output_format not in ("pdf", "svg"):
        typer.secho(f"Error: unsupported format '{output_format}'\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    setup_rendering_logger(LOGS_PATH / f"render_{now()}", verbose=verbose)
    source = _generate(resume_file)

    compiler = get_compiler()
    compiler.verbose = verbose
    compile_fn = compiler.compile_to_pdf if output_format == "pdf" else compiler.compile_to_svg

    typer.secho(f"\nCompiling: {resume_file}", fg=typer.colors.BLUE, bold=True)
    try:
        artifact = asyncio.run(compile_fn(source))
    except InitializationError as e:
        typer.secho(f"✗ Typst engine unavailable: {e}\n", fg=typer.colors.RED, bold=True, err=True)
        raise typer.Exit(code=1)
    except CompilationError as e:
        typer.secho("✗ Compilation failed", fg=typer.colors.RED, bold=True, err=True)
        for line in str(e).splitlines()[:10]:
            typer.secho(f"  - {line}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    path = download_artifact(
        artifact, filename=filename or f"resume.{output_format}", output_dir=output_dir
    )
    typer.secho("✓ Compilation succeeded", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  {output_format.upper()}: {path}")


@app.command("sections")
def sections_command():
    """List section ids and their labels in default order."""
    for section_id in SectionId:
        typer.echo(f"{section_id.value:<14} {section_id.label}")


if __name__ == "__main__":
    app()
