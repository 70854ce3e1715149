"""
resumetyp - typeset resumes with Typst

Turns a structured resume record into Typst source and compiles it into a
PDF or SVG through the Typst compiler.

Architecture:
- Templating Context: resume data model and Typst source generation
- Rendering Context: compiler adapter, engine bindings and artifact output
"""

__version__ = "0.1.0"
