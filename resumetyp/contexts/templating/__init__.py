"""
Templating Context

Responsibilities:
- Defines the typed resume record (ResumeData) and loads it from YAML/JSON
- Escapes user text and formats dates for Typst
- Builds the section/heading/bullet node tree and serializes it
- Renders the fixed preamble and page template from structure templates

Owns: Resume data model, ResumeData -> Typst source generation
Never: Invokes the Typst compiler
"""

from resumetyp.contexts.templating.exceptions import (
    InvalidResumeDataError,
    TemplateRenderError,
)
from resumetyp.contexts.templating.resume_data_structure import (
    Achievement,
    ColorSettings,
    Education,
    FontSettings,
    Leadership,
    PersonalInfo,
    Profile,
    Project,
    ResumeData,
    SectionId,
    SkillCategory,
    WorkExperience,
    load_resume_data,
)
from resumetyp.contexts.templating.typst_generator import (
    ResumeToTypstConverter,
    generate_typst,
)
from resumetyp.contexts.templating.typst_patterns import escape, format_date

__all__ = [
    # Data model
    "Achievement",
    "ColorSettings",
    "Education",
    "FontSettings",
    "Leadership",
    "PersonalInfo",
    "Profile",
    "Project",
    "ResumeData",
    "SectionId",
    "SkillCategory",
    "WorkExperience",
    "load_resume_data",
    # Generation
    "ResumeToTypstConverter",
    "generate_typst",
    "escape",
    "format_date",
    # Errors
    "InvalidResumeDataError",
    "TemplateRenderError",
]
