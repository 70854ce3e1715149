"""
Resume Data Structure

Defines the typed resume record consumed by the Typst generator.

The record mirrors the shape produced by the resume form: personal info,
profile, the entry collections, color and font settings and the section order.
Documents use camelCase keys (``personalInfo``, ``isPresent``, ``sectionOrder``);
snake_case keys are accepted as well.
"""

from dataclasses import dataclass, field, fields
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from omegaconf import OmegaConf

from resumetyp.contexts.templating.defaults import (
    DEFAULT_COLORS,
    DEFAULT_FONTS,
    DEFAULT_SECTION_ORDER,
    SECTION_LABELS,
)
from resumetyp.contexts.templating.exceptions import InvalidResumeDataError
from resumetyp.contexts.templating.logger import _log_debug, _log_info, _log_warning


class SectionId(str, Enum):
    """Orderable resume section kinds."""

    PROFILE = "profile"
    EDUCATION = "education"
    PROJECTS = "projects"
    EXPERIENCE = "experience"
    LEADERSHIP = "leadership"
    SKILLS = "skills"
    ACHIEVEMENTS = "achievements"

    @property
    def label(self) -> str:
        return SECTION_LABELS[self.value]


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _get(mapping: Mapping[str, Any], name: str, default: Any = None) -> Any:
    """Look up a field by its snake_case name or its camelCase alias."""
    if name in mapping:
        return mapping[name]
    return mapping.get(_camel(name), default)


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _bullets(value: Any) -> Tuple[str, ...]:
    if not value:
        return ()
    if isinstance(value, str):
        return (value,)
    return tuple(_text(item) for item in value)


TRUE_STRINGS = ("true", "yes", "on", "1")
FALSE_STRINGS = ("false", "no", "off", "0", "")


def _flag(value: Any, name: str, source: Optional[Path] = None) -> bool:
    """Read a boolean, accepting the usual spellings when it arrives as text."""
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in TRUE_STRINGS:
            return True
        if lowered in FALSE_STRINGS:
            return False
        raise InvalidResumeDataError(f"'{_camel(name)}' must be true or false, got '{value}'", source)
    return bool(value)


def _number(value: Any, name: str, source: Optional[Path] = None) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        raise InvalidResumeDataError(
            f"'{_camel(name)}' must be a number, got '{value}'", source
        ) from None


class _Record:
    """Mixin building frozen records from loosely typed mappings."""

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]], source: Optional[Path] = None):
        data = data or {}
        kwargs = {}
        for f in fields(cls):
            value = _get(data, f.name)
            if value is None:
                continue
            if f.name == "bullets":
                kwargs[f.name] = _bullets(value)
            elif f.type is bool or f.type == "bool":
                kwargs[f.name] = _flag(value, f.name, source)
            elif f.type in (float, "float"):
                kwargs[f.name] = _number(value, f.name, source)
            else:
                kwargs[f.name] = _text(value)
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        result = {}
        for f in fields(self):
            value = getattr(self, f.name)
            result[_camel(f.name)] = list(value) if isinstance(value, tuple) else value
        return result


@dataclass(frozen=True)
class PersonalInfo(_Record):
    """Contact header fields. Empty string means absent."""

    name: str = ""
    phone: str = ""
    location: str = ""
    email: str = ""
    website: str = ""
    linkedin: str = ""
    github: str = ""


@dataclass(frozen=True)
class Profile(_Record):
    summary: str = ""


@dataclass(frozen=True)
class WorkExperience(_Record):
    """
    A position held at a company.

    Attributes:
        start_date: ``YYYY-MM`` or empty
        end_date: ``YYYY-MM`` or empty; ignored when ``is_present`` is set
        is_present: Entry is ongoing
        bullets: Achievement lines, blank lines are skipped at render time
    """

    id: str = ""
    title: str = ""
    company: str = ""
    location: str = ""
    start_date: str = ""
    end_date: str = ""
    is_present: bool = False
    bullets: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Education(_Record):
    id: str = ""
    institution: str = ""
    location: str = ""
    degree: str = ""
    major: str = ""
    start_date: str = ""
    end_date: str = ""
    is_present: bool = False
    bullets: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Leadership(_Record):
    id: str = ""
    title: str = ""
    organization: str = ""
    location: str = ""
    start_date: str = ""
    end_date: str = ""
    is_present: bool = False
    bullets: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Project(_Record):
    """A project with optional tech stack label, URL and award (e.g. "Hackathon 2026 (1st Place)")."""

    id: str = ""
    name: str = ""
    stack: str = ""
    url: str = ""
    award: str = ""
    bullets: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Achievement(_Record):
    id: str = ""
    title: str = ""
    date: str = ""
    description: str = ""


@dataclass(frozen=True)
class SkillCategory(_Record):
    id: str = ""
    category: str = ""
    skills: str = ""


@dataclass(frozen=True)
class ColorSettings(_Record):
    """Hex colors for headings, body text, accents (section rules) and links."""

    head_color: str = DEFAULT_COLORS["head_color"]
    text_color: str = DEFAULT_COLORS["text_color"]
    accent_color: str = DEFAULT_COLORS["accent_color"]
    link_color: str = DEFAULT_COLORS["link_color"]


@dataclass(frozen=True)
class FontSettings(_Record):
    """Point sizes for body text, contact line, section headings and the name."""

    base_size: float = DEFAULT_FONTS["base_size"]
    contact_size: float = DEFAULT_FONTS["contact_size"]
    heading_size: float = DEFAULT_FONTS["heading_size"]
    name_size: float = DEFAULT_FONTS["name_size"]


def parse_section_order(
    value: Optional[List[Any]], source: Optional[Path] = None
) -> Tuple[SectionId, ...]:
    """
    Convert a list of section ids into an ordered tuple without duplicates.

    Args:
        value: Section ids as strings or SectionId members (None means default order)
        source: Originating file, used in error messages

    Returns:
        Tuple of SectionId in render order

    Raises:
        InvalidResumeDataError: If an id is not a known section
    """
    if value is None:
        return tuple(SectionId(s) for s in DEFAULT_SECTION_ORDER)

    order = []
    for raw in value:
        try:
            section_id = SectionId(raw)
        except ValueError:
            valid = ", ".join(s.value for s in SectionId)
            raise InvalidResumeDataError(
                f"Unknown section id '{raw}' in sectionOrder. Valid ids: {valid}", source
            ) from None
        if section_id in order:
            _log_warning(f"Duplicate section '{section_id.value}' in sectionOrder ignored")
            continue
        order.append(section_id)
    return tuple(order)


@dataclass(frozen=True)
class ResumeData:
    """
    Complete resume record.

    ``section_order`` decides which sections render and in which order.
    A listed section whose content is empty or blank is dropped at render time.
    """

    personal_info: PersonalInfo = field(default_factory=PersonalInfo)
    profile: Profile = field(default_factory=Profile)
    education: Tuple[Education, ...] = ()
    projects: Tuple[Project, ...] = ()
    work_experience: Tuple[WorkExperience, ...] = ()
    leadership: Tuple[Leadership, ...] = ()
    skills: Tuple[SkillCategory, ...] = ()
    achievements: Tuple[Achievement, ...] = ()
    colors: ColorSettings = field(default_factory=ColorSettings)
    fonts: FontSettings = field(default_factory=FontSettings)
    section_order: Tuple[SectionId, ...] = tuple(SectionId(s) for s in DEFAULT_SECTION_ORDER)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], source: Optional[Path] = None) -> "ResumeData":
        """
        Build a ResumeData from a (camelCase or snake_case) mapping.

        Missing keys fall back to defaults.

        Raises:
            InvalidResumeDataError: If data is not a mapping or the section order is invalid
        """
        if not isinstance(data, Mapping):
            raise InvalidResumeDataError(
                f"Resume data must be a mapping, got {type(data).__name__}", source
            )

        def entries(name, record_cls):
            items = _get(data, name) or []
            if isinstance(items, Mapping):
                raise InvalidResumeDataError(f"'{_camel(name)}' must be a list", source)
            for item in items:
                if not isinstance(item, Mapping):
                    raise InvalidResumeDataError(
                        f"'{_camel(name)}' entries must be mappings, got {type(item).__name__}", source
                    )
            return tuple(record_cls.from_dict(item, source) for item in items)

        return cls(
            personal_info=PersonalInfo.from_dict(_get(data, "personal_info"), source),
            profile=Profile.from_dict(_get(data, "profile"), source),
            education=entries("education", Education),
            projects=entries("projects", Project),
            work_experience=entries("work_experience", WorkExperience),
            leadership=entries("leadership", Leadership),
            skills=entries("skills", SkillCategory),
            achievements=entries("achievements", Achievement),
            colors=ColorSettings.from_dict(_get(data, "colors"), source),
            fonts=FontSettings.from_dict(_get(data, "fonts"), source),
            section_order=parse_section_order(_get(data, "section_order"), source),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize back to the camelCase document shape."""
        return {
            "personalInfo": self.personal_info.to_dict(),
            "profile": self.profile.to_dict(),
            "education": [e.to_dict() for e in self.education],
            "projects": [p.to_dict() for p in self.projects],
            "workExperience": [w.to_dict() for w in self.work_experience],
            "leadership": [lead.to_dict() for lead in self.leadership],
            "skills": [s.to_dict() for s in self.skills],
            "achievements": [a.to_dict() for a in self.achievements],
            "colors": self.colors.to_dict(),
            "fonts": self.fonts.to_dict(),
            "sectionOrder": [s.value for s in self.section_order],
        }


def load_resume_data(path: Union[str, Path]) -> ResumeData:
    """
    Load a resume document (YAML or JSON) from disk.

    Args:
        path: Path to the resume document

    Returns:
        ResumeData instance

    Raises:
        FileNotFoundError: If path does not exist
        InvalidResumeDataError: If the document structure is invalid
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Resume data file not found: {path}")

    _log_info(f"Loading resume data from {path}")
    config = OmegaConf.load(path)
    data = OmegaConf.to_container(config, resolve=False)

    resume = ResumeData.from_dict(data, source=path)
    _log_debug(
        f"Loaded {len(resume.education)} education, {len(resume.projects)} projects, "
        f"{len(resume.work_experience)} experience, {len(resume.leadership)} leadership, "
        f"{len(resume.skills)} skill categories, {len(resume.achievements)} achievements"
    )
    return resume
