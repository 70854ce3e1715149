"""
Typst Generator

Converts a ResumeData record into a self-contained Typst document.

The output inlines everything the compiler needs: color and size bindings,
the layout helper library and the page template call, followed by the
rendered sections in the record's section order. Generation is pure and
never raises for a well-formed ResumeData; missing fields render as empty
values or omitted lines.
"""

from typing import Callable, Dict, List, Optional, Tuple

from jinja2 import TemplateError

from resumetyp.contexts.templating.defaults import SECTION_HEADINGS
from resumetyp.contexts.templating.document_tree import (
    BulletList,
    Call,
    Expr,
    Heading,
    ListItem,
    Literal,
    Section,
    Sequence,
    Strong,
    Text,
)
from resumetyp.contexts.templating.exceptions import TemplateRenderError
from resumetyp.contexts.templating.registries import TemplateRegistry
from resumetyp.contexts.templating.resume_data_structure import (
    Achievement,
    Education,
    Leadership,
    Project,
    ResumeData,
    SectionId,
    SkillCategory,
    WorkExperience,
)
from resumetyp.contexts.templating.typst_patterns import (
    HelperNames,
    format_date,
    format_end_date,
)


class ResumeToTypstConverter:
    """Converts ResumeData to Typst source."""

    def __init__(self, template_registry: TemplateRegistry = None):
        self.template_registry = template_registry or TemplateRegistry()
        self._assemblers: Dict[SectionId, Callable[[ResumeData], Section]] = {
            SectionId.PROFILE: self._assemble_profile,
            SectionId.EDUCATION: self._assemble_education,
            SectionId.PROJECTS: self._assemble_projects,
            SectionId.EXPERIENCE: self._assemble_experience,
            SectionId.LEADERSHIP: self._assemble_leadership,
            SectionId.SKILLS: self._assemble_skills,
            SectionId.ACHIEVEMENTS: self._assemble_achievements,
        }

    # Entry renderers

    def convert_education(self, edu: Education) -> Call:
        """
        Convert one education entry to an ``#education-heading`` block.

        Args:
            edu: Education record

        Returns:
            Call node with institution, location, degree, major, start and end
            dates as positional arguments and the bullets as body
        """
        return Call(
            HelperNames.EDUCATION_HEADING,
            args=(
                Literal(edu.institution),
                Literal(edu.location),
                Literal(edu.degree),
                Literal(edu.major),
                Expr(format_date(edu.start_date)),
                Expr(format_end_date(edu.end_date, edu.is_present)),
            ),
            body=BulletList.from_texts(edu.bullets),
        )

    def convert_project(self, project: Project) -> Call:
        """
        Convert one project to a ``#project-heading`` block.

        Stack, URL and award are passed as keyword arguments; the helper hides
        the ones that are empty.
        """
        return Call(
            HelperNames.PROJECT_HEADING,
            args=(Literal(project.name),),
            kwargs=(
                ("stack", Literal(project.stack)),
                ("project-url", Literal(project.url)),
                ("award", Literal(project.award)),
            ),
            body=BulletList.from_texts(project.bullets),
        )

    def convert_work_experience(self, work: WorkExperience) -> Call:
        """Convert one position to a ``#work-heading`` block."""
        return self._work_heading(
            work.title, work.company, work.location,
            work.start_date, work.end_date, work.is_present, work.bullets,
        )

    def convert_leadership(self, lead: Leadership) -> Call:
        """Leadership roles share the work layout, with the organization as company."""
        return self._work_heading(
            lead.title, lead.organization, lead.location,
            lead.start_date, lead.end_date, lead.is_present, lead.bullets,
        )

    def _work_heading(self, title, company, location, start_date, end_date, is_present, bullets):
        return Call(
            HelperNames.WORK_HEADING,
            args=(
                Literal(title),
                Literal(company),
                Literal(location),
                Expr(format_date(start_date)),
                Expr(format_end_date(end_date, is_present)),
            ),
            body=BulletList.from_texts(bullets),
        )

    def convert_achievement(self, achievement: Achievement) -> Call:
        """
        Convert one achievement to an inline ``#achievement-heading`` call.

        The date argument is empty when no date is set, so the helper omits the
        separator. The description paragraph is emitted only when non-blank.
        """
        if achievement.description.strip():
            description = Sequence((Expr("\n"), Text(achievement.description)))
        else:
            description = Sequence()

        return Call(
            HelperNames.ACHIEVEMENT_HEADING,
            args=(Literal(achievement.title), Literal(achievement.date or "")),
            body=description,
            inline=True,
        )

    def convert_skill_category(self, skill: SkillCategory) -> ListItem:
        """Convert one skill category to a ``- *Category:* skills`` line."""
        return ListItem(Sequence((Strong(f"{skill.category}:"), Text(f" {skill.skills}"))))

    # Section assemblers

    def _heading(self, section_id: SectionId) -> Heading:
        return Heading(SECTION_HEADINGS[section_id.value])

    def _assemble_profile(self, data: ResumeData) -> Section:
        summary = data.profile.summary
        if not summary.strip():
            return Section(self._heading(SectionId.PROFILE))
        return Section(self._heading(SectionId.PROFILE), (Text(summary),))

    def _assemble_education(self, data: ResumeData) -> Section:
        blocks = tuple(self.convert_education(edu) for edu in data.education)
        return Section(self._heading(SectionId.EDUCATION), blocks)

    def _assemble_projects(self, data: ResumeData) -> Section:
        blocks = tuple(self.convert_project(project) for project in data.projects)
        return Section(self._heading(SectionId.PROJECTS), blocks)

    def _assemble_experience(self, data: ResumeData) -> Section:
        blocks = tuple(self.convert_work_experience(work) for work in data.work_experience)
        return Section(self._heading(SectionId.EXPERIENCE), blocks)

    def _assemble_leadership(self, data: ResumeData) -> Section:
        blocks = tuple(self.convert_leadership(lead) for lead in data.leadership)
        return Section(self._heading(SectionId.LEADERSHIP), blocks)

    def _assemble_skills(self, data: ResumeData) -> Section:
        # Only categories with both a label and skills survive
        lines = tuple(
            self.convert_skill_category(skill)
            for skill in data.skills
            if skill.category.strip() and skill.skills.strip()
        )
        if not lines:
            return Section(self._heading(SectionId.SKILLS))
        block = Call(HelperNames.SKILLS, body=BulletList(lines))
        return Section(self._heading(SectionId.SKILLS), (block,))

    def _assemble_achievements(self, data: ResumeData) -> Section:
        blocks = tuple(
            self.convert_achievement(achievement)
            for achievement in data.achievements
            if achievement.title.strip()
        )
        return Section(self._heading(SectionId.ACHIEVEMENTS), blocks)

    def build_section(self, section_id: SectionId, data: ResumeData) -> Section:
        """
        Build the node tree for one section.

        Args:
            section_id: Which section to build
            data: Resume record

        Returns:
            Section node (serializes to "" when the section has no content)
        """
        return self._assemblers[SectionId(section_id)](data)

    def render_section(self, section_id: SectionId, data: ResumeData) -> str:
        """Render one section to Typst source ("" when empty)."""
        return self.build_section(section_id, data).serialize()

    def render_sections(self, data: ResumeData) -> List[Tuple[SectionId, str]]:
        """
        Render the sections listed in ``data.section_order``.

        Filtering happens after rendering: a listed section is kept only if its
        rendered text is non-empty after trimming.

        Returns:
            (section_id, typst) pairs in section order
        """
        rendered = []
        for section_id in data.section_order:
            text = self.render_section(section_id, data)
            if text.strip():
                rendered.append((SectionId(section_id), text))
        return rendered

    # Document assembly

    def _render_template(self, name: str, **context) -> str:
        template = self.template_registry.get_template(name)
        try:
            return template.render(**context)
        except TemplateError as e:
            raise TemplateRenderError(
                f"Failed to render structure template '{name}'",
                template_name=name,
                template_path=self.template_registry.get_template_path(name),
                original_error=e,
            ) from e

    def generate_preamble(self, data: ResumeData) -> str:
        """
        Generate the color and size bindings plus the layout helper library.

        Args:
            data: Resume record (only colors and fonts are read)

        Returns:
            Typst preamble string
        """
        return self._render_template("preamble", colors=data.colors, fonts=data.fonts)

    def generate_document(
        self, data: ResumeData, sections: Optional[List[Tuple[SectionId, str]]] = None
    ) -> str:
        """
        Generate the complete Typst document.

        Args:
            data: Resume record
            sections: Output of render_sections(data), when the caller already has it

        Returns:
            Typst source: preamble, page template invocation with the escaped
            personal info, then the non-empty sections joined by blank lines
        """
        if sections is None:
            sections = self.render_sections(data)
        body = "\n\n".join(text for _, text in sections)
        return self._render_template(
            "document",
            preamble=self.generate_preamble(data),
            personal_info=data.personal_info,
            body=body,
        )


def generate_typst(data: ResumeData, template_registry: TemplateRegistry = None) -> str:
    """
    Generate Typst source for a resume.

    Args:
        data: Resume record
        template_registry: Optional registry (defaults to the packaged templates)

    Returns:
        Complete Typst document source
    """
    return ResumeToTypstConverter(template_registry).generate_document(data)
