"""
Unit tests for ResumeData -> Typst generation.

Tests entry renderers, section assembly and full document generation in
resumetyp.contexts.templating.typst_generator.
"""

import re
from dataclasses import replace

import pytest

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
)
from resumetyp.contexts.templating.typst_generator import (
    ResumeToTypstConverter,
    generate_typst,
)


@pytest.fixture
def converter():
    return ResumeToTypstConverter()


@pytest.fixture
def full_resume():
    return ResumeData(
        personal_info=PersonalInfo(
            name="Ada Lovelace",
            email="ada@example.com",
            phone="+44 20 0000",
            website="ada.dev",
            linkedin="ada",
            github="ada-l",
        ),
        profile=Profile(summary="Analyst of engines."),
        education=(
            Education(
                id="e1",
                institution="MIT",
                location="Cambridge, MA",
                degree="BS",
                major="CS",
                start_date="2020-09",
                end_date="2024-05",
                bullets=("Dean's list",),
            ),
        ),
        projects=(Project(id="p1", name="Engine", stack="Python", bullets=("Built it",)),),
        work_experience=(
            WorkExperience(
                id="w1",
                title="Engineer",
                company="Acme",
                location="Remote",
                start_date="2024-06",
                is_present=True,
                bullets=("Shipped",),
            ),
        ),
        leadership=(
            Leadership(
                id="l1",
                title="President",
                organization="Chess Club",
                location="Boston",
                start_date="2021-01",
                end_date="2022-01",
            ),
        ),
        skills=(SkillCategory(id="s1", category="Languages", skills="Python, Rust"),),
        achievements=(Achievement(id="a1", title="Hackathon Winner", date="2023"),),
    )


@pytest.mark.unit
class TestEntryRenderers:
    """Tests for per-entry renderers."""

    def test_education_block(self, converter):
        edu = Education(
            institution="MIT",
            location="Cambridge",
            degree="BS",
            major="CS",
            start_date="2020-09",
            end_date="2024-05",
            bullets=("Dean's list", "  "),
        )
        assert converter.convert_education(edu).serialize() == (
            "#education-heading(\n"
            '  "MIT",\n'
            '  "Cambridge",\n'
            '  "BS",\n'
            '  "CS",\n'
            "  datetime(year: 2020, month: 9, day: 1),\n"
            "  datetime(year: 2024, month: 5, day: 1)\n"
            ")[\n"
            "  - Dean's list\n"
            "]"
        )

    def test_work_present_ignores_end_date(self, converter):
        work = WorkExperience(
            title="Engineer", company="Acme", start_date="2023-01", end_date="2024-02", is_present=True
        )
        rendered = converter.convert_work_experience(work).serialize()
        assert '  "Present"\n)' in rendered
        assert "2024" not in rendered

    def test_work_without_bullets_keeps_heading(self, converter):
        work = WorkExperience(title="Engineer", company="Acme", bullets=("", "   "))
        rendered = converter.convert_work_experience(work).serialize()
        assert rendered.startswith("#work-heading(\n")
        assert rendered.endswith(")[\n\n]")
        assert "  - " not in rendered

    def test_blank_dates_use_today(self, converter):
        work = WorkExperience(title="Engineer")
        rendered = converter.convert_work_experience(work).serialize()
        assert rendered.count("datetime.today()") == 2

    def test_leadership_uses_work_heading(self, converter):
        lead = Leadership(
            title="Captain", organization="Rowing", location="Oxford", start_date="2019-10", is_present=True
        )
        assert converter.convert_leadership(lead).serialize() == (
            "#work-heading(\n"
            '  "Captain",\n'
            '  "Rowing",\n'
            '  "Oxford",\n'
            "  datetime(year: 2019, month: 10, day: 1),\n"
            '  "Present"\n'
            ")[\n"
            "\n"
            "]"
        )

    def test_project_block(self, converter):
        project = Project(
            name="Resume Builder",
            stack="Python | Typst",
            url="https://example.com",
            award="NexHacks 2026 (1st Place)",
            bullets=("Wrote the #generator",),
        )
        assert converter.convert_project(project).serialize() == (
            "#project-heading(\n"
            '  "Resume Builder",\n'
            '  stack: "Python | Typst",\n'
            '  project-url: "https://example.com",\n'
            '  award: "NexHacks 2026 (1st Place)"\n'
            ")[\n"
            "  - Wrote the \\#generator\n"
            "]"
        )

    def test_achievement_with_date_and_description(self, converter):
        achievement = Achievement(title="Gold", date="2024-05", description="Top of 300 teams")
        assert converter.convert_achievement(achievement).serialize() == (
            '#achievement-heading("Gold", "2024-05")[\nTop of 300 teams]'
        )

    def test_achievement_without_date_or_description(self, converter):
        achievement = Achievement(title="Gold", date="", description="   ")
        assert converter.convert_achievement(achievement).serialize() == '#achievement-heading("Gold", "")[]'

    def test_user_text_is_escaped_once(self, converter):
        edu = Education(institution='The "Best" #1 School', major="C$")
        rendered = converter.convert_education(edu).serialize()
        assert '"The \\"Best\\" \\#1 School"' in rendered
        assert '"C\\$"' in rendered
        assert "\\\\" not in rendered


@pytest.mark.unit
class TestSectionAssembly:
    """Tests for section assemblers."""

    def test_profile_blank_summary_is_empty(self, converter):
        data = ResumeData(profile=Profile(summary="   \n "))
        assert converter.render_section(SectionId.PROFILE, data) == ""

    def test_profile_section(self, converter):
        data = ResumeData(profile=Profile(summary="Builds #things"))
        assert converter.render_section(SectionId.PROFILE, data) == "= Profile\nBuilds \\#things"

    def test_empty_collection_is_empty(self, converter):
        data = ResumeData()
        for section_id in SectionId:
            assert converter.render_section(section_id, data) == ""

    def test_education_entries_joined_by_blank_line(self, converter):
        data = ResumeData(education=(Education(institution="A"), Education(institution="B")))
        rendered = converter.render_section(SectionId.EDUCATION, data)
        assert rendered.startswith("= Education\n#education-heading(")
        assert "]\n\n#education-heading(" in rendered

    def test_skills_section(self, converter):
        data = ResumeData(
            skills=(
                SkillCategory(category="Languages", skills="Python, C#"),
                SkillCategory(category="  ", skills="ignored"),
                SkillCategory(category="Tools", skills=""),
            )
        )
        assert converter.render_section(SectionId.SKILLS, data) == (
            "= Skills\n#skills[\n- *Languages:* Python, C\\#\n]"
        )

    def test_skills_all_blank_is_empty(self, converter):
        data = ResumeData(skills=(SkillCategory(category="", skills="Python"),))
        assert converter.render_section(SectionId.SKILLS, data) == ""

    def test_achievements_skip_blank_titles(self, converter):
        data = ResumeData(
            achievements=(
                Achievement(title="First"),
                Achievement(title="  ", description="orphan"),
                Achievement(title="Second"),
            )
        )
        assert converter.render_section(SectionId.ACHIEVEMENTS, data) == (
            "= Achievements / Certifications\n"
            '#achievement-heading("First", "")[]\n\n'
            '#achievement-heading("Second", "")[]'
        )

    def test_achievements_all_blank_is_empty(self, converter):
        data = ResumeData(achievements=(Achievement(title=" ", date="2024"),))
        assert converter.render_section(SectionId.ACHIEVEMENTS, data) == ""


@pytest.mark.unit
class TestGenerateDocument:
    """Tests for complete document generation."""

    def test_empty_section_order_keeps_preamble(self):
        data = ResumeData(personal_info=PersonalInfo(name="Ada"), section_order=())
        source = generate_typst(data)

        assert source.startswith('#let head-color = rgb("#22227f")\n')
        assert '#let link-color = rgb("#1d4ed8")' in source
        assert "#let font-size = 10pt" in source
        assert "#let title-size = 24pt" in source
        for helper in (
            "#let bold(body)",
            "#let link2(target, body)",
            "#let resume(",
            "#let generic_2x2(",
            "#let skills(body)",
            "#let period_worked(start-date, end-date)",
            "#let work-heading(",
            "#let project-heading(",
            "#let education-heading(",
            "#let achievement-heading(",
        ):
            assert helper in source
        assert '#show: resume.with(\n  author-name: "Ada",' in source
        assert source.endswith('  github-username: "",\n)\n\n\n')
        assert "\n= " not in source

    def test_colors_and_fonts_inlined(self):
        data = ResumeData(
            colors=ColorSettings(head_color="#000000", accent_color="#ff0000"),
            fonts=FontSettings(base_size=11, contact_size=9.5, heading_size=14, name_size=28),
            section_order=(),
        )
        source = generate_typst(data)
        assert '#let head-color = rgb("#000000")' in source
        assert '#let acct-color = rgb("#ff0000")' in source
        assert "#let font-size = 11pt" in source
        assert "#let personal-info-font-size = 9.5pt" in source
        assert "#let heading-size = 14pt" in source
        assert "#let title-size = 28pt" in source

    def test_personal_info_escaped(self):
        data = ResumeData(personal_info=PersonalInfo(name='Jo "JJ" #1', email="a$b@example.com"))
        source = generate_typst(data)
        assert 'author-name: "Jo \\"JJ\\" \\#1",' in source
        assert 'email: "a\\$b@example.com",' in source

    def test_sections_follow_order(self, full_resume):
        source = generate_typst(full_resume)
        headings = re.findall(r"^= (.+)$", source, re.MULTILINE)
        assert headings == [
            "Profile",
            "Education",
            "Projects",
            "Experience",
            "Leadership",
            "Skills",
            "Achievements / Certifications",
        ]

    def test_reordering_only_reorders(self, converter, full_resume):
        reordered = replace(full_resume, section_order=(SectionId.SKILLS, SectionId.EDUCATION))
        original = dict(converter.render_sections(full_resume))
        rendered = converter.render_sections(reordered)

        assert [section_id for section_id, _ in rendered] == [SectionId.SKILLS, SectionId.EDUCATION]
        for section_id, text in rendered:
            assert text == original[section_id]

        source = converter.generate_document(reordered)
        assert source.index("= Skills") < source.index("= Education")
        assert "= Profile" not in source

    def test_sections_joined_by_blank_line(self, converter, full_resume):
        data = replace(full_resume, section_order=(SectionId.PROFILE, SectionId.SKILLS))
        source = converter.generate_document(data)
        assert source.endswith(
            "= Profile\nAnalyst of engines.\n\n= Skills\n#skills[\n- *Languages:* Python, Rust\n]\n"
        )

    def test_listed_but_blank_section_is_omitted(self, converter):
        data = ResumeData(
            skills=(SkillCategory(category="", skills="Python"),),
            profile=Profile(summary="Hello"),
            section_order=(SectionId.SKILLS, SectionId.PROFILE),
        )
        source = converter.generate_document(data)
        assert "= Skills" not in source
        assert "#skills[" not in source
        assert [s for s, _ in converter.render_sections(data)] == [SectionId.PROFILE]

    def test_unlisted_sections_are_omitted(self, full_resume):
        data = replace(full_resume, section_order=(SectionId.PROJECTS,))
        source = generate_typst(data)
        assert "= Projects" in source
        assert "= Education" not in source
        assert "#education-heading(\n" not in source

    def test_education_scenario(self):
        data = ResumeData(
            education=(
                Education(
                    institution="MIT",
                    degree="BS",
                    major="CS",
                    start_date="2020-09",
                    end_date="2024-05",
                    is_present=False,
                    bullets=("Dean's list", "  "),
                ),
            ),
            section_order=(SectionId.EDUCATION,),
        )
        source = generate_typst(data)
        bullet_lines = [line for line in source.splitlines() if line.strip().startswith("- ")]
        assert bullet_lines == ["  - Dean's list"]
        assert "  datetime(year: 2020, month: 9, day: 1),\n  datetime(year: 2024, month: 5, day: 1)\n)[" in source

    def test_generation_is_deterministic(self, full_resume):
        assert generate_typst(full_resume) == generate_typst(full_resume)

    def test_period_worked_treats_current_month_as_present_known_quirk(self):
        """
        Known quirk: the period helper shows "Present" for any end date in the
        current year and month, even when a concrete date was entered.
        """
        source = generate_typst(ResumeData(section_order=()))
        helper = source[source.index("#let period_worked"):source.index("#let work-heading")]
        assert "end-date.month() == datetime.today().month()" in helper
        assert "end-date.year() == datetime.today().year()" in helper
        assert "Present" in helper
