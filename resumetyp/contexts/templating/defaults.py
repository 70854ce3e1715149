"""
Default values for resume data.

Provides shared defaults used by:
- resume_data_structure.py (dataclass field defaults)
- the loader (missing keys in a resume document)
"""

from typing import Any, Dict

# Default color scheme (navy headings on near-black body text)
DEFAULT_COLORS = {
    "head_color": "#22227f",
    "text_color": "#1b1b1b",
    "accent_color": "#22328A",
    "link_color": "#1d4ed8",
}

# Point sizes
DEFAULT_FONTS = {
    "base_size": 10,
    "contact_size": 10,
    "heading_size": 12,
    "name_size": 24,
}

DEFAULT_SECTION_ORDER = [
    "profile",
    "education",
    "projects",
    "experience",
    "leadership",
    "skills",
    "achievements",
]

SECTION_LABELS = {
    "profile": "Profile",
    "education": "Education",
    "projects": "Projects",
    "experience": "Experience",
    "leadership": "Leadership",
    "skills": "Skills",
    "achievements": "Achievements",
}

# Headings emitted into the document where they differ from SECTION_LABELS
SECTION_HEADINGS = {
    **SECTION_LABELS,
    "achievements": "Achievements / Certifications",
}

DEFAULT_OUTPUT_FILENAME = "resume.pdf"


def get_default_resume_dict() -> Dict[str, Any]:
    """
    Get an empty resume document in the camelCase shape the form layer produces.

    Returns:
        Dict with every top-level key present and empty content
    """
    return {
        "personalInfo": {
            "name": "",
            "phone": "",
            "location": "",
            "email": "",
            "website": "",
            "linkedin": "",
            "github": "",
        },
        "profile": {"summary": ""},
        "education": [],
        "projects": [],
        "workExperience": [],
        "leadership": [],
        "skills": [],
        "achievements": [],
        "colors": {
            "headColor": DEFAULT_COLORS["head_color"],
            "textColor": DEFAULT_COLORS["text_color"],
            "accentColor": DEFAULT_COLORS["accent_color"],
            "linkColor": DEFAULT_COLORS["link_color"],
        },
        "fonts": {
            "baseSize": DEFAULT_FONTS["base_size"],
            "contactSize": DEFAULT_FONTS["contact_size"],
            "headingSize": DEFAULT_FONTS["heading_size"],
            "nameSize": DEFAULT_FONTS["name_size"],
        },
        "sectionOrder": list(DEFAULT_SECTION_ORDER),
    }
