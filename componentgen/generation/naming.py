"""
Component naming - maps prompt filenames to component names.

Known prompt files map through COMPONENT_MAP; anything else is normalized
from its filename. Two prompts that normalize to the same name write to
the same output file and the last one wins.
"""

from types import MappingProxyType
from typing import Mapping

PROMPT_EXTENSION = ".md"

COMPONENT_MAP: Mapping[str, str] = MappingProxyType({
    "hero.md": "Hero",
    "navigation.md": "Navigation",
    "nav.md": "Navigation",
    "header.md": "Header",
    "cards.md": "ArticleCards",
    "article-cards.md": "ArticleCards",
    "newsletter.md": "Newsletter",
    "signup.md": "Newsletter",
    "footer.md": "Footer",
    "sidebar.md": "Sidebar",
    "cta.md": "CallToAction",
    "testimonials.md": "Testimonials",
    "features.md": "Features",
    "pricing.md": "Pricing",
    "faq.md": "FAQ",
    "contact.md": "Contact",
})


def normalize_component_name(filename: str) -> str:
    """
    Derive a component name from a filename.

    random-section.md -> Randomsection
    """
    name = filename.replace(PROMPT_EXTENSION, "", 1).replace("-", "")
    return name[:1].upper() + name[1:]


def resolve_component_name(filename: str) -> str:
    """Component name for a prompt file (exact, case-sensitive table lookup first)."""
    return COMPONENT_MAP.get(filename) or normalize_component_name(filename)
