"""
Prompts for component generation.

The fixed system prompt sent with every chat, and extraction of the
instruction payload from a prompt document.
"""

import logging
from typing import Optional

logger = logging.getLogger("componentgen.generation.prompts")


# Prompt documents carry a header (title, notes) above this marker;
# only the text after it is sent to v0.
PROMPT_SEPARATOR = "---"


SYSTEM_PROMPT = """You are an expert React developer specializing in modern, accessible UI components.
Generate clean, production-ready components using:
- React functional components with hooks
- Tailwind CSS for styling
- Lucide React for icons
- Proper TypeScript types
- Mobile-first responsive design
- Semantic HTML and ARIA attributes

Export the main component as default."""


def extract_prompt(content: str, separator: str = PROMPT_SEPARATOR) -> Optional[str]:
    """
    Extract the instruction payload from a prompt document.

    Everything after the first separator is the payload; later separators
    are part of it. Without a separator the whole document is the payload.

    Args:
        content: Raw document text
        separator: Marker between header and payload

    Returns:
        The trimmed payload, or None if it is empty
    """
    parts = content.split(separator)
    if len(parts) < 2:
        prompt = content.strip()
    else:
        prompt = separator.join(parts[1:]).strip()

    if not prompt:
        logger.debug("Prompt document has no payload")
        return None
    return prompt
