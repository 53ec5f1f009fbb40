"""
Section Lookup
Locates the text of a named proposal section.

Proposal structure arrives in whatever shape the editor produced: a mapping
of section names to text (names may not match the funder's exactly) and/or a
single markdown document. Strategies are tried in precedence order and the
first one that finds non-empty text wins:

1. exact name match in the section map
2. case-insensitive substring match, either direction, against map keys
3. markdown heading scan of the full proposal text
"""

import re
from typing import Callable, Mapping, Optional

SectionStrategy = Callable[[Optional[Mapping[str, str]], Optional[str], str], Optional[str]]


def match_exact(
    sections: Optional[Mapping[str, str]],
    full_text: Optional[str],
    section_name: str,
) -> Optional[str]:
    """Return the section stored under exactly ``section_name``."""
    if not sections:
        return None
    return sections.get(section_name) or None


def match_fuzzy(
    sections: Optional[Mapping[str, str]],
    full_text: Optional[str],
    section_name: str,
) -> Optional[str]:
    """
    Return the first section whose key contains the name, or is contained by it.

    "Case for Support" matches a key "1. Case for Support (max 6 pages)" and
    "Impact" matches "Pathways to Impact". Blank keys are ignored.
    """
    if not sections:
        return None

    wanted = section_name.lower()
    for key, text in sections.items():
        candidate = key.strip().lower()
        if not candidate:
            continue
        if wanted in candidate or candidate in wanted:
            return text or None
    return None


def heading_pattern(section_name: str) -> re.Pattern:
    """
    Pattern for a markdown section: heading marker, optional numbering, the
    name, then everything up to the next heading or the end of the text.
    """
    return re.compile(
        rf"(?:^|\n)#+\s*(?:\d+\.?\s*)?{re.escape(section_name)}[\s\S]*?(?=\n#+\s|\Z)",
        re.IGNORECASE,
    )


def match_heading(
    sections: Optional[Mapping[str, str]],
    full_text: Optional[str],
    section_name: str,
) -> Optional[str]:
    """Extract the section from markdown headings in the full text."""
    if not full_text:
        return None
    match = heading_pattern(section_name).search(full_text)
    return match.group(0) if match else None


SECTION_STRATEGIES: tuple[SectionStrategy, ...] = (match_exact, match_fuzzy, match_heading)


def find_section(
    sections: Optional[Mapping[str, str]],
    full_text: Optional[str],
    section_name: str,
) -> Optional[str]:
    """
    Find a section's text using the first strategy that succeeds.

    Args:
        sections: Mapping of section name to text (may be None)
        full_text: Complete proposal text (may be None)
        section_name: Section name declared by the funder scheme

    Returns:
        Section text, or None if no strategy found it
    """
    for strategy in SECTION_STRATEGIES:
        text = strategy(sections, full_text, section_name)
        if text:
            return text
    return None
