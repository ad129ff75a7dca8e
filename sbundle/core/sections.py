"""
Section gate - decides whether a build phase runs.

The section list is scanned left to right and the first entry that is
``none``, ``all`` or the section name itself decides. This is not a set
membership test: ``["none", "all"]`` disables every phase while
``["all", "none"]`` enables every phase.
"""

from typing import Iterable

from sbundle.constants import SECTION_ALL, SECTION_NONE


def should_run(section: str, sections: Iterable[str]) -> bool:
    """Return True if ``section`` should execute for the given section list."""
    for entry in sections:
        if entry == SECTION_NONE:
            return False
        if entry == SECTION_ALL or entry == section:
            return True
    return False


def selected_sections(candidates: Iterable[str], sections: Iterable[str]) -> list[str]:
    """Filter ``candidates`` down to the phases that would run, keeping order."""
    sections = list(sections)
    return [name for name in candidates if should_run(name, sections)]
