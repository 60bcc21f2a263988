"""Split a generated explanation into its six named sections.

Each heading is located by its own anchored pattern, so a missing or garbled
heading only empties its own slot. A section runs from the end of its heading
line to the next later canonical heading that is present, or to the end of
the text.
"""

import re

from nyaymitra.core.models import ExplanationSections

SECTION_HEADINGS = (
    ("about", 1, "WHAT THIS DOCUMENT IS ABOUT"),
    ("important_points", 2, "IMPORTANT POINTS"),
    ("directions", 3, "DIRECTIONS / ORDERS"),
    ("deadlines", 4, "DEADLINES AND DATES"),
    ("next_steps", 5, "NEXT PROCEDURAL STEPS"),
    ("disclaimer", 6, "DISCLAIMER"),
)


def _section_pattern(number: int, title: str) -> re.Pattern:
    later = "".join(str(n) for n in range(number + 1, len(SECTION_HEADINGS) + 1))
    stop = rf"(?=^\#+[ \t]*[{later}]\.|\Z)" if later else r"\Z"
    return re.compile(
        rf"^\#+[ \t]*{number}\.[ \t]*{re.escape(title)}[ \t]*\n(.*?){stop}",
        re.MULTILINE | re.DOTALL,
    )


_PATTERNS = [(key, _section_pattern(n, title)) for key, n, title in SECTION_HEADINGS]


def parse_sections(text: str) -> ExplanationSections:
    text = (text or "").replace("\r\n", "\n")
    found = {}
    for key, pattern in _PATTERNS:
        m = pattern.search(text)
        found[key] = m.group(1).strip() if m else ""
    return ExplanationSections(**found)
