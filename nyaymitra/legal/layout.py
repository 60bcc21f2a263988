"""Line classification shared by the DOCX and PDF writers.

The rules are deliberately literal: a blank line is a spacer; an all-caps
line longer than 3 characters is a heading; ``N.`` at the start of a line is
a numbered item; everything else is body text.
"""

import re

from nyaymitra.core.models import Body, Heading, Node, NumberedItem, Spacer

NUMBERED_RE = re.compile(r"^(\d+)\.\s*(.*)$", re.DOTALL)
# Vertical tab and form feed separate words in pasted text; the other
# C0 controls (and U+FFFE/U+FFFF) cannot be stored in DOCX XML at all.
BREAK_CHARS_RE = re.compile(r"[\x0b\x0c]")
XML_INVALID_RE = re.compile(r"[\x00-\x08\x0e-\x1f\ufffe\uffff]")


def is_heading(line: str) -> bool:
    # Devanagari has no case, so a Hindi line never counts as a heading.
    return len(line) > 3 and line == line.upper() and any(c.isupper() for c in line)


def clean_line(raw: str) -> str:
    return XML_INVALID_RE.sub("", BREAK_CHARS_RE.sub(" ", raw)).strip()


def classify_line(raw: str) -> Node:
    line = clean_line(raw)
    if not line:
        return Spacer()
    if is_heading(line):
        return Heading(text=line)
    m = NUMBERED_RE.match(line)
    if m:
        return NumberedItem(index=int(m.group(1)), text=m.group(2))
    return Body(text=line)


def classify(text: str) -> list[Node]:
    return [classify_line(line) for line in (text or "").split("\n")]
