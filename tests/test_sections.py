from conftest import SAMPLE_EXPLANATION

from nyaymitra.legal.sections import SECTION_HEADINGS, parse_sections

SLOTS = [key for key, _, _ in SECTION_HEADINGS]


def _is_subsequence(parts, text):
    pos = 0
    for part in parts:
        idx = text.find(part, pos)
        if idx < 0:
            return False
        pos = idx + len(part)
    return True


def test_parses_all_six_sections():
    sections = parse_sections(SAMPLE_EXPLANATION)

    assert "Civil Judge" in sections.about
    assert "Ram Prasad" in sections.about
    assert "Khasra No. 456" in sections.important_points
    assert "encroached" in sections.important_points
    assert "remove the encroachment" in sections.directions
    assert "Rs. 50,000" in sections.directions
    assert "15 January 2025" in sections.deadlines
    assert "28 February 2025" in sections.deadlines
    assert "execution petition" in sections.next_steps
    assert "Order XXI CPC" in sections.next_steps
    assert "AI-generated" in sections.disclaimer


def test_all_slots_non_empty_and_in_order():
    sections = parse_sections(SAMPLE_EXPLANATION)
    parts = [getattr(sections, key) for key in SLOTS]
    assert all(parts)
    assert _is_subsequence(parts, SAMPLE_EXPLANATION)


def test_deadlines_is_text_between_headings_four_and_five():
    start = SAMPLE_EXPLANATION.index("## 4. DEADLINES AND DATES\n") + len("## 4. DEADLINES AND DATES\n")
    end = SAMPLE_EXPLANATION.index("## 5. NEXT PROCEDURAL STEPS")
    assert parse_sections(SAMPLE_EXPLANATION).deadlines == SAMPLE_EXPLANATION[start:end].strip()


def test_only_first_heading_present():
    sections = parse_sections("## 1. WHAT THIS DOCUMENT IS ABOUT\nSome text here.")
    assert sections.about == "Some text here."
    for key in SLOTS[1:]:
        assert getattr(sections, key) == ""


def test_missing_section_does_not_hide_later_ones():
    text = SAMPLE_EXPLANATION.replace("## 2. IMPORTANT POINTS", "IMPORTANT POINTS (no marker)")
    sections = parse_sections(text)
    assert sections.important_points == ""
    assert "Rs. 50,000" in sections.directions
    assert "15 January 2025" in sections.deadlines
    # the stray text stays with the previous section, never the next one
    assert "Khasra No. 456" in sections.about
    assert "remove the encroachment" not in sections.about


def test_heading_level_and_crlf_tolerated():
    text = "### 1. WHAT THIS DOCUMENT IS ABOUT\r\nA notice.\r\n### 6. DISCLAIMER\r\nNot advice."
    sections = parse_sections(text)
    assert sections.about == "A notice."
    assert sections.disclaimer == "Not advice."


def test_empty_text_gives_empty_sections():
    sections = parse_sections("")
    assert all(getattr(sections, key) == "" for key in SLOTS)
