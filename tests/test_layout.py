from nyaymitra.core.models import Body, Heading, NumberedItem, Spacer
from nyaymitra.legal.layout import classify, classify_line

DRAFT = """IN THE COURT OF THE CHIEF JUDICIAL MAGISTRATE, LUCKNOW

To,
The Station House Officer,
1. The facts are as follows
2.The accused entered the house at night.

PRAYER
It is therefore prayed that the FIR be registered."""


def test_heading():
    assert classify_line("PRAYER") == Heading(text="PRAYER")


def test_numbered_item_keeps_index_and_text():
    node = classify_line("1. The facts are as follows")
    assert node == NumberedItem(index=1, text="The facts are as follows")
    assert classify_line("12.No space after the dot") == NumberedItem(index=12, text="No space after the dot")


def test_blank_and_whitespace_lines_are_spacers():
    assert classify_line("") == Spacer()
    assert classify_line("   \t") == Spacer()


def test_body():
    assert classify_line("I am writing to request...") == Body(text="I am writing to request...")


def test_short_caps_are_not_headings():
    # length threshold is > 3 characters
    assert classify_line("FIR") == Body(text="FIR")
    assert classify_line("SHO:") == Heading(text="SHO:")


def test_lines_without_letters_are_not_headings():
    assert classify_line("----") == Body(text="----")
    assert classify_line("12.") == NumberedItem(index=12, text="")


def test_caps_check_wins_over_numbering():
    assert classify_line("1. FACTS OF THE CASE") == Heading(text="1. FACTS OF THE CASE")


def test_devanagari_lines_are_body():
    line = "मैं थाना सिविल लाइन्स में शिकायत दर्ज कराना चाहता हूँ"
    assert classify_line(line) == Body(text=line)


def test_lines_are_trimmed():
    assert classify_line("   PRAYER   ") == Heading(text="PRAYER")
    assert classify_line("  Respected Sir,\r") == Body(text="Respected Sir,")


def test_classify_document():
    nodes = classify(DRAFT)
    assert nodes == [
        Heading(text="IN THE COURT OF THE CHIEF JUDICIAL MAGISTRATE, LUCKNOW"),
        Spacer(),
        Body(text="To,"),
        Body(text="The Station House Officer,"),
        NumberedItem(index=1, text="The facts are as follows"),
        NumberedItem(index=2, text="The accused entered the house at night."),
        Spacer(),
        Heading(text="PRAYER"),
        Body(text="It is therefore prayed that the FIR be registered."),
    ]


def test_classification_is_deterministic():
    assert classify(DRAFT) == classify(DRAFT)


def test_control_characters_are_removed():
    assert classify_line("The accused\x0bfled.") == Body(text="The accused fled.")
    assert classify_line("Page 1\x00end") == Body(text="Page 1end")
    assert classify_line("PRAYER\x07") == Heading(text="PRAYER")
    assert classify_line("\x00\x01") == Spacer()
    # tabs survive
    assert classify_line("Name:\tRamesh") == Body(text="Name:\tRamesh")
