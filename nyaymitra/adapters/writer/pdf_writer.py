import os
from io import BytesIO
from pathlib import Path
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER, TA_JUSTIFY, TA_LEFT
from reportlab.lib.styles import ParagraphStyle
from reportlab.lib.units import inch, mm
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFError, TTFont
from reportlab.platypus import HRFlowable, Paragraph, SimpleDocTemplate, Spacer as SpaceFlowable

from nyaymitra.core.config import settings
from nyaymitra.core.errors import RenderError, RenderErrorKind
from nyaymitra.core.models import Body, Heading, NumberedItem, Spacer
from nyaymitra.adapters.writer.base import DocumentWriter

# PDF base-14 Times family; same face as "Times New Roman" in the DOCX output.
# It only has glyphs for the cp1252 (Western Latin) range.
_TIMES = ("Times-Roman", "Times-Bold", "Times-Italic")
_TIMES_ENCODING = "cp1252"

# (regular, bold, italic) files with Devanagari coverage, as installed by the
# Debian/Ubuntu fonts-freefont-ttf, fonts-noto and fonts-lohit-deva packages.
SYSTEM_UNICODE_FONTS = (
    (
        "/usr/share/fonts/truetype/freefont/FreeSerif.ttf",
        "/usr/share/fonts/truetype/freefont/FreeSerifBold.ttf",
        "/usr/share/fonts/truetype/freefont/FreeSerifItalic.ttf",
    ),
    (
        "/usr/share/fonts/truetype/noto/NotoSerifDevanagari-Regular.ttf",
        "/usr/share/fonts/truetype/noto/NotoSerifDevanagari-Bold.ttf",
        None,
    ),
    ("/usr/share/fonts/truetype/lohit-devanagari/Lohit-Devanagari.ttf", None, None),
)


def needs_unicode_font(*texts: str | None) -> bool:
    for text in texts:
        try:
            (text or "").encode(_TIMES_ENCODING)
        except UnicodeEncodeError:
            return True
    return False


def _unicode_font_files() -> tuple[str, str | None, str | None] | None:
    if settings.PDF_UNICODE_FONT_PATH:
        return (
            settings.PDF_UNICODE_FONT_PATH,
            settings.PDF_UNICODE_BOLD_FONT_PATH,
            settings.PDF_UNICODE_ITALIC_FONT_PATH,
        )
    for regular, bold, italic in SYSTEM_UNICODE_FONTS:
        if os.path.exists(regular):
            return (
                regular,
                bold if bold and os.path.exists(bold) else None,
                italic if italic and os.path.exists(italic) else None,
            )
    return None


def _register(path: str) -> str:
    name = f"NyayMitra-{Path(path).stem}"
    if name not in pdfmetrics.getRegisteredFontNames():
        try:
            pdfmetrics.registerFont(TTFont(name, path))
        except (OSError, TTFError) as e:
            raise RenderError(f"Cannot load PDF font {path}: {e}", RenderErrorKind.FONT_UNAVAILABLE) from e
    return name


def font_faces(unicode_text: bool) -> tuple[str, str, str]:
    """Return (regular, bold, italic) font names for a document.

    A configured TTF family is always used; otherwise Times is kept for Latin
    text and an installed system font is looked up for anything else.
    """
    if not unicode_text and not settings.PDF_UNICODE_FONT_PATH:
        return _TIMES
    files = _unicode_font_files()
    if files is None:
        raise RenderError(
            "Document contains non-Latin text but no Unicode PDF font is available; "
            "set PDF_UNICODE_FONT_PATH to a TTF with Devanagari coverage",
            RenderErrorKind.FONT_UNAVAILABLE,
        )
    regular_path, bold_path, italic_path = files
    regular = _register(regular_path)
    bold = _register(bold_path) if bold_path else regular
    italic = _register(italic_path) if italic_path else regular
    pdfmetrics.registerFontFamily(regular, normal=regular, bold=bold, italic=italic, boldItalic=bold)
    return regular, bold, italic


def _color(hex_color: str):
    return colors.HexColor(f"#{hex_color}")


class PdfWriter(DocumentWriter):
    extension = "pdf"

    def _styles(self, regular: str, bold: str, italic: str) -> dict[str, ParagraphStyle]:
        s = self.style
        leading = s.body_pt * s.line_spacing
        return {
            "heading": ParagraphStyle(
                "heading", fontName=bold, fontSize=s.heading_pt, leading=s.heading_pt * s.line_spacing,
                alignment=TA_CENTER, spaceBefore=12, spaceAfter=6,
            ),
            "numbered": ParagraphStyle(
                "numbered", fontName=regular, fontSize=s.body_pt, leading=leading, alignment=TA_LEFT,
                leftIndent=s.numbered_indent_in * inch, firstLineIndent=-s.numbered_hanging_in * inch,
                spaceBefore=6, spaceAfter=3,
            ),
            "body": ParagraphStyle(
                "body", fontName=regular, fontSize=s.body_pt, leading=leading, alignment=TA_JUSTIFY,
                spaceBefore=3, spaceAfter=3,
            ),
            "disclaimer": ParagraphStyle(
                "disclaimer", fontName=italic, fontSize=s.disclaimer_pt, leading=s.disclaimer_pt * 1.3,
                alignment=TA_JUSTIFY, textColor=_color(s.disclaimer_color), spaceBefore=10,
            ),
        }

    def write(self, nodes, options, disclaimer) -> bytes:
        s = self.style
        texts = [getattr(node, "text", "") for node in nodes]
        regular, bold, italic = font_faces(needs_unicode_font(options.title, disclaimer, *texts))
        styles = self._styles(regular, bold, italic)
        page_size = (s.page_width_mm * mm, s.page_height_mm * mm)
        margin = s.margin_in * inch

        def decorate(canvas, doc):
            canvas.saveState()
            width, height = page_size
            canvas.setFont(regular, s.footer_pt)
            canvas.drawCentredString(width / 2, margin / 2, f"Page {canvas.getPageNumber()}")
            if options.title:
                canvas.setFont(italic, s.header_pt)
                canvas.setFillColor(_color(s.header_color))
                canvas.drawRightString(width - margin, height - margin / 2, options.title)
            canvas.restoreState()

        story = []
        for node in nodes:
            if isinstance(node, Spacer):
                story.append(SpaceFlowable(1, 6))
            elif isinstance(node, Heading):
                story.append(Paragraph(escape(node.text), styles["heading"]))
            elif isinstance(node, NumberedItem):
                story.append(Paragraph(escape(f"{node.index}. {node.text}"), styles["numbered"]))
            elif isinstance(node, Body):
                story.append(Paragraph(escape(node.text), styles["body"]))

        story.append(SpaceFlowable(1, 30))
        story.append(HRFlowable(width="100%", thickness=0.75, color=_color(s.rule_color)))
        for block in disclaimer.split("\n\n"):
            story.append(Paragraph(escape(block), styles["disclaimer"]))

        buf = BytesIO()
        doc = SimpleDocTemplate(
            buf,
            pagesize=page_size,
            leftMargin=margin,
            rightMargin=margin,
            topMargin=margin,
            bottomMargin=margin,
            title=options.title or "Legal Document",
            author="NyayMitra",
            subject=options.document_type or "Legal Document",
        )
        doc.build(story, onFirstPage=decorate, onLaterPages=decorate)
        return buf.getvalue()
