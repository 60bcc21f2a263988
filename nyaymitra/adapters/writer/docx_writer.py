from io import BytesIO

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Inches, Mm, Pt, RGBColor

from nyaymitra.core.config import settings
from nyaymitra.core.models import Body, Heading, NumberedItem, RenderOptions, Spacer
from nyaymitra.adapters.writer.base import DocumentWriter


def _rgb(hex_color: str) -> RGBColor:
    return RGBColor.from_string(hex_color.upper())


def _add_page_field(run) -> None:
    begin = OxmlElement("w:fldChar")
    begin.set(qn("w:fldCharType"), "begin")
    instr = OxmlElement("w:instrText")
    instr.set(qn("xml:space"), "preserve")
    instr.text = "PAGE"
    end = OxmlElement("w:fldChar")
    end.set(qn("w:fldCharType"), "end")
    run._r.append(begin)
    run._r.append(instr)
    run._r.append(end)


def _add_bottom_rule(paragraph, color: str) -> None:
    p_pr = paragraph._p.get_or_add_pPr()
    borders = OxmlElement("w:pBdr")
    bottom = OxmlElement("w:bottom")
    bottom.set(qn("w:val"), "single")
    bottom.set(qn("w:sz"), "6")
    bottom.set(qn("w:space"), "1")
    bottom.set(qn("w:color"), color)
    borders.append(bottom)
    p_pr.append(borders)


class DocxWriter(DocumentWriter):
    extension = "docx"

    def _run(self, paragraph, text: str, size: float, **fmt):
        run = paragraph.add_run(text)
        run.font.name = self.style.font_family
        run.font.size = Pt(size)
        run.bold = fmt.get("bold")
        run.italic = fmt.get("italic")
        if fmt.get("color"):
            run.font.color.rgb = _rgb(fmt["color"])
        return run

    def _setup(self, doc, options: RenderOptions) -> None:
        s = self.style
        normal = doc.styles["Normal"]
        normal.font.name = s.font_family
        normal.font.size = Pt(s.body_pt)
        normal.paragraph_format.line_spacing = s.line_spacing
        # complex-script font so Devanagari runs get a font that has the glyphs
        rfonts = normal.element.get_or_add_rPr().get_or_add_rFonts()
        rfonts.set(qn("w:cs"), settings.DOCX_COMPLEX_SCRIPT_FONT)

        section = doc.sections[0]
        section.page_width = Mm(s.page_width_mm)
        section.page_height = Mm(s.page_height_mm)
        section.top_margin = section.bottom_margin = Inches(s.margin_in)
        section.left_margin = section.right_margin = Inches(s.margin_in)

        if options.title:
            header = section.header.paragraphs[0]
            header.alignment = WD_ALIGN_PARAGRAPH.RIGHT
            self._run(header, options.title, s.header_pt, italic=True, color=s.header_color)

        footer = section.footer.paragraphs[0]
        footer.alignment = WD_ALIGN_PARAGRAPH.CENTER
        self._run(footer, "Page ", s.footer_pt)
        _add_page_field(self._run(footer, "", s.footer_pt))

        core = doc.core_properties
        core.title = options.title or "Legal Document"
        core.author = "NyayMitra"
        core.subject = options.document_type or "Legal Document"

    def write(self, nodes, options, disclaimer) -> bytes:
        s = self.style
        doc = Document()
        self._setup(doc, options)

        for node in nodes:
            if isinstance(node, Spacer):
                p = doc.add_paragraph()
                p.paragraph_format.space_before = Pt(6)
            elif isinstance(node, Heading):
                p = doc.add_paragraph()
                p.alignment = WD_ALIGN_PARAGRAPH.CENTER
                p.paragraph_format.space_before = Pt(12)
                p.paragraph_format.space_after = Pt(6)
                self._run(p, node.text, s.heading_pt, bold=True)
            elif isinstance(node, NumberedItem):
                p = doc.add_paragraph()
                p.paragraph_format.space_before = Pt(6)
                p.paragraph_format.space_after = Pt(3)
                p.paragraph_format.left_indent = Inches(s.numbered_indent_in)
                p.paragraph_format.first_line_indent = Inches(-s.numbered_hanging_in)
                self._run(p, f"{node.index}. {node.text}", s.body_pt)
            elif isinstance(node, Body):
                p = doc.add_paragraph()
                p.alignment = WD_ALIGN_PARAGRAPH.JUSTIFY
                p.paragraph_format.space_before = Pt(3)
                p.paragraph_format.space_after = Pt(3)
                self._run(p, node.text, s.body_pt)

        gap = doc.add_paragraph()
        gap.paragraph_format.space_before = Pt(30)
        rule = doc.add_paragraph()
        _add_bottom_rule(rule, s.rule_color)
        for block in disclaimer.split("\n\n"):
            p = doc.add_paragraph()
            p.alignment = WD_ALIGN_PARAGRAPH.JUSTIFY
            p.paragraph_format.space_before = Pt(10)
            self._run(p, block, s.disclaimer_pt, italic=True, color=s.disclaimer_color)

        buf = BytesIO()
        doc.save(buf)
        return buf.getvalue()
