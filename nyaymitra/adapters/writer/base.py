from abc import ABC, abstractmethod
from dataclasses import dataclass

from nyaymitra.core.models import Node, RenderOptions


@dataclass(frozen=True)
class PageStyle:
    """Geometry and typography shared by every output format."""

    font_family: str = "Times New Roman"
    body_pt: float = 12
    heading_pt: float = 13
    header_pt: float = 9
    footer_pt: float = 9
    rule_pt: float = 9
    disclaimer_pt: float = 8
    line_spacing: float = 1.5
    # A4 in millimetres
    page_width_mm: float = 210
    page_height_mm: float = 297
    margin_in: float = 1.0
    numbered_indent_in: float = 0.5
    numbered_hanging_in: float = 0.25
    header_color: str = "888888"
    rule_color: str = "999999"
    disclaimer_color: str = "666666"


DEFAULT_STYLE = PageStyle()


class DocumentWriter(ABC):
    extension: str

    def __init__(self, style: PageStyle = DEFAULT_STYLE):
        self.style = style

    @abstractmethod
    def write(self, nodes: list[Node], options: RenderOptions, disclaimer: str) -> bytes:
        ...
