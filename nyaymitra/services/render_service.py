import logging
import os
import uuid

from nyaymitra.adapters.writer.base import DocumentWriter
from nyaymitra.adapters.writer.docx_writer import DocxWriter
from nyaymitra.adapters.writer.pdf_writer import PdfWriter
from nyaymitra.core.errors import RenderError
from nyaymitra.core.models import ExportFormat, RenderedArtifact, RenderOptions
from nyaymitra.legal.disclaimer import get_disclaimer
from nyaymitra.legal.layout import classify, clean_line

logger = logging.getLogger(__name__)


class DocumentRenderer:
    def __init__(self, writers: dict[ExportFormat, DocumentWriter] | None = None):
        self.writers = writers or {
            ExportFormat.DOCX: DocxWriter(),
            ExportFormat.PDF: PdfWriter(),
        }

    def render(
        self,
        text: str,
        fmt: ExportFormat | str,
        options: RenderOptions | None = None,
        output_dir: str | None = None,
    ) -> RenderedArtifact:
        fmt = ExportFormat(fmt)
        options = options or RenderOptions()
        if options.title:
            options = options.model_copy(update={"title": clean_line(options.title)})
        writer = self.writers[fmt]

        nodes = classify(text)
        content = writer.write(nodes, options, get_disclaimer(options.language))
        filename = f"{uuid.uuid4()}.{writer.extension}"

        path = None
        if output_dir:
            path = os.path.join(output_dir, filename)
            try:
                os.makedirs(output_dir, exist_ok=True)
                with open(path, "wb") as f:
                    f.write(content)
            except OSError as e:
                logger.error("Failed to write %s: %s", path, e)
                raise RenderError(f"Failed to write {filename}: {e}") from e

        logger.info("%s generated filename=%s size=%d", fmt.value.upper(), filename, len(content))
        return RenderedArtifact(content=content, format=fmt, filename=filename, size=len(content), path=path)
