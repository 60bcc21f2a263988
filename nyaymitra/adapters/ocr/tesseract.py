"""Tesseract OCR backend.

PDFs are rasterised page by page with pdf2image (needs poppler); images are
opened with Pillow. A single ``image_to_data`` pass per page gives both the
text (rebuilt from block/paragraph/line numbers) and word confidences.
"""

from __future__ import annotations

import asyncio
from io import BytesIO

from nyaymitra.core.config import settings
from nyaymitra.core.models import MediaKind, OcrResult
from nyaymitra.adapters.ocr.base import OpticalRecognizer


def text_from_tesseract_data(data: dict) -> tuple[str, list[float]]:
    """Rebuild page text from ``pytesseract.image_to_data`` output.

    Returns the text (lines joined by newlines, blank line between blocks) and
    the confidences of every recognised word.
    """
    lines: list[str] = []
    confs: list[float] = []
    current_key = None
    current_block = None
    words: list[str] = []

    for i, word in enumerate(data.get("text", [])):
        word = (word or "").strip()
        if not word:
            continue
        key = (data["block_num"][i], data["par_num"][i], data["line_num"][i])
        if key != current_key:
            if words:
                lines.append(" ".join(words))
            if current_block is not None and key[0] != current_block:
                lines.append("")
            words = []
            current_key = key
            current_block = key[0]
        words.append(word)
        try:
            conf = float(data["conf"][i])
        except (TypeError, ValueError):
            continue
        if conf >= 0:
            confs.append(conf)
    if words:
        lines.append(" ".join(words))
    return "\n".join(lines), confs


class TesseractRecognizer(OpticalRecognizer):
    def __init__(self, dpi: int | None = None, timeout_s: float | None = None):
        self.dpi = dpi or settings.OCR_DPI
        self.timeout_s = timeout_s or settings.OCR_TIMEOUT_S

    def _pages(self, data: bytes, media_kind: MediaKind):
        from PIL import Image

        if media_kind == MediaKind.PDF:
            from pdf2image import convert_from_bytes
            return convert_from_bytes(data, dpi=self.dpi)
        img = Image.open(BytesIO(data))
        img.load()
        return [img]

    def _recognize_sync(self, data: bytes, media_kind: MediaKind, languages: str) -> OcrResult:
        import pytesseract

        if settings.TESSERACT_CMD:
            pytesseract.pytesseract.tesseract_cmd = settings.TESSERACT_CMD

        pages = self._pages(data, media_kind)
        texts: list[str] = []
        confs: list[float] = []
        try:
            for page in pages:
                # Tesseract runs as a subprocess; its own timeout kills it if the
                # awaiting side has already given up.
                out = pytesseract.image_to_data(
                    page,
                    lang=languages,
                    output_type=pytesseract.Output.DICT,
                    timeout=self.timeout_s,
                )
                text, page_confs = text_from_tesseract_data(out)
                texts.append(text)
                confs.extend(page_confs)
        finally:
            for page in pages:
                page.close()

        confidence = round(sum(confs) / len(confs), 2) if confs else 0.0
        return OcrResult(text="\n\n".join(t for t in texts if t), confidence=confidence)

    async def recognize(self, data, *, media_kind, languages) -> OcrResult:
        return await asyncio.to_thread(self._recognize_sync, data, media_kind, languages)
