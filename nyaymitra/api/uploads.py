from pathlib import Path

from fastapi import HTTPException, UploadFile

from nyaymitra.core.models import SourceArtifact
from nyaymitra.services.extract_service import IMAGE_EXTS, detect_media_kind

DOCUMENT_EXTS = (".pdf",) + IMAGE_EXTS


async def read_upload(file: UploadFile, *, allowed: tuple[str, ...], max_bytes: int, language: str) -> SourceArtifact:
    # Keep only the base name; the bytes never touch disk.
    name = Path(file.filename or "upload").name
    ext = Path(name).suffix.lower()
    if ext not in allowed:
        raise HTTPException(
            status_code=415,
            detail={"error": f"Format {ext or 'unknown'} not supported. Use: {', '.join(allowed)}",
                    "code": "unsupported_format", "stage": None},
        )
    data = await file.read()
    if len(data) > max_bytes:
        raise HTTPException(status_code=413, detail=f"File too large (limit {max_bytes // (1024 * 1024)}MB)")
    return SourceArtifact(data=data, media_kind=detect_media_kind(name), language=language, filename=name)

