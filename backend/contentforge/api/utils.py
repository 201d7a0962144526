from __future__ import annotations
"""Document and file utilities: DOCX parse/export and direct storage upload."""

import logging

from fastapi import APIRouter, File, Form, HTTPException, UploadFile
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel

from contentforge.config import get_settings
from contentforge.errors import StorageError, error_body
from contentforge.services import docx_service, storage

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter()

_PARSE_HINT = "If the problem persists, try converting to .txt format or use the paste text option."


class DocxExportRequest(BaseModel):
    title: str | None = None
    content: str | None = None


@router.get("/utils/parse-docx")
async def parse_docx_usage():
    return {
        "message": "DOCX Parser API is working",
        "method": "GET",
        "usage": "Use POST method to upload and parse .docx or .doc files",
        "supportedFormats": [".docx", ".doc"],
        "example": {
            "endpoint": "/api/utils/parse-docx",
            "method": "POST",
            "contentType": "multipart/form-data",
            "formField": "file",
        },
    }


@router.post("/utils/parse-docx")
async def parse_docx(file: UploadFile | None = File(None)):
    """Extract and normalise the text of an uploaded Word document."""
    if file is None:
        raise HTTPException(status_code=400, detail="No file provided")
    if not docx_service.is_supported_upload(file.filename, file.content_type):
        raise HTTPException(
            status_code=400,
            detail="File must be a .docx or .doc document. Supported formats: .docx, .doc",
        )

    data = await file.read()
    logger.info("Parsing %s (%s, %d bytes)", file.filename, file.content_type, len(data))

    try:
        raw_text = docx_service.extract_text(data)
    except docx_service.DocumentParseError as e:
        logger.warning("Could not parse %s: %s", file.filename, e.__cause__ or e)
        return JSONResponse(
            status_code=500,
            content=error_body(f"{e} {_PARSE_HINT}", details=str(e.__cause__ or e)),
        )

    cleaned = docx_service.clean_text(raw_text)
    if len(cleaned) < docx_service.MIN_DOCUMENT_CHARS:
        raise HTTPException(
            status_code=400,
            detail="Document appears to be empty or contains no readable text. "
                   "Please check your document and try again.",
        )

    return {
        "content": cleaned,
        "success": True,
        "metadata": {
            "originalLength": len(raw_text),
            "cleanedLength": len(cleaned),
            "filename": file.filename,
            "warnings": 0,
        },
    }


@router.get("/download-docx")
async def download_docx_usage():
    return {
        "message": "DOCX Generator API",
        "usage": "Use POST method to generate DOCX files from script content",
        "example": {
            "endpoint": "/api/download-docx",
            "method": "POST",
            "contentType": "application/json",
            "body": {"title": "Script Title", "content": "Script content with markdown formatting"},
        },
    }


@router.post("/download-docx")
async def download_docx(data: DocxExportRequest):
    """Render markdown script content as a downloadable DOCX."""
    if not data.content:
        raise HTTPException(status_code=400, detail="Content is required")

    title = data.title or "Script"
    logger.info("Generating DOCX for %s", title)
    try:
        document = docx_service.build_docx(title, data.content)
    except ValueError as e:
        logger.error("DOCX generation for %s failed: %s", title, e)
        return JSONResponse(
            status_code=500,
            content=error_body("Failed to generate DOCX document", details=str(e)),
        )
    filename = docx_service.docx_filename(data.title)

    return Response(
        content=document,
        media_type=docx_service.DOCX_MIME_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/upload-file")
async def upload_file(
    file: UploadFile | None = File(None),
    bucket: str = Form("audio"),
    path: str | None = Form(None),
):
    """Upload a client file to storage at ``bucket/path``."""
    if file is None:
        raise HTTPException(status_code=400, detail="No file provided")
    if not path:
        raise HTTPException(status_code=400, detail="No file path provided")

    data = await file.read()
    if len(data) > settings.MAX_UPLOAD_BYTES:
        limit_mb = settings.MAX_UPLOAD_BYTES // (1024 * 1024)
        raise HTTPException(
            status_code=400,
            detail=f"File size too large. Maximum {limit_mb}MB allowed.",
        )

    content_type = file.content_type or "application/octet-stream"
    logger.info("Uploading %s (%dKB) to %s/%s", file.filename, len(data) // 1024, bucket, path)
    try:
        public_url = await storage.upload_bytes(path, data, content_type, bucket=bucket)
    except StorageError as e:
        logger.error("Upload of %s failed: %s", path, e)
        return JSONResponse(status_code=500, content=error_body(f"Upload failed: {e}"))

    return {
        "success": True,
        "path": path,
        "publicUrl": public_url,
        "size": len(data),
        "type": content_type,
    }
