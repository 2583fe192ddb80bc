from __future__ import annotations

from fastapi import APIRouter, File, HTTPException, UploadFile, status

from career_copilot.core.config import settings
from career_copilot.parsing import UnsupportedDocumentError, parse_document
from career_copilot.schemas import ApiResponse, ParsedFile
from career_copilot.services.resume_validation import check_resume_text

router = APIRouter()

_READ_CHUNK = 1024 * 64


@router.post("/upload/parse-file", response_model=ApiResponse[ParsedFile])
async def parse_file_endpoint(file: UploadFile = File(...)):
    filename = file.filename or "uploaded-file"
    max_bytes = settings.max_upload_bytes

    chunks: list[bytes] = []
    total = 0
    while True:
        chunk = await file.read(_READ_CHUNK)
        if not chunk:
            break
        total += len(chunk)
        if total > max_bytes:
            raise HTTPException(
                status_code=413,
                detail=f"File too large. Maximum allowed size is {max_bytes // (1024 * 1024)} MB.",
            )
        chunks.append(chunk)

    try:
        parsed = parse_document(b"".join(chunks), filename, file.content_type)
    except UnsupportedDocumentError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    if not parsed.text:
        reason = parsed.parsing_warnings[0] if parsed.parsing_warnings else "The file contains no text."
        raise HTTPException(
            status_code=422,
            detail=f"Could not extract text from '{filename}'. {reason}",
        )

    return ApiResponse[ParsedFile](
        data=ParsedFile(
            filename=filename,
            source_type=parsed.source_type,
            text=parsed.text,
            characters=len(parsed.text),
            warnings=parsed.parsing_warnings,
            resume_check=check_resume_text(parsed.text),
        )
    )
