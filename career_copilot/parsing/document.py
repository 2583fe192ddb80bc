"""Document-to-text conversion for uploaded resumes (.txt, .pdf, .docx)."""

from __future__ import annotations

from io import BytesIO
from pathlib import PurePath
from zipfile import BadZipFile

from docx import Document
from docx.opc.exceptions import PackageNotFoundError
from pypdf import PdfReader
from pypdf.errors import PdfReadError

from .models import ParsedDoc


class UnsupportedDocumentError(ValueError):
    pass


def _parse_txt(content: bytes) -> tuple[str, list[str]]:
    warnings: list[str] = []
    try:
        text = content.decode("utf-8")
    except UnicodeDecodeError:
        text = content.decode("utf-8", errors="replace")
        warnings.append("Text file is not valid UTF-8; undecodable bytes were replaced.")
    return text.lstrip("\ufeff"), warnings


def _parse_pdf(content: bytes) -> tuple[str, list[str]]:
    warnings: list[str] = []

    try:
        reader = PdfReader(BytesIO(content))
        text_parts: list[str] = []
        for page in reader.pages:
            page_text = (page.extract_text() or "").strip()
            if page_text:
                text_parts.append(page_text)
    except (PdfReadError, ValueError, OSError) as exc:
        warnings.append(f"PDF parsing failed: {exc}")
        return "", warnings

    if not text_parts:
        warnings.append("No extractable text found in PDF.")
    return "\n".join(text_parts), warnings


def _parse_docx(content: bytes) -> tuple[str, list[str]]:
    warnings: list[str] = []

    try:
        document = Document(BytesIO(content))
    except (PackageNotFoundError, BadZipFile, KeyError, ValueError) as exc:
        warnings.append(f"DOCX parsing failed: {exc}")
        return "", warnings

    paragraphs = [p.text.strip() for p in document.paragraphs if p.text and p.text.strip()]
    if not paragraphs:
        warnings.append("No extractable text found in DOCX.")
    return "\n".join(paragraphs), warnings


def source_type_for(filename: str, content_type: str | None = None) -> str:
    extension = PurePath(filename or "").suffix.lower()
    if extension in {".txt", ".pdf", ".docx"}:
        return extension[1:]
    if content_type == "text/plain":
        return "txt"
    if content_type == "application/pdf":
        return "pdf"
    raise UnsupportedDocumentError(
        f"Unsupported file type '{extension or content_type or 'unknown'}'. Supported types: .txt, .pdf, .docx"
    )


def parse_document(content: bytes, filename: str, content_type: str | None = None) -> ParsedDoc:
    source_type = source_type_for(filename, content_type)
    if source_type == "txt":
        text, warnings = _parse_txt(content)
    elif source_type == "pdf":
        text, warnings = _parse_pdf(content)
    else:
        text, warnings = _parse_docx(content)

    return ParsedDoc(
        filename=filename,
        source_type=source_type,
        text=text.strip(),
        parsing_warnings=warnings,
    )
