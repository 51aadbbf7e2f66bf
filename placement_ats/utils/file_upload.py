"""
File Upload Utility - Extract text from resume and JD files.

Supported formats:
- PDF (.pdf) using PyPDF2
- Word (.docx) using python-docx
- Plain Text (.txt)

Max file size comes from Settings. Callers that need a minimum amount of
text (resume uploads) pass min_length.
"""

import io
from typing import Optional, Tuple
from zipfile import BadZipFile

from docx import Document
from docx.opc.exceptions import PackageNotFoundError
from fastapi import UploadFile
from PyPDF2 import PdfReader
from PyPDF2.errors import PdfReadError

from placement_ats.core.config import get_settings
from placement_ats.core.exceptions import DocumentExtractionError
from placement_ats.core.logging_config import get_logger

logger = get_logger(__name__)

ALLOWED_EXTENSIONS = {'.pdf', '.docx', '.txt'}
TEXT_ENCODINGS = ('utf-8', 'latin-1', 'cp1252')


def get_file_extension(filename: str) -> str:
    """Get lowercase file extension."""
    if '.' not in filename:
        return ''
    return '.' + filename.rsplit('.', 1)[1].lower()


async def extract_text_from_file(file: UploadFile, min_length: Optional[int] = None) -> Tuple[str, str]:
    """
    Extract text from uploaded file.

    Args:
        file: FastAPI UploadFile
        min_length: Reject documents with less stripped text than this

    Returns:
        Tuple of (extracted_text, filename)

    Raises:
        DocumentExtractionError on validation/extraction errors
    """
    if not file.filename:
        raise DocumentExtractionError("No filename provided")

    content = await file.read()
    return extract_text_from_bytes(content, file.filename, min_length), file.filename


def extract_text_from_bytes(content: bytes, filename: str, min_length: Optional[int] = None) -> str:
    """Validate an uploaded document and convert it to text."""
    settings = get_settings()

    ext = get_file_extension(filename)
    if ext not in ALLOWED_EXTENSIONS:
        raise DocumentExtractionError(
            f"Unsupported file type '{ext}'. Allowed: PDF, DOCX, TXT",
            filename=filename
        )

    if len(content) > settings.max_upload_size_bytes:
        raise DocumentExtractionError(
            f"File too large. Maximum size: {settings.max_upload_size_mb}MB",
            filename=filename,
            status_code=413
        )

    if ext == '.pdf':
        text = extract_from_pdf(content, filename)
    elif ext == '.docx':
        text = extract_from_docx(content, filename)
    else:  # .txt
        text = extract_from_txt(content, filename)

    # Image-only PDFs come back empty or as a handful of stray characters
    if min_length is not None and len(text.strip()) < min_length:
        raise DocumentExtractionError(
            "Could not extract enough text from file. "
            "Make sure it is a text-based document, not a scanned image.",
            filename=filename
        )

    logger.info(f"Extracted {len(text)} characters from '{filename}'")
    return text


def extract_from_pdf(content: bytes, filename: str = None) -> str:
    """Extract text from PDF bytes."""
    try:
        reader = PdfReader(io.BytesIO(content))
        text_parts = []
        for page in reader.pages:
            page_text = page.extract_text()
            if page_text:
                text_parts.append(page_text)
        return '\n'.join(text_parts)
    except (PdfReadError, ValueError, KeyError) as e:
        logger.warning(f"PDF read failed for '{filename}': {e}")
        raise DocumentExtractionError(f"Error reading PDF: {str(e)}", filename=filename) from e


def extract_from_docx(content: bytes, filename: str = None) -> str:
    """Extract text from DOCX bytes."""
    try:
        doc = Document(io.BytesIO(content))
    except (PackageNotFoundError, BadZipFile, ValueError, KeyError) as e:
        logger.warning(f"DOCX read failed for '{filename}': {e}")
        raise DocumentExtractionError(f"Error reading DOCX: {str(e)}", filename=filename) from e

    text_parts = []

    # Extract paragraphs
    for para in doc.paragraphs:
        if para.text.strip():
            text_parts.append(para.text)

    # Extract tables
    for table in doc.tables:
        for row in table.rows:
            row_text = [cell.text.strip() for cell in row.cells if cell.text.strip()]
            if row_text:
                text_parts.append(' | '.join(row_text))

    return '\n'.join(text_parts)


def extract_from_txt(content: bytes, filename: str = None) -> str:
    """Extract text from TXT bytes."""
    for encoding in TEXT_ENCODINGS:
        try:
            return content.decode(encoding)
        except UnicodeDecodeError:
            continue
    raise DocumentExtractionError("Could not decode text file", filename=filename)


def get_supported_formats() -> dict:
    """Get info about supported file formats."""
    return {
        "supported_formats": [
            {"extension": ".pdf", "available": True, "name": "PDF"},
            {"extension": ".docx", "available": True, "name": "Word Document"},
            {"extension": ".txt", "available": True, "name": "Plain Text"}
        ],
        "max_size_mb": get_settings().max_upload_size_mb,
        "min_resume_text_length": get_settings().min_resume_text_length
    }
