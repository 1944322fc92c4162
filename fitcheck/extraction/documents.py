from __future__ import annotations

import logging
from dataclasses import dataclass
from io import BytesIO
from zipfile import BadZipFile, ZipFile

from docx import Document
from pypdf import PdfReader
from pypdf.errors import FileNotDecryptedError, PdfReadError

from fitcheck.core.errors import DocumentError

logger = logging.getLogger(__name__)

MAX_DOCUMENT_BYTES = 10 * 1024 * 1024
MIN_READABLE_CHARS = 10

PDF_MAGIC = b"%PDF-"
ZIP_MAGICS = (b"PK\x03\x04", b"PK\x05\x06", b"PK\x07\x08")

CONTENT_TYPE_EXTENSIONS = {
    "application/pdf": "pdf",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": "docx",
    "text/plain": "txt",
    "text/markdown": "md",
}
SUPPORTED_EXTENSIONS = {"pdf", "docx", "txt", "md"}


@dataclass(frozen=True)
class UploadedDocument:
    filename: str
    content: bytes
    content_type: str = ""


def _extension(filename: str) -> str:
    return filename.rsplit(".", 1)[-1].lower() if "." in filename else ""


def resolve_extension(filename: str, content_type: str | None = None) -> str:
    ext = _extension(filename or "")
    if ext in SUPPORTED_EXTENSIONS:
        return ext
    mime = (content_type or "").split(";", 1)[0].strip().lower()
    return CONTENT_TYPE_EXTENSIONS.get(mime, ext)


def _zip_has_paths(content: bytes, prefix: str) -> bool:
    try:
        with ZipFile(BytesIO(content)) as archive:
            return any(name.startswith(prefix) for name in archive.namelist())
    except BadZipFile:
        return False


def validate_signature(ext: str, content: bytes) -> None:
    if ext == "pdf" and not content.startswith(PDF_MAGIC):
        raise DocumentError("Error: Invalid PDF file. Please ensure the file is not corrupted.")
    if ext == "docx":
        is_zip = any(content.startswith(magic) for magic in ZIP_MAGICS)
        if not is_zip or not _zip_has_paths(content, "word/"):
            raise DocumentError("Error: Invalid Word document. Please upload a valid .docx file.")


def _read_pdf(content: bytes) -> str:
    try:
        reader = PdfReader(BytesIO(content))
        encrypted = reader.is_encrypted
        chunks = [] if encrypted else [(page.extract_text() or "").strip() for page in reader.pages]
    except FileNotDecryptedError as exc:
        raise DocumentError("Error: Password-protected PDFs are not supported.") from exc
    except (PdfReadError, ValueError, KeyError, TypeError) as exc:
        raise DocumentError("Error: Invalid PDF file. Please ensure the file is not corrupted.") from exc
    if encrypted:
        raise DocumentError("Error: Password-protected PDFs are not supported.")
    return "\n\n".join(chunk for chunk in chunks if chunk)


def _read_docx(content: bytes) -> str:
    try:
        document = Document(BytesIO(content))
    except Exception as exc:  # noqa: BLE001 - python-docx raises several unrelated types
        raise DocumentError("Error: Invalid Word document. Please upload a valid .docx file.") from exc
    return "\n".join(p.text.strip() for p in document.paragraphs if p.text and p.text.strip())


def _read_text(content: bytes) -> str:
    if content.startswith((b"\xff\xfe", b"\xfe\xff")):
        return content.decode("utf-16", errors="replace")
    try:
        return content.decode("utf-8-sig")
    except UnicodeDecodeError:
        return content.decode("latin-1")


def extract_document_text(
    filename: str,
    content: bytes,
    content_type: str | None = None,
    *,
    max_bytes: int = MAX_DOCUMENT_BYTES,
) -> str:
    """Plain text of an uploaded resume.

    Raises DocumentError with a message meant for the end user when the file
    can't be used: unsupported type, too large, corrupt, encrypted, or no
    readable text (scanned/image-only PDFs).
    """
    ext = resolve_extension(filename, content_type)
    if ext not in SUPPORTED_EXTENSIONS:
        raise DocumentError("Error: Please upload a PDF, DOCX or TXT file.")
    if len(content) > max_bytes:
        limit_mb = max_bytes // (1024 * 1024)
        raise DocumentError(f"Error: File too large. Please use a file smaller than {limit_mb}MB.")

    validate_signature(ext, content)

    if ext == "pdf":
        text = _read_pdf(content)
    elif ext == "docx":
        text = _read_docx(content)
    else:
        text = _read_text(content)

    text = text.strip()
    logger.info("document_extracted ext=%s bytes=%s chars=%s", ext, len(content), len(text))
    if len(text) < MIN_READABLE_CHARS:
        raise DocumentError(
            "Error: Could not extract readable text from the document. "
            "It might be image-based or corrupted."
        )
    return text


def read_uploaded_document(upload: UploadedDocument, *, max_bytes: int = MAX_DOCUMENT_BYTES) -> str:
    return extract_document_text(
        upload.filename,
        upload.content,
        upload.content_type,
        max_bytes=max_bytes,
    )
