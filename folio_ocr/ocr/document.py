from pathlib import Path

from folio_ocr.errors import UnsupportedDocumentError
from folio_ocr.ocr.classes import OcrProfile
from folio_ocr.ocr.model_settings import DEFAULT_SETTINGS
from folio_ocr.ocr.ocr import image_to_text

IMAGE_SUFFIXES = {".png", ".jpg", ".jpeg", ".tif", ".tiff", ".bmp", ".gif", ".webp"}
TEXT_SUFFIXES = {".txt"}


def check_document_type(path: str | Path) -> str:
    """'image' | 'text'; PDFs and anything else are rejected before OCR."""
    suffix = Path(path).suffix.lower()
    if suffix == ".pdf":
        raise UnsupportedDocumentError("PDF support coming soon")
    if suffix in IMAGE_SUFFIXES:
        return "image"
    if suffix in TEXT_SUFFIXES:
        return "text"
    raise UnsupportedDocumentError(f"Unsupported file type: {suffix or '<none>'}")


def load_document_text(path: str | Path, profile: OcrProfile = DEFAULT_SETTINGS) -> str:
    """Raw text for the parser: OCR for images, as-is for text dumps."""
    path = Path(path)
    kind = check_document_type(path)
    if kind == "text":
        return path.read_text(encoding="utf-8")
    return image_to_text(path.read_bytes(), profile)["text"]
