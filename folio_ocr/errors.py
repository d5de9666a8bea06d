class FolioOcrError(Exception):
    """Base class for failures around the parser (never raised by extract())."""


class UnsupportedDocumentError(FolioOcrError, ValueError):
    """Document type the pipeline does not read (PDFs, unknown suffixes)."""


class OcrEngineError(FolioOcrError, RuntimeError):
    """Tesseract missing/failing, or the image could not be decoded."""
