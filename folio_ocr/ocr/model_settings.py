import os

from folio_ocr.ocr.classes import OcrProfile, PreprocessSettings, TesseractSettings

TESSERACT_CMD = os.getenv("TESSERACT_CMD") or None

# Screenshots / exported statement images: clean, already upright
DEFAULT_SETTINGS = OcrProfile(
    name="DEFAULT",
    preprocess=PreprocessSettings(
        resize_fx=1.3, resize_fy=1.3,
        use_unsharp_mask=True,
        tesseract_handles_threshold=True,
    ),
    tesseract=TesseractSettings(oem=1, psm=6, lang="eng"),
    tesseract_cmd=TESSERACT_CMD,
)

# Phone photos of printed folios: shadows, rotation, skew
PHOTO_SETTINGS = OcrProfile(
    name="PHOTO",
    preprocess=PreprocessSettings(
        resize_fx=1.5, resize_fy=1.5,
        use_adaptive_threshold=True,
        enhance_contrast=True,
        auto_rotate=True,
        deskew=True,
        tesseract_handles_threshold=False,
    ),
    tesseract=TesseractSettings(oem=1, psm=4, lang="eng"),
    rescue_min_words=15,
    tesseract_cmd=TESSERACT_CMD,
)

OCR_PROFILES = {
    "default": DEFAULT_SETTINGS,
    "photo": PHOTO_SETTINGS,
}
