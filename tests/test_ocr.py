import cv2
import numpy as np
import pytesseract
import pytest

from folio_ocr.errors import UnsupportedDocumentError, OcrEngineError
from folio_ocr.ocr import ocr as ocr_mod
from folio_ocr.ocr.classes import OcrProfile, PreprocessSettings, TesseractSettings, RescueSettings
from folio_ocr.ocr.document import check_document_type, load_document_text
from folio_ocr.ocr.ocr import decode_image, image_to_text, preprocess_image, osd_rotation, skew_angle, rescue_image

FAKE_DATA = {
    "text": ["1,000.00", "Rent", "", "Total", "1,000.00"],
    "conf": ["90", "91", "-1", "88", "87"],
    "block_num": [1, 1, 1, 1, 1],
    "par_num": [1, 1, 1, 1, 1],
    "line_num": [1, 1, 1, 2, 2],
    "left": [60, 10, 0, 10, 60],
}

NO_RESCUE = OcrProfile(
    name="TEST",
    preprocess=PreprocessSettings(),
    tesseract=TesseractSettings(),
    rescue_min_words=0,
    rescue_min_conf=0.0,
)


def _png(shape=(40, 120)):
    img = np.full(shape, 255, dtype=np.uint8)
    cv2.putText(img, "12", (5, 30), cv2.FONT_HERSHEY_SIMPLEX, 1, 0, 2)
    ok, buf = cv2.imencode(".png", img)
    assert ok
    return buf.tobytes()


def test_pdf_is_rejected_before_ocr():
    with pytest.raises(UnsupportedDocumentError, match="PDF"):
        check_document_type("folio.pdf")
    with pytest.raises(ValueError):
        check_document_type("folio.PDF")


def test_document_types():
    assert check_document_type("scan.PNG") == "image"
    assert check_document_type("dump.txt") == "text"
    with pytest.raises(UnsupportedDocumentError):
        check_document_type("folio.docx")


def test_load_text_dump(tmp_path):
    path = tmp_path / "dump.txt"
    path.write_text("Rent 10.00\n", encoding="utf-8")
    assert load_document_text(path) == "Rent 10.00\n"


def test_decode_image():
    img = decode_image(_png())
    assert img.ndim == 2 and img.shape == (40, 120)


@pytest.mark.parametrize("data", [b"", b"definitely not an image"])
def test_decode_image_rejects_garbage(data):
    with pytest.raises(OcrEngineError):
        decode_image(data)


def test_preprocess_keeps_uint8():
    gray = decode_image(_png())
    out = preprocess_image(gray, PreprocessSettings(resize_fx=2.0, resize_fy=2.0, use_unsharp_mask=True,
                                                    enhance_contrast=True, tesseract_handles_threshold=False))
    assert out.dtype == np.uint8
    assert out.shape == (80, 240)


def test_image_to_text_groups_words_into_lines(monkeypatch):
    monkeypatch.setattr(ocr_mod.pytesseract, "image_to_data", lambda img, config, output_type: FAKE_DATA)
    result = image_to_text(_png(), NO_RESCUE)
    assert result["lines"] == ["Rent 1,000.00", "Total 1,000.00"]
    assert result["text"] == "Rent 1,000.00\nTotal 1,000.00"
    assert result["word_count"] == 4
    assert result["rescued"] is False


def test_missing_tesseract_is_reported(monkeypatch):
    def boom(*args, **kwargs):
        raise pytesseract.TesseractNotFoundError()

    monkeypatch.setattr(ocr_mod.pytesseract, "image_to_data", boom)
    with pytest.raises(OcrEngineError, match="TESSERACT_CMD"):
        image_to_text(_png(), NO_RESCUE)


def test_osd_rotation(monkeypatch):
    monkeypatch.setattr(ocr_mod.pytesseract, "image_to_osd", lambda img: "Page number: 0\nRotate: 90\n")
    assert osd_rotation(decode_image(_png())) == 90

    def too_little_text(img):
        raise pytesseract.TesseractError(1, "Too few characters")

    monkeypatch.setattr(ocr_mod.pytesseract, "image_to_osd", too_little_text)
    assert osd_rotation(decode_image(_png())) == 0


def test_auto_rotate_turns_the_page(monkeypatch):
    monkeypatch.setattr(ocr_mod.pytesseract, "image_to_osd", lambda img: "Rotate: 270")
    out = preprocess_image(decode_image(_png()), PreprocessSettings(auto_rotate=True))
    assert out.shape == (120, 40)


def test_blank_page_has_no_skew():
    blank = np.full((60, 60), 255, dtype=np.uint8)
    assert skew_angle(blank, PreprocessSettings(deskew=True)) == 0.0


def test_rescue_image_is_binary_sized_like_input():
    gray = decode_image(_png())
    out = rescue_image(gray, RescueSettings())
    assert out.dtype == np.uint8
    assert out.shape == gray.shape


def test_poor_page_is_read_again_and_better_read_kept(monkeypatch):
    richer = {
        "text": FAKE_DATA["text"] + ["Water"],
        "conf": FAKE_DATA["conf"] + ["80"],
        "block_num": FAKE_DATA["block_num"] + [1],
        "par_num": FAKE_DATA["par_num"] + [1],
        "line_num": FAKE_DATA["line_num"] + [3],
        "left": FAKE_DATA["left"] + [10],
    }
    reads = iter([FAKE_DATA, richer])
    monkeypatch.setattr(ocr_mod.pytesseract, "image_to_data", lambda img, config, output_type: next(reads))
    profile = OcrProfile(
        name="TEST",
        preprocess=PreprocessSettings(),
        tesseract=TesseractSettings(),
        rescue_min_words=10,
    )

    result = image_to_text(_png(), profile)
    assert result["rescued"] is True
    assert result["word_count"] == 5
    assert result["lines"][-1] == "Water"
