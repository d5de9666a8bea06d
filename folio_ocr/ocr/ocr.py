# ocr.py
# Image bytes -> plain text lines, via OpenCV preprocessing and Tesseract.
# Poorly read pages get one more pass through a scan-rescue pipeline and
# the better of the two results is kept.

from __future__ import annotations

import io
import logging
import re
from typing import Dict, Any, List, Tuple

import cv2
import numpy as np
import pandas as pd
import pytesseract
from PIL import Image, ImageEnhance, UnidentifiedImageError

from folio_ocr.errors import OcrEngineError
from folio_ocr.ocr.classes import PreprocessSettings, TesseractSettings, RescueSettings, OcrProfile
from folio_ocr.ocr.model_settings import DEFAULT_SETTINGS

logger = logging.getLogger(__name__)


# ----------------------------
# Decoding
# ----------------------------

def decode_image(data: bytes) -> np.ndarray:
    """Bytes -> 2D uint8 grayscale array."""
    if not data:
        raise OcrEngineError("Empty image")
    buf = np.frombuffer(data, dtype=np.uint8)
    img = cv2.imdecode(buf, cv2.IMREAD_GRAYSCALE)
    if img is not None:
        return img
    # OpenCV has no GIF / some WEBP variants; PIL does
    try:
        with Image.open(io.BytesIO(data)) as pil:
            return np.array(pil.convert("L"))
    except (UnidentifiedImageError, OSError) as e:
        raise OcrEngineError(f"Could not decode image: {e}") from e


# ----------------------------
# Preprocessing
# ----------------------------

_ROTATE_CODES = {
    90: cv2.ROTATE_90_CLOCKWISE,
    180: cv2.ROTATE_180,
    270: cv2.ROTATE_90_COUNTERCLOCKWISE,
}


def osd_rotation(gray: np.ndarray) -> int:
    """Clockwise turn (0/90/180/270) Tesseract OSD asks for; 0 when OSD has too little text."""
    try:
        osd = pytesseract.image_to_osd(gray)
    except pytesseract.TesseractError:
        return 0
    m = re.search(r"Rotate:\s+(\d+)", osd)
    return int(m.group(1)) if m else 0


def skew_angle(gray: np.ndarray, s: PreprocessSettings) -> float:
    """Median tilt of the ruled/text lines in degrees; 0.0 when outside the trusted range."""
    lines = cv2.HoughLines(cv2.Canny(gray, 50, 150), 1, np.pi / 180, s.hough_votes)
    if lines is None:
        return 0.0
    tilts = [np.degrees(theta) - 90 for _rho, theta in lines[:, 0]
             if 20 < np.degrees(theta) % 180 < 160]   # near-vertical lines say nothing
    if not tilts:
        return 0.0
    angle = float(np.median(tilts))
    return angle if s.deskew_min_deg <= abs(angle) <= s.deskew_max_deg else 0.0


def _upright(gray: np.ndarray, s: PreprocessSettings) -> np.ndarray:
    out = gray
    if s.auto_rotate:
        code = _ROTATE_CODES.get(osd_rotation(out))
        if code is not None:
            out = cv2.rotate(out, code)
    if s.deskew:
        angle = skew_angle(out, s)
        if angle:
            h, w = out.shape[:2]
            M = cv2.getRotationMatrix2D((w / 2, h / 2), angle, 1.0)
            out = cv2.warpAffine(out, M, (w, h), flags=cv2.INTER_LINEAR, borderMode=cv2.BORDER_REPLICATE)
    return out


def rescue_image(gray: np.ndarray, r: RescueSettings) -> np.ndarray:
    """Flatten the paper shade, lift local contrast, binarize, sharpen."""
    background = cv2.medianBlur(gray, r.background_ksize)
    flat = cv2.normalize(gray.astype(np.float32) - background.astype(np.float32),
                         None, 0, 255, cv2.NORM_MINMAX).astype(np.uint8)
    flat = cv2.createCLAHE(clipLimit=r.clahe_clip, tileGridSize=r.clahe_tile).apply(flat)
    flat = cv2.bilateralFilter(flat, d=r.denoise_d, sigmaColor=r.denoise_sigma, sigmaSpace=r.denoise_sigma)
    binary = cv2.adaptiveThreshold(flat, 255, cv2.ADAPTIVE_THRESH_GAUSSIAN_C, cv2.THRESH_BINARY,
                                   r.block_size, r.C)
    blur = cv2.GaussianBlur(binary, (0, 0), r.sharpen_sigma)
    return cv2.addWeighted(binary, 1 + r.sharpen_amount, blur, -r.sharpen_amount, 0)


def preprocess_image(gray: np.ndarray, s: PreprocessSettings) -> np.ndarray:
    out = _upright(gray, s)

    if s.resize_fx != 1.0 or s.resize_fy != 1.0:
        out = cv2.resize(out, None, fx=s.resize_fx, fy=s.resize_fy, interpolation=s.resize_interpolation)

    if s.use_unsharp_mask:
        blur = cv2.GaussianBlur(out, (0, 0), s.usm_radius_sigma)
        out = cv2.addWeighted(out, s.usm_amount, blur, s.usm_subtract, 0)

    if s.enhance_contrast:
        out = np.array(ImageEnhance.Contrast(Image.fromarray(out)).enhance(s.contrast_factor))

    if s.use_adaptive_threshold:
        out = cv2.adaptiveThreshold(
            out, 255, cv2.ADAPTIVE_THRESH_GAUSSIAN_C, cv2.THRESH_BINARY,
            s.adaptive_block_size, s.adaptive_C,
        )
    elif not s.tesseract_handles_threshold:
        out = cv2.threshold(out, 0, 255, cv2.THRESH_BINARY + cv2.THRESH_OTSU)[1]

    return out


# ----------------------------
# Tesseract
# ----------------------------

def ocr_words(img: np.ndarray, ts: TesseractSettings) -> pd.DataFrame:
    """Word boxes with confidence; empty / layout-only rows dropped."""
    try:
        data = pytesseract.image_to_data(img, config=ts.build_config(), output_type=pytesseract.Output.DICT)
    except pytesseract.TesseractNotFoundError as e:
        raise OcrEngineError("Tesseract is not installed or not on PATH (set TESSERACT_CMD)") from e
    except pytesseract.TesseractError as e:
        raise OcrEngineError(f"Tesseract failed: {e}") from e

    df = pd.DataFrame(data)
    if df.empty:
        return df
    df["conf"] = pd.to_numeric(df["conf"], errors="coerce")
    df["text"] = df["text"].astype(str).str.strip()
    return df[(df["conf"] >= 0) & (df["text"] != "")].copy()


def words_to_lines(df: pd.DataFrame) -> List[str]:
    """Group words into reading-order lines (block, paragraph, line), left to right."""
    if df.empty:
        return []
    lines = []
    for _key, line_df in df.groupby(["block_num", "par_num", "line_num"], sort=True):
        words = line_df.sort_values(by="left")["text"].tolist()
        lines.append(" ".join(words))
    return lines


def _page_quality(df: pd.DataFrame) -> Tuple[int, float]:
    if df.empty:
        return 0, 0.0
    return int(len(df)), float(df["conf"].mean())


def image_to_text(data: bytes, profile: OcrProfile = DEFAULT_SETTINGS) -> Dict[str, Any]:
    """
    Returns {"text", "lines", "word_count", "mean_conf", "rescued"}.
    Raises OcrEngineError when the image cannot be read or Tesseract is unavailable.
    """
    if profile.tesseract_cmd:
        pytesseract.pytesseract.tesseract_cmd = profile.tesseract_cmd

    gray = decode_image(data)
    processed = preprocess_image(gray, profile.preprocess)
    df = ocr_words(processed, profile.tesseract)
    word_count, mean_conf = _page_quality(df)
    rescued = False

    if word_count < profile.rescue_min_words or mean_conf < profile.rescue_min_conf:
        logger.info("Poor OCR (%d words, conf %.1f); retrying with scan rescue", word_count, mean_conf)
        rescue = rescue_image(_upright(gray, profile.preprocess), profile.rescue)
        df2 = ocr_words(rescue, profile.tesseract)
        word_count2, mean_conf2 = _page_quality(df2)
        if word_count2 > word_count or mean_conf2 > mean_conf + profile.rescue.min_conf_gain:
            df, word_count, mean_conf = df2, word_count2, mean_conf2
            rescued = True

    lines = words_to_lines(df)
    if not lines:
        logger.warning("OCR produced no text")

    return {
        "text": "\n".join(lines),
        "lines": lines,
        "word_count": word_count,
        "mean_conf": round(mean_conf, 1),
        "rescued": rescued,
    }
