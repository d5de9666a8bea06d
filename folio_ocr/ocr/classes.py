from dataclasses import dataclass, field
from typing import Optional, Tuple

import cv2


@dataclass
class PreprocessSettings:
    # upscaling small phone/scanner images helps Tesseract with table digits
    resize_fx: float = 1.0
    resize_fy: float = 1.0
    resize_interpolation: int = cv2.INTER_CUBIC

    use_adaptive_threshold: bool = False
    adaptive_block_size: int = 31
    adaptive_C: int = 12

    use_unsharp_mask: bool = False
    usm_amount: float = 1.25      # weight of original
    usm_radius_sigma: float = 1.0  # Gaussian sigma
    usm_subtract: float = -0.25   # weight of blurred

    enhance_contrast: bool = False
    contrast_factor: float = 1.5

    # photos: rotate upright (OSD) and remove small skew
    auto_rotate: bool = False
    deskew: bool = False
    deskew_min_deg: float = 0.5    # below this the page is left alone
    deskew_max_deg: float = 7.0    # above this the estimate is not trusted
    hough_votes: int = 180

    # Let Tesseract binarize? (feed grayscale directly)
    tesseract_handles_threshold: bool = True


@dataclass
class TesseractSettings:
    oem: int = 1
    psm: int = 6
    lang: str = "eng"
    preserve_interword_spaces: bool = True
    extra: str = ""

    def build_config(self) -> str:
        cfg = f"--oem {self.oem} --psm {self.psm} -l {self.lang}"
        if self.preserve_interword_spaces:
            cfg += " -c preserve_interword_spaces=1"
        if self.extra:
            cfg += f" {self.extra}"
        return cfg


@dataclass
class RescueSettings:
    """Second pass for shadowed or low-contrast pages."""
    background_ksize: int = 31     # median blur estimating the paper shade
    clahe_clip: float = 2.0
    clahe_tile: Tuple[int, int] = (8, 8)
    denoise_d: int = 5
    denoise_sigma: float = 30.0
    block_size: int = 31
    C: int = 12
    sharpen_sigma: float = 1.2
    sharpen_amount: float = 0.3
    # keep the rescued read only if it finds more words, or this much more confidence
    min_conf_gain: float = 8.0


@dataclass
class OcrProfile:
    name: str
    preprocess: PreprocessSettings
    tesseract: TesseractSettings
    rescue: RescueSettings = field(default_factory=RescueSettings)
    # re-OCR with the scan-rescue pipeline when a page reads poorly
    rescue_min_words: int = 25
    rescue_min_conf: float = 55.0
    tesseract_cmd: Optional[str] = None
