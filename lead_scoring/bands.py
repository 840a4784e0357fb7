"""
Band classification

Maps a final score onto HIGH / MEDIUM / LOW using a team's thresholds.
Classification is a plain threshold comparison and does not depend on the
score having been clamped first.
"""

from collections.abc import Mapping
from typing import Any, Optional

from pydantic import ValidationError

from core.logging import get_logger

from .rules_schema import BandThresholds
from .types import Band

logger = get_logger(__name__, domain="lead_scoring")

DEFAULT_BANDS = BandThresholds(high=75, medium=50, low=0)


def coerce_bands(bands: Any) -> BandThresholds:
    """Return usable thresholds, falling back to ``DEFAULT_BANDS``"""
    if isinstance(bands, BandThresholds):
        return bands
    if isinstance(bands, Mapping):
        try:
            return BandThresholds.model_validate(bands)
        except ValidationError as e:
            logger.warning("Invalid band thresholds, using defaults", extra={"error": str(e)})
            return DEFAULT_BANDS
    if bands is not None:
        logger.warning("Unsupported band thresholds type, using defaults", extra={"type": type(bands).__name__})
    return DEFAULT_BANDS


def classify(score: float, bands: Optional[Any] = None) -> Band:
    """
    Classify a score into a band

    Args:
        score: Final score, clamped or not
        bands: ``BandThresholds`` or a ``{high, medium, low}`` mapping

    Returns:
        HIGH when ``score >= high``, MEDIUM when ``score >= medium``, else LOW
    """
    thresholds = coerce_bands(bands)
    if score >= thresholds.high:
        return Band.HIGH
    if score >= thresholds.medium:
        return Band.MEDIUM
    return Band.LOW
