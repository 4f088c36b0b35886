"""
DeepSeek thought extractor.

Adds the marker vocabulary DeepSeek models commonly emit. The generic
scan always runs first; the DeepSeek scan only runs when it found no
reasoning segment.
"""

import logging
from typing import Tuple

from ..models import ThoughtExtractionResult
from .base import Marker, MarkerKind, ThoughtExtractor, find_marker

logger = logging.getLogger(__name__)


class DeepSeekThoughtExtractor(ThoughtExtractor):
    """Thought extractor tuned for DeepSeek output."""

    VENDOR_START_MARKERS: Tuple[Marker, ...] = (
        Marker("<thinking>", MarkerKind.TAG),
        Marker("思考：", MarkerKind.LABEL),
        Marker("Let me think:", MarkerKind.LABEL),
        Marker("Here is my thought process:", MarkerKind.LABEL),
    )

    VENDOR_END_MARKERS: Tuple[Marker, ...] = (
        Marker("</thinking>", MarkerKind.TAG),
        Marker("\n\n结论：", MarkerKind.LABEL),
        Marker("\n\n因此，", MarkerKind.LABEL, consume=False),
        Marker("\n\nIn conclusion,", MarkerKind.LABEL, consume=False),
    )

    VENDOR_ANSWER_MARKERS: Tuple[str, ...] = (
        "最终结论：",
        "结论：",
        "Conclusion:",
    )

    def extract(self, text: str) -> ThoughtExtractionResult:
        base_result = super().extract(text)
        if base_result.thinking or not isinstance(text, str) or not text.strip():
            return base_result

        try:
            vendor_result = self._split(
                text,
                self.VENDOR_START_MARKERS,
                self.VENDOR_END_MARKERS,
                self.VENDOR_ANSWER_MARKERS,
                paired=False,
                synthesize=False,
            )
        except Exception as e:
            logger.warning(f"DeepSeek thought extraction failed: {e}")
            return base_result

        if vendor_result.thinking is None:
            return base_result
        return vendor_result

    def has_vendor_markers(self, text: str) -> bool:
        """Check whether text carries any DeepSeek-specific marker."""
        if not isinstance(text, str) or not text:
            return False
        return (
            find_marker(text, self.VENDOR_START_MARKERS) is not None
            or find_marker(text, self.VENDOR_END_MARKERS) is not None
        )
