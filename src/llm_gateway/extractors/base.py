"""
Thought extractor.

Splits raw model output into a reasoning segment and a final answer by
scanning for opening, closing and answer-label markers. Extraction is
best effort and never raises.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, NamedTuple, Optional, Sequence, Tuple

from ..models import ThoughtExtractionResult

logger = logging.getLogger(__name__)


class MarkerKind(str, Enum):
    """Marker families; an opener is closed by a closer of the same kind."""
    TAG = "tag"
    FENCE = "fence"
    LABEL = "label"


class Marker(NamedTuple):
    """A textual delimiter of a reasoning block."""
    text: str
    kind: MarkerKind
    # When False, a closing marker's text stays at the head of the answer.
    consume: bool = True


def find_first(
    text: str,
    needles: Sequence[str],
    start: int = 0,
    limit: Optional[int] = None,
) -> Optional[Tuple[int, int]]:
    """
    Locate the earliest needle occurring at or after ``start``.

    Args:
        text: Text to scan
        needles: Candidate substrings; earlier entries win position ties
        start: First index to consider
        limit: Matches must begin before this index

    Returns:
        (position, needle index), or None when nothing matches
    """
    best = None
    for i, needle in enumerate(needles):
        if not needle:
            continue
        pos = text.find(needle, start)
        if pos == -1 or (limit is not None and pos >= limit):
            continue
        if best is None or pos < best[0]:
            best = (pos, i)
    return best


def find_marker(
    text: str,
    markers: Sequence[Marker],
    start: int = 0,
) -> Optional[Tuple[int, Marker]]:
    hit = find_first(text, [m.text for m in markers], start)
    if hit is None:
        return None
    return hit[0], markers[hit[1]]


@dataclass
class MarkerScan:
    """Scan state over one response text."""
    text: str
    cursor: int = 0
    found_open: Optional[Marker] = None
    found_close: Optional[Marker] = None

    def open_with(self, markers: Sequence[Marker]) -> bool:
        hit = find_marker(self.text, markers, self.cursor)
        if hit is None:
            return False
        pos, marker = hit
        self.found_open = marker
        self.cursor = pos + len(marker.text)
        return True

    def synthesize_open(self, closers: Sequence[Marker]) -> bool:
        """Treat position zero as an implicit opener when a closer exists."""
        hit = find_marker(self.text, closers, 0)
        if hit is None:
            return False
        self.found_open = Marker("", hit[1].kind)
        self.cursor = 0
        return True

    def close_with(self, markers: Sequence[Marker]) -> Optional[str]:
        """Advance past the first closer; return the text it encloses."""
        hit = find_marker(self.text, markers, self.cursor)
        if hit is None:
            return None
        pos, marker = hit
        enclosed = self.text[self.cursor:pos]
        self.found_close = marker
        self.cursor = pos + len(marker.text) if marker.consume else pos
        return enclosed

    def skip_answer_label(self, labels: Sequence[str], lookahead: int) -> None:
        hit = find_first(self.text, labels, self.cursor, self.cursor + lookahead)
        if hit is not None:
            pos, i = hit
            self.cursor = pos + len(labels[i])

    def remainder(self) -> str:
        return self.text[self.cursor:]


class ThoughtExtractor:
    """
    Extracts a reasoning segment and a final answer from model output.

    Recognizes explicit tags, labelled fenced blocks and label prefixes.
    Subclasses extend the vocabulary by overriding the marker tuples.
    """

    START_MARKERS: Tuple[Marker, ...] = (
        Marker("<think>", MarkerKind.TAG),
        Marker("```thinking", MarkerKind.FENCE),
        Marker("```thought", MarkerKind.FENCE),
        Marker("```reasoning", MarkerKind.FENCE),
        Marker("Thinking:", MarkerKind.LABEL),
        Marker("思考过程:", MarkerKind.LABEL),
        Marker("思考过程：", MarkerKind.LABEL),
    )

    END_MARKERS: Tuple[Marker, ...] = (
        Marker("</think>", MarkerKind.TAG),
        Marker("```", MarkerKind.FENCE),
        Marker("\n\n", MarkerKind.LABEL),
    )

    ANSWER_MARKERS: Tuple[str, ...] = (
        "最终答案:",
        "最终答案：",
        "最终回答:",
        "最终回答：",
        "Final Answer:",
        "Final answer:",
        "Answer:",
        "回答:",
        "回答：",
    )

    # Answer labels are only honoured this close to the closing marker.
    ANSWER_LOOKAHEAD = 100

    def extract(self, text: str) -> ThoughtExtractionResult:
        """
        Split model output into thinking and answer.

        Args:
            text: Complete model output

        Returns:
            ThoughtExtractionResult; ``thinking`` is None when no marker
            was recognized, ``answer`` is None when the block never closes
        """
        if not isinstance(text, str):
            return ThoughtExtractionResult(thinking=None, answer=None)
        if not text.strip():
            return ThoughtExtractionResult(thinking=None, answer=text)

        try:
            return self._split(
                text,
                self.START_MARKERS,
                self.END_MARKERS,
                self.ANSWER_MARKERS,
            )
        except Exception as e:
            logger.warning(f"Thought extraction failed, returning raw text: {e}")
            return ThoughtExtractionResult(thinking=None, answer=text)

    def _split(
        self,
        text: str,
        openers: Sequence[Marker],
        closers: Sequence[Marker],
        answer_labels: Sequence[str],
        paired: bool = True,
        synthesize: bool = True,
    ) -> ThoughtExtractionResult:
        scan = MarkerScan(text)

        if not scan.open_with(openers):
            if not (synthesize and scan.synthesize_open(self._tag_closers(closers))):
                return ThoughtExtractionResult(thinking=None, answer=text)

        candidates = self._closers_for(scan.found_open, closers) if paired else list(closers)
        thinking = scan.close_with(candidates)

        if thinking is None:
            return ThoughtExtractionResult(thinking=scan.remainder().strip(), answer=None)

        scan.skip_answer_label(answer_labels, self.ANSWER_LOOKAHEAD)
        answer = scan.remainder().strip()

        return ThoughtExtractionResult(thinking=thinking.strip(), answer=answer or None)

    @staticmethod
    def _closers_for(opener: Marker, closers: Sequence[Marker]) -> List[Marker]:
        return [m for m in closers if m.kind is opener.kind]

    @staticmethod
    def _tag_closers(closers: Sequence[Marker]) -> List[Marker]:
        # Only explicit close tags imply an omitted opener; a bare fence or
        # blank line does not.
        return [m for m in closers if m.kind is MarkerKind.TAG]

    def has_thinking_markers(self, text: str) -> bool:
        """Check whether text carries an opener or an explicit close tag."""
        if not isinstance(text, str) or not text:
            return False
        return (
            find_marker(text, self.START_MARKERS) is not None
            or find_marker(text, self._tag_closers(self.END_MARKERS)) is not None
        )
