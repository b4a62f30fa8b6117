"""
Segmenter - Splits raw study text into sentences and groups them into slides.
The transform is purely structural: no language understanding is involved.
"""

import math
import re
from dataclasses import dataclass
from typing import Dict, List, Tuple

from ..utils.benchmark import get_benchmark_tracker

SENTENCE_TERMINATORS = re.compile(r"[.!?]+")

MIN_SENTENCE_LENGTH = 10  # sentences must be longer than this
MIN_CONTENT_LENGTH = 5    # content lines must be longer than this
MAX_SLIDES = 5
MAX_CONTENT_LINES = 4
TOPIC_LENGTH = 50
DEFAULT_TOPIC = "Study Topic"


@dataclass(frozen=True)
class Slide:
    """A single titled slide with up to four bullet lines."""
    title: str
    content: Tuple[str, ...]
    image_prompt: str

    def to_dict(self) -> Dict:
        """Convert slide to dictionary."""
        return {
            "title": self.title,
            "content": list(self.content),
            "image_prompt": self.image_prompt,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> 'Slide':
        """Create Slide from dictionary."""
        return cls(
            title=data['title'],
            content=tuple(data.get('content', ())),
            image_prompt=data.get('image_prompt', ""),
        )

    @property
    def narration_text(self) -> str:
        """Text spoken when this slide is narrated."""
        return f"{self.title}. {'. '.join(self.content)}"


def split_sentences(text: str) -> List[str]:
    """Split text on runs of terminators, keeping trimmed sentences longer than 10 characters."""
    sentences = []
    for fragment in SENTENCE_TERMINATORS.split(text):
        fragment = fragment.strip()
        if len(fragment) > MIN_SENTENCE_LENGTH:
            sentences.append(fragment)
    return sentences


def derive_topic(sentences: List[str]) -> str:
    """Topic label: the first sentence cut to 50 characters plus an ellipsis."""
    if not sentences:
        return DEFAULT_TOPIC
    return sentences[0][:TOPIC_LENGTH] + "..."


def chunk_size_for(sentence_count: int) -> int:
    """Window size that spreads sentences over at most five slides."""
    return max(1, math.ceil(sentence_count / MAX_SLIDES))


class Segmenter:
    """Turn study text into an ordered list of slides."""

    def segment(self, text: str) -> List[Slide]:
        """
        Segment text into slides.

        Args:
            text: Raw study material

        Returns:
            Between zero and five slides, in sentence order
        """
        with get_benchmark_tracker().track("Segmenter", "segment") as metadata:
            slides = self.slides_from_sentences(split_sentences(text))
            metadata.update({"text_length": len(text), "num_slides": len(slides)})
        return slides

    def slides_from_sentences(self, sentences: List[str]) -> List[Slide]:
        """Group already-split sentences into fixed-size windows, one slide per window."""
        chunk_size = chunk_size_for(len(sentences))
        slides = []

        for number, start in enumerate(range(0, len(sentences), chunk_size), start=1):
            window = sentences[start:start + chunk_size]
            content = [s.strip() for s in window if len(s.strip()) > MIN_CONTENT_LENGTH]
            title = f"Topic {number}"

            slides.append(Slide(
                title=title,
                content=tuple(content[:MAX_CONTENT_LINES]),
                image_prompt=f"Educational illustration for {title.lower()}",
            ))

        return slides

    def topic(self, text: str) -> str:
        """Topic label for the given text."""
        return derive_topic(split_sentences(text))
