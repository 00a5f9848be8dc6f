"""
Sentence-aware text chunker.

Splits article text into chunks of roughly ``chunk_size`` characters on
sentence boundaries, carrying a few trailing words of the previous chunk into
the next one for overlap.

Dependencies: none
System role: Ingestion chunking
"""

import re

_SENTENCE = re.compile(r"[^.!?]+[.!?]+")


class SentenceChunker:
    """Sentence-boundary chunker with word overlap."""

    def __init__(self, chunk_size: int = 500, overlap: int = 50, min_chunk_length: int = 50) -> None:
        """
        Args:
            chunk_size: Target maximum chunk length in characters
            overlap: Overlap budget in characters; roughly ``overlap // 10``
                words are carried over
            min_chunk_length: Chunks of this length or shorter are dropped
        """
        self.chunk_size = chunk_size
        self.overlap = overlap
        self.min_chunk_length = min_chunk_length

    def split_sentences(self, text: str) -> list[str]:
        """Sentences terminated by ``.``, ``!`` or ``?``; unterminated tail text is dropped."""
        sentences = _SENTENCE.findall(text)
        if not sentences and text.strip():
            return [text]
        return sentences

    def chunk(self, text: str) -> list[str]:
        """
        Split text into overlapping chunks.

        Args:
            text: Document body

        Returns:
            list[str]: Trimmed chunks longer than ``min_chunk_length``
        """
        chunks: list[str] = []
        current = ""
        overlap_words = self.overlap // 10

        for sentence in self.split_sentences(text):
            if len(current) + len(sentence) <= self.chunk_size:
                current += sentence
                continue

            if current:
                chunks.append(current.strip())
                carried = current.split()[-overlap_words:] if overlap_words else []
                current = " ".join(carried) + sentence
            else:
                current = sentence

        if current.strip():
            chunks.append(current.strip())

        return [chunk for chunk in chunks if len(chunk) > self.min_chunk_length]
