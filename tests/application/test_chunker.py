"""
Test suite for SentenceChunker.

System role: Verification of ingestion chunking
"""

from newsbot.application.chunker import SentenceChunker


def _sentence(i: int) -> str:
    return f"Sentence number {i} describes one more development in the story. "


class TestSplitSentences:
    def test_splits_on_terminators(self):
        chunker = SentenceChunker()

        sentences = chunker.split_sentences("First one. Second one! Third one?")

        assert sentences == ["First one.", " Second one!", " Third one?"]

    def test_text_without_terminator_is_single_sentence(self):
        chunker = SentenceChunker()

        assert chunker.split_sentences("no terminator here") == ["no terminator here"]


class TestChunk:
    def test_short_text_is_one_chunk(self):
        # Arrange
        chunker = SentenceChunker()
        text = _sentence(1) + _sentence(2)

        # Act
        chunks = chunker.chunk(text)

        # Assert
        assert chunks == [text.strip()]

    def test_long_text_respects_chunk_size_and_overlaps(self):
        # Arrange
        chunker = SentenceChunker(chunk_size=200, overlap=50)
        text = "".join(_sentence(i) for i in range(20))

        # Act
        chunks = chunker.chunk(text)

        # Assert
        assert len(chunks) > 1
        for previous, current in zip(chunks, chunks[1:]):
            carried = previous.split()[-5:]
            assert current.startswith(" ".join(carried))

    def test_small_chunks_are_dropped(self):
        chunker = SentenceChunker(min_chunk_length=50)

        assert chunker.chunk("Too short.") == []

    def test_empty_text(self):
        assert SentenceChunker().chunk("") == []
