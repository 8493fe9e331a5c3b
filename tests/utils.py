"""Shared test utilities for abbrlight tests."""


def assert_ordered_cover(spans, buffer: str, start: int, end: int) -> None:
    """Assert spans are ascending, non-overlapping and cover ``[start, end)``.

    Gaps between spans may only contain whitespace, since the classifier
    highlights words and not the separators between them.
    """
    assert spans, "expected at least one span"
    assert spans[0].start == start
    assert spans[-1].end == end
    cursor = start
    for span in spans:
        assert span.start >= cursor
        assert span.end > span.start
        assert buffer[cursor:span.start].strip() == ""
        cursor = span.end


def regions(spans) -> list[tuple[int, int, str]]:
    """Turn spans into comparable (start, end, style) tuples."""
    return [(s.start, s.end, s.style) for s in spans]
