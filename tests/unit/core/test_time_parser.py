import pytest

from pingscope.core.time_parser import TimeParser


class TestTimeParser:
    """Test command line duration parsing."""

    @pytest.mark.parametrize(
        "duration,expected",
        [
            ("200ms", 0.2),
            ("3s", 3.0),
            ("1.5s", 1.5),
            ("2m", 120.0),
            ("1m30s", 90.0),
            ("5", 5.0),
            ("1s500ms", 1.5),
        ],
    )
    def test_parse(self, duration: str, expected: float) -> None:
        assert TimeParser().parse(duration) == pytest.approx(expected)

    def test_unparseable_duration_is_zero(self) -> None:
        assert TimeParser().parse("soon") == 0.0
