import pytest

from app.errors import MeasurementError
from app.layout.text_measurer import Line, TextMeasurer, join_lines


@pytest.fixture
def measurer() -> TextMeasurer:
    return TextMeasurer("Helvetica")


def test_greedy_wrap_packs_whole_words(measurer: TextMeasurer) -> None:
    max_width = measurer.measure("hello world", 10)

    lines = measurer.wrap("hello world foo bar", max_width, 10)

    assert [line.text for line in lines] == ["hello world", "foo bar"]
    assert all(line.width <= max_width for line in lines)


def test_hard_breaks_force_new_lines(measurer: TextMeasurer) -> None:
    lines = measurer.wrap("one\ntwo\n\nthree", 500, 10)

    assert [line.text for line in lines] == ["one", "two", "", "three"]
    assert [line.hard_break for line in lines] == [True, True, True, False]


def test_empty_input_yields_single_empty_line(measurer: TextMeasurer) -> None:
    assert measurer.wrap("", 100, 10) == [Line("", 0.0)]


def test_word_wider_than_max_width_stays_whole(measurer: TextMeasurer) -> None:
    long_word = "x" * 60
    max_width = measurer.measure("abc", 10)

    lines = measurer.wrap(f"a {long_word} b", max_width, 10)

    assert [line.text for line in lines] == ["a", long_word, "b"]
    assert lines[1].width > max_width


@pytest.mark.parametrize(
    "text",
    [
        "The quick brown fox jumps over the lazy dog",
        "Monday: launch teaser\nTuesday: behind the scenes\n\nWednesday: poll",
        "  leading and  double   spaces  ",
        "windows\r\nline endings",
        "trailing newline\n",
        "x" * 200,
    ],
)
def test_wrap_reconstructs_text(measurer: TextMeasurer, text: str) -> None:
    lines = measurer.wrap(text, 60, 10)

    expected = text.replace("\r\n", "\n")
    assert join_lines(lines) == expected


def test_unknown_font_raises_measurement_error() -> None:
    measurer = TextMeasurer("NoSuchFont-Regular")

    with pytest.raises(MeasurementError):
        measurer.wrap("hello", 100, 10)


def test_non_positive_font_size_raises_measurement_error(measurer: TextMeasurer) -> None:
    with pytest.raises(MeasurementError):
        measurer.wrap("hello", 100, 0)


def test_non_positive_width_is_rejected(measurer: TextMeasurer) -> None:
    with pytest.raises(ValueError):
        measurer.wrap("hello", 0, 10)


def test_tab_is_a_wrap_point(measurer: TextMeasurer) -> None:
    max_width = measurer.measure("alpha", 10)

    lines = measurer.wrap("alpha\tbeta", max_width, 10)

    assert [line.text for line in lines] == ["alpha", "beta"]
    assert lines[0].break_space == "\t"


def test_no_break_space_is_not_a_wrap_point(measurer: TextMeasurer) -> None:
    max_width = measurer.measure("alpha", 10)

    lines = measurer.wrap("alpha\u00a0beta", max_width, 10)

    assert [line.text for line in lines] == ["alpha\u00a0beta"]


def test_space_run_at_wrap_point_is_consumed(measurer: TextMeasurer) -> None:
    max_width = measurer.measure("alpha", 10)

    lines = measurer.wrap("alpha     beta", max_width, 10)

    assert [line.text for line in lines] == ["alpha", "beta"]
    assert all(line.text.strip() for line in lines)
    assert join_lines(lines) == "alpha     beta"


def test_fit_font_size_shrinks_only_when_needed(measurer: TextMeasurer) -> None:
    assert measurer.fit_font_size("short", 500, 14) == 14

    size = measurer.fit_font_size("A much longer heading than fits", 50, 14)

    assert size < 14
    assert measurer.measure("A much longer heading than fits", size) <= 50 + 1e-6
