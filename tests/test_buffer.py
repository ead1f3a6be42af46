import pytest

from writeonly.buffer import Buffer, BufferValidationError, previous_word_start


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("hello world", 6),
        ("hello world   ", 6),
        ("foo.bar", 4),
        ("foo...", 3),
        ("snake_case_name", 0),
        ("one\n", 0),
        ("   ", 0),
        ("", 0),
    ],
)
def test_previous_word_start(text: str, expected: int) -> None:
    assert previous_word_start(text, len(text)) == expected


def test_from_text_places_cursor_at_end() -> None:
    buffer = Buffer.from_text("first\nsecond")

    assert buffer.state.cursor == (1, 6)
    assert buffer.version == 0


def test_insert_and_delete_backward() -> None:
    buffer = Buffer()

    buffer.insert_text("abc")
    delta = buffer.delete_backward()

    assert buffer.text == "ab"
    assert delta is not None and delta.removed == "c"
    assert buffer.state.cursor == (0, 2)
    assert buffer.version == 2


def test_delete_backward_at_start_is_noop() -> None:
    buffer = Buffer()

    assert buffer.delete_backward() is None
    assert buffer.version == 0


def test_delete_forward() -> None:
    buffer = Buffer.from_text("abc")
    buffer.move_horizontal(-2)

    buffer.delete_forward()

    assert buffer.text == "ac"
    assert buffer.state.cursor == (0, 1)


def test_delete_previous_word_sequence() -> None:
    buffer = Buffer.from_text("one two.three")

    removed = []
    while True:
        delta = buffer.delete_previous_word()
        if delta is None:
            break
        removed.append(delta.removed)

    assert removed == ["three", ".", "two", "one "]
    assert buffer.text == ""


def test_delete_previous_word_crosses_lines() -> None:
    buffer = Buffer.from_text("first line\n")

    delta = buffer.delete_previous_word()

    assert delta is not None
    assert buffer.text == "first "
    assert buffer.state.cursor == (0, 6)


def test_vertical_motion_clamps_column() -> None:
    buffer = Buffer.from_text("a long line\nab")
    buffer.move_vertical(-1)
    buffer.move_horizontal(5)

    buffer.move_vertical(1)

    assert buffer.state.cursor == (1, 2)


def test_replace_range_validates_cursor() -> None:
    buffer = Buffer.from_text("abc")

    with pytest.raises(BufferValidationError):
        buffer.replace_range((0, 0), (3, 0), "", label="bad")
