from shin.input_buffer import LineBuffer


def _buf(text: str, cursor: int | None = None) -> LineBuffer:
    buf = LineBuffer()
    buf.set_text(text)
    if cursor is not None:
        buf._cursor = cursor
    return buf


class TestInsertAndBasicState:
    def test_empty_initial_state(self):
        buf = LineBuffer()
        assert buf.text == ""
        assert buf.cursor == 0
        assert len(buf) == 0

    def test_insert_single_char(self):
        buf = LineBuffer()
        assert buf.insert("a")
        assert buf.text == "a"
        assert buf.cursor == 1

    def test_insert_at_middle(self):
        buf = _buf("ac", 1)
        buf.insert("b")
        assert buf.text == "abc"
        assert buf.cursor == 2

    def test_insert_at_beginning(self):
        buf = _buf("bc")
        buf.move_home()
        buf.insert("a")
        assert buf.text == "abc"
        assert buf.cursor == 1

    def test_insert_empty_is_no_change(self):
        buf = _buf("abc")
        assert not buf.insert("")
        assert buf.text == "abc"

    def test_cursor_counts_characters_not_bytes(self):
        buf = LineBuffer()
        for c in "né":
            buf.insert(c)
        buf.insert("e")
        assert buf.text == "née"
        assert buf.cursor == 3


class TestDeleteBefore:
    def test_at_end(self):
        buf = _buf("hello")
        assert buf.delete_before()
        assert buf.text == "hell"
        assert buf.cursor == 4

    def test_at_middle(self):
        buf = _buf("hello", 3)
        buf.delete_before()
        assert buf.text == "helo"
        assert buf.cursor == 2

    def test_at_beginning_is_noop(self):
        buf = _buf("hello", 0)
        assert not buf.delete_before()
        assert buf.text == "hello"
        assert buf.cursor == 0

    def test_non_ascii_character(self):
        buf = _buf("añb", 2)
        buf.delete_before()
        assert buf.text == "ab"
        assert buf.cursor == 1

    def test_insert_then_delete_restores_every_position(self):
        for c in range(len("command") + 1):
            buf = _buf("command", c)
            buf.insert("x")
            buf.delete_before()
            assert buf.text == "command"
            assert buf.cursor == c


class TestDeleteAfter:
    def test_at_cursor(self):
        buf = _buf("hello", 2)
        assert buf.delete_after()
        assert buf.text == "helo"
        assert buf.cursor == 2

    def test_at_beginning(self):
        buf = _buf("hello", 0)
        buf.delete_after()
        assert buf.text == "ello"
        assert buf.cursor == 0

    def test_at_end_is_noop(self):
        buf = _buf("hello")
        assert not buf.delete_after()
        assert buf.text == "hello"
        assert buf.cursor == 5

    def test_empty(self):
        buf = LineBuffer()
        assert not buf.delete_after()
        assert buf.text == ""


class TestMove:
    def test_left_and_right(self):
        buf = _buf("abc")
        assert buf.move(-1)
        assert buf.cursor == 2
        assert buf.move(1)
        assert buf.cursor == 3

    def test_clamps_at_start(self):
        buf = _buf("abc", 1)
        buf.move(-10)
        assert buf.cursor == 0

    def test_clamps_at_end(self):
        buf = _buf("abc", 1)
        buf.move(10)
        assert buf.cursor == 3

    def test_no_motion_reports_false(self):
        buf = _buf("abc")
        assert not buf.move(1)

    def test_never_leaves_the_line(self):
        for offset in (-1000, -4, -3, -1, 0, 1, 3, 4, 1000):
            for start in range(4):
                buf = _buf("abc", start)
                buf.move(offset)
                assert 0 <= buf.cursor <= 3

    def test_move_does_not_change_text(self):
        buf = _buf("abc")
        buf.move(-2)
        assert buf.text == "abc"


class TestHomeEnd:
    def test_move_home(self):
        buf = _buf("hello world")
        buf.move_home()
        assert buf.cursor == 0

    def test_move_end(self):
        buf = _buf("hello world", 0)
        buf.move_end()
        assert buf.cursor == 11

    def test_home_on_empty(self):
        buf = LineBuffer()
        assert not buf.move_home()
        assert buf.cursor == 0


class TestMoveToBoundary:
    def test_word_left_from_end(self):
        buf = _buf("hello world")
        buf.move_to_boundary(-1)
        assert buf.cursor == 6

    def test_word_left_stops_at_end_of_previous_word(self):
        buf = _buf("hello world", 6)
        buf.move_to_boundary(-1)
        assert buf.cursor == 5

    def test_word_right_from_start(self):
        buf = _buf("hello world", 0)
        buf.move_to_boundary(1)
        assert buf.cursor == 5

    def test_word_right_at_end(self):
        buf = _buf("hello")
        assert not buf.move_to_boundary(1)
        assert buf.cursor == 5

    def test_word_left_at_start(self):
        buf = _buf("hello", 0)
        assert not buf.move_to_boundary(-1)
        assert buf.cursor == 0

    def test_word_jumps_roundtrip(self):
        buf = _buf("git log -n 5", 0)
        stops = []
        while buf.move_to_boundary(1):
            stops.append(buf.cursor)
        assert stops == [3, 4, 7, 9, 10, 11, 12]
        back = []
        while buf.move_to_boundary(-1):
            back.append(buf.cursor)
        assert back == [11, 10, 9, 7, 4, 3, 0]


class TestSetTextAndClear:
    def test_set_text(self):
        buf = LineBuffer()
        assert buf.set_text("hello")
        assert buf.text == "hello"
        assert buf.cursor == 5

    def test_set_same_text_reports_no_change(self):
        buf = _buf("hello", 0)
        assert not buf.set_text("hello")
        assert buf.cursor == 5

    def test_clear_returns_text(self):
        buf = _buf("hello")
        assert buf.clear() == "hello"
        assert buf.text == ""
        assert buf.cursor == 0
