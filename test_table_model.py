import random
import unittest

from table_model import Column, TableModel, clamp, split_values
from table_styles import plain_styles


def _grid(n_rows, n_cols):
    return [[f"r{r}c{c}" for c in range(n_cols)] for r in range(n_rows)]


def _model(n_rows=5, n_cols=3, width=20, height=20, **kwargs):
    cols = [Column(f"c{i}", 4) for i in range(n_cols)]
    return TableModel(
        columns=cols,
        rows=_grid(n_rows, n_cols),
        width=width,
        height=height,
        styles=plain_styles(),
        **kwargs,
    )


class DefaultsTests(unittest.TestCase):
    def test_new_model_defaults(self):
        m = TableModel(styles=plain_styles())
        self.assertEqual(m.width(), 20)
        self.assertEqual(m.height(), 20)
        self.assertEqual((m.x_offset, m.y_offset), (0, 0))
        self.assertEqual((m.row, m.col), (0, 0))
        self.assertFalse(m.focused())
        self.assertFalse(m.cell_select)
        self.assertEqual(m.columns(), [])
        self.assertEqual(m.rows(), [])

    def test_focus_and_blur(self):
        m = _model()
        m.focus()
        self.assertTrue(m.focused())
        m.blur()
        self.assertFalse(m.focused())

    def test_set_styles(self):
        m = _model()
        styles = plain_styles()
        styles.header = 0
        m.set_styles(styles)
        self.assertIs(m.styles, styles)

    def test_width_and_height_saturate_at_one(self):
        m = _model()
        m.set_width(0)
        m.set_height(-4)
        self.assertEqual(m.width(), 1)
        self.assertEqual(m.height(), 1)


class VerticalMovementTests(unittest.TestCase):
    def test_move_down_scrolls_to_reveal_cursor(self):
        m = _model(n_rows=5, height=3)
        m.move_down(4)
        self.assertEqual(m.row, 4)
        self.assertEqual(m.y_offset, 2)

    def test_move_up_clamps_and_resets_offset(self):
        m = _model(n_rows=5, height=3)
        m.move_down(4)
        m.move_up(10)
        self.assertEqual(m.row, 0)
        self.assertEqual(m.y_offset, 0)

    def test_move_up_never_scrolls_down(self):
        m = _model(n_rows=10, height=3)
        m.move_down(9)
        self.assertEqual(m.y_offset, 7)
        m.move_up(1)
        self.assertEqual(m.row, 8)
        self.assertEqual(m.y_offset, 7)

    def test_move_down_never_scrolls_up(self):
        m = _model(n_rows=10, height=3)
        m.move_down(9)
        m.move_up(5)
        self.assertEqual(m.y_offset, 4)
        m.move_down(1)
        self.assertEqual(m.y_offset, 4)

    def test_round_trip_in_interior(self):
        m = _model(n_rows=50, height=7)
        m.move_down(20)
        start = m.row
        m.move_up(6)
        m.move_down(6)
        self.assertEqual(m.row, start)

    def test_goto_top_and_bottom(self):
        m = _model(n_rows=30, height=4)
        m.goto_bottom()
        self.assertEqual(m.row, 29)
        self.assertEqual(m.y_offset, 26)
        m.goto_top()
        self.assertEqual(m.row, 0)
        self.assertEqual(m.y_offset, 0)

    def test_page_and_half_page(self):
        m = _model(n_rows=40, height=10)
        m.page_down()
        self.assertEqual(m.row, 10)
        m.half_page_down()
        self.assertEqual(m.row, 15)
        m.half_page_up()
        self.assertEqual(m.row, 10)
        m.page_up()
        self.assertEqual(m.row, 0)
        self.assertEqual(m.y_offset, 0)


class HorizontalMovementTests(unittest.TestCase):
    def test_row_select_left_pan_floors_at_zero(self):
        m = _model(n_rows=2, n_cols=5, width=2)
        m.x_offset = 1
        m.move_left(1)
        self.assertEqual(m.x_offset, 0)
        m.move_left(1)
        self.assertEqual(m.x_offset, 0)
        m.move_left(1)
        self.assertEqual(m.x_offset, 0)

    def test_row_select_pan_scales_with_n(self):
        m = _model(n_rows=2, n_cols=10, width=2)
        m.move_right(3)
        self.assertEqual(m.x_offset, 3)
        m.move_right(100)
        self.assertEqual(m.x_offset, 8)
        m.move_left(5)
        self.assertEqual(m.x_offset, 3)
        self.assertEqual((m.row, m.col), (0, 0))

    def test_row_select_pan_on_narrow_grid_stays_at_zero(self):
        m = _model(n_rows=2, n_cols=3, width=20)
        m.move_right(1)
        self.assertEqual(m.x_offset, 0)

    def test_cell_select_follows_cursor(self):
        m = _model(n_rows=2, n_cols=10, width=3)
        m.toggle_cell_select()
        m.move_right(5)
        self.assertEqual(m.col, 5)
        self.assertEqual(m.x_offset, 3)
        m.move_left(4)
        self.assertEqual(m.col, 1)
        self.assertEqual(m.x_offset, 1)

    def test_cell_select_clamps_at_edges(self):
        m = _model(n_rows=2, n_cols=4, width=2)
        m.toggle_cell_select()
        m.move_right(50)
        self.assertEqual(m.col, 3)
        self.assertEqual(m.x_offset, 2)
        m.move_left(50)
        self.assertEqual(m.col, 0)
        self.assertEqual(m.x_offset, 0)


class SelectionTests(unittest.TestCase):
    def test_toggle_twice_restores_mode_and_position(self):
        m = _model(n_rows=10, n_cols=6, width=2, height=3)
        m.toggle_cell_select()
        m.move_down(5)
        m.move_right(4)
        before = (m.row, m.col, m.x_offset, m.y_offset, m.cell_select)
        m.toggle_cell_select()
        m.toggle_cell_select()
        self.assertEqual(before, (m.row, m.col, m.x_offset, m.y_offset, m.cell_select))

    def test_cursor_is_absolute_row(self):
        m = _model(n_rows=10, height=3)
        m.move_down(5)
        self.assertEqual(m.y_offset, 3)
        self.assertEqual(m.cursor(), 5)
        self.assertEqual(m.row_index(), 5)
        self.assertEqual(m.selected_row(), m.rows()[m.cursor()])

    def test_col_index_is_absolute(self):
        m = _model(n_rows=2, n_cols=10, width=3)
        m.toggle_cell_select()
        m.move_right(7)
        self.assertEqual(m.x_offset, 5)
        self.assertEqual(m.col_index(), 7)

    def test_selected_cell_only_in_cell_mode(self):
        m = _model(n_rows=3, n_cols=3)
        m.move_down(1)
        self.assertEqual(m.selected_cell(), "")
        m.toggle_cell_select()
        m.move_right(2)
        self.assertEqual(m.selected_cell(), "r1c2")

    def test_direct_setters_clamp_without_scrolling(self):
        m = _model(n_rows=10, n_cols=4, height=3)
        m.set_cursor(99)
        self.assertEqual(m.row, 9)
        self.assertEqual(m.y_offset, 0)
        m.set_row_index(-3)
        self.assertEqual(m.row, 0)
        m.set_col_index(7)
        self.assertEqual(m.col, 3)
        self.assertEqual(m.x_offset, 0)


class GridTests(unittest.TestCase):
    def test_from_values(self):
        m = TableModel(styles=plain_styles())
        m.from_values("a,b\nc,d", ",")
        self.assertEqual(m.rows(), [["a", "b"], ["c", "d"]])
        self.assertEqual(m.row_width(), 2)

    def test_from_values_empty_separator_splits_characters(self):
        m = TableModel(styles=plain_styles())
        m.from_values("abc\ndef", "")
        self.assertEqual(m.rows(), [["a", "b", "c"], ["d", "e", "f"]])

    def test_split_values_has_no_quoting(self):
        self.assertEqual(split_values('"a,b",c', ","), [['"a', 'b"', "c"]])

    def test_ragged_rows_are_padded(self):
        m = TableModel(styles=plain_styles())
        m.from_values("a\nb,c,d\ne,f", ",")
        self.assertEqual(m.row_width(), 3)
        self.assertEqual(m.rows(), [["a", "", ""], ["b", "c", "d"], ["e", "f", ""]])

    def test_short_first_row_does_not_limit_width(self):
        m = TableModel(rows=[["a"], ["b", "c", "d"]], styles=plain_styles())
        m.toggle_cell_select()
        m.move_right(2)
        self.assertEqual(m.col, 2)

    def test_set_rows_reclamps_cursor(self):
        m = _model(n_rows=20, n_cols=5, width=2, height=4)
        m.toggle_cell_select()
        m.goto_bottom()
        m.move_right(4)
        m.set_rows(_grid(3, 2))
        self.assertEqual(m.row, 2)
        self.assertEqual(m.col, 1)
        self.assertLessEqual(m.y_offset, m.row)
        self.assertEqual(m.x_offset, 0)

    def test_set_columns(self):
        m = _model()
        m.set_columns([Column("x", 3)])
        self.assertEqual(m.columns(), [Column("x", 3)])

    def test_visible_ranges(self):
        m = _model(n_rows=10, n_cols=6, width=4, height=3)
        m.move_down(5)
        m.move_right(1)
        self.assertEqual(list(m.visible_rows()), [3, 4, 5])
        self.assertEqual(list(m.visible_columns()), [1, 2, 3, 4])


class EmptyGridTests(unittest.TestCase):
    def test_movement_is_noop(self):
        m = TableModel(styles=plain_styles(), focused=True)
        m.move_down(3)
        m.move_up(3)
        m.move_right(2)
        m.move_left(2)
        m.goto_bottom()
        m.goto_top()
        m.toggle_cell_select()
        self.assertEqual((m.row, m.col, m.x_offset, m.y_offset), (0, 0, 0, 0))

    def test_accessors_are_safe(self):
        m = TableModel(styles=plain_styles())
        m.toggle_cell_select()
        self.assertEqual(m.cursor(), 0)
        self.assertEqual(m.col_index(), 0)
        self.assertEqual(m.selected_row(), [])
        self.assertEqual(m.selected_cell(), "")
        self.assertTrue(m.is_empty())


class KeyDispatchTests(unittest.TestCase):
    def test_unfocused_model_ignores_keys(self):
        m = _model(n_rows=5)
        self.assertFalse(m.handle_key(ord("j")))
        self.assertEqual(m.row, 0)

    def test_focused_model_dispatches(self):
        m = _model(n_rows=50, height=10, focused=True)
        self.assertTrue(m.handle_key(ord("j")))
        self.assertEqual(m.row, 1)
        m.handle_key(ord("G"))
        self.assertEqual(m.row, 49)
        m.handle_key(ord("g"))
        self.assertEqual(m.row, 0)
        m.handle_key(ord("f"))
        self.assertEqual(m.row, 10)
        m.handle_key(ord("u"))
        self.assertEqual(m.row, 5)
        m.handle_key(ord("t"))
        self.assertTrue(m.cell_select)

    def test_count_multiplies_line_moves(self):
        m = _model(n_rows=50, height=10, focused=True)
        m.handle_key(ord("j"), count=7)
        self.assertEqual(m.row, 7)
        m.handle_key(ord("d"), count=2)
        self.assertEqual(m.row, 17)

    def test_unbound_key_returns_false(self):
        m = _model(focused=True)
        self.assertFalse(m.handle_key(ord("z")))


def test_clamp():
    assert clamp(5, 0, 3) == 3
    assert clamp(-1, 0, 3) == 0
    assert clamp(2, 0, 3) == 2


def test_random_movement_keeps_invariants():
    rng = random.Random(1337)
    for trial in range(40):
        n_rows = rng.randint(1, 30)
        n_cols = rng.randint(1, 12)
        m = _model(
            n_rows=n_rows,
            n_cols=n_cols,
            width=rng.randint(1, 8),
            height=rng.randint(1, 8),
        )
        for _ in range(60):
            op = rng.choice(["up", "down", "left", "right", "toggle", "top", "bottom"])
            n = rng.randint(0, 12)
            if op == "up":
                m.move_up(n)
            elif op == "down":
                m.move_down(n)
            elif op == "left":
                m.move_left(n)
            elif op == "right":
                m.move_right(n)
            elif op == "toggle":
                m.toggle_cell_select()
            elif op == "top":
                m.goto_top()
                assert m.row == 0 and m.y_offset == 0
            else:
                m.goto_bottom()
                assert m.row == n_rows - 1

            assert 0 <= m.row <= n_rows - 1
            assert 0 <= m.col <= n_cols - 1
            assert m.x_offset >= 0
            if op in ("up", "down", "top", "bottom"):
                assert m.y_offset <= m.row <= m.y_offset + m.height() - 1


if __name__ == "__main__":
    unittest.main()
