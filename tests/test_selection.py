import unittest

from hostdeck.domain.selection import clamp_index, clamp_scroll, move_index


class TestClampIndex(unittest.TestCase):
    def test_empty_collection_gives_zero(self) -> None:
        self.assertEqual(clamp_index(5, 0), 0)
        self.assertEqual(clamp_index(-3, 0), 0)

    def test_index_is_kept_inside_bounds(self) -> None:
        self.assertEqual(clamp_index(-1, 3), 0)
        self.assertEqual(clamp_index(1, 3), 1)
        self.assertEqual(clamp_index(7, 3), 2)

    def test_move_index_stops_at_edges(self) -> None:
        self.assertEqual(move_index(0, -1, 4), 0)
        self.assertEqual(move_index(3, 1, 4), 3)
        self.assertEqual(move_index(1, 1, 4), 2)


class TestClampScroll(unittest.TestCase):
    def test_selection_above_window_scrolls_up(self) -> None:
        self.assertEqual(clamp_scroll(2, 5, 10), 2)

    def test_selection_below_window_scrolls_minimally(self) -> None:
        self.assertEqual(clamp_scroll(15, 0, 10), 6)

    def test_selection_inside_window_keeps_offset(self) -> None:
        self.assertEqual(clamp_scroll(7, 3, 10), 3)

    def test_selected_row_always_visible(self) -> None:
        for visible in (1, 2, 5, 10):
            offset = 0
            for selected in list(range(30)) + list(range(29, -1, -1)):
                offset = clamp_scroll(selected, offset, visible)
                self.assertLessEqual(offset, selected)
                self.assertLess(selected, offset + visible)

    def test_non_positive_height_is_treated_as_one_row(self) -> None:
        self.assertEqual(clamp_scroll(4, 0, 0), 4)


if __name__ == "__main__":
    unittest.main()
