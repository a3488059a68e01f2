import unittest

from hostdeck.domain.modal import NO, YES, ConfirmationModal


def new_modal() -> ConfirmationModal:
    return ConfirmationModal("Delete Connection", "Delete 'web'? This cannot be undone.")


class TestConfirmationModal(unittest.TestCase):
    def test_defaults_to_no(self) -> None:
        modal = new_modal()
        self.assertEqual(modal.selected, NO)
        modal.update("enter")
        self.assertTrue(modal.is_cancelled)
        self.assertFalse(modal.is_confirmed)

    def test_left_then_enter_confirms(self) -> None:
        modal = new_modal()
        modal.update("left")
        self.assertEqual(modal.selected, YES)
        modal.update("enter")
        self.assertTrue(modal.is_confirmed)

    def test_vim_keys_and_tab(self) -> None:
        modal = new_modal()
        modal.update("h")
        self.assertEqual(modal.selected, YES)
        modal.update("l")
        self.assertEqual(modal.selected, NO)
        modal.update("tab")
        self.assertEqual(modal.selected, YES)

    def test_escape_cancels_even_with_yes_selected(self) -> None:
        for key in ("esc", "ctrl+c", "q"):
            modal = new_modal()
            modal.update("left")
            modal.update(key)
            self.assertTrue(modal.is_cancelled, key)

    def test_other_keys_leave_it_open(self) -> None:
        modal = new_modal()
        for key in ("y", "x", "down"):
            modal.update(key)
        self.assertTrue(modal.is_open)

    def test_resolved_modal_ignores_keys(self) -> None:
        modal = new_modal()
        modal.update("enter")
        modal.update("left")
        modal.update("enter")
        self.assertTrue(modal.is_cancelled)


if __name__ == "__main__":
    unittest.main()
