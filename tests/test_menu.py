import unittest

from hostdeck.domain.menu import ModeSelectionMenu, SessionMode


class TestModeSelectionMenu(unittest.TestCase):
    def test_enter_picks_highlighted_mode(self) -> None:
        menu = ModeSelectionMenu()
        menu.update("j").update("j").update("enter")
        self.assertEqual(menu.chosen, SessionMode.SFTP)

    def test_shortcuts(self) -> None:
        self.assertEqual(ModeSelectionMenu().update("s").chosen, SessionMode.SSH)
        self.assertEqual(ModeSelectionMenu().update("f").chosen, SessionMode.SFTP)

    def test_cancel(self) -> None:
        for key in ("esc", "h", "left"):
            menu = ModeSelectionMenu().update(key)
            self.assertTrue(menu.cancelled)
            self.assertIsNone(menu.chosen)

    def test_finished_menu_ignores_keys(self) -> None:
        menu = ModeSelectionMenu().update("s")
        menu.update("f")
        self.assertEqual(menu.chosen, SessionMode.SSH)


if __name__ == "__main__":
    unittest.main()
