import unittest

from hostdeck.adapters.tui.terminal import _sequence_complete, _utf8_length, decode_key


class TestDecodeKey(unittest.TestCase):
    def test_printable_characters_pass_through(self) -> None:
        for char in ("q", "G", "~", ".", "é"):
            self.assertEqual(decode_key(char), char)

    def test_control_keys(self) -> None:
        self.assertEqual(decode_key("\r"), "enter")
        self.assertEqual(decode_key("\t"), "tab")
        self.assertEqual(decode_key("\x7f"), "backspace")
        self.assertEqual(decode_key("\x1b"), "esc")
        self.assertEqual(decode_key("\x03"), "ctrl+c")
        self.assertEqual(decode_key("\x15"), "ctrl+u")
        self.assertEqual(decode_key("\x04"), "ctrl+d")

    def test_escape_sequences(self) -> None:
        self.assertEqual(decode_key("\x1b[A"), "up")
        self.assertEqual(decode_key("\x1bOB"), "down")
        self.assertEqual(decode_key("\x1b[Z"), "shift+tab")
        self.assertEqual(decode_key("\x1b[3~"), "delete")
        self.assertEqual(decode_key("\x1b[6~"), "pgdown")
        self.assertEqual(decode_key("\x1b[1;5C"), "unknown")

    def test_alt_keys(self) -> None:
        self.assertEqual(decode_key("\x1bx"), "alt+x")


class TestSequenceParsing(unittest.TestCase):
    def test_csi_completion(self) -> None:
        self.assertFalse(_sequence_complete(b""))
        self.assertFalse(_sequence_complete(b"["))
        self.assertFalse(_sequence_complete(b"[3"))
        self.assertTrue(_sequence_complete(b"[3~"))
        self.assertTrue(_sequence_complete(b"[A"))

    def test_ss3_and_alt_completion(self) -> None:
        self.assertFalse(_sequence_complete(b"O"))
        self.assertTrue(_sequence_complete(b"OA"))
        self.assertTrue(_sequence_complete(b"x"))

    def test_utf8_lengths(self) -> None:
        self.assertEqual(_utf8_length(ord("a")), 1)
        self.assertEqual(_utf8_length("é".encode()[0]), 2)
        self.assertEqual(_utf8_length("€".encode()[0]), 3)
        self.assertEqual(_utf8_length("😀".encode()[0]), 4)


if __name__ == "__main__":
    unittest.main()
