from chattally.utils.text import normalize


class TestNormalize:
    def test_lowercases(self):
        assert normalize("POG") == "pog"

    def test_trims_whitespace(self):
        assert normalize("  pog \t") == "pog"

    def test_keeps_inner_whitespace(self):
        assert normalize("Good  Game") == "good  game"

    def test_strips_control_characters(self):
        assert normalize("p\x00o\x07g\n") == "pog"

    def test_strips_format_characters(self):
        # zero width space is Cf, not whitespace
        assert normalize("\u200bpog\u200b") == "pog"

    def test_strips_private_use_characters(self):
        assert normalize("pog\ue000") == "pog"

    def test_casefolds_beyond_lower(self):
        assert normalize("STRASSE") == normalize("straße")

    def test_empty_string(self):
        assert normalize("") == ""

    def test_only_controls(self):
        assert normalize("\x01\x02") == ""

    def test_emoji_preserved(self):
        assert normalize(" Yes 👍 ") == "yes 👍"
