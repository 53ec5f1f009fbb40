"""
Tests for text metric helpers.
"""


class TestCountWords:
    """Tests for word counting."""

    def test_whitespace_separated(self):
        """Test counting across mixed whitespace."""
        from bidwriter.utils.text import count_words

        assert count_words("one two\tthree\n\nfour  five") == 5

    def test_empty(self):
        """Test empty and missing text."""
        from bidwriter.utils.text import count_words

        assert count_words("") == 0
        assert count_words("   ") == 0
        assert count_words(None) == 0


class TestEstimatePages:
    """Tests for page estimation."""

    def test_rounds_up(self):
        """Test that partial pages count as whole pages."""
        from bidwriter.utils.text import estimate_pages

        assert estimate_pages("word " * 300) == 1
        assert estimate_pages("word " * 301) == 2
        assert estimate_pages("") == 0


class TestCountWholeWord:
    """Tests for whole-word counting."""

    def test_case_sensitive_by_default(self):
        """Test exact-case matching."""
        from bidwriter.utils.text import count_whole_word

        assert count_whole_word("I said I would, if I could. i In", "I") == 3

    def test_ignore_case(self):
        """Test case-insensitive matching."""
        from bidwriter.utils.text import count_whole_word

        assert count_whole_word("Very very VERY every", "very", ignore_case=True) == 3

    def test_count_terms(self):
        """Test combined counts of several terms."""
        from bidwriter.utils.text import count_terms

        assert count_terms("quite fairly rather quietly", ["quite", "fairly", "rather"]) == 3

    def test_accented_letters_are_boundaries(self):
        """Test that a word after an accented letter still counts."""
        from bidwriter.utils.text import count_whole_word

        assert count_whole_word("évery " * 3, "very", ignore_case=True) == 3
        assert count_whole_word("naïve", "ve") == 1
