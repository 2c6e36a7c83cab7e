"""Unit tests for line lexing: comments, tokens and assignments."""

from sage_ini.ini.lexer import split_assignment, strip_comment, tokenize


class TestStripComment:
    """Test comment removal."""

    def test_trailing_comment_removed(self) -> None:
        """Test a ; comment is cut from the line."""
        assert strip_comment("BuildCost = 300 ; cheap").rstrip() == "BuildCost = 300"

    def test_full_line_comment(self) -> None:
        """Test a line that is only a comment becomes empty."""
        assert strip_comment("; just a note").strip() == ""

    def test_semicolon_inside_quotes_kept(self) -> None:
        """Test ; inside a quoted span is not a comment."""
        line = 'DisplayName = "Tank; Heavy" ; comment'
        assert strip_comment(line).rstrip() == 'DisplayName = "Tank; Heavy"'

    def test_double_slash_is_not_a_comment(self) -> None:
        """Test paths with // in unquoted values survive."""
        line = "ButtonImage = Art//Textures//Foo"
        assert strip_comment(line) == line

    def test_no_comment_unchanged(self) -> None:
        """Test a line without comment markers is returned as is."""
        assert strip_comment("KindOf = INFANTRY") == "KindOf = INFANTRY"

    def test_unbalanced_quote_hides_comment(self) -> None:
        """Test an unclosed quote keeps the rest of the line."""
        line = 'Name = "open ; still quoted'
        assert strip_comment(line) == line


class TestTokenize:
    """Test tokenization."""

    def test_equals_is_separator(self) -> None:
        """Test the lone = is dropped and the rest split on spaces."""
        assert tokenize("KindOf = INFANTRY SELECTABLE CAN_ATTACK") == [
            "KindOf",
            "INFANTRY",
            "SELECTABLE",
            "CAN_ATTACK",
        ]

    def test_quoted_span_single_token(self) -> None:
        """Test quoted spans keep their quotes and spaces."""
        assert tokenize('DisplayName = "Hello World"') == ["DisplayName", '"Hello World"']

    def test_tabs_and_repeated_spaces(self) -> None:
        """Test empty tokens are discarded."""
        assert tokenize("  Object\t\tRanger   ") == ["Object", "Ranger"]

    def test_equals_without_spaces(self) -> None:
        """Test key=value without spaces still splits."""
        assert tokenize("ModuleTag=Tag_01") == ["ModuleTag", "Tag_01"]

    def test_equals_inside_quotes_kept(self) -> None:
        """Test = inside quotes does not split."""
        assert tokenize('Text = "a=b"') == ["Text", '"a=b"']

    def test_unbalanced_quote_never_raises(self) -> None:
        """Test an odd number of quotes degrades gracefully."""
        assert tokenize('Name = "open ended') == ["Name", '"open ended']

    def test_empty_line(self) -> None:
        """Test empty input yields no tokens."""
        assert tokenize("") == []


class TestSplitAssignment:
    """Test key/value splitting of property lines."""

    def test_with_equals(self) -> None:
        """Test the value keeps its inner spacing."""
        assert split_assignment("DisplayColor = R:100 G:150 B:255") == (
            "DisplayColor",
            "R:100 G:150 B:255",
        )

    def test_without_equals(self) -> None:
        """Test whitespace-separated assignment."""
        assert split_assignment("Side America") == ("Side", "America")

    def test_empty_value_after_equals(self) -> None:
        """Test an explicit empty value is allowed."""
        assert split_assignment("DisplayName =") == ("DisplayName", "")

    def test_key_only_is_unparseable(self) -> None:
        """Test a lone word cannot be a property."""
        assert split_assignment("Lonely") is None

    def test_leading_equals_is_unparseable(self) -> None:
        """Test a line with no key is rejected."""
        assert split_assignment("= 5") is None

    def test_equals_in_quoted_value(self) -> None:
        """Test only the first unquoted = separates key and value."""
        assert split_assignment('Text = "a=b"') == ("Text", '"a=b"')
