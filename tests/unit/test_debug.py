"""Tests for the debug module."""

from minigraphviz.debug import first_difference, visual_diff


class TestFirstDifference:
    """Tests for first_difference."""

    def test_equal(self):
        assert first_difference("a\nb", "a\nb") is None

    def test_column_in_line(self):
        assert first_difference("a\nabc", "a\nabd") == (1, 2)

    def test_extra_lines(self):
        assert first_difference("a", "a\nb") == (1, 0)

    def test_missing_lines(self):
        assert first_difference("a\nb", "a") == (1, 0)


class TestVisualDiff:
    """Tests for visual_diff."""

    def test_no_differences(self):
        assert visual_diff("digraph {\n}", "digraph {\n}") == "No differences found."

    def test_reports_actual_and_expected_line(self):
        expected = "digraph {\n    n1 [label=\"a\"]\n}"
        actual = "digraph {\n    n1 [label=\"b\"]\n}"

        result = visual_diff(expected, actual)

        assert "line 2, column 16" in result
        assert "Actual line 2 reads" in result
        assert "^ expected: '    n1 [label=\"a\"]'" in result

    def test_extraneous_content(self):
        result = visual_diff("digraph {\n}", "digraph {\n}\nextra")
        assert "Extraneous content after line 2" in result

    def test_missing_content(self):
        result = visual_diff("digraph {\n    n1\n}", "digraph {")
        assert "Expected matching line '    n1'" in result
        assert "^ missing: '    n1'" in result

    def test_omitted_line_counts(self):
        expected = "\n".join(str(i) for i in range(20))
        actual = expected.replace("10", "ten")
        result = visual_diff(expected, actual, context_lines=2)
        assert "--- [8 lines omitted]" in result
        assert "--- [7 lines omitted]" in result
