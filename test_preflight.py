"""Tests for preflight analysis."""
import pytest

from draftkit.preflight import analyze_document, aggregate_severity, PreflightIssue


class TestEmptyDocument:
    @pytest.mark.parametrize("content", ["", "   \n\t  ", None])
    def test_empty_content_has_no_issues(self, content):
        report = analyze_document(content)
        assert report.severity == "none"
        assert report.issues == []
        assert report.has_large_document is False

    def test_clean_document(self):
        report = analyze_document("# Notes\n\nA plain paragraph with (balanced) [marks].")
        assert report.severity == "none"
        assert not report.is_blocking


class TestParseRisk:
    def test_single_backtick_is_a_parse_issue(self):
        report = analyze_document("Use `unbalanced here")
        assert report.kinds() == ["parse"]
        assert report.severity == "minor"

    def test_matching_backticks_are_fine(self):
        assert analyze_document("Use `balanced` here").issues == []

    @pytest.mark.parametrize("content", ["a [b", "a ]b", "smile :)", "(open"])
    def test_unbalanced_brackets_or_parens(self, content):
        assert "parse" in analyze_document(content).kinds()


class TestOverflow:
    def test_line_over_360_characters_is_major(self):
        report = analyze_document("a" * 400)
        assert report.kinds() == ["overflow"]
        assert report.severity == "major"
        assert report.is_blocking

    def test_line_at_limit_is_fine(self):
        assert analyze_document("a" * 360).issues == []


class TestFonts:
    def test_unknown_font_is_minor(self):
        report = analyze_document("Heading [font: Comic Sans]")
        assert report.kinds() == ["missing-font"]
        assert report.severity == "minor"

    def test_supported_font_case_insensitive(self):
        assert analyze_document("[FONT:  Georgia ]").issues == []

    def test_only_first_font_tag_is_checked(self):
        assert analyze_document("[font: Inter] then [font: Wingdings]").issues == []


class TestImages:
    @pytest.mark.parametrize(
        "content",
        ["![a](images/missing-cat.png)", "![a](https://cdn.example/404.png)", "![a]()", "![a](  )"],
    )
    def test_broken_image_is_major(self, content):
        report = analyze_document(content)
        assert report.kinds() == ["image-failure"]
        assert report.severity == "major"

    def test_good_image_is_fine(self):
        assert analyze_document("![a](images/cat.png)").issues == []


class TestLargeDocument:
    def test_many_lines(self):
        report = analyze_document("word\n" * 901)
        assert report.kinds() == ["large-document"]
        assert report.has_large_document
        assert report.severity == "minor"

    def test_many_characters(self):
        report = analyze_document("\n".join(["b" * 300] * 70))
        assert report.kinds() == ["large-document"]


class TestAggregation:
    def test_multiple_issues_reported_together(self):
        report = analyze_document("`" + "a" * 400 + " [font: Papyrus]")
        assert report.kinds() == ["parse", "overflow", "missing-font"]
        assert report.severity == "major"

    def test_aggregate_severity(self):
        minor = PreflightIssue("parse", "minor", "t", "d")
        major = PreflightIssue("overflow", "major", "t", "d")
        assert aggregate_severity([]) == "none"
        assert aggregate_severity([minor]) == "minor"
        assert aggregate_severity([minor, major]) == "major"

    def test_to_dataframe(self):
        df = analyze_document("`" + "a" * 400).to_dataframe()
        assert list(df.columns) == ["Level", "Issue", "Details"]
        assert list(df["Level"]) == ["minor", "major"]
