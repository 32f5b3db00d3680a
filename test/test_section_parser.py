"""
Tests for the release body tokenizer and section parser
"""
from domain.changelog.parse.headline import Headline
from domain.changelog.parse.section_parser import parse_release_section
from domain.changelog.parse.tokens import TokenCursor, TokenKind, tokenize
from domain.changelog.section import UnknownBlock
from domain.changelog.segment import PARSED, Clippy, Details, Statistics, User
from domain.changelog.version import UNRELEASED, SemanticVersion


def unreleased_headline(level=2):
    return Headline(level=level, version_prefix="", version=None, date=None)


class TestTokenize:
    """Test block tokenization of a release body."""

    def test_blank_lines_are_not_tokens(self):
        body = "\n- one\n\n- two\n\n"
        tokens = tokenize(body)

        assert [t.kind for t in tokens] == [TokenKind.LINE, TokenKind.LINE]
        assert body[tokens[0].start:tokens[0].end] == "- one\n"
        assert body[tokens[1].start:tokens[1].end] == "- two\n"

    def test_heading_level_and_title(self):
        tokens = tokenize("### Commit Details ###\n")

        assert tokens[0].kind is TokenKind.HEADING
        assert tokens[0].level == 3
        assert tokens[0].title == "Commit Details"

    def test_fenced_code_block_hides_headings(self):
        """Test that a heading inside a fence is part of the code block."""
        body = "```\n### Commit Details\n```\nafter\n"
        tokens = tokenize(body)

        assert [t.kind for t in tokens] == [TokenKind.CODE_BLOCK, TokenKind.LINE]
        assert body[tokens[0].start:tokens[0].end] == "```\n### Commit Details\n```\n"

    def test_unclosed_fence_runs_to_end(self):
        body = "~~~\ncode\n"
        tokens = tokenize(body)

        assert len(tokens) == 1
        assert tokens[0].end == len(body)

    def test_unclosed_fence_ends_at_last_content_line(self):
        """Test that blank lines after an unclosed fence stay outside the code block."""
        body = "```\ncode\n\n  \n"
        tokens = tokenize(body)

        assert len(tokens) == 1
        assert body[tokens[0].start:tokens[0].end] == "```\ncode\n"

    def test_unclosed_fence_keeps_inner_blank_lines(self):
        body = "```\na\n\nb\n\n"
        tokens = tokenize(body)

        assert body[tokens[0].start:tokens[0].end] == "```\na\n\nb\n"

    def test_sentinel_tags(self):
        tokens = tokenize("<csr-unknown>\nx\n<csr-unknown/>\n")

        assert [t.kind for t in tokens] == [TokenKind.UNKNOWN_START, TokenKind.LINE, TokenKind.UNKNOWN_END]


class TestTokenCursor:
    """Test the explicit token cursor."""

    def test_peek_does_not_consume(self):
        cursor = TokenCursor(tokenize("a\nb\n"))

        assert cursor.peek() is cursor.peek()
        first = cursor.advance()
        assert cursor.peek() is not first

    def test_advance_at_end_returns_none(self):
        cursor = TokenCursor([])

        assert cursor.at_end()
        assert cursor.advance() is None
        assert cursor.peek() is None

    def test_skip_to_heading_stops_at_same_level(self):
        """Test that deeper headings are skipped but a same-level heading is not."""
        cursor = TokenCursor(tokenize("text\n#### deeper\nmore\n### Next\n"))
        cursor.skip_to_heading(3)

        token = cursor.peek()
        assert token.kind is TokenKind.HEADING
        assert token.title == "Next"

    def test_skip_to_heading_stops_at_unknown_start(self):
        cursor = TokenCursor(tokenize("stale\n<csr-unknown>\nkept\n<csr-unknown/>\n"))
        cursor.skip_to_heading(3)

        assert cursor.peek().kind is TokenKind.UNKNOWN_START


class TestParseReleaseSection:
    """Test conversion of one release body into segments."""

    def test_plain_body_is_one_user_segment(self):
        """Test that ordinary content is kept verbatim, including inner blank lines."""
        body = "\n- one\n\n- two\n\n"
        release = parse_release_section(unreleased_headline(), body)

        assert release.name == UNRELEASED
        assert release.segments == [User(markdown="- one\n\n- two\n")]
        assert release.unknown == ""

    def test_unrecognized_heading_is_user_content(self):
        body = "### Added\n\n- feature\n"
        release = parse_release_section(unreleased_headline(), body)

        assert release.segments == [User(markdown="### Added\n\n- feature\n")]

    def test_recognized_headings_become_markers(self):
        """Test that generated headings become Parsed markers and their stale bodies are dropped."""
        body = (
            "intro\n"
            "\n"
            "### Thanks Clippy\n"
            "\n"
            "stale clippy text\n"
            "\n"
            "### Commit Statistics\n"
            "\n"
            " - 3 commits\n"
            "\n"
            "### Commit Details\n"
            "\n"
            "<details>\n"
            "#### nested heading\n"
            "</details>\n"
        )
        release = parse_release_section(unreleased_headline(), body)

        assert release.segments == [
            User(markdown="intro\n"),
            Clippy(PARSED),
            Statistics(PARSED),
            Details(PARSED),
        ]

    def test_title_prefix_match(self):
        release = parse_release_section(unreleased_headline(), "### Commit Details (v1)\n\nold\n")

        assert release.segments == [Details(PARSED)]

    def test_user_content_after_generated_segment_at_same_level(self):
        body = "### Commit Statistics\n\nold\n\n### Notes\n\nkeep me\n"
        release = parse_release_section(unreleased_headline(), body)

        assert release.segments == [Statistics(PARSED), User(markdown="### Notes\n\nkeep me\n")]

    def test_unknown_content_is_captured_byte_for_byte(self):
        """Test that sentinel-delimited content is kept out of segments and preserved exactly."""
        body = (
            "before\n"
            "<csr-unknown>\n"
            "  odd   spacing\n"
            "\n"
            "### Commit Details\n"
            "<csr-unknown/>\n"
            "after\n"
        )
        release = parse_release_section(unreleased_headline(), body)

        assert release.unknown == "  odd   spacing\n\n### Commit Details\n"
        assert release.segments == [User(markdown="before\n"), User(markdown="after\n")]
        assert release.unknown_blocks == [UnknownBlock(position=1, text="  odd   spacing\n\n### Commit Details\n")]

    def test_unclosed_unknown_runs_to_end(self):
        release = parse_release_section(unreleased_headline(), "<csr-unknown>\nrest\n")

        assert release.unknown == "rest\n"
        assert release.segments == []

    def test_headline_fields_are_copied(self):
        headline = Headline(level=3, version_prefix="v", version=SemanticVersion(1, 2, 3), date=None)
        release = parse_release_section(headline, "")

        assert release.name == SemanticVersion(1, 2, 3)
        assert release.version_prefix == "v"
        assert release.heading_level == 3
        assert release.segments == []
        assert release.removed_messages == []
