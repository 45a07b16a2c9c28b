"""Tests for diff formatting."""

from git_scribe.diff_format import diff_stats, format_diff
from git_scribe.models import DiffLine, LineKind


def add(text: str, path: str | None = "src/x.py") -> DiffLine:
    return DiffLine(kind=LineKind.ADDITION, text=text, path=path)


def delete(text: str, path: str | None = "src/x.py") -> DiffLine:
    return DiffLine(kind=LineKind.DELETION, text=text, path=path)


def context(text: str, path: str | None = "src/x.py") -> DiffLine:
    return DiffLine(kind=LineKind.CONTEXT, text=text, path=path)


class TestFormatDiff:
    """Test plain and path-annotated diff rendering."""

    def test_empty_diff_is_empty_string(self):
        """Empty input renders to an empty string in both modes."""
        assert format_diff([]) == ""
        assert format_diff([], annotate_paths=True) == ""
        assert format_diff([], annotate_paths=True, line_prefix="[Staged]") == ""

    def test_plain_mode_prefixes_every_line(self):
        """Plain mode keeps additions, deletions and context in order."""
        lines = [context("def f():"), delete("    return 1"), add("    return 2")]

        assert format_diff(lines) == " def f():\n-    return 1\n+    return 2\n"

    def test_plain_mode_omits_paths(self):
        """File paths never appear in plain mode."""
        result = format_diff([add("foo", path="src/x.rs")])

        assert result == "+foo\n"
        assert "src/x.rs" not in result

    def test_annotated_mode_appends_path(self):
        """A single addition is rendered as '+foo (src/x.rs)'."""
        result = format_diff([add("foo", path="src/x.rs")], annotate_paths=True)

        assert result == "+foo (src/x.rs)\n"

    def test_annotated_mode_skips_context_and_pathless_lines(self):
        """Only additions and deletions that belong to a file are emitted."""
        lines = [
            context("unchanged"),
            delete("old", path="a.py"),
            add("orphan", path=None),
            add("new", path="b.py"),
        ]

        result = format_diff(lines, annotate_paths=True)

        assert result == "-old (a.py)\n+new (b.py)\n"

    def test_annotated_mode_with_line_prefix(self):
        """The line prefix is placed before the marker, separated by a space."""
        result = format_diff(
            [add("x", path="a.rs"), delete("y", path="a.rs")],
            annotate_paths=True,
            line_prefix="[Unstaged]",
        )

        assert result == "[Unstaged] +x (a.rs)\n[Unstaged] -y (a.rs)\n"

    def test_order_and_duplicates_preserved(self):
        """Lines are neither reordered nor deduplicated."""
        lines = [add("same", "b.py"), add("same", "b.py"), add("first", "a.py")]

        result = format_diff(lines, annotate_paths=True)

        assert result.splitlines() == [
            "+same (b.py)",
            "+same (b.py)",
            "+first (a.py)",
        ]


class TestDiffStats:
    """Test diff statistics."""

    def test_counts(self):
        lines = [
            add("a", "one.py"),
            add("b", "one.py"),
            delete("c", "two.py"),
            context("d", "three.py"),
        ]

        stats = diff_stats(lines)

        assert stats.files_changed == 2
        assert stats.insertions == 2
        assert stats.deletions == 1
        assert str(stats) == "Changes: 2 files changed, 2 insertions(+), 1 deletions(-)"

    def test_empty(self):
        assert str(diff_stats([])) == "Changes: 0 files changed, 0 insertions(+), 0 deletions(-)"
