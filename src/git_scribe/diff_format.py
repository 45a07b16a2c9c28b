"""Flatten diffs into prompt text."""

from collections.abc import Iterable

from git_scribe.models import DiffLine, DiffStats, LineKind

_CHANGE_KINDS = (LineKind.ADDITION, LineKind.DELETION)


def format_diff(
    lines: Iterable[DiffLine],
    annotate_paths: bool = False,
    line_prefix: str | None = None,
) -> str:
    """Render diff lines as text, one output line per diff line.

    In plain mode every line is emitted as ``<marker><text>``. In
    path-annotated mode only additions and deletions that belong to a file
    are emitted, as ``<marker><text> (<path>)``, optionally preceded by
    ``line_prefix`` and a space.

    Args:
        lines: Diff lines in traversal order
        annotate_paths: Append the owning file path to each line
        line_prefix: Text placed before each annotated line, e.g. ``[Staged]``

    Returns:
        The formatted diff, or an empty string when nothing was emitted
    """
    parts: list[str] = []
    for line in lines:
        if not annotate_paths:
            parts.append(f"{line.kind.value}{line.text}\n")
            continue

        if line.kind not in _CHANGE_KINDS or line.path is None:
            continue

        lead = f"{line_prefix} " if line_prefix else ""
        parts.append(f"{lead}{line.kind.value}{line.text} ({line.path})\n")

    return "".join(parts)


def diff_stats(lines: Iterable[DiffLine]) -> DiffStats:
    """Count files touched and lines added or removed."""
    files: set[str] = set()
    insertions = deletions = 0
    for line in lines:
        if line.kind is LineKind.ADDITION:
            insertions += 1
        elif line.kind is LineKind.DELETION:
            deletions += 1
        else:
            continue
        if line.path is not None:
            files.add(line.path)

    return DiffStats(
        files_changed=len(files), insertions=insertions, deletions=deletions
    )
