"""
Debug utilities for minigraphviz.

The main component is visual_diff, which compares an expected DOT document
with an actual one and reports where they first diverge, with surrounding
context. Tests use it to produce readable failure messages.

Usage:
    >>> from minigraphviz.debug import visual_diff
    >>> print(visual_diff(expected_text, graph.generate_file()))
"""

from typing import List, Optional, Tuple


def first_difference(expected: str, actual: str) -> Optional[Tuple[int, int]]:
    """
    Locate the first differing character between two texts.

    Returns:
        A zero-based (line, column) pair, or None if the texts are equal.
    """
    if expected == actual:
        return None

    exp_lines = expected.split("\n")
    act_lines = actual.split("\n")

    for line_idx in range(max(len(exp_lines), len(act_lines))):
        if line_idx >= len(exp_lines) or line_idx >= len(act_lines):
            return line_idx, 0

        exp_line = exp_lines[line_idx]
        act_line = act_lines[line_idx]
        if exp_line == act_line:
            continue

        for col in range(max(len(exp_line), len(act_line))):
            e = exp_line[col] if col < len(exp_line) else ""
            a = act_line[col] if col < len(act_line) else ""
            if e != a:
                return line_idx, col

    return None


def _omitted(count: int) -> str:
    if count == 0:
        return ""
    if count == 1:
        return " [1 line omitted]"
    return f" [{count} lines omitted]"


def visual_diff(expected: str, actual: str, context_lines: int = 3) -> str:
    """
    Generate a readable diff between two rendered documents.

    Shows the actual text around the first differing line, with the
    expected line and a caret marking the first differing column.

    Args:
        expected: The expected output
        actual: The actual output
        context_lines: Number of lines to show before and after the difference

    Returns:
        A formatted report, or "No differences found." when equal.
    """
    location = first_difference(expected, actual)
    if location is None:
        return "No differences found."

    diff_line, diff_col = location
    exp_lines = expected.split("\n")
    act_lines = actual.split("\n")

    if diff_line >= len(exp_lines):
        headline = f"Extraneous content after line {len(exp_lines)}"
    elif diff_line >= len(act_lines):
        headline = f"Expected matching line '{exp_lines[diff_line]}'"
    else:
        headline = f"Actual line {diff_line + 1} reads '{act_lines[diff_line]}'"

    start = max(0, diff_line - context_lines)
    end = min(len(act_lines), diff_line + context_lines + 1)

    output: List[str] = [
        f"Strings don't match: difference starts at line {diff_line + 1}, "
        f"column {diff_col + 1}",
        headline,
        "",
        "---" + _omitted(start),
    ]

    for idx in range(start, end):
        output.append(act_lines[idx])
        if idx == diff_line:
            expected_line = exp_lines[idx] if idx < len(exp_lines) else ""
            output.append(" " * diff_col + "^ expected: " + repr(expected_line))

    if diff_line >= len(act_lines):
        output.append("^ missing: " + repr(exp_lines[diff_line]))

    output.append("---" + _omitted(max(0, len(act_lines) - end)))

    return "\n".join(output)
