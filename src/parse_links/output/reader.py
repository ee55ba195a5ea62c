"""Read rendered link text back into nested lists.

The inverse direction of the renderer, used to check the structure of the
output instead of searching it for substrings. Bare words (keywords,
numbers) come back as Symbol, quoted literals as plain str, and
``; ...`` comment lines are dropped.

Example:
    >>> read_facts('(WordNode "dogs")')
    [[Symbol('WordNode'), 'dogs']]
"""

from __future__ import annotations

from typing import Union

from parse_links.exceptions import OutputSyntaxError


class Symbol(str):
    """A bare (unquoted) token."""

    def __repr__(self) -> str:
        return f"Symbol({str.__repr__(self)})"


Term = Union[Symbol, str, list]

_DELIMITERS = set('();"') | set(" \t\r\n")


def _read_string(text: str, start: int) -> tuple[str, int]:
    chars: list[str] = []
    i = start + 1
    while i < len(text):
        ch = text[i]
        if ch == "\\":
            if i + 1 >= len(text):
                break
            chars.append(text[i + 1])
            i += 2
            continue
        if ch == '"':
            return "".join(chars), i + 1
        chars.append(ch)
        i += 1
    raise OutputSyntaxError("Unterminated string literal", start)


def read_facts(text: str) -> list[list[Term]]:
    """Parse link text into a list of top-level expressions.

    Raises:
        OutputSyntaxError: On unbalanced parentheses, unterminated strings,
            or bare tokens outside any expression
    """
    facts: list[list[Term]] = []
    stack: list[tuple[list[Term], int]] = []
    i = 0

    while i < len(text):
        ch = text[i]
        if ch in " \t\r\n":
            i += 1
        elif ch == ";":
            end = text.find("\n", i)
            i = len(text) if end == -1 else end + 1
        elif ch == "(":
            stack.append(([], i))
            i += 1
        elif ch == ")":
            if not stack:
                raise OutputSyntaxError("Unexpected ')'", i)
            expr, _ = stack.pop()
            if stack:
                stack[-1][0].append(expr)
            else:
                facts.append(expr)
            i += 1
        elif ch == '"':
            value, i_next = _read_string(text, i)
            if not stack:
                raise OutputSyntaxError("String literal outside an expression", i)
            stack[-1][0].append(value)
            i = i_next
        else:
            start = i
            while i < len(text) and text[i] not in _DELIMITERS:
                i += 1
            if not stack:
                raise OutputSyntaxError("Bare token outside an expression", start)
            stack[-1][0].append(Symbol(text[start:i]))

    if stack:
        raise OutputSyntaxError("Unclosed '('", stack[-1][1])
    return facts
