"""
Tokenize query template bodies.

The placeholder pattern is a regular expression whose first capture group
holds the placeholder content. Content made only of ASCII digits is a
1-based positional reference; anything else is a name, kept exactly as
captured (no trimming). Text between placeholders becomes ``Literal``
tokens with line terminators normalised to the configured new line.
"""

import re

from querymanager.engines.query.errors import MalformedDefinition, PatternCompileError
from querymanager.engines.query.tokens import Literal, NamedVar, PositionalVar, Token

DEFAULT_VAR_MATCH_REGEX = r"\$\{([^\}]*)\}"

_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_DIGITS = re.compile(r"[0-9]+")


def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Compile a placeholder pattern, raising ``PatternCompileError`` if unusable."""
    try:
        rx = re.compile(pattern)
    except (re.error, TypeError) as e:
        raise PatternCompileError(str(pattern), str(e)) from e
    if rx.groups < 1:
        raise PatternCompileError(pattern, "pattern must contain a capture group")
    if rx.match("") is not None:
        raise PatternCompileError(pattern, "pattern must not match the empty string")
    return rx


def _classify(match: re.Match[str], query_id: str | None) -> Token:
    content = match.group(1) or ""
    raw = match.group(0)
    if _DIGITS.fullmatch(content):
        where = f" in query {query_id}" if query_id else ""
        try:
            index = int(content)
        except ValueError as e:
            raise MalformedDefinition(
                f"Positional placeholder{where} has too many digits ({len(content)})"
            ) from e
        if index < 1:
            raise MalformedDefinition(
                f"Positional placeholder {raw!r}{where} must be 1 or greater"
            )
        return PositionalVar(index, raw=raw)
    return NamedVar(content, raw=raw)


def tokenize(
    raw: str,
    pattern: str | re.Pattern[str] = DEFAULT_VAR_MATCH_REGEX,
    *,
    new_line: str = "\n",
    query_id: str | None = None,
) -> tuple[Token, ...]:
    """
    Split *raw* into literal and variable tokens.

    Placeholders are matched one line at a time, so a placeholder never spans
    a line break. Adjacent placeholders yield consecutive variable tokens with
    no empty ``Literal`` between them. Pure function: no I/O, no shared state.
    """
    rx = pattern if isinstance(pattern, re.Pattern) else compile_pattern(pattern)
    tokens: list[Token] = []
    pending: list[str] = []

    def flush() -> None:
        text = "".join(pending)
        pending.clear()
        if text:
            tokens.append(Literal(text))

    for n, line in enumerate(_LINE_BREAK.split(raw)):
        if n:
            pending.append(new_line)
        pos = 0
        for m in rx.finditer(line):
            start, end = m.span()
            if start == end:
                continue
            pending.append(line[pos:start])
            flush()
            tokens.append(_classify(m, query_id))
            pos = end
        pending.append(line[pos:])

    flush()
    return tuple(tokens)
