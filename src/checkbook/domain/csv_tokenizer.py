"""Quote-aware CSV line tokenizer and renderer."""

import re
from typing import Iterable

_LINE_BREAK = re.compile(r"\r\n|\n")


def split_lines(text: str) -> list[str]:
    """Split raw CSV text on CRLF or LF, dropping blank lines."""
    return [line for line in _LINE_BREAK.split(text) if line.strip()]


def tokenize_line(line: str) -> list[str]:
    """Split one CSV line into fields.

    A double quote toggles quoting, except that two consecutive quotes
    inside a quoted section produce one literal quote. Commas outside
    quotes end a field. Every field is stripped of surrounding whitespace.

    Args:
        line: A single line of CSV text without its line terminator

    Returns:
        List of field strings
    """
    fields = []
    current = []
    in_quotes = False
    i = 0
    length = len(line)

    while i < length:
        char = line[i]
        if char == '"':
            if in_quotes and i + 1 < length and line[i + 1] == '"':
                current.append('"')
                i += 1
            else:
                in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(char)
        i += 1

    fields.append("".join(current).strip())
    return fields


def quote_field(value: object) -> str:
    """Quote a single value, doubling any embedded quotes."""
    return '"' + str(value).replace('"', '""') + '"'


def render_line(fields: Iterable[object], quote_all: bool = True) -> str:
    """Render fields as one CSV line.

    Args:
        fields: Values to render (converted with ``str``)
        quote_all: Quote every field; otherwise only fields that need it

    Returns:
        CSV line without a line terminator
    """
    rendered = []
    for value in fields:
        text = str(value)
        if quote_all or any(c in text for c in ',"') or text != text.strip():
            rendered.append(quote_field(text))
        else:
            rendered.append(text)
    return ",".join(rendered)
