"""Java-style ``.properties`` file loading."""

import string
from pathlib import Path
from typing import Dict, Iterable, Iterator, Tuple

from es_rest_adapter.exceptions import ConfigurationError

COMMENT_CHARS = "#!"
SEPARATOR_CHARS = "=:"
WHITESPACE_CHARS = " \t\f"
HEX_DIGITS = frozenset(string.hexdigits)

_ESCAPES = {
    "t": "\t",
    "n": "\n",
    "r": "\r",
    "f": "\f",
}


def load_properties(path: Path) -> Dict[str, str]:
    """Read a ``.properties`` file.

    Raises:
        FileNotFoundError: If the file does not exist
    """
    with path.open("r", encoding="utf-8") as f:
        return parse_properties(f)


def parse_properties(lines: Iterable[str]) -> Dict[str, str]:
    """Parse ``.properties`` lines into a dict. A later key overrides an earlier one."""
    properties: Dict[str, str] = {}
    for logical_line in _logical_lines(lines):
        key, value = _split_key_value(logical_line)
        properties[_unescape(key)] = _unescape(value)
    return properties


def _logical_lines(lines: Iterable[str]) -> Iterator[str]:
    buffer = ""
    continuing = False
    for raw_line in lines:
        line = raw_line.rstrip("\r\n").lstrip(WHITESPACE_CHARS)
        if not continuing and (not line or line[0] in COMMENT_CHARS):
            continue
        if _has_continuation(line):
            buffer += line[:-1]
            continuing = True
            continue
        buffer += line
        continuing = False
        yield buffer
        buffer = ""
    if continuing and buffer:
        yield buffer


def _has_continuation(line: str) -> bool:
    backslashes = len(line) - len(line.rstrip("\\"))
    return backslashes % 2 == 1


def _split_key_value(line: str) -> Tuple[str, str]:
    key_end = len(line)
    i = 0
    while i < len(line):
        c = line[i]
        if c == "\\":
            i += 2
            continue
        if c in SEPARATOR_CHARS or c in WHITESPACE_CHARS:
            key_end = i
            break
        i += 1

    rest = line[key_end:].lstrip(WHITESPACE_CHARS)
    if rest and rest[0] in SEPARATOR_CHARS:
        rest = rest[1:].lstrip(WHITESPACE_CHARS)

    return line[:key_end], rest


def _unescape(text: str) -> str:
    if "\\" not in text:
        return text

    chars = []
    i = 0
    while i < len(text):
        c = text[i]
        if c != "\\":
            chars.append(c)
            i += 1
            continue
        if i + 1 >= len(text):
            break
        escaped = text[i + 1]
        if escaped == "u":
            code = text[i + 2:i + 6]
            if len(code) != 4 or any(ch not in HEX_DIGITS for ch in code):
                raise ConfigurationError(f"Malformed \\uxxxx encoding: {text!r}")
            chars.append(chr(int(code, 16)))
            i += 6
            continue
        chars.append(_ESCAPES.get(escaped, escaped))
        i += 2

    return "".join(chars)
