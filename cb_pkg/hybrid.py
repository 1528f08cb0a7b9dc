"""
Hybrid documents: an EDN header value followed by raw markup.

A hybrid document looks like::

    {:title "Home"
     :tags [:intro :news]}
    <HEAD>
    </HEAD>
    <BODY>...</BODY>

The header is read with a small EDN reader that stops as soon as the first
value is complete, so the value may span any number of lines. The rest of the
line the value ends on is dropped and the remaining lines form the body.

Keywords and symbols never compare equal to plain strings, so ``{:a 1 "a" 2}``
keeps two keys; look keywords up with ``header[Keyword('a')]``. Vectors and
lists used as map keys or set members are stored as tuples. Maps
cannot be used as keys. Duplicate keys or set members are a ParseError.
"""

from typing import Any, List, Tuple

from .errors import ParseError

WHITESPACE = ' \t\r\n\f\v,'
DELIMITERS = WHITESPACE + '()[]{}";'
CLOSERS = {'(': ')', '[': ']', '{': '}'}
STRING_ESCAPES = {'"': '"', '\\': '\\', 'n': '\n', 't': '\t', 'r': '\r', 'b': '\b', 'f': '\f'}


class _Name(str):
    """A string-backed EDN name that is only equal to names of the same kind."""

    def __eq__(self, other):
        return type(other) is type(self) and str.__eq__(self, other)

    def __ne__(self, other):
        return not self.__eq__(other)

    def __hash__(self):
        return hash((type(self).__name__, str(self)))

    def __repr__(self):
        return f"{type(self).__name__}({str(self)!r})"


class Keyword(_Name):
    """An EDN keyword, stored without its leading colon."""


class Symbol(_Name):
    """A bare EDN token that is neither a number nor a literal."""


def _skip_blank(text: str, pos: int) -> int:
    while pos < len(text):
        char = text[pos]
        if char in WHITESPACE:
            pos += 1
        elif char == ';':
            newline = text.find('\n', pos)
            pos = len(text) if newline == -1 else newline + 1
        else:
            break
    return pos


def _read_string(text: str, pos: int) -> Tuple[str, int]:
    start = pos
    pos += 1
    chars = []
    while pos < len(text):
        char = text[pos]
        if char == '"':
            return ''.join(chars), pos + 1
        if char == '\\':
            if pos + 1 >= len(text):
                break
            escaped = text[pos + 1]
            if escaped not in STRING_ESCAPES:
                raise ParseError(f"Unsupported escape sequence \\{escaped}", pos)
            chars.append(STRING_ESCAPES[escaped])
            pos += 2
            continue
        chars.append(char)
        pos += 1
    raise ParseError("Unterminated string", start)


def _read_token(text: str, pos: int) -> Tuple[str, int]:
    start = pos
    while pos < len(text) and text[pos] not in DELIMITERS:
        pos += 1
    return text[start:pos], pos


def _parse_number(token: str, pos: int):
    literal = token
    if literal[-1] in 'NM':
        literal = literal[:-1]
    try:
        return int(literal)
    except ValueError:
        pass
    try:
        return float(literal)
    except ValueError:
        raise ParseError(f"Invalid number {token!r}", pos)


def _atom(token: str, pos: int):
    if token == 'nil':
        return None
    if token == 'true':
        return True
    if token == 'false':
        return False
    if token.startswith(':'):
        if len(token) == 1:
            raise ParseError("Empty keyword", pos)
        return Keyword(token[1:])
    head = token[1:2] if token[0] in '+-' else token[0]
    if head.isdigit():
        return _parse_number(token, pos)
    return Symbol(token)


def _read_items(text: str, pos: int, closer: str) -> Tuple[List[Any], int]:
    start = pos - 1
    items = []
    while True:
        pos = _skip_blank(text, pos)
        if pos >= len(text):
            raise ParseError(f"Expected {closer!r} before end of input", start)
        if text[pos] == closer:
            return items, pos + 1
        value, pos = _read(text, pos)
        items.append(value)


def _freeze(value):
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(item) for item in value)
    return value


def _key(value, pos: int):
    value = _freeze(value)
    try:
        hash(value)
    except TypeError:
        raise ParseError(f"Unhashable value {dumps(value)} used as key or set member", pos)
    return value


def _read_map(items: List[Any], pos: int) -> dict:
    if len(items) % 2:
        raise ParseError("Map literal must contain an even number of forms", pos)
    result = {}
    for key, value in zip(items[::2], items[1::2]):
        key = _key(key, pos)
        if key in result:
            raise ParseError(f"Duplicate key {dumps(key)}", pos)
        result[key] = value
    return result


def _read_set(items: List[Any], pos: int) -> frozenset:
    members = set()
    for item in items:
        item = _key(item, pos)
        if item in members:
            raise ParseError(f"Duplicate set member {dumps(item)}", pos)
        members.add(item)
    return frozenset(members)


def _read(text: str, pos: int) -> Tuple[Any, int]:
    pos = _skip_blank(text, pos)
    if pos >= len(text):
        raise ParseError("Expected a value but reached end of input", pos)

    char = text[pos]
    if char == '"':
        return _read_string(text, pos)
    if char in CLOSERS:
        items, end = _read_items(text, pos + 1, CLOSERS[char])
        if char == '[':
            return items, end
        if char == '(':
            return tuple(items), end
        return _read_map(items, pos), end
    if char in ')]}':
        raise ParseError(f"Unmatched delimiter {char!r}", pos)
    if char == '#':
        if text[pos + 1:pos + 2] == '{':
            items, end = _read_items(text, pos + 2, '}')
            return _read_set(items, pos), end
        raise ParseError("Unsupported dispatch macro", pos)
    if char == '\\':
        raise ParseError("Character literals are not supported", pos)

    token, end = _read_token(text, pos)
    return _atom(token, pos), end


def read_value(text: str, pos: int = 0) -> Tuple[Any, int]:
    """Read one EDN value starting at ``pos``.

    Returns the value and the offset just past its last character. Leading
    whitespace and comments are skipped.
    """
    try:
        return _read(text, pos)
    except RecursionError:
        raise ParseError("Value is nested too deeply", pos) from None


def _lines(text: str) -> List[str]:
    lines = text.split('\n')
    if lines[-1] == '':
        lines.pop()
    return [line[:-1] if line.endswith('\r') else line for line in lines]


def preprocess_hybrid(text: str) -> Tuple[Any, str]:
    """Split a hybrid document into its header value and its body text."""
    header, end = read_value(text)
    body = '\n'.join(_lines(text[end:])[1:])
    return header, body


def dumps(value) -> str:
    """Serialize a value produced by ``read_value`` back to EDN text."""
    if value is None:
        return 'nil'
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, Keyword):
        return ':' + value
    if isinstance(value, Symbol):
        return str(value)
    if isinstance(value, str):
        escaped = value.replace('\\', '\\\\').replace('"', '\\"')
        escaped = escaped.replace('\n', '\\n').replace('\t', '\\t').replace('\r', '\\r')
        return f'"{escaped}"'
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, dict):
        return '{' + ' '.join(f"{dumps(k)} {dumps(v)}" for k, v in value.items()) + '}'
    if isinstance(value, list):
        return '[' + ' '.join(dumps(item) for item in value) + ']'
    if isinstance(value, tuple):
        return '(' + ' '.join(dumps(item) for item in value) + ')'
    if isinstance(value, (set, frozenset)):
        return '#{' + ' '.join(dumps(item) for item in value) + '}'
    raise TypeError(f"Cannot serialize {type(value).__name__} as EDN")
