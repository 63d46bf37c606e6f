"""Message templates with named property placeholders.

A template such as ``"Order {OrderId} shipped to {@Address}"`` is parsed into
literal text tokens and property tokens. Rendering substitutes each property
token with the matching bound property value. Parsing never fails: anything
that does not look like a valid placeholder is kept as literal text.

Placeholder syntax::

    {Name}            plain property
    {@Name}           destructure the value into a structure
    {$Name}           force the value to its string form
    {Name,10}         right-align in 10 characters (negative: left-align)
    {Name:0.00}       apply a Python format spec to scalar values

``{{`` and ``}}`` are escaped braces.
"""

import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from functools import lru_cache

from dynatrace_logsink.core.models import (
    DictionaryValue,
    ScalarValue,
    SequenceValue,
    StructuredValue,
    StructureValue,
)
from dynatrace_logsink.core.values import stringify

_PLACEHOLDER = re.compile(
    r"^(?P<hint>[@$]?)(?P<name>[A-Za-z0-9_][A-Za-z0-9_.]*)"
    r"(?:,(?P<alignment>-?\d+))?(?::(?P<format>[^{}]*))?$"
)


@dataclass(frozen=True)
class TextToken:
    text: str


@dataclass(frozen=True)
class PropertyToken:
    """A ``{...}`` placeholder.

    Attributes:
        name: Property name.
        raw: The placeholder exactly as written, braces included.
        hint: ``"@"`` (destructure), ``"$"`` (stringify) or ``""``.
        alignment: Padding width, negative for left alignment.
        format: Format spec applied to scalar values.
    """

    name: str
    raw: str
    hint: str = ""
    alignment: int | None = None
    format: str | None = None


Token = TextToken | PropertyToken


def _parse_placeholder(raw: str) -> Token:
    match = _PLACEHOLDER.match(raw[1:-1])
    if match is None:
        return TextToken(raw)
    alignment = match.group("alignment")
    return PropertyToken(
        name=match.group("name"),
        raw=raw,
        hint=match.group("hint"),
        alignment=int(alignment) if alignment is not None else None,
        format=match.group("format"),
    )


def _tokenize(text: str) -> Iterator[Token]:
    literal: list[str] = []
    i = 0
    while i < len(text):
        char = text[i]
        if char in "{}" and text[i + 1 : i + 2] == char:
            literal.append(char)
            i += 2
            continue
        if char == "{":
            end = text.find("}", i + 1)
            if end == -1:
                literal.append(text[i:])
                break
            token = _parse_placeholder(text[i : end + 1])
            if isinstance(token, TextToken):
                literal.append(token.text)
            else:
                if literal:
                    yield TextToken("".join(literal))
                    literal = []
                yield token
            i = end + 1
            continue
        literal.append(char)
        i += 1
    if literal:
        yield TextToken("".join(literal))


def render_value(value: StructuredValue, format_spec: str | None = None) -> str:
    """Render a structured value for inclusion in message text."""
    match value:
        case ScalarValue(scalar):
            if format_spec and not isinstance(scalar, str):
                return format(scalar, format_spec)
            return stringify(scalar)
        case SequenceValue(elements):
            return "[" + ", ".join(render_value(e) for e in elements) + "]"
        case StructureValue(properties, type_tag):
            members = ", ".join(f"{n}: {render_value(v)}" for n, v in properties)
            body = "{ " + members + " }" if members else "{ }"
            return f"{type_tag} {body}" if type_tag else body
        case DictionaryValue(elements):
            items = ", ".join(
                f"{render_value(k)}: {render_value(v)}" for k, v in elements
            )
            return "{" + items + "}"
        case _:
            return ""


@dataclass(frozen=True)
class MessageTemplate:
    """A parsed message template."""

    text: str
    tokens: tuple[Token, ...]

    @classmethod
    def parse(cls, text: str) -> "MessageTemplate":
        """Parse template text. Results are cached per distinct text."""
        return _parse_cached(text)

    @classmethod
    def literal(cls, text: str) -> "MessageTemplate":
        """Build a template that renders ``text`` verbatim."""
        return cls(text, (TextToken(text),) if text else ())

    @property
    def property_tokens(self) -> tuple[PropertyToken, ...]:
        return tuple(t for t in self.tokens if isinstance(t, PropertyToken))

    def render(self, properties: Mapping[str, StructuredValue]) -> str:
        """Substitute placeholders with property values.

        Placeholders without a matching property are rendered as written.
        Errors raised while stringifying a value propagate to the caller.
        """
        parts: list[str] = []
        for token in self.tokens:
            if isinstance(token, TextToken):
                parts.append(token.text)
                continue
            value = properties.get(token.name)
            if value is None:
                parts.append(token.raw)
                continue
            rendered = render_value(value, token.format)
            if token.alignment is not None:
                width = abs(token.alignment)
                if token.alignment < 0:
                    rendered = rendered.ljust(width)
                else:
                    rendered = rendered.rjust(width)
            parts.append(rendered)
        return "".join(parts)


@lru_cache(maxsize=1024)
def _parse_cached(text: str) -> MessageTemplate:
    return MessageTemplate(text, tuple(_tokenize(text)))
