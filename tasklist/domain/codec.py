from __future__ import annotations

FIELD_SEPARATOR = ","
ESCAPE_CHAR = "\\"
FIELD_COUNT = 4


class MalformedLineError(ValueError):
    """A persisted line that cannot be decoded into a task record."""


def escape_field(value: str) -> str:
    # Line breaks are flattened, never preserved.
    flattened = value.replace("\r", " ").replace("\n", " ")
    return flattened.replace(FIELD_SEPARATOR, ESCAPE_CHAR + FIELD_SEPARATOR)


def unescape_field(value: str) -> str:
    return value.replace(ESCAPE_CHAR + FIELD_SEPARATOR, FIELD_SEPARATOR)


def split_fields(line: str) -> list[str]:
    """Split on commas not preceded by a backslash.

    Fields are returned still escaped; a backslash that does not precede a
    comma is kept as is.
    """
    fields: list[str] = []
    current: list[str] = []
    index = 0
    while index < len(line):
        char = line[index]
        if char == ESCAPE_CHAR and line[index + 1:index + 2] == FIELD_SEPARATOR:
            current.append(ESCAPE_CHAR + FIELD_SEPARATOR)
            index += 2
            continue
        if char == FIELD_SEPARATOR:
            fields.append("".join(current))
            current = []
        else:
            current.append(char)
        index += 1
    fields.append("".join(current))
    return fields


def join_fields(fields: list[str]) -> str:
    return FIELD_SEPARATOR.join(fields)


def is_decimal(value: str) -> bool:
    return value.isascii() and value.isdigit()


def is_encodable(value: str) -> bool:
    # Lone surrogates come from bytes that were not valid UTF-8.
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True
