from __future__ import annotations

"""CSV tokenizer for the production sheet export.

Splits raw CSV text into rows of trimmed string fields:
- ``"`` toggles quoted mode; delimiters and line breaks inside quotes are content
- ``,`` outside quotes ends a field, ``\\r`` / ``\\n`` outside quotes ends a row
- ``\\r\\n`` is one terminator (no extra empty row)
- blank lines emit nothing; rows of empty fields (``,,,``) are kept
- trailing content without a final line break is still emitted

Never raises. An unterminated quote keeps the rest of the input as quoted text.
"""

__all__ = [
    "tokenize",
]

QUOTE = '"'
DELIMITER = ","
LINE_BREAKS = ("\r", "\n")


def tokenize(text: str) -> list[list[str]]:
    """Tokenize CSV ``text`` into rows of whitespace-stripped fields."""
    rows: list[list[str]] = []
    row: list[str] = []
    field: list[str] = []
    in_quotes = False

    i = 0
    length = len(text)
    while i < length:
        ch = text[i]
        if ch == QUOTE:
            in_quotes = not in_quotes
        elif ch == DELIMITER and not in_quotes:
            row.append("".join(field).strip())
            field = []
        elif ch in LINE_BREAKS and not in_quotes:
            # 空行 (何もバッファされていない) は行を生成しない
            if field or row:
                row.append("".join(field).strip())
                rows.append(row)
                row = []
                field = []
            if ch == "\r" and i + 1 < length and text[i + 1] == "\n":
                i += 1
        else:
            field.append(ch)
        i += 1

    if field or row:
        row.append("".join(field).strip())
        rows.append(row)
    return rows
