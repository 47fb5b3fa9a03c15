"""ZPL run-length compression for ASCII hex graphic rows.

ZPL compresses a repeated hex character by prefixing it with a repeat count
spelled in letters:

- ``G`` to ``Y`` mean 1 to 19 repetitions
- ``g`` to ``z`` mean 20, 40, ... 400 repetitions

and the two may be combined, so ``hK0`` is 40 + 5 = 45 zeros. A row that is
entirely ``0`` can be written as ``,`` and a row that is entirely ``F`` as
``!``.
"""

# Index = count, index 0 unused
LOW_CODES = " GHIJKLMNOPQRSTUVWXY"
HIGH_CODES = " ghijklmnopqrstuvwxyz"

# Largest count a single high/low letter pair can express (20 * 20 + 19)
MAX_REPEAT = 419
# Runs this short are cheaper written out literally
MIN_RUN = 5

ALL_WHITE = ","
ALL_BLACK = "!"
REPEAT_PREVIOUS = ":"


def _single_code(count: int, char: str) -> str:
    high, low = divmod(count, 20)
    code = ""
    if high > 0:
        code += HIGH_CODES[high]
    if low > 0:
        code += LOW_CODES[low]
    return code + char


def repeat_code(count: int, char: str) -> str:
    """Encode ``count`` repetitions of ``char``.

    Counts larger than 419 are split into a leading remainder followed by as
    many full 419 tokens as needed, so the tokens expand in order.

    Raises:
        ValueError: If count is less than 1.
    """
    if count < 1:
        raise ValueError(f"Repeat count must be at least 1, got {count}")

    full_tokens = (count - 1) // MAX_REPEAT
    parts = [_single_code(count - full_tokens * MAX_REPEAT, char)]
    parts.extend(_single_code(MAX_REPEAT, char) for _ in range(full_tokens))
    return "".join(parts)


def _encode_run(char: str, length: int) -> str:
    if length >= MIN_RUN:
        return repeat_code(length, char)
    return char * length


def compress_ascii(row: str) -> str:
    """Compress one row of ASCII hex graphic data.

    Args:
        row: Uppercase hex characters for a single packed row.

    Returns:
        The compressed row; ``,`` or ``!`` when the row is all white or all
        black.
    """
    if not row:
        return ""

    parts: list[str] = []
    run_char = row[0]
    run_start = 0

    for i in range(1, len(row) + 1):
        char = row[i] if i < len(row) else None
        if char == run_char:
            continue

        if run_start == 0 and char is None:
            # Whole row is one run
            if run_char == "0":
                return ALL_WHITE
            if run_char == "F":
                return ALL_BLACK

        parts.append(_encode_run(run_char, i - run_start))
        if char is not None:
            run_char = char
            run_start = i

    return "".join(parts)


def expand_ascii(data: str, row_length: int) -> str:
    """Expand one compressed row back into hex characters.

    Args:
        data: Compressed tokens for a single row.
        row_length: Number of hex characters in a full row, used to fill
            ``,`` and ``!``.

    Raises:
        ValueError: If the data contains a character that is neither a hex
            digit, a repeat letter nor a fill marker.
    """
    output: list[str] = []
    count = 0

    for char in data:
        if char in HIGH_CODES[1:]:
            count += HIGH_CODES.index(char) * 20
        elif char in LOW_CODES[1:]:
            count += LOW_CODES.index(char)
        elif char in "0123456789ABCDEF":
            output.append(char * (count or 1))
            count = 0
        elif char in (ALL_WHITE, ALL_BLACK):
            filled = sum(len(part) for part in output)
            fill = "0" if char == ALL_WHITE else "F"
            output.append(fill * max(0, row_length - filled))
            count = 0
        else:
            raise ValueError(f"Unexpected character in compressed row: {char!r}")

    return "".join(output)
