"""ZPL hex-ASCII run-length compression for ^GFA bodies.

Zebra printers accept a compressed form of ^GFA hex data in which a run of
identical hex digits is written as a count letter followed by the digit:

    G..Y   counts 1 to 19
    g..z   counts 20, 40, ... 400

Counts between the table entries are written as two letters, the multiple
of twenty first. Three further tokens work on whole rows:

    ,   fill the rest of the row with 0
    !   fill the rest of the row with F
    :   repeat the previous row
"""

import logging
import string

from zplify.converters.rasterizer import ROW_BREAK
from zplify.errors import DecompressionError, EncodingRangeError

logger = logging.getLogger(__name__)

MAX_RUN = 400

RUN_CODES: dict[int, str] = {count: chr(ord("G") + count - 1) for count in range(1, 20)}
RUN_CODES.update({count: chr(ord("g") + count // 20 - 1) for count in range(20, MAX_RUN + 1, 20)})

RUN_VALUES: dict[str, int] = {code: count for count, code in RUN_CODES.items()}

FILL_ZERO = ","
FILL_ONE = "!"
REPEAT_ROW = ":"

HEX_DIGITS = frozenset(string.digits + "ABCDEF")


def encode_run(count: int, char: str) -> str:
    """Encode a run of count copies of char.

    A run of exactly 20 uses the "g" code alone. Longer runs are split into
    a multiple of 20 and a 1-19 remainder; when the remainder is zero the
    character follows the multiple-of-20 code directly.

    Raises:
        EncodingRangeError: If count is below 1 or above 400.
    """
    if count < 1 or count > MAX_RUN:
        raise EncodingRangeError(count)
    if count <= 20:
        return RUN_CODES[count] + char
    base = (count // 20) * 20
    remainder = count % 20
    if remainder:
        return RUN_CODES[base] + RUN_CODES[remainder] + char
    return RUN_CODES[base] + char


class HexRunLengthEncoder:
    """State machine that compresses one hex body.

    The encoder is either at the start of a row (no pending character) or
    counting a run of pending_char. The first character of a row always
    seeds a new run; runs never continue across a row break.
    """

    def __init__(self, bytes_per_row: int) -> None:
        self.max_row_runs = bytes_per_row * 2
        self.pending_char: str | None = None
        self.run_count = 0
        self.previous_line: str | None = None
        self.line: list[str] = []
        self._output: list[str] = []

    def feed(self, char: str) -> None:
        """Consume one character of the hex body."""
        if char == ROW_BREAK:
            self._end_row()
        elif self.pending_char is None:
            self.pending_char = char
            self.run_count = 1
        elif char == self.pending_char:
            self.run_count += 1
        else:
            self.line.append(encode_run(self.run_count, self.pending_char))
            self.pending_char = char
            self.run_count = 1

    def _end_row(self) -> None:
        if self.pending_char is not None:
            whole_row = self.run_count >= self.max_row_runs
            if whole_row and self.pending_char == "0":
                self.line.append(FILL_ZERO)
            elif whole_row and self.pending_char == "F":
                self.line.append(FILL_ONE)
            else:
                self.line.append(encode_run(self.run_count, self.pending_char))

        line = "".join(self.line)
        if line == self.previous_line:
            self._output.append(REPEAT_ROW)
        else:
            self._output.append(line)
        self.previous_line = line
        self.line = []
        self.pending_char = None
        self.run_count = 0

    def finish(self) -> str:
        """Flush any unterminated row and return the compressed text."""
        if self.pending_char is not None:
            self._end_row()
        return "".join(self._output)


def compress_hex(hex_body: str, bytes_per_row: int) -> str:
    """Compress a raw hex body using the ZPL hex-ASCII alphabet.

    Args:
        hex_body: Uppercase hex digits with ROW_BREAK after each row.
        bytes_per_row: Bytes in each row of the image.

    Returns:
        Compressed text with no row breaks.

    Raises:
        EncodingRangeError: If a run inside a row is longer than 400 digits.
    """
    encoder = HexRunLengthEncoder(bytes_per_row)
    for char in hex_body:
        encoder.feed(char)
    compressed = encoder.finish()

    if hex_body:
        logger.debug(f"Compressed {len(hex_body)} hex characters to {len(compressed)}")
    return compressed


def decompress_hex(data: str, bytes_per_row: int) -> str:
    """Expand compressed hex-ASCII data back into a raw hex body.

    Args:
        data: Compressed ^GFA body.
        bytes_per_row: Bytes in each row of the image.

    Returns:
        Uppercase hex digits with ROW_BREAK after each row.

    Raises:
        DecompressionError: If the data is malformed or does not fit the row width.
    """
    if not data:
        return ""
    if bytes_per_row <= 0:
        raise DecompressionError("Cannot expand data into rows of zero bytes")

    row_length = bytes_per_row * 2
    rows: list[str] = []
    row: list[str] = []
    filled = 0
    count = 0

    def close_row() -> None:
        nonlocal row, filled
        rows.append("".join(row))
        row = []
        filled = 0

    for position, char in enumerate(data):
        if char in RUN_VALUES:
            count += RUN_VALUES[char]
        elif char in HEX_DIGITS:
            run = count or 1
            count = 0
            if filled + run > row_length:
                raise DecompressionError(f"Run at position {position} overflows a row of {row_length} digits")
            row.append(char * run)
            filled += run
            if filled == row_length:
                close_row()
        elif char in (FILL_ZERO, FILL_ONE):
            if count:
                raise DecompressionError(f"Count letters before row fill at position {position}")
            fill = "0" if char == FILL_ZERO else "F"
            row.append(fill * (row_length - filled))
            close_row()
        elif char == REPEAT_ROW:
            if count or filled:
                raise DecompressionError(f"Row repeat in the middle of a row at position {position}")
            if not rows:
                raise DecompressionError("Row repeat with no previous row")
            rows.append(rows[-1])
        else:
            raise DecompressionError(f"Unexpected character {char!r} at position {position}")

    if count:
        raise DecompressionError("Data ends with a count and no digit")
    if filled:
        raise DecompressionError(f"Last row is truncated at {filled} of {row_length} digits")

    return "".join(r + ROW_BREAK for r in rows)
