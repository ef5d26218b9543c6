"""
Ciphers built on a Polybius coordinate grid.

`polybius_square` is the shared square generator: key characters first
(deduplicated), then the rest of the alphabet. The 5x5 square merges J
into I; the 6x6 square adds the digits.
"""
import string

from ..core import Transform, register_transform, ENCODE, MODES

UPPER = string.ascii_uppercase
ADFGX_HEADERS = "ADFGX"


def polybius_square(key: str, size: int = 5) -> str:
    square = []

    def push(c):
        if c not in square:
            square.append(c)

    for c in key.upper():
        if c in UPPER:
            push("I" if size == 5 and c == "J" else c)
        elif c in string.digits and size == 6:
            push(c)

    for c in UPPER:
        if size == 5 and c == "J":
            continue
        push(c)
    if size == 6:
        for c in string.digits:
            push(c)

    return "".join(square)


def find_in_square(square: str, c: str, size: int = 5) -> int:
    """Index of `c` in the square, or -1."""
    if size == 5 and c == "J":
        c = "I"
    if len(c) != 1:
        return -1
    return square.find(c)


def _letters(text: str):
    """Uppercase characters of `text`, one at a time."""
    for c in text:
        yield from c.upper()


@register_transform
class PolybiusSquare(Transform):
    name = "polybius"
    display_name = "Polybius Square"
    description = "Letters as row/column coordinates in a keyed square."
    category = "Polybius Square Ciphers"

    SIZES = ((5, "5x5 (I/J merged)"), (6, "6x6 (with digits)"))

    def __init__(self):
        self.key = ""
        self.size = 5
        self.mode = ENCODE

    def configure(self, editor):
        self.mode = editor.choice("mode", "Mode", self.mode, MODES)
        self.size = editor.choice("size", "Grid Size", self.size, self.SIZES)
        self.key = editor.text("key", "Custom Key", self.key)

    def encode(self, text: str) -> str:
        square = polybius_square(self.key, self.size)
        result = []
        for c in _letters(text):
            pos = find_in_square(square, c, self.size)
            if pos < 0:
                result.append(c)
            else:
                row, col = divmod(pos, self.size)
                result.append(f"{row + 1}{col + 1} ")
        return "".join(result)

    def decode(self, text: str) -> str:
        square = polybius_square(self.key, self.size)
        digits = [int(c) for c in text if c in string.digits]
        result = []
        for i in range(0, len(digits) - 1, 2):
            row, col = digits[i], digits[i + 1]
            if 0 < row <= self.size and 0 < col <= self.size:
                pos = (row - 1) * self.size + (col - 1)
                if pos < len(square):
                    result.append(square[pos])
        return "".join(result)

    def apply(self, text: str) -> str:
        if self.mode == ENCODE:
            return self.encode(text)
        return self.decode(text)


@register_transform
class TapCode(Transform):
    """Polybius coordinates tapped out as groups of dots."""
    name = "tap_code"
    display_name = "Tap Code"
    description = "Prison tap code over the 5x5 square."
    category = "Polybius Square Ciphers"

    def __init__(self):
        self.mode = ENCODE

    def configure(self, editor):
        self.mode = editor.choice("mode", "Mode", self.mode, MODES)

    def apply(self, text: str) -> str:
        square = PolybiusSquare()
        if self.mode == ENCODE:
            return "".join(
                "." * int(c) + " " if c in string.digits else c
                for c in square.encode(text)
            )

        coords = []
        for group in text.split():
            dots = group.count(".")
            if 0 < dots <= 9:
                coords.append(str(dots))
        return square.decode("".join(coords))


@register_transform
class ADFGXCipher(Transform):
    """
    Keyed 5x5 substitution onto A/D/F/G/X pairs followed by a columnar
    transposition ordered by the transposition key's letters.
    """
    name = "adfgx"
    display_name = "ADFGX Cipher"
    description = "WWI field cipher: Polybius substitution plus columnar transposition."
    category = "Polybius Square Ciphers"

    def __init__(self):
        self.polybius_key = ""
        self.transposition_key = ""
        self.mode = ENCODE

    def configure(self, editor):
        self.mode = editor.choice("mode", "Mode", self.mode, MODES)
        self.polybius_key = editor.text("polybius_key", "Polybius Key", self.polybius_key)
        self.transposition_key = editor.text(
            "transposition_key", "Transposition Key", self.transposition_key
        )

    def _columns(self):
        key = [c.upper() for c in self.transposition_key if c in string.ascii_letters]
        order = sorted(range(len(key)), key=lambda i: key[i])
        return len(key), order

    def _encode(self, text, square):
        substituted = []
        for c in _letters(text):
            pos = find_in_square(square, c)
            if pos >= 0:
                row, col = divmod(pos, 5)
                substituted.append(ADFGX_HEADERS[row] + ADFGX_HEADERS[col])
        substituted = "".join(substituted)

        num_cols, order = self._columns()
        if not num_cols:
            return substituted

        columns = [substituted[col::num_cols] for col in range(num_cols)]
        return "".join(columns[col] + " " for col in order)

    def _decode(self, text, square):
        clean = "".join(c for c in text if c in ADFGX_HEADERS)
        num_cols, order = self._columns()
        if not num_cols or not clean:
            return ""

        # Leading columns hold one extra letter when the grid is ragged.
        num_rows, extra = divmod(len(clean), num_cols)
        lengths = [num_rows + (1 if col < extra else 0) for col in range(num_cols)]

        columns = [""] * num_cols
        start = 0
        for col in order:
            columns[col] = clean[start:start + lengths[col]]
            start += lengths[col]

        substituted = "".join(
            columns[col][row]
            for row in range(max(lengths))
            for col in range(num_cols)
            if row < len(columns[col])
        )

        result = []
        for i in range(0, len(substituted) - 1, 2):
            row = ADFGX_HEADERS.index(substituted[i])
            col = ADFGX_HEADERS.index(substituted[i + 1])
            result.append(square[row * 5 + col])
        return "".join(result)

    def apply(self, text: str) -> str:
        square = polybius_square(self.polybius_key, 5)
        if self.mode == ENCODE:
            return self._encode(text, square)
        return self._decode(text, square)


@register_transform
class BifidCipher(Transform):
    name = "bifid"
    display_name = "Bifid Cipher"
    description = "Fractionates letters into rows and columns, then recombines."
    category = "Polybius Square Ciphers"

    def __init__(self):
        self.key = ""
        self.mode = ENCODE

    def configure(self, editor):
        self.mode = editor.choice("mode", "Mode", self.mode, MODES)
        self.key = editor.text("key", "Key", self.key)

    def apply(self, text: str) -> str:
        square = polybius_square(self.key, 5)
        coords = [
            divmod(pos, 5)
            for pos in (find_in_square(square, c) for c in _letters(text))
            if pos >= 0
        ]

        if self.mode == ENCODE:
            combined = [row for row, _ in coords] + [col for _, col in coords]
            return "".join(
                square[combined[i] * 5 + combined[i + 1]]
                for i in range(0, len(combined) - 1, 2)
            )

        flat = [n for pair in coords for n in pair]
        if len(flat) % 2:
            return "Error: Odd number of coordinates"
        mid = len(flat) // 2
        return "".join(square[flat[i] * 5 + flat[mid + i]] for i in range(mid))


@register_transform
class NihilistCipher(Transform):
    """Adds keyword coordinates to plaintext coordinates, number by number."""
    name = "nihilist"
    display_name = "Nihilist Cipher"
    description = "Polybius coordinates plus a repeating keyword."
    category = "Polybius Square Ciphers"

    def __init__(self):
        self.polybius_key = ""
        self.keyword = ""
        self.mode = ENCODE

    def configure(self, editor):
        self.mode = editor.choice("mode", "Mode", self.mode, MODES)
        self.polybius_key = editor.text("polybius_key", "Polybius Key", self.polybius_key)
        self.keyword = editor.text("keyword", "Keyword", self.keyword)

    @staticmethod
    def _number(pos: int) -> int:
        row, col = divmod(pos, 5)
        return (row + 1) * 10 + col + 1

    def apply(self, text: str) -> str:
        square = polybius_square(self.polybius_key, 5)
        key = [
            self._number(pos)
            for pos in (find_in_square(square, c) for c in _letters(self.keyword))
            if pos >= 0
        ]
        if not key:
            return "Error: Keyword cannot be empty"

        if self.mode == ENCODE:
            numbers = [
                self._number(pos)
                for pos in (find_in_square(square, c) for c in _letters(text))
                if pos >= 0
            ]
            return " ".join(
                str(n + key[i % len(key)]) for i, n in enumerate(numbers)
            )

        result = []
        tokens = [t for t in text.split() if all(c in string.digits for c in t)]
        for i, token in enumerate(tokens):
            diff = int(token) - key[i % len(key)]
            row, col = divmod(diff, 10)
            if diff > 0 and 0 < row <= 5 and 0 < col <= 5:
                result.append(square[(row - 1) * 5 + (col - 1)])
        return "".join(result)


@register_transform
class TrifidCipher(Transform):
    """Bifid in three dimensions over a 27-symbol cube (A-Z and '.')."""
    name = "trifid"
    display_name = "Trifid Cipher"
    description = "Fractionates letters into layer/row/column of a 3x3x3 cube."
    category = "Polybius Square Ciphers"

    def __init__(self):
        self.key = ""
        self.mode = ENCODE

    def configure(self, editor):
        self.mode = editor.choice("mode", "Mode", self.mode, MODES)
        self.key = editor.text("key", "Key", self.key)

    def _cube(self) -> str:
        cube = []
        for c in list(_letters(self.key)) + list(UPPER) + ["."]:
            if (c in UPPER or c == ".") and c not in cube:
                cube.append(c)
        return "".join(cube)

    def apply(self, text: str) -> str:
        cube = self._cube()
        coords = []
        for c in _letters(text):
            pos = cube.find(c)
            if pos >= 0:
                coords.append((pos // 9, pos % 9 // 3, pos % 3))

        if self.mode == ENCODE:
            combined = [triple[i] for i in range(3) for triple in coords]
            return "".join(
                cube[combined[i] * 9 + combined[i + 1] * 3 + combined[i + 2]]
                for i in range(0, len(combined) - 2, 3)
            )

        flat = [n for triple in coords for n in triple]
        third = len(flat) // 3
        return "".join(
            cube[flat[i] * 9 + flat[third + i] * 3 + flat[2 * third + i]]
            for i in range(third)
        )
