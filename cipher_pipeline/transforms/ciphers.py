import string

from ..core import Transform, register_transform, ENCODE, DECODE, MODES

LOWER = string.ascii_lowercase
UPPER = string.ascii_uppercase

def _shift_letter(c: str, shift: int) -> str:
    """Shift an ASCII letter within its case; everything else passes through."""
    if c in LOWER:
        return LOWER[(LOWER.index(c) + shift) % 26]
    if c in UPPER:
        return UPPER[(UPPER.index(c) + shift) % 26]
    return c

def _ascii_upper(c: str) -> str:
    return c.upper() if c in LOWER else c

# ==========================================
#  SUBSTITUTION CIPHERS
# ==========================================

@register_transform
class CaesarCipher(Transform):
    name = "caesar"
    display_name = "Caesar Cipher"
    description = "Shifts each letter by a fixed amount."
    category = "Ciphers"

    def __init__(self):
        self.shift = 1
        self.mode = ENCODE

    def configure(self, editor):
        self.mode = editor.choice("mode", "Mode", self.mode, MODES)
        self.shift = editor.integer("shift", "Shift", self.shift)

    def apply(self, text: str) -> str:
        shift = self.shift % 26
        if self.mode == DECODE:
            shift = -shift
        return "".join(_shift_letter(c, shift) for c in text)


@register_transform
class AffineCipher(Transform):
    """E(x) = (a*x + b) mod 26, D(y) = a^-1 * (y - b) mod 26."""
    name = "affine"
    display_name = "Affine Cipher"
    description = "Linear letter map a*x + b; 'a' must be coprime to 26."
    category = "Ciphers"

    def __init__(self):
        self.a = 5
        self.b = 8
        self.mode = ENCODE

    def configure(self, editor):
        self.mode = editor.choice("mode", "Mode", self.mode, MODES)
        self.a = editor.integer("a", "a (Slope)", self.a)
        self.b = editor.integer("b", "b (Intercept)", self.b)

    def apply(self, text: str) -> str:
        a = self.a % 26
        b = self.b % 26
        if a % 2 == 0 or a == 13:
            return f"Error: 'a' ({a}) must be coprime to 26."

        a_inv = pow(a, -1, 26)
        result = []
        for c in text:
            alphabet = LOWER if c in LOWER else UPPER if c in UPPER else None
            if alphabet is None:
                result.append(c)
                continue
            x = alphabet.index(c)
            if self.mode == ENCODE:
                y = (a * x + b) % 26
            else:
                y = (a_inv * (x - b)) % 26
            result.append(alphabet[y])
        return "".join(result)


@register_transform
class Rot13Cipher(Transform):
    name = "rot13"
    display_name = "ROT13"
    description = "Caesar shift of 13; its own inverse."
    category = "Ciphers"

    def apply(self, text: str) -> str:
        return "".join(_shift_letter(c, 13) for c in text)


@register_transform
class A1Z26Cipher(Transform):
    """
    Letters as their alphabet positions joined by dashes.

    Whitespace survives as a blank slot, other symbols are dropped.
    Decoding maps numbers outside 1-26 to '?'.
    """
    name = "a1z26"
    display_name = "A1Z26"
    description = "A=1 ... Z=26."
    category = "Ciphers"

    def __init__(self):
        self.mode = ENCODE

    def configure(self, editor):
        self.mode = editor.choice("mode", "Mode", self.mode, MODES)

    def _encode(self, text):
        parts = []
        for c in text:
            if c in LOWER:
                parts.append(str(LOWER.index(c) + 1))
            elif c in UPPER:
                parts.append(str(UPPER.index(c) + 1))
            elif c.isspace():
                parts.append(" ")
        return "-".join(parts)

    @staticmethod
    def _letter(number: str) -> str:
        digits = number.lstrip("0")
        if not digits or len(digits) > 2 or int(digits) > 26:
            return "?"
        return LOWER[int(digits) - 1]

    def _decode(self, text):
        numbers = "".join(c if c in string.digits else " " for c in text).split()
        return "".join(self._letter(n) for n in numbers)

    def apply(self, text: str) -> str:
        if self.mode == ENCODE:
            return self._encode(text)
        return self._decode(text)


@register_transform
class VigenereCipher(Transform):
    name = "vigenere"
    display_name = "Vigenere Cipher"
    description = "Polyalphabetic shift driven by a keyword."
    category = "Ciphers"

    def __init__(self):
        self.key = "KEY"
        self.mode = ENCODE

    def configure(self, editor):
        self.mode = editor.choice("mode", "Mode", self.mode, MODES)
        self.key = editor.text("key", "Key", self.key)

    def apply(self, text: str) -> str:
        shifts = [UPPER.index(c.upper()) for c in self.key if c in string.ascii_letters]
        if not shifts:
            return text

        sign = 1 if self.mode == ENCODE else -1
        result = []
        key_idx = 0
        for c in text:
            if c in string.ascii_letters:
                result.append(_shift_letter(c, sign * shifts[key_idx % len(shifts)]))
                key_idx += 1
            else:
                result.append(c)
        return "".join(result)


@register_transform
class BaconCipher(Transform):
    name = "bacon"
    display_name = "Bacon Cipher"
    description = "Each letter as five a/b symbols (26-letter binary variant)."
    category = "Ciphers"

    def __init__(self):
        self.mode = ENCODE

    def configure(self, editor):
        self.mode = editor.choice("mode", "Mode", self.mode, MODES)

    def _encode(self, text):
        result = []
        for c in text.upper():
            if c in UPPER:
                bits = format(UPPER.index(c), "05b")
                result.append(bits.replace("0", "a").replace("1", "b") + " ")
            else:
                result.append(c)
        return "".join(result)

    def _decode(self, text):
        clean = "".join(c for c in text if c in "abAB").lower()
        result = []
        for i in range(0, len(clean), 5):
            chunk = clean[i:i + 5]
            if len(chunk) < 5:
                result.append(" ")
                continue
            value = int(chunk.replace("a", "0").replace("b", "1"), 2)
            result.append(LOWER[value] if value < 26 else "?")
        return "".join(result)

    def apply(self, text: str) -> str:
        if self.mode == ENCODE:
            return self._encode(text)
        return self._decode(text)


@register_transform
class AlphabeticalSubstitution(Transform):
    name = "substitution"
    display_name = "Alphabetical Substitution"
    description = "Maps a plaintext alphabet onto a ciphertext alphabet."
    category = "Ciphers"

    def __init__(self):
        self.plaintext = "abcdefghijklmnopqrstuvwxyz"
        self.ciphertext = "zyxwvutsrqponmlkjihgfedcba"
        self.mode = ENCODE

    def configure(self, editor):
        self.mode = editor.choice("mode", "Mode", self.mode, MODES)
        self.plaintext = editor.text("plaintext", "Plaintext", self.plaintext)
        self.ciphertext = editor.text("ciphertext", "Ciphertext", self.ciphertext)

    def apply(self, text: str) -> str:
        if len(self.plaintext) != len(self.ciphertext):
            return "Error: Plaintext and Ciphertext alphabets must have the same length."

        if self.mode == ENCODE:
            source, target = self.plaintext, self.ciphertext
        else:
            source, target = self.ciphertext, self.plaintext

        table = {}
        for f, t in zip(source, target):
            table[f] = t
            table[_ascii_upper(f)] = _ascii_upper(t)
        return "".join(table.get(c, c) for c in text)

# ==========================================
#  TRANSPOSITION CIPHERS
# ==========================================

def _rail_pattern(length: int, rails: int):
    """Rail index of every position along the zig-zag."""
    pattern = []
    rail, step = 0, 1
    for _ in range(length):
        pattern.append(rail)
        if rail == 0:
            step = 1
        elif rail == rails - 1:
            step = -1
        rail += step
    return pattern


@register_transform
class RailFenceCipher(Transform):
    name = "rail_fence"
    display_name = "Rail Fence Cipher"
    description = "Zig-zag transposition across a number of rails."
    category = "Ciphers"

    def __init__(self):
        self.rails = 3
        self.mode = ENCODE

    def configure(self, editor):
        self.mode = editor.choice("mode", "Mode", self.mode, MODES)
        self.rails = editor.integer("rails", "Rails", self.rails, minimum=2, maximum=50)

    def apply(self, text: str) -> str:
        if not text:
            return ""
        rails = max(2, self.rails)
        pattern = _rail_pattern(len(text), rails)
        # Positions in the order they are written out, rail by rail.
        order = sorted(range(len(text)), key=lambda i: pattern[i])

        if self.mode == ENCODE:
            return "".join(text[i] for i in order)

        result = [""] * len(text)
        for c, i in zip(text, order):
            result[i] = c
        return "".join(result)
