import base64
import binascii
import urllib.parse
from abc import abstractmethod

from reedsolo import RSCodec, ReedSolomonError

from ..core import Transform, register_transform, log_info, log_warn, ENCODE, MODES

# ECC Magic byte for auto-detection of error-corrected payloads
ECC_MAGIC_BYTE = 0xEC
DEFAULT_ECC_SYMBOLS = 10


def _lossy(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


class _CodecTransform(Transform):
    """Encode/decode pair; subclasses fill in `encode` and `decode`."""
    category = "Encoding"

    def __init__(self):
        self.mode = ENCODE

    def configure(self, editor):
        self.mode = editor.choice("mode", "Mode", self.mode, MODES)

    def apply(self, text: str) -> str:
        if self.mode == ENCODE:
            return self.encode(text)
        return self.decode(text)

    @abstractmethod
    def encode(self, text: str) -> str:
        pass

    @abstractmethod
    def decode(self, text: str) -> str:
        pass

# ==========================================
#  BINARY-TO-TEXT ENCODINGS
# ==========================================

@register_transform
class Base32Encoding(_CodecTransform):
    name = "base32"
    display_name = "Base32"
    description = "RFC 4648 Base32."

    def encode(self, text):
        return base64.b32encode(text.encode("utf-8")).decode("ascii")

    def decode(self, text):
        try:
            return _lossy(base64.b32decode(text.strip()))
        except (binascii.Error, ValueError):
            return "Invalid Base32"


@register_transform
class Base64Encoding(_CodecTransform):
    name = "base64"
    display_name = "Base64"
    description = "RFC 4648 Base64 with padding."

    def encode(self, text):
        return base64.b64encode(text.encode("utf-8")).decode("ascii")

    def decode(self, text):
        try:
            return _lossy(base64.b64decode(text.strip(), validate=True))
        except (binascii.Error, ValueError):
            return "Invalid Base64"


@register_transform
class Ascii85Encoding(_CodecTransform):
    name = "ascii85"
    display_name = "Ascii85"
    description = "Adobe Ascii85, framed by <~ and ~>."

    def encode(self, text):
        return base64.a85encode(text.encode("utf-8"), adobe=True).decode("ascii")

    def decode(self, text):
        body = text.strip()
        if body.startswith("<~"):
            body = body[2:]
        if body.endswith("~>"):
            body = body[:-2]
        try:
            return _lossy(base64.a85decode(body))
        except ValueError:
            return "Invalid Ascii85"

# ==========================================
#  TELEGRAPH CODES
# ==========================================

LETTER_SHIFT = 0b11111
FIGURE_SHIFT = 0b11011

BAUDOT_LETTERS = {
    "A": 0b00011, "B": 0b11001, "C": 0b01110, "D": 0b01001, "E": 0b00001,
    "F": 0b01101, "G": 0b11010, "H": 0b10100, "I": 0b00110, "J": 0b01011,
    "K": 0b01111, "L": 0b10010, "M": 0b11100, "N": 0b01100, "O": 0b11000,
    "P": 0b10110, "Q": 0b10111, "R": 0b01010, "S": 0b00101, "T": 0b10000,
    "U": 0b00111, "V": 0b11110, "W": 0b10011, "X": 0b11101, "Y": 0b10101,
    "Z": 0b10001, " ": 0b00100, "\r": 0b01000, "\n": 0b00010,
}
BAUDOT_FIGURES = {
    "-": 0b00011, "?": 0b11001, ":": 0b01110, "$": 0b01001, "3": 0b00001,
    "!": 0b01101, "&": 0b11010, "#": 0b10100, "8": 0b00110, "'": 0b01011,
    "(": 0b01111, ")": 0b10010, ".": 0b11100, ",": 0b01100, "9": 0b11000,
    "0": 0b10110, "1": 0b10111, "4": 0b01010, "/": 0b00101, "5": 0b10000,
    "7": 0b00111, "=": 0b11110, "2": 0b10011, "+": 0b11101, "6": 0b10101,
    '"': 0b10001, " ": 0b00100, "\r": 0b01000, "\n": 0b00010,
}


@register_transform
class BaudotCode(_CodecTransform):
    """
    ITA2 five-bit code with letter/figure shift states.

    Each code is written as five binary digits separated by spaces; a
    shift code is emitted only when the state changes.
    """
    name = "baudot"
    display_name = "Baudot Code"
    description = "ITA2 telegraph code in 5-bit groups."

    def encode(self, text):
        codes = []
        in_figures = False
        for c in text.upper():
            if c in BAUDOT_LETTERS:
                if in_figures:
                    codes.append(LETTER_SHIFT)
                    in_figures = False
                codes.append(BAUDOT_LETTERS[c])
            elif c in BAUDOT_FIGURES:
                if not in_figures:
                    codes.append(FIGURE_SHIFT)
                    in_figures = True
                codes.append(BAUDOT_FIGURES[c])
        return " ".join(format(code, "05b") for code in codes)

    def decode(self, text):
        letters = {code: c for c, code in BAUDOT_LETTERS.items()}
        figures = {code: c for c, code in BAUDOT_FIGURES.items()}
        result = []
        in_figures = False
        for group in text.split():
            if not group or any(c not in "01" for c in group):
                continue
            code = int(group, 2)
            if code == LETTER_SHIFT:
                in_figures = False
            elif code == FIGURE_SHIFT:
                in_figures = True
            else:
                table = figures if in_figures else letters
                if code in table:
                    result.append(table[code])
        return "".join(result)

# ==========================================
#  UNICODE AND WEB ENCODINGS
# ==========================================

@register_transform
class UnicodeCodePoints(_CodecTransform):
    name = "unicode"
    display_name = "Unicode Code Points"
    description = "Characters as U+XXXX code points."

    def encode(self, text):
        return "".join(f"U+{ord(c):04X} " for c in text)

    def decode(self, text):
        result = []
        for part in text.split():
            digits = part[2:] if part[:2] in ("U+", "u+") else part
            try:
                code_point = int(digits, 16)
            except ValueError:
                continue
            if 0 <= code_point <= 0x10FFFF and not 0xD800 <= code_point <= 0xDFFF:
                result.append(chr(code_point))
        return "".join(result)


@register_transform
class UrlEncoding(_CodecTransform):
    name = "url"
    display_name = "URL Encoding"
    description = "Percent-encoding of everything but unreserved characters."

    def encode(self, text):
        return urllib.parse.quote(text, safe="")

    def decode(self, text):
        return urllib.parse.unquote_plus(text, errors="replace")


@register_transform
class PunycodeEncoding(_CodecTransform):
    name = "punycode"
    display_name = "Punycode"
    description = "Internationalized domain names to and from xn-- labels."

    def encode(self, text):
        try:
            return text.encode("idna").decode("ascii")
        except UnicodeError:
            return "Invalid domain"

    def decode(self, text):
        try:
            return text.encode("ascii").decode("idna")
        except UnicodeError:
            return "Invalid punycode"


@register_transform
class BootstringEncoding(_CodecTransform):
    """
    Simplified Bootstring: the ASCII characters, then a dash and the
    non-ASCII code points in hex, dash separated.
    """
    name = "bootstring"
    display_name = "Bootstring"
    description = "Simplified Bootstring (ASCII part plus hex code points)."

    def encode(self, text):
        basic = "".join(c for c in text if c.isascii())
        extended = [format(ord(c), "x") for c in text if not c.isascii()]
        if not extended:
            return basic
        return basic + "-" + "-".join(extended)

    def decode(self, text):
        basic, dash, extended = text.rpartition("-")
        if not dash:
            return text
        result = [basic]
        for part in extended.split("-"):
            try:
                code_point = int(part, 16)
            except ValueError:
                continue
            if 0 <= code_point <= 0x10FFFF and not 0xD800 <= code_point <= 0xDFFF:
                result.append(chr(code_point))
        return "".join(result)


@register_transform
class IntegerEncoding(Transform):
    name = "integer"
    display_name = "Integer"
    description = "UTF-8 bytes as decimal or hex numbers."
    category = "Encoding"

    FORMATS = (("decimal", "To Decimal"), ("hex", "To Hex"))

    def __init__(self):
        self.mode = "decimal"

    def configure(self, editor):
        self.mode = editor.choice("mode", "Mode", self.mode, self.FORMATS)

    def apply(self, text: str) -> str:
        spec = "02X" if self.mode == "hex" else "d"
        return "".join(format(b, spec) + " " for b in text.encode("utf-8"))

# ==========================================
#  ERROR CORRECTION: Reed-Solomon
# ==========================================

@register_transform
class ReedSolomonEncoding(_CodecTransform):
    """
    Reed-Solomon protected payload, hex encoded.

    Layout: [MAGIC_BYTE] [ECC_SYMBOLS_COUNT] [RS_ENCODED_DATA]. Decoding
    reads the symbol count from the header, so it does not depend on the
    stage's own setting, and repairs up to half that many corrupted bytes.
    """
    name = "reed_solomon"
    display_name = "Reed-Solomon"
    description = "Adds Reed-Solomon error correction (hex output)."

    def __init__(self):
        super().__init__()
        self.ecc_symbols = DEFAULT_ECC_SYMBOLS

    def configure(self, editor):
        super().configure(editor)
        self.ecc_symbols = editor.integer(
            "ecc_symbols", "ECC Symbols", self.ecc_symbols, minimum=1, maximum=64
        )

    def encode(self, text):
        if not text:
            return ""
        ecc_symbols = min(max(self.ecc_symbols, 1), 64)
        encoded = RSCodec(ecc_symbols).encode(text.encode("utf-8"))
        return (bytes([ECC_MAGIC_BYTE, ecc_symbols]) + bytes(encoded)).hex()

    def decode(self, text):
        try:
            data = bytes.fromhex(text.strip())
        except ValueError:
            return "Invalid hex input"
        if not data:
            return ""
        if len(data) < 2 or data[0] != ECC_MAGIC_BYTE or data[1] == 0:
            return "Missing Reed-Solomon header"
        if len(data) - 2 <= data[1]:
            return "Truncated Reed-Solomon payload"

        try:
            decoded, _, errata_pos = RSCodec(data[1]).decode(data[2:])
        except (ReedSolomonError, ValueError) as e:
            log_warn(f"ECC decode failed: {e}. Data may be corrupted beyond repair.")
            return "Data corrupted beyond repair"

        if errata_pos:
            log_info(f"Corrected {len(errata_pos)} error(s) using Reed-Solomon.")
        return _lossy(bytes(decoded))
