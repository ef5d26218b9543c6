import string

from ..core import Transform, register_transform

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

# ==========================================
#  PLAIN TEXT TRANSFORMS
# ==========================================

@register_transform
class ReplaceTransform(Transform):
    name = "replace"
    display_name = "Replace"
    description = "Replaces every occurrence of a substring."
    category = "Transform"

    def __init__(self):
        self.find = ""
        self.replace = ""

    def configure(self, editor):
        self.find = editor.text("find", "Find", self.find)
        self.replace = editor.text("replace", "Replace with", self.replace)

    def apply(self, text: str) -> str:
        if not self.find:
            return text
        return text.replace(self.find, self.replace)


@register_transform
class ReverseTransform(Transform):
    name = "reverse"
    display_name = "Reverse"
    description = "Reverses the order of characters."
    category = "Transform"

    def apply(self, text: str) -> str:
        return text[::-1]


@register_transform
class CaseTransform(Transform):
    name = "case_transform"
    display_name = "Case Transform"
    description = "Lower, upper, capitalized or alternating case."
    category = "Transform"

    CASE_MODES = (
        ("lower", "Lower Case"),
        ("upper", "Upper Case"),
        ("capitalize", "Capitalize"),
        ("alternating", "Alternating"),
    )

    def __init__(self):
        self.mode = "lower"

    def configure(self, editor):
        self.mode = editor.choice("mode", "Mode", self.mode, self.CASE_MODES)

    def apply(self, text: str) -> str:
        if self.mode == "upper":
            return text.upper()
        if self.mode == "capitalize":
            return " ".join(word[:1].upper() + word[1:] for word in text.split())
        if self.mode == "alternating":
            return "".join(
                c.upper() if i % 2 else c.lower() for i, c in enumerate(text)
            )
        return text.lower()


@register_transform
class NumeralSystemTransform(Transform):
    """
    Converts whitespace-separated numbers between bases.

    Tokens that do not parse in the source base are kept as they are.
    """
    name = "numeral"
    display_name = "Numeral System"
    description = "Converts numbers between decimal, binary, octal and hexadecimal."
    category = "Transform"

    SYSTEMS = (
        ("decimal", "Decimal"),
        ("binary", "Binary"),
        ("octal", "Octal"),
        ("hexadecimal", "Hexadecimal"),
    )
    BASES = {"decimal": 10, "binary": 2, "octal": 8, "hexadecimal": 16}
    FORMATS = {"decimal": "d", "binary": "b", "octal": "o", "hexadecimal": "x"}
    DIGITS = {
        "decimal": string.digits,
        "binary": "01",
        "octal": string.octdigits,
        "hexadecimal": string.hexdigits,
    }

    def __init__(self):
        self.source = "decimal"
        self.target = "binary"

    def configure(self, editor):
        self.source = editor.choice("from", "From", self.source, self.SYSTEMS)
        self.target = editor.choice("to", "To", self.target, self.SYSTEMS)

    def _convert(self, token: str) -> str:
        digits = token[1:] if token[0] in "+-" else token
        if not digits or any(c not in self.DIGITS[self.source] for c in digits):
            return token
        # Longer runs cannot fit in 64 bits, even in binary.
        if len(digits.lstrip("0")) > 64:
            return token
        value = int(token, self.BASES[self.source])
        if not INT64_MIN <= value <= INT64_MAX:
            return token
        return format(value, self.FORMATS[self.target])

    def apply(self, text: str) -> str:
        return " ".join(self._convert(token) for token in text.split())


@register_transform
class BitwiseTransform(Transform):
    name = "bitwise"
    display_name = "Bitwise Operation"
    description = "Applies a bitwise operation to every UTF-8 byte."
    category = "Transform"

    OPERATIONS = (
        ("not", "NOT"),
        ("and", "AND"),
        ("or", "OR"),
        ("xor", "XOR"),
        ("nand", "NAND"),
        ("nor", "NOR"),
        ("xnor", "XNOR"),
    )

    def __init__(self):
        self.operation = "not"
        self.operand = "0"

    def configure(self, editor):
        self.operation = editor.choice("op", "Operation", self.operation, self.OPERATIONS)
        if self.operation != "not":
            self.operand = editor.text("operand", "Operand (0-255)", self.operand)

    def _operand(self) -> int:
        """Operand as a byte; anything that is not 0-255 in ASCII digits counts as 0."""
        operand = self.operand[1:] if self.operand.startswith("+") else self.operand
        if not operand or any(c not in string.digits for c in operand):
            return 0
        digits = operand.lstrip("0")
        if len(digits) > 3:
            return 0
        value = int(digits or "0")
        return value if value <= 255 else 0

    def _byte(self, b: int, k: int) -> int:
        op = self.operation
        if op == "and":
            return b & k
        if op == "or":
            return b | k
        if op == "xor":
            return b ^ k
        if op == "nand":
            return ~(b & k) & 0xFF
        if op == "nor":
            return ~(b | k) & 0xFF
        if op == "xnor":
            return ~(b ^ k) & 0xFF
        return ~b & 0xFF

    def apply(self, text: str) -> str:
        k = self._operand()
        result = bytes(self._byte(b, k) for b in text.encode("utf-8"))
        return result.decode("utf-8", errors="replace")
