"""
Braille Plugin - Encodes text into Unicode Braille patterns

Example of an out-of-tree transform. To add your own:

1. Create a new .py file in a plugins directory
2. Subclass Transform and decorate it with @register_transform
3. Add an entry to manifest.json with the file name and transform id
4. Point the CLI at the directory with --plugin-dir (this one is loaded
   by default)
"""
from cipher_pipeline.core import Transform, register_transform, ENCODE, MODES


@register_transform
class BrailleTransform(Transform):
    """
    Each UTF-8 byte as one cell of the Unicode Braille block.

    Byte N maps to chr(0x2800 + N), so "Hi" becomes two dot patterns.
    Decoding passes non-Braille characters through unchanged.
    """

    name = "braille"
    display_name = "Braille Patterns"
    description = "UTF-8 bytes as Unicode Braille dot patterns."
    category = "Encoding"

    BRAILLE_BASE = 0x2800

    def __init__(self):
        self.mode = ENCODE

    def configure(self, editor):
        self.mode = editor.choice("mode", "Mode", self.mode, MODES)

    def apply(self, text: str) -> str:
        if self.mode == ENCODE:
            return "".join(chr(self.BRAILLE_BASE + b) for b in text.encode("utf-8"))

        decoded = bytearray()
        for char in text:
            code_point = ord(char)
            if self.BRAILLE_BASE <= code_point <= self.BRAILLE_BASE + 255:
                decoded.append(code_point - self.BRAILLE_BASE)
            else:
                decoded.extend(char.encode("utf-8"))
        return decoded.decode("utf-8", errors="replace")
