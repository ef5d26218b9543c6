from ..core import Transform, register_transform, ENCODE, MODES

MORSE_CODE = {
    "A": ".-", "B": "-...", "C": "-.-.", "D": "-..", "E": ".", "F": "..-.",
    "G": "--.", "H": "....", "I": "..", "J": ".---", "K": "-.-", "L": ".-..",
    "M": "--", "N": "-.", "O": "---", "P": ".--.", "Q": "--.-", "R": ".-.",
    "S": "...", "T": "-", "U": "..-", "V": "...-", "W": ".--", "X": "-..-",
    "Y": "-.--", "Z": "--..",
    "1": ".----", "2": "..---", "3": "...--", "4": "....-", "5": ".....",
    "6": "-....", "7": "--...", "8": "---..", "9": "----.", "0": "-----",
}
REVERSE_MORSE_CODE = {code: char for char, code in MORSE_CODE.items()}

NATO_ALPHABET = {
    "A": "Alfa", "B": "Bravo", "C": "Charlie", "D": "Delta", "E": "Echo",
    "F": "Foxtrot", "G": "Golf", "H": "Hotel", "I": "India", "J": "Juliett",
    "K": "Kilo", "L": "Lima", "M": "Mike", "N": "November", "O": "Oscar",
    "P": "Papa", "Q": "Quebec", "R": "Romeo", "S": "Sierra", "T": "Tango",
    "U": "Uniform", "V": "Victor", "W": "Whiskey", "X": "X-ray",
    "Y": "Yankee", "Z": "Zulu",
}


@register_transform
class MorseCodeTransform(Transform):
    """
    International Morse code.

    Encoding emits one code per character separated by spaces; anything
    without a code (including spaces) becomes a blank slot. Decoding reads
    whitespace-separated codes and maps unknown codes to a space.
    """
    name = "morse"
    display_name = "Morse Code"
    description = "Letters and digits to dots and dashes."
    category = "Alphabets"

    def __init__(self):
        self.mode = ENCODE

    def configure(self, editor):
        self.mode = editor.choice("mode", "Direction", self.mode, MODES)

    def apply(self, text: str) -> str:
        if self.mode == ENCODE:
            return " ".join(MORSE_CODE.get(c, " ") for c in text.upper())
        return "".join(REVERSE_MORSE_CODE.get(code, " ") for code in text.split())


@register_transform
class SpellingAlphabetTransform(Transform):
    name = "spelling"
    display_name = "Spelling Alphabet"
    description = "Spells letters with the NATO phonetic alphabet."
    category = "Alphabets"

    def apply(self, text: str) -> str:
        return " ".join(NATO_ALPHABET.get(c, " ") for c in text.upper())
