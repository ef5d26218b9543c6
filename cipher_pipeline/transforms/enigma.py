"""
Enigma I / M3 style rotor machine.

Three rotors chosen from I-VIII, each with a start position and ring
setting, one of three reflectors and a plugboard given as letter pairs
("AB CD EF"). Rotors step before every letter, including the middle
rotor's double step. Non-letters pass through without stepping.
"""
import string

from ..core import Transform, register_transform

UPPER = string.ascii_uppercase

ROTOR_WIRINGS = [
    "EKMFLGDQVZNTOWYHXUSPAIBRCJ",  # I
    "AJDKSIRUXBLHWTMCQGZNPYFVOE",  # II
    "BDFHJLCPRTXVZNYEIWGAKMUSQO",  # III
    "ESOVPZJAYQUIRHXLNFTGKDCMWB",  # IV
    "VZBRGITYUPSDNHLXAWMJQOFECK",  # V
    "JPGVOUMFYQBENHZRDKASXLICTW",  # VI
    "NZJHGRCXMYSWBOUFAIVLPEKQDT",  # VII
    "FKQHTLXOCBJSPDZRAMEWNIUYGV",  # VIII
]
ROTOR_NOTCHES = ["Q", "E", "V", "J", "Z", "ZM", "ZM", "ZM"]
ROTOR_NAMES = ["I", "II", "III", "IV", "V", "VI", "VII", "VIII"]

REFLECTOR_WIRINGS = [
    "YRUHQSLDPXNGOKMIEBFZCWVJAT",  # B
    "FVPJIAOYEDRZXWGCTKUQSBNMHL",  # C
    "ENKQAUYWJICOPBLMDXZVFTHRGS",  # B-Thin
]
REFLECTOR_NAMES = ["Reflector B", "Reflector C", "Reflector B-Thin"]


class Rotor:
    def __init__(self, number: int, position: int, ring_setting: int):
        self.wiring = ROTOR_WIRINGS[number]
        self.notch = ROTOR_NOTCHES[number]
        self.position = position % 26
        self.ring_setting = ring_setting % 26

    def at_notch(self) -> bool:
        return UPPER[self.position] in self.notch

    def step(self):
        self.position = (self.position + 1) % 26

    def _offset(self) -> int:
        return (self.position - self.ring_setting) % 26

    def forward(self, signal: int) -> int:
        shift = self._offset()
        wired = UPPER.index(self.wiring[(signal + shift) % 26])
        return (wired - shift) % 26

    def backward(self, signal: int) -> int:
        shift = self._offset()
        index = self.wiring.index(UPPER[(signal + shift) % 26])
        return (index - shift) % 26


class Reflector:
    def __init__(self, number: int):
        self.wiring = REFLECTOR_WIRINGS[number]

    def reflect(self, signal: int) -> int:
        return UPPER.index(self.wiring[signal])


class Plugboard:
    def __init__(self, pairs: str):
        self.mapping = list(range(26))
        for pair in pairs.split():
            if len(pair) != 2:
                continue
            a, b = pair
            if a in string.ascii_letters and b in string.ascii_letters:
                a, b = UPPER.index(a.upper()), UPPER.index(b.upper())
                self.mapping[a] = b
                self.mapping[b] = a

    def swap(self, signal: int) -> int:
        return self.mapping[signal]


@register_transform
class EnigmaMachine(Transform):
    name = "enigma"
    display_name = "Enigma Machine"
    description = "Three-rotor Enigma with reflector, ring settings and plugboard."
    category = "Ciphers"

    ROTOR_OPTIONS = tuple((i, f"Rotor {ROTOR_NAMES[i]}") for i in range(8))
    REFLECTOR_OPTIONS = tuple(enumerate(REFLECTOR_NAMES))
    SLOTS = ("left", "middle", "right")

    def __init__(self):
        self.rotors = [0, 1, 2]
        self.positions = [0, 0, 0]
        self.rings = [0, 0, 0]
        self.reflector = 0
        self.plugboard_pairs = ""

    def configure(self, editor):
        for i, slot in enumerate(self.SLOTS):
            self.rotors[i] = editor.choice(
                f"{slot}_rotor", f"{slot.title()} Rotor", self.rotors[i], self.ROTOR_OPTIONS
            )
        for i, slot in enumerate(self.SLOTS):
            self.positions[i] = editor.integer(
                f"{slot}_position", f"{slot.title()} Position", self.positions[i], 0, 25
            )
        for i, slot in enumerate(self.SLOTS):
            self.rings[i] = editor.integer(
                f"{slot}_ring", f"{slot.title()} Ring", self.rings[i], 0, 25
            )
        self.reflector = editor.choice(
            "reflector", "Reflector", self.reflector, self.REFLECTOR_OPTIONS
        )
        self.plugboard_pairs = editor.text("plugboard", "Plugboard", self.plugboard_pairs)

    def _encode_letter(self, c, rotors, reflector, plugboard) -> str:
        left, middle, right = rotors

        if middle.at_notch():
            middle.step()
            left.step()
        elif right.at_notch():
            middle.step()
        right.step()

        signal = plugboard.swap(UPPER.index(c.upper()))
        for rotor in (right, middle, left):
            signal = rotor.forward(signal)
        signal = reflector.reflect(signal)
        for rotor in (left, middle, right):
            signal = rotor.backward(signal)
        return UPPER[plugboard.swap(signal)]

    def apply(self, text: str) -> str:
        rotors = [
            Rotor(self.rotors[i] % 8, self.positions[i], self.rings[i])
            for i in range(3)
        ]
        reflector = Reflector(self.reflector % 3)
        plugboard = Plugboard(self.plugboard_pairs)

        return "".join(
            self._encode_letter(c, rotors, reflector, plugboard)
            if c in string.ascii_letters else c
            for c in text
        )
