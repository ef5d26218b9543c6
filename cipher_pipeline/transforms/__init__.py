"""Built-in transforms. Importing a module registers its classes."""
from . import text, alphabets, ciphers, enigma, polybius, encoding, modern

__all__ = ["text", "alphabets", "ciphers", "enigma", "polybius", "encoding", "modern"]
