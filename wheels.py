# wheels.py
from __future__ import annotations

from typing import Dict, Tuple

from rotor_and_reflector import Reflector, Rotor

Alpha26 = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"

# ────────────────────────────────────────────────────────────────────────
#  Rotor wiring & notch tables
#  A letter at index i maps to wiring[i]. Notch letters are the positions
#  a rotor steps *onto* when it kicks its neighbour (Q→R for rotor I, …).
# ────────────────────────────────────────────────────────────────────────

ROTORS: Dict[str, Tuple[str, str]] = {
    "I":    ("EKMFLGDQVZNTOWYHXUSPAIBRCJ", "R"),
    "II":   ("AJDKSIRUXBLHWTMCQGZNPYFVOE", "F"),
    "III":  ("BDFHJLCPRTXVZNYEIWGAKMUSQO", "W"),
    "IV":   ("ESOVPZJAYQUIRHXLNFTGKDCMWB", "K"),
    "V":    ("VZBRGITYUPSDNHLXAWMJQOFECK", "A"),
    "VI":   ("JPGVOUMFYQBENHZRDKASXLICTW", "AN"),
    "VII":  ("NZJHGRCXMYSWBOUFAIVLPEKQDT", "AN"),
    "VIII": ("FKQHTLXOCBJSPDZRAMEWNIUYGV", "AN"),
}

REFLECTORS: Dict[str, str] = {
    "A": "EJMZALYXVBWFCRQUONTSPIKHGD",
    "B": "YRUHQSLDPXNGOKMIEBFZCWVJAT",
    "C": "FVPJIAOYEDRZXWGCTKUQSBNMHL",
}

_ROMAN = {"I": 1, "V": 5, "X": 10}


def _roman_key(name: str) -> int:
    """Numeric value of a Roman wheel name, so I, II, …, VIII sort in order."""
    total = 0
    for ch, nxt in zip(name, name[1:] + " "):
        value = _ROMAN[ch]
        total += -value if _ROMAN.get(nxt, 0) > value else value
    return total


ROTOR_NAMES = sorted(ROTORS, key=_roman_key)
REFLECTOR_NAMES = sorted(REFLECTORS)


def make_rotor(name: str, *, position: int = 0) -> Rotor:
    """Return a fresh rotor so callers never share wheel state."""
    try:
        wiring, notches = ROTORS[name.upper()]
    except KeyError:
        raise ValueError(
            f"Unknown rotor {name!r}. Expected one of {ROTOR_NAMES}"
        ) from None
    rotor = Rotor.from_letters(wiring, notches, Alpha26)
    rotor.position = position
    return rotor


def make_reflector(name: str) -> Reflector:
    try:
        wiring = REFLECTORS[name.upper()]
    except KeyError:
        raise ValueError(
            f"Unknown reflector {name!r}. Expected one of {REFLECTOR_NAMES}"
        ) from None
    return Reflector.from_letters(wiring, Alpha26)


__all__ = [
    "Alpha26",
    "ROTORS",
    "REFLECTORS",
    "ROTOR_NAMES",
    "REFLECTOR_NAMES",
    "make_rotor",
    "make_reflector",
]
