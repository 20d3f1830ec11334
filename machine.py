# machine.py  ─────────────────────────────────────────────────────
from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from copy import copy
from functools import partial

from debug import debug
from rotor_and_reflector import Reflector, Rotor


def _is_machine_link(callback) -> bool:
    return isinstance(callback, partial) and getattr(callback.func, "__func__", None) is EnigmaMachine._kick


class EnigmaMachine:
    """Rotor assembly plus reflector.

    Rotors are chained so that each one's turnover advances the one after
    it. The machine works on its own copies of the rotors it is given, and
    links are held as indices into that tuple, never as references to a
    neighbouring rotor.
    """

    def __init__(
        self,
        rotors: Sequence[Rotor],
        reflector: Reflector | Sequence[int],
    ) -> None:
        if not rotors:
            raise ValueError("A machine needs at least one rotor")

        base = rotors[0].base
        for i, rotor in enumerate(rotors):
            if rotor.base != base:
                raise ValueError(
                    f"Rotor {i} has base {rotor.base}, expected {base}"
                )

        if not isinstance(reflector, Reflector):
            reflector = Reflector(reflector)
        if len(reflector) != base:
            raise ValueError(
                f"Reflector length {len(reflector)} does not match base {base}"
            )

        self._base = base
        # own copies, so rewiring never touches the caller's wheels or
        # another machine built from them
        self._rotors: tuple[Rotor, ...] = tuple(copy(r) for r in rotors)
        self.reflector = reflector

        # wire rotor i to kick rotor i+1; the last keeps its own callback
        for i, rotor in enumerate(self._rotors[:-1]):
            rotor.turnover_callback = partial(self._kick, i + 1)

        # a last rotor lifted from another machine must not kick that machine
        last = self._rotors[-1]
        if _is_machine_link(last.turnover_callback):
            last.turnover_callback = None

    # ── introspection ───────────────────────────────────────────
    @property
    def base(self) -> int:
        return self._base

    @property
    def rotor_count(self) -> int:
        return len(self._rotors)

    def get_base(self) -> int:
        return self._base

    def get_rotor_count(self) -> int:
        return len(self._rotors)

    @property
    def rotors(self) -> tuple[Rotor, ...]:
        return self._rotors

    @property
    def positions(self) -> tuple[int, ...]:
        return tuple(r.position for r in self._rotors)

    @positions.setter
    def positions(self, values: Sequence[int]) -> None:
        """Restore every rotor at once; no turnovers fire."""
        if len(values) != len(self._rotors):
            raise ValueError(
                f"Expected {len(self._rotors)} positions, got {len(values)}"
            )
        for pos in values:
            if not (0 <= pos < self._base):
                raise ValueError(f"Position {pos} out of range 0–{self._base - 1}")
        for rotor, pos in zip(self._rotors, values):
            rotor.position = pos

    # ── stepping ────────────────────────────────────────────────
    def _kick(self, index: int, knocks: int) -> None:
        self._rotors[index].advance(knocks)

    def advance(self, steps: int = 1) -> None:
        """Advance the first rotor; the rest follow through the notch chain."""
        self._rotors[0].advance(steps)
        if debug.is_on("stepping"):
            debug.log("stepping", f"Rotor pos {list(self.positions)}")

    # ── encipher ────────────────────────────────────────────────
    def encode(self, val: int) -> int:
        """Forward through the rotors, reflect, back through them in reverse."""
        if not (0 <= val < self._base):
            raise ValueError(f"Signal {val} out of range 0–{self._base - 1}")

        signal = val
        for rotor in self._rotors:
            signal = rotor.do_forward_cipher(signal)

        signal = self.reflector.reflect(signal)

        for rotor in reversed(self._rotors):
            signal = rotor.do_reverse_cipher(signal)

        if debug.is_on("encode"):
            debug.log("encode", f"{val}->{signal} at {list(self.positions)}")
        return signal

    def encode_next(self, val: int) -> int:
        """Step the assembly, then encode, as a key press would."""
        if not (0 <= val < self._base):
            raise ValueError(f"Signal {val} out of range 0–{self._base - 1}")
        self.advance()
        return self.encode(val)

    def encode_sequence(self, values: Iterable[int]) -> Iterator[int]:
        for val in values:
            yield self.encode_next(val)

    def __repr__(self) -> str:
        return (
            f"<EnigmaMachine base={self._base} rotors={self.rotor_count} "
            f"pos={list(self.positions)}>"
        )
