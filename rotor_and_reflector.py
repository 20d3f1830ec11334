# rotor_and_reflector.py
from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from itertools import accumulate

from debug import debug

TurnoverFunc = Callable[[int], None]


def _ignore_turnover(knocks: int) -> None:
    pass


def _check_permutation(table: Sequence[int], what: str) -> tuple[int, ...]:
    size = len(table)
    if size == 0:
        raise ValueError(f"{what} table must not be empty")
    for i, v in enumerate(table):
        if not (0 <= v < size):
            raise ValueError(f"{what} entry {v} at index {i} out of range 0–{size - 1}")
    if len(set(table)) != size:
        raise ValueError(f"{what} table must be a permutation of 0–{size - 1}")
    return tuple(table)


class Rotor:
    """A single substitution wheel.

    The rotor's position shifts which wiring terminal faces the incoming
    signal. Notches mark positions that, when newly reached, knock the
    turnover callback with the number of notches passed.
    """

    def __init__(
        self,
        cipher: Sequence[int],
        notches: Iterable[int] = (),
        callback: TurnoverFunc | None = None,
        *,
        position: int = 0,
    ) -> None:
        self._fwd = _check_permutation(cipher, "Rotor cipher")
        self.size = len(self._fwd)

        rev = [0] * self.size
        for i, v in enumerate(self._fwd):
            rev[v] = i
        self._rev = tuple(rev)

        notch_set = frozenset(notches)
        bad = sorted(n for n in notch_set if not (0 <= n < self.size))
        if bad:
            raise ValueError(f"Notch positions {bad} out of range 0–{self.size - 1}")
        self._notches = notch_set

        # _below[i] = notches strictly below i, for constant-time arc counts
        flags = [1 if i in notch_set else 0 for i in range(self.size)]
        self._below = (0, *accumulate(flags))

        self._callback: TurnoverFunc = _ignore_turnover
        self.turnover_callback = callback
        self.position = position

    @classmethod
    def from_letters(
        cls,
        wiring: str,
        notches: str,
        alphabet: str,
        callback: TurnoverFunc | None = None,
    ) -> "Rotor":
        """Build from a wiring string such as ``"EKMFLGDQVZNTOWYHXUSPAIBRCJ"``."""
        if sorted(wiring) != sorted(alphabet):
            raise ValueError("wiring must be a permutation of alphabet")
        if not set(notches) <= set(alphabet):
            raise ValueError("Notch characters must be in the alphabet")
        return cls(
            [alphabet.index(c) for c in wiring],
            [alphabet.index(c) for c in notches],
            callback,
        )

    # ── read-only views ──────────────────────────────────────────
    @property
    def base(self) -> int:
        return self.size

    @property
    def forward_cipher(self) -> tuple[int, ...]:
        return self._fwd

    @property
    def reverse_cipher(self) -> tuple[int, ...]:
        return self._rev

    @property
    def notches(self) -> frozenset[int]:
        return self._notches

    @property
    def notch_count(self) -> int:
        return len(self._notches)

    # ── position & callback ──────────────────────────────────────
    @property
    def position(self) -> int:
        return self._position

    @position.setter
    def position(self, value: int) -> None:
        if not (0 <= value < self.size):
            raise ValueError(f"Position {value} out of range 0–{self.size - 1}")
        self._position = value

    @property
    def turnover_callback(self) -> TurnoverFunc:
        return self._callback

    @turnover_callback.setter
    def turnover_callback(self, callback: TurnoverFunc | None) -> None:
        if callback is None:
            callback = _ignore_turnover
        elif not callable(callback):
            raise TypeError(f"turnover callback must be callable, got {callback!r}")
        self._callback = callback

    # ── stepping ─────────────────────────────────────────────────
    def advance(self, steps: int | None = None) -> int:
        """Rotate the rotor and return the new position.

        With no argument the rotor moves a single step. With ``steps`` it
        behaves exactly like that many single steps, but the callback is
        knocked once with the total notch count.
        """
        if steps is None:
            return self._step()
        if steps < 0:
            raise ValueError(f"Cannot advance by a negative step count ({steps})")

        start = self._position
        laps, rest = divmod(steps, self.size)
        final = (start + rest) % self.size
        knocks = laps * len(self._notches) + self._notches_in_arc(start, final)

        self._position = final
        if debug.is_on("stepping"):
            debug.log("stepping", f"Rotor {start}->{final} by {steps}, knocks={knocks}")
        if knocks > 0:
            self._knock(knocks)
        return final

    def _step(self) -> int:
        self._position = (self._position + 1) % self.size
        hit = self._position in self._notches
        if debug.is_on("stepping"):
            debug.log("stepping", f"Rotor pos {self._position}, notch_hit={hit}")
        if hit:
            self._knock(1)
        return self._position

    def _notches_in_arc(self, start: int, end: int) -> int:
        """Notches in the half-open arc (start, end], wrapping past base-1."""
        below = self._below
        if end == start:
            return 0
        if end > start:
            return below[end + 1] - below[start + 1]
        return (below[self.size] - below[start + 1]) + below[end + 1]

    def _knock(self, knocks: int) -> None:
        if debug.is_on("turnover"):
            debug.log("turnover", f"Rotor at {self._position} knocks {knocks}")
        self._callback(knocks)

    # ── signal paths ─────────────────────────────────────────────
    def do_forward_cipher(self, val: int) -> int:
        assert 0 <= val < self.size, f"code point {val} out of range"
        return self._fwd[(self._position + val) % self.size]

    def do_reverse_cipher(self, val: int) -> int:
        assert 0 <= val < self.size, f"code point {val} out of range"
        return self._rev[(self._position + val) % self.size]

    def __repr__(self) -> str:
        return f"<Rotor base={self.size} pos={self._position} notches={sorted(self._notches)}>"


class Reflector:
    """Fixed permutation that turns the signal around between passes."""

    def __init__(self, table: Sequence[int]) -> None:
        self._map = _check_permutation(table, "Reflector")
        self.size = len(self._map)

        # a non-involution is a valid table, just not a physical reflector
        if not self.is_involution:
            debug.warn("reflector", "Reflector is not an involution without fixed points")

    @classmethod
    def from_letters(cls, wiring: str, alphabet: str) -> "Reflector":
        if len(wiring) != len(alphabet):
            raise ValueError("Reflector wiring length must match alphabet length")
        if set(wiring) != set(alphabet):
            raise ValueError("Reflector wiring must be a permutation of alphabet")
        return cls([alphabet.index(c) for c in wiring])

    @property
    def table(self) -> tuple[int, ...]:
        return self._map

    @property
    def is_involution(self) -> bool:
        """True if map[map[i]] == i and map[i] != i for every i."""
        return all(self._map[j] == i and i != j for i, j in enumerate(self._map))

    def reflect(self, sig: int) -> int:
        mapped = self._map[sig]
        if debug.is_on("reflector"):
            debug.log("reflector", f"{sig}->{mapped}")
        return mapped

    def __len__(self) -> int:
        return self.size

    def __getitem__(self, sig: int) -> int:
        return self._map[sig]

    def __repr__(self) -> str:
        return f"<Reflector base={self.size} involution={self.is_involution}>"
