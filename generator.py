# generator.py
from __future__ import annotations

from random import Random

from debug import debug
from machine import EnigmaMachine

BPF = 53        # bits in a float mantissa
RECIP_BPF = 2 ** -BPF


class Generator:
    """Bounded value stream over an EnigmaMachine.

    Each draw feeds the previous value back in: ``value = encode_next(value)``.
    The machine is shared, not owned; anything else that advances it also
    moves this stream along.
    """

    def __init__(self, machine: EnigmaMachine, seed: int) -> None:
        if not (0 <= seed < machine.base):
            raise ValueError(f"Seed {seed} out of range 0–{machine.base - 1}")
        self.machine = machine
        self._value = seed

    def min(self) -> int:
        return 0

    def max(self) -> int:
        return self.machine.base - 1

    @property
    def value(self) -> int:
        return self._value

    def __call__(self) -> int:
        self._value = self.machine.encode_next(self._value)
        if debug.is_on("generator"):
            debug.log("generator", f"draw {self._value}")
        return self._value

    def __iter__(self) -> "Generator":
        return self

    def __next__(self) -> int:
        return self()

    def __repr__(self) -> str:
        return f"<Generator value={self._value} range=0–{self.max()}>"


class EnigmaRandom(Random):
    """`random.Random` driven by a Generator, for shuffle(), sample() & co.

    Only the largest power-of-two prefix of each draw's range is kept, so
    the bits handed out are uniform. Like SystemRandom, there is no state to
    save or restore here.
    """

    def __init__(self, generator: Generator) -> None:
        span = generator.max() - generator.min() + 1
        if span < 2:
            raise ValueError("Generator must produce at least two distinct values")
        self.generator = generator
        self._draw_bits = span.bit_length() - 1
        # (value, rotor positions) has this many states; rejecting them all
        # in a row means the stream is stuck in a cycle above the limit
        machine = generator.machine
        self._max_rejects = machine.base ** (machine.rotor_count + 1)
        super().__init__()

    def getrandbits(self, k: int) -> int:
        if k < 0:
            raise ValueError("number of bits must be non-negative")
        limit = 1 << self._draw_bits
        out = 0
        have = 0
        rejects = 0
        while have < k:
            draw = self.generator() - self.generator.min()
            if draw >= limit:
                rejects += 1
                if rejects >= self._max_rejects:
                    raise RuntimeError(
                        f"Generator produced {rejects} values in a row at or above {limit}; "
                        "its cycle never reaches the lower range"
                    )
                continue
            rejects = 0
            out = (out << self._draw_bits) | draw
            have += self._draw_bits
        return out >> (have - k)

    def random(self) -> float:
        return self.getrandbits(BPF) * RECIP_BPF

    def seed(self, *args, **kwds) -> None:
        "Stub method.  Not used for an Enigma-driven generator."
        return None

    def _notimplemented(self, *args, **kwds):
        "Method should not be called for an Enigma-driven generator."
        raise NotImplementedError("Enigma-driven generator does not have state.")

    getstate = setstate = _notimplemented
