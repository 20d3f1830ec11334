import pytest

from generator import EnigmaRandom, Generator
from machine import EnigmaMachine
from rotor_and_reflector import Rotor
from wheels import make_reflector, make_rotor


def _machine():
    rotors = [make_rotor(name) for name in ("III", "II", "I")]
    return EnigmaMachine(rotors, make_reflector("B"))


def test_min_max_without_touching_machine():
    machine = _machine()
    gen = Generator(machine, 0)
    assert gen.min() == 0
    assert gen.max() == 25
    assert machine.positions == (0, 0, 0)


def test_values_in_range():
    gen = Generator(_machine(), 5)
    for _ in range(2000):
        assert 0 <= gen() <= 25


def test_draw_feeds_previous_value_back():
    machine, twin = _machine(), _machine()
    gen = Generator(machine, 9)
    expected = twin.encode_next(9)
    assert gen() == expected == gen.value
    assert gen() == twin.encode_next(expected)


def test_deterministic_for_same_start():
    a = Generator(_machine(), 3)
    b = Generator(_machine(), 3)
    assert [a() for _ in range(100)] == [b() for _ in range(100)]


def test_iterates():
    gen = Generator(_machine(), 0)
    first = [next(gen) for _ in range(5)]
    assert all(0 <= v <= 25 for v in first)
    assert iter(gen) is gen


def test_generators_share_machine_state():
    machine = _machine()
    a = Generator(machine, 0)
    b = Generator(machine, 0)
    a()
    assert machine.positions[0] == 1
    b()
    assert machine.positions[0] == 2


@pytest.mark.parametrize("seed", [-1, 26, 1000])
def test_seed_out_of_range_rejected(seed):
    with pytest.raises(ValueError):
        Generator(_machine(), seed)


def test_random_adaptor_shuffle_is_permutation_and_repeatable():
    def shuffled():
        rng = EnigmaRandom(Generator(_machine(), 4))
        items = list(range(1, 11))
        rng.shuffle(items)
        return items

    first = shuffled()
    assert sorted(first) == list(range(1, 11))
    assert shuffled() == first


def test_random_adaptor_ranges():
    rng = EnigmaRandom(Generator(_machine(), 0))
    for _ in range(200):
        assert 0.0 <= rng.random() < 1.0
        assert 0 <= rng.randrange(26) < 26
        assert 0 <= rng.getrandbits(7) < 128
    assert rng.getrandbits(0) == 0


def test_random_adaptor_has_no_state():
    rng = EnigmaRandom(Generator(_machine(), 0))
    rng.seed(123)
    with pytest.raises(NotImplementedError):
        rng.getstate()


def test_random_adaptor_needs_two_values():
    machine = EnigmaMachine([Rotor([0], [])], [0])
    with pytest.raises(ValueError):
        EnigmaRandom(Generator(machine, 0))


def test_random_adaptor_stuck_cycle_raises():
    # identity rotor and a reflector fixing 2: the stream never leaves 2
    machine = EnigmaMachine([Rotor([0, 1, 2], [])], [1, 0, 2])
    gen = Generator(machine, 2)
    rng = EnigmaRandom(gen)
    with pytest.raises(RuntimeError, match="never reaches"):
        rng.getrandbits(1)
    assert gen.value == 2


def test_random_adaptor_tolerates_rejections_between_hits():
    machine = EnigmaMachine([Rotor([0, 1, 2], [])], [1, 2, 0])
    rng = EnigmaRandom(Generator(machine, 0))
    for _ in range(50):
        assert rng.getrandbits(3) < 8
