import pytest

from rotor_and_reflector import Reflector, Rotor

BASE = 7
NOTCH_SETS = [(), (0,), (3,), (6,), (1, 4), (0, 6), (2, 3, 5), tuple(range(BASE))]


def _identity(n):
    return list(range(n))


class _Counter:
    def __init__(self):
        self.calls = []

    def __call__(self, knocks):
        self.calls.append(knocks)

    @property
    def total(self):
        return sum(self.calls)


def test_reverse_is_inverse_of_forward():
    cipher = [4, 10, 12, 5, 11, 6, 3, 16, 21, 25, 13, 19, 14,
              22, 24, 7, 23, 20, 18, 15, 0, 8, 1, 17, 2, 9]
    rotor = Rotor(cipher, [17])
    for i in range(len(cipher)):
        assert rotor.reverse_cipher[rotor.forward_cipher[i]] == i


@pytest.mark.parametrize("cipher", [[0, 0, 1], [0, 1, 3], [-1, 0, 1], []])
def test_bad_cipher_rejected(cipher):
    with pytest.raises(ValueError):
        Rotor(cipher, [])


def test_bad_notch_rejected():
    with pytest.raises(ValueError):
        Rotor(_identity(5), [5])


def test_bad_position_rejected():
    with pytest.raises(ValueError):
        Rotor(_identity(5), [], position=5)


def test_non_callable_callback_rejected():
    with pytest.raises(TypeError):
        Rotor(_identity(5), [], callback=42)


def test_single_step_wraps_and_knocks_on_new_position():
    counter = _Counter()
    rotor = Rotor(_identity(4), [0], counter, position=2)
    assert rotor.advance() == 3
    assert counter.calls == []
    assert rotor.advance() == 0
    assert counter.calls == [1]


def test_negative_steps_rejected():
    rotor = Rotor(_identity(4), [])
    with pytest.raises(ValueError):
        rotor.advance(-1)


@pytest.mark.parametrize("notches", NOTCH_SETS)
def test_batch_advance_matches_single_steps(notches):
    for start in range(BASE):
        for steps in range(3 * BASE + 1):
            stepped = _Counter()
            reference = Rotor(_identity(BASE), notches, stepped, position=start)
            for _ in range(steps):
                reference.advance()

            batched = _Counter()
            rotor = Rotor(_identity(BASE), notches, batched, position=start)
            assert rotor.advance(steps) == reference.position
            assert batched.total == stepped.total, (start, steps, notches)
            assert len(batched.calls) == (1 if stepped.total else 0)


def test_position_stays_in_range():
    rotor = Rotor(_identity(BASE), [2])
    for steps in (0, 1, BASE - 1, BASE, BASE + 1, 10 * BASE + 3, 10**12):
        rotor.advance(steps)
        assert 0 <= rotor.position < BASE
        rotor.advance()
        assert 0 <= rotor.position < BASE


def test_callback_is_replaced_not_stacked():
    first, second = _Counter(), _Counter()
    rotor = Rotor(_identity(3), [1], first)
    rotor.turnover_callback = second
    rotor.advance()
    assert first.calls == []
    assert second.calls == [1]


def test_none_callback_restores_noop():
    counter = _Counter()
    rotor = Rotor(_identity(3), [1], counter)
    rotor.turnover_callback = None
    rotor.advance()
    assert counter.calls == []


def test_cipher_offsets_input_by_position():
    rotor = Rotor([1, 2, 3, 0], [], position=1)
    assert rotor.do_forward_cipher(0) == 2
    assert rotor.do_forward_cipher(3) == 1
    # same offset convention in reverse, not inverted
    assert rotor.do_reverse_cipher(0) == 0
    assert rotor.do_reverse_cipher(3) == 3


def test_from_letters():
    rotor = Rotor.from_letters("BCDA", "C", "ABCD")
    assert rotor.forward_cipher == (1, 2, 3, 0)
    assert rotor.notches == frozenset({2})


def test_from_letters_rejects_foreign_notch():
    with pytest.raises(ValueError):
        Rotor.from_letters("BCDA", "Z", "ABCD")


def test_reflector_involution_flag():
    assert Reflector([1, 0, 3, 2]).is_involution
    assert not Reflector([1, 2, 3, 0]).is_involution
    assert not Reflector([0, 1, 3, 2]).is_involution


def test_reflector_rejects_non_permutation():
    with pytest.raises(ValueError):
        Reflector([1, 1, 0])
