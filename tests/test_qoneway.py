import pytest

from petlib.bn import Bn

from homcom.exceptions import (
    ParameterError,
    InvalidElementError,
    RangeError,
    InvalidOpeningError,
    ProtocolStateError,
)
from homcom.qoneway import RSABased, Committer, Receiver
from homcom.rsa_group import RSAGroup
from homcom.utils import ensure_bn


# 61 * 53 and a prime just above it.
TINY_MODULUS = 3233
TINY_Q = 3259


def test_rsa_based_generate():
    q_one_way = RSABased.generate(128)
    assert q_one_way.q > q_one_way.group.modulus
    assert q_one_way.q.is_prime()
    assert q_one_way.q.num_bits() == 129
    assert q_one_way.group.exponent == q_one_way.q


def test_rsa_based_homomorphism():
    q_one_way = RSABased(RSAGroup(TINY_MODULUS), TINY_Q)
    assert q_one_way.homomorphism(2) == pow(2, TINY_Q, TINY_MODULUS)
    assert q_one_way.homomorphism_inv(Bn(2)) == 2


def test_rsa_based_is_a_bijection():
    q_one_way = RSABased(RSAGroup(TINY_MODULUS), TINY_Q)
    group = q_one_way.group
    elements = [x for x in range(1, TINY_MODULUS) if group.is_element(x)]
    images = {int(q_one_way.homomorphism(x)) for x in elements}
    assert images == set(elements)


def test_rsa_based_keeps_input_group():
    group = RSAGroup(TINY_MODULUS)
    RSABased(group, TINY_Q)
    assert group.exponent is None


def test_rsa_based_q_not_larger_than_n():
    with pytest.raises(ParameterError):
        RSABased(RSAGroup(TINY_MODULUS), 3229)


def test_rsa_based_q_equal_to_n():
    with pytest.raises(ParameterError):
        RSABased(RSAGroup(TINY_MODULUS), TINY_MODULUS)


def test_rsa_based_q_not_prime():
    with pytest.raises(ParameterError):
        RSABased(RSAGroup(TINY_MODULUS), 3261)


def test_receiver_publishes_image(receiver):
    assert receiver.y == receiver.q_one_way.homomorphism(receiver.x)
    assert receiver.group.is_element(receiver.y)


def test_committer_invalid_y():
    q_one_way = RSABased(RSAGroup(TINY_MODULUS), TINY_Q)
    for y in [0, 61, 53, TINY_MODULUS, TINY_MODULUS + 1]:
        with pytest.raises(InvalidElementError):
            Committer(q_one_way, y)


def test_commit_decommit(receiver, committer):
    c = committer.get_commit_msg(42)
    receiver.set_commitment(c)
    a, r = committer.get_decommit_msg()
    assert a == 42
    assert receiver.check_decommitment(r, a)


def test_end_to_end_small_group():
    receiver = Receiver.generate(64)
    committer = Committer(receiver.q_one_way, receiver.y)
    receiver.set_commitment(committer.get_commit_msg(7))
    a, r = committer.get_decommit_msg()
    assert a == 7
    assert receiver.check_decommitment(r, 7)
    assert not receiver.check_decommitment(r, 8)


def test_commit_largest_value(receiver, committer):
    receiver.set_commitment(committer.get_commit_msg(committer.q - 1))
    a, r = committer.get_decommit_msg()
    assert receiver.check_decommitment(r, a)


@pytest.mark.parametrize("offset", [0, 1, 100])
def test_commit_value_too_large(committer, offset):
    with pytest.raises(RangeError):
        committer.get_commit_msg(committer.q + offset)


def test_commit_negative_value(committer):
    with pytest.raises(RangeError):
        committer.get_commit_msg(-1)


def test_failed_commit_keeps_state(committer):
    c = committer.get_commit_msg(5)
    opening = committer.get_decommit_msg()
    with pytest.raises(RangeError):
        committer.get_commit_msg(committer.q)
    assert committer.get_decommit_msg() == opening
    assert committer.commitment == c


def test_decommit_before_commit(committer):
    assert not committer.has_commitment
    with pytest.raises(ProtocolStateError):
        committer.get_decommit_msg()


def test_check_before_set_commitment(receiver):
    assert not receiver.has_commitment
    with pytest.raises(ProtocolStateError):
        receiver.check_decommitment(1, 1)


def test_fresh_blinding_per_commitment(committer):
    committer.get_commit_msg(3)
    _, r1 = committer.get_decommit_msg()
    committer.get_commit_msg(3)
    _, r2 = committer.get_decommit_msg()
    assert r1 != r2


def test_sequential_rounds(receiver, committer):
    receiver.set_commitment(committer.get_commit_msg(3))
    first_opening = committer.get_decommit_msg()
    assert receiver.check_decommitment(first_opening[1], first_opening[0])

    receiver.set_commitment(committer.get_commit_msg(5))
    a, r = committer.get_decommit_msg()
    assert a == 5
    assert receiver.check_decommitment(r, 5)
    assert not receiver.check_decommitment(first_opening[1], first_opening[0])


def test_binding_other_values(receiver, committer):
    a = 100
    receiver.set_commitment(committer.get_commit_msg(a))
    _, r = committer.get_decommit_msg()
    for other in range(256):
        assert receiver.check_decommitment(r, other) == (other == a)


def test_binding_other_blinding(receiver, committer):
    receiver.set_commitment(committer.get_commit_msg(12))
    _, r = committer.get_decommit_msg()
    for _ in range(50):
        other = receiver.group.get_random_element()
        if other != r:
            assert not receiver.check_decommitment(other, 12)


def test_binding_is_modulo_q(receiver, committer):
    # Y^(a + Q) * f(r) = Y^a * f(Y * r)
    a = 9
    receiver.set_commitment(committer.get_commit_msg(a))
    _, r = committer.get_decommit_msg()
    shifted = receiver.group.mul(receiver.y, r)
    assert receiver.check_decommitment(shifted, a + committer.q)
    assert not receiver.check_decommitment(shifted, a)


def test_hiding_statistical_distance():
    receiver = Receiver.generate(64)
    committer = Committer(receiver.q_one_way, receiver.y)
    n = int(receiver.group.modulus)
    num_buckets = 16
    num_samples = 2000

    def histogram(value):
        counts = [0] * num_buckets
        for _ in range(num_samples):
            c = int(committer.get_commit_msg(value))
            counts[c * num_buckets // n] += 1
        return counts

    hist0 = histogram(0)
    hist1 = histogram(1)
    distance = sum(abs(x - y) for x, y in zip(hist0, hist1)) / (2 * num_samples)
    assert distance < 0.15


@pytest.mark.parametrize(
    "a, b",
    [(0, 0), (0, 5), (3, 4), (123456789, 987654321)],
)
def test_commitment_to_multiplication(receiver, committer, a, b):
    _check_multiplication(receiver, committer, a, b)


def test_commitment_to_multiplication_wraps_around_q(receiver, committer):
    q = committer.q
    _check_multiplication(receiver, committer, q - 1, q - 2)
    _check_multiplication(receiver, committer, q - 1, 2)


def _check_multiplication(receiver, committer, a, b):
    group = committer.group
    commitment_b = committer.get_commit_msg(b)
    _, u = committer.get_decommit_msg()

    c, o, t = committer.get_commitment_to_multiplication(a, b, u, commitment_b)

    # C = B^a * f(t)
    expected = group.mul(group.exp(commitment_b, a), committer.q_one_way.homomorphism(t))
    assert c == expected

    receiver.set_commitment(c)
    assert receiver.check_decommitment(o, (ensure_bn(a) * ensure_bn(b)) % committer.q)

    # The pending opening still belongs to the commitment to b.
    assert committer.get_decommit_msg() == (b, u)


def test_commitment_to_multiplication_without_check(committer):
    committer.get_commit_msg(6)
    _, u = committer.get_decommit_msg()
    c, o, t = committer.get_commitment_to_multiplication(7, 6, u)
    assert c == committer.compute_commit(42, o)


def test_commitment_to_multiplication_wrong_blinding(committer):
    commitment_b = committer.get_commit_msg(6)
    _, u = committer.get_decommit_msg()
    wrong_u = committer.group.mul(u, 2)
    with pytest.raises(InvalidOpeningError):
        committer.get_commitment_to_multiplication(7, 6, wrong_u, commitment_b)


@pytest.mark.parametrize("which", ["a", "b"])
@pytest.mark.parametrize("offset", [0, 1])
def test_commitment_to_multiplication_factor_too_large(committer, which, offset):
    committer.get_commit_msg(6)
    opening = committer.get_decommit_msg()
    factors = {"a": 7, "b": 6}
    factors[which] = committer.q + offset
    with pytest.raises(RangeError):
        committer.get_commitment_to_multiplication(factors["a"], factors["b"], opening[1])
    assert committer.get_decommit_msg() == opening


@pytest.mark.parametrize("a, b", [(-1, 6), (7, -1)])
def test_commitment_to_multiplication_negative_factor(committer, a, b):
    committer.get_commit_msg(6)
    _, u = committer.get_decommit_msg()
    with pytest.raises(RangeError):
        committer.get_commitment_to_multiplication(a, b, u)


def test_interleaved_sessions(receiver, committer, other_receiver, other_committer):
    receiver.set_commitment(committer.get_commit_msg(1))
    other_receiver.set_commitment(other_committer.get_commit_msg(2))
    a1, r1 = committer.get_decommit_msg()
    a2, r2 = other_committer.get_decommit_msg()
    assert receiver.check_decommitment(r1, a1)
    assert other_receiver.check_decommitment(r2, a2)
    assert not receiver.check_decommitment(r2, a2)
