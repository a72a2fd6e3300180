r"""
Commitments based on a q-one-way group homomorphism.

A q-one-way homomorphism is a homomorphism :math:`f` for which a preimage of :math:`y^i` is hard
to compute for :math:`0 < i < Q`, but easy for :math:`i = Q`. With a public image :math:`Y = f(x)`
chosen by the receiver, a commitment to :math:`a \in [0, Q)` is

.. math::
    C = Y^a f(r)

for a random group element :math:`r` (Cramer and Damgård). The scheme is homomorphic: given
commitments :math:`A` and :math:`B`, the committer can produce a commitment :math:`C` to
:math:`a b \mod Q` together with a witness :math:`t` such that :math:`C = B^a f(t)`.

The only instantiation here is RSA-based: :math:`f(x) = x^Q \mod N` for a random prime
:math:`Q > N`.

See "Zero-Knowledge Proofs for Finite Field Arithmetic, or: Can Zero-Knowledge be for Free?" by
Cramer and Damgård, CRYPTO 1998.
"""

import abc

from petlib.bn import Bn

from homcom.base import BaseCommitter, BaseReceiver
from homcom.consts import DEFAULT_BIT_LENGTH
from homcom.exceptions import (
    ParameterError,
    InvalidElementError,
    InvalidOpeningError,
    RangeError,
)
from homcom.rsa_group import RSAGroup
from homcom.utils import ensure_bn


class QOneWayHomomorphism(metaclass=abc.ABCMeta):
    """
    Abstract interface of a q-one-way homomorphism.

    Attributes:
        group: The group the homomorphism acts on.
        q: The prime :math:`Q`.
    """

    @abc.abstractmethod
    def homomorphism(self, x):
        """Forward map :math:`f`."""

    @abc.abstractmethod
    def homomorphism_inv(self, y):
        r"""
        Compute :math:`x` such that :math:`f(x) = y^Q`.

        Takes :math:`y`, not :math:`y^Q`.
        """


class RSABased(QOneWayHomomorphism):
    r"""
    RSA-based q-one-way homomorphism :math:`f: x \mapsto x^Q \mod N`.

    Args:
        group (:py:class:`homcom.rsa_group.RSAGroup`): Group of units modulo :math:`N`.
        q: A prime strictly larger than :math:`N`.

    Raises:
        ParameterError: if :math:`Q` is not a prime larger than :math:`N`.
    """

    def __init__(self, group, q):
        q = ensure_bn(q)
        if q <= group.modulus:
            raise ParameterError("Q must be > N")
        if not q.is_prime():
            raise ParameterError("Q must be prime")

        # Q > N > phi(N) and Q is prime, so gcd(Q, phi(N)) = 1 and f is a bijection.
        self.q = q
        self.group = group.with_exponent(q)

    @classmethod
    def generate(cls, bit_length=DEFAULT_BIT_LENGTH):
        """
        Generate a fresh instance over a ``bit_length``-bit RSA group.

        A prime :math:`Q` of ``bit_length + 1`` bits is drawn. It is not re-sampled if it turns
        out not to be larger than :math:`N`.

        Raises:
            ParameterError: if the drawn :math:`Q` is not larger than :math:`N`.
        """
        group = RSAGroup.generate(bit_length)
        q = Bn.get_prime(bit_length + 1, safe=0)
        return cls(group, q)

    def homomorphism(self, x):
        return self.group.homomorphism(x)

    def homomorphism_inv(self, y):
        # A preimage of y^Q under x -> x^Q is y itself.
        return ensure_bn(y)


class _QOneWayScheme:
    """
    Public parameters shared by the committer and the receiver: the homomorphism and :math:`Y`.
    """

    scheme_name = "qoneway"

    @property
    def group(self):
        return self.q_one_way.group

    @property
    def q(self):
        return self.q_one_way.q

    @property
    def value_bound(self):
        return self.q_one_way.q

    def get_bases(self):
        return [self.y]

    def compute_commit(self, value, blinding):
        # Y^a * f(r) mod N
        t1 = self.group.exp(self.y, value)
        t2 = self.q_one_way.homomorphism(blinding)
        return self.group.mul(t1, t2)

    def get_blinding(self):
        return self.group.get_random_element()

    def get_blinding_mask(self, challenge_space_size):
        # The blinding factor enters through f, so it is masked multiplicatively by a uniform
        # group element. This hides it perfectly, whatever the challenge space.
        return self.group.get_random_element()

    def get_blinding_response(self, mask, blinding, challenge):
        # mask * blinding^challenge mod N, so that f(response) = f(mask) * f(blinding)^challenge.
        return self.group.mul(mask, self.group.exp(blinding, challenge))


class Committer(_QOneWayScheme, BaseCommitter):
    """
    Committer of the commitment scheme based on a q-one-way homomorphism.

    Besides plain commitments, it can prove for commitments :math:`A`, :math:`B`, :math:`C` that
    :math:`C` commits to :math:`a b` when :math:`A` commits to :math:`a` and :math:`B` to
    :math:`b`, see :py:meth:`get_commitment_to_multiplication`.

    Args:
        q_one_way (:py:class:`QOneWayHomomorphism`): Homomorphism published by the receiver.
        y: Image :math:`Y` published by the receiver.

    Raises:
        InvalidElementError: if :math:`Y` is not an element of the group.
    """

    def __init__(self, q_one_way, y):
        super().__init__()
        # Y must come from Im(f) where f(x) = x^Q mod N, which means gcd(Y, N) = 1. Other
        # q-one-way homomorphisms would need another validation.
        if not q_one_way.group.is_element(y):
            raise InvalidElementError("Y is not an element of the group")
        self.q_one_way = q_one_way
        self.y = ensure_bn(y)

    def get_commitment_to_multiplication(self, a, b, u, commitment_b=None):
        r"""
        Commit to :math:`c = a b \mod Q`.

        Given the value :math:`a`, the value :math:`b`, and the blinding factor :math:`u` of the
        commitment :math:`B = Y^b f(u)`, compute a fresh commitment :math:`C = Y^c f(o)` and
        :math:`t` such that :math:`C = B^a f(t)`.

        The pending opening of :py:meth:`get_commit_msg` is left untouched.

        Args:
            a: First factor.
            b: Second factor.
            u: Blinding factor of the commitment to ``b``.
            commitment_b: Optionally, the commitment :math:`B`. If given, it is checked to open
                to ``b`` with ``u`` before anything is computed.

        Returns:
            tuple: :math:`(C, o, t)`

        Raises:
            RangeError: if ``a`` or ``b`` is not in :math:`[0, Q)`.
            InvalidOpeningError: if ``commitment_b`` does not open to ``b`` with ``u``.
        """
        a, b, u = ensure_bn(a), ensure_bn(b), ensure_bn(u)
        for factor in (a, b):
            if factor < 0 or factor >= self.q:
                raise RangeError(
                    "The factors need to be in [0, {})".format(self.q)
                )
        if commitment_b is not None and self.compute_commit(b, u) != ensure_bn(commitment_b):
            raise InvalidOpeningError("B is not a commitment to b with blinding factor u")

        product = a * b
        c = product % self.q
        o = self.get_blinding()
        commitment = self.compute_commit(c, o)

        # Exact division: product - c is a multiple of Q.
        j = (product - c).int_div(self.q)

        # C = Y^(ab - jQ) * f(o) and B^a = Y^(ab) * f(u)^a, hence
        # t = o * u^(-a) * f^-1(Y^(-j)).
        t = self.group.mul(o, self.group.exp(u, -a))
        y_to_j_inv = self.group.exp(self.y, -j)
        t = self.group.mul(t, self.q_one_way.homomorphism_inv(y_to_j_inv))
        return commitment, o, t


class Receiver(_QOneWayScheme, BaseReceiver):
    """
    Receiver of the commitment scheme based on a q-one-way homomorphism.

    Picks a secret :math:`x` and publishes :math:`Y = f(x)` as the commitment base.

    Args:
        q_one_way (:py:class:`QOneWayHomomorphism`): Homomorphism to use.
    """

    def __init__(self, q_one_way):
        super().__init__()
        self.q_one_way = q_one_way
        # gcd(Q, phi(N)) = 1 because Q is prime and Q > N > phi(N).
        self.x = q_one_way.group.get_random_element()
        self.y = q_one_way.homomorphism(self.x)

    @classmethod
    def generate(cls, bit_length=DEFAULT_BIT_LENGTH):
        """Build a receiver over a fresh :py:class:`RSABased` homomorphism."""
        return cls(RSABased.generate(bit_length))
