"""
Common classes, including subclassable committers and receivers.

A commitment scheme is seen by the rest of the library through
:py:class:`CommitmentScheme`: a group, a bound on committable values, and a way to compute a
commitment from a value and a blinding factor. Committers and receivers of every scheme share the
single-slot bookkeeping of :py:class:`BaseCommitter` and :py:class:`BaseReceiver`.
"""

import abc
from hashlib import sha256

from petlib.bn import Bn
from petlib.pack import encode

from homcom.exceptions import RangeError, ProtocolStateError
from homcom.utils import ensure_bn


def build_fiat_shamir_challenge(stmt_prehash, *args, message=""):
    """Generate a Fiat-Shamir challenge.

    >>> prehash = sha256(b"statement id")
    >>> isinstance(build_fiat_shamir_challenge(prehash, Bn(42)), Bn)
    True

    Args:
        prehash: Hash object seeded with the proof statement ID.
        args: Items to hash (e.g., commitments)
        message: Message to make it a signature PK.
    """
    # Start building the complete hash for the challenge
    for elem in args:
        if not isinstance(elem, bytes) and not isinstance(elem, str):
            encoded = encode(elem)
        else:
            encoded = elem
        stmt_prehash.update(encoded)

    stmt_prehash.update(message.encode())
    return Bn.from_hex(stmt_prehash.hexdigest())


class CommitmentScheme(metaclass=abc.ABCMeta):
    """
    Public parameters of a homomorphic commitment scheme.

    Subclasses set ``group`` (an :py:class:`homcom.rsa_group.RSAGroup`) and ``scheme_name``.
    """

    scheme_name = None

    @property
    @abc.abstractmethod
    def value_bound(self):
        """Exclusive upper bound on committable values."""

    @abc.abstractmethod
    def get_bases(self):
        """Public bases of the scheme, in a fixed order."""

    @abc.abstractmethod
    def compute_commit(self, value, blinding):
        """
        Compute the commitment to ``value`` with blinding factor ``blinding``.

        The value is used as an integer exponent, so it may exceed :py:attr:`value_bound`. This
        is what the equality proof relies on when it recomputes commitments from its responses.
        """

    @abc.abstractmethod
    def get_blinding(self):
        """Draw a fresh blinding factor for a commitment."""

    @abc.abstractmethod
    def get_blinding_mask(self, challenge_space_size):
        """
        Draw a fresh randomizer that hides ``challenge * blinding`` in a proof response.
        """

    @abc.abstractmethod
    def get_blinding_response(self, mask, blinding, challenge):
        """
        Combine a mask and a blinding factor into the response of the equality proof.

        Must satisfy ``compute_commit(r1, mask) * compute_commit(a, blinding)^challenge ==
        compute_commit(r1 + challenge * a, response)``.
        """

    def get_statement(self, commitment):
        """
        Public description of a commitment, used to seed Fiat-Shamir challenges.
        """
        return [self.scheme_name, self.group, list(self.get_bases()), commitment]


class BaseCommitter(CommitmentScheme):
    """
    Committer side of a commitment scheme.

    Keeps the last commitment as a single pending slot holding the value, the blinding factor and
    the commitment itself. The three are always replaced together.
    """

    def __init__(self):
        self._pending = None

    def get_commit_msg(self, a):
        """
        Commit to ``a``.

        Draws a fresh blinding factor, stores the opening, and returns the commitment. Any earlier
        pending opening is overwritten.

        Raises:
            RangeError: if ``a`` is not in :math:`[0, bound)`.
        """
        a = ensure_bn(a)
        if a < 0 or a >= self.value_bound:
            raise RangeError("The committed value needs to be in [0, {})".format(
                self.value_bound
            ))
        blinding = self.get_blinding()
        commitment = self.compute_commit(a, blinding)
        self._pending = (a, blinding, commitment)
        return commitment

    def get_decommit_msg(self):
        """
        Return the opening ``(a, r)`` of the last commitment.

        Raises:
            ProtocolStateError: if nothing was committed yet.
        """
        if self._pending is None:
            raise ProtocolStateError("Nothing has been committed yet")
        a, blinding, _ = self._pending
        return a, blinding

    @property
    def commitment(self):
        if self._pending is None:
            raise ProtocolStateError("Nothing has been committed yet")
        return self._pending[2]

    @property
    def has_commitment(self):
        return self._pending is not None


class BaseReceiver(CommitmentScheme):
    """
    Receiver side of a commitment scheme.
    """

    def __init__(self):
        self._commitment = None

    def set_commitment(self, c):
        """
        Store a received commitment, overwriting the previous one.

        The value is not validated here. A commitment outside of the group simply never opens.
        """
        self._commitment = ensure_bn(c)

    @property
    def commitment(self):
        if self._commitment is None:
            raise ProtocolStateError("No commitment has been received")
        return self._commitment

    @property
    def has_commitment(self):
        return self._commitment is not None

    def check_decommitment(self, r, a):
        """
        Check that the stored commitment opens to ``a`` with blinding factor ``r``.

        Returns:
            bool: True if the opening is valid, False otherwise.
        """
        return self.compute_commit(ensure_bn(a), ensure_bn(r)) == self.commitment
