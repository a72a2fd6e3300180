r"""
Damgård-Fujisaki integer commitments in a special RSA group.

The receiver generates :math:`N = p q` for safe primes :math:`p = 2p' + 1`, :math:`q = 2q' + 1`, a
random quadratic residue :math:`H`, and :math:`G = H^\alpha` for a secret :math:`\alpha`. A
commitment to an integer :math:`a \in [0, T)` is

.. math::
    C = G^a H^r \mod N

with :math:`r` drawn from :math:`[0, 2^{B + k})`, where :math:`2^B` bounds the order of the group of
quadratic residues and :math:`k` is a statistical security parameter.

Unlike :py:mod:`homcom.qoneway`, both the value and the blinding factor are exponents, so equality
proof responses for the blinding factor are computed over the integers.
"""

import attr

from homcom.base import BaseCommitter, BaseReceiver
from homcom.consts import DEFAULT_BIT_LENGTH, STATISTICAL_SECURITY
from homcom.exceptions import InvalidElementError
from homcom.rsa_group import RSAGroup
from homcom.utils import get_random_num, ensure_bn


@attr.s(frozen=True)
class DFParams:
    """
    Public parameters of the scheme.

    Attributes:
        group: Special RSA group.
        g: Base for the committed value.
        h: Base for the blinding factor.
        t: Exclusive upper bound on committed values.
        b: :math:`2^b` bounds the order of the group of quadratic residues.
        k: Statistical security parameter.
    """

    group = attr.ib()
    g = attr.ib(converter=ensure_bn)
    h = attr.ib(converter=ensure_bn)
    t = attr.ib(converter=ensure_bn)
    b = attr.ib()
    k = attr.ib(default=STATISTICAL_SECURITY)


class _DFScheme:
    scheme_name = "df"

    @property
    def group(self):
        return self.params.group

    @property
    def value_bound(self):
        return self.params.t

    def get_bases(self):
        return [self.params.g, self.params.h]

    def compute_commit(self, value, blinding):
        # G^a * H^r mod N
        t1 = self.group.exp(self.params.g, value)
        t2 = self.group.exp(self.params.h, blinding)
        return self.group.mul(t1, t2)

    def get_blinding(self):
        return get_random_num(self.params.b + self.params.k)

    def get_blinding_mask(self, challenge_space_size):
        # [0, 2^(B + 2 * NLength + ChallengeSpaceSize))
        n_len = self.group.num_bits()
        return get_random_num(self.params.b + 2 * n_len + challenge_space_size)

    def get_blinding_response(self, mask, blinding, challenge):
        # In Z, not modulo.
        return ensure_bn(mask) + ensure_bn(challenge) * ensure_bn(blinding)


class DFCommitter(_DFScheme, BaseCommitter):
    """
    Committer of Damgård-Fujisaki commitments.

    Args:
        params (:py:class:`DFParams`): Parameters published by the receiver.

    Raises:
        InvalidElementError: if one of the bases is not an element of the group.
    """

    def __init__(self, params):
        super().__init__()
        if not params.group.is_element(params.g) or not params.group.is_element(params.h):
            raise InvalidElementError("G and H must be elements of the group")
        self.params = params


class DFReceiver(_DFScheme, BaseReceiver):
    """
    Receiver of Damgård-Fujisaki commitments. Generates the public parameters.

    Args:
        bit_length: Bit length of the special RSA modulus.
        k: Statistical security parameter.
    """

    def __init__(self, bit_length=DEFAULT_BIT_LENGTH, k=STATISTICAL_SECURITY):
        super().__init__()
        group = RSAGroup.generate(bit_length, safe=True)
        h = group.get_quad_res()
        self.alpha = group.modulus.random()
        g = group.exp(h, self.alpha)
        # |QR_N| = p'q' < N / 4
        b = group.num_bits() - 2
        self.params = DFParams(group=group, g=g, h=h, t=group.modulus, b=b, k=k)
