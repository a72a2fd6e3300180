r"""
Arithmetic in the multiplicative group :math:`\mathbb{Z}_N^*` of an RSA modulus :math:`N`.

The commitment schemes only use the group through this class: multiplication, exponentiation,
inversion, membership tests and sampling of random elements. The factorization of :math:`N` is
thrown away right after generation, so the order of the group stays hidden from every party.

Example:

>>> group = RSAGroup.generate(bits=128)
>>> x = group.get_random_element()
>>> group.mul(x, group.inv(x))
1
"""
import math
import warnings

from petlib.bn import Bn
from petlib.pack import encode, decode, register_coders

from homcom.consts import MIN_SECURE_BIT_LENGTH
from homcom.exceptions import InvalidElementError
from homcom.utils import ensure_bn


def get_prime_pair(bits, safe=False):
    """
    Draw two distinct primes whose product has ``bits`` bits.

    Args:
        bits: Bit length of the product.
        safe: Whether to draw safe primes :math:`p = 2p' + 1`.
    """
    safe = 1 if safe else 0
    while True:
        p = Bn.get_prime(bits // 2, safe=safe)
        q = Bn.get_prime(bits - bits // 2, safe=safe)
        if p != q:
            return p, q


class RSAGroup:
    """
    Group of units modulo an RSA modulus.

    Args:
        modulus: The modulus :math:`N`.
        exponent: Optional public exponent :math:`E` used by :py:meth:`homomorphism`.
    """

    def __init__(self, modulus, exponent=None):
        self.modulus = ensure_bn(modulus)
        self.exponent = None if exponent is None else ensure_bn(exponent)

    @classmethod
    def generate(cls, bits, safe=False, exponent=None):
        """
        Generate a fresh group with a modulus of ``bits`` bits.

        Args:
            bits: Bit length of the modulus.
            safe: If set, the modulus is a product of two safe primes (a special RSA modulus).
            exponent: Optional public exponent.
        """
        if bits < MIN_SECURE_BIT_LENGTH:
            warnings.warn(
                "A {}-bit modulus is not secure, use it for testing only".format(bits)
            )
        p, q = get_prime_pair(bits, safe=safe)
        return cls(p * q, exponent=exponent)

    def num_bits(self):
        return self.modulus.num_bits()

    def mul(self, x, y):
        return ensure_bn(x).mod_mul(ensure_bn(y), self.modulus)

    def exp(self, x, e):
        r"""
        Compute :math:`x^e \mod N`. A negative exponent exponentiates the inverse of :math:`x`.
        """
        x = ensure_bn(x) % self.modulus
        e = ensure_bn(e)
        if e < 0:
            return pow(self.inv(x), -e, self.modulus)
        return pow(x, e, self.modulus)

    def inv(self, x):
        x = ensure_bn(x)
        if not self.is_element(x):
            raise InvalidElementError("{} is not invertible modulo N".format(x))
        return x.mod_inverse(self.modulus)

    def is_element(self, x):
        r"""
        Check that :math:`x \in \mathbb{Z}_N^*`.
        """
        x = ensure_bn(x)
        if x <= 0 or x >= self.modulus:
            return False
        return math.gcd(int(x), int(self.modulus)) == 1

    def get_random_element(self):
        r"""
        Draw a uniformly random element of :math:`\mathbb{Z}_N^*`.
        """
        while True:
            x = self.modulus.random()
            if self.is_element(x):
                return x

    def get_quad_res(self):
        """
        Draw a uniformly random quadratic residue.
        """
        x = self.get_random_element()
        return self.mul(x, x)

    def homomorphism(self, x):
        r"""
        Compute :math:`x^E \mod N` for the installed public exponent :math:`E`.
        """
        if self.exponent is None:
            raise ValueError("No public exponent installed in the group")
        return self.exp(x, self.exponent)

    def with_exponent(self, exponent):
        """Copy of this group with another public exponent."""
        return RSAGroup(self.modulus, exponent=exponent)

    def __eq__(self, other):
        if not isinstance(other, RSAGroup) or self.modulus != other.modulus:
            return False
        if self.exponent is None or other.exponent is None:
            return self.exponent is other.exponent
        return self.exponent == other.exponent

    def __repr__(self):
        return "RSAGroup({}-bit)".format(self.num_bits())


def enc_RSAGroup(obj):
    return encode([obj.modulus, obj.exponent])


def dec_RSAGroup(data):
    modulus, exponent = decode(data)
    return RSAGroup(modulus, exponent=exponent)


register_coders(RSAGroup, 10, enc_RSAGroup, dec_RSAGroup)
