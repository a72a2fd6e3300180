from petlib.bn import Bn


def get_random_num(bits):
    """
    Draw a random number of given bitlength.

    >>> x = get_random_num(6)
    >>> x < 2**6
    True
    """
    order = Bn(2).pow(bits)
    return order.random()


def get_random_below(bound):
    """
    Draw a random number from :math:`[0, bound)`.

    >>> x = get_random_below(Bn(1000) * 3)
    >>> 0 <= x < 3000
    True
    """
    return ensure_bn(bound).random()


def ensure_bn(x):
    """
    Ensure that value is big number.

    >>> isinstance(ensure_bn(42), Bn)
    True
    >>> isinstance(ensure_bn(Bn(42)), Bn)
    True
    """
    if isinstance(x, Bn):
        return x
    else:
        # Bn(x) only takes machine-size integers.
        return Bn.from_decimal(str(int(x)))
