"""
Utils that can be useful for debugging.
"""


class EqualityProtocol:
    """
    Equality-proof runner.

    Passes the messages between an
    :py:class:`homcom.equality.EqualityProver` and an
    :py:class:`homcom.equality.EqualityVerifier` in the order the protocol
    prescribes.

    Args:
        verifier: Verifier object
        prover: Prover object
    """

    def __init__(self, verifier, prover):
        self.verifier = verifier
        self.prover = prover

    def verify(self, verbose=True):
        """Run the verification process."""

        # Funky names.
        victor = self.verifier
        peggy = self.prover

        t1, t2 = peggy.get_proof_random_data()
        victor.set_proof_random_data(t1, t2)
        challenge = victor.get_challenge()
        s1, s21, s22 = peggy.get_proof_data(challenge)
        result = victor.verify(s1, s21, s22)

        if verbose:
            if result:
                print("Verified for {0}".format(victor.__class__.__name__))
            else:
                print("Not verified for {0}".format(victor.__class__.__name__))

        return result
