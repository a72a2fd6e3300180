r"""
ZK proof that two commitments hide the same value.

.. math::

    PK\{ (a, r_1, r_2): C_1 = \mathrm{Com}_1(a, r_1) \land C_2 = \mathrm{Com}_2(a, r_2) \}

The two commitments may live in different groups, and even come from different schemes (see
:py:mod:`homcom.qoneway` and :py:mod:`homcom.df`). The prover sends :math:`t_1 =
\mathrm{Com}_1(r_1', r_{21})` and :math:`t_2 = \mathrm{Com}_2(r_1', r_{22})` with the *same*
randomizer :math:`r_1'`, receives a challenge :math:`c`, and answers with :math:`s_1 = r_1' + c a`
over the integers and one blinding-factor response per commitment. The verifier checks
:math:`t_i C_i^c = \mathrm{Com}_i(s_1, s_{2i})` for both commitments.

The randomizer :math:`r_1'` is drawn from :math:`[0, T 2^{n + k})`, where :math:`T` bounds the
committed value, :math:`n` is the bit length of the first modulus and :math:`k` is the size of the
challenge space, so that :math:`s_1` statistically hides :math:`c a`.

A q-one-way commitment binds only modulo its :math:`Q`, since
:math:`Y^{a + Q} f(r) = Y^a f(Y r)`. Between two q-one-way groups with different :math:`Q`, the
proof therefore shows that the committed values agree modulo the smaller :math:`Q`, not over the
integers. Damgård-Fujisaki commitments bind over the integers below :math:`T`.

Every prover and verifier handles exactly one proof. The prover erases its randomizers after
answering and refuses to produce a second transcript.

Example with two independent receivers:

>>> from homcom.qoneway import Receiver, Committer
>>> receiver1, receiver2 = Receiver.generate(128), Receiver.generate(128)
>>> committer1 = Committer(receiver1.q_one_way, receiver1.y)
>>> committer2 = Committer(receiver2.q_one_way, receiver2.y)
>>> receiver1.set_commitment(committer1.get_commit_msg(42))
>>> receiver2.set_commitment(committer2.get_commit_msg(42))
>>> proof = EqualityProver(committer1, committer2).get_nizk_proof()
>>> EqualityVerifier(receiver1, receiver2).verify_nizk(proof)
True
"""

import enum
import warnings
from hashlib import sha256

import attr
from petlib.bn import Bn
from petlib.pack import encode

from homcom.base import build_fiat_shamir_challenge
from homcom.consts import CHALLENGE_LENGTH
from homcom.exceptions import ProtocolStateError
from homcom.utils import get_random_num, get_random_below, ensure_bn


class ProverState(enum.Enum):
    INITIAL = "initial"
    RANDOM_DATA_SENT = "random data sent"
    RESPONSE_SENT = "response sent"


class VerifierState(enum.Enum):
    INITIAL = "initial"
    RANDOM_DATA_RECEIVED = "random data received"
    CHALLENGE_ISSUED = "challenge issued"
    VERIFIED = "verified"
    REJECTED = "rejected"


@attr.s
class EqualityProof:
    """
    All three messages of the protocol. Useful when the challenge is generated by the prover via
    Fiat-Shamir.
    """

    proof_random_data1 = attr.ib()
    proof_random_data2 = attr.ib()
    challenge = attr.ib()
    proof_data1 = attr.ib()
    proof_data21 = attr.ib()
    proof_data22 = attr.ib()


def prehash_statement(scheme1, commitment1, scheme2, commitment2, challenge_space_size):
    """
    Hash object seeded with both commitments and their public parameters.
    """
    statement = [
        EqualityProof.__name__,
        challenge_space_size,
        scheme1.get_statement(commitment1),
        scheme2.get_statement(commitment2),
    ]
    return sha256(encode(statement))


def build_challenge(prehash, t1, t2, challenge_space_size, message=""):
    """
    Derive a challenge in :math:`[0, 2^k)` from the statement and the prover's random data.
    """
    digest = build_fiat_shamir_challenge(prehash, t1, t2, message=message)
    return digest % Bn(2).pow(challenge_space_size)


class EqualityProver:
    """
    Prover side of the equality proof.

    Both committers must hold a pending commitment (see
    :py:meth:`homcom.base.BaseCommitter.get_commit_msg`) to the same value.

    Args:
        committer1: Committer of the first commitment.
        committer2: Committer of the second commitment.
        challenge_space_size: Challenges are drawn from :math:`[0, 2^k)` for this :math:`k`.
    """

    def __init__(self, committer1, committer2, challenge_space_size=CHALLENGE_LENGTH):
        self.committer1 = committer1
        self.committer2 = committer2
        self.challenge_space_size = challenge_space_size
        self.state = ProverState.INITIAL
        self.r1 = None
        self.r21 = None
        self.r22 = None

    def get_proof_random_data(self):
        """
        Draw the randomizers and compute the first message.

        Returns:
            tuple: :math:`(t_1, t_2)`

        Raises:
            ProtocolStateError: if this prover has already been used.
        """
        if self.state != ProverState.INITIAL:
            raise ProtocolStateError(
                "Proof randomness can only be drawn once, use a fresh prover"
            )

        # r1 from [0, T * 2^(NLength + ChallengeSpaceSize))
        n_len = self.committer1.group.num_bits()
        bound = self.committer1.value_bound * Bn(2).pow(
            n_len + self.challenge_space_size
        )
        self.r1 = get_random_below(bound)
        self.r21 = self.committer1.get_blinding_mask(self.challenge_space_size)
        self.r22 = self.committer2.get_blinding_mask(self.challenge_space_size)

        t1 = self.committer1.compute_commit(self.r1, self.r21)
        t2 = self.committer2.compute_commit(self.r1, self.r22)
        self.state = ProverState.RANDOM_DATA_SENT
        return t1, t2

    def get_proof_data(self, challenge):
        """
        Compute the responses to a challenge.

        Returns:
            tuple: :math:`(s_1, s_{21}, s_{22})`

        Raises:
            ProtocolStateError: if the random data has not been sent, or a response was already
                computed.
        """
        if self.state != ProverState.RANDOM_DATA_SENT:
            raise ProtocolStateError(
                "Responses can only be computed once, after the random data"
            )
        challenge = ensure_bn(challenge)

        a, rr1 = self.committer1.get_decommit_msg()
        a2, rr2 = self.committer2.get_decommit_msg()
        if a != a2:
            warnings.warn("Committed values differ, the proof will not verify")

        # s1 = r1 + challenge * a (in Z, not modulo)
        s1 = self.r1 + challenge * a
        s21 = self.committer1.get_blinding_response(self.r21, rr1, challenge)
        s22 = self.committer2.get_blinding_response(self.r22, rr2, challenge)

        self.r1 = self.r21 = self.r22 = None
        self.state = ProverState.RESPONSE_SENT
        return s1, s21, s22

    def get_nizk_proof(self, message=""):
        """
        Construct a non-interactive proof transcript using Fiat-Shamir heuristic.

        The challenge is a hash of both statements, the random data and the message, reduced to
        the challenge space.

        Args:
            message (str): Optional message to make it a signature proof of knowledge.

        Returns:
            :py:class:`EqualityProof`
        """
        t1, t2 = self.get_proof_random_data()
        prehash = prehash_statement(
            self.committer1,
            self.committer1.commitment,
            self.committer2,
            self.committer2.commitment,
            self.challenge_space_size,
        )
        challenge = build_challenge(
            prehash, t1, t2, self.challenge_space_size, message=message
        )
        s1, s21, s22 = self.get_proof_data(challenge)
        return EqualityProof(
            proof_random_data1=t1,
            proof_random_data2=t2,
            challenge=challenge,
            proof_data1=s1,
            proof_data21=s21,
            proof_data22=s22,
        )


class EqualityVerifier:
    """
    Verifier side of the equality proof.

    Both receivers must hold the commitment they are verifying (see
    :py:meth:`homcom.base.BaseReceiver.set_commitment`).

    Args:
        receiver1: Receiver of the first commitment.
        receiver2: Receiver of the second commitment.
        challenge_space_size: Challenges are drawn from :math:`[0, 2^k)` for this :math:`k`.
    """

    def __init__(self, receiver1, receiver2, challenge_space_size=CHALLENGE_LENGTH):
        self.receiver1 = receiver1
        self.receiver2 = receiver2
        self.challenge_space_size = challenge_space_size
        self.state = VerifierState.INITIAL
        self.challenge = None
        self.proof_random_data1 = None
        self.proof_random_data2 = None

    def _expect(self, state):
        if self.state != state:
            raise ProtocolStateError(
                "Expected verifier state '{}', got '{}'".format(
                    state.value, self.state.value
                )
            )

    def set_proof_random_data(self, proof_random_data1, proof_random_data2):
        self._expect(VerifierState.INITIAL)
        self.proof_random_data1 = ensure_bn(proof_random_data1)
        self.proof_random_data2 = ensure_bn(proof_random_data2)
        self.state = VerifierState.RANDOM_DATA_RECEIVED

    def get_challenge(self):
        """
        Draw a uniformly random challenge from :math:`[0, 2^k)`.
        """
        self._expect(VerifierState.RANDOM_DATA_RECEIVED)
        self.challenge = get_random_num(self.challenge_space_size)
        self.state = VerifierState.CHALLENGE_ISSUED
        return self.challenge

    def set_challenge(self, challenge):
        """
        Use an externally computed challenge instead of drawing one.

        This is used with Fiat-Shamir, when the challenge is generated by hashing.
        """
        self._expect(VerifierState.RANDOM_DATA_RECEIVED)
        challenge = ensure_bn(challenge)
        if challenge < 0 or challenge.num_bits() > self.challenge_space_size:
            warnings.warn(
                "Challenge outside of [0, 2^{})".format(self.challenge_space_size)
            )
        self.challenge = challenge
        self.state = VerifierState.CHALLENGE_ISSUED

    def verify(self, s1, s21, s22):
        r"""
        Verify the responses.

        Checks :math:`t_1 C_1^c = \mathrm{Com}_1(s_1, s_{21})` and
        :math:`t_2 C_2^c = \mathrm{Com}_2(s_1, s_{22})`.

        A commitment outside of the group of its receiver is rejected rather than raising.

        Returns:
            bool: True if both checks hold, False otherwise.
        """
        self._expect(VerifierState.CHALLENGE_ISSUED)
        s1, s21, s22 = ensure_bn(s1), ensure_bn(s21), ensure_bn(s22)

        for receiver in (self.receiver1, self.receiver2):
            if not receiver.group.is_element(receiver.commitment):
                self.state = VerifierState.REJECTED
                return False

        left1 = self.receiver1.group.exp(self.receiver1.commitment, self.challenge)
        left1 = self.receiver1.group.mul(self.proof_random_data1, left1)
        right1 = self.receiver1.compute_commit(s1, s21)

        left2 = self.receiver2.group.exp(self.receiver2.commitment, self.challenge)
        left2 = self.receiver2.group.mul(self.proof_random_data2, left2)
        right2 = self.receiver2.compute_commit(s1, s22)

        result = left1 == right1 and left2 == right2
        self.state = VerifierState.VERIFIED if result else VerifierState.REJECTED
        return result

    def verify_nizk(self, proof, message=""):
        """
        Verify a non-interactive proof.

        Recomputes the challenge from the statement and the random data in the proof, then checks
        the responses.

        Args:
            proof (:py:class:`EqualityProof`): Non-interactive proof
            message: A message if a signature proof.

        Returns:
            bool: True if verification succeeded, False otherwise.
        """
        self.set_proof_random_data(proof.proof_random_data1, proof.proof_random_data2)
        prehash = prehash_statement(
            self.receiver1,
            self.receiver1.commitment,
            self.receiver2,
            self.receiver2.commitment,
            self.challenge_space_size,
        )
        challenge = build_challenge(
            prehash,
            self.proof_random_data1,
            self.proof_random_data2,
            self.challenge_space_size,
            message=message,
        )
        if challenge != ensure_bn(proof.challenge):
            self.state = VerifierState.REJECTED
            return False

        self.set_challenge(challenge)
        return self.verify(proof.proof_data1, proof.proof_data21, proof.proof_data22)
