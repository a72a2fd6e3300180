__version__ = "0.1.0"
__title__ = "homcom"
__author__ = "The homcom developers"
__license__ = "MIT"
__description__ = "Homomorphic commitments over q-one-way group homomorphisms and zero-knowledge proofs of equality of committed values."
__copyright__ = "2020, The homcom developers"


from homcom.qoneway import RSABased, Committer, Receiver
from homcom.df import DFCommitter, DFReceiver
from homcom.equality import EqualityProver, EqualityVerifier, EqualityProof
