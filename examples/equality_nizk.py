from homcom import (
    Receiver,
    Committer,
    DFReceiver,
    DFCommitter,
    EqualityProver,
    EqualityVerifier,
)

# The same value committed in two different schemes.
receiver1 = Receiver.generate(256)
committer1 = Committer(receiver1.q_one_way, receiver1.y)
receiver2 = DFReceiver(256)
committer2 = DFCommitter(receiver2.params)

receiver1.set_commitment(committer1.get_commit_msg(2020))
receiver2.set_commitment(committer2.get_commit_msg(2020))

proof = EqualityProver(committer1, committer2).get_nizk_proof(message="hello")
assert EqualityVerifier(receiver1, receiver2).verify_nizk(proof, message="hello")
