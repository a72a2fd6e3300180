from homcom import Receiver, Committer, EqualityProver, EqualityVerifier

receiver1, receiver2 = Receiver.generate(256), Receiver.generate(256)
committer1 = Committer(receiver1.q_one_way, receiver1.y)
committer2 = Committer(receiver2.q_one_way, receiver2.y)

receiver1.set_commitment(committer1.get_commit_msg(42))
receiver2.set_commitment(committer2.get_commit_msg(42))

prover = EqualityProver(committer1, committer2)
verifier = EqualityVerifier(receiver1, receiver2)

t1, t2 = prover.get_proof_random_data()
verifier.set_proof_random_data(t1, t2)
challenge = verifier.get_challenge()
s1, s21, s22 = prover.get_proof_data(challenge)

print(verifier.verify(s1, s21, s22))
