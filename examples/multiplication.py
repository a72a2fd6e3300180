from homcom import Receiver, Committer

receiver = Receiver.generate(256)
committer = Committer(receiver.q_one_way, receiver.y)
group = receiver.group

a, b = 6, 7
commitment_b = committer.get_commit_msg(b)
_, u = committer.get_decommit_msg()

c, o, t = committer.get_commitment_to_multiplication(a, b, u, commitment_b)

# The receiver checks C = B^a * f(t) ...
assert c == group.mul(group.exp(commitment_b, a), receiver.q_one_way.homomorphism(t))

# ... and C opens to a * b.
receiver.set_commitment(c)
assert receiver.check_decommitment(o, a * b)
