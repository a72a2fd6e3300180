from homcom import Receiver, Committer

receiver = Receiver.generate(256)
committer = Committer(receiver.q_one_way, receiver.y)

commitment = committer.get_commit_msg(7)
receiver.set_commitment(commitment)

a, r = committer.get_decommit_msg()
assert receiver.check_decommitment(r, a)
assert not receiver.check_decommitment(r, 8)
