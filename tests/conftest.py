import pytest

from homcom.qoneway import Receiver, Committer
from homcom.df import DFReceiver, DFCommitter


# Toy sizes, large enough that collisions in the exponent group do not happen in practice.
TOY_BIT_LENGTH = 128


@pytest.fixture
def receiver():
    return Receiver.generate(TOY_BIT_LENGTH)


@pytest.fixture
def committer(receiver):
    return Committer(receiver.q_one_way, receiver.y)


@pytest.fixture
def other_receiver():
    return Receiver.generate(TOY_BIT_LENGTH)


@pytest.fixture
def other_committer(other_receiver):
    return Committer(other_receiver.q_one_way, other_receiver.y)


@pytest.fixture
def df_receiver():
    return DFReceiver(TOY_BIT_LENGTH, k=40)


@pytest.fixture
def df_committer(df_receiver):
    return DFCommitter(df_receiver.params)
