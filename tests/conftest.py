# tests/conftest.py

import pytest

from pert_net import NetworkModel


DUMMY_TXT = """\
0
21
1 2 2
1 4 2
1 7 1
2 3 4
4 5 5
3 6 1
4 8 8
5 6 4
7 8 3
6 9 3
8 9 5
"""


@pytest.fixture
def diamond():
    """
    1 --1--> 2 --1--> 4
    1 --6--> 3 --1--> 4
    """
    net = NetworkModel()
    net.add_activity(1, 2, 1)
    net.add_activity(1, 3, 6)
    net.add_activity(2, 4, 1)
    net.add_activity(3, 4, 1)
    net.schedule(0, 7)
    return net


@pytest.fixture
def dummy():
    """Nine event network scheduled on [0, 21], shortest duration is 15."""
    return NetworkModel.from_txt(DUMMY_TXT)


@pytest.fixture
def dummy_file(tmp_path):
    path = tmp_path / "network.txt"
    path.write_text(DUMMY_TXT, encoding="utf-8")
    return path
