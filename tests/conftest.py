import itertools
import pytest
import zmq


_endpoints = itertools.count()


@pytest.fixture
def zmq_pair():
    """ Yield a connected pair of ZeroMQ PAIR sockets over inproc://.
    """

    context = zmq.Context()
    endpoint = 'inproc://binpacket-test-%d' % (next(_endpoints))

    left = context.socket(zmq.PAIR)
    left.setsockopt(zmq.LINGER, 0)
    left.bind(endpoint)

    right = context.socket(zmq.PAIR)
    right.setsockopt(zmq.LINGER, 0)
    right.connect(endpoint)

    yield left, right

    left.close(linger=0)
    right.close(linger=0)
    context.term()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
