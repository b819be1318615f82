""" The value model shared by the encoder and decoder. Encodable values are
    ordinary Python objects: None, booleans, numbers, strings, lists and
    tuples, mappings with string keys, and binary leaves. A binary leaf is
    any bytes-like object; :class:`Binary` is its canonical, immutable form.

    :class:`Placeholder` is the reference variant the encoder substitutes for
    a binary leaf. It is only ever constructed by the encoder; a mapping that
    merely has the same shape is recognized as a placeholder only when a
    received skeleton is decoded, see :func:`is_placeholder`.
"""

from collections.abc import Mapping

from .fields import NUM, PLACEHOLDER


binary_types = (bytes, bytearray, memoryview)
sequence_types = (list, tuple)


class Binary(bytes):
    """ An opaque, immutable byte payload. This is a :class:`bytes`
        subclass, so it compares equal to plain bytes with the same content,
        and can be handed to any transport that accepts bytes.
    """

    __slots__ = ()

    def __repr__(self):
        return 'Binary(' + bytes.__repr__(self) + ')'


# end of class Binary



class Placeholder:
    """ A typed reference to attachment number *num* of the same packet.
        A :class:`Placeholder` compares equal to another with the same
        number, and to the reserved mapping it serializes to::

            {"_placeholder": true, "num": num}
    """

    __slots__ = ('num',)

    def __init__(self, num):
        self.num = num


    def __eq__(self, other):

        if isinstance(other, Placeholder):
            return self.num == other.num

        if isinstance(other, Mapping):
            return is_placeholder(other) and _strict_equal(other[NUM], self.num)

        return NotImplemented


    def __hash__(self):
        return hash((PLACEHOLDER, self.num))


    def __repr__(self):
        return 'Placeholder(%r)' % (self.num,)


    def _as_json(self):
        return {PLACEHOLDER: True, NUM: self.num}


# end of class Placeholder



class _Keep:
    """ Sentinel type for :func:`transform`.
    """

    def __repr__(self):
        return 'KEEP'


KEEP = _Keep()


def _strict_equal(a, b):
    """ Compare two numbers without letting True stand in for 1.
    """

    if isinstance(a, bool) or isinstance(b, bool):
        return a is b
    return a == b


def as_binary(value):
    """ Return the canonical :class:`Binary` form of a bytes-like *value*.
    """

    if isinstance(value, Binary):
        return value
    return Binary(value)


def is_binary(value):
    return isinstance(value, binary_types)


def is_placeholder(value):
    """ Return True if *value* is a :class:`Placeholder`, or a mapping with
        exactly the reserved placeholder shape. Only the two reserved keys
        may be present, and the '_placeholder' field must be the boolean
        True; the 'num' field is not validated here.
    """

    if isinstance(value, Placeholder):
        return True

    if not isinstance(value, Mapping) or len(value) != 2:
        return False

    try:
        marker = value[PLACEHOLDER]
    except KeyError:
        return False

    return marker is True and NUM in value


def placeholder_num(value):
    """ Return the raw 'num' field of a placeholder, whichever form it has.
    """

    if isinstance(value, Placeholder):
        return value.num
    return value[NUM]


def walk(value):
    """ Generator yielding every node of *value*, depth-first pre-order.
        Mapping children are visited in insertion order, sequence children
        in index order. Placeholder instances and binary leaves are not
        descended; a mapping that merely has the reserved placeholder shape
        is an ordinary mapping here.
    """

    stack = [value]

    while stack:
        node = stack.pop()
        yield node

        if is_binary(node) or isinstance(node, Placeholder):
            continue

        if isinstance(node, Mapping):
            children = list(node.values())
        elif isinstance(node, sequence_types):
            children = list(node)
        else:
            continue

        children.reverse()
        stack.extend(children)


def transform(value, replace):
    """ Return a rebuilt copy of *value*. The *replace* callable is invoked
        on each node, depth-first pre-order; it returns either a substitute
        for that node, or :data:`KEEP` to leave the node in place and
        descend into its children. The input is never modified. Lists and
        tuples keep their type; mappings are rebuilt as dicts.
    """

    substitute = replace(value)
    if substitute is not KEEP:
        return substitute

    if is_binary(value) or isinstance(value, Placeholder):
        return value

    if isinstance(value, Mapping):
        rebuilt = dict()
        for key, child in value.items():
            rebuilt[key] = transform(child, replace)
        return rebuilt

    if isinstance(value, sequence_types):
        rebuilt = [transform(child, replace) for child in value]
        if isinstance(value, tuple):
            rebuilt = tuple(rebuilt)
        return rebuilt

    return value


def count_binary(value):
    """ Return the number of binary leaves reachable in *value*.
    """

    count = 0
    for node in walk(value):
        if is_binary(node):
            count += 1

    return count


def has_binary(value):

    for node in walk(value):
        if is_binary(node):
            return True

    return False


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
