""" Conversion between a value tree containing binary leaves and a binary-free
    skeleton plus an ordered list of attachments. :func:`encode` and
    :func:`decode` are pure functions; each call owns its own traversal
    state, so both are safe to call from any number of threads at once.
"""

import logging

from .. import config
from .errors import InvalidReference, UnusedAttachments
from . import value as model

logger = logging.getLogger(__name__)


class _Extractor:
    """ Traversal context for a single :func:`encode` call. The next
        placeholder number is always the current length of the attachment
        list.
    """

    def __init__(self):
        self.attachments = list()


    def __call__(self, node):

        if model.is_binary(node):
            num = len(self.attachments)
            self.attachments.append(model.as_binary(node))
            return model.Placeholder(num)

        return model.KEEP


# end of class _Extractor



def _holds_placeholder(value):

    for node in model.walk(value):
        if isinstance(node, model.Placeholder):
            return True

    return False



class _Injector:
    """ Traversal context for a single :func:`decode` call. Tracks which
        attachments have been referenced so that repeats and leftovers can
        be detected.
    """

    def __init__(self, attachments):
        self.attachments = attachments
        self.referenced = set()


    def __call__(self, node):

        if not model.is_placeholder(node):
            return model.KEEP

        num = model.placeholder_num(node)
        count = len(self.attachments)

        # A reserved-shape mapping holding encoder placeholders in its num
        # field is user data from an in-process skeleton; descend into it.

        if not isinstance(node, model.Placeholder) and _holds_placeholder(num):
            return model.KEEP

        # bool is an int subclass; a JSON true is not a valid index.

        if isinstance(num, bool) or not isinstance(num, int):
            raise InvalidReference('placeholder index must be an integer, not %s' % (repr(num)))

        if num < 0 or num >= count:
            raise InvalidReference('placeholder index %d is out of range for %d attachments' % (num, count))

        if num in self.referenced:
            raise InvalidReference('placeholder index %d is referenced more than once' % (num))

        self.referenced.add(num)
        return model.as_binary(self.attachments[num])


    def unused(self):
        return set(range(len(self.attachments))) - self.referenced


# end of class _Injector



def encode(value):
    """ Return a (skeleton, attachments) tuple for *value*. Every binary leaf
        is moved, in depth-first pre-order, to the attachment list and
        replaced in the skeleton by a :class:`value.Placeholder` carrying
        its index. The input is not modified.

        A mapping in *value* that already looks like a placeholder is rebuilt
        and descended like any other mapping. Once serialized, a receiver
        cannot tell it apart from a genuine placeholder; this is a known
        limitation of the wire format.
    """

    extractor = _Extractor()
    skeleton = model.transform(value, extractor)
    return skeleton, extractor.attachments


def decode(skeleton, attachments, unused=None):
    """ Reverse :func:`encode`: replace every placeholder in *skeleton* with
        the corresponding entry from *attachments*, returned as
        :class:`value.Binary` instances.

        An :class:`errors.InvalidReference` exception is raised for a
        placeholder whose index is not an integer, out of range, or repeated.
        Attachments that no placeholder refers to are handled according to
        the *unused* policy: 'error' raises :class:`errors.UnusedAttachments`,
        'warn' logs a warning and returns the value regardless. The default
        policy is taken from :data:`binpacket.config.unused_attachments`.
    """

    policy = config.policy(unused)

    injector = _Injector(attachments)
    value = model.transform(skeleton, injector)

    leftover = injector.unused()

    if leftover:
        leftover = sorted(leftover)
        message = '%d of %d attachments never referenced: %s' % (len(leftover), len(attachments), repr(leftover))

        if policy == 'error':
            raise UnusedAttachments(message, leftover)

        logger.warning(message)

    return value


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
