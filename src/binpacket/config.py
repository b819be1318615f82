""" Default settings for the codec and the transport adapters. Each setting
    is read once from the environment at import time; any of them can be
    overridden afterwards by simple assignment, for example::

        import binpacket
        binpacket.config.unused_attachments = 'warn'

    The recognized environment variables are:

    ``BINPACKET_UNUSED_ATTACHMENTS``
        What the decoder does when an attachment is never referenced by a
        placeholder: 'error' (the default) or 'warn'.

    ``BINPACKET_MAX_ATTACHMENTS``
        Upper bound on the attachment count a single skeleton frame may
        declare. Unset, empty, or zero means no limit.

    ``BINPACKET_TIMEOUT``
        Seconds a transport adapter waits for a packet to complete.
"""

import os

policies = ('error', 'warn')


def policy(value):
    """ Validate and return an unused-attachment policy. None selects the
        currently configured default.
    """

    if value is None:
        value = unused_attachments

    if not isinstance(value, str):
        raise ValueError('unused attachment policy must be a string, not ' + repr(value))

    value = value.lower()

    if value not in policies:
        raise ValueError('unused attachment policy must be one of %s, not %s' % (repr(policies), repr(value)))

    return value


def _limit(value):

    if value is None or value == '':
        return None

    value = int(value)
    if value <= 0:
        return None

    return value


unused_attachments = policy(os.environ.get('BINPACKET_UNUSED_ATTACHMENTS', 'error'))
max_attachments = _limit(os.environ.get('BINPACKET_MAX_ATTACHMENTS'))
timeout = float(os.environ.get('BINPACKET_TIMEOUT', 5.0))


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
