''' JSON serialization for skeleton frames. msgspec is used when it is
    installed, orjson otherwise, and the standard library only as a last
    resort; :func:`dumps` returns bytes whichever is in use. Skeleton values
    may contain :class:`binpacket.protocol.value.Placeholder`
    instances; those are serialized via their *_as_json* method.
'''

msgspec = None
orjson = None
json = None

try:
    import msgspec
except ImportError:
    pass

if msgspec is None:
    try:
        import orjson
    except ImportError:
        pass

if msgspec is None and orjson is None:
    import json


def _default(value):
    """ Serialization hook for types none of the JSON libraries know about.
    """

    try:
        as_json = value._as_json
    except AttributeError:
        raise TypeError('cannot serialize %s as JSON' % (type(value).__name__))

    return as_json()


# Compact separators keep the stdlib output identical to msgspec and orjson.

def json_dumps(value):
    return json.dumps(value, default=_default, separators=(',', ':')).encode()

def orjson_dumps(value):
    return orjson.dumps(value, default=_default)

# Each library raises its own exception type on malformed input; callers
# catch DecodeError to handle all of them.

if msgspec is not None:
    DecodeError = (ValueError, msgspec.DecodeError)
else:
    DecodeError = ValueError

if msgspec is not None:
    encoder = msgspec.json.Encoder(enc_hook=_default)
    decoder = msgspec.json.Decoder()
    dumps = encoder.encode
    loads = decoder.decode
elif orjson is not None:
    dumps = orjson_dumps
    loads = orjson.loads
else:
    dumps = json_dumps
    loads = json.loads

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
