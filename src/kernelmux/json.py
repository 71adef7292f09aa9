''' Wrapper module to select the most performant available library to handle
    the equivalent of :func:`json.loads` and :func:`json.dumps`.
'''

# msgspec is an optional extra; orjson is always installed alongside this
# package. Both are preferred to the standard library for the per-frame
# encoding done on every kernel message.

msgspec = None

try:
    import msgspec
except ImportError:
    pass

import orjson


# The msgspec 'encode' operation returns bytes, as does orjson.dumps. Callers
# building wire frames rely on that.

if msgspec is not None:
    encoder = msgspec.json.Encoder()
    decoder = msgspec.json.Decoder()
    dumps = encoder.encode
    loads = decoder.decode
    EncodeError = (TypeError, msgspec.EncodeError)
    DecodeError = (ValueError, msgspec.DecodeError)
else:
    dumps = orjson.dumps
    loads = orjson.loads
    EncodeError = (TypeError, orjson.JSONEncodeError)
    DecodeError = (ValueError, orjson.JSONDecodeError)

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
