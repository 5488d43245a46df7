from itertools import count
from os import urandom
import time


_processKey = urandom(5).hex()
_counter = count(int.from_bytes(urandom(3), 'big') >> 1)


def createID():
    """Create a new resource ID.

    IDs are 24 lowercase hexadecimal characters: a 4-byte timestamp, a 5-byte
    per-process random value and a 3-byte counter.  IDs created by the same
    process sort in creation order.

    @return: A new C{unicode} ID.
    """
    timestamp = int(time.time()) & 0xffffffff
    sequence = next(_counter) & 0xffffff
    return '%08x%s%06x' % (timestamp, _processKey, sequence)
