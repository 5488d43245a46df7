from datetime import datetime
from decimal import Decimal
from json import loads, dumps

from storm.properties import SimpleProperty
from storm.variables import EncodedValueVariable


DATE_KEY = '$date'
DECIMAL_KEY = '$numberDecimal'
DATE_FORMAT = '%Y-%m-%dT%H:%M:%S.%f'


def encodeJSON(value):
    """Convert a value tree into something the C{json} module can serialize.

    Dates and decimals are written with the tagged representation used by
    extended JSON, sets become lists and mapping keys become strings.

    @param value: An arbitrary tree of mappings, sequences, sets and scalars.
    @return: A tree containing only JSON-compatible values.
    """
    if isinstance(value, dict):
        return dict((_encodeKey(key), encodeJSON(item))
                    for key, item in value.items())
    elif isinstance(value, (list, tuple, set, frozenset)):
        return [encodeJSON(item) for item in value]
    elif isinstance(value, datetime):
        return {DATE_KEY: value.strftime(DATE_FORMAT)}
    elif isinstance(value, Decimal):
        return {DECIMAL_KEY: str(value)}
    return value


def _encodeKey(key):
    """Convert a mapping key into a string."""
    if isinstance(key, datetime):
        return key.strftime(DATE_FORMAT)
    elif isinstance(key, str):
        return key
    return str(key)


def decodeJSON(value):
    """Restore dates and decimals encoded by L{encodeJSON}.

    @param value: A C{dict} produced while parsing JSON.
    @return: A C{datetime}, a C{Decimal} or the unchanged C{dict}.
    """
    if len(value) == 1:
        if DATE_KEY in value:
            return datetime.strptime(value[DATE_KEY], DATE_FORMAT)
        if DECIMAL_KEY in value:
            return Decimal(value[DECIMAL_KEY])
    return value


class ExtendedJSONVariable(EncodedValueVariable):
    """Variable serializes data to and from extended JSON."""

    __slots__ = ()

    def _loads(self, value):
        if isinstance(value, bytes):
            value = value.decode('utf-8')
        return loads(value, object_hook=decodeJSON)

    def _dumps(self, value):
        return dumps(encodeJSON(value), sort_keys=True)


class ExtendedJSON(SimpleProperty):
    """Storm property stores data in extended JSON format in a TEXT column.

    Besides the types supported by JSON, values may contain C{datetime}s,
    C{Decimal}s and sets.  Sets are loaded back as lists.
    """

    variable_class = ExtendedJSONVariable
