"""Decoding and encoding of the values found in view configurations."""

from datetime import datetime, timezone
from decimal import Decimal
import re
from unicodedata import normalize

from datahive.application import getConfig


DEFAULT_DATE_FORMATS = ['%Y-%m-%dT%H:%M:%S.%f%z', '%Y-%m-%dT%H:%M:%S%z']

INTEGER_REGEXP = re.compile(r'^-?(0|[1-9][0-9]*)$')
DECIMAL_REGEXP = re.compile(
    r'^-?(0|[1-9][0-9]*)(\.[0-9]+)?([eE][-+]?[0-9]+)?$')


class DateDecoder(object):
    """Parse date tokens into naive UTC C{datetime}s.

    A trailing C{Z} is read as UTC.

    @param formats: Optionally, a sequence of C{strptime} formats to try, in
        order.  Default is L{DEFAULT_DATE_FORMATS}.
    """

    def __init__(self, formats=None):
        self._formats = list(formats or DEFAULT_DATE_FORMATS)

    def __call__(self, text):
        """Parse C{text}.

        @param text: The C{unicode} value to parse.
        @return: A naive C{datetime} in UTC, or C{None} if C{text} doesn't
            match any of the formats.
        """
        if text.endswith('Z'):
            text = text[:-1] + '+0000'
        for format in self._formats:
            try:
                value = datetime.strptime(text, format)
            except ValueError:
                continue
            if value.tzinfo is not None:
                value = value.astimezone(timezone.utc).replace(tzinfo=None)
            return value
        return None


def getDateDecoder():
    """Get a L{DateDecoder} using the configured date formats.

    The formats are read from the C{date-formats} field of the C{constraints}
    section of the configuration, if there is one.

    @return: A L{DateDecoder} instance.
    """
    config = getConfig()
    if config is None or not config.has_option('constraints',
                                               'date-formats'):
        return DateDecoder()
    formats = [format.strip()
               for format in config.get('constraints', 'date-formats')
               .split(',')]
    return DateDecoder([format for format in formats if format])


def encodeValue(text):
    """Encode a string for storage.

    Integer literals become C{int}s and decimal literals become C{Decimal}s.
    Any other string is returned in Unicode normal form C{NFC}.  Numbers with
    leading zeros, like C{007}, are kept as strings.

    @param text: The C{unicode} value to encode.
    @return: The encoded value.
    """
    if INTEGER_REGEXP.match(text):
        return int(text)
    if DECIMAL_REGEXP.match(text):
        return Decimal(text)
    return normalize('NFC', text)
