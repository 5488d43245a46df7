"""
Rewrite the placeholder IDs found in view queries and configurations with the
IDs of the resources created for a template.
"""

from copy import copy, deepcopy
import logging

from datahive.model.constraint import encodeValue, getDateDecoder
from datahive.model.dictionary import ResourceKind
from datahive.model.exceptions import TemplateNotAvailableError
from datahive.model.query import (
    CollectionAttributeFilter, LinkAttributeFilter, Query, QueryStem)
from datahive.util.constant import Constant, EnumBase


ID_LENGTH = 24

# The order in which a string that looks like an ID is looked up.
LOOKUP_ORDER = [ResourceKind.COLLECTION, ResourceKind.LINK_TYPE,
                ResourceKind.DOCUMENT, ResourceKind.LINK_INSTANCE,
                ResourceKind.VIEW]


class NodeKind(EnumBase):
    """The kinds of nodes found in a configuration tree.

    @cvar SCALAR: Strings, numbers, booleans, dates and C{None}.
    @cvar SEQUENCE: C{list}s and C{tuple}s.
    @cvar SET: C{set}s and C{frozenset}s.
    @cvar MAPPING: C{dict}s.
    """

    SCALAR = Constant(1, 'SCALAR')
    SEQUENCE = Constant(2, 'SEQUENCE')
    SET = Constant(3, 'SET')
    MAPPING = Constant(4, 'MAPPING')


def getNodeKind(value):
    """Get the L{NodeKind} of a value in a configuration tree."""
    if isinstance(value, dict):
        return NodeKind.MAPPING
    elif isinstance(value, (list, tuple)):
        return NodeKind.SEQUENCE
    elif isinstance(value, (set, frozenset)):
        return NodeKind.SET
    return NodeKind.SCALAR


class ConfigTranslator(object):
    """Translates arbitrary configuration trees.

    Containers are rebuilt with the same type, translating every element and
    every mapping key.  Strings are translated in this order:

     1. A string of exactly 24 characters that is a placeholder ID known to
        the dictionary is replaced with the real ID.  Collections, link
        types, documents, link instances and views are tried in that order.
     2. A string the date decoder can parse is replaced with the date.
     3. Any other string is passed through the generic encoder.

    Other scalars are returned unchanged.  Any literal string that happens
    to equal a known placeholder ID is replaced too, there's no way to tell
    the two apart.

    @param dictionary: The L{IdentifierDictionary} of the current template
        instantiation.
    @param dateDecoder: Optionally, a callable that returns a C{datetime} or
        C{None} for a string.  Default is L{getDateDecoder}'s decoder.
    @param genericEncoder: Optionally, a callable that encodes any other
        string.  Default is L{encodeValue}.
    @raise RuntimeError: Raised if a L{NodeKind} has no visitor.
    """

    def __init__(self, dictionary, dateDecoder=None, genericEncoder=None):
        self._dictionary = dictionary
        self._dateDecoder = dateDecoder or getDateDecoder()
        self._genericEncoder = genericEncoder or encodeValue
        self._visitors = {NodeKind.SCALAR: self._translateScalar,
                          NodeKind.SEQUENCE: self._translateSequence,
                          NodeKind.SET: self._translateSequence,
                          NodeKind.MAPPING: self._translateMapping}
        missing = [kind for kind in NodeKind.constants()
                   if kind not in self._visitors]
        if missing:
            raise RuntimeError('No visitor for node kinds: %s' %
                               ', '.join(str(kind) for kind in missing))

    def translate(self, value):
        """Translate a configuration tree.

        @param value: The tree to translate.
        @return: A new, translated tree.  C{value} is left untouched.
        """
        return self._visitors[getNodeKind(value)](value)

    def _translateScalar(self, value):
        if isinstance(value, str):
            return self._translateString(value)
        return value

    def _translateSequence(self, value):
        return type(value)(self.translate(item) for item in value)

    def _translateMapping(self, value):
        result = copy(value)
        result.clear()
        for key, item in value.items():
            result[self.translate(key)] = self.translate(item)
        return result

    def _translateString(self, value):
        if len(value) == ID_LENGTH:
            for kind in LOOKUP_ORDER:
                realID = self._dictionary.get(kind, value)
                if realID is not None:
                    return realID
        date = self._dateDecoder(value)
        if date is not None:
            return date
        return self._genericEncoder(value)


def translateConfig(value, dictionary, dateDecoder=None,
                    genericEncoder=None):
    """Translate a configuration tree with a L{ConfigTranslator}.

    @param value: The tree to translate.
    @param dictionary: The L{IdentifierDictionary} to resolve IDs with.
    @param dateDecoder: Optionally, the date decoder to use.
    @param genericEncoder: Optionally, the generic string encoder to use.
    @return: A new, translated tree.
    """
    translator = ConfigTranslator(dictionary, dateDecoder, genericEncoder)
    return translator.translate(value)


def translateQuery(query, dictionary, strict=False):
    """Translate the IDs referenced by a L{Query}.

    The collection ID, link type IDs and document IDs of every stem and the
    IDs referenced by its filters are replaced with the IDs registered in
    C{dictionary}.  C{None} fields stay C{None} and empty fields stay empty.
    IDs that can't be translated become C{None} and a warning is logged.

    @param query: The L{Query} to translate.
    @param dictionary: The L{IdentifierDictionary} to resolve IDs with.
    @param strict: Optionally, a flag indicating that the collection a stem
        starts from must be known.  Stems without a collection are allowed.
    @raise TemplateNotAvailableError: Raised if C{strict} is C{True} and the
        collection of a stem can't be translated.
    @return: A new L{Query}.
    """
    stems = [_translateStem(stem, dictionary, strict) for stem in query.stems]
    fulltexts = copy(query.fulltexts)
    return Query(stems, fulltexts, query.page, query.pageSize)


def _translateStem(stem, dictionary, strict):
    """Translate a single L{QueryStem}."""

    def lookup(kind, placeholderID):
        if placeholderID is None:
            return None
        realID = dictionary.get(kind, placeholderID)
        if realID is None:
            logging.warning("Can't translate %s %r, it's not defined by the "
                            'template.', kind, placeholderID)
        return realID

    collectionID = lookup(ResourceKind.COLLECTION, stem.collectionID)
    if strict and stem.collectionID is not None and collectionID is None:
        raise TemplateNotAvailableError(
            'Query refers to unknown collection %r.' % stem.collectionID)

    linkTypeIDs = None
    if stem.linkTypeIDs is not None:
        linkTypeIDs = [lookup(ResourceKind.LINK_TYPE, linkTypeID)
                       for linkTypeID in stem.linkTypeIDs]

    documentIDs = None
    if stem.documentIDs is not None:
        documentIDs = set(lookup(ResourceKind.DOCUMENT, documentID)
                          for documentID in stem.documentIDs)

    filters = None
    if stem.filters is not None:
        filters = [CollectionAttributeFilter(
            lookup(ResourceKind.COLLECTION, filter.collectionID),
            filter.attributeID, filter.condition,
            deepcopy(filter.conditionValues))
            for filter in stem.filters]

    linkFilters = None
    if stem.linkFilters is not None:
        linkFilters = [LinkAttributeFilter(
            lookup(ResourceKind.LINK_TYPE, filter.linkTypeID),
            filter.attributeID, filter.condition,
            deepcopy(filter.conditionValues))
            for filter in stem.linkFilters]

    return QueryStem(collectionID, linkTypeIDs, documentIDs, filters,
                     linkFilters)
