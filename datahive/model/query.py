"""Structured queries saved in views.

A L{Query} is made of L{QueryStem}s, each one rooted in a collection and
optionally following link types.  Apart from the collection ID, every stem
field distinguishes C{None}, meaning the field isn't used, from an empty
container, which matches nothing.
"""

from copy import deepcopy


class CollectionAttributeFilter(object):
    """A condition on an attribute of the documents in a collection.

    @param collectionID: The L{Collection.id} the attribute belongs to.
    @param attributeID: The ID of the filtered attribute.
    @param condition: The C{unicode} name of the condition, such as C{eq}.
    @param conditionValues: Optionally, a C{list} of values the condition is
        evaluated with.
    """

    def __init__(self, collectionID, attributeID, condition,
                 conditionValues=None):
        self.collectionID = collectionID
        self.attributeID = attributeID
        self.condition = condition
        self.conditionValues = conditionValues

    def toJSON(self):
        return {'collectionId': self.collectionID,
                'attributeId': self.attributeID,
                'condition': self.condition,
                'conditionValues': deepcopy(self.conditionValues)}

    @classmethod
    def fromJSON(cls, value):
        _checkMapping(value, 'A collection attribute filter')
        return cls(value.get('collectionId'), value.get('attributeId'),
                   value.get('condition'),
                   deepcopy(value.get('conditionValues')))

    def __eq__(self, other):
        return (isinstance(other, CollectionAttributeFilter)
                and self.toJSON() == other.toJSON())

    def __ne__(self, other):
        return not self == other

    def __repr__(self):
        return '<CollectionAttributeFilter %r>' % self.toJSON()


class LinkAttributeFilter(object):
    """A condition on an attribute of the links of a link type.

    @param linkTypeID: The L{LinkType.id} the attribute belongs to.
    @param attributeID: The ID of the filtered attribute.
    @param condition: The C{unicode} name of the condition, such as C{eq}.
    @param conditionValues: Optionally, a C{list} of values the condition is
        evaluated with.
    """

    def __init__(self, linkTypeID, attributeID, condition,
                 conditionValues=None):
        self.linkTypeID = linkTypeID
        self.attributeID = attributeID
        self.condition = condition
        self.conditionValues = conditionValues

    def toJSON(self):
        return {'linkTypeId': self.linkTypeID,
                'attributeId': self.attributeID,
                'condition': self.condition,
                'conditionValues': deepcopy(self.conditionValues)}

    @classmethod
    def fromJSON(cls, value):
        _checkMapping(value, 'A link attribute filter')
        return cls(value.get('linkTypeId'), value.get('attributeId'),
                   value.get('condition'),
                   deepcopy(value.get('conditionValues')))

    def __eq__(self, other):
        return (isinstance(other, LinkAttributeFilter)
                and self.toJSON() == other.toJSON())

    def __ne__(self, other):
        return not self == other

    def __repr__(self):
        return '<LinkAttributeFilter %r>' % self.toJSON()


def _checkMapping(value, name):
    """Raise a C{ValueError} unless C{value} is a C{dict}."""
    if not isinstance(value, dict):
        raise ValueError('%s must be an object, got %r.' % (name, value))


def _checkSequence(value, name):
    """Raise a C{ValueError} unless C{value} is C{None} or a C{list}."""
    if value is not None and not isinstance(value, (list, tuple)):
        raise ValueError('%s must be a list, got %r.' % (name, value))


def _optional(factory, values):
    """Apply C{factory} to C{values} unless they're C{None}."""
    return None if values is None else factory(values)


class QueryStem(object):
    """A part of a L{Query} rooted in a single collection.

    @param collectionID: The L{Collection.id} the stem starts from.
    @param linkTypeIDs: Optionally, an ordered sequence of L{LinkType.id}s
        the stem follows.
    @param documentIDs: Optionally, the L{Document.id}s the stem is limited
        to.
    @param filters: Optionally, a sequence of L{CollectionAttributeFilter}s.
    @param linkFilters: Optionally, a sequence of L{LinkAttributeFilter}s.
    """

    def __init__(self, collectionID, linkTypeIDs=None, documentIDs=None,
                 filters=None, linkFilters=None):
        self.collectionID = collectionID
        self.linkTypeIDs = _optional(list, linkTypeIDs)
        self.documentIDs = _optional(set, documentIDs)
        self.filters = _optional(list, filters)
        self.linkFilters = _optional(list, linkFilters)

    def toJSON(self):
        return {
            'collectionId': self.collectionID,
            'linkTypeIds': _optional(list, self.linkTypeIDs),
            'documentIds': _optional(lambda ids: sorted(ids, key=str),
                                     self.documentIDs),
            'filters': _optional(
                lambda filters: [filter.toJSON() for filter in filters],
                self.filters),
            'linkFilters': _optional(
                lambda filters: [filter.toJSON() for filter in filters],
                self.linkFilters)}

    @classmethod
    def fromJSON(cls, value):
        _checkMapping(value, 'A query stem')
        for key in ('linkTypeIds', 'documentIds', 'filters', 'linkFilters'):
            _checkSequence(value.get(key), key)
        filters = _optional(
            lambda filters: [CollectionAttributeFilter.fromJSON(filter)
                             for filter in filters],
            value.get('filters'))
        linkFilters = _optional(
            lambda filters: [LinkAttributeFilter.fromJSON(filter)
                             for filter in filters],
            value.get('linkFilters'))
        return cls(value.get('collectionId'), value.get('linkTypeIds'),
                   value.get('documentIds'), filters, linkFilters)

    def __eq__(self, other):
        """
        Stems are equal when their fields are equal.  The order of filters
        carries no meaning.
        """
        if not isinstance(other, QueryStem):
            return False

        def unordered(filters):
            if filters is None:
                return None
            return sorted(repr(filter) for filter in filters)

        return (self.collectionID == other.collectionID
                and self.linkTypeIDs == other.linkTypeIDs
                and self.documentIDs == other.documentIDs
                and unordered(self.filters) == unordered(other.filters)
                and unordered(self.linkFilters) ==
                unordered(other.linkFilters))

    def __ne__(self, other):
        return not self == other

    def __repr__(self):
        return '<QueryStem %r>' % self.toJSON()


class Query(object):
    """A structured query.

    @param stems: Optionally, a sequence of L{QueryStem}s.
    @param fulltexts: Optionally, a sequence of C{unicode} full-text search
        terms.
    @param page: Optionally, the zero-based page of results to return.
    @param pageSize: Optionally, the number of results per page.
    """

    def __init__(self, stems=None, fulltexts=None, page=None, pageSize=None):
        self.stems = list(stems or [])
        self.fulltexts = _optional(set, fulltexts)
        self.page = page
        self.pageSize = pageSize

    def getCollectionIDs(self):
        """Get the IDs of the collections the stems of this query start from.

        @return: A C{set} of L{Collection.id}s.
        """
        return set(stem.collectionID for stem in self.stems
                   if stem.collectionID is not None)

    def getLinkTypeIDs(self):
        """Get the IDs of the link types the stems of this query follow.

        @return: A C{set} of L{LinkType.id}s.
        """
        linkTypeIDs = set()
        for stem in self.stems:
            linkTypeIDs.update(stem.linkTypeIDs or ())
        linkTypeIDs.discard(None)
        return linkTypeIDs

    def toJSON(self):
        """Convert this query to its JSON representation.

        @return: A C{dict} with camelCase keys.
        """
        return {'stems': [stem.toJSON() for stem in self.stems],
                'fulltexts': _optional(sorted, self.fulltexts),
                'page': self.page,
                'pageSize': self.pageSize}

    @classmethod
    def fromJSON(cls, value):
        """Load a query from its JSON representation.

        @param value: A C{dict} with camelCase keys, or C{None} for an empty
            query.
        @raise ValueError: Raised if C{value}, one of its stems or one of their
            filters isn't shaped like a query.
        @return: A new L{Query}.
        """
        if value is None:
            return cls()
        _checkMapping(value, 'A query')
        _checkSequence(value.get('stems'), 'stems')
        stems = [QueryStem.fromJSON(stem) for stem in value.get('stems') or []]
        return cls(stems, value.get('fulltexts'), value.get('page'),
                   value.get('pageSize'))

    def __eq__(self, other):
        return (isinstance(other, Query)
                and self.stems == other.stems
                and self.fulltexts == other.fulltexts
                and self.page == other.page
                and self.pageSize == other.pageSize)

    def __ne__(self, other):
        return not self == other

    def __repr__(self):
        return '<Query %r>' % self.toJSON()
