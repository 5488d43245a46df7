from datahive.model.exceptions import DuplicateMappingError
from datahive.util.constant import Constant, EnumBase


class ResourceKind(EnumBase):
    """The kinds of resources a template can define placeholder IDs for."""

    COLLECTION = Constant(1, 'COLLECTION')
    LINK_TYPE = Constant(2, 'LINK_TYPE')
    DOCUMENT = Constant(3, 'DOCUMENT')
    LINK_INSTANCE = Constant(4, 'LINK_INSTANCE')
    VIEW = Constant(5, 'VIEW')


class IdentifierDictionary(object):
    """
    Maps the placeholder IDs used in a template to the IDs of the resources
    created for them.

    Each L{ResourceKind} has its own independent mapping.  A dictionary is
    meant to be used for a single template instantiation and is never
    persisted.
    """

    def __init__(self):
        self._mappings = dict((kind, {}) for kind in ResourceKind.constants())

    def _getMapping(self, kind):
        """Get the mapping for C{kind}.

        @raise RuntimeError: Raised if C{kind} isn't a L{ResourceKind}.
        """
        try:
            return self._mappings[kind]
        except (KeyError, TypeError):
            raise RuntimeError('Unknown resource kind: %r' % (kind,))

    def put(self, kind, placeholderID, realID):
        """Register the real ID created for a placeholder ID.

        Registering the same real ID twice is harmless.

        @param kind: The L{ResourceKind} of the resource.
        @param placeholderID: The ID used in the template.
        @param realID: The ID of the created resource.
        @raise DuplicateMappingError: Raised if C{placeholderID} is already
            mapped to a different real ID.
        @raise RuntimeError: Raised if C{kind} isn't a L{ResourceKind}.
        """
        mapping = self._getMapping(kind)
        existingID = mapping.get(placeholderID)
        if existingID is not None and existingID != realID:
            raise DuplicateMappingError(kind, placeholderID, existingID,
                                        realID)
        mapping[placeholderID] = realID

    def get(self, kind, placeholderID):
        """Get the real ID registered for a placeholder ID.

        @param kind: The L{ResourceKind} of the resource.
        @param placeholderID: The ID used in the template.
        @raise RuntimeError: Raised if C{kind} isn't a L{ResourceKind}.
        @return: The real ID or C{None} if C{placeholderID} isn't registered.
        """
        return self._getMapping(kind).get(placeholderID)

    def getMapping(self, kind):
        """Get every placeholder ID registered for a L{ResourceKind}.

        @param kind: The L{ResourceKind} of the resources.
        @raise RuntimeError: Raised if C{kind} isn't a L{ResourceKind}.
        @return: A new C{dict} mapping placeholder IDs to real IDs.
        """
        return dict(self._getMapping(kind))
