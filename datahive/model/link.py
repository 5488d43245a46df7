from datahive.data.document import Document
from datahive.data.exceptions import NotFoundError
from datahive.data.link import (
    createLinkInstance, deleteLinkInstance, getLinkInstances)
from datahive.data.linktype import LinkType
from datahive.data.store import getMainStore
from datahive.model.factory import APIFactory


class LinkInstanceAPI(object):
    """The public API to L{LinkInstance}s in the model layer.

    @param userID: The L{User.id} to perform operations on behalf of.
    @param factory: Optionally, the API factory to use when creating internal
        APIs.  Default is L{APIFactory}.
    """

    def __init__(self, userID, factory=None):
        self._userID = userID
        self._factory = factory or APIFactory()

    def create(self, linkTypeID, documentIDs, data=None):
        """Link two L{Document}s.

        The first document must belong to the first collection of the link
        type and the second document to the second one.

        @param linkTypeID: The L{LinkType.id} of the new link.
        @param documentIDs: A C{(documentID1, documentID2)} 2-tuple.
        @param data: Optionally, a C{dict} mapping attribute IDs to values.
        @raise NotFoundError: Raised if the link type or one of the documents
            doesn't exist.
        @raise ValueError: Raised if C{documentIDs} doesn't have exactly two
            items or a document doesn't belong to the matching collection.
        @return: A C{dict} describing the new link.
        """
        documentIDs = list(documentIDs)
        if len(documentIDs) != 2:
            raise ValueError('A link connects exactly two documents.')
        store = getMainStore()
        linkType = store.get(LinkType, linkTypeID)
        if linkType is None:
            raise NotFoundError('link type', [linkTypeID])
        for documentID, collectionID in zip(documentIDs,
                                            linkType.collectionIDs):
            document = store.get(Document, documentID)
            if document is None:
                raise NotFoundError('document', [documentID])
            if document.collectionID != collectionID:
                raise ValueError(
                    'Document %r is not in collection %r.'
                    % (documentID, collectionID))
        linkInstance = createLinkInstance(linkTypeID, documentIDs[0],
                                          documentIDs[1], self._userID, data)
        return _toDict(linkInstance)

    def get(self, linkInstanceID):
        """Get a L{LinkInstance}.

        @param linkInstanceID: The L{LinkInstance.id} to get.
        @raise NotFoundError: Raised if the link doesn't exist.
        @return: A C{dict} describing the link.
        """
        linkInstance = getLinkInstances(ids=[linkInstanceID]).one()
        if linkInstance is None:
            raise NotFoundError('link instance', [linkInstanceID])
        return _toDict(linkInstance)

    def getLinkInstances(self, linkTypeID=None, documentID=None, page=None,
                         pageSize=None):
        """Get L{LinkInstance}s in creation order.

        @param linkTypeID: Optionally, a L{LinkType.id} to filter the results
            with.
        @param documentID: Optionally, a L{Document.id} one of the endpoints
            must match.
        @param page: Optionally, the zero-based page to return.
        @param pageSize: Optionally, the number of links per page.
        @return: A C{list} of C{dict}s describing the links.
        """
        result = getLinkInstances(linkTypeID=linkTypeID,
                                  documentID=documentID, page=page,
                                  pageSize=pageSize)
        return [_toDict(linkInstance) for linkInstance in result]

    def delete(self, linkInstanceID):
        """Delete a L{LinkInstance}.

        @raise NotFoundError: Raised if the link doesn't exist.
        """
        deleteLinkInstance(linkInstanceID)


def _toDict(linkInstance):
    return {'id': linkInstance.id,
            'linkTypeID': linkInstance.linkTypeID,
            'documentIDs': linkInstance.documentIDs,
            'data': linkInstance.data,
            'creatorID': linkInstance.creatorID,
            'creationTime': linkInstance.creationTime}
