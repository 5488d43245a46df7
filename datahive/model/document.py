from storm.locals import Or

from datahive.data.collection import Collection
from datahive.data.document import (
    addFavoriteDocument, createDocument, deleteDocuments, getDocuments,
    getFavoriteDocuments, patchDocument, removeFavoriteDocuments,
    updateDocument)
from datahive.data.exceptions import NotFoundError
from datahive.data.link import LinkInstance
from datahive.data.store import getMainStore
from datahive.model.factory import APIFactory


class DocumentAPI(object):
    """The public API to L{Document}s in the model layer.

    Documents don't have permissions of their own, see L{SecureDocumentAPI}
    for the checks made against their collection.

    @param userID: The L{User.id} to perform operations on behalf of.
    @param factory: Optionally, the API factory to use when creating internal
        APIs.  Default is L{APIFactory}.
    """

    def __init__(self, userID, factory=None):
        self._userID = userID
        self._factory = factory or APIFactory()

    def create(self, collectionID, data=None):
        """Create a new L{Document} in a collection.

        @param collectionID: The L{Collection.id} to add the document to.
        @param data: Optionally, a C{dict} mapping attribute IDs to values.
        @raise NotFoundError: Raised if the collection doesn't exist.
        @return: A C{dict} describing the new document.
        """
        collection = self._getCollection(collectionID)
        document = createDocument(collectionID, self._userID, data)
        collection.documentsCount += 1
        return _toDict(document)

    def get(self, collectionID, documentID):
        """Get a L{Document}.

        @param collectionID: The L{Collection.id} the document belongs to.
        @param documentID: The L{Document.id} to get.
        @raise NotFoundError: Raised if the document doesn't exist in the
            collection.
        @return: A C{dict} describing the document.
        """
        document = getDocuments(collectionID=collectionID,
                                ids=[documentID]).one()
        if document is None:
            raise NotFoundError('document', [documentID])
        return _toDict(document)

    def getDocuments(self, collectionID, page=None, pageSize=None):
        """Get the L{Document}s of a collection in creation order.

        @param collectionID: The L{Collection.id} to get documents from.
        @param page: Optionally, the zero-based page to return.
        @param pageSize: Optionally, the number of documents per page.
        @return: A C{list} of C{dict}s describing the documents.
        """
        result = getDocuments(collectionID=collectionID, page=page,
                              pageSize=pageSize)
        return [_toDict(document) for document in result]

    def update(self, collectionID, documentID, data):
        """Replace the data of a L{Document}.

        @param collectionID: The L{Collection.id} the document belongs to.
        @param documentID: The L{Document.id} to update.
        @param data: The new C{dict} of attribute values.  C{None} clears
            the data.
        @raise NotFoundError: Raised if the document doesn't exist in the
            collection.
        @return: A C{dict} describing the updated document.
        """
        self.get(collectionID, documentID)
        document = updateDocument(documentID, self._userID, data)
        return _toDict(document)

    def patch(self, collectionID, documentID, data):
        """Merge new attribute values into the data of a L{Document}.

        Attributes missing from C{data} keep their values.

        @param collectionID: The L{Collection.id} the document belongs to.
        @param documentID: The L{Document.id} to update.
        @param data: A C{dict} of attribute values to set.
        @raise NotFoundError: Raised if the document doesn't exist in the
            collection.
        @return: A C{dict} describing the updated document.
        """
        self.get(collectionID, documentID)
        document = patchDocument(documentID, self._userID, data)
        return _toDict(document)

    def delete(self, collectionID, documentIDs):
        """Delete L{Document}s and the links attached to them.

        @param collectionID: The L{Collection.id} the documents belong to.
        @param documentIDs: A sequence of L{Document.id}s to delete.
        @raise NotFoundError: Raised if the collection doesn't exist.
        @return: The number of deleted documents.
        """
        documentIDs = list(documentIDs)
        collection = self._getCollection(collectionID)
        if not documentIDs:
            return 0
        count = deleteDocuments(collectionID=collectionID, ids=documentIDs)
        store = getMainStore()
        store.find(LinkInstance,
                   Or(LinkInstance.documentID1.is_in(documentIDs),
                      LinkInstance.documentID2.is_in(documentIDs))).remove()
        removeFavoriteDocuments(documentIDs=documentIDs)
        collection.documentsCount = max(0, collection.documentsCount - count)
        return count

    def duplicate(self, collectionID, documentIDs):
        """Copy L{Document}s into new documents of the same collection.

        Every copy records the ID of the document it was copied from.

        @param collectionID: The L{Collection.id} the documents belong to.
        @param documentIDs: A sequence of L{Document.id}s to copy.
        @raise NotFoundError: Raised if the collection or one of the
            documents doesn't exist.
        @return: A C{list} of C{dict}s describing the copies, in the order
            of C{documentIDs}.
        """
        documentIDs = list(documentIDs)
        collection = self._getCollection(collectionID)
        if not documentIDs:
            return []
        originals = dict(
            (document.id, document) for document in
            getDocuments(collectionID=collectionID, ids=documentIDs))
        missingIDs = [documentID for documentID in documentIDs
                      if documentID not in originals]
        if missingIDs:
            raise NotFoundError('document', missingIDs)
        result = []
        for documentID in documentIDs:
            data = dict(originals[documentID].data)
            document = createDocument(collectionID, self._userID, data,
                                      originalDocumentID=documentID)
            result.append(_toDict(document))
        collection.documentsCount += len(result)
        return result

    def addFavorite(self, collectionID, documentID):
        """Mark a L{Document} as a favorite of the user.

        @param collectionID: The L{Collection.id} the document belongs to.
        @param documentID: The L{Document.id} to mark.
        @raise NotFoundError: Raised if the document doesn't exist in the
            collection.
        """
        self.get(collectionID, documentID)
        addFavoriteDocument(self._userID, collectionID, documentID)

    def removeFavorite(self, collectionID, documentID):
        """Unmark a favorite L{Document} of the user.

        Nothing happens if the document isn't a favorite.

        @param collectionID: The L{Collection.id} the document belongs to.
        @param documentID: The L{Document.id} to unmark.
        """
        removeFavoriteDocuments(self._userID, collectionID, [documentID])

    def isFavorite(self, documentID):
        """Determine if a L{Document} is a favorite of the user."""
        result = getFavoriteDocuments(self._userID, documentIDs=[documentID])
        return not result.is_empty()

    def getFavoriteDocumentIDs(self, collectionID=None):
        """Get the IDs of the favorite L{Document}s of the user.

        @param collectionID: Optionally, a L{Collection.id} to filter the
            results with.
        @return: A C{set} of L{Document.id}s.
        """
        result = getFavoriteDocuments(self._userID, collectionID)
        return set(favorite.documentID for favorite in result)

    def _getCollection(self, collectionID):
        collection = getMainStore().get(Collection, collectionID)
        if collection is None:
            raise NotFoundError('collection', [collectionID])
        return collection


def _toDict(document):
    return {'id': document.id,
            'collectionID': document.collectionID,
            'data': document.data,
            'creatorID': document.creatorID,
            'creationTime': document.creationTime,
            'updaterID': document.updaterID,
            'updateTime': document.updateTime,
            'dataVersion': document.dataVersion,
            'originalDocumentID': document.originalDocumentID}
