from datetime import datetime

from storm.locals import Storm, DateTime, Int, Unicode, Reference

from datahive.data.exceptions import NotFoundError
from datahive.data.identifier import createID
from datahive.data.store import getMainStore, paginate
from datahive.util.database import ExtendedJSON


class Document(Storm):
    """A semi-structured record stored in a L{Collection}.

    @param collectionID: The L{Collection.id} the document belongs to.
    @param creatorID: The L{User.id} of the user that created the document.
    @param data: Optionally, a C{dict} mapping attribute IDs to values.
    @param originalDocumentID: Optionally, the L{Document.id} this document
        was duplicated from.
    """

    __storm_table__ = 'documents'

    id = Unicode('id', primary=True, allow_none=False)
    collectionID = Unicode('collection_id', allow_none=False)
    data = ExtendedJSON('data', allow_none=False)
    creatorID = Unicode('creator_id', allow_none=False)
    creationTime = DateTime('creation_time', allow_none=False)
    updaterID = Unicode('updater_id')
    updateTime = DateTime('update_time')
    dataVersion = Int('data_version', allow_none=False)
    originalDocumentID = Unicode('original_document_id')

    collection = Reference(collectionID, 'Collection.id')

    def __init__(self, collectionID, creatorID, data=None,
                 originalDocumentID=None):
        self.id = createID()
        self.collectionID = collectionID
        self.creatorID = creatorID
        self.data = data if data is not None else {}
        self.creationTime = datetime.utcnow()
        self.dataVersion = 0
        self.originalDocumentID = originalDocumentID


def createDocument(collectionID, creatorID, data=None,
                   originalDocumentID=None):
    """Create a L{Document}.

    @param collectionID: The L{Collection.id} the document belongs to.
    @param creatorID: The L{User.id} of the user creating the document.
    @param data: Optionally, a C{dict} mapping attribute IDs to values.
    @param originalDocumentID: Optionally, the L{Document.id} the new
        document is a copy of.
    @return: A new L{Document} instance persisted in the main store.
    """
    store = getMainStore()
    return store.add(Document(collectionID, creatorID, data,
                              originalDocumentID))


def getDocuments(collectionID=None, ids=None, page=None, pageSize=None):
    """Get L{Document}s.

    @param collectionID: Optionally, a L{Collection.id} to filter the results
        with.
    @param ids: Optionally, a sequence of L{Document.id}s to filter the
        results with.
    @param page: Optionally, the zero-based page to return.
    @param pageSize: Optionally, the number of documents per page.
    @return: A C{ResultSet} with matching L{Document}s in creation order.
    """
    store = getMainStore()
    where = []
    if collectionID is not None:
        where.append(Document.collectionID == collectionID)
    if ids:
        where.append(Document.id.is_in(ids))
    result = store.find(Document, *where).order_by(Document.id)
    return paginate(result, page, pageSize)


def updateDocument(documentID, updaterID, data):
    """Replace the data of a L{Document}.

    The document's L{Document.dataVersion} is incremented and the updater is
    recorded.

    @param documentID: The L{Document.id} to update.
    @param updaterID: The L{User.id} of the user updating the document.
    @param data: The new C{dict} of attribute values.  C{None} clears the
        data.
    @raise NotFoundError: Raised if the document doesn't exist.
    @return: The updated L{Document}.
    """
    document = _getDocument(documentID)
    _setData(document, updaterID, data if data is not None else {})
    return document


def patchDocument(documentID, updaterID, data):
    """Merge new attribute values into the data of a L{Document}.

    Attributes missing from C{data} keep their values.  The document's
    L{Document.dataVersion} is incremented and the updater is recorded.

    @param documentID: The L{Document.id} to update.
    @param updaterID: The L{User.id} of the user updating the document.
    @param data: A C{dict} of attribute values to set, or C{None}.
    @raise NotFoundError: Raised if the document doesn't exist.
    @return: The updated L{Document}.
    """
    document = _getDocument(documentID)
    merged = dict(document.data)
    merged.update(data or {})
    _setData(document, updaterID, merged)
    return document


def _getDocument(documentID):
    document = getMainStore().get(Document, documentID)
    if document is None:
        raise NotFoundError('document', [documentID])
    return document


def _setData(document, updaterID, data):
    document.data = data
    document.updaterID = updaterID
    document.updateTime = datetime.utcnow()
    document.dataVersion += 1


def deleteDocuments(collectionID=None, ids=None):
    """Delete L{Document}s.

    @param collectionID: Optionally, a L{Collection.id} to filter the deleted
        documents with.
    @param ids: Optionally, a sequence of L{Document.id}s to filter the
        deleted documents with.
    @return: The number of deleted documents.
    """
    store = getMainStore()
    where = []
    if collectionID is not None:
        where.append(Document.collectionID == collectionID)
    if ids:
        where.append(Document.id.is_in(ids))
    result = store.find(Document, *where)
    count = result.count()
    result.remove()
    return count


class FavoriteDocument(Storm):
    """A L{Document} a user marked as a favorite.

    @param userID: The L{User.id} of the user.
    @param collectionID: The L{Collection.id} the document belongs to.
    @param documentID: The L{Document.id} of the favorite document.
    """

    __storm_table__ = 'favorite_documents'
    __storm_primary__ = 'userID', 'documentID'

    userID = Unicode('user_id', allow_none=False)
    collectionID = Unicode('collection_id', allow_none=False)
    documentID = Unicode('document_id', allow_none=False)

    document = Reference(documentID, Document.id)

    def __init__(self, userID, collectionID, documentID):
        self.userID = userID
        self.collectionID = collectionID
        self.documentID = documentID


def addFavoriteDocument(userID, collectionID, documentID):
    """Mark a L{Document} as a favorite of a user.

    Marking a favorite document again doesn't change anything.

    @param userID: The L{User.id} of the user.
    @param collectionID: The L{Collection.id} the document belongs to.
    @param documentID: The L{Document.id} of the document.
    @return: The L{FavoriteDocument}.
    """
    store = getMainStore()
    favorite = store.get(FavoriteDocument, (userID, documentID))
    if favorite is None:
        favorite = store.add(
            FavoriteDocument(userID, collectionID, documentID))
    return favorite


def getFavoriteDocuments(userID=None, collectionID=None, documentIDs=None):
    """Get L{FavoriteDocument}s.

    @param userID: Optionally, a L{User.id} to filter the results with.
    @param collectionID: Optionally, a L{Collection.id} to filter the results
        with.
    @param documentIDs: Optionally, a sequence of L{Document.id}s to filter
        the results with.
    @return: A C{ResultSet} with matching L{FavoriteDocument}s.
    """
    store = getMainStore()
    where = _getFavoriteFilters(userID, collectionID, documentIDs)
    return store.find(FavoriteDocument, *where).order_by(
        FavoriteDocument.documentID)


def removeFavoriteDocuments(userID=None, collectionID=None,
                            documentIDs=None):
    """Remove L{FavoriteDocument}s.

    @param userID: Optionally, a L{User.id} to filter the removed favorites
        with.
    @param collectionID: Optionally, a L{Collection.id} to filter the
        removed favorites with.
    @param documentIDs: Optionally, a sequence of L{Document.id}s to filter
        the removed favorites with.
    """
    store = getMainStore()
    where = _getFavoriteFilters(userID, collectionID, documentIDs)
    store.find(FavoriteDocument, *where).remove()


def _getFavoriteFilters(userID, collectionID, documentIDs):
    where = []
    if userID is not None:
        where.append(FavoriteDocument.userID == userID)
    if collectionID is not None:
        where.append(FavoriteDocument.collectionID == collectionID)
    if documentIDs:
        where.append(FavoriteDocument.documentID.is_in(documentIDs))
    return where
