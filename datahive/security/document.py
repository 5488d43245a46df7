from datahive.data.permission import Role
from datahive.model.factory import APIFactory
from datahive.security.collection import checkCollectionRole


class SecureDocumentAPI(object):
    """The public API to secure L{Document}-related functionality.

    Documents are governed by the permissions of their collection: reading
    requires L{Role.READ} and changes require L{Role.WRITE} on it.  Marking
    favorites only requires L{Role.READ}.

    @param context: The L{AuthorizationContext} to perform operations with.
    @param factory: Optionally, the API factory to use.  Default is
        L{APIFactory}.
    """

    def __init__(self, context, factory=None):
        self._context = context
        self._factory = factory or APIFactory()
        self._api = self._factory.documents(context.userID)

    def create(self, collectionID, data=None):
        """See L{DocumentAPI.create}."""
        self._checkRole(collectionID, Role.WRITE)
        return self._api.create(collectionID, data)

    def get(self, collectionID, documentID):
        """See L{DocumentAPI.get}."""
        self._checkRole(collectionID, Role.READ)
        return self._api.get(collectionID, documentID)

    def getDocuments(self, collectionID, page=None, pageSize=None):
        """See L{DocumentAPI.getDocuments}."""
        self._checkRole(collectionID, Role.READ)
        return self._api.getDocuments(collectionID, page, pageSize)

    def update(self, collectionID, documentID, data):
        """See L{DocumentAPI.update}."""
        self._checkRole(collectionID, Role.WRITE)
        return self._api.update(collectionID, documentID, data)

    def patch(self, collectionID, documentID, data):
        """See L{DocumentAPI.patch}."""
        self._checkRole(collectionID, Role.WRITE)
        return self._api.patch(collectionID, documentID, data)

    def delete(self, collectionID, documentIDs):
        """See L{DocumentAPI.delete}."""
        self._checkRole(collectionID, Role.WRITE)
        return self._api.delete(collectionID, documentIDs)

    def duplicate(self, collectionID, documentIDs):
        """See L{DocumentAPI.duplicate}."""
        self._checkRole(collectionID, Role.WRITE)
        return self._api.duplicate(collectionID, documentIDs)

    def addFavorite(self, collectionID, documentID):
        """See L{DocumentAPI.addFavorite}."""
        self._checkRole(collectionID, Role.READ)
        self._api.addFavorite(collectionID, documentID)

    def removeFavorite(self, collectionID, documentID):
        """See L{DocumentAPI.removeFavorite}."""
        self._checkRole(collectionID, Role.READ)
        self._api.removeFavorite(collectionID, documentID)

    def isFavorite(self, documentID):
        """See L{DocumentAPI.isFavorite}.

        Favorites belong to the user, so no role is needed.
        """
        return self._api.isFavorite(documentID)

    def getFavoriteDocumentIDs(self, collectionID=None):
        """See L{DocumentAPI.getFavoriteDocumentIDs}.

        A role is only needed to look at the favorites of a collection.
        """
        if collectionID is not None:
            self._checkRole(collectionID, Role.READ)
        return self._api.getFavoriteDocumentIDs(collectionID)

    def _checkRole(self, collectionID, role):
        checkCollectionRole(self._context, collectionID, role, self._factory)
