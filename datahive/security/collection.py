from datahive.data.collection import Collection, getCollections
from datahive.data.exceptions import NotFoundError
from datahive.data.permission import ResourceType, Role
from datahive.model.factory import APIFactory
from datahive.security.permission import (
    checkProjectRole, checkResourceRole)
from datahive.security.resolver import buildReadFilter, buildSuggestionFilter


def checkCollectionRole(context, collectionID, role, factory=None):
    """Check a role on a L{Collection}.

    @raise NotFoundError: Raised if the collection doesn't exist or the user
        can't read it.
    @raise UnauthorizedError: Raised if the user doesn't have C{role}.
    """
    if getCollections(ids=[collectionID]).is_empty():
        raise NotFoundError('collection', [collectionID])
    checkResourceRole(context, ResourceType.COLLECTION, collectionID, role,
                      factory)


class SecureCollectionAPI(object):
    """The public API to secure L{Collection}-related functionality.

    @param context: The L{AuthorizationContext} to perform operations with.
    @param factory: Optionally, the API factory to use.  Default is
        L{APIFactory}.
    """

    def __init__(self, context, factory=None):
        self._context = context
        self._factory = factory or APIFactory()
        self._api = self._factory.collections(context.userID)

    def create(self, projectID, code, name, icon=None, color=None,
               attributes=None):
        """See L{CollectionAPI.create}.

        @raise UnauthorizedError: Raised if the user can't write to the
            project and doesn't manage its organization.
        """
        checkProjectRole(self._context, projectID, Role.WRITE, self._factory)
        return self._api.create(projectID, code, name, icon, color,
                                attributes)

    def get(self, collectionID):
        """See L{CollectionAPI.get}.

        @raise NotFoundError: Raised if the collection doesn't exist or the
            user can't read it.
        """
        result = self._api.getCollections(
            ids=[collectionID], filters=[self._readFilter()])
        if not result:
            raise NotFoundError('collection', [collectionID])
        return result[0]

    def getCollections(self, projectID=None, page=None, pageSize=None):
        """Get the L{Collection}s the user can read, in creation order.

        @param projectID: Optionally, a L{Project.id} to filter the results
            with.
        @param page: Optionally, the zero-based page to return.
        @param pageSize: Optionally, the number of collections per page.
        @return: A C{list} of C{dict}s describing the collections.
        """
        return self._api.getCollections(projectID=projectID,
                                        filters=[self._readFilter()],
                                        page=page, pageSize=pageSize)

    def getCollectionsBySuggestion(self, text, projectID=None, page=None,
                                   pageSize=None):
        """Get the readable L{Collection}s whose name contains some text.

        @param text: The C{unicode} text to look for, ignoring case.
        @return: A C{list} of C{dict}s describing the collections.
        """
        filters = [buildSuggestionFilter(Collection, self._context, text)]
        return self._api.getCollections(projectID=projectID, filters=filters,
                                        page=page, pageSize=pageSize)

    def update(self, collectionID, code=None, name=None, icon=None,
               color=None, attributes=None):
        """See L{CollectionAPI.update}.

        @raise UnauthorizedError: Raised if the user doesn't manage the
            collection.
        """
        checkCollectionRole(self._context, collectionID, Role.MANAGE,
                            self._factory)
        return self._api.update(collectionID, code, name, icon, color,
                                attributes)

    def delete(self, collectionID):
        """See L{CollectionAPI.delete}.

        @raise UnauthorizedError: Raised if the user doesn't manage the
            collection.
        """
        checkCollectionRole(self._context, collectionID, Role.MANAGE,
                            self._factory)
        self._api.delete(collectionID)

    def _readFilter(self):
        return buildReadFilter(Collection, self._context, Role.READ)
