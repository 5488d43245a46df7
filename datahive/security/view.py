from datahive.data.exceptions import NotFoundError
from datahive.data.permission import ResourceType, Role
from datahive.data.view import View, getViews
from datahive.model.factory import APIFactory
from datahive.security.permission import (
    checkProjectRole, checkResourceRole)
from datahive.security.resolver import (
    buildCollectionReferenceFilter, buildReadFilter, buildSuggestionFilter)


class SecureViewAPI(object):
    """The public API to secure L{View}-related functionality.

    Views the user can't read are reported as unknown, never as forbidden.

    @param context: The L{AuthorizationContext} to perform operations with.
    @param factory: Optionally, the API factory to use.  Default is
        L{APIFactory}.
    """

    def __init__(self, context, factory=None):
        self._context = context
        self._factory = factory or APIFactory()
        self._api = self._factory.views(context.userID)

    def create(self, projectID, code, name, query=None, config=None,
               perspective=None, color=None, icon=None):
        """See L{ViewAPI.create}.

        @raise UnauthorizedError: Raised if the user can't write to the
            project and doesn't manage its organization.
        """
        checkProjectRole(self._context, projectID, Role.WRITE, self._factory)
        return self._api.create(projectID, code, name, query, config,
                                perspective, color, icon)

    def get(self, viewID):
        """See L{ViewAPI.get}.

        @raise NotFoundError: Raised if the view doesn't exist or the user
            can't read it.
        """
        result = self._api.getViews(ids=[viewID],
                                    filters=[self._readFilter()])
        if not result:
            raise NotFoundError('view', [viewID])
        return result[0]

    def getViews(self, projectID=None, page=None, pageSize=None):
        """Get the L{View}s the user can read, in creation order.

        @param projectID: Optionally, a L{Project.id} to filter the results
            with.
        @param page: Optionally, the zero-based page to return.
        @param pageSize: Optionally, the number of views per page.
        @return: A C{list} of C{dict}s describing the views.
        """
        return self._api.getViews(projectID=projectID,
                                  filters=[self._readFilter()], page=page,
                                  pageSize=pageSize)

    def getViewsBySuggestion(self, text, projectID=None, page=None,
                             pageSize=None):
        """Get the readable L{View}s whose name contains some text.

        @param text: The C{unicode} text to look for, ignoring case.
        @param projectID: Optionally, a L{Project.id} to filter the results
            with.
        @param page: Optionally, the zero-based page to return.
        @param pageSize: Optionally, the number of views per page.
        @return: A C{list} of C{dict}s describing the views.
        """
        filters = [buildSuggestionFilter(View, self._context, text)]
        return self._api.getViews(projectID=projectID, filters=filters,
                                  page=page, pageSize=pageSize)

    def getViewsByCollection(self, collectionID, projectID=None):
        """Get the readable L{View}s whose query uses a collection.

        @param collectionID: The L{Collection.id} used by the views, directly
            or through a link type.
        @param projectID: Optionally, a L{Project.id} to filter the results
            with.
        @return: A C{list} of C{dict}s describing the views.
        """
        filters = [buildCollectionReferenceFilter(collectionID),
                   self._readFilter()]
        return self._api.getViews(projectID=projectID, filters=filters)

    def update(self, viewID, code=None, name=None, query=None, config=None,
               perspective=None, color=None, icon=None):
        """See L{ViewAPI.update}.

        @raise NotFoundError: Raised if the view doesn't exist or the user
            can't read it.
        @raise UnauthorizedError: Raised if the user doesn't manage the view.
        """
        self._checkRole(viewID, Role.MANAGE)
        return self._api.update(viewID, code, name, query, config,
                                perspective, color, icon)

    def getConfigAttribute(self, viewID, key):
        """See L{ViewAPI.getConfigAttribute}.

        @raise NotFoundError: Raised if the view doesn't exist or the user
            can't read it.
        """
        self._checkRole(viewID, Role.READ)
        return self._api.getConfigAttribute(viewID, key)

    def setConfigAttribute(self, viewID, key, value):
        """See L{ViewAPI.setConfigAttribute}.

        @raise NotFoundError: Raised if the view doesn't exist or the user
            can't read it.
        @raise UnauthorizedError: Raised if the user can't write to the view.
        """
        self._checkRole(viewID, Role.WRITE)
        return self._api.setConfigAttribute(viewID, key, value)

    def delete(self, viewID):
        """See L{ViewAPI.delete}.

        @raise NotFoundError: Raised if the view doesn't exist or the user
            can't read it.
        @raise UnauthorizedError: Raised if the user doesn't manage the view.
        """
        self._checkRole(viewID, Role.MANAGE)
        self._api.delete(viewID)

    def copy(self, viewID, code, name=None):
        """See L{ViewAPI.copy}.

        @raise NotFoundError: Raised if the view doesn't exist or the user
            can't read it.
        @raise UnauthorizedError: Raised if the user isn't allowed to clone
            the view or can't write to its project.
        """
        self._checkRole(viewID, Role.CLONE)
        view = self._api.get(viewID)
        checkProjectRole(self._context, view['projectID'], Role.WRITE,
                         self._factory)
        return self._api.copy(viewID, code, name)

    def setPermissions(self, viewID, permissions):
        """Replace the L{Permissions} of a L{View}.

        @param viewID: The L{View.id} to change.
        @param permissions: The new L{Permissions}.
        @raise NotFoundError: Raised if the view doesn't exist or the user
            can't read it.
        @raise UnauthorizedError: Raised if the user doesn't manage the view.
        """
        self._checkRole(viewID, Role.MANAGE)
        self._factory.permissions().set(ResourceType.VIEW, viewID,
                                        permissions)

    def _readFilter(self):
        return buildReadFilter(View, self._context, Role.READ)

    def _checkRole(self, viewID, role):
        if getViews(ids=[viewID]).is_empty():
            raise NotFoundError('view', [viewID])
        checkResourceRole(self._context, ResourceType.VIEW, viewID, role,
                          self._factory)
