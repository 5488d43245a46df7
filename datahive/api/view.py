import logging

from datahive.api.util import (
    getAuthorizationContext, permissionsFromJSON, viewToJSON)
from datahive.model.query import Query
from datahive.security.exceptions import UnauthorizedError
from datahive.security.view import SecureViewAPI
from datahive.util.database import encodeJSON


class FacadeViewMixin(object):

    def getView(self, userID, viewID):
        """Get a L{View}.

        @param userID: The L{User.id} of the user making the request.
        @param viewID: The L{View.id} to get.
        @raise NotFoundError: Raised if the view doesn't exist or the user
            can't read it.
        @return: A C{Deferred} that will fire with a C{dict} describing the
            view.
        """

        def run():
            views = SecureViewAPI(getAuthorizationContext(userID))
            return viewToJSON(views.get(viewID))

        return self._transact.run(run)

    def getViews(self, userID, projectID=None, page=None, pageSize=None):
        """Get the L{View}s a user can read.

        @param userID: The L{User.id} of the user making the request.
        @param projectID: Optionally, a L{Project.id} to filter the results
            with.
        @param page: Optionally, the zero-based page to return.
        @param pageSize: Optionally, the number of views per page.
        @return: A C{Deferred} that will fire with a C{list} of C{dict}s
            describing the views.
        """

        def run():
            views = SecureViewAPI(getAuthorizationContext(userID))
            result = views.getViews(projectID, page, pageSize)
            return [viewToJSON(view) for view in result]

        return self._transact.run(run)

    def getViewsBySuggestion(self, userID, text, projectID=None, page=None,
                             pageSize=None):
        """Get the readable L{View}s with a name containing some text.

        @param userID: The L{User.id} of the user making the request.
        @param text: The text to look for, ignoring case.
        @param projectID: Optionally, a L{Project.id} to filter the results
            with.
        @param page: Optionally, the zero-based page to return.
        @param pageSize: Optionally, the number of views per page.
        @return: A C{Deferred} that will fire with a C{list} of C{dict}s
            describing the views.
        """

        def run():
            views = SecureViewAPI(getAuthorizationContext(userID))
            result = views.getViewsBySuggestion(text, projectID, page,
                                                pageSize)
            return [viewToJSON(view) for view in result]

        return self._transact.run(run)

    def getViewsByCollection(self, userID, collectionID, projectID=None):
        """Get the readable L{View}s whose query uses a L{Collection}.

        @param userID: The L{User.id} of the user making the request.
        @param collectionID: The L{Collection.id} to look for.
        @param projectID: Optionally, a L{Project.id} to filter the results
            with.
        @return: A C{Deferred} that will fire with a C{list} of C{dict}s
            describing the views.
        """

        def run():
            views = SecureViewAPI(getAuthorizationContext(userID))
            result = views.getViewsByCollection(collectionID, projectID)
            return [viewToJSON(view) for view in result]

        return self._transact.run(run)

    def createView(self, userID, projectID, values):
        """Create a new L{View}.

        @param userID: The L{User.id} of the user making the request.
        @param projectID: The L{Project.id} to create the view in.
        @param values: A C{dict} with C{code} and C{name} keys and,
            optionally, C{query}, C{config}, C{perspective}, C{color} and
            C{icon} keys.  The query uses its JSON representation.
        @raise NotFoundError: Raised if the project doesn't exist.
        @raise UnauthorizedError: Raised if the user can't write to the
            project.
        @return: A C{Deferred} that will fire with a C{dict} describing the
            new view.
        """

        def run():
            context = getAuthorizationContext(userID)
            views = SecureViewAPI(context)
            query = Query.fromJSON(values.get('query'))
            try:
                result = views.create(
                    projectID, values['code'], values['name'], query,
                    values.get('config'), values.get('perspective'),
                    values.get('color'), values.get('icon'))
            except UnauthorizedError as error:
                logging.info(error)
                raise
            return viewToJSON(result)

        return self._transact.run(run)

    def getViewConfigAttribute(self, userID, viewID, key):
        """Get a single value from the configuration of a L{View}.

        @param userID: The L{User.id} of the user making the request.
        @param viewID: The L{View.id} to get the value from.
        @param key: The C{unicode} top-level configuration key.
        @raise NotFoundError: Raised if the view doesn't exist or the user
            can't read it.
        @return: A C{Deferred} that will fire with the JSON-compatible value,
            or C{None} if the configuration doesn't have C{key}.
        """

        def run():
            views = SecureViewAPI(getAuthorizationContext(userID))
            return encodeJSON(views.getConfigAttribute(viewID, key))

        return self._transact.run(run)

    def setViewConfigAttribute(self, userID, viewID, key, value):
        """Set a single value in the configuration of a L{View}.

        @param userID: The L{User.id} of the user making the request.
        @param viewID: The L{View.id} to change.
        @param key: The C{unicode} top-level configuration key.
        @param value: The new value.
        @raise NotFoundError: Raised if the view doesn't exist or the user
            can't read it.
        @raise UnauthorizedError: Raised if the user can't write to the view.
        @return: A C{Deferred} that will fire with a C{dict} describing the
            view.
        """

        def run():
            views = SecureViewAPI(getAuthorizationContext(userID))
            try:
                result = views.setConfigAttribute(viewID, key, value)
            except UnauthorizedError as error:
                logging.info(error)
                raise
            return viewToJSON(result)

        return self._transact.run(run)

    def deleteView(self, userID, viewID):
        """Delete a L{View}.

        @param userID: The L{User.id} of the user making the request.
        @param viewID: The L{View.id} to delete.
        @raise NotFoundError: Raised if the view doesn't exist or the user
            can't read it.
        @raise UnauthorizedError: Raised if the user doesn't manage the view.
        @return: A C{Deferred} that will fire when the view is deleted.
        """

        def run():
            views = SecureViewAPI(getAuthorizationContext(userID))
            try:
                views.delete(viewID)
            except UnauthorizedError as error:
                logging.info(error)
                raise

        return self._transact.run(run)

    def setViewPermissions(self, userID, viewID, permissions):
        """Replace the permissions of a L{View}.

        @param userID: The L{User.id} of the user making the request.
        @param viewID: The L{View.id} to change.
        @param permissions: A C{dict} with C{users} and C{groups} lists, each
            item having an C{id} and a list of C{roles} names.
        @raise NotFoundError: Raised if the view doesn't exist or the user
            can't read it.
        @raise UnauthorizedError: Raised if the user doesn't manage the view.
        @raise LookupError: Raised if a role name is unknown.
        @return: A C{Deferred} that will fire with a C{dict} describing the
            view.
        """

        def run():
            views = SecureViewAPI(getAuthorizationContext(userID))
            try:
                views.setPermissions(viewID, permissionsFromJSON(permissions))
            except UnauthorizedError as error:
                logging.info(error)
                raise
            return viewToJSON(views.get(viewID))

        return self._transact.run(run)
