from datahive.data.exceptions import NotFoundError
from datahive.data.permission import ResourceType
from datahive.data.project import getProjects
from datahive.data.view import (
    createView, deleteView, getAllViewCodes, getViews, setViewReferences,
    updateView)
from datahive.model.factory import APIFactory
from datahive.model.query import Query


class ViewAPI(object):
    """The public API to L{View}s in the model layer.

    Views are returned as C{dict}s with their query loaded as a L{Query}.
    The collections and link types a view's query uses are recorded as
    L{ViewReference}s every time the query is stored.

    @param userID: The L{User.id} to perform operations on behalf of.
    @param factory: Optionally, the API factory to use when creating internal
        APIs.  Default is L{APIFactory}.
    """

    def __init__(self, userID, factory=None):
        self._userID = userID
        self._factory = factory or APIFactory()

    def create(self, projectID, code, name, query=None, config=None,
               perspective=None, color=None, icon=None):
        """Create a new L{View}.

        The user gets every view role on the new view.

        @param projectID: The L{Project.id} of the project.
        @param code: The C{unicode} code of the view.
        @param name: The C{unicode} name of the view.
        @param query: Optionally, the L{Query} of the view.  Default is an
            empty query.
        @param config: Optionally, an arbitrary tree of visualization
            settings.
        @param perspective: Optionally, a C{unicode} perspective name.
        @param color: Optionally, a C{unicode} color.
        @param icon: Optionally, a C{unicode} icon name.
        @raise NotFoundError: Raised if the project doesn't exist.
        @raise MalformedCodeError: Raised if C{code} is not valid.
        @raise DuplicateKeyError: Raised if the project already has a view
            with C{code}.
        @return: A C{dict} describing the new view.
        """
        if getProjects(ids=[projectID]).is_empty():
            raise NotFoundError('project', [projectID])
        query = query or Query()
        view = createView(projectID, self._userID, code, name,
                          query.toJSON(), config, perspective, color, icon)
        setViewReferences(view.id, query.getCollectionIDs(),
                          query.getLinkTypeIDs())
        permissions = self._factory.permissions().grantCreator(
            ResourceType.VIEW, view.id, self._userID)
        return _toDict(view, permissions)

    def get(self, viewID):
        """Get a L{View}.

        @param viewID: The L{View.id} to get.
        @raise NotFoundError: Raised if the view doesn't exist.
        @return: A C{dict} describing the view.
        """
        result = self.getViews(ids=[viewID])
        if not result:
            raise NotFoundError('view', [viewID])
        return result[0]

    def getViews(self, projectID=None, ids=None, filters=None, page=None,
                 pageSize=None):
        """Get L{View}s in creation order.

        @param projectID: Optionally, a L{Project.id} to filter the results
            with.
        @param ids: Optionally, a sequence of L{View.id}s to filter the
            results with.
        @param filters: Optionally, a sequence of additional Storm
            expressions, such as read, suggestion or reference filters.
        @param page: Optionally, the zero-based page to return.
        @param pageSize: Optionally, the number of views per page.
        @return: A C{list} of C{dict}s describing the views.
        """
        views = list(getViews(projectID=projectID, ids=ids, filters=filters,
                              page=page, pageSize=pageSize))
        permissions = self._factory.permissions().get(
            ResourceType.VIEW, [view.id for view in views])
        return [_toDict(view, permissions[view.id]) for view in views]

    def update(self, viewID, code=None, name=None, query=None, config=None,
               perspective=None, color=None, icon=None):
        """Update a L{View}.

        Only the values that aren't C{None} are changed.

        @param viewID: The L{View.id} to update.
        @raise NotFoundError: Raised if the view doesn't exist.
        @raise MalformedCodeError: Raised if C{code} is not valid.
        @raise DuplicateKeyError: Raised if another view in the project
            already uses C{code}.
        @return: A C{dict} describing the updated view.
        """
        jsonQuery = query.toJSON() if query is not None else None
        updateView(viewID, code, name, jsonQuery, config, perspective, color,
                   icon)
        if query is not None:
            setViewReferences(viewID, query.getCollectionIDs(),
                              query.getLinkTypeIDs())
        return self.get(viewID)

    def delete(self, viewID):
        """Delete a L{View} with its references and permissions.

        @param viewID: The L{View.id} to delete.
        @raise NotFoundError: Raised if the view doesn't exist.
        """
        deleteView(viewID)
        self._factory.permissions().delete(ResourceType.VIEW, [viewID])

    def copy(self, viewID, code, name=None):
        """Create a new L{View} with the query and settings of another one.

        The copy belongs to the same project and only its creator gets
        permissions on it.

        @param viewID: The L{View.id} to copy.
        @param code: The C{unicode} code of the copy.
        @param name: Optionally, the C{unicode} name of the copy.  Default is
            the name of the original view.
        @raise NotFoundError: Raised if the view doesn't exist.
        @raise DuplicateKeyError: Raised if the project already has a view
            with C{code}.
        @return: A C{dict} describing the copy.
        """
        original = self.get(viewID)
        return self.create(original['projectID'], code,
                           name or original['name'], original['query'],
                           original['config'], original['perspective'],
                           original['color'], original['icon'])

    def getConfigAttribute(self, viewID, key):
        """Get a single value from the configuration of a L{View}.

        @param viewID: The L{View.id} to get the value from.
        @param key: The C{unicode} top-level configuration key.
        @raise NotFoundError: Raised if the view doesn't exist.
        @return: The value, or C{None} if the configuration doesn't have
            C{key}.
        """
        config = self.get(viewID)['config'] or {}
        return config.get(key)

    def setConfigAttribute(self, viewID, key, value):
        """Set a single value in the configuration of a L{View}.

        The other configuration values are kept.

        @param viewID: The L{View.id} to change.
        @param key: The C{unicode} top-level configuration key.
        @param value: The new value.
        @raise NotFoundError: Raised if the view doesn't exist.
        @return: A C{dict} describing the updated view.
        """
        config = dict(self.get(viewID)['config'] or {})
        config[key] = value
        return self.update(viewID, config=config)

    def getAllCodes(self, projectID):
        """Get the codes of every L{View} in a project.

        @param projectID: The L{Project.id} of the project.
        @return: A C{set} of C{unicode} codes.
        """
        return getAllViewCodes(projectID)


def _toDict(view, permissions):
    return {'id': view.id,
            'projectID': view.projectID,
            'code': view.code,
            'name': view.name,
            'query': Query.fromJSON(view.query),
            'config': view.config,
            'perspective': view.perspective,
            'color': view.color,
            'icon': view.icon,
            'creatorID': view.creatorID,
            'creationTime': view.creationTime,
            'updateTime': view.updateTime,
            'permissions': permissions}
