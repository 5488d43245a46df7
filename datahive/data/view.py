from datetime import datetime

from storm.locals import Storm, DateTime, Unicode, Reference

from datahive.data.code import isValidCode
from datahive.data.exceptions import (
    DuplicateKeyError, MalformedCodeError, NotFoundError)
from datahive.data.identifier import createID
from datahive.data.store import getMainStore, paginate
from datahive.util.constant import Constant, ConstantEnum, EnumBase
from datahive.util.database import ExtendedJSON


class View(Storm):
    """A saved query together with its visualization configuration.

    @param projectID: The L{Project.id} the view belongs to.
    @param creatorID: The L{User.id} of the user that created the view.
    @param code: The C{unicode} code of the view, unique in its project.
    @param name: The C{unicode} name of the view.
    @param query: The JSON representation of the view's query.
    @param config: Optionally, an arbitrary tree of visualization settings.
    @param perspective: Optionally, the C{unicode} name of the perspective
        the view is displayed with.
    @param color: Optionally, a C{unicode} color.
    @param icon: Optionally, a C{unicode} icon name.
    """

    __storm_table__ = 'views'

    id = Unicode('id', primary=True, allow_none=False)
    projectID = Unicode('project_id', allow_none=False)
    code = Unicode('code', allow_none=False)
    name = Unicode('name', allow_none=False)
    color = Unicode('color')
    icon = Unicode('icon')
    perspective = Unicode('perspective')
    query = ExtendedJSON('query', allow_none=False)
    config = ExtendedJSON('config')
    creatorID = Unicode('creator_id', allow_none=False)
    creationTime = DateTime('creation_time', allow_none=False)
    updateTime = DateTime('update_time')

    def __init__(self, projectID, creatorID, code, name, query, config=None,
                 perspective=None, color=None, icon=None):
        self.id = createID()
        self.projectID = projectID
        self.creatorID = creatorID
        self.code = code
        self.name = name
        self.query = query
        self.config = config
        self.perspective = perspective
        self.color = color
        self.icon = icon
        self.creationTime = datetime.utcnow()


class ReferenceKind(EnumBase):
    """The kinds of resources a L{View}'s query can reference."""

    COLLECTION = Constant(1, 'COLLECTION')
    LINK_TYPE = Constant(2, 'LINK_TYPE')


class ViewReference(Storm):
    """A collection or link type referenced by the query of a L{View}.

    @param viewID: The L{View.id} of the referencing view.
    @param kind: The L{ReferenceKind} of the referenced resource.
    @param resourceID: The L{Collection.id} or L{LinkType.id} referenced.
    """

    __storm_table__ = 'view_references'
    __storm_primary__ = 'viewID', 'kind', 'resourceID'

    viewID = Unicode('view_id', allow_none=False)
    kind = ConstantEnum('kind', enum_class=ReferenceKind, allow_none=False)
    resourceID = Unicode('resource_id', allow_none=False)

    view = Reference(viewID, View.id)

    def __init__(self, viewID, kind, resourceID):
        self.viewID = viewID
        self.kind = kind
        self.resourceID = resourceID


def _checkCode(projectID, code, viewID=None):
    """Make sure C{code} can be used by a view in a project."""
    if not isValidCode(code):
        raise MalformedCodeError("'%s' is not a valid code." % code)
    store = getMainStore()
    where = [View.projectID == projectID, View.code == code]
    if viewID is not None:
        where.append(View.id != viewID)
    if store.find(View.id, *where).any():
        raise DuplicateKeyError([code])


def createView(projectID, creatorID, code, name, query, config=None,
               perspective=None, color=None, icon=None):
    """Create a L{View}.

    @param projectID: The L{Project.id} the view belongs to.
    @param creatorID: The L{User.id} of the user creating the view.
    @param code: The C{unicode} code of the view.
    @param name: The C{unicode} name of the view.
    @param query: The JSON representation of the view's query.
    @param config: Optionally, an arbitrary tree of visualization settings.
    @param perspective: Optionally, a C{unicode} perspective name.
    @param color: Optionally, a C{unicode} color.
    @param icon: Optionally, a C{unicode} icon name.
    @raise MalformedCodeError: Raised if C{code} is not valid.
    @raise DuplicateKeyError: Raised if the project already has a view with
        C{code}.
    @return: A new L{View} instance persisted in the main store.
    """
    _checkCode(projectID, code)
    store = getMainStore()
    view = View(projectID, creatorID, code, name, query, config, perspective,
                color, icon)
    return store.add(view)


def getViews(projectID=None, ids=None, codes=None, filters=None, page=None,
             pageSize=None):
    """Get L{View}s.

    @param projectID: Optionally, a L{Project.id} to filter the results with.
    @param ids: Optionally, a sequence of L{View.id}s to filter the results
        with.
    @param codes: Optionally, a sequence of L{View.code}s to filter the
        results with.
    @param filters: Optionally, a sequence of additional Storm expressions
        to filter the results with, such as read filters.
    @param page: Optionally, the zero-based page to return.
    @param pageSize: Optionally, the number of views per page.
    @return: A C{ResultSet} with matching L{View}s in creation order.
    """
    store = getMainStore()
    where = []
    if projectID is not None:
        where.append(View.projectID == projectID)
    if ids:
        where.append(View.id.is_in(ids))
    if codes:
        where.append(View.code.is_in(codes))
    if filters:
        where.extend(filters)
    result = store.find(View, *where).order_by(View.id)
    return paginate(result, page, pageSize)


def updateView(viewID, code=None, name=None, query=None, config=None,
               perspective=None, color=None, icon=None):
    """Update a L{View}.

    Only the values that aren't C{None} are changed.  L{View.updateTime} is
    always set.

    @param viewID: The L{View.id} to update.
    @raise NotFoundError: Raised if the view doesn't exist.
    @raise MalformedCodeError: Raised if C{code} is not valid.
    @raise DuplicateKeyError: Raised if another view in the project already
        uses C{code}.
    @return: The updated L{View}.
    """
    store = getMainStore()
    view = store.get(View, viewID)
    if view is None:
        raise NotFoundError('view', [viewID])
    if code is not None and code != view.code:
        _checkCode(view.projectID, code, viewID)
        view.code = code
    if name is not None:
        view.name = name
    if query is not None:
        view.query = query
    if config is not None:
        view.config = config
    if perspective is not None:
        view.perspective = perspective
    if color is not None:
        view.color = color
    if icon is not None:
        view.icon = icon
    view.updateTime = datetime.utcnow()
    return view


def deleteView(viewID):
    """Delete a L{View} and its L{ViewReference}s.

    @param viewID: The L{View.id} to delete.
    @raise NotFoundError: Raised if the view doesn't exist.
    """
    store = getMainStore()
    view = store.get(View, viewID)
    if view is None:
        raise NotFoundError('view', [viewID])
    store.find(ViewReference, ViewReference.viewID == viewID).remove()
    store.remove(view)


def getAllViewCodes(projectID):
    """Get the codes of every L{View} in a project.

    @param projectID: The L{Project.id} to get codes for.
    @return: A C{set} of C{unicode} codes.
    """
    store = getMainStore()
    return set(store.find(View.code, View.projectID == projectID))


def setViewReferences(viewID, collectionIDs, linkTypeIDs):
    """Replace the L{ViewReference}s of a L{View}.

    @param viewID: The L{View.id} to set references for.
    @param collectionIDs: A sequence of referenced L{Collection.id}s.
    @param linkTypeIDs: A sequence of referenced L{LinkType.id}s.
    @return: A C{list} with every L{ViewReference} of the view.
    """
    store = getMainStore()
    wanted = set((ReferenceKind.COLLECTION, resourceID)
                 for resourceID in collectionIDs)
    wanted.update((ReferenceKind.LINK_TYPE, resourceID)
                  for resourceID in linkTypeIDs)
    result = []
    existing = store.find(ViewReference, ViewReference.viewID == viewID)
    for reference in list(existing):
        key = (reference.kind, reference.resourceID)
        if key in wanted:
            wanted.discard(key)
            result.append(reference)
        else:
            store.remove(reference)
    for kind, resourceID in wanted:
        result.append(store.add(ViewReference(viewID, kind, resourceID)))
    return result


def getViewReferences(viewIDs):
    """Get the L{ViewReference}s of a set of L{View}s.

    @param viewIDs: A sequence of L{View.id}s.
    @return: A C{ResultSet} with the matching L{ViewReference}s.
    """
    store = getMainStore()
    return store.find(ViewReference, ViewReference.viewID.is_in(viewIDs))
