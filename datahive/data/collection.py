from datetime import datetime

from storm.locals import Storm, DateTime, Int, Unicode, Reference

from datahive.data.code import isValidCode
from datahive.data.exceptions import (
    DuplicateKeyError, MalformedCodeError, NotFoundError)
from datahive.data.identifier import createID
from datahive.data.store import getMainStore, paginate
from datahive.util.database import ExtendedJSON


class Collection(Storm):
    """A collection of L{Document}s sharing a set of attributes.

    @param projectID: The L{Project.id} the collection belongs to.
    @param code: The C{unicode} code of the collection, unique in its
        project.
    @param name: The C{unicode} name of the collection.
    @param icon: Optionally, a C{unicode} icon name.
    @param color: Optionally, a C{unicode} color.
    @param attributes: Optionally, a C{list} of attribute definitions, each a
        C{dict} with C{id}, C{name} and C{constraint} keys.
    """

    __storm_table__ = 'collections'

    id = Unicode('id', primary=True, allow_none=False)
    projectID = Unicode('project_id', allow_none=False)
    code = Unicode('code', allow_none=False)
    name = Unicode('name', allow_none=False)
    icon = Unicode('icon')
    color = Unicode('color')
    attributes = ExtendedJSON('attributes', allow_none=False)
    documentsCount = Int('documents_count', allow_none=False)
    creationTime = DateTime('creation_time', allow_none=False)

    project = Reference(projectID, 'Project.id')

    def __init__(self, projectID, code, name, icon=None, color=None,
                 attributes=None):
        self.id = createID()
        self.projectID = projectID
        self.code = code
        self.name = name
        self.icon = icon
        self.color = color
        self.attributes = attributes if attributes is not None else []
        self.documentsCount = 0
        self.creationTime = datetime.utcnow()


def _checkCode(projectID, code, collectionID=None):
    """Make sure C{code} can be used by a collection in a project."""
    if not isValidCode(code):
        raise MalformedCodeError("'%s' is not a valid code." % code)
    store = getMainStore()
    where = [Collection.projectID == projectID, Collection.code == code]
    if collectionID is not None:
        where.append(Collection.id != collectionID)
    if store.find(Collection.id, *where).any():
        raise DuplicateKeyError([code])


def createCollection(projectID, code, name, icon=None, color=None,
                     attributes=None):
    """Create a L{Collection}.

    @param projectID: The L{Project.id} the collection belongs to.
    @param code: The C{unicode} code of the collection.
    @param name: The C{unicode} name of the collection.
    @param icon: Optionally, a C{unicode} icon name.
    @param color: Optionally, a C{unicode} color.
    @param attributes: Optionally, a C{list} of attribute definitions.
    @raise MalformedCodeError: Raised if C{code} is not valid.
    @raise DuplicateKeyError: Raised if the project already has a collection
        with C{code}.
    @return: A new L{Collection} instance persisted in the main store.
    """
    _checkCode(projectID, code)
    store = getMainStore()
    collection = Collection(projectID, code, name, icon, color, attributes)
    return store.add(collection)


def getCollections(projectID=None, ids=None, codes=None, filters=None,
                   page=None, pageSize=None):
    """Get L{Collection}s.

    @param projectID: Optionally, a L{Project.id} to filter the results with.
    @param ids: Optionally, a sequence of L{Collection.id}s to filter the
        results with.
    @param codes: Optionally, a sequence of L{Collection.code}s to filter the
        results with.
    @param filters: Optionally, a sequence of additional Storm expressions
        to filter the results with.
    @param page: Optionally, the zero-based page to return.
    @param pageSize: Optionally, the number of collections per page.
    @return: A C{ResultSet} with matching L{Collection}s in creation order.
    """
    store = getMainStore()
    where = []
    if projectID is not None:
        where.append(Collection.projectID == projectID)
    if ids:
        where.append(Collection.id.is_in(ids))
    if codes:
        where.append(Collection.code.is_in(codes))
    if filters:
        where.extend(filters)
    result = store.find(Collection, *where).order_by(Collection.id)
    return paginate(result, page, pageSize)


def updateCollection(collectionID, code=None, name=None, icon=None,
                     color=None, attributes=None):
    """Update a L{Collection}.

    Only the values that aren't C{None} are changed.

    @param collectionID: The L{Collection.id} to update.
    @raise NotFoundError: Raised if the collection doesn't exist.
    @raise MalformedCodeError: Raised if C{code} is not valid.
    @raise DuplicateKeyError: Raised if another collection in the project
        already uses C{code}.
    @return: The updated L{Collection}.
    """
    store = getMainStore()
    collection = store.get(Collection, collectionID)
    if collection is None:
        raise NotFoundError('collection', [collectionID])
    if code is not None and code != collection.code:
        _checkCode(collection.projectID, code, collectionID)
        collection.code = code
    if name is not None:
        collection.name = name
    if icon is not None:
        collection.icon = icon
    if color is not None:
        collection.color = color
    if attributes is not None:
        collection.attributes = attributes
    return collection


def deleteCollection(collectionID):
    """Delete a L{Collection}.

    @param collectionID: The L{Collection.id} to delete.
    @raise NotFoundError: Raised if the collection doesn't exist.
    """
    store = getMainStore()
    collection = store.get(Collection, collectionID)
    if collection is None:
        raise NotFoundError('collection', [collectionID])
    store.remove(collection)


def getAllCollectionCodes(projectID):
    """Get the codes of every L{Collection} in a project.

    @param projectID: The L{Project.id} to get codes for.
    @return: A C{set} of C{unicode} codes.
    """
    store = getMainStore()
    return set(store.find(Collection.code,
                          Collection.projectID == projectID))
