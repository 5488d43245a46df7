from datahive.data.collection import (
    createCollection, deleteCollection, getAllCollectionCodes,
    getCollections, updateCollection)
from datahive.data.document import deleteDocuments, removeFavoriteDocuments
from datahive.data.exceptions import NotFoundError
from datahive.data.permission import ResourceType
from datahive.data.project import getProjects
from datahive.model.factory import APIFactory


class CollectionAPI(object):
    """The public API to L{Collection}s in the model layer.

    @param userID: The L{User.id} to perform operations on behalf of.
    @param factory: Optionally, the API factory to use when creating internal
        APIs.  Default is L{APIFactory}.
    """

    def __init__(self, userID, factory=None):
        self._userID = userID
        self._factory = factory or APIFactory()

    def create(self, projectID, code, name, icon=None, color=None,
               attributes=None):
        """Create a new L{Collection} in a project.

        The user gets every collection role on the new collection.

        @param projectID: The L{Project.id} of the project.
        @param code: The C{unicode} code of the collection.
        @param name: The C{unicode} name of the collection.
        @param icon: Optionally, a C{unicode} icon name.
        @param color: Optionally, a C{unicode} color.
        @param attributes: Optionally, a C{list} of attribute definitions.
        @raise NotFoundError: Raised if the project doesn't exist.
        @raise MalformedCodeError: Raised if C{code} is not valid.
        @raise DuplicateKeyError: Raised if the project already has a
            collection with C{code}.
        @return: A C{dict} describing the new collection.
        """
        if getProjects(ids=[projectID]).is_empty():
            raise NotFoundError('project', [projectID])
        collection = createCollection(projectID, code, name, icon, color,
                                      attributes)
        permissions = self._factory.permissions().grantCreator(
            ResourceType.COLLECTION, collection.id, self._userID)
        return _toDict(collection, permissions)

    def get(self, collectionID):
        """Get a L{Collection}.

        @param collectionID: The L{Collection.id} to get.
        @raise NotFoundError: Raised if the collection doesn't exist.
        @return: A C{dict} describing the collection.
        """
        result = self.getCollections(ids=[collectionID])
        if not result:
            raise NotFoundError('collection', [collectionID])
        return result[0]

    def getCollections(self, projectID=None, ids=None, filters=None,
                       page=None, pageSize=None):
        """Get L{Collection}s.

        @param projectID: Optionally, a L{Project.id} to filter the results
            with.
        @param ids: Optionally, a sequence of L{Collection.id}s to filter the
            results with.
        @param filters: Optionally, a sequence of additional Storm
            expressions, such as read filters.
        @param page: Optionally, the zero-based page to return.
        @param pageSize: Optionally, the number of collections per page.
        @return: A C{list} of C{dict}s describing the collections, in
            creation order.
        """
        collections = list(getCollections(projectID=projectID, ids=ids,
                                          filters=filters, page=page,
                                          pageSize=pageSize))
        permissions = self._factory.permissions().get(
            ResourceType.COLLECTION,
            [collection.id for collection in collections])
        return [_toDict(collection, permissions[collection.id])
                for collection in collections]

    def update(self, collectionID, code=None, name=None, icon=None,
               color=None, attributes=None):
        """Update a L{Collection}.

        Only the values that aren't C{None} are changed.

        @param collectionID: The L{Collection.id} to update.
        @raise NotFoundError: Raised if the collection doesn't exist.
        @raise MalformedCodeError: Raised if C{code} is not valid.
        @raise DuplicateKeyError: Raised if another collection in the project
            already uses C{code}.
        @return: A C{dict} describing the updated collection.
        """
        updateCollection(collectionID, code, name, icon, color, attributes)
        return self.get(collectionID)

    def delete(self, collectionID):
        """Delete a L{Collection} with its documents and permissions.

        Link types connecting the collection are deleted too.

        @param collectionID: The L{Collection.id} to delete.
        @raise NotFoundError: Raised if the collection doesn't exist.
        """
        deleteCollection(collectionID)
        deleteDocuments(collectionID=collectionID)
        removeFavoriteDocuments(collectionID=collectionID)
        linkTypes = self._factory.linkTypes(self._userID)
        for linkType in linkTypes.getLinkTypes(collectionID=collectionID):
            linkTypes.delete(linkType['id'])
        self._factory.permissions().delete(ResourceType.COLLECTION,
                                           [collectionID])

    def getAllCodes(self, projectID):
        """Get the codes of every L{Collection} in a project.

        @param projectID: The L{Project.id} of the project.
        @return: A C{set} of C{unicode} codes.
        """
        return getAllCollectionCodes(projectID)


def _toDict(collection, permissions):
    return {'id': collection.id,
            'projectID': collection.projectID,
            'code': collection.code,
            'name': collection.name,
            'icon': collection.icon,
            'color': collection.color,
            'attributes': collection.attributes,
            'documentsCount': collection.documentsCount,
            'creationTime': collection.creationTime,
            'permissions': permissions}
