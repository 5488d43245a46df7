from datahive.data.collection import Collection, getCollections
from datahive.data.exceptions import NotFoundError
from datahive.data.link import LinkInstance
from datahive.data.linktype import createLinkType, deleteLinkType, getLinkTypes
from datahive.data.permission import ResourceType
from datahive.data.store import getMainStore
from datahive.model.factory import APIFactory


class LinkTypeAPI(object):
    """The public API to L{LinkType}s in the model layer.

    @param userID: The L{User.id} to perform operations on behalf of.
    @param factory: Optionally, the API factory to use when creating internal
        APIs.  Default is L{APIFactory}.
    """

    def __init__(self, userID, factory=None):
        self._userID = userID
        self._factory = factory or APIFactory()

    def create(self, projectID, name, collectionIDs, attributes=None):
        """Create a new L{LinkType} between two collections.

        The user gets every link type role on the new link type.

        @param projectID: The L{Project.id} of the project.
        @param name: The C{unicode} name of the link type.
        @param collectionIDs: A C{(collectionID1, collectionID2)} 2-tuple.
        @param attributes: Optionally, a C{list} of attribute definitions.
        @raise ValueError: Raised if C{collectionIDs} doesn't have exactly two
            items.
        @raise NotFoundError: Raised if one of the collections doesn't exist.
        @return: A C{dict} describing the new link type.
        """
        collectionIDs = list(collectionIDs)
        if len(collectionIDs) != 2:
            raise ValueError('A link type connects exactly two collections.')
        result = getCollections(ids=collectionIDs)
        existingIDs = set(result.values(Collection.id))
        missingIDs = [collectionID for collectionID in collectionIDs
                      if collectionID not in existingIDs]
        if missingIDs:
            raise NotFoundError('collection', missingIDs)
        linkType = createLinkType(projectID, name, collectionIDs[0],
                                  collectionIDs[1], attributes)
        permissions = self._factory.permissions().grantCreator(
            ResourceType.LINK_TYPE, linkType.id, self._userID)
        return _toDict(linkType, permissions)

    def get(self, linkTypeID):
        """Get a L{LinkType}.

        @param linkTypeID: The L{LinkType.id} to get.
        @raise NotFoundError: Raised if the link type doesn't exist.
        @return: A C{dict} describing the link type.
        """
        result = self.getLinkTypes(ids=[linkTypeID])
        if not result:
            raise NotFoundError('link type', [linkTypeID])
        return result[0]

    def getLinkTypes(self, projectID=None, ids=None, collectionID=None,
                     filters=None):
        """Get L{LinkType}s.

        @param projectID: Optionally, a L{Project.id} to filter the results
            with.
        @param ids: Optionally, a sequence of L{LinkType.id}s to filter the
            results with.
        @param collectionID: Optionally, a L{Collection.id} one of the
            endpoints must match.
        @param filters: Optionally, a sequence of additional Storm
            expressions, such as read filters.
        @return: A C{list} of C{dict}s describing the link types, in creation
            order.
        """
        linkTypes = list(getLinkTypes(projectID=projectID, ids=ids,
                                      collectionID=collectionID,
                                      filters=filters))
        permissions = self._factory.permissions().get(
            ResourceType.LINK_TYPE, [linkType.id for linkType in linkTypes])
        return [_toDict(linkType, permissions[linkType.id])
                for linkType in linkTypes]

    def delete(self, linkTypeID):
        """Delete a L{LinkType} with its link instances and permissions.

        @param linkTypeID: The L{LinkType.id} to delete.
        @raise NotFoundError: Raised if the link type doesn't exist.
        """
        deleteLinkType(linkTypeID)
        store = getMainStore()
        store.find(LinkInstance,
                   LinkInstance.linkTypeID == linkTypeID).remove()
        self._factory.permissions().delete(ResourceType.LINK_TYPE,
                                           [linkTypeID])


def _toDict(linkType, permissions):
    return {'id': linkType.id,
            'projectID': linkType.projectID,
            'name': linkType.name,
            'collectionIDs': linkType.collectionIDs,
            'attributes': linkType.attributes,
            'creationTime': linkType.creationTime,
            'permissions': permissions}
