from datetime import datetime

from storm.locals import Storm, DateTime, Unicode, Reference, Or

from datahive.data.exceptions import NotFoundError
from datahive.data.identifier import createID
from datahive.data.store import getMainStore, paginate
from datahive.util.database import ExtendedJSON


class LinkType(Storm):
    """A kind of link between the L{Document}s of two L{Collection}s.

    @param projectID: The L{Project.id} the link type belongs to.
    @param name: The C{unicode} name of the link type.
    @param collectionID1: The L{Collection.id} of the first endpoint.
    @param collectionID2: The L{Collection.id} of the second endpoint.
    @param attributes: Optionally, a C{list} of attribute definitions.
    """

    __storm_table__ = 'link_types'

    id = Unicode('id', primary=True, allow_none=False)
    projectID = Unicode('project_id', allow_none=False)
    name = Unicode('name', allow_none=False)
    collectionID1 = Unicode('collection_id_1', allow_none=False)
    collectionID2 = Unicode('collection_id_2', allow_none=False)
    attributes = ExtendedJSON('attributes', allow_none=False)
    creationTime = DateTime('creation_time', allow_none=False)

    collection1 = Reference(collectionID1, 'Collection.id')
    collection2 = Reference(collectionID2, 'Collection.id')

    def __init__(self, projectID, name, collectionID1, collectionID2,
                 attributes=None):
        self.id = createID()
        self.projectID = projectID
        self.name = name
        self.collectionID1 = collectionID1
        self.collectionID2 = collectionID2
        self.attributes = attributes if attributes is not None else []
        self.creationTime = datetime.utcnow()

    @property
    def collectionIDs(self):
        """The C{(collectionID1, collectionID2)} endpoints of this link type.
        """
        return (self.collectionID1, self.collectionID2)


def createLinkType(projectID, name, collectionID1, collectionID2,
                   attributes=None):
    """Create a L{LinkType}.

    @param projectID: The L{Project.id} the link type belongs to.
    @param name: The C{unicode} name of the link type.
    @param collectionID1: The L{Collection.id} of the first endpoint.
    @param collectionID2: The L{Collection.id} of the second endpoint.
    @param attributes: Optionally, a C{list} of attribute definitions.
    @return: A new L{LinkType} instance persisted in the main store.
    """
    store = getMainStore()
    linkType = LinkType(projectID, name, collectionID1, collectionID2,
                        attributes)
    return store.add(linkType)


def getLinkTypes(projectID=None, ids=None, collectionID=None, filters=None,
                 page=None, pageSize=None):
    """Get L{LinkType}s.

    @param projectID: Optionally, a L{Project.id} to filter the results with.
    @param ids: Optionally, a sequence of L{LinkType.id}s to filter the
        results with.
    @param collectionID: Optionally, a L{Collection.id} that must be one of
        the endpoints of the matching link types.
    @param filters: Optionally, a sequence of additional Storm expressions
        to filter the results with.
    @param page: Optionally, the zero-based page to return.
    @param pageSize: Optionally, the number of link types per page.
    @return: A C{ResultSet} with matching L{LinkType}s in creation order.
    """
    store = getMainStore()
    where = []
    if projectID is not None:
        where.append(LinkType.projectID == projectID)
    if ids:
        where.append(LinkType.id.is_in(ids))
    if collectionID is not None:
        where.append(Or(LinkType.collectionID1 == collectionID,
                        LinkType.collectionID2 == collectionID))
    if filters:
        where.extend(filters)
    result = store.find(LinkType, *where).order_by(LinkType.id)
    return paginate(result, page, pageSize)


def deleteLinkType(linkTypeID):
    """Delete a L{LinkType}.

    @param linkTypeID: The L{LinkType.id} to delete.
    @raise NotFoundError: Raised if the link type doesn't exist.
    """
    store = getMainStore()
    linkType = store.get(LinkType, linkTypeID)
    if linkType is None:
        raise NotFoundError('link type', [linkTypeID])
    store.remove(linkType)
