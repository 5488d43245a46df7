from datetime import datetime

from storm.locals import Storm, DateTime, Unicode, Reference, Or

from datahive.data.exceptions import NotFoundError
from datahive.data.identifier import createID
from datahive.data.store import getMainStore, paginate
from datahive.util.database import ExtendedJSON


class LinkInstance(Storm):
    """A link between two L{Document}s, typed by a L{LinkType}.

    @param linkTypeID: The L{LinkType.id} of the link.
    @param documentID1: The L{Document.id} of the first endpoint.
    @param documentID2: The L{Document.id} of the second endpoint.
    @param creatorID: The L{User.id} of the user that created the link.
    @param data: Optionally, a C{dict} mapping attribute IDs to values.
    """

    __storm_table__ = 'link_instances'

    id = Unicode('id', primary=True, allow_none=False)
    linkTypeID = Unicode('link_type_id', allow_none=False)
    documentID1 = Unicode('document_id_1', allow_none=False)
    documentID2 = Unicode('document_id_2', allow_none=False)
    data = ExtendedJSON('data', allow_none=False)
    creatorID = Unicode('creator_id', allow_none=False)
    creationTime = DateTime('creation_time', allow_none=False)

    linkType = Reference(linkTypeID, 'LinkType.id')

    def __init__(self, linkTypeID, documentID1, documentID2, creatorID,
                 data=None):
        self.id = createID()
        self.linkTypeID = linkTypeID
        self.documentID1 = documentID1
        self.documentID2 = documentID2
        self.creatorID = creatorID
        self.data = data if data is not None else {}
        self.creationTime = datetime.utcnow()

    @property
    def documentIDs(self):
        """The C{(documentID1, documentID2)} endpoints of this link."""
        return (self.documentID1, self.documentID2)


def createLinkInstance(linkTypeID, documentID1, documentID2, creatorID,
                       data=None):
    """Create a L{LinkInstance}.

    @param linkTypeID: The L{LinkType.id} of the link.
    @param documentID1: The L{Document.id} of the first endpoint.
    @param documentID2: The L{Document.id} of the second endpoint.
    @param creatorID: The L{User.id} of the user creating the link.
    @param data: Optionally, a C{dict} mapping attribute IDs to values.
    @return: A new L{LinkInstance} instance persisted in the main store.
    """
    store = getMainStore()
    linkInstance = LinkInstance(linkTypeID, documentID1, documentID2,
                                creatorID, data)
    return store.add(linkInstance)


def getLinkInstances(linkTypeID=None, ids=None, documentID=None, page=None,
                     pageSize=None):
    """Get L{LinkInstance}s.

    @param linkTypeID: Optionally, a L{LinkType.id} to filter the results
        with.
    @param ids: Optionally, a sequence of L{LinkInstance.id}s to filter the
        results with.
    @param documentID: Optionally, a L{Document.id} that must be one of the
        endpoints of the matching links.
    @param page: Optionally, the zero-based page to return.
    @param pageSize: Optionally, the number of links per page.
    @return: A C{ResultSet} with matching L{LinkInstance}s in creation order.
    """
    store = getMainStore()
    where = []
    if linkTypeID is not None:
        where.append(LinkInstance.linkTypeID == linkTypeID)
    if ids:
        where.append(LinkInstance.id.is_in(ids))
    if documentID is not None:
        where.append(Or(LinkInstance.documentID1 == documentID,
                        LinkInstance.documentID2 == documentID))
    result = store.find(LinkInstance, *where).order_by(LinkInstance.id)
    return paginate(result, page, pageSize)


def deleteLinkInstance(linkInstanceID):
    """Delete a L{LinkInstance}.

    @param linkInstanceID: The L{LinkInstance.id} to delete.
    @raise NotFoundError: Raised if the link doesn't exist.
    """
    store = getMainStore()
    linkInstance = store.get(LinkInstance, linkInstanceID)
    if linkInstance is None:
        raise NotFoundError('link instance', [linkInstanceID])
    store.remove(linkInstance)
