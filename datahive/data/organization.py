from datetime import datetime

from storm.locals import Storm, DateTime, Unicode

from datahive.data.code import isValidCode
from datahive.data.exceptions import (
    DuplicateKeyError, MalformedCodeError, NotFoundError)
from datahive.data.identifier import createID
from datahive.data.store import getMainStore


class Organization(Storm):
    """An organization owns L{Project}s and L{Group}s.

    @param code: The unique C{unicode} code of the organization.
    @param name: The C{unicode} name of the organization.
    @param color: Optionally, a C{unicode} color.
    @param icon: Optionally, a C{unicode} icon name.
    """

    __storm_table__ = 'organizations'

    id = Unicode('id', primary=True, allow_none=False)
    code = Unicode('code', allow_none=False)
    name = Unicode('name', allow_none=False)
    color = Unicode('color')
    icon = Unicode('icon')
    creationTime = DateTime('creation_time', allow_none=False)

    def __init__(self, code, name, color=None, icon=None):
        self.id = createID()
        self.code = code
        self.name = name
        self.color = color
        self.icon = icon
        self.creationTime = datetime.utcnow()


def createOrganization(code, name, color=None, icon=None):
    """Create an L{Organization}.

    @param code: The unique C{unicode} code of the organization.
    @param name: The C{unicode} name of the organization.
    @param color: Optionally, a C{unicode} color.
    @param icon: Optionally, a C{unicode} icon name.
    @raise MalformedCodeError: Raised if C{code} is not valid.
    @raise DuplicateKeyError: Raised if an organization with C{code} already
        exists.
    @return: A new L{Organization} instance persisted in the main store.
    """
    if not isValidCode(code):
        raise MalformedCodeError("'%s' is not a valid code." % code)
    store = getMainStore()
    if store.find(Organization.id, Organization.code == code).any():
        raise DuplicateKeyError([code])
    return store.add(Organization(code, name, color, icon))


def getOrganizations(ids=None, codes=None):
    """Get L{Organization}s.

    @param ids: Optionally, a sequence of L{Organization.id}s to filter the
        results with.
    @param codes: Optionally, a sequence of L{Organization.code}s to filter
        the results with.
    @return: A C{ResultSet} with matching L{Organization}s.
    """
    store = getMainStore()
    where = []
    if ids:
        where.append(Organization.id.is_in(ids))
    if codes:
        where.append(Organization.code.is_in(codes))
    return store.find(Organization, *where).order_by(Organization.id)


def deleteOrganization(organizationID):
    """Delete an L{Organization}.

    @param organizationID: The L{Organization.id} to delete.
    @raise NotFoundError: Raised if the organization doesn't exist.
    """
    store = getMainStore()
    organization = store.get(Organization, organizationID)
    if organization is None:
        raise NotFoundError('organization', [organizationID])
    store.remove(organization)
