from datahive.data.exceptions import NotFoundError
from datahive.data.organization import (
    createOrganization, deleteOrganization, getOrganizations)
from datahive.data.permission import ResourceType
from datahive.model.factory import APIFactory


class OrganizationAPI(object):
    """The public API to L{Organization}s in the model layer.

    @param userID: The L{User.id} to perform operations on behalf of.
    @param factory: Optionally, the API factory to use when creating internal
        APIs.  Default is L{APIFactory}.
    """

    def __init__(self, userID, factory=None):
        self._userID = userID
        self._factory = factory or APIFactory()

    def create(self, code, name, color=None, icon=None):
        """Create a new L{Organization}.

        The user gets every organization role on the new organization.

        @param code: The unique C{unicode} code of the organization.
        @param name: The C{unicode} name of the organization.
        @param color: Optionally, a C{unicode} color.
        @param icon: Optionally, a C{unicode} icon name.
        @raise MalformedCodeError: Raised if C{code} is not valid.
        @raise DuplicateKeyError: Raised if C{code} is already used.
        @return: A C{dict} describing the new organization.
        """
        organization = createOrganization(code, name, color, icon)
        permissions = self._factory.permissions().grantCreator(
            ResourceType.ORGANIZATION, organization.id, self._userID)
        return _toDict(organization, permissions)

    def get(self, organizationID):
        """Get an L{Organization}.

        @param organizationID: The L{Organization.id} to get.
        @raise NotFoundError: Raised if the organization doesn't exist.
        @return: A C{dict} describing the organization.
        """
        organization = getOrganizations(ids=[organizationID]).one()
        if organization is None:
            raise NotFoundError('organization', [organizationID])
        permissions = self._factory.permissions().get(
            ResourceType.ORGANIZATION, [organizationID])
        return _toDict(organization, permissions[organizationID])

    def delete(self, organizationID):
        """Delete an L{Organization} and its permissions.

        @param organizationID: The L{Organization.id} to delete.
        @raise NotFoundError: Raised if the organization doesn't exist.
        """
        deleteOrganization(organizationID)
        self._factory.permissions().delete(ResourceType.ORGANIZATION,
                                           [organizationID])


def _toDict(organization, permissions):
    return {'id': organization.id,
            'code': organization.code,
            'name': organization.name,
            'color': organization.color,
            'icon': organization.icon,
            'creationTime': organization.creationTime,
            'permissions': permissions}
