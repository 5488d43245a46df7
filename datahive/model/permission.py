from datahive.data.permission import (
    Permission, Permissions, ResourceType, Role, createPermissions,
    deletePermissions, getPermissions, setPermissions)


CREATOR_ROLES = {ResourceType.ORGANIZATION: Role.ORGANIZATION_ROLES,
                 ResourceType.PROJECT: Role.PROJECT_ROLES,
                 ResourceType.COLLECTION: Role.COLLECTION_ROLES,
                 ResourceType.LINK_TYPE: Role.LINK_TYPE_ROLES,
                 ResourceType.VIEW: Role.VIEW_ROLES}


class PermissionAPI(object):
    """The public API to permissions in the model layer.

    Documents and link instances don't have permissions of their own, they're
    governed by the permissions of their collection and link type.
    """

    def get(self, resourceType, resourceIDs):
        """Get the L{Permissions} of a set of resources.

        @param resourceType: The L{ResourceType} of the resources.
        @param resourceIDs: A sequence of resource IDs.
        @return: A C{dict} mapping resource IDs to L{Permissions}.
        """
        return getPermissions(resourceType, resourceIDs)

    def set(self, resourceType, resourceID, permissions):
        """Replace the L{Permissions} of a resource.

        @param resourceType: The L{ResourceType} of the resource.
        @param resourceID: The ID of the resource.
        @param permissions: The new L{Permissions}.
        """
        setPermissions(resourceType, resourceID, permissions)

    def grantCreator(self, resourceType, resourceID, userID):
        """Grant the creator of a resource every role of its resource type.

        @param resourceType: The L{ResourceType} of the new resource.
        @param resourceID: The ID of the new resource.
        @param userID: The L{User.id} of the creator.
        @raise RuntimeError: Raised if resources of C{resourceType} can't
            have permissions.
        @return: The L{Permissions} of the new resource.
        """
        if resourceType not in CREATOR_ROLES:
            raise RuntimeError("Resources of type %s don't have permissions."
                               % resourceType)
        roles = CREATOR_ROLES[resourceType]
        permissions = Permissions([Permission(userID, roles)])
        createPermissions(resourceType, resourceID, permissions)
        return permissions

    def delete(self, resourceType, resourceIDs):
        """Delete the permissions of a set of resources.

        @param resourceType: The L{ResourceType} of the resources.
        @param resourceIDs: A sequence of resource IDs.
        """
        deletePermissions(resourceType, resourceIDs)
