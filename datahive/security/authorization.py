"""Evaluate roles granted by L{Permissions} to an L{AuthorizationContext}.

Roles are independent: having L{Role.MANAGE} doesn't imply L{Role.READ}.
Inheritance between resources, such as an organization manager being allowed
to create views in its projects, is composed by the callers.
"""

from datahive.security.exceptions import UnauthorizedError


def getRoles(permissions, context):
    """Get the roles granted to a user and their groups.

    @param permissions: The L{Permissions} of a resource.
    @param context: The L{AuthorizationContext} of the user.
    @return: A C{set} of L{Role}s.
    """
    roles = set(permissions.getUserRoles(context.userID))
    for groupID in context.groupIDs:
        roles.update(permissions.getGroupRoles(groupID))
    return roles


def hasRole(permissions, context, role):
    """Determine if a user or one of their groups has a role.

    @param permissions: The L{Permissions} of a resource.
    @param context: The L{AuthorizationContext} of the user.
    @param role: The required L{Role}.
    @return: C{True} if the role is granted, otherwise C{False}.
    """
    return role in getRoles(permissions, context)


def checkRole(permissions, context, role, resourceType, resourceID):
    """Make sure a user or one of their groups has a role on a resource.

    @param permissions: The L{Permissions} of the resource.
    @param context: The L{AuthorizationContext} of the user.
    @param role: The required L{Role}.
    @param resourceType: The L{ResourceType} of the resource.
    @param resourceID: The ID of the resource.
    @raise UnauthorizedError: Raised if the role isn't granted.
    """
    if not hasRole(permissions, context, role):
        raise UnauthorizedError(context.userID,
                                [(resourceType, resourceID, role)])
