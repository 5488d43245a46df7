from datahive.data.exceptions import NotFoundError
from datahive.data.permission import ResourceType, Role
from datahive.data.project import getProjects
from datahive.model.factory import APIFactory
from datahive.security.authorization import hasRole
from datahive.security.exceptions import UnauthorizedError


def checkPermissions(context, values, factory=None):
    """Check roles for a list of resources.

    @param context: The L{AuthorizationContext} of the user.
    @param values: A sequence of C{(ResourceType, resourceID, Role)}
        3-tuples representing the roles to check.
    @param factory: Optionally, the API factory to use.  Default is
        L{APIFactory}.
    @return: A C{list} of the C{(ResourceType, resourceID, Role)} 3-tuples
        that are denied, empty if every role is granted.
    """
    factory = factory or APIFactory()
    values = list(values)
    resourceIDs = {}
    for resourceType, resourceID, role in values:
        resourceIDs.setdefault(resourceType, set()).add(resourceID)
    permissions = {}
    for resourceType, ids in resourceIDs.items():
        result = factory.permissions().get(resourceType, ids)
        for resourceID, resourcePermissions in result.items():
            permissions[(resourceType, resourceID)] = resourcePermissions
    return [(resourceType, resourceID, role)
            for resourceType, resourceID, role in values
            if not hasRole(permissions[(resourceType, resourceID)], context,
                           role)]


def checkProjectRole(context, projectID, role, factory=None):
    """Check a role on a project, accepting organization managers too.

    Users that manage the organization of a project are granted every role
    on the project.

    @param context: The L{AuthorizationContext} of the user.
    @param projectID: The L{Project.id} to check.
    @param role: The required L{Role}.
    @param factory: Optionally, the API factory to use.  Default is
        L{APIFactory}.
    @raise NotFoundError: Raised if the project doesn't exist.
    @raise UnauthorizedError: Raised if the user has neither C{role} on the
        project nor L{Role.MANAGE} on its organization.
    """
    project = getProjects(ids=[projectID]).one()
    if project is None:
        raise NotFoundError('project', [projectID])
    values = [(ResourceType.PROJECT, projectID, role),
              (ResourceType.ORGANIZATION, project.organizationID,
               Role.MANAGE)]
    deniedRoles = checkPermissions(context, values, factory)
    if len(deniedRoles) == len(values):
        raise UnauthorizedError(context.userID, deniedRoles[:1])


def checkResourceRole(context, resourceType, resourceID, role, factory=None):
    """Check a role on a resource the user must be able to see.

    Users that can't read a resource are told it doesn't exist, so that
    errors don't reveal the resources they have no access to.

    @param context: The L{AuthorizationContext} of the user.
    @param resourceType: The L{ResourceType} of the resource.
    @param resourceID: The ID of the resource.  The caller must make sure
        the resource exists.
    @param role: The required L{Role}.
    @param factory: Optionally, the API factory to use.  Default is
        L{APIFactory}.
    @raise NotFoundError: Raised if the user has neither L{Role.READ} nor
        C{role} on the resource.
    @raise UnauthorizedError: Raised if the user can see the resource but
        doesn't have C{role} on it.
    """
    values = [(resourceType, resourceID, role)]
    if role is not Role.READ:
        values.append((resourceType, resourceID, Role.READ))
    deniedRoles = checkPermissions(context, values, factory)
    if len(deniedRoles) == len(values):
        raise NotFoundError(str(resourceType).lower().replace('_', ' '),
                            [resourceID])
    if (resourceType, resourceID, role) in deniedRoles:
        raise UnauthorizedError(context.userID,
                                [(resourceType, resourceID, role)])
