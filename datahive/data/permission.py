from storm.locals import Storm, Unicode

from datahive.data.store import getMainStore
from datahive.util.constant import Constant, ConstantEnum, EnumBase


class Role(EnumBase):
    """An enumeration of the roles that can be granted on a resource.

    Roles are independent of each other, having L{MANAGE} doesn't imply
    L{READ}.

    @cvar READ: See the resource and its content.
    @cvar WRITE: Change the content of the resource.
    @cvar MANAGE: Change the properties and permissions of the resource and
        delete it.
    @cvar CLONE: Copy the resource.
    @cvar SHARE: Grant other users access to the resource.

    @cvar ORGANIZATION_ROLES: The roles a creator of an organization gets.
    @cvar PROJECT_ROLES: The roles a creator of a project gets.
    @cvar COLLECTION_ROLES: The roles a creator of a collection gets.
    @cvar LINK_TYPE_ROLES: The roles a creator of a link type gets.
    @cvar VIEW_ROLES: The roles a creator of a view gets.
    """

    READ = Constant(1, 'READ')
    WRITE = Constant(2, 'WRITE')
    MANAGE = Constant(3, 'MANAGE')
    CLONE = Constant(4, 'CLONE')
    SHARE = Constant(5, 'SHARE')

    ORGANIZATION_ROLES = [READ, WRITE, MANAGE]
    PROJECT_ROLES = [READ, WRITE, MANAGE]
    COLLECTION_ROLES = [READ, WRITE, MANAGE, SHARE]
    LINK_TYPE_ROLES = [READ, WRITE, MANAGE]
    VIEW_ROLES = [READ, WRITE, MANAGE, CLONE, SHARE]


class ResourceType(EnumBase):
    """An enumeration of the kinds of resources permissions are stored for."""

    ORGANIZATION = Constant(1, 'ORGANIZATION')
    PROJECT = Constant(2, 'PROJECT')
    COLLECTION = Constant(3, 'COLLECTION')
    LINK_TYPE = Constant(4, 'LINK_TYPE')
    DOCUMENT = Constant(5, 'DOCUMENT')
    LINK_INSTANCE = Constant(6, 'LINK_INSTANCE')
    VIEW = Constant(7, 'VIEW')


class SubjectType(EnumBase):
    """The kind of subject a role is granted to."""

    USER = Constant(1, 'USER')
    GROUP = Constant(2, 'GROUP')


class Permission(object):
    """The roles granted to a single user or group.

    @param subjectID: The L{User.id} or L{Group.id} roles are granted to.
    @param roles: A sequence of L{Role}s.
    """

    def __init__(self, subjectID, roles):
        self.subjectID = subjectID
        self.roles = frozenset(roles)

    def __eq__(self, other):
        return (isinstance(other, Permission)
                and self.subjectID == other.subjectID
                and self.roles == other.roles)

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash((self.subjectID, self.roles))

    def __repr__(self):
        roles = ', '.join(str(role) for role in
                          sorted(self.roles, key=lambda role: role.id))
        return '<Permission subjectID=%s roles={%s}>' % (self.subjectID,
                                                          roles)


class Permissions(object):
    """The user and group permissions for a resource.

    There is at most one L{Permission} per subject in each partition; updating
    a subject's permission replaces the previous one.

    @param userPermissions: Optionally, a sequence of L{Permission}s for
        users.
    @param groupPermissions: Optionally, a sequence of L{Permission}s for
        groups.
    """

    def __init__(self, userPermissions=None, groupPermissions=None):
        self._users = {}
        self._groups = {}
        self.updateUserPermissions(*(userPermissions or ()))
        self.updateGroupPermissions(*(groupPermissions or ()))

    @property
    def userPermissions(self):
        """A C{set} of the L{Permission}s granted to users."""
        return set(self._users.values())

    @property
    def groupPermissions(self):
        """A C{set} of the L{Permission}s granted to groups."""
        return set(self._groups.values())

    def updateUserPermissions(self, *permissions):
        for permission in permissions:
            self._users[permission.subjectID] = permission

    def updateGroupPermissions(self, *permissions):
        for permission in permissions:
            self._groups[permission.subjectID] = permission

    def removeUserPermission(self, userID):
        self._users.pop(userID, None)

    def removeGroupPermission(self, groupID):
        self._groups.pop(groupID, None)

    def getUserRoles(self, userID):
        """Get the L{Role}s granted directly to a user.

        @param userID: The L{User.id} to get roles for.
        @return: A C{frozenset} of L{Role}s, possibly empty.
        """
        permission = self._users.get(userID)
        return permission.roles if permission else frozenset()

    def getGroupRoles(self, groupID):
        """Get the L{Role}s granted to a group.

        @param groupID: The L{Group.id} to get roles for.
        @return: A C{frozenset} of L{Role}s, possibly empty.
        """
        permission = self._groups.get(groupID)
        return permission.roles if permission else frozenset()

    def copy(self):
        """Get a copy of these permissions."""
        return Permissions(self._users.values(), self._groups.values())

    def __eq__(self, other):
        return (isinstance(other, Permissions)
                and self._users == other._users
                and self._groups == other._groups)

    def __ne__(self, other):
        return not self == other

    def __repr__(self):
        return '<Permissions users=%r groups=%r>' % (
            sorted(self._users.values(), key=lambda p: p.subjectID),
            sorted(self._groups.values(), key=lambda p: p.subjectID))


class ResourcePermission(Storm):
    """A single L{Role} granted to a user or group on a resource.

    @param resourceType: The L{ResourceType} of the resource.
    @param resourceID: The ID of the resource.
    @param subjectType: The L{SubjectType} of the subject.
    @param subjectID: The L{User.id} or L{Group.id} of the subject.
    @param role: The granted L{Role}.
    """

    __storm_table__ = 'permissions'
    __storm_primary__ = ('resourceType', 'resourceID', 'subjectType',
                         'subjectID', 'role')

    resourceType = ConstantEnum('resource_type', enum_class=ResourceType,
                                allow_none=False)
    resourceID = Unicode('resource_id', allow_none=False)
    subjectType = ConstantEnum('subject_type', enum_class=SubjectType,
                               allow_none=False)
    subjectID = Unicode('subject_id', allow_none=False)
    role = ConstantEnum('role', enum_class=Role, allow_none=False)

    def __init__(self, resourceType, resourceID, subjectType, subjectID,
                 role):
        self.resourceType = resourceType
        self.resourceID = resourceID
        self.subjectType = subjectType
        self.subjectID = subjectID
        self.role = role


def createPermissions(resourceType, resourceID, permissions):
    """Store L{Permissions} for a resource.

    @param resourceType: The L{ResourceType} of the resource.
    @param resourceID: The ID of the resource.
    @param permissions: The L{Permissions} to store.
    @return: A C{list} of new L{ResourcePermission}s, one per granted role.
    """
    store = getMainStore()
    partitions = [(SubjectType.USER, permissions.userPermissions),
                  (SubjectType.GROUP, permissions.groupPermissions)]
    result = []
    for subjectType, subjectPermissions in partitions:
        for permission in subjectPermissions:
            for role in permission.roles:
                row = ResourcePermission(resourceType, resourceID,
                                         subjectType, permission.subjectID,
                                         role)
                result.append(store.add(row))
    return result


def getPermissions(resourceType, resourceIDs):
    """Get the L{Permissions} for a set of resources.

    @param resourceType: The L{ResourceType} of the resources.
    @param resourceIDs: A sequence of resource IDs.
    @return: A C{dict} mapping each resource ID to its L{Permissions}.
        Resources without any stored role get empty L{Permissions}.
    """
    resourceIDs = list(resourceIDs)
    if not resourceIDs:
        return {}
    store = getMainStore()
    result = store.find(
        ResourcePermission,
        ResourcePermission.resourceType == resourceType,
        ResourcePermission.resourceID.is_in(resourceIDs))
    grants = {}
    for row in result:
        key = (row.resourceID, row.subjectType, row.subjectID)
        grants.setdefault(key, set()).add(row.role)

    permissions = dict((resourceID, Permissions())
                       for resourceID in resourceIDs)
    for (resourceID, subjectType, subjectID), roles in grants.items():
        permission = Permission(subjectID, roles)
        if subjectType is SubjectType.USER:
            permissions[resourceID].updateUserPermissions(permission)
        else:
            permissions[resourceID].updateGroupPermissions(permission)
    return permissions


def setPermissions(resourceType, resourceID, permissions):
    """Replace the L{Permissions} stored for a resource.

    Roles that are granted both before and after the change are kept.

    @param resourceType: The L{ResourceType} of the resource.
    @param resourceID: The ID of the resource.
    @param permissions: The new L{Permissions}.
    """
    store = getMainStore()
    partitions = [(SubjectType.USER, permissions.userPermissions),
                  (SubjectType.GROUP, permissions.groupPermissions)]
    wanted = set()
    for subjectType, subjectPermissions in partitions:
        for permission in subjectPermissions:
            wanted.update((subjectType, permission.subjectID, role)
                          for role in permission.roles)
    existing = store.find(ResourcePermission,
                          ResourcePermission.resourceType == resourceType,
                          ResourcePermission.resourceID == resourceID)
    for row in list(existing):
        key = (row.subjectType, row.subjectID, row.role)
        if key in wanted:
            wanted.discard(key)
        else:
            store.remove(row)
    for subjectType, subjectID, role in wanted:
        store.add(ResourcePermission(resourceType, resourceID, subjectType,
                                     subjectID, role))


def deletePermissions(resourceType, resourceIDs):
    """Delete every role stored for a set of resources.

    @param resourceType: The L{ResourceType} of the resources.
    @param resourceIDs: A sequence of resource IDs.
    """
    resourceIDs = list(resourceIDs)
    if not resourceIDs:
        return
    store = getMainStore()
    store.find(ResourcePermission,
               ResourcePermission.resourceType == resourceType,
               ResourcePermission.resourceID.is_in(resourceIDs)).remove()
