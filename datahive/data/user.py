from datetime import datetime

from storm.locals import Storm, DateTime, Unicode, Reference

from datahive.data.exceptions import DuplicateKeyError
from datahive.data.identifier import createID
from datahive.data.store import getMainStore


class User(Storm):
    """A user of DataHive.

    @param email: The email address of the user, used to identify them.
    @param name: The name of the user.
    """

    __storm_table__ = 'users'

    id = Unicode('id', primary=True, allow_none=False)
    email = Unicode('email', allow_none=False)
    name = Unicode('name', allow_none=False)
    creationTime = DateTime('creation_time', allow_none=False)

    def __init__(self, email, name):
        self.id = createID()
        self.email = email
        self.name = name
        self.creationTime = datetime.utcnow()


class Group(Storm):
    """A named group of L{User}s, usually belonging to an organization.

    @param name: The name of the group.
    @param organizationID: Optionally, the L{Organization.id} the group
        belongs to.
    """

    __storm_table__ = 'user_groups'

    id = Unicode('id', primary=True, allow_none=False)
    organizationID = Unicode('organization_id')
    name = Unicode('name', allow_none=False)
    creationTime = DateTime('creation_time', allow_none=False)

    def __init__(self, name, organizationID=None):
        self.id = createID()
        self.name = name
        self.organizationID = organizationID
        self.creationTime = datetime.utcnow()


class GroupMember(Storm):
    """The membership of a L{User} in a L{Group}."""

    __storm_table__ = 'group_members'
    __storm_primary__ = 'groupID', 'userID'

    groupID = Unicode('group_id', allow_none=False)
    userID = Unicode('user_id', allow_none=False)

    group = Reference(groupID, 'Group.id')
    user = Reference(userID, 'User.id')

    def __init__(self, groupID, userID):
        self.groupID = groupID
        self.userID = userID


def createUser(email, name):
    """Create a L{User}.

    @param email: The C{unicode} email address of the user.
    @param name: The C{unicode} name of the user.
    @raise DuplicateKeyError: Raised if a user with the given C{email}
        already exists.
    @return: A new L{User} instance persisted in the main store.
    """
    store = getMainStore()
    if store.find(User.id, User.email == email).any():
        raise DuplicateKeyError([email])
    return store.add(User(email, name))


def getUsers(ids=None, emails=None):
    """Get L{User}s.

    @param ids: Optionally, a sequence of L{User.id}s to filter the results
        with.
    @param emails: Optionally, a sequence of L{User.email}s to filter the
        results with.
    @return: A C{ResultSet} with matching L{User}s.
    """
    store = getMainStore()
    where = []
    if ids:
        where.append(User.id.is_in(ids))
    if emails:
        where.append(User.email.is_in(emails))
    return store.find(User, *where)


def createGroup(name, organizationID=None):
    """Create a L{Group}.

    @param name: The C{unicode} name of the group.
    @param organizationID: Optionally, the L{Organization.id} the group
        belongs to.
    @return: A new L{Group} instance persisted in the main store.
    """
    store = getMainStore()
    return store.add(Group(name, organizationID))


def getGroups(ids=None, organizationID=None):
    """Get L{Group}s.

    @param ids: Optionally, a sequence of L{Group.id}s to filter the results
        with.
    @param organizationID: Optionally, an L{Organization.id} to filter the
        results with.
    @return: A C{ResultSet} with matching L{Group}s.
    """
    store = getMainStore()
    where = []
    if ids:
        where.append(Group.id.is_in(ids))
    if organizationID is not None:
        where.append(Group.organizationID == organizationID)
    return store.find(Group, *where)


def addGroupMembers(groupID, userIDs):
    """Add L{User}s to a L{Group}.

    Users that are already members are ignored.

    @param groupID: The L{Group.id} to add members to.
    @param userIDs: A sequence of L{User.id}s to add.
    @return: A C{list} of new L{GroupMember}s.
    """
    store = getMainStore()
    existing = set(store.find(GroupMember.userID,
                              GroupMember.groupID == groupID))
    result = []
    for userID in userIDs:
        if userID in existing:
            continue
        existing.add(userID)
        result.append(store.add(GroupMember(groupID, userID)))
    return result


def removeGroupMembers(groupID, userIDs):
    """Remove L{User}s from a L{Group}.

    @param groupID: The L{Group.id} to remove members from.
    @param userIDs: A sequence of L{User.id}s to remove.
    """
    store = getMainStore()
    store.find(GroupMember,
               GroupMember.groupID == groupID,
               GroupMember.userID.is_in(userIDs)).remove()


def getGroupIDs(userID):
    """Get the IDs of the L{Group}s a L{User} is a member of.

    @param userID: The L{User.id} to get groups for.
    @return: A C{set} of L{Group.id}s.
    """
    store = getMainStore()
    return set(store.find(GroupMember.groupID, GroupMember.userID == userID))
