from datahive.data.exceptions import NotFoundError
from datahive.data.user import (
    addGroupMembers, createGroup, createUser, getGroupIDs, getUsers,
    removeGroupMembers)
from datahive.model.context import AuthorizationContext
from datahive.model.factory import APIFactory


class UserAPI(object):
    """The public API for L{User}s and L{Group}s in the model layer.

    @param factory: Optionally, the API factory to use when creating internal
        APIs.  Default is L{APIFactory}.
    """

    def __init__(self, factory=None):
        self._factory = factory or APIFactory()

    def create(self, values):
        """Create new L{User}s.

        @param values: A sequence of C{(email, name)} 2-tuples.
        @raise DuplicateKeyError: Raised if the email of a new L{User}
            collides with an existing one.
        @return: A C{list} of C{(id, email)} 2-tuples for the new L{User}s.
        """
        result = []
        for email, name in values:
            user = createUser(email, name)
            result.append((user.id, user.email))
        return result

    def get(self, userIDs):
        """Get information about L{User}s.

        @param userIDs: A sequence of L{User.id}s.
        @return: A C{dict} mapping L{User.id}s to C{dict}s with C{email} and
            C{name} keys.  Unknown users are not included.
        """
        result = getUsers(ids=userIDs)
        return dict((user.id, {'email': user.email, 'name': user.name})
                    for user in result)

    def createGroup(self, name, organizationID=None):
        """Create a new L{Group}.

        @param name: The C{unicode} name of the group.
        @param organizationID: Optionally, the L{Organization.id} the group
            belongs to.
        @return: The L{Group.id} of the new group.
        """
        return createGroup(name, organizationID).id

    def addGroupMembers(self, groupID, userIDs):
        """Make L{User}s members of a L{Group}."""
        addGroupMembers(groupID, userIDs)

    def removeGroupMembers(self, groupID, userIDs):
        """Remove L{User}s from a L{Group}."""
        removeGroupMembers(groupID, userIDs)

    def getAuthorizationContext(self, userID):
        """Get the identity of a L{User} for authorization checks.

        @param userID: The L{User.id} of the user.
        @raise NotFoundError: Raised if the user doesn't exist.
        @return: An L{AuthorizationContext} with the user's groups.
        """
        if getUsers(ids=[userID]).is_empty():
            raise NotFoundError('user', [userID])
        return AuthorizationContext(userID, getGroupIDs(userID))
