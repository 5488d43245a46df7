class AuthorizationContext(object):
    """The identity a request is performed with.

    @param userID: The L{User.id} of the requesting user.
    @param groupIDs: Optionally, a sequence of the L{Group.id}s the user is a
        member of.
    """

    def __init__(self, userID, groupIDs=None):
        self._userID = userID
        self._groupIDs = frozenset(groupIDs or ())

    @property
    def userID(self):
        return self._userID

    @property
    def groupIDs(self):
        """A C{frozenset} of L{Group.id}s."""
        return self._groupIDs

    def __eq__(self, other):
        return (isinstance(other, AuthorizationContext)
                and self._userID == other._userID
                and self._groupIDs == other._groupIDs)

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash((self._userID, self._groupIDs))

    def __repr__(self):
        return '<AuthorizationContext userID=%s groupIDs=%s>' % (
            self._userID, sorted(self._groupIDs))
