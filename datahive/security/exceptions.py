class UnauthorizedError(Exception):
    """Raised when a user lacks the role an operation requires.

    @param userID: The L{User.id} of the user.
    @param resourcesAndRoles: A sequence of C{(ResourceType, resourceID,
        Role)} 3-tuples with the denied roles.
    """

    def __init__(self, userID, resourcesAndRoles):
        self.userID = userID
        self.resourcesAndRoles = list(resourcesAndRoles)

    def __str__(self):
        denied = ['%s on %s %r' % (role, resourceType, resourceID)
                  for resourceType, resourceID, role
                  in self.resourcesAndRoles]
        return ("User '%s' lacks the following roles: %s"
                % (self.userID, ', '.join(denied)))
