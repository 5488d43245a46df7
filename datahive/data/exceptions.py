class NotFoundError(Exception):
    """Raised when an attempt to use an unknown resource is made.

    @param resourceName: The name of the kind of resource, such as C{view}.
    @param ids: A sequence of unknown resource IDs.
    """

    def __init__(self, resourceName, ids):
        self.resourceName = resourceName
        self.ids = list(ids)

    def __str__(self):
        ids = ', '.join(repr(id) for id in self.ids)
        return 'Unknown %s: %s' % (self.resourceName, ids)


class DuplicateKeyError(Exception):
    """
    Raised when an attempt to store a resource with a duplicate code is made.

    @param codes: A sequence of the codes that already exist.
    """

    def __init__(self, codes):
        self.codes = list(codes)

    def __str__(self):
        return 'Resources with codes %s already exist.' \
               % ', '.join(repr(code) for code in self.codes)


class MalformedCodeError(Exception):
    """
    Raised when an attempt to store a resource with a malformed code is made.
    """
