class DuplicateMappingError(Exception):
    """
    Raised when a placeholder ID is registered twice with different real IDs.

    @param kind: The L{ResourceKind} of the mapping.
    @param placeholderID: The placeholder ID used in the template.
    @param existingID: The real ID already registered for C{placeholderID}.
    @param newID: The real ID that was rejected.
    """

    def __init__(self, kind, placeholderID, existingID, newID):
        self.kind = kind
        self.placeholderID = placeholderID
        self.existingID = existingID
        self.newID = newID

    def __str__(self):
        return ('%s placeholder %r is already mapped to %r, refusing to map '
                'it to %r.' % (self.kind, self.placeholderID,
                               self.existingID, self.newID))


class TemplateNotAvailableError(Exception):
    """
    Raised when a template can't be read or refers to resources that can't be
    resolved while it's being instantiated.
    """
