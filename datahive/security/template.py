from datahive.data.permission import Role
from datahive.model.factory import APIFactory
from datahive.security.permission import checkProjectRole


class SecureTemplateAPI(object):
    """The public API to secure template instantiation.

    @param context: The L{AuthorizationContext} to perform operations with.
    @param projectID: The L{Project.id} to create resources in.
    @param factory: Optionally, the API factory to use.  Default is
        L{APIFactory}.
    """

    def __init__(self, context, projectID, factory=None):
        self._context = context
        self._projectID = projectID
        self._factory = factory or APIFactory()
        self._api = self._factory.templates(context.userID, projectID)

    def create(self, template):
        """See L{TemplateAPI.create}.

        @raise NotFoundError: Raised if the project doesn't exist.
        @raise UnauthorizedError: Raised if the user can't write to the
            project and doesn't manage its organization.
        """
        checkProjectRole(self._context, self._projectID, Role.WRITE,
                         self._factory)
        return self._api.create(template)
