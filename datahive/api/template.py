from datahive.api.util import dictionaryToJSON, getAuthorizationContext
from datahive.model.template import loadTemplate
from datahive.security.template import SecureTemplateAPI


class FacadeTemplateMixin(object):

    def createTemplate(self, userID, projectID, template):
        """Create the resources described by a template in a L{Project}.

        The template is instantiated in a single transaction, so either every
        resource of the template is created or, if anything fails, the
        transaction is aborted and none of them is.  This differs from
        calling L{TemplateAPI.create} directly, which keeps the resources
        created before a failure.

        @param userID: The L{User.id} of the user making the request.
        @param projectID: The L{Project.id} to create resources in.
        @param template: A C{dict} describing the template.
        @raise TemplateNotAvailableError: Raised if the template is malformed
            or refers to resources it doesn't define.
        @raise UnauthorizedError: Raised if the user can't write to the
            project.
        @return: A C{Deferred} that will fire with a C{dict} mapping the
            placeholder IDs of each kind of resource to the IDs of the new
            resources.
        """

        def run():
            templates = SecureTemplateAPI(getAuthorizationContext(userID),
                                          projectID)
            return dictionaryToJSON(templates.create(template))

        return self._transact.run(run)

    def createTemplateFromFile(self, userID, projectID, path):
        """Load a template from a JSON file and create its resources.

        @param path: The path of the template file.
        @raise TemplateNotAvailableError: Raised if the file can't be loaded.
        @return: See L{createTemplate}.
        """

        def run():
            templates = SecureTemplateAPI(getAuthorizationContext(userID),
                                          projectID)
            return dictionaryToJSON(templates.create(loadTemplate(path)))

        return self._transact.run(run)
