from datahive.data.exceptions import NotFoundError
from datahive.data.organization import getOrganizations
from datahive.data.permission import ResourceType
from datahive.data.project import createProject, deleteProject, getProjects
from datahive.model.factory import APIFactory


class ProjectAPI(object):
    """The public API to L{Project}s in the model layer.

    @param userID: The L{User.id} to perform operations on behalf of.
    @param factory: Optionally, the API factory to use when creating internal
        APIs.  Default is L{APIFactory}.
    """

    def __init__(self, userID, factory=None):
        self._userID = userID
        self._factory = factory or APIFactory()

    def create(self, organizationID, code, name, color=None, icon=None):
        """Create a new L{Project} in an organization.

        The user gets every project role on the new project.

        @param organizationID: The L{Organization.id} of the organization.
        @param code: The C{unicode} code of the project.
        @param name: The C{unicode} name of the project.
        @param color: Optionally, a C{unicode} color.
        @param icon: Optionally, a C{unicode} icon name.
        @raise NotFoundError: Raised if the organization doesn't exist.
        @raise MalformedCodeError: Raised if C{code} is not valid.
        @raise DuplicateKeyError: Raised if the organization already has a
            project with C{code}.
        @return: A C{dict} describing the new project.
        """
        if getOrganizations(ids=[organizationID]).is_empty():
            raise NotFoundError('organization', [organizationID])
        project = createProject(organizationID, code, name, color, icon)
        permissions = self._factory.permissions().grantCreator(
            ResourceType.PROJECT, project.id, self._userID)
        return _toDict(project, permissions)

    def get(self, projectID):
        """Get a L{Project}.

        @param projectID: The L{Project.id} to get.
        @raise NotFoundError: Raised if the project doesn't exist.
        @return: A C{dict} describing the project.
        """
        project = getProjects(ids=[projectID]).one()
        if project is None:
            raise NotFoundError('project', [projectID])
        permissions = self._factory.permissions().get(ResourceType.PROJECT,
                                                      [projectID])
        return _toDict(project, permissions[projectID])

    def getProjects(self, organizationID):
        """Get the L{Project}s of an organization.

        @param organizationID: The L{Organization.id} of the organization.
        @return: A C{list} of C{dict}s describing the projects, in creation
            order.
        """
        projects = list(getProjects(organizationID=organizationID))
        permissions = self._factory.permissions().get(
            ResourceType.PROJECT, [project.id for project in projects])
        return [_toDict(project, permissions[project.id])
                for project in projects]

    def delete(self, projectID):
        """Delete a L{Project} and its permissions.

        @param projectID: The L{Project.id} to delete.
        @raise NotFoundError: Raised if the project doesn't exist.
        """
        deleteProject(projectID)
        self._factory.permissions().delete(ResourceType.PROJECT, [projectID])


def _toDict(project, permissions):
    return {'id': project.id,
            'organizationID': project.organizationID,
            'code': project.code,
            'name': project.name,
            'color': project.color,
            'icon': project.icon,
            'creationTime': project.creationTime,
            'permissions': permissions}
