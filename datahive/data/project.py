from datetime import datetime

from storm.locals import Storm, DateTime, Unicode, Reference

from datahive.data.code import isValidCode
from datahive.data.exceptions import (
    DuplicateKeyError, MalformedCodeError, NotFoundError)
from datahive.data.identifier import createID
from datahive.data.store import getMainStore


class Project(Storm):
    """A project groups the collections, link types and views of a team.

    @param organizationID: The L{Organization.id} the project belongs to.
    @param code: The C{unicode} code of the project, unique in its
        organization.
    @param name: The C{unicode} name of the project.
    @param color: Optionally, a C{unicode} color.
    @param icon: Optionally, a C{unicode} icon name.
    """

    __storm_table__ = 'projects'

    id = Unicode('id', primary=True, allow_none=False)
    organizationID = Unicode('organization_id', allow_none=False)
    code = Unicode('code', allow_none=False)
    name = Unicode('name', allow_none=False)
    color = Unicode('color')
    icon = Unicode('icon')
    creationTime = DateTime('creation_time', allow_none=False)

    organization = Reference(organizationID, 'Organization.id')

    def __init__(self, organizationID, code, name, color=None, icon=None):
        self.id = createID()
        self.organizationID = organizationID
        self.code = code
        self.name = name
        self.color = color
        self.icon = icon
        self.creationTime = datetime.utcnow()


def createProject(organizationID, code, name, color=None, icon=None):
    """Create a L{Project}.

    @param organizationID: The L{Organization.id} the project belongs to.
    @param code: The C{unicode} code of the project.
    @param name: The C{unicode} name of the project.
    @param color: Optionally, a C{unicode} color.
    @param icon: Optionally, a C{unicode} icon name.
    @raise MalformedCodeError: Raised if C{code} is not valid.
    @raise DuplicateKeyError: Raised if the organization already has a
        project with C{code}.
    @return: A new L{Project} instance persisted in the main store.
    """
    if not isValidCode(code):
        raise MalformedCodeError("'%s' is not a valid code." % code)
    store = getMainStore()
    if store.find(Project.id, Project.organizationID == organizationID,
                  Project.code == code).any():
        raise DuplicateKeyError([code])
    return store.add(Project(organizationID, code, name, color, icon))


def getProjects(organizationID=None, ids=None, codes=None):
    """Get L{Project}s.

    @param organizationID: Optionally, an L{Organization.id} to filter the
        results with.
    @param ids: Optionally, a sequence of L{Project.id}s to filter the
        results with.
    @param codes: Optionally, a sequence of L{Project.code}s to filter the
        results with.
    @return: A C{ResultSet} with matching L{Project}s.
    """
    store = getMainStore()
    where = []
    if organizationID is not None:
        where.append(Project.organizationID == organizationID)
    if ids:
        where.append(Project.id.is_in(ids))
    if codes:
        where.append(Project.code.is_in(codes))
    return store.find(Project, *where).order_by(Project.id)


def deleteProject(projectID):
    """Delete a L{Project}.

    @param projectID: The L{Project.id} to delete.
    @raise NotFoundError: Raised if the project doesn't exist.
    """
    store = getMainStore()
    project = store.get(Project, projectID)
    if project is None:
        raise NotFoundError('project', [projectID])
    store.remove(project)
