from datahive.data.exceptions import (
    DuplicateKeyError, MalformedCodeError, NotFoundError)
from datahive.data.permission import Permissions, ResourceType, Role
from datahive.model.organization import OrganizationAPI
from datahive.model.permission import PermissionAPI
from datahive.model.project import ProjectAPI
from datahive.testing.basic import DataHiveTestCase
from datahive.testing.resources import DatabaseResource


class OrganizationAPITest(DataHiveTestCase):

    resources = [('store', DatabaseResource())]

    def setUp(self):
        super(OrganizationAPITest, self).setUp()
        self.organizations = OrganizationAPI('user')

    def testCreate(self):
        """
        L{OrganizationAPI.create} creates an L{Organization} and grants its
        creator every organization role.
        """
        result = self.organizations.create('ACME', 'Acme', color='#fff')
        self.assertEqual('ACME', result['code'])
        self.assertEqual('Acme', result['name'])
        self.assertEqual('#fff', result['color'])
        self.assertIdentical(None, result['icon'])
        self.assertUserRoles(Role.ORGANIZATION_ROLES, result['permissions'],
                             'user')

    def testCreateWithMalformedCode(self):
        """
        L{OrganizationAPI.create} raises a L{MalformedCodeError} if the code
        has unsafe characters.
        """
        self.assertRaises(MalformedCodeError, self.organizations.create,
                          'A/B', 'Acme')

    def testCreateWithDuplicateCode(self):
        """
        L{OrganizationAPI.create} raises a L{DuplicateKeyError} if the code is
        already used.
        """
        self.organizations.create('ACME', 'Acme')
        self.assertRaises(DuplicateKeyError, self.organizations.create,
                          'ACME', 'Another')

    def testGet(self):
        """L{OrganizationAPI.get} returns an L{Organization}."""
        created = self.organizations.create('ACME', 'Acme')
        self.assertEqual(created, self.organizations.get(created['id']))

    def testGetUnknown(self):
        """
        L{OrganizationAPI.get} raises a L{NotFoundError} if the organization
        doesn't exist.
        """
        self.assertRaises(NotFoundError, self.organizations.get, 'unknown')

    def testDelete(self):
        """
        L{OrganizationAPI.delete} removes an L{Organization} and its
        permissions.
        """
        created = self.organizations.create('ACME', 'Acme')
        self.organizations.delete(created['id'])
        self.assertRaises(NotFoundError, self.organizations.get,
                          created['id'])
        permissions = PermissionAPI().get(ResourceType.ORGANIZATION,
                                          [created['id']])
        self.assertEqual(Permissions(), permissions[created['id']])


class ProjectAPITest(DataHiveTestCase):

    resources = [('store', DatabaseResource())]

    def setUp(self):
        super(ProjectAPITest, self).setUp()
        organization = OrganizationAPI('user').create('ACME', 'Acme')
        self.organizationID = organization['id']
        self.projects = ProjectAPI('user')

    def testCreate(self):
        """
        L{ProjectAPI.create} creates a L{Project} and grants its creator every
        project role.
        """
        result = self.projects.create(self.organizationID, 'PRJ', 'Project')
        self.assertEqual(self.organizationID, result['organizationID'])
        self.assertEqual('PRJ', result['code'])
        self.assertUserRoles(Role.PROJECT_ROLES, result['permissions'],
                             'user')

    def testCreateInUnknownOrganization(self):
        """
        L{ProjectAPI.create} raises a L{NotFoundError} if the organization
        doesn't exist.
        """
        self.assertRaises(NotFoundError, self.projects.create, 'unknown',
                          'PRJ', 'Project')

    def testCodesAreUniquePerOrganization(self):
        """
        Project codes are unique in an organization, different organizations
        can use the same code.
        """
        other = OrganizationAPI('user').create('OTHER', 'Other')
        self.projects.create(self.organizationID, 'PRJ', 'Project')
        self.projects.create(other['id'], 'PRJ', 'Project')
        self.assertRaises(DuplicateKeyError, self.projects.create,
                          self.organizationID, 'PRJ', 'Project')

    def testGetProjects(self):
        """
        L{ProjectAPI.getProjects} returns the L{Project}s of an organization
        in creation order.
        """
        project1 = self.projects.create(self.organizationID, 'P1', 'One')
        project2 = self.projects.create(self.organizationID, 'P2', 'Two')
        self.assertEqual([project1, project2],
                         self.projects.getProjects(self.organizationID))

    def testDelete(self):
        """L{ProjectAPI.delete} removes a L{Project}."""
        project = self.projects.create(self.organizationID, 'PRJ', 'Project')
        self.projects.delete(project['id'])
        self.assertRaises(NotFoundError, self.projects.get, project['id'])
