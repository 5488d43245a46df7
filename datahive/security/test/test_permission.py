from datahive.data.exceptions import NotFoundError
from datahive.data.permission import (
    Permission, Permissions, ResourceType, Role)
from datahive.model.context import AuthorizationContext
from datahive.model.organization import OrganizationAPI
from datahive.model.permission import PermissionAPI
from datahive.model.project import ProjectAPI
from datahive.security.exceptions import UnauthorizedError
from datahive.security.permission import (
    checkPermissions, checkProjectRole, checkResourceRole)
from datahive.testing.basic import DataHiveTestCase
from datahive.testing.resources import DatabaseResource


class CheckPermissionsTest(DataHiveTestCase):

    resources = [('store', DatabaseResource())]

    def testCheckPermissions(self):
        """L{checkPermissions} returns the roles that are denied."""
        permissions = PermissionAPI()
        permissions.grantCreator(ResourceType.VIEW, 'v1', 'user')
        permissions.set(ResourceType.COLLECTION, 'c1',
                        Permissions([], [Permission('group', [Role.READ])]))
        context = AuthorizationContext('user', ['group'])
        values = [(ResourceType.VIEW, 'v1', Role.MANAGE),
                  (ResourceType.VIEW, 'v2', Role.READ),
                  (ResourceType.COLLECTION, 'c1', Role.READ),
                  (ResourceType.COLLECTION, 'c1', Role.WRITE)]
        self.assertEqual([(ResourceType.VIEW, 'v2', Role.READ),
                          (ResourceType.COLLECTION, 'c1', Role.WRITE)],
                         checkPermissions(context, values))


class CheckProjectRoleTest(DataHiveTestCase):

    resources = [('store', DatabaseResource())]

    def setUp(self):
        super(CheckProjectRoleTest, self).setUp()
        organization = OrganizationAPI('owner').create('ACME', 'Acme')
        self.projectID = ProjectAPI('creator').create(
            organization['id'], 'PRJ', 'Project')['id']

    def testProjectRole(self):
        """
        L{checkProjectRole} accepts users that have the role on the project.
        """
        checkProjectRole(AuthorizationContext('creator'), self.projectID,
                         Role.WRITE)

    def testOrganizationManager(self):
        """
        L{checkProjectRole} accepts users that manage the organization of the
        project.
        """
        checkProjectRole(AuthorizationContext('owner'), self.projectID,
                         Role.WRITE)

    def testDenied(self):
        """
        L{checkProjectRole} raises an L{UnauthorizedError} if the user has
        neither the role on the project nor manages its organization.
        """
        error = self.assertRaises(UnauthorizedError, checkProjectRole,
                                  AuthorizationContext('stranger'),
                                  self.projectID, Role.WRITE)
        self.assertEqual([(ResourceType.PROJECT, self.projectID,
                           Role.WRITE)], error.resourcesAndRoles)

    def testUnknownProject(self):
        """
        L{checkProjectRole} raises a L{NotFoundError} if the project doesn't
        exist.
        """
        self.assertRaises(NotFoundError, checkProjectRole,
                          AuthorizationContext('owner'), 'unknown',
                          Role.WRITE)


class CheckResourceRoleTest(DataHiveTestCase):

    resources = [('store', DatabaseResource())]

    def setUp(self):
        super(CheckResourceRoleTest, self).setUp()
        PermissionAPI().set(
            ResourceType.VIEW, 'view',
            Permissions([Permission('reader', [Role.READ]),
                         Permission('manager', [Role.READ, Role.MANAGE])]))

    def testGranted(self):
        """L{checkResourceRole} accepts granted roles."""
        checkResourceRole(AuthorizationContext('manager'), ResourceType.VIEW,
                          'view', Role.MANAGE)

    def testDeniedForReader(self):
        """
        L{checkResourceRole} raises an L{UnauthorizedError} if the user can
        read the resource but doesn't have the role.
        """
        self.assertRaises(UnauthorizedError, checkResourceRole,
                          AuthorizationContext('reader'), ResourceType.VIEW,
                          'view', Role.MANAGE)

    def testHiddenFromStrangers(self):
        """
        L{checkResourceRole} raises a L{NotFoundError} if the user can't even
        read the resource.
        """
        error = self.assertRaises(NotFoundError, checkResourceRole,
                                  AuthorizationContext('stranger'),
                                  ResourceType.VIEW, 'view', Role.MANAGE)
        self.assertEqual("Unknown view: 'view'", str(error))
