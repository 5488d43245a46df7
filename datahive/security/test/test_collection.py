from datahive.data.exceptions import NotFoundError
from datahive.data.permission import (
    Permission, Permissions, ResourceType, Role)
from datahive.model.context import AuthorizationContext
from datahive.model.organization import OrganizationAPI
from datahive.model.permission import PermissionAPI
from datahive.model.project import ProjectAPI
from datahive.security.collection import SecureCollectionAPI
from datahive.security.exceptions import UnauthorizedError
from datahive.testing.basic import DataHiveTestCase
from datahive.testing.resources import DatabaseResource


class SecureCollectionAPITest(DataHiveTestCase):

    resources = [('store', DatabaseResource())]

    def setUp(self):
        super(SecureCollectionAPITest, self).setUp()
        organization = OrganizationAPI('owner').create('ACME', 'Acme')
        self.projectID = ProjectAPI('owner').create(
            organization['id'], 'PRJ', 'Project')['id']
        self.collections = SecureCollectionAPI(AuthorizationContext('owner'))

    def testCreate(self):
        """
        L{SecureCollectionAPI.create} creates a L{Collection} for users that
        can write to the project.
        """
        result = self.collections.create(self.projectID, 'TASKS', 'Tasks')
        self.assertUserRoles(Role.COLLECTION_ROLES, result['permissions'],
                             'owner')

    def testCreateDenied(self):
        """
        L{SecureCollectionAPI.create} raises an L{UnauthorizedError} if the
        user can't write to the project.
        """
        collections = SecureCollectionAPI(AuthorizationContext('stranger'))
        self.assertRaises(UnauthorizedError, collections.create,
                          self.projectID, 'TASKS', 'Tasks')

    def testGetDeniedIsNotFound(self):
        """
        L{SecureCollectionAPI.get} raises a L{NotFoundError} if the user can't
        read the collection.
        """
        collection = self.collections.create(self.projectID, 'TASKS',
                                             'Tasks')
        self.assertEqual(collection, self.collections.get(collection['id']))
        collections = SecureCollectionAPI(AuthorizationContext('stranger'))
        self.assertRaises(NotFoundError, collections.get, collection['id'])

    def testGetCollections(self):
        """
        L{SecureCollectionAPI.getCollections} only returns readable
        collections.
        """
        collection1 = self.collections.create(self.projectID, 'C1', 'One')
        collection2 = self.collections.create(self.projectID, 'C2', 'Two')
        PermissionAPI().set(
            ResourceType.COLLECTION, collection2['id'],
            Permissions([], [Permission('team', [Role.READ])]))
        collections = SecureCollectionAPI(AuthorizationContext('member',
                                                               ['team']))
        self.assertEqual([collection2['id']],
                         [collection['id'] for collection
                          in collections.getCollections(self.projectID)])
        self.assertEqual([collection1['id']],
                         [collection['id'] for collection
                          in self.collections.getCollections()])

    def testGetCollectionsBySuggestion(self):
        """
        L{SecureCollectionAPI.getCollectionsBySuggestion} returns readable
        collections whose name contains the text.
        """
        collection = self.collections.create(self.projectID, 'C1', 'Tasks')
        self.collections.create(self.projectID, 'C2', 'People')
        self.assertEqual([collection],
                         self.collections.getCollectionsBySuggestion('task'))

    def testUpdate(self):
        """
        L{SecureCollectionAPI.update} lets managers change a L{Collection}.
        """
        collection = self.collections.create(self.projectID, 'C1', 'Tasks')
        result = self.collections.update(collection['id'], name='Todo')
        self.assertEqual('Todo', result['name'])

    def testDeleteByReader(self):
        """
        L{SecureCollectionAPI.delete} raises an L{UnauthorizedError} if the
        user can read the collection but doesn't manage it.
        """
        collection = self.collections.create(self.projectID, 'C1', 'Tasks')
        PermissionAPI().set(
            ResourceType.COLLECTION, collection['id'],
            Permissions([Permission('reader', [Role.READ])]))
        collections = SecureCollectionAPI(AuthorizationContext('reader'))
        self.assertRaises(UnauthorizedError, collections.delete,
                          collection['id'])

    def testDelete(self):
        """
        L{SecureCollectionAPI.delete} lets managers delete a L{Collection}.
        """
        collection = self.collections.create(self.projectID, 'C1', 'Tasks')
        self.collections.delete(collection['id'])
        self.assertRaises(NotFoundError, self.collections.get,
                          collection['id'])
        self.assertRaises(NotFoundError, self.collections.delete,
                          collection['id'])
