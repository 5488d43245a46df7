from copy import deepcopy
import json

from twisted.internet.defer import inlineCallbacks

from datahive.api.facade import Facade
from datahive.data.exceptions import NotFoundError
from datahive.data.permission import (
    Permission, Permissions, ResourceType, Role)
from datahive.model.exceptions import TemplateNotAvailableError
from datahive.model.organization import OrganizationAPI
from datahive.model.permission import PermissionAPI
from datahive.model.project import ProjectAPI
from datahive.model.user import UserAPI
from datahive.security.exceptions import UnauthorizedError
from datahive.testing.basic import DataHiveTestCase
from datahive.testing.doubles import FakeThreadPool, FakeTransactionManager
from datahive.testing.resources import DatabaseResource, LoggingResource
from datahive.util.transact import Transact


TASKS = '5c6f0c6bb9d1ee3b2f3e8f01'
BOARD = '5c6f0c6bb9d1ee3b2f3e8f02'

TEMPLATE = {
    'collections': [{'_id': TASKS, 'code': 'TASKS', 'name': 'Tasks'}],
    'views': [{'_id': BOARD, 'code': 'BOARD', 'name': 'Board',
               'perspective': 'kanban',
               'query': {'stems': [{'collectionId': TASKS}]},
               'config': {'columns': [TASKS]}}]}


class FacadeTestCase(DataHiveTestCase):

    resources = [('log', LoggingResource()),
                 ('store', DatabaseResource())]

    def setUp(self):
        super(FacadeTestCase, self).setUp()
        self.transactions = FakeTransactionManager()
        self.transact = Transact(FakeThreadPool(), self.transactions)
        self.facade = Facade(self.transact)
        [(self.ownerID, _), (self.strangerID, _)] = UserAPI().create(
            [('owner@example.com', 'Owner'),
             ('stranger@example.com', 'Stranger')])
        organization = OrganizationAPI(self.ownerID).create('ACME', 'Acme')
        self.projectID = ProjectAPI(self.ownerID).create(
            organization['id'], 'PRJ', 'Project')['id']


class FacadeViewTest(FacadeTestCase):

    @inlineCallbacks
    def createView(self, code='BOARD', name='Board', collectionID=None):
        """Create a view owned by the owner of the project."""
        query = None
        if collectionID is not None:
            query = {'stems': [{'collectionId': collectionID}]}
        result = yield self.facade.createView(
            self.ownerID, self.projectID,
            {'code': code, 'name': name, 'query': query})
        return result

    @inlineCallbacks
    def testCreateView(self):
        """
        L{Facade.createView} creates a view and returns a JSON-compatible
        description of it.  The transaction is committed.
        """
        result = yield self.facade.createView(
            self.ownerID, self.projectID,
            {'code': 'BOARD', 'name': 'Board', 'perspective': 'kanban',
             'query': {'stems': [{'collectionId': 'c1'}]},
             'config': {'columns': 3}})
        self.assertEqual('BOARD', result['code'])
        self.assertEqual(self.projectID, result['projectId'])
        self.assertEqual(self.ownerID, result['creatorId'])
        self.assertEqual('c1', result['query']['stems'][0]['collectionId'])
        self.assertEqual({'columns': 3}, result['config'])
        self.assertEqual(
            [{'id': self.ownerID,
              'roles': ['READ', 'WRITE', 'MANAGE', 'CLONE', 'SHARE']}],
            result['permissions']['users'])
        self.assertEqual(1, self.transactions.commits)
        json.dumps(result)

    @inlineCallbacks
    def testCreateViewDenied(self):
        """
        L{Facade.createView} fails with an L{UnauthorizedError} if the user
        can't write to the project.  The transaction is aborted and the
        denial is logged.
        """
        deferred = self.facade.createView(self.strangerID, self.projectID,
                                          {'code': 'BOARD', 'name': 'Board'})
        yield self.assertFailure(deferred, UnauthorizedError)
        self.assertEqual(1, self.transactions.aborts)
        self.assertIn('lacks the following roles: WRITE on PROJECT',
                      self.log.getvalue())

    @inlineCallbacks
    def testCreateViewWithUnknownUser(self):
        """
        L{Facade.createView} fails with a L{NotFoundError} if the user
        doesn't exist.
        """
        deferred = self.facade.createView('unknown', self.projectID,
                                          {'code': 'BOARD', 'name': 'Board'})
        yield self.assertFailure(deferred, NotFoundError)

    @inlineCallbacks
    def testGetView(self):
        """L{Facade.getView} returns a readable view."""
        view = yield self.createView()
        result = yield self.facade.getView(self.ownerID, view['id'])
        self.assertEqual(view, result)

    @inlineCallbacks
    def testGetViewDenied(self):
        """
        L{Facade.getView} fails with a L{NotFoundError} if the user can't
        read the view.
        """
        view = yield self.createView()
        deferred = self.facade.getView(self.strangerID, view['id'])
        yield self.assertFailure(deferred, NotFoundError)

    @inlineCallbacks
    def testGetViews(self):
        """
        L{Facade.getViews} returns the views a user can read, in creation
        order.
        """
        first = yield self.createView('FIRST', 'First')
        second = yield self.createView('SECOND', 'Second')
        result = yield self.facade.getViews(self.ownerID, self.projectID)
        self.assertEqual([first['id'], second['id']],
                         [view['id'] for view in result])
        result = yield self.facade.getViews(self.strangerID)
        self.assertEqual([], result)

    @inlineCallbacks
    def testGetViewsWithPagination(self):
        """L{Facade.getViews} returns a single page of results."""
        yield self.createView('FIRST', 'First')
        second = yield self.createView('SECOND', 'Second')
        result = yield self.facade.getViews(self.ownerID, page=1, pageSize=1)
        self.assertEqual([second['id']], [view['id'] for view in result])

    @inlineCallbacks
    def testGetViewsBySuggestion(self):
        """
        L{Facade.getViewsBySuggestion} returns the readable views with a name
        containing some text.
        """
        yield self.createView('FIRST', 'Task board')
        yield self.createView('SECOND', 'Calendar')
        result = yield self.facade.getViewsBySuggestion(self.ownerID, 'BOARD')
        self.assertEqual(['Task board'], [view['name'] for view in result])

    @inlineCallbacks
    def testGetViewsByCollection(self):
        """
        L{Facade.getViewsByCollection} returns the readable views with a
        query using a collection.
        """
        collection = yield self.facade.createCollection(
            self.ownerID, self.projectID, {'code': 'TASKS', 'name': 'Tasks'})
        view = yield self.createView(collectionID=collection['id'])
        yield self.createView('OTHER', 'Other')
        result = yield self.facade.getViewsByCollection(self.ownerID,
                                                        collection['id'])
        self.assertEqual([view['id']], [item['id'] for item in result])

    @inlineCallbacks
    def testDeleteView(self):
        """L{Facade.deleteView} deletes a view the user manages."""
        view = yield self.createView()
        yield self.facade.deleteView(self.ownerID, view['id'])
        deferred = self.facade.getView(self.ownerID, view['id'])
        yield self.assertFailure(deferred, NotFoundError)

    @inlineCallbacks
    def testDeleteViewDenied(self):
        """
        L{Facade.deleteView} fails with an L{UnauthorizedError} if the user
        can read the view but doesn't manage it.
        """
        view = yield self.createView()
        PermissionAPI().set(
            ResourceType.VIEW, view['id'],
            Permissions([Permission(self.ownerID, Role.VIEW_ROLES),
                         Permission(self.strangerID, [Role.READ])]))
        deferred = self.facade.deleteView(self.strangerID, view['id'])
        yield self.assertFailure(deferred, UnauthorizedError)
        result = yield self.facade.getView(self.ownerID, view['id'])
        self.assertEqual(view['id'], result['id'])

    @inlineCallbacks
    def testViewConfigAttribute(self):
        """
        L{Facade.setViewConfigAttribute} changes a single configuration value
        of a view and L{Facade.getViewConfigAttribute} returns it.
        """
        view = yield self.createView()
        result = yield self.facade.setViewConfigAttribute(
            self.ownerID, view['id'], 'kanban', {'columns': ['c1']})
        self.assertEqual({'kanban': {'columns': ['c1']}}, result['config'])
        value = yield self.facade.getViewConfigAttribute(
            self.ownerID, view['id'], 'kanban')
        self.assertEqual({'columns': ['c1']}, value)
        self.assertEqual(3, self.transactions.commits)

    @inlineCallbacks
    def testSetViewConfigAttributeDenied(self):
        """
        L{Facade.setViewConfigAttribute} fails with an L{UnauthorizedError}
        if the user can read the view but can't write to it.  The transaction
        is aborted and the denial is logged.
        """
        view = yield self.createView()
        PermissionAPI().set(
            ResourceType.VIEW, view['id'],
            Permissions([Permission(self.ownerID, Role.VIEW_ROLES),
                         Permission(self.strangerID, [Role.READ])]))
        deferred = self.facade.setViewConfigAttribute(
            self.strangerID, view['id'], 'kanban', {})
        yield self.assertFailure(deferred, UnauthorizedError)
        self.assertEqual(1, self.transactions.aborts)
        self.assertIn('lacks the following roles: WRITE on VIEW',
                      self.log.getvalue())

    @inlineCallbacks
    def testSetViewPermissions(self):
        """
        L{Facade.setViewPermissions} replaces the permissions of a view the
        user manages.  Users granted READ can then get the view.
        """
        view = yield self.createView()
        permissions = {'users': [
            {'id': self.ownerID, 'roles': ['READ', 'MANAGE']},
            {'id': self.strangerID, 'roles': ['READ']}]}
        result = yield self.facade.setViewPermissions(
            self.ownerID, view['id'], permissions)
        self.assertEqual(sorted(permissions['users'], key=lambda u: u['id']),
                         result['permissions']['users'])
        result = yield self.facade.getView(self.strangerID, view['id'])
        self.assertEqual(view['id'], result['id'])

    @inlineCallbacks
    def testSetViewPermissionsDenied(self):
        """
        L{Facade.setViewPermissions} fails with a L{NotFoundError} if the user
        can't read the view.
        """
        view = yield self.createView()
        deferred = self.facade.setViewPermissions(
            self.strangerID, view['id'],
            {'users': [{'id': self.strangerID, 'roles': ['MANAGE']}]})
        yield self.assertFailure(deferred, NotFoundError)


class FacadeCollectionTest(FacadeTestCase):

    @inlineCallbacks
    def testCreateCollection(self):
        """
        L{Facade.createCollection} creates a collection and returns a
        JSON-compatible description of it.
        """
        result = yield self.facade.createCollection(
            self.ownerID, self.projectID,
            {'code': 'TASKS', 'name': 'Tasks', 'color': 'red',
             'attributes': [{'id': 'a1', 'name': 'Title'}]})
        self.assertEqual('TASKS', result['code'])
        self.assertEqual('red', result['color'])
        self.assertEqual(0, result['documentsCount'])
        json.dumps(result)

    @inlineCallbacks
    def testCreateCollectionDenied(self):
        """
        L{Facade.createCollection} fails with an L{UnauthorizedError} if the
        user can't write to the project.
        """
        deferred = self.facade.createCollection(
            self.strangerID, self.projectID,
            {'code': 'TASKS', 'name': 'Tasks'})
        yield self.assertFailure(deferred, UnauthorizedError)

    @inlineCallbacks
    def testGetCollections(self):
        """L{Facade.getCollections} returns the collections a user can read."""
        collection = yield self.facade.createCollection(
            self.ownerID, self.projectID, {'code': 'TASKS', 'name': 'Tasks'})
        result = yield self.facade.getCollections(self.ownerID,
                                                  self.projectID)
        self.assertEqual([collection['id']], [item['id'] for item in result])
        result = yield self.facade.getCollections(self.strangerID,
                                                  self.projectID)
        self.assertEqual([], result)


class FacadeTemplateTest(FacadeTestCase):

    @inlineCallbacks
    def testCreateTemplate(self):
        """
        L{Facade.createTemplate} creates the resources of a template and
        returns the IDs created for each placeholder ID.
        """
        result = yield self.facade.createTemplate(
            self.ownerID, self.projectID, deepcopy(TEMPLATE))
        tasksID = result['collections'][TASKS]
        boardID = result['views'][BOARD]
        self.assertEqual({}, result['documents'])
        view = yield self.facade.getView(self.ownerID, boardID)
        self.assertEqual(tasksID, view['query']['stems'][0]['collectionId'])
        self.assertEqual({'columns': [tasksID]}, view['config'])
        views = yield self.facade.getViewsByCollection(self.ownerID, tasksID)
        self.assertEqual([boardID], [item['id'] for item in views])

    @inlineCallbacks
    def testCreateTemplateDenied(self):
        """
        L{Facade.createTemplate} fails with an L{UnauthorizedError} if the
        user can't write to the project.
        """
        deferred = self.facade.createTemplate(
            self.strangerID, self.projectID, deepcopy(TEMPLATE))
        yield self.assertFailure(deferred, UnauthorizedError)
        self.assertEqual(1, self.transactions.aborts)

    @inlineCallbacks
    def testCreateMalformedTemplate(self):
        """
        L{Facade.createTemplate} fails with a L{TemplateNotAvailableError} if
        the template refers to resources it doesn't define.  The transaction
        is aborted.
        """
        template = deepcopy(TEMPLATE)
        del template['collections']
        deferred = self.facade.createTemplate(self.ownerID, self.projectID,
                                              template)
        yield self.assertFailure(deferred, TemplateNotAvailableError)
        self.assertEqual(1, self.transactions.aborts)
        self.assertEqual(0, self.transactions.commits)

    @inlineCallbacks
    def testCreateTemplateFromFile(self):
        """
        L{Facade.createTemplateFromFile} loads a template from a JSON file
        and creates its resources.
        """
        path = self.mktemp()
        with open(path, 'w') as templateFile:
            json.dump(TEMPLATE, templateFile)
        result = yield self.facade.createTemplateFromFile(
            self.ownerID, self.projectID, path)
        self.assertEqual([TASKS], list(result['collections']))
        self.assertEqual([BOARD], list(result['views']))

    @inlineCallbacks
    def testCreateTemplateFromMissingFile(self):
        """
        L{Facade.createTemplateFromFile} fails with a
        L{TemplateNotAvailableError} if the file doesn't exist.
        """
        deferred = self.facade.createTemplateFromFile(
            self.ownerID, self.projectID, self.mktemp())
        yield self.assertFailure(deferred, TemplateNotAvailableError)
