from copy import deepcopy
from datetime import datetime
import json
import os

from datahive.model.collection import CollectionAPI
from datahive.model.dictionary import ResourceKind
from datahive.model.document import DocumentAPI
from datahive.model.exceptions import TemplateNotAvailableError
from datahive.model.link import LinkInstanceAPI
from datahive.model.linktype import LinkTypeAPI
from datahive.model.query import Query, QueryStem
from datahive.model.template import TemplateAPI, loadTemplate
from datahive.model.test.test_collection import createProject
from datahive.model.view import ViewAPI
from datahive.testing.basic import DataHiveTestCase
from datahive.testing.resources import DatabaseResource


TASKS = '5c6f0c6bb9d1ee3b2f3e8f01'
PEOPLE = '5c6f0c6bb9d1ee3b2f3e8f02'
ASSIGNED = '5c6f0c6bb9d1ee3b2f3e8f03'
TASK = '5c6f0c6bb9d1ee3b2f3e8f04'
PERSON = '5c6f0c6bb9d1ee3b2f3e8f05'
ASSIGNMENT = '5c6f0c6bb9d1ee3b2f3e8f06'
BOARD = '5c6f0c6bb9d1ee3b2f3e8f07'

TEMPLATE = {
    'collections': [
        {'_id': TASKS, 'code': 'TASKS', 'name': 'Tasks', 'color': 'red',
         'attributes': [{'id': 'a1', 'name': 'Title'}]},
        {'_id': PEOPLE, 'code': 'PEOPLE', 'name': 'People'}],
    'linkTypes': [
        {'_id': ASSIGNED, 'name': 'Assigned',
         'collectionIds': [TASKS, PEOPLE]}],
    'documents': [
        {'_id': TASK, 'collectionId': TASKS, 'data': {'a1': 'Write tests'}},
        {'_id': PERSON, 'collectionId': PEOPLE, 'data': {'a1': 'Alice'}}],
    'linkInstances': [
        {'_id': ASSIGNMENT, 'linkTypeId': ASSIGNED,
         'documentIds': [TASK, PERSON], 'data': {}}],
    'views': [
        {'_id': BOARD, 'code': 'BOARD', 'name': 'Board',
         'perspective': 'kanban',
         'query': {'stems': [{'collectionId': TASKS,
                              'linkTypeIds': [ASSIGNED]}]},
         'config': {'kanban': {'columns': [{'collection': TASKS,
                                            'document': TASK}],
                               'created': '2019-05-01T08:00:00Z'}}}]}


class TemplateAPITest(DataHiveTestCase):

    resources = [('store', DatabaseResource())]

    def setUp(self):
        super(TemplateAPITest, self).setUp()
        self.projectID = createProject('user')
        self.templates = TemplateAPI('user', self.projectID)

    def testCreate(self):
        """
        L{TemplateAPI.create} creates the resources of a template, replacing
        placeholder IDs with the IDs of the new resources.
        """
        dictionary = self.templates.create(deepcopy(TEMPLATE))
        tasksID = dictionary.get(ResourceKind.COLLECTION, TASKS)
        peopleID = dictionary.get(ResourceKind.COLLECTION, PEOPLE)
        assignedID = dictionary.get(ResourceKind.LINK_TYPE, ASSIGNED)
        taskID = dictionary.get(ResourceKind.DOCUMENT, TASK)
        personID = dictionary.get(ResourceKind.DOCUMENT, PERSON)
        assignmentID = dictionary.get(ResourceKind.LINK_INSTANCE, ASSIGNMENT)
        boardID = dictionary.get(ResourceKind.VIEW, BOARD)

        tasks = CollectionAPI('user').get(tasksID)
        self.assertEqual('TASKS', tasks['code'])
        self.assertEqual('red', tasks['color'])
        self.assertEqual(1, tasks['documentsCount'])
        linkType = LinkTypeAPI('user').get(assignedID)
        self.assertEqual((tasksID, peopleID), linkType['collectionIDs'])
        task = DocumentAPI('user').get(tasksID, taskID)
        self.assertEqual({'a1': 'Write tests'}, task['data'])
        link = LinkInstanceAPI('user').get(assignmentID)
        self.assertEqual((taskID, personID), link['documentIDs'])

        board = ViewAPI('user').get(boardID)
        self.assertEqual('BOARD', board['code'])
        self.assertEqual('kanban', board['perspective'])
        self.assertEqual(Query([QueryStem(tasksID, [assignedID])]),
                         board['query'])
        self.assertEqual(
            {'kanban': {'columns': [{'collection': tasksID,
                                     'document': taskID}],
                        'created': datetime(2019, 5, 1, 8, 0)}},
            board['config'])

    def testPlaceholderInQueryAndNestedConfig(self):
        """
        A placeholder collection ID used by the query of a view and inside a
        nested mapping of its configuration is replaced in both places.
        """
        template = {
            'collections': [{'_id': TASKS, 'code': 'TASKS',
                             'name': 'Tasks'}],
            'views': [{'_id': BOARD, 'code': 'BOARD', 'name': 'Board',
                       'query': {'stems': [{'collectionId': TASKS}]},
                       'config': {'a': {'b': {'c': TASKS}}}}]}
        dictionary = self.templates.create(template)
        tasksID = dictionary.get(ResourceKind.COLLECTION, TASKS)
        board = ViewAPI('user').get(dictionary.get(ResourceKind.VIEW, BOARD))
        self.assertEqual(tasksID, board['query'].stems[0].collectionID)
        self.assertEqual(tasksID, board['config']['a']['b']['c'])

    def testPlaceholderIDsAreRestored(self):
        """
        The placeholder C{_id} of every entry is still there after the
        template is instantiated.
        """
        template = deepcopy(TEMPLATE)
        self.templates.create(template)
        self.assertEqual(TEMPLATE, template)

    def testEmptyTemplate(self):
        """An empty template doesn't create anything."""
        dictionary = self.templates.create({})
        self.assertIdentical(None,
                             dictionary.get(ResourceKind.COLLECTION, TASKS))
        self.assertEqual(set(), CollectionAPI('user').getAllCodes(
            self.projectID))

    def testCodesAreMadeUnique(self):
        """
        Collections and views whose codes are already used in the project get
        a numbered code.
        """
        CollectionAPI('user').create(self.projectID, 'TASKS', 'Tasks')
        ViewAPI('user').create(self.projectID, 'BOARD', 'Board')
        dictionary = self.templates.create(deepcopy(TEMPLATE))
        tasks = CollectionAPI('user').get(
            dictionary.get(ResourceKind.COLLECTION, TASKS))
        self.assertEqual('TASKS2', tasks['code'])
        board = ViewAPI('user').get(dictionary.get(ResourceKind.VIEW, BOARD))
        self.assertEqual('BOARD2', board['code'])

    def testDocumentWithUnknownCollection(self):
        """
        L{TemplateAPI.create} raises a L{TemplateNotAvailableError} if a
        document refers to a collection the template doesn't define.
        Resources created before the failure are kept.
        """
        template = {
            'collections': [{'_id': TASKS, 'code': 'TASKS',
                             'name': 'Tasks'}],
            'documents': [{'_id': TASK, 'collectionId': PEOPLE, 'data': {}}]}
        self.assertRaises(TemplateNotAvailableError, self.templates.create,
                          template)
        self.assertEqual(set(['TASKS']), CollectionAPI('user').getAllCodes(
            self.projectID))

    def testLinkTypeWithUnknownCollection(self):
        """
        L{TemplateAPI.create} raises a L{TemplateNotAvailableError} if a link
        type refers to a collection the template doesn't define.
        """
        template = {
            'collections': [{'_id': TASKS, 'code': 'TASKS',
                             'name': 'Tasks'}],
            'linkTypes': [{'_id': ASSIGNED, 'name': 'Assigned',
                           'collectionIds': [TASKS, PEOPLE]}]}
        self.assertRaises(TemplateNotAvailableError, self.templates.create,
                          template)

    def testLinkInstanceWithUnknownDocument(self):
        """
        L{TemplateAPI.create} raises a L{TemplateNotAvailableError} if a link
        refers to a document the template doesn't define.
        """
        template = deepcopy(TEMPLATE)
        del template['documents'][1]
        del template['views']
        self.assertRaises(TemplateNotAvailableError, self.templates.create,
                          template)

    def testViewWithUnknownCollection(self):
        """
        L{TemplateAPI.create} raises a L{TemplateNotAvailableError} if the
        query of a view starts from a collection the template doesn't
        define.
        """
        template = {
            'views': [{'_id': BOARD, 'code': 'BOARD', 'name': 'Board',
                       'query': {'stems': [{'collectionId': TASKS}]}}]}
        self.assertRaises(TemplateNotAvailableError, self.templates.create,
                          template)
        self.assertEqual(set(), ViewAPI('user').getAllCodes(self.projectID))

    def testViewWithStemWithoutCollection(self):
        """
        The query of a view can have a stem that only follows link types.
        Its link types are translated and its collection stays C{None}.
        """
        template = deepcopy(TEMPLATE)
        template['views'][0]['query'] = {
            'stems': [{'linkTypeIds': [ASSIGNED]}]}
        dictionary = self.templates.create(template)
        assignedID = dictionary.get(ResourceKind.LINK_TYPE, ASSIGNED)
        board = ViewAPI('user').get(dictionary.get(ResourceKind.VIEW, BOARD))
        self.assertEqual(Query([QueryStem(None, [assignedID])]),
                         board['query'])

    def testViewWithUnknownCollectionAndKnownLinkType(self):
        """
        L{TemplateAPI.create} raises a L{TemplateNotAvailableError} if the
        query of a view starts from an unknown collection, even if the link
        types it follows are defined by the template.
        """
        template = deepcopy(TEMPLATE)
        template['views'][0]['query'] = {
            'stems': [{'collectionId': BOARD, 'linkTypeIds': [ASSIGNED]}]}
        self.assertRaises(TemplateNotAvailableError, self.templates.create,
                          template)
        self.assertEqual(set(), ViewAPI('user').getAllCodes(self.projectID))

    def testMalformedEntry(self):
        """
        L{TemplateAPI.create} raises a L{TemplateNotAvailableError} if an
        entry misses a required field.  The placeholder ID is restored.
        """
        template = {'collections': [{'_id': TASKS, 'name': 'Tasks'}]}
        self.assertRaises(TemplateNotAvailableError, self.templates.create,
                          template)
        self.assertEqual(TASKS, template['collections'][0]['_id'])

    def testMalformedViewQuery(self):
        """
        L{TemplateAPI.create} raises a L{TemplateNotAvailableError} if the
        query of a view isn't shaped like a query.
        """
        for query in [{'stems': ['not-a-stem']}, {'stems': 'not-a-list'},
                      ['not-a-query'],
                      {'stems': [{'collectionId': TASKS,
                                  'filters': ['not-a-filter']}]}]:
            template = {
                'collections': [{'_id': TASKS, 'code': 'TASKS',
                                 'name': 'Tasks'}],
                'views': [{'_id': BOARD, 'code': 'BOARD', 'name': 'Board',
                           'query': query}]}
            self.assertRaises(TemplateNotAvailableError,
                              self.templates.create, template)
            self.assertEqual(BOARD, template['views'][0]['_id'])
        self.assertEqual(set(), ViewAPI('user').getAllCodes(self.projectID))

    def testEntryWithoutID(self):
        """
        L{TemplateAPI.create} raises a L{TemplateNotAvailableError} if an
        entry doesn't have a placeholder C{_id}.
        """
        template = {'collections': [{'code': 'TASKS', 'name': 'Tasks'}]}
        self.assertRaises(TemplateNotAvailableError, self.templates.create,
                          template)


class LoadTemplateTest(DataHiveTestCase):

    def testLoadTemplate(self):
        """L{loadTemplate} reads a template from a JSON file."""
        path = self.mktemp()
        with open(path, 'w') as templateFile:
            json.dump(TEMPLATE, templateFile)
        self.assertEqual(TEMPLATE, loadTemplate(path))

    def testLoadMissingFile(self):
        """
        L{loadTemplate} raises a L{TemplateNotAvailableError} if the file
        can't be read.
        """
        path = self.mktemp()
        self.assertFalse(os.path.exists(path))
        self.assertRaises(TemplateNotAvailableError, loadTemplate, path)

    def testLoadInvalidJSON(self):
        """
        L{loadTemplate} raises a L{TemplateNotAvailableError} if the file
        doesn't contain JSON.
        """
        path = self.mktemp()
        with open(path, 'w') as templateFile:
            templateFile.write('{not json')
        self.assertRaises(TemplateNotAvailableError, loadTemplate, path)

    def testLoadNonObject(self):
        """
        L{loadTemplate} raises a L{TemplateNotAvailableError} if the file
        doesn't contain a JSON object.
        """
        path = self.mktemp()
        with open(path, 'w') as templateFile:
            templateFile.write('[]')
        self.assertRaises(TemplateNotAvailableError, loadTemplate, path)
