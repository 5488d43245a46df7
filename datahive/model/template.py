"""Instantiate templates of collections, link types, documents, links and
views into a project.

A template is a C{dict} with the optional top-level lists C{collections},
C{linkTypes}, C{documents}, C{linkInstances} and C{views}.  Every entry has
a placeholder C{_id} that other entries use to refer to it, for example::

    {"collections": [{"_id": "5c6f0c6bb9d1ee3b2f3e8f01", "code": "TASKS",
                      "name": "Tasks", "attributes": []}],
     "documents": [{"_id": "5c6f0c6bb9d1ee3b2f3e8f02",
                    "collectionId": "5c6f0c6bb9d1ee3b2f3e8f01",
                    "data": {"a1": "Write tests"}}]}

Resources are created in that order and the placeholder IDs are replaced
with the real IDs as they become known.
"""

from json import load
import logging

from datahive.model.dictionary import IdentifierDictionary, ResourceKind
from datahive.model.exceptions import TemplateNotAvailableError
from datahive.model.factory import APIFactory
from datahive.model.query import Query
from datahive.model.translate import translateConfig, translateQuery


def loadTemplate(path):
    """Load a template from a JSON file.

    @param path: The path of the file to read.
    @raise TemplateNotAvailableError: Raised if the file can't be read or
        doesn't contain a JSON object.
    @return: The template C{dict}.
    """
    try:
        with open(path, 'r', encoding='utf-8') as templateFile:
            template = load(templateFile)
    except (IOError, ValueError) as error:
        raise TemplateNotAvailableError(
            "Can't load template %r: %s" % (path, error))
    if not isinstance(template, dict):
        raise TemplateNotAvailableError(
            'Template %r is not a JSON object.' % path)
    return template


def _uniqueCode(code, existingCodes):
    """Get a code that isn't in C{existingCodes} by adding a number to it."""
    if code not in existingCodes:
        return code
    suffix = 2
    while '%s%d' % (code, suffix) in existingCodes:
        suffix += 1
    return '%s%d' % (code, suffix)


class TemplateAPI(object):
    """Creates the resources described by a template in a project.

    Instantiation isn't atomic: resources created before a failure are kept,
    unless the surrounding transaction is aborted.

    @param userID: The L{User.id} of the user the resources are created for.
    @param projectID: The L{Project.id} of the project to create resources
        in.
    @param factory: Optionally, the API factory to use when creating internal
        APIs.  Default is L{APIFactory}.
    """

    def __init__(self, userID, projectID, factory=None):
        self._userID = userID
        self._projectID = projectID
        self._factory = factory or APIFactory()

    def create(self, template):
        """Create the resources of a template.

        @param template: The template C{dict}.
        @raise TemplateNotAvailableError: Raised if an entry is malformed or
            refers to a resource the template doesn't define.
        @raise DuplicateMappingError: Raised if two entries of the same kind
            share a placeholder ID.
        @return: The L{IdentifierDictionary} with the IDs of the created
            resources.
        """
        dictionary = IdentifierDictionary()
        steps = [('collections', ResourceKind.COLLECTION,
                  self._createCollection),
                 ('linkTypes', ResourceKind.LINK_TYPE, self._createLinkType),
                 ('documents', ResourceKind.DOCUMENT, self._createDocument),
                 ('linkInstances', ResourceKind.LINK_INSTANCE,
                  self._createLinkInstance),
                 ('views', ResourceKind.VIEW, self._createView)]
        for key, kind, createResource in steps:
            entries = template.get(key) or []
            for entry in entries:
                self._createEntry(entry, kind, createResource, dictionary)
            logging.debug('Created %d %s from template in project %s.',
                          len(entries), key, self._projectID)
        return dictionary

    def _createEntry(self, entry, kind, createResource, dictionary):
        """Create a single resource, registering its real ID.

        The placeholder C{_id} is taken out of C{entry} while the resource is
        created and put back afterwards.
        """
        if not isinstance(entry, dict) or '_id' not in entry:
            raise TemplateNotAvailableError(
                'Template %s entry without an _id: %r' % (kind, entry))
        placeholderID = entry.pop('_id')
        try:
            realID = createResource(entry, dictionary)
        except (KeyError, TypeError, ValueError) as error:
            raise TemplateNotAvailableError(
                'Malformed template %s %r: %s' % (kind, placeholderID, error))
        finally:
            entry['_id'] = placeholderID
        dictionary.put(kind, placeholderID, realID)

    def _resolve(self, dictionary, kind, placeholderID):
        realID = dictionary.get(kind, placeholderID)
        if realID is None:
            raise TemplateNotAvailableError(
                'Template refers to unknown %s %r.' % (kind, placeholderID))
        return realID

    def _createCollection(self, entry, dictionary):
        collections = self._factory.collections(self._userID)
        code = _uniqueCode(entry['code'],
                           collections.getAllCodes(self._projectID))
        collection = collections.create(
            self._projectID, code, entry['name'], entry.get('icon'),
            entry.get('color'), entry.get('attributes'))
        return collection['id']

    def _createLinkType(self, entry, dictionary):
        collectionIDs = [
            self._resolve(dictionary, ResourceKind.COLLECTION, collectionID)
            for collectionID in entry['collectionIds']]
        linkType = self._factory.linkTypes(self._userID).create(
            self._projectID, entry['name'], collectionIDs,
            entry.get('attributes'))
        return linkType['id']

    def _createDocument(self, entry, dictionary):
        collectionID = self._resolve(dictionary, ResourceKind.COLLECTION,
                                     entry['collectionId'])
        document = self._factory.documents(self._userID).create(
            collectionID, entry.get('data'))
        return document['id']

    def _createLinkInstance(self, entry, dictionary):
        linkTypeID = self._resolve(dictionary, ResourceKind.LINK_TYPE,
                                   entry['linkTypeId'])
        documentIDs = [
            self._resolve(dictionary, ResourceKind.DOCUMENT, documentID)
            for documentID in entry['documentIds']]
        linkInstance = self._factory.linkInstances(self._userID).create(
            linkTypeID, documentIDs, entry.get('data'))
        return linkInstance['id']

    def _createView(self, entry, dictionary):
        views = self._factory.views(self._userID)
        query = translateQuery(Query.fromJSON(entry.get('query')),
                               dictionary, strict=True)
        config = entry.get('config')
        if config is not None:
            config = translateConfig(config, dictionary)
        code = _uniqueCode(entry['code'], views.getAllCodes(self._projectID))
        view = views.create(self._projectID, code, entry['name'], query,
                            config, entry.get('perspective'),
                            entry.get('color'), entry.get('icon'))
        return view['id']
