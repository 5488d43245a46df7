"""Build Storm expressions that restrict queries to visible resources.

The expressions are meant to be passed as C{filters} to the C{get*}
functions of the data layer, so that visibility is decided by the database
instead of checking resources one by one.
"""

from storm.expr import And, Lower, Or, Select

from datahive.data.collection import Collection
from datahive.data.linktype import LinkType
from datahive.data.organization import Organization
from datahive.data.permission import (
    ResourcePermission, ResourceType, Role, SubjectType)
from datahive.data.project import Project
from datahive.data.view import ReferenceKind, View, ViewReference


RESOURCE_TYPES = {Organization: ResourceType.ORGANIZATION,
                  Project: ResourceType.PROJECT,
                  Collection: ResourceType.COLLECTION,
                  LinkType: ResourceType.LINK_TYPE,
                  View: ResourceType.VIEW}

LIKE_ESCAPE = '!'


def getResourceType(resourceClass):
    """Get the L{ResourceType} permissions of a Storm class are stored with.

    @raise RuntimeError: Raised if C{resourceClass} doesn't have
        permissions.
    """
    try:
        return RESOURCE_TYPES[resourceClass]
    except KeyError:
        raise RuntimeError("%s objects don't have permissions."
                           % resourceClass.__name__)


def buildReadFilter(resourceClass, context, role=Role.READ):
    """Build an expression matching the resources a user has a role on.

    @param resourceClass: The Storm class of the resources, such as L{View}.
    @param context: The L{AuthorizationContext} of the user.
    @param role: Optionally, the required L{Role}.  Default is L{Role.READ}.
    @raise RuntimeError: Raised if C{resourceClass} doesn't have
        permissions.
    @return: A Storm expression.
    """
    resourceType = getResourceType(resourceClass)
    subjects = And(ResourcePermission.subjectType == SubjectType.USER,
                   ResourcePermission.subjectID == context.userID)
    if context.groupIDs:
        groups = And(ResourcePermission.subjectType == SubjectType.GROUP,
                     ResourcePermission.subjectID.is_in(context.groupIDs))
        subjects = Or(subjects, groups)
    granted = Select(ResourcePermission.resourceID,
                     And(ResourcePermission.resourceType == resourceType,
                         ResourcePermission.role == role,
                         subjects))
    return resourceClass.id.is_in(granted)


def escapeLike(text):
    """Escape the wildcards of a C{LIKE} pattern using L{LIKE_ESCAPE}."""
    for character in (LIKE_ESCAPE, '%', '_'):
        text = text.replace(character, LIKE_ESCAPE + character)
    return text


def buildSuggestionFilter(resourceClass, context, text, role=Role.READ):
    """Build an expression matching visible resources by name.

    @param resourceClass: The Storm class of the resources, such as L{View}.
    @param context: The L{AuthorizationContext} of the user.
    @param text: The C{unicode} text the names of the resources must contain,
        ignoring case.
    @param role: Optionally, the required L{Role}.  Default is L{Role.READ}.
    @return: A Storm expression.
    """
    pattern = '%%%s%%' % escapeLike(text.lower())
    return And(buildReadFilter(resourceClass, context, role),
               Lower(resourceClass.name).like(pattern, LIKE_ESCAPE))


def buildCollectionReferenceFilter(collectionID):
    """Build an expression matching the views whose query uses a collection.

    A view uses a collection if one of the stems of its query starts from
    the collection or follows a link type connecting it.

    @param collectionID: The L{Collection.id} to look for.
    @return: A Storm expression for L{View}s.
    """
    linkTypeIDs = Select(LinkType.id,
                         Or(LinkType.collectionID1 == collectionID,
                            LinkType.collectionID2 == collectionID))
    references = Select(
        ViewReference.viewID,
        Or(And(ViewReference.kind == ReferenceKind.COLLECTION,
               ViewReference.resourceID == collectionID),
           And(ViewReference.kind == ReferenceKind.LINK_TYPE,
               ViewReference.resourceID.is_in(linkTypeIDs))))
    return View.id.is_in(references)
