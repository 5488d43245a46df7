from datahive.data.permission import Permission, Permissions, Role
from datahive.model.dictionary import ResourceKind
from datahive.model.user import UserAPI
from datahive.util.database import encodeJSON


# The keys used for each kind of resource in template results.
TEMPLATE_KEY_BY_KIND = {
    ResourceKind.COLLECTION: 'collections',
    ResourceKind.LINK_TYPE: 'linkTypes',
    ResourceKind.DOCUMENT: 'documents',
    ResourceKind.LINK_INSTANCE: 'linkInstances',
    ResourceKind.VIEW: 'views'}


def getAuthorizationContext(userID):
    """Get the L{AuthorizationContext} for a L{User}.

    @param userID: The L{User.id} of the user making the request.
    @raise NotFoundError: Raised if the user doesn't exist.
    @return: An L{AuthorizationContext} instance.
    """
    return UserAPI().getAuthorizationContext(userID)


def permissionsToJSON(permissions):
    """Convert L{Permissions} into a JSON-compatible C{dict}.

    @param permissions: A L{Permissions} instance.
    @return: A C{dict} with C{users} and C{groups} lists.  Each item has the
        subject's C{id} and the sorted names of its C{roles}.
    """

    def convert(subjectPermissions):
        result = []
        for permission in sorted(subjectPermissions,
                                 key=lambda item: item.subjectID):
            roles = sorted(permission.roles, key=lambda role: role.id)
            result.append({'id': permission.subjectID,
                           'roles': [str(role) for role in roles]})
        return result

    return {'users': convert(permissions.userPermissions),
            'groups': convert(permissions.groupPermissions)}


def permissionsFromJSON(value):
    """Load L{Permissions} from the format produced by L{permissionsToJSON}.

    @param value: A C{dict} with optional C{users} and C{groups} lists.
    @raise LookupError: Raised if a role name isn't a L{Role}.
    @return: A new L{Permissions} instance.
    """

    def convert(subjectPermissions):
        return [Permission(item['id'],
                           [Role.fromName(name) for name in item['roles']])
                for item in subjectPermissions or ()]

    return Permissions(convert(value.get('users')),
                       convert(value.get('groups')))


def viewToJSON(view):
    """Convert a C{dict} returned by L{ViewAPI} into a JSON-compatible one."""
    return {'id': view['id'],
            'projectId': view['projectID'],
            'code': view['code'],
            'name': view['name'],
            'query': view['query'].toJSON(),
            'config': encodeJSON(view['config']),
            'perspective': view['perspective'],
            'color': view['color'],
            'icon': view['icon'],
            'creatorId': view['creatorID'],
            'creationTime': encodeJSON(view['creationTime']),
            'updateTime': encodeJSON(view['updateTime']),
            'permissions': permissionsToJSON(view['permissions'])}


def collectionToJSON(collection):
    """
    Convert a C{dict} returned by L{CollectionAPI} into a JSON-compatible
    one.
    """
    return {'id': collection['id'],
            'projectId': collection['projectID'],
            'code': collection['code'],
            'name': collection['name'],
            'icon': collection['icon'],
            'color': collection['color'],
            'attributes': encodeJSON(collection['attributes']),
            'documentsCount': collection['documentsCount'],
            'creationTime': encodeJSON(collection['creationTime']),
            'permissions': permissionsToJSON(collection['permissions'])}


def dictionaryToJSON(dictionary):
    """Convert an L{IdentifierDictionary} into a JSON-compatible C{dict}.

    @return: A C{dict} mapping C{collections}, C{linkTypes}, C{documents},
        C{linkInstances} and C{views} to C{dict}s of placeholder IDs and the
        IDs of the resources created for them.
    """
    return dict((key, dictionary.getMapping(kind))
                for kind, key in TEMPLATE_KEY_BY_KIND.items())
