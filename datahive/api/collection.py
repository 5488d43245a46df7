from datahive.api.util import collectionToJSON, getAuthorizationContext
from datahive.security.collection import SecureCollectionAPI


class FacadeCollectionMixin(object):

    def getCollections(self, userID, projectID=None, page=None,
                       pageSize=None):
        """Get the L{Collection}s a user can read.

        @param userID: The L{User.id} of the user making the request.
        @param projectID: Optionally, a L{Project.id} to filter the results
            with.
        @param page: Optionally, the zero-based page to return.
        @param pageSize: Optionally, the number of collections per page.
        @return: A C{Deferred} that will fire with a C{list} of C{dict}s
            describing the collections.
        """

        def run():
            collections = SecureCollectionAPI(getAuthorizationContext(userID))
            result = collections.getCollections(projectID, page, pageSize)
            return [collectionToJSON(collection) for collection in result]

        return self._transact.run(run)

    def createCollection(self, userID, projectID, values):
        """Create a new L{Collection}.

        @param userID: The L{User.id} of the user making the request.
        @param projectID: The L{Project.id} to create the collection in.
        @param values: A C{dict} with C{code} and C{name} keys and,
            optionally, C{icon}, C{color} and C{attributes} keys.
        @raise NotFoundError: Raised if the project doesn't exist.
        @raise UnauthorizedError: Raised if the user can't write to the
            project.
        @return: A C{Deferred} that will fire with a C{dict} describing the
            new collection.
        """

        def run():
            collections = SecureCollectionAPI(getAuthorizationContext(userID))
            result = collections.create(
                projectID, values['code'], values['name'],
                values.get('icon'), values.get('color'),
                values.get('attributes'))
            return collectionToJSON(result)

        return self._transact.run(run)
