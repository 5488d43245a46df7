class APIFactory(object):
    """Factory creates concrete model API instances."""

    def users(self):
        """Get a new L{UserAPI} instance."""
        from datahive.model.user import UserAPI
        return UserAPI()

    def permissions(self):
        """Get a new L{PermissionAPI} instance."""
        from datahive.model.permission import PermissionAPI
        return PermissionAPI()

    def organizations(self, userID):
        """Get a new L{OrganizationAPI} instance."""
        from datahive.model.organization import OrganizationAPI
        return OrganizationAPI(userID, self)

    def projects(self, userID):
        """Get a new L{ProjectAPI} instance."""
        from datahive.model.project import ProjectAPI
        return ProjectAPI(userID, self)

    def collections(self, userID):
        """Get a new L{CollectionAPI} instance."""
        from datahive.model.collection import CollectionAPI
        return CollectionAPI(userID, self)

    def linkTypes(self, userID):
        """Get a new L{LinkTypeAPI} instance."""
        from datahive.model.linktype import LinkTypeAPI
        return LinkTypeAPI(userID, self)

    def documents(self, userID):
        """Get a new L{DocumentAPI} instance."""
        from datahive.model.document import DocumentAPI
        return DocumentAPI(userID, self)

    def linkInstances(self, userID):
        """Get a new L{LinkInstanceAPI} instance."""
        from datahive.model.link import LinkInstanceAPI
        return LinkInstanceAPI(userID, self)

    def views(self, userID):
        """Get a new L{ViewAPI} instance."""
        from datahive.model.view import ViewAPI
        return ViewAPI(userID, self)

    def templates(self, userID, projectID):
        """Get a new L{TemplateAPI} instance."""
        from datahive.model.template import TemplateAPI
        return TemplateAPI(userID, projectID, self)
