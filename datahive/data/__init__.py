"""
Layer contains data access logic for storing and retrieving data in DataHive.
"""

# Import all the data classes so that they get registered with Storm's
# property resolver.
from datahive.data.collection import Collection
from datahive.data.document import Document
from datahive.data.link import LinkInstance
from datahive.data.linktype import LinkType
from datahive.data.organization import Organization
from datahive.data.permission import ResourcePermission
from datahive.data.project import Project
from datahive.data.user import User, Group, GroupMember
from datahive.data.view import View, ViewReference


# Suppress Pyflakes warnings.
_ = (Collection, Document, Group, GroupMember, LinkInstance, LinkType,
     Organization, Project, ResourcePermission, User, View, ViewReference)

# Remove them so that they can't be imported directly from this package.
del (Collection, Document, Group, GroupMember, LinkInstance, LinkType,
     Organization, Project, ResourcePermission, User, View, ViewReference, _)
