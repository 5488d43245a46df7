"""DataHive is a collaborative platform for defining and sharing data.

Organizations contain projects, and projects contain collections of
documents, link types connecting two collections, links between documents
and views that save a structured query with visualization settings.  Every
resource carries per-user and per-group roles.  Projects can be seeded from
templates, JSON files whose placeholder IDs are rewritten with the IDs of
the resources created for them.  The main logic is in several packages that
form a stack of layers, each with a distinct function:

 - L{datahive.data} is at the bottom of the stack and contains low-level data
   access logic for validating and managing data in the database.

 - L{datahive.model} uses the functionality provided by the data layer to
   provide batch-oriented access to data in the system.  It contains the
   business logic for DataHive, including the query model, the identifier
   dictionary and the translators used to instantiate templates, and exposes
   it in the form of L{UserAPI}, L{OrganizationAPI}, L{ProjectAPI},
   L{CollectionAPI}, L{LinkTypeAPI}, L{DocumentAPI}, L{LinkInstanceAPI},
   L{ViewAPI}, L{PermissionAPI} and L{TemplateAPI} classes.

 - L{datahive.security} is a proxy layer for the model layer that checks the
   roles of the current user before allowing calls to propagate down the
   stack.  It provides access to the model in the form of
   L{SecureCollectionAPI}, L{SecureDocumentAPI}, L{SecureViewAPI} and
   L{SecureTemplateAPI} classes, and builds the database filters that limit
   queries to readable resources.

 - L{datahive.api} contains a L{Facade<datahive.api.facade.Facade>} that runs
   secure model requests in transaction threads and converts their results
   into JSON-compatible values.

The L{datahive.application} module contains the startup logic used to
bootstrap an instance of the service.  Several other packages provide
supporting functionality:

 - L{datahive.schema} contains the SQL statements and database patches needed
   to create the schema in the database.

 - L{datahive.testing} provides testing tools in the form of test resources
   that can be used to easily prepare the database, capture logging, etc.
   and in the form of test doubles that can be used in place of real
   implementations to make testing easier.

 - L{datahive.util} provides functionality that isn't particularly
   DataHive-specific, but is needed nonetheless.
"""
