from storm.zope.schema import ZSchema


def createSchema():
    """Create the L{Schema} instance for the main database."""
    from datahive.schema import main as patches

    return ZSchema(CREATE, DROP, DELETE, patches)


CREATE = [
    """
    CREATE TABLE users (
        id TEXT NOT NULL PRIMARY KEY,
        email TEXT NOT NULL UNIQUE,
        name TEXT NOT NULL,
        creation_time TIMESTAMP NOT NULL)
    """,

    """
    CREATE TABLE organizations (
        id TEXT NOT NULL PRIMARY KEY,
        code TEXT NOT NULL UNIQUE,
        name TEXT NOT NULL,
        color TEXT,
        icon TEXT,
        creation_time TIMESTAMP NOT NULL)
    """,

    """
    CREATE TABLE user_groups (
        id TEXT NOT NULL PRIMARY KEY,
        organization_id TEXT REFERENCES organizations ON DELETE CASCADE,
        name TEXT NOT NULL,
        creation_time TIMESTAMP NOT NULL)
    """,

    """
    CREATE TABLE group_members (
        group_id TEXT NOT NULL REFERENCES user_groups ON DELETE CASCADE,
        user_id TEXT NOT NULL REFERENCES users ON DELETE CASCADE,
        PRIMARY KEY (group_id, user_id))
    """,
    """
    CREATE INDEX group_members_user_id_idx ON group_members (user_id)
    """,

    """
    CREATE TABLE projects (
        id TEXT NOT NULL PRIMARY KEY,
        organization_id TEXT NOT NULL REFERENCES organizations
            ON DELETE CASCADE,
        code TEXT NOT NULL,
        name TEXT NOT NULL,
        color TEXT,
        icon TEXT,
        creation_time TIMESTAMP NOT NULL,
        UNIQUE (organization_id, code))
    """,

    """
    CREATE TABLE collections (
        id TEXT NOT NULL PRIMARY KEY,
        project_id TEXT NOT NULL REFERENCES projects ON DELETE CASCADE,
        code TEXT NOT NULL,
        name TEXT NOT NULL,
        icon TEXT,
        color TEXT,
        attributes TEXT NOT NULL,
        documents_count INTEGER NOT NULL DEFAULT 0,
        creation_time TIMESTAMP NOT NULL,
        UNIQUE (project_id, code))
    """,

    """
    CREATE TABLE link_types (
        id TEXT NOT NULL PRIMARY KEY,
        project_id TEXT NOT NULL REFERENCES projects ON DELETE CASCADE,
        name TEXT NOT NULL,
        collection_id_1 TEXT NOT NULL REFERENCES collections
            ON DELETE CASCADE,
        collection_id_2 TEXT NOT NULL REFERENCES collections
            ON DELETE CASCADE,
        attributes TEXT NOT NULL,
        creation_time TIMESTAMP NOT NULL)
    """,
    """
    CREATE INDEX link_types_collection_id_1_idx
        ON link_types (collection_id_1)
    """,
    """
    CREATE INDEX link_types_collection_id_2_idx
        ON link_types (collection_id_2)
    """,

    """
    CREATE TABLE documents (
        id TEXT NOT NULL PRIMARY KEY,
        collection_id TEXT NOT NULL REFERENCES collections ON DELETE CASCADE,
        data TEXT NOT NULL,
        creator_id TEXT NOT NULL,
        creation_time TIMESTAMP NOT NULL,
        updater_id TEXT,
        update_time TIMESTAMP,
        data_version INTEGER NOT NULL DEFAULT 0,
        original_document_id TEXT)
    """,
    """
    CREATE INDEX documents_collection_id_idx ON documents (collection_id)
    """,

    """
    CREATE TABLE favorite_documents (
        user_id TEXT NOT NULL REFERENCES users ON DELETE CASCADE,
        collection_id TEXT NOT NULL REFERENCES collections
            ON DELETE CASCADE,
        document_id TEXT NOT NULL REFERENCES documents ON DELETE CASCADE,
        PRIMARY KEY (user_id, document_id))
    """,

    """
    CREATE TABLE link_instances (
        id TEXT NOT NULL PRIMARY KEY,
        link_type_id TEXT NOT NULL REFERENCES link_types ON DELETE CASCADE,
        document_id_1 TEXT NOT NULL REFERENCES documents ON DELETE CASCADE,
        document_id_2 TEXT NOT NULL REFERENCES documents ON DELETE CASCADE,
        data TEXT NOT NULL,
        creator_id TEXT NOT NULL,
        creation_time TIMESTAMP NOT NULL)
    """,
    """
    CREATE INDEX link_instances_link_type_id_idx
        ON link_instances (link_type_id)
    """,

    """
    CREATE TABLE views (
        id TEXT NOT NULL PRIMARY KEY,
        project_id TEXT NOT NULL REFERENCES projects ON DELETE CASCADE,
        code TEXT NOT NULL,
        name TEXT NOT NULL,
        color TEXT,
        icon TEXT,
        perspective TEXT,
        query TEXT NOT NULL,
        config TEXT,
        creator_id TEXT NOT NULL,
        creation_time TIMESTAMP NOT NULL,
        update_time TIMESTAMP,
        UNIQUE (project_id, code))
    """,

    """
    CREATE TABLE view_references (
        view_id TEXT NOT NULL REFERENCES views ON DELETE CASCADE,
        kind INTEGER NOT NULL,
        resource_id TEXT NOT NULL,
        PRIMARY KEY (view_id, kind, resource_id))
    """,
    """
    CREATE INDEX view_references_resource_id_idx
        ON view_references (kind, resource_id)
    """,

    """
    CREATE TABLE permissions (
        resource_type INTEGER NOT NULL,
        resource_id TEXT NOT NULL,
        subject_type INTEGER NOT NULL,
        subject_id TEXT NOT NULL,
        role INTEGER NOT NULL,
        PRIMARY KEY (resource_type, resource_id, subject_type, subject_id,
                     role))
    """,
    """
    CREATE INDEX permissions_subject_idx
        ON permissions (resource_type, role, subject_type, subject_id)
    """]


DROP = [
    'DROP TABLE IF EXISTS permissions',
    'DROP TABLE IF EXISTS view_references',
    'DROP TABLE IF EXISTS views',
    'DROP TABLE IF EXISTS link_instances',
    'DROP TABLE IF EXISTS favorite_documents',
    'DROP TABLE IF EXISTS documents',
    'DROP TABLE IF EXISTS link_types',
    'DROP TABLE IF EXISTS collections',
    'DROP TABLE IF EXISTS projects',
    'DROP TABLE IF EXISTS group_members',
    'DROP TABLE IF EXISTS user_groups',
    'DROP TABLE IF EXISTS organizations',
    'DROP TABLE IF EXISTS users']


DELETE = [
    'DELETE FROM permissions',
    'DELETE FROM view_references',
    'DELETE FROM views',
    'DELETE FROM link_instances',
    'DELETE FROM favorite_documents',
    'DELETE FROM documents',
    'DELETE FROM link_types',
    'DELETE FROM collections',
    'DELETE FROM projects',
    'DELETE FROM group_members',
    'DELETE FROM user_groups',
    'DELETE FROM organizations',
    'DELETE FROM users']
