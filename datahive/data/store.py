"""C{main} store access functions."""

from zope.component import getUtility

from storm.zope.interfaces import IZStorm


def getMainStore():
    """Get a C{Store} instance for the C{main} database.

    @return: A C{Store} instance for the C{main} database or C{None} if a
        C{main} database is not configured.
    """
    zstorm = getUtility(IZStorm)
    return zstorm.get('main')


def paginate(result, page=None, pageSize=None):
    """Limit an ordered C{ResultSet} to a single page.

    @param result: An ordered C{ResultSet}.
    @param page: Optionally, the zero-based page number.
    @param pageSize: Optionally, the number of rows per page.
    @return: The C{ResultSet} limited to the rows of the requested page, or
        C{result} itself if either C{page} or C{pageSize} is C{None}.
    """
    if page is None or pageSize is None:
        return result
    start = page * pageSize
    return result[start:start + pageSize]
