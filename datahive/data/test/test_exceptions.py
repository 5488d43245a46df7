from datahive.data.exceptions import DuplicateKeyError, NotFoundError
from datahive.testing.basic import DataHiveTestCase


class NotFoundErrorTest(DataHiveTestCase):

    def testStr(self):
        """
        Converting a L{NotFoundError} to a string includes the resource name
        and the unknown IDs.
        """
        error = NotFoundError('view', ['abc'])
        self.assertEqual("Unknown view: 'abc'", str(error))


class DuplicateKeyErrorTest(DataHiveTestCase):

    def testStr(self):
        """
        Converting a L{DuplicateKeyError} to a string includes the duplicate
        codes.
        """
        error = DuplicateKeyError(['CODE'])
        self.assertEqual("Resources with codes 'CODE' already exist.",
                         str(error))
