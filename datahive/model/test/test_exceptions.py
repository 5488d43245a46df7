from datahive.model.dictionary import ResourceKind
from datahive.model.exceptions import DuplicateMappingError
from datahive.testing.basic import DataHiveTestCase


class DuplicateMappingErrorTest(DataHiveTestCase):

    def testStr(self):
        """
        Converting a L{DuplicateMappingError} to a string describes the
        conflicting mapping.
        """
        error = DuplicateMappingError(ResourceKind.VIEW, 'abc', 'x', 'y')
        self.assertEqual(
            "VIEW placeholder 'abc' is already mapped to 'x', refusing to "
            "map it to 'y'.", str(error))
