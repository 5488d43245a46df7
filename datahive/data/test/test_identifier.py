from datahive.data.identifier import createID
from datahive.testing.basic import DataHiveTestCase


class CreateIDTest(DataHiveTestCase):

    def testCreateID(self):
        """L{createID} creates 24 character lowercase hexadecimal IDs."""
        id = createID()
        self.assertRegex(id, r'^[0-9a-f]{24}$')

    def testCreateIDIsUnique(self):
        """L{createID} never returns the same ID twice."""
        ids = set(createID() for _ in range(1000))
        self.assertEqual(1000, len(ids))

    def testCreateIDSortsInCreationOrder(self):
        """IDs created by L{createID} sort in the order they were created."""
        ids = [createID() for _ in range(100)]
        self.assertEqual(ids, sorted(ids))
