from datahive.testing.basic import DataHiveTestCase
from datahive.util.constant import Constant, ConstantEnum, EnumBase


class ConstantTest(DataHiveTestCase):

    def testInstantiate(self):
        """A L{Constant} includes an ID and a name."""
        constant = Constant(42, 'VALUE')
        self.assertEqual(42, constant.id)
        self.assertEqual('VALUE', constant.name)

    def testStr(self):
        """
        L{Constant.name} is returned when a constant is converted to a string.
        """
        constant = Constant(42, 'VALUE')
        self.assertEqual('VALUE', str(constant))

    def testRepr(self):
        """
        A helpful string is generated when C{repr} is used with a L{Constant}.
        """
        constant = Constant(42, 'VALUE')
        self.assertEqual('<Constant id=42 name=VALUE>', repr(constant))


class SampleEnum(EnumBase):

    SECOND = Constant(2, 'SECOND')
    FIRST = Constant(1, 'FIRST')
    ALL = [FIRST, SECOND]


class EnumBaseTest(DataHiveTestCase):

    def testFromID(self):
        """L{EnumBase.fromID} returns the L{Constant} with the given ID."""
        self.assertIdentical(SampleEnum.SECOND, SampleEnum.fromID(2))

    def testFromIDWithUnknownID(self):
        """
        L{EnumBase.fromID} raises a C{LookupError} if no L{Constant} has the
        given ID.
        """
        self.assertRaises(LookupError, SampleEnum.fromID, 3)

    def testFromName(self):
        """L{EnumBase.fromName} returns the L{Constant} with the given name."""
        self.assertIdentical(SampleEnum.FIRST, SampleEnum.fromName('FIRST'))

    def testFromNameWithUnknownName(self):
        """
        L{EnumBase.fromName} raises a C{LookupError} if no L{Constant} has the
        given name.
        """
        self.assertRaises(LookupError, SampleEnum.fromName, 'THIRD')

    def testConstants(self):
        """
        L{EnumBase.constants} returns the L{Constant}s of the enumeration
        sorted by ID, ignoring other attributes.
        """
        self.assertEqual([SampleEnum.FIRST, SampleEnum.SECOND],
                         SampleEnum.constants())


class ConstantEnumTest(DataHiveTestCase):

    def testProperty(self):
        """
        A L{ConstantEnum} extracts L{Constant} values from the enumeration
        class specified when a property is defined and only accepts those
        values as valid possibilities.
        """

        class SampleStormClass(object):

            __storm_table__ = 'sample_storm_class'

            enum = ConstantEnum(enum_class=SampleEnum, primary=True)

        sample = SampleStormClass()
        sample.enum = SampleEnum.FIRST
        self.assertIdentical(SampleEnum.FIRST, sample.enum)
        self.assertRaises(ValueError, setattr, sample, 'enum', 10)
