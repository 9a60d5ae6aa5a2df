from plugger import errors
from plugger import plug
from plugger import rdt
from tests.unit import base


def _name(text):
    return text.encode("utf-16-le").ljust(32, b"\x00")


# Contacts and their raw records
TEST_CONTACTS = [
    (plug.Contact(1, plug.CallType.GROUP, False, "Valid 1"),
     b"\x01\x00\x00\xC1" + _name("Valid 1")),
    (plug.Contact(2, plug.CallType.GROUP, True, "Valid 2"),
     b"\x02\x00\x00\xE1" + _name("Valid 2")),
    (plug.Contact(3, plug.CallType.PRIVATE, False, "Valid 3"),
     b"\x03\x00\x00\xC2" + _name("Valid 3")),
    (plug.Contact(4, plug.CallType.PRIVATE, True, "Valid 4"),
     b"\x04\x00\x00\xE2" + _name("Valid 4")),
    (plug.Contact(16777215, plug.CallType.ALL, False, "Valid 5"),
     b"\xFF\xFF\xFF\xC3" + _name("Valid 5")),
]


class TestContactCodec(base.BaseTest):
    def test_literal_vector(self):
        raw = bytes([0x01, 0x00, 0x00, 0xC1,
                     0x56, 0x00, 0x61, 0x00, 0x6C, 0x00, 0x69, 0x00,
                     0x64, 0x00, 0x20, 0x00, 0x31, 0x00]) + b"\x00" * 18
        self.assertEqual(36, len(raw))
        self.assertEqual(raw, rdt.encode_contact(TEST_CONTACTS[0][0]))

    def test_encode(self):
        for contact, raw in TEST_CONTACTS:
            self.assertEqual(raw, rdt.encode_contact(contact),
                             'Encoding %r' % contact)

    def test_decode(self):
        for contact, raw in TEST_CONTACTS:
            self.assertEqual(contact, rdt.decode_contact(raw))

    def test_decode_fields(self):
        contact = rdt.decode_contact(TEST_CONTACTS[3][1])
        self.assertEqual(4, contact.id)
        self.assertIs(plug.CallType.PRIVATE, contact.call_type)
        self.assertTrue(contact.tone)
        self.assertEqual("Valid 4", contact.name)

    def test_round_trip_limits(self):
        for contact in (plug.Contact(0, plug.CallType.ALL, True, ""),
                        plug.Contact(plug.MAX_ID, plug.CallType.GROUP,
                                     False, "x" * plug.NAME_LENGTH),
                        plug.Contact(0x123456, plug.CallType.PRIVATE, True,
                                     "Ünïcødé")):
            raw = rdt.encode_contact(contact)
            self.assertEqual(rdt.CONTACT_SIZE, len(raw))
            self.assertEqual(contact, rdt.decode_contact(raw))

    def test_encode_id_too_large(self):
        contact = plug.Contact(16777216, plug.CallType.GROUP, False, "x")
        self.assertRaises(errors.ValueOutOfRange,
                          rdt.encode_contact, contact)

    def test_encode_negative_id(self):
        contact = plug.Contact(-1, plug.CallType.GROUP, False, "x")
        self.assertRaises(errors.ValueOutOfRange,
                          rdt.encode_contact, contact)

    def test_encode_name_too_long(self):
        contact = plug.Contact(1, plug.CallType.GROUP, False, "x" * 17)
        self.assertRaises(errors.ValueOutOfRange,
                          rdt.encode_contact, contact)

    def test_encode_bad_call_type(self):
        contact = plug.Contact(1, 7, False, "x")
        self.assertRaises(errors.InvalidTypeNibble,
                          rdt.encode_contact, contact)
        contact = plug.Contact(7, plug.CallType.BLANK, False, "x")
        self.assertRaises(errors.InvalidTypeNibble,
                          rdt.encode_contact, contact)

    def test_encode_name_with_null(self):
        contact = plug.Contact(7, plug.CallType.GROUP, False, "ab\x00cd")
        self.assertRaises(errors.MalformedText,
                          rdt.encode_contact, contact)

    def test_decode_bad_tone_nibble(self):
        for typebyte in (0x01, 0x41, 0xA1, 0xD1, 0xF1):
            raw = base.contact_raw(1, typebyte, "x")
            self.assertRaises(errors.InvalidToneNibble,
                              rdt.decode_contact, raw)

    def test_decode_bad_type_nibble(self):
        for typebyte in (0xC4, 0xCF, 0xE8):
            raw = base.contact_raw(1, typebyte, "x")
            self.assertRaises(errors.InvalidTypeNibble,
                              rdt.decode_contact, raw)

    def test_decode_blank(self):
        self.assertIs(rdt.BLANK, rdt.decode_contact(base.BLANK_CONTACT))
        raw = base.contact_raw(0xFFFFFF, 0xC0, "")
        self.assertIs(rdt.BLANK, rdt.decode_contact(raw))
        raw = base.contact_raw(0xFFFFFF, 0x00, "")
        self.assertIs(rdt.BLANK, rdt.decode_contact(raw))

    def test_decode_all_ones_id_not_blank(self):
        # A real contact may use the all-call ID
        contact = rdt.decode_contact(TEST_CONTACTS[4][1])
        self.assertEqual(plug.MAX_ID, contact.id)

    def test_decode_blank_call_type(self):
        # Only the full sentinel is BLANK; a zero call type on its own
        # decodes and is left to the caller to drop
        contact = rdt.decode_contact(base.contact_raw(5, 0xC0, "x"))
        self.assertIs(plug.CallType.BLANK, contact.call_type)

    def test_decode_wrong_size(self):
        self.assertRaises(errors.ShortRead,
                          rdt.decode_contact, TEST_CONTACTS[0][1][:35])
