# Copyright 2026 The plugger authors
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

"""
Raw RDT file format for MD-380 family radios, including the RT-3.

The magic numbers are concentrated here for easy reference. Each record
kind has a layout in RECORD_FORMAT and a decoder which turns one raw
record into a model object, or BLANK for an unused slot.
"""

import logging

from plugger import bitwise
from plugger import errors
from plugger import label
from plugger import memmap
from plugger import plug
from plugger import util

LOG = logging.getLogger(__name__)

CONTACT_SIZE = 36
CONTACT_COUNT = plug.MAX_CONTACTS
CONTACT_OFFSET = 0x061A5

RXGROUP_SIZE = 96
RXGROUP_COUNT = plug.MAX_RXGROUPS
RXGROUP_OFFSET = 0x0EE45

# Not decoded yet
ZONE_SIZE = 64
ZONE_COUNT = 250
ZONE_OFFSET = 0x14C05

SCANLIST_SIZE = 104
SCANLIST_COUNT = 250
SCANLIST_OFFSET = 0x18A85

CHANNEL_SIZE = 64
CHANNEL_COUNT = 1000
CHANNEL_OFFSET = 0x1F025

RDT_SIZE = 0x40235

# High nibble of the contact type byte
TONE_OFF = 0xC
TONE_ON = 0xE

RECORD_FORMAT = """
struct contact {
  ul24 id;
  u8 flags:4,
     calltype:4;
  u8 name[32];
};

struct rxgroup {
  u8 name[32];
  ul16 members[%i];
};
""" % plug.MAX_MEMBERS

MEM_FORMAT = RECORD_FORMAT + """
#seekto 0x%05X;
struct contact contacts[%i];

#seekto 0x%05X;
struct rxgroup rxgroups[%i];
""" % (CONTACT_OFFSET, CONTACT_COUNT, RXGROUP_OFFSET, RXGROUP_COUNT)

CONTACT_FORMAT = RECORD_FORMAT + "struct contact contact;"
RXGROUP_FORMAT = RECORD_FORMAT + "struct rxgroup rxgroup;"


class _Blank:
    def __repr__(self):
        return "BLANK"


#: Returned by a record decoder for a slot that is not in use
BLANK = _Blank()


def _parse_record(fmt, raw, size):
    if len(raw) != size:
        raise errors.ShortRead("Record is %i bytes, expected %i" % (
            len(raw), size))
    return bitwise.parse(fmt, raw)


def decode_contact(raw):
    """Decode a raw contact record into a Contact, or BLANK"""
    _mem = _parse_record(CONTACT_FORMAT, raw, CONTACT_SIZE).contact
    flags = int(_mem.flags)
    calltype = int(_mem.calltype)

    if _mem.id.get_raw() == b"\xFF\xFF\xFF" and (
            (flags == 0xF and calltype == 0xF) or calltype == 0):
        return BLANK

    if flags not in (TONE_OFF, TONE_ON):
        raise errors.InvalidToneNibble(
            "Contact %i has unknown flags 0x%X" % (int(_mem.id), flags))
    if calltype > plug.CallType.ALL:
        raise errors.InvalidTypeNibble(
            "Contact %i has unknown call type %i" % (int(_mem.id), calltype))

    contact = plug.Contact()
    contact.id = int(_mem.id)
    contact.call_type = plug.CallType(calltype)
    contact.tone = flags == TONE_ON
    contact.name = label.decode_label(_mem.name.get_raw())
    return contact


def encode_contact(contact):
    """Encode a Contact into a raw contact record"""
    if not 0 <= contact.id <= plug.MAX_ID:
        raise errors.ValueOutOfRange("Contact ID %i is out of range" %
                                     contact.id)
    try:
        calltype = plug.CallType(contact.call_type)
    except ValueError:
        raise errors.InvalidTypeNibble("Unknown call type %r" %
                                       contact.call_type)
    if calltype == plug.CallType.BLANK:
        raise errors.InvalidTypeNibble("Contact %i has no call type" %
                                       contact.id)
    name = label.encode_label(contact.name)

    mmap = memmap.MemoryMapBytes(bytes(CONTACT_SIZE))
    _mem = bitwise.parse(CONTACT_FORMAT, mmap).contact
    _mem.id = contact.id
    _mem.flags = contact.tone and TONE_ON or TONE_OFF
    _mem.calltype = calltype
    _mem.name.set_raw(name)
    return mmap.get_packed()


def decode_rxgroup(raw):
    """Decode a raw receive group record into an RxGroup, or BLANK.

    The members of the result are left as the raw 1-based contact
    positions; see Plug.resolve_members().
    """
    _grp = _parse_record(RXGROUP_FORMAT, raw, RXGROUP_SIZE).rxgroup
    name = _grp.name.get_raw()
    if label.is_blank(name):
        return BLANK

    group = plug.RxGroup(label.decode_label(name))
    # An empty slot does not end the list
    group.positions = [int(x) for x in _grp.members if x != 0]
    return group


def decode_array(records, decoder):
    """Decode each raw record in @records with @decoder.

    Blank slots are skipped wherever they occur, everything else is
    returned in slot order. Any error aborts the whole array.
    """
    result = []
    for index, raw in enumerate(records):
        try:
            value = decoder(raw)
        except errors.PlugError as e:
            LOG.error("Failed to decode slot %i with %s: %s",
                      index + 1, decoder.__name__, e)
            LOG.debug("Raw slot %i:\n%s", index + 1, util.hexprint(raw))
            raise
        if value is BLANK:
            continue
        result.append(value)
    return result


# Raw array in MEM_FORMAT, record decoder, destination list in Plug
ARRAYS = [
    ("contacts", decode_contact, "contacts"),
    ("rxgroups", decode_rxgroup, "rxgroups"),
]


class RDTDecoder:
    """Decodes an RDT image held in memory into a Plug"""

    def __init__(self, data):
        self._mmap = memmap.MemoryMapBytes(data)
        self._memobj = None

    def decode_raw(self):
        """Return the raw layout elements bound to the image"""
        if self._memobj is None:
            self._memobj = bitwise.parse(MEM_FORMAT, self._mmap)
        return self._memobj

    def _is_short(self, raw):
        """Check the image covers every decoded array.

        Returns True if the image ends after the decoded arrays but
        before the end of a full RDT file, which is accepted as the end
        of input.
        """
        for name, decoder, dest in ARRAYS:
            array = raw[name]
            end = array.get_offset() + array.size() // 8
            if len(self._mmap) < end:
                raise errors.ShortRead(
                    "Image is %i bytes, %s need %i" % (len(self._mmap),
                                                       name, end))

        if len(self._mmap) < RDT_SIZE:
            LOG.info("Image is %i bytes, short of %i; stopping after "
                     "the decoded arrays", len(self._mmap), RDT_SIZE)
            return True
        return False

    def decode(self, dst=None):
        """Decode the image, returning (plug, short_read).

        If @dst is given it is reset and filled in, but only once the
        whole image has been decoded successfully.
        """
        raw = self.decode_raw()
        short_read = self._is_short(raw)

        result = plug.Plug()
        for name, decoder, dest in ARRAYS:
            records = (record.get_raw() for record in raw[name])
            setattr(result, dest, decode_array(records, decoder))
            LOG.debug("Decoded %i %s", len(getattr(result, dest)), name)

        contacts = [c for c in result.contacts
                    if c.call_type != plug.CallType.BLANK]
        if len(contacts) != len(result.contacts):
            LOG.warning("Dropping %i contacts with a blank call type",
                        len(result.contacts) - len(contacts))
        result.contacts = contacts

        for group in result.rxgroups:
            result.resolve_members(group)

        if dst is not None:
            dst.reset()
            dst.clone(result)
            result = dst

        return result, short_read


def decode(data, dst=None):
    """Decode the RDT image in @data, returning (plug, short_read)"""
    return RDTDecoder(data).decode(dst)
