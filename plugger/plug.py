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
Radio-independent codeplug data model.

A Plug holds ordered lists of contacts and receive groups. Receive
groups refer to contacts by their index in Plug.contacts and never own
them.
"""

import enum

from plugger import errors

MAX_CONTACTS = 1000
MAX_RXGROUPS = 250
MAX_MEMBERS = 32
MAX_ID = 0xFFFFFF
NAME_LENGTH = 16


class CallType(enum.IntEnum):
    BLANK = 0
    GROUP = 1
    PRIVATE = 2
    ALL = 3


class Contact:
    """A DMR ID, name, and call type used by channels and groups"""
    id: int = 0
    call_type: CallType = CallType.GROUP
    tone: bool = False
    name: str = ""

    def __init__(self, id=0, call_type=CallType.GROUP, tone=False, name=""):
        self.id = id
        self.call_type = call_type
        self.tone = tone
        self.name = name

    def __repr__(self):
        return '<Contact %s: id=%i,call_type=%s,tone=%s>' % (
            self.name, self.id, CallType(self.call_type).name, self.tone)

    def __eq__(self, other):
        if not isinstance(other, Contact):
            return NotImplemented
        return (self.id, self.call_type, self.tone, self.name) == (
            other.id, other.call_type, other.tone, other.name)

    __hash__ = None

    def dupe(self):
        """Return a copy of @self"""
        return self.__class__(self.id, self.call_type, self.tone, self.name)


class RxGroup:
    """A named set of contacts a channel will receive from.

    positions holds the 1-based contact positions as stored in the
    codeplug. members holds the 0-based indexes into Plug.contacts once
    they have been resolved.
    """

    def __init__(self, name="", positions=None):
        self.name = name
        self.positions = list(positions or [])
        self.members = []

    def __repr__(self):
        return '<RxGroup %s: members=%s>' % (self.name,
                                             self.members or self.positions)

    def __eq__(self, other):
        if not isinstance(other, RxGroup):
            return NotImplemented
        return (self.name, self.positions, self.members) == (
            other.name, other.positions, other.members)

    __hash__ = None


class Zone:
    """A named set of channels (no codec yet)"""

    def __init__(self, name=""):
        self.name = name


class ScanList:
    """A named list of channels to scan (no codec yet)"""

    def __init__(self, name=""):
        self.name = name


class Channel:
    """A single channel memory (no codec yet)"""

    def __init__(self, name=""):
        self.name = name


class Plug:
    """A decoded codeplug"""

    def __init__(self):
        self.contacts = []
        self.rxgroups = []
        self.zones = []
        self.scanlists = []
        self.channels = []

    def __repr__(self):
        return '<Plug: %i contacts, %i rxgroups>' % (len(self.contacts),
                                                    len(self.rxgroups))

    def clone(self, source):
        """Absorb all of the lists of @source"""
        for k, v in list(source.__dict__.items()):
            self.__dict__[k] = v

    def reset(self):
        """Clear out every list"""
        self.contacts = []
        self.rxgroups = []
        self.zones = []
        self.scanlists = []
        self.channels = []

    def resolve_members(self, rxgroup):
        """Resolve the raw positions of @rxgroup against our contacts.

        Raises UnresolvedReference if a position does not match a
        contact; @rxgroup is left unchanged in that case.
        """
        members = []
        for position in rxgroup.positions:
            if not 1 <= position <= len(self.contacts):
                raise errors.UnresolvedReference(
                    "Group %r member %i is not one of %i contacts" % (
                        rxgroup.name, position, len(self.contacts)))
            members.append(position - 1)
        rxgroup.members = members

    def get_members(self, rxgroup):
        """Return the Contact objects that @rxgroup refers to"""
        return [self.contacts[index] for index in rxgroup.members]
