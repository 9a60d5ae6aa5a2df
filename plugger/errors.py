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


class PlugError(Exception):
    """Base class for all codeplug errors"""
    pass


class ShortRead(PlugError):
    """Fewer bytes are available than a record or array requires"""
    pass


class InvalidDataError(PlugError):
    """The codeplug contains some invalid data"""
    pass


class InvalidToneNibble(InvalidDataError):
    """A contact type byte has an unrecognized flag nibble"""
    pass


class InvalidTypeNibble(InvalidDataError):
    """A contact type byte has an unrecognized call type"""
    pass


class MalformedText(InvalidDataError):
    """A label is not valid in its text encoding"""
    pass


class UnresolvedReference(InvalidDataError):
    """A receive group member does not point at a decoded contact"""
    pass


class InvalidValueError(PlugError):
    """An invalid value for a given field was used"""
    pass


class ValueOutOfRange(InvalidValueError):
    """A value does not fit in its field"""
    pass
