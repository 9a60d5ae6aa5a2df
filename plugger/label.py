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

"""Fixed-width UTF-16 labels as used for contact and group names"""

from plugger import errors

LABEL_SIZE = 32
LABEL_ENCODING = "utf-16-le"


def is_blank(raw):
    """Returns True if @raw is an unused label, without decoding it"""
    return not any(raw)


def decode_label(raw):
    """Decode a raw label into a string, dropping any NUL characters.

    The byte order is fixed, so a byte order mark is not interpreted
    and is returned as a character like any other.
    """
    if len(raw) != LABEL_SIZE:
        raise errors.ShortRead("Label is %i bytes, expected %i" % (
            len(raw), LABEL_SIZE))
    try:
        text = bytes(raw).decode(LABEL_ENCODING)
    except UnicodeDecodeError as e:
        raise errors.MalformedText("Invalid label %r: %s" % (bytes(raw), e))
    return text.replace("\x00", "")


def encode_label(text):
    """Encode @text as a zero-padded raw label"""
    if "\x00" in text:
        raise errors.MalformedText("Label %r contains a NUL character" % text)
    try:
        raw = text.encode(LABEL_ENCODING)
    except UnicodeEncodeError as e:
        raise errors.MalformedText("Unable to encode label %r: %s" % (
            text, e))
    if len(raw) > LABEL_SIZE:
        raise errors.ValueOutOfRange(
            "Label %r is %i bytes, the limit is %i" % (
                text, len(raw), LABEL_SIZE))
    return raw.ljust(LABEL_SIZE, b"\x00")
