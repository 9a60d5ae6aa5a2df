#!/usr/bin/env python
#
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

import argparse
import logging
import sys

from plugger import errors
from plugger import logger
from plugger import rdt
from plugger import util

LOG = logging.getLogger("plugger-dump")


def dump_contact(number, contact):
    print("Contact #%04i: %s (%i) %s%s" % (
        number, contact.name, contact.id, contact.call_type.name.title(),
        contact.tone and ", tone" or ""))


def dump_rxgroup(plug, number, group):
    names = ", ".join(c.name for c in plug.get_members(group))
    print("RX Group %i: %s [%s]" % (number, group.name, names))


def dump_raw_contact(decoder, number):
    if not 1 <= number <= rdt.CONTACT_COUNT:
        LOG.error("contact slot must be between 1 and %i (got %i)",
                  rdt.CONTACT_COUNT, number)
        return 1

    record = decoder.decode_raw().contacts[number - 1]
    raw = record.get_raw()
    if len(raw) != rdt.CONTACT_SIZE:
        LOG.error("Image ends before contact slot %i", number)
        return 1

    print("Contact slot %i at 0x%05X:" % (number, record.get_offset()))
    print(util.hexprint(raw), end="")
    return 0


def main(args=None):
    parser = argparse.ArgumentParser(
        description="Dump the contacts and receive groups of an RDT file")
    logger.add_version_argument(parser)
    parser.add_argument("file", help="RDT file to dump")
    parser.add_argument("--raw-contact", type=int, metavar="N",
                        help="Hex dump raw contact slot N instead")
    logger.add_arguments(parser)
    options = parser.parse_args(args)

    logger.handle_options(options)

    try:
        with open(options.file, "rb") as f:
            data = f.read()
    except OSError as e:
        LOG.error("Unable to read %s: %s", options.file, e)
        return 1

    decoder = rdt.RDTDecoder(data)

    if options.raw_contact is not None:
        return dump_raw_contact(decoder, options.raw_contact)

    try:
        plug, short_read = decoder.decode()
    except errors.PlugError as e:
        LOG.error("Failed to decode %s: %s", options.file, e)
        return 1

    if short_read:
        LOG.info("%s ends early, only the decoded arrays were read",
                 options.file)

    for i, contact in enumerate(plug.contacts):
        dump_contact(i + 1, contact)
    print()

    for i, group in enumerate(plug.rxgroups):
        dump_rxgroup(plug, i + 1, group)
    print()

    print("Number of contacts: %i" % len(plug.contacts))
    print("Number of rx groups: %i" % len(plug.rxgroups))
    return 0


if __name__ == "__main__":
    sys.exit(main())
