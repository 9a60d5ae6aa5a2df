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

# Language:
#
# Example definitions:
#
#  u8   foo;     /* Unsigned 8-bit value                    */
#  u16  foo;     /* Unsigned 16-bit value                   */
#  ul16 foo;     /* Unsigned 16-bit value (LE)              */
#  u24  foo;     /* Unsigned 24-bit value                   */
#  ul24 foo;     /* Unsigned 24-bit value (LE)              */
#  u32  foo;     /* Unsigned 32-bit value                   */
#  ul32 foo;     /* Unsigned 32-bit value (LE)              */
#  u8   foo[8];  /* Array of eight unsigned 8-bit values    */
#  u8   foo:4,
#       bar:4;   /* Two nibbles, most significant first     */
#  struct {
#   u8 foo;
#   ul16 bar;
#  } baz;        /* Structure with u8 and ul16              */
#  struct rec {
#   u8 foo;
#  };            /* Named structure type, takes no space    */
#  struct rec recs[4]; /* Array of the named type           */
#
# Example directives:
#
# #seekto 0x1AB; /* Set the data offset to 0x1AB            */
# #seek 4;       /* Set the data offset += 4                */
#
# Usage:
#
# Create a data definition in a string, and pass it and the data
# to parse to the parse() function.  The result is a structure with
# attribute access to its members, and lists of elements for arrays.
# Integer elements can be used as ints directly and assigned to,
# which writes through to the underlying memory map.

import logging
import os
import struct

import lark

from plugger import bitwise_grammar
from plugger import memmap

LOG = logging.getLogger(__name__)


class ParseError(Exception):
    """Indicates an error parsing a definition"""
    pass


def format_binary(nbits, value, pad=8):
    s = ""
    for i in range(0, nbits):
        s = "%i%s" % (value & 0x01, s)
        value >>= 1
    return "%s%s" % ((pad - len(s)) * ".", s)


def bits_between(start, end):
    bits = (1 << (int(end) - int(start))) - 1
    return bits << int(start)


class DataElement:
    _size = 1

    def __init__(self, data, offset):
        self._data = data
        self._offset = int(offset)

    def size(self):
        """Return the size of this element in bits"""
        return int(self._size * 8)

    def get_offset(self):
        return self._offset

    def _get_value(self, data):
        raise NotImplementedError()

    def get_value(self):
        value = self._data[self._offset:self._offset + self._size]
        return self._get_value(value)

    def set_value(self, value):
        raise NotImplementedError("Not implemented for %s" % self.__class__)

    def get_raw(self):
        return self._data[self._offset:self._offset + self.size() // 8]

    def set_raw(self, data):
        if len(data) != self.size() // 8:
            raise ValueError("Expected %i bytes, got %i" % (
                self.size() // 8, len(data)))
        self._data[self._offset] = bytes(data)

    def __repr__(self):
        return "(%s:%i bytes @ %05x)" % (self.__class__.__name__,
                                         self._size,
                                         self._offset)


class arrayDataElement(DataElement):
    def __init__(self, offset):
        self.__items = []
        self._offset = offset

    def __repr__(self):
        s = "%i:[" % len(self.__items)
        s += ",".join([repr(item) for item in self.__items])
        s += "]"
        return s

    def append(self, item):
        self.__items.append(item)

    def set_value(self, value):
        if len(value) != len(self.__items):
            raise ValueError("Array cardinality mismatch")
        for i in range(0, len(value)):
            self.__items[i].set_value(value[i])

    def get_raw(self):
        return b"".join(item.get_raw() for item in self.__items)

    def set_raw(self, data):
        item_size = self.__items[0].size() // 8
        if len(data) != item_size * len(self):
            raise ValueError("Invalid raw data length %i for %i items" % (
                len(data), len(self)))
        for i in range(len(self)):
            self[i].set_raw(data[i * item_size:(i + 1) * item_size])

    def __setitem__(self, index, val):
        self.__items[index].set_value(val)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return self.__items[index]
        else:
            return self.__items[int(index)]

    def __len__(self):
        return len(self.__items)

    def __iter__(self):
        return iter(self.__items)

    def size(self):
        size = 0
        for i in self.__items:
            size += i.size()
        return int(size)


class intDataElement(DataElement):
    def __repr__(self):
        fmt = "0x%%0%iX" % (self._size * 2)
        return fmt % int(self)

    def __int__(self):
        return self.get_value()

    def __index__(self):
        return self.get_value()

    def __bool__(self):
        return self.get_value() != 0

    def __eq__(self, val):
        return self.get_value() == val

    def __ne__(self, val):
        return self.get_value() != val

    def __lt__(self, val):
        return self.get_value() < val

    def __le__(self, val):
        return self.get_value() <= val

    def __gt__(self, val):
        return self.get_value() > val

    def __ge__(self, val):
        return self.get_value() >= val

    __hash__ = None


class u8DataElement(intDataElement):
    _size = 1

    def _get_value(self, data):
        return data[0]

    def set_value(self, value):
        self._data[self._offset] = (int(value) & 0xFF)


class u16DataElement(intDataElement):
    _size = 2
    _endianess = ">"

    def _get_value(self, data):
        return struct.unpack(self._endianess + "H", data)[0]

    def set_value(self, value):
        self._data[self._offset] = struct.pack(self._endianess + "H",
                                               int(value) & 0xFFFF)


class ul16DataElement(u16DataElement):
    _endianess = "<"


class u24DataElement(intDataElement):
    _size = 3
    _endianess = ">"

    def _get_value(self, data):
        pre = self._endianess == ">" and b"\x00" or b""
        post = self._endianess == "<" and b"\x00" or b""
        return struct.unpack(self._endianess + "I", pre+data+post)[0]

    def set_value(self, value):
        # Pack as 32 bits and drop the most significant byte
        if self._endianess == "<":
            start = 0
            end = 3
        else:
            start = 1
            end = 4
        packed = struct.pack(self._endianess + "I", int(value) & 0xFFFFFFFF)
        self._data[self._offset] = packed[start:end]


class ul24DataElement(u24DataElement):
    _endianess = "<"


class u32DataElement(intDataElement):
    _size = 4
    _endianess = ">"

    def _get_value(self, data):
        return struct.unpack(self._endianess + "I", data)[0]

    def set_value(self, value):
        self._data[self._offset] = struct.pack(self._endianess + "I",
                                               int(value) & 0xFFFFFFFF)


class ul32DataElement(u32DataElement):
    _endianess = "<"


class bitDataElement(intDataElement):
    _nbits = 0
    _shift = 0
    _subgen = u8DataElement  # Default to a byte

    def __repr__(self):
        fmt = "0x%%0%iX (%%sb)" % (self._size * 2)
        return fmt % (int(self), format_binary(self._nbits, self.get_value()))

    def get_value(self):
        data = self._subgen(self._data, self._offset).get_value()
        mask = bits_between(self._shift-self._nbits, self._shift)
        val = (data & mask) >> int(self._shift - self._nbits)
        return val

    def set_value(self, value):
        mask = bits_between(self._shift-self._nbits, self._shift)

        data = self._subgen(self._data, self._offset).get_value()
        data &= ~mask

        value = ((int(value) << int(self._shift-self._nbits)) & mask) | data

        self._subgen(self._data, self._offset).set_value(value)

    def size(self):
        return int(self._nbits)


class structDataElement(DataElement):
    def __init__(self, data, offset, name="(anonymous)"):
        self._generators = {}
        self._keys = []
        self._name = name
        DataElement.__init__(self, data, offset)
        self.__init = True

    def __repr__(self):
        s = "struct {" + os.linesep
        for prop in self._keys:
            s += "  %15s: %s%s" % (prop, repr(self._generators[prop]),
                                   os.linesep)
        s += "} %s (%i bytes at 0x%05X)%s" % (self._name,
                                              self.size() // 8,
                                              self._offset,
                                              os.linesep)
        return s

    def __contains__(self, key):
        return key in self._generators

    def __getitem__(self, key):
        return self._generators[key]

    def __setitem__(self, key, value):
        if key in self._generators:
            self._generators[key].set_value(value)
        else:
            self._generators[key] = value
            self._keys.append(key)

    def __getattr__(self, name):
        try:
            return self._generators[name]
        except KeyError:
            raise AttributeError("No attribute %s in struct %s" % (
                name, self._name))

    def __setattr__(self, name, value):
        if "_structDataElement__init" not in self.__dict__:
            self.__dict__[name] = value
        else:
            self.__dict__["_generators"][name].set_value(value)

    def size(self):
        size = 0
        for gen in self._generators.values():
            size += gen.size()
        return int(size)

    def get_raw(self):
        size = self.size() // 8
        return self._data[self._offset:self._offset+size]

    def __iter__(self):
        for key in self._keys:
            yield self._generators[key]

    def items(self):
        for key in self._keys:
            yield key, self._generators[key]


class Processor:
    _types = {
        "u8":    u8DataElement,
        "u16":   u16DataElement,
        "ul16":  ul16DataElement,
        "u24":   u24DataElement,
        "ul24":  ul24DataElement,
        "u32":   u32DataElement,
        "ul32":  ul32DataElement,
        }

    def __init__(self, data, offset):
        self._data = data
        self._offset = offset
        self._generators = None
        self._user_types = {}

    def _add(self, name, gen):
        if name in self._generators:
            raise ParseError("Duplicate definition for %s at 0x%05X" % (
                name, self._offset))
        self._generators[name] = gen

    def do_bitfield(self, dtype, bitfield):
        gen = self._types[dtype]
        nbytes = gen(self._data, 0).size() // 8
        bitsleft = nbytes * 8

        for bitdef in bitfield.children:
            name, bits = bitdef.children
            bits = int(bits, 0)
            if bits > bitsleft:
                raise ParseError("Bitfield %s overflows %s" % (name, dtype))

            class bitDE(bitDataElement):
                _nbits = bits
                _shift = bitsleft
                _subgen = gen

            self._add(str(name), bitDE(self._data, self._offset))
            bitsleft -= bits

        if bitsleft:
            LOG.warning("%i trailing bits unaccounted for in %s",
                        bitsleft, name)

        return nbytes

    def parse_defn(self, defn):
        dtype = str(defn.children[0])
        target = defn.children[1]

        if target.data == "bitfield":
            self._offset += self.do_bitfield(dtype, target)
            return

        name = str(target.children[0])
        if target.data == "array":
            res = arrayDataElement(self._offset)
            for i in range(0, int(target.children[1], 0)):
                gen = self._types[dtype](self._data, self._offset)
                self._offset += (gen.size() // 8)
                res.append(gen)
        else:
            res = self._types[dtype](self._data, self._offset)
            self._offset += (res.size() // 8)
        self._add(name, res)

    def _struct_element(self, name, block):
        element = structDataElement(self._data, self._offset, name=name)
        parent = self._generators
        self._generators = element
        try:
            self.parse_block(block.children)
        finally:
            self._generators = parent
        return element

    def parse_struct_decl(self, decl):
        kind, target = decl.children
        if kind.data == "typename":
            typename = str(kind.children[0])
            try:
                block = self._user_types[typename]
            except KeyError:
                raise ParseError("Unknown struct type %s" % typename)
        else:
            block = kind

        name = str(target.children[0])
        if target.data == "array":
            result = arrayDataElement(self._offset)
            for i in range(0, int(target.children[1], 0)):
                result.append(self._struct_element(name, block))
        else:
            result = self._struct_element(name, block)
        self._add(name, result)

    def parse_struct(self, struct):
        inner = struct.children[0]
        if inner.data == "struct_defn":
            name, block = inner.children
            self._user_types[str(name)] = block
        elif inner.data == "struct_decl":
            self.parse_struct_decl(inner)
        else:
            raise ParseError("Internal error: What is `%s'?" % inner.data)

    def parse_directive(self, directive):
        inner = directive.children[0]
        value = int(inner.children[0], 0)
        if inner.data == "seekto":
            if value < self._offset:
                LOG.warning("Negative seek from 0x%05X to 0x%05X",
                            self._offset, value)
            self._offset = value
        elif inner.data == "seek":
            self._offset += value

    def parse_block(self, lang):
        for stmt in lang:
            if stmt.data == "struct":
                self.parse_struct(stmt)
            elif stmt.data == "definition":
                self.parse_defn(stmt)
            elif stmt.data == "directive":
                self.parse_directive(stmt)

    def parse(self, tree):
        self._generators = structDataElement(self._data, self._offset)
        self.parse_block(tree.children)
        return self._generators


def parse(spec, data, offset=0):
    """Bind the layout in @spec to @data, starting at @offset

    @data may be a MemoryMapBytes, in which case assignments through the
    returned elements modify it, or any bytes-like object, which is
    copied first.
    """
    if not isinstance(data, memmap.MemoryMapBytes):
        data = memmap.MemoryMapBytes(data)
    try:
        tree = bitwise_grammar.parse(spec)
    except lark.UnexpectedInput as e:
        raise ParseError("Invalid definition: %s" % e)
    return Processor(data, offset).parse(tree)
