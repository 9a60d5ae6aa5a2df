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

import functools

import lark

TYPES = ["u8", "u16", "ul16", "u24", "ul24", "u32", "ul32"]
DIRECTIVES = ["seekto", "seek"]

LANG = r"""
start: _statement*
_statement: definition | struct | directive

definition: TYPE (array | bitfield | symbol) ";"
bitfield: bitdef ("," bitdef)*
bitdef: SYMBOL ":" COUNT
array: SYMBOL "[" COUNT "]"
symbol: SYMBOL

struct: "struct" (struct_defn | struct_decl) ";"
struct_defn: SYMBOL block
struct_decl: (typename | block) (array | symbol)
typename: SYMBOL
block: "{" _statement* "}"

directive: "#" (seekto | seek) ";"
seekto: "seekto" COUNT
seek: "seek" COUNT

TYPE: %s
SYMBOL: /[A-Za-z_][A-Za-z0-9_]*/
COUNT: /0x[0-9a-fA-F]+|[0-9]+/

%%import common.WS
%%import common.C_COMMENT
%%import common.CPP_COMMENT
%%ignore WS
%%ignore C_COMMENT
%%ignore CPP_COMMENT
""" % " | ".join('"%s"' % t for t in TYPES)


@functools.lru_cache(maxsize=None)
def _parser():
    return lark.Lark(LANG)


@functools.lru_cache(maxsize=32)
def parse(data):
    """Parse a layout definition into a tree

    Trees are cached by definition text and must not be modified by
    the caller.
    """
    return _parser().parse(data)
