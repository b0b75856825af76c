# vim:et sts=4 sw=4
#
# emojiparse - Find emoji sequences in text and convert them
#
# Copyright (c) 2024-2026 The emojiparse authors
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
# along with this program.  If not, see <http://www.gnu.org/licenses/>

'''
The value types of emojiparse: emoji records and the closed sets
of skin tone and gender modifiers.
'''

from typing import Any
from typing import Optional
from typing import Iterable
from typing import Tuple
from typing import Sequence
from enum import Enum

SKIN_TONE_MODIFIERS = (
    '\U0001f3fb', '\U0001f3fc', '\U0001f3fd', '\U0001f3fe', '\U0001f3ff')

class Emoji:
    '''An emoji from the catalog

    Two Emoji instances are equal if they have the same unicode
    sequence, description, aliases and tags do not matter.

    Examples:

    >>> smile = Emoji('\U0001f604', 'smiling face', ['smile'], ['happy'])
    >>> smile.aliases
    ('smile',)

    >>> smile.html_decimal
    '&#128516;'

    >>> smile.html_hexadecimal
    '&#x1f604;'

    >>> smile == Emoji('\U0001f604', None, ['grin'], [])
    True
    '''
    __slots__ = ('_unicode', '_description', '_aliases', '_tags',
                 '_supports_fitzpatrick')

    def __init__(self,
                 unicode: str,
                 description: Optional[str],
                 aliases: Iterable[str],
                 tags: Iterable[str] = (),
                 supports_fitzpatrick: bool = False) -> None:
        if not unicode:
            raise ValueError('An emoji needs a non-empty unicode sequence')
        aliases = tuple(aliases)
        if not aliases:
            raise ValueError(
                f'Emoji {unicode!r} needs at least one alias')
        object.__setattr__(self, '_unicode', unicode)
        object.__setattr__(self, '_description', description)
        object.__setattr__(self, '_aliases', aliases)
        object.__setattr__(self, '_tags', tuple(tags))
        object.__setattr__(
            self, '_supports_fitzpatrick', bool(supports_fitzpatrick))

    @property
    def unicode(self) -> str:
        '''The unicode sequence of the emoji'''
        return self._unicode

    @property
    def description(self) -> Optional[str]:
        return self._description

    @property
    def aliases(self) -> Tuple[str, ...]:
        '''The aliases, the first one is the canonical alias'''
        return self._aliases

    @property
    def tags(self) -> Tuple[str, ...]:
        return self._tags

    @property
    def supports_fitzpatrick(self) -> bool:
        '''Whether a skin tone modifier may follow this emoji'''
        return self._supports_fitzpatrick

    @property
    def html_decimal(self) -> str:
        '''The emoji as HTML decimal character references'''
        return ''.join([f'&#{ord(char)};' for char in self._unicode])

    @property
    def html_hexadecimal(self) -> str:
        '''The emoji as HTML hexadecimal character references'''
        return ''.join([f'&#x{ord(char):x};' for char in self._unicode])

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f'Emoji is immutable, cannot set {name}')

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f'Emoji is immutable, cannot delete {name}')

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Emoji):
            return NotImplemented
        return self._unicode == other._unicode

    def __hash__(self) -> int:
        return hash(self._unicode)

    def __str__(self) -> str:
        return self._unicode

    def __repr__(self) -> str:
        return (f'Emoji(unicode={self._unicode!r}, '
                f'aliases={list(self._aliases)!r}, '
                f'supports_fitzpatrick={self._supports_fitzpatrick})')

class Fitzpatrick(Enum):
    '''The five skin tone modifiers

    Examples:

    >>> Fitzpatrick.from_type('type_6') is Fitzpatrick.TYPE_6
    True

    >>> Fitzpatrick.from_type('type_7') is None
    True

    >>> Fitzpatrick.TYPE_1_2.type
    'type_1_2'
    '''
    TYPE_1_2 = '\U0001f3fb'
    TYPE_3 = '\U0001f3fc'
    TYPE_4 = '\U0001f3fd'
    TYPE_5 = '\U0001f3fe'
    TYPE_6 = '\U0001f3ff'

    @property
    def unicode(self) -> str:
        return str(self.value)

    @property
    def type(self) -> str:
        '''The name used in aliases like “:boy|type_6:”'''
        return self.name.lower()

    @classmethod
    def from_unicode(cls, unicode: str) -> Optional['Fitzpatrick']:
        for fitzpatrick in cls:
            if fitzpatrick.value == unicode:
                return fitzpatrick
        return None

    @classmethod
    def from_type(cls, type_name: str) -> Optional['Fitzpatrick']:
        try:
            return cls[type_name.upper()]
        except (KeyError,):
            return None

    @classmethod
    def find(cls, text: Sequence[str], start: int) -> Optional['Fitzpatrick']:
        '''Returns the skin tone modifier at position “start” of “text”

        Returns None if there is none or if “start” is beyond the
        end of the text.
        '''
        if start < 0 or start >= len(text):
            return None
        return cls.from_unicode(text[start])

class Gender(Enum):
    '''The gender signs which may follow an emoji after a ZWJ

    Only the sign itself is looked for in text, the variation
    selector which usually follows it is consumed separately.

    Examples:

    >>> Gender.find('\u200d\u2640', 1) is Gender.FEMALE
    True

    >>> Gender.find('\u2642', 1) is None
    True
    '''
    MALE = '\u2642\ufe0f'
    FEMALE = '\u2640\ufe0f'

    @property
    def unicode(self) -> str:
        return str(self.value)

    @property
    def glyph(self) -> str:
        '''The gender sign without the variation selector'''
        return str(self.value)[0]

    @classmethod
    def from_unicode(cls, unicode: str) -> Optional['Gender']:
        for gender in cls:
            if unicode in (gender.value, gender.glyph):
                return gender
        return None

    @classmethod
    def from_type(cls, type_name: str) -> Optional['Gender']:
        try:
            return cls[type_name.upper()]
        except (KeyError,):
            return None

    @classmethod
    def find(cls, text: Sequence[str], start: int) -> Optional['Gender']:
        '''Returns the gender sign at position “start” of “text”'''
        if start < 0 or start >= len(text):
            return None
        for gender in cls:
            if text[start] == gender.glyph:
                return gender
        return None

class FitzpatrickAction(Enum):
    '''What the conversion functions do with skin tone modifiers'''
    # Convert the modifier together with the emoji it belongs to
    PARSE = 'parse'
    # Drop the modifier
    REMOVE = 'remove'
    # Keep the modifier unchanged after the converted emoji
    IGNORE = 'ignore'
