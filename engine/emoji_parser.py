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

'''Finds emoji in text and converts them to other representations.

Scanning works on code points: at each position the longest emoji
of the catalog is looked up in the trie, then optional suffixes are
consumed in this fixed order:

1. a skin tone modifier, only if the emoji supports one
2. a zero width joiner directly followed by a gender sign
3. a variation selector-16

A suffix which is missing or incomplete simply ends the match, it
never invalidates the emoji found before it.
'''

from typing import List
from typing import Optional
from typing import Iterator
from typing import Iterable
from typing import Callable
from typing import Collection
from typing import NamedTuple
from typing import TYPE_CHECKING
import re
import logging

import emoji_util
from emoji_types import Emoji
from emoji_types import Fitzpatrick
from emoji_types import Gender
from emoji_types import FitzpatrickAction
from emoji_trie import EmojiTrie

if TYPE_CHECKING:
    # pylint: disable=cyclic-import
    from emoji_manager import EmojiManager

LOGGER = logging.getLogger('emojiparse')

ZWJ = emoji_util.ZERO_WIDTH_JOINER
VS16 = emoji_util.VARIATION_SELECTOR_16

class EmojiResult:
    '''An emoji found in a text

    emoji:        The base emoji from the catalog
    fitzpatrick:  The skin tone modifier following it, if any
    gender:       The gender sign following it after a ZWJ, if any
    start:        Index of the first character of the match
    end:          Index after the last character of the match,
                  including all suffixes
    '''
    __slots__ = ('emoji', 'fitzpatrick', 'gender', 'source', 'start', 'end')

    def __init__(self,
                 emoji: Emoji,
                 fitzpatrick: Optional[Fitzpatrick],
                 gender: Optional[Gender],
                 source: str,
                 start: int,
                 end: int) -> None:
        self.emoji = emoji
        self.fitzpatrick = fitzpatrick
        self.gender = gender
        self.source = source
        self.start = start
        self.end = end

    def has_fitzpatrick(self) -> bool:
        return self.fitzpatrick is not None

    @property
    def fitzpatrick_type(self) -> str:
        '''“type_1_2” … “type_6”, or '' if there is no modifier'''
        if self.fitzpatrick is None:
            return ''
        return self.fitzpatrick.type

    @property
    def fitzpatrick_unicode(self) -> str:
        if self.fitzpatrick is None:
            return ''
        return self.fitzpatrick.unicode

    @property
    def emoji_end_index(self) -> int:
        '''Index after the base emoji, without any suffix'''
        return self.start + len(self.emoji.unicode)

    @property
    def fitzpatrick_end_index(self) -> int:
        return self.emoji_end_index + (0 if self.fitzpatrick is None else 1)

    def __str__(self) -> str:
        return self.source[self.start:self.end]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EmojiResult):
            return NotImplemented
        return (self.emoji == other.emoji
                and self.fitzpatrick == other.fitzpatrick
                and self.gender == other.gender
                and self.start == other.start
                and self.end == other.end)

    def __repr__(self) -> str:
        return (f'EmojiResult(emoji={self.emoji!r}, '
                f'fitzpatrick={self.fitzpatrick}, gender={self.gender}, '
                f'start={self.start}, end={self.end})')

EmojiTransformer = Callable[[EmojiResult], str]

def get_emoji_in_position(
        trie: EmojiTrie, text: str, start: int) -> Optional[EmojiResult]:
    '''Returns the emoji starting exactly at text[start], or None

    :param trie: The trie of the catalog
    :param text: The text to search in
    :param start: The position where the emoji has to start
    :raises IndexError: if start is not 0 <= start <= len(text)
    '''
    emoji = trie.best_match_from(text, start)
    if emoji is None:
        return None
    end = start + len(emoji.unicode)
    fitzpatrick = None
    if emoji.supports_fitzpatrick:
        fitzpatrick = Fitzpatrick.find(text, end)
        if fitzpatrick is not None:
            end += len(fitzpatrick.unicode)
    gender = None
    if end < len(text) and text[end] == ZWJ:
        gender = Gender.find(text, end + 1)
        if gender is not None:
            end += 2
    if end < len(text) and text[end] == VS16:
        end += 1
    return EmojiResult(emoji, fitzpatrick, gender, text, start, end)

def get_next_emoji(
        trie: EmojiTrie, text: str, start: int = 0) -> Optional[EmojiResult]:
    '''Returns the first emoji found at or after text[start], or None

    :raises IndexError: if start is not 0 <= start <= len(text)
    '''
    if start < 0 or start > len(text):
        raise IndexError(f'start {start}, length {len(text)}')
    for position in range(start, len(text)):
        result = get_emoji_in_position(trie, text, position)
        if result is not None:
            return result
    return None

def iter_emojis(trie: EmojiTrie,
                text: str,
                limit: int = 0,
                start: int = 0) -> Iterator[EmojiResult]:
    '''Yields all emoji in the text from left to right

    Matches never overlap, each search continues at the end of the
    previous match. Calling it again starts over, nothing is kept
    between calls.

    :param trie: The trie of the catalog
    :param text: The text to search in
    :param limit: Stop after that many matches, 0 means no limit
    :param start: Where to start searching
    '''
    count = 0
    result = get_next_emoji(trie, text, start)
    while result is not None:
        yield result
        count += 1
        if 0 < limit <= count:
            return
        result = get_next_emoji(trie, text, result.end)

def parse_from_unicode(trie: EmojiTrie,
                       text: str,
                       transformer: EmojiTransformer) -> str:
    '''Replaces every emoji in the text by transformer(emoji_result)

    The text between the emoji is kept unchanged.
    '''
    parts: List[str] = []
    previous = 0
    for result in iter_emojis(trie, text):
        parts.append(text[previous:result.start])
        parts.append(transformer(result))
        previous = result.end
    parts.append(text[previous:])
    return ''.join(parts)

class _AliasCandidate(NamedTuple):
    '''An alias or HTML character reference found by parse_to_unicode()'''
    emoji: Emoji
    fitzpatrick: Optional[Fitzpatrick]
    start: int
    end: int

_HTML_DECIMAL_PATTERN = re.compile(r'&#([0-9]+);')
_HTML_HEXADECIMAL_PATTERN = re.compile(r'&#[xX]([0-9a-fA-F]+);')

def _decode_html_reference(text: str, start: int) -> Optional[re.Match[str]]:
    return (_HTML_HEXADECIMAL_PATTERN.match(text, start)
            or _HTML_DECIMAL_PATTERN.match(text, start))

class EmojiParser:
    '''Converts emoji in texts using the catalog of an EmojiManager

    Holds no state besides the manager, one instance can be shared
    between threads.
    '''
    def __init__(self, manager: 'EmojiManager') -> None:
        self._manager = manager
        self._trie = manager.trie

    @property
    def manager(self) -> 'EmojiManager':
        return self._manager

    def get_emoji_in_position(
            self, text: str, start: int) -> Optional[EmojiResult]:
        '''Returns the emoji starting exactly at text[start], or None'''
        return get_emoji_in_position(self._trie, text, start)

    def get_next_emoji(
            self, text: str, start: int = 0) -> Optional[EmojiResult]:
        '''Returns the first emoji at or after text[start], or None'''
        return get_next_emoji(self._trie, text, start)

    def iter_emojis(self,
                    text: str,
                    limit: int = 0,
                    start: int = 0) -> Iterator[EmojiResult]:
        return iter_emojis(self._trie, text, limit=limit, start=start)

    def extract_emojis(self, text: str, limit: int = 0) -> List[EmojiResult]:
        '''Returns all emoji found in the text, at most “limit” if > 0'''
        return list(self.iter_emojis(text, limit=limit))

    def extract_emoji_strings(self, text: str, limit: int = 0) -> List[str]:
        '''Returns the matched parts of the text, suffixes included'''
        return [str(result) for result in self.iter_emojis(text, limit=limit)]

    def parse_from_unicode(self,
                           text: str,
                           transformer: EmojiTransformer) -> str:
        '''Replaces every emoji in the text by transformer(emoji_result)'''
        return parse_from_unicode(self._trie, text, transformer)

    def parse_to_aliases(
            self,
            text: str,
            fitzpatrick_action: FitzpatrickAction = FitzpatrickAction.PARSE
    ) -> str:
        '''Replaces emoji by their canonical alias between colons

        PARSE:  “👦🏿” becomes “:boy|type_6:”
        REMOVE: “👦🏿” becomes “:boy:”
        IGNORE: “👦🏿” becomes “:boy:🏿”
        '''
        def transformer(result: EmojiResult) -> str:
            alias = result.emoji.aliases[0]
            if fitzpatrick_action is FitzpatrickAction.REMOVE:
                return f':{alias}:'
            if fitzpatrick_action is FitzpatrickAction.IGNORE:
                return f':{alias}:{result.fitzpatrick_unicode}'
            if result.has_fitzpatrick():
                return f':{alias}|{result.fitzpatrick_type}:'
            return f':{alias}:'
        return self.parse_from_unicode(text, transformer)

    def parse_to_html_decimal(
            self,
            text: str,
            fitzpatrick_action: FitzpatrickAction = FitzpatrickAction.PARSE
    ) -> str:
        '''Replaces emoji by HTML decimal character references

        With PARSE or REMOVE the skin tone modifier is dropped, with
        IGNORE it stays after the references.
        '''
        def transformer(result: EmojiResult) -> str:
            if fitzpatrick_action is FitzpatrickAction.IGNORE:
                return result.emoji.html_decimal + result.fitzpatrick_unicode
            return result.emoji.html_decimal
        return self.parse_from_unicode(text, transformer)

    def parse_to_html_hexadecimal(
            self,
            text: str,
            fitzpatrick_action: FitzpatrickAction = FitzpatrickAction.PARSE
    ) -> str:
        '''Replaces emoji by HTML hexadecimal character references'''
        def transformer(result: EmojiResult) -> str:
            if fitzpatrick_action is FitzpatrickAction.IGNORE:
                return (result.emoji.html_hexadecimal
                        + result.fitzpatrick_unicode)
            return result.emoji.html_hexadecimal
        return self.parse_from_unicode(text, transformer)

    def apply_fitzpatrick_action(
            self,
            text: str,
            fitzpatrick_action: FitzpatrickAction) -> str:
        '''Rewrites the emoji of a text, keeping them as unicode

        PARSE:  the match is kept as found
        REMOVE: the skin tone modifier is dropped, a gender
                suffix is kept
        IGNORE: the base emoji is followed by the raw modifier
        '''
        def transformer(result: EmojiResult) -> str:
            if fitzpatrick_action is FitzpatrickAction.PARSE:
                return str(result)
            if fitzpatrick_action is FitzpatrickAction.IGNORE:
                return result.emoji.unicode + result.fitzpatrick_unicode
            if result.gender is not None:
                return result.emoji.unicode + ZWJ + result.gender.unicode
            return result.emoji.unicode
        return self.parse_from_unicode(text, transformer)

    def replace_all_emojis(self, text: str, replacement: str) -> str:
        return self.parse_from_unicode(text, lambda result: replacement)

    def remove_all_emojis(self, text: str) -> str:
        return self.parse_from_unicode(text, lambda result: '')

    def remove_emojis(self, text: str, emojis_to_remove: Iterable[Emoji]) -> str:
        '''Removes only the given emoji from the text

        Other emoji are kept with their skin tone modifier.
        '''
        to_remove: Collection[Emoji] = frozenset(emojis_to_remove)
        def transformer(result: EmojiResult) -> str:
            if result.emoji in to_remove:
                return ''
            return result.emoji.unicode + result.fitzpatrick_unicode
        return self.parse_from_unicode(text, transformer)

    def remove_all_emojis_except(
            self, text: str, emojis_to_keep: Iterable[Emoji]) -> str:
        '''Removes all emoji from the text except the given ones'''
        to_keep: Collection[Emoji] = frozenset(emojis_to_keep)
        def transformer(result: EmojiResult) -> str:
            if result.emoji in to_keep:
                return result.emoji.unicode + result.fitzpatrick_unicode
            return ''
        return self.parse_from_unicode(text, transformer)

    def parse_to_unicode(self, text: str) -> str:
        '''Replaces aliases and HTML character references by emoji

        “:smile:” becomes “😄”, “:boy|type_6:” becomes “👦🏿”,
        “&#128516;” and “&#x1f604;” become “😄”. Anything which
        is not a known emoji stays unchanged.
        '''
        parts: List[str] = []
        position = 0
        while position < len(text):
            candidate = self._get_alias_at(text, position)
            if candidate is None:
                candidate = self._get_html_encoded_emoji_at(text, position)
            if candidate is None:
                parts.append(text[position])
                position += 1
                continue
            parts.append(candidate.emoji.unicode)
            if candidate.fitzpatrick is not None:
                parts.append(candidate.fitzpatrick.unicode)
            position = candidate.end
        return ''.join(parts)

    def _get_alias_at(self, text: str, start: int) -> Optional[_AliasCandidate]:
        '''Finds an alias like “:smile:” or “:boy|type_6:” at text[start]'''
        if len(text) < start + 2 or text[start] != ':':
            return None
        # An alias has at least one character:
        alias_end = text.find(':', start + 2)
        if alias_end == -1:
            return None
        fitzpatrick_start = text.find('|', start + 2, alias_end)
        if fitzpatrick_start != -1:
            emoji = self._manager.get_for_alias(
                text[start:fitzpatrick_start])
            if emoji is None or not emoji.supports_fitzpatrick:
                return None
            fitzpatrick = Fitzpatrick.from_type(
                text[fitzpatrick_start + 1:alias_end])
            return _AliasCandidate(emoji, fitzpatrick, start, alias_end + 1)
        emoji = self._manager.get_for_alias(text[start:alias_end])
        if emoji is None:
            return None
        return _AliasCandidate(emoji, None, start, alias_end + 1)

    def _get_html_encoded_emoji_at(
            self, text: str, start: int) -> Optional[_AliasCandidate]:
        '''Finds the longest emoji written as HTML references at text[start]

        Decodes one character reference after the other into a
        scratch buffer and checks the buffer against the trie after
        each one. Stops when the buffer can no longer become an emoji.
        '''
        if len(text) < start + 4 or not text.startswith('&#', start):
            return None
        buffer: List[str] = [''] * self._trie.max_depth
        buffer_index = 0
        longest_emoji: Optional[Emoji] = None
        longest_end = -1
        position = start
        while buffer_index < len(buffer):
            match = _decode_html_reference(text, position)
            if match is None:
                break
            try:
                radix = 10 if match.re is _HTML_DECIMAL_PATTERN else 16
                character = chr(int(match.group(1), radix))
            except (ValueError, OverflowError):
                break
            buffer[buffer_index] = character
            buffer_index += 1
            found = self._trie.exact_lookup(buffer, 0, buffer_index)
            if found is not None:
                longest_emoji = found
                longest_end = match.end()
            if self._trie.classify(buffer, 0, buffer_index).impossible_match():
                break
            position = match.end()
        if longest_emoji is None:
            return None
        if emoji_util.DEBUG_LEVEL > 1:
            LOGGER.debug('HTML references %r decoded to %s',
                         text[start:longest_end],
                         emoji_util.codepoints(longest_emoji.unicode))
        return _AliasCandidate(longest_emoji, None, start, longest_end)
