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

'''A prefix tree over the unicode sequences of all known emoji.

The trie is built once from the whole catalog and frozen afterwards,
it can then be read from several threads without locking.
'''

from typing import Any
from typing import Optional
from typing import Iterable
from typing import Sequence
from types import MappingProxyType
from enum import Enum
import sys
import logging

import emoji_util
from emoji_types import Emoji

LOGGER = logging.getLogger('emojiparse')

class Matches(Enum):
    '''Result of classifying a sequence against the trie'''
    # The whole sequence is an emoji
    EXACTLY = 'exactly'
    # The sequence is a prefix of at least one emoji
    POSSIBLY = 'possibly'
    # Neither
    IMPOSSIBLE = 'impossible'

    def exact_match(self) -> bool:
        return self is Matches.EXACTLY

    def impossible_match(self) -> bool:
        return self is Matches.IMPOSSIBLE

class _Node:
    '''A node of the trie, owned by its parent'''
    __slots__ = ('children', 'emoji')

    def __init__(self) -> None:
        self.children: Any = {}
        self.emoji: Optional[Emoji] = None

    def freeze(self) -> None:
        for child in self.children.values():
            child.freeze()
        self.children = MappingProxyType(self.children)

def _check_bounds(sequence: Sequence[str], start: int, end: int) -> None:
    if start < 0 or start > end or end > len(sequence):
        raise IndexError(
            f'start {start}, end {end}, length {len(sequence)}')

class EmojiTrie:
    '''A trie of emoji unicode sequences

    “sequence” arguments may be a str or any sequence of single
    characters, for example the list used as a scratch buffer when
    decoding HTML character references.

    Examples:

    >>> boy = Emoji('\U0001f466', 'boy', ['boy'], supports_fitzpatrick=True)
    >>> family = Emoji('\U0001f468\u200d\U0001f469\u200d\U0001f466',
    ...                'family', ['family_man_woman_boy'])
    >>> trie = EmojiTrie([boy, family])
    >>> trie.max_depth
    5

    >>> trie.classify('\U0001f468\u200d')
    <Matches.POSSIBLY: 'possibly'>

    >>> trie.classify('\U0001f466')
    <Matches.EXACTLY: 'exactly'>

    >>> trie.classify('x')
    <Matches.IMPOSSIBLE: 'impossible'>

    >>> trie.best_match_from(family.unicode, 0) is family
    True

    >>> trie.best_match_from(family.unicode, 4) is boy
    True
    '''
    def __init__(self, emojis: Iterable[Emoji]) -> None:
        self._root = _Node()
        self._max_depth = 0
        self._size = 0
        self._frozen = False
        for emoji in emojis:
            self.insert(emoji.unicode, emoji)
        self._root.freeze()
        self._frozen = True
        if emoji_util.DEBUG_LEVEL > 1:
            LOGGER.debug(
                'EmojiTrie built: %s sequences, max_depth=%s',
                self._size, self._max_depth)

    @property
    def max_depth(self) -> int:
        '''Length of the longest sequence in the trie

        Never smaller than the length of any inserted sequence,
        callers use it to size scratch buffers.
        '''
        return self._max_depth

    def insert(self, sequence: Sequence[str], emoji: Emoji) -> None:
        '''Adds a sequence to the trie, only possible while building it

        If the sequence is already in the trie, the new emoji
        replaces the old one (last insertion wins) and a warning
        is logged.

        :param sequence: The unicode sequence of the emoji
        :param emoji: The payload stored at the end of the sequence
        '''
        if self._frozen:
            raise RuntimeError('EmojiTrie is frozen, cannot insert')
        node = self._root
        for char in sequence:
            try:
                node = node.children[char]
            except KeyError:
                child = _Node()
                node.children[char] = child
                node = child
        if node.emoji is not None:
            LOGGER.warning(
                'Duplicate emoji sequence %s: %r replaces %r',
                emoji_util.codepoints(''.join(sequence)), emoji, node.emoji)
        else:
            self._size += 1
        node.emoji = emoji
        self._max_depth = max(self._max_depth, len(sequence))

    def classify(self,
                 sequence: Sequence[str],
                 start: int = 0,
                 end: Optional[int] = None) -> Matches:
        '''Checks whether sequence[start:end] is an emoji or a prefix of one

        :param sequence: The characters to check
        :param start: Index of the first character to check
        :param end: Index after the last character to check,
                    defaults to the length of “sequence”
        :return: Matches.EXACTLY if the characters are an emoji,
                 Matches.POSSIBLY if they are the beginning of at
                 least one emoji (the empty sequence always is),
                 Matches.IMPOSSIBLE otherwise.
        :raises IndexError: if start and end are not
                            0 <= start <= end <= len(sequence)
        '''
        if end is None:
            end = len(sequence)
        _check_bounds(sequence, start, end)
        node = self._root
        for index in range(start, end):
            child = node.children.get(sequence[index])
            if child is None:
                return Matches.IMPOSSIBLE
            node = child
        if node.emoji is not None:
            return Matches.EXACTLY
        return Matches.POSSIBLY

    def best_match_from(self,
                        sequence: Sequence[str],
                        start: int = 0) -> Optional[Emoji]:
        '''Returns the longest emoji which starts at sequence[start]

        Walks the trie as far as the characters allow and returns
        the last emoji seen along that path. If the text diverges
        from a longer emoji before it is complete, a shorter emoji
        which is a prefix of it is returned instead.

        :param sequence: The characters to search in
        :param start: Where the emoji has to start
        :return: The emoji found or None
        :raises IndexError: if start is not 0 <= start <= len(sequence)
        '''
        _check_bounds(sequence, start, len(sequence))
        node = self._root
        best: Optional[Emoji] = None
        for index in range(start, len(sequence)):
            child = node.children.get(sequence[index])
            if child is None:
                break
            node = child
            if node.emoji is not None:
                best = node.emoji
        return best

    def exact_lookup(self,
                     sequence: Sequence[str],
                     start: int = 0,
                     end: Optional[int] = None) -> Optional[Emoji]:
        '''Returns the emoji whose unicode is exactly sequence[0:end]

        The walk always begins at the absolute start of “sequence”,
        “start” is only checked against the bounds. The HTML decoder
        relies on this, it grows a scratch buffer from index 0 and
        checks the filled part after each decoded character.

        :raises IndexError: if start and end are not
                            0 <= start <= end <= len(sequence)
        '''
        if end is None:
            end = len(sequence)
        _check_bounds(sequence, start, end)
        node = self._root
        for index in range(0, end):
            child = node.children.get(sequence[index])
            if child is None:
                return None
            node = child
        return node.emoji

    def __len__(self) -> int:
        return self._size

    def __contains__(self, unicode: object) -> bool:
        if not isinstance(unicode, str) or not unicode:
            return False
        return self.classify(unicode) is Matches.EXACTLY

    def __repr__(self) -> str:
        return f'EmojiTrie(size={self._size}, max_depth={self._max_depth})'

if __name__ == "__main__":
    LOG_HANDLER = logging.StreamHandler(stream=sys.stderr)
    LOGGER.setLevel(logging.DEBUG)
    LOGGER.addHandler(LOG_HANDLER)
    import doctest
    (FAILED, ATTEMPTED) = doctest.testmod()
    sys.exit(FAILED)
