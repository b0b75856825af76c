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
The emoji catalog with all its indexes.

An EmojiManager is built once from the list of emoji and never
changes afterwards. Pass it to an EmojiParser to convert texts.
'''

from typing import Dict
from typing import List
from typing import Tuple
from typing import Optional
from typing import Iterable
from typing import FrozenSet
from typing import Sequence
from typing import NamedTuple
import sys
import functools
import logging

import rapidfuzz

import emoji_util
import emoji_loader
import emoji_parser
from emoji_types import Emoji
from emoji_trie import EmojiTrie
from emoji_trie import Matches

LOGGER = logging.getLogger('emojiparse')

# Many aliases and tags are shared by several emoji, so the same
# label is matched against the same query again and again.
@functools.lru_cache(maxsize=None)
def _match_rapidfuzz(label: str, query: str) -> float:
    '''Matches a normalized label against a normalized query

    Returns 0 if the score is below the cutoff.
    '''
    return rapidfuzz.fuzz.token_set_ratio(label, query, score_cutoff=90.0)

class SearchResult(NamedTuple):
    '''One result of EmojiManager.search()'''
    emoji: Emoji
    # The alias, tag or description which matched best
    label: str
    score: float

class EmojiManager:
    '''Holds the emoji catalog and its lookup structures

    Examples:

    >>> manager = EmojiManager([
    ...     Emoji('\U0001f604', 'smiling face', ['smile'], ['happy']),
    ...     Emoji('\U0001f466', 'boy', ['boy'], ['child'], True)])
    >>> manager.get_for_alias(':smile:').unicode == '\U0001f604'
    True

    >>> manager.is_emoji('\U0001f466\U0001f3ff')
    True

    >>> manager.is_emoji('x\U0001f466')
    False

    >>> sorted(manager.all_tags())
    ['child', 'happy']
    '''
    def __init__(self, emojis: Iterable[Emoji]) -> None:
        emojis = list(emojis)
        self._emojis_by_alias: Dict[str, Emoji] = {}
        tag_sets: Dict[str, List[Emoji]] = {}
        for emoji in emojis:
            for alias in emoji.aliases:
                if alias in self._emojis_by_alias:
                    LOGGER.warning(
                        'Duplicate alias “%s”: %r replaces %r',
                        alias, emoji, self._emojis_by_alias[alias])
                self._emojis_by_alias[alias] = emoji
            for tag in emoji.tags:
                tag_sets.setdefault(tag, []).append(emoji)
        self._emojis_by_tag: Dict[str, FrozenSet[Emoji]] = {
            tag: frozenset(tagged) for (tag, tagged) in tag_sets.items()}
        # Longest sequences first, like the order of the catalog
        # when it is matched with str.replace() instead of a trie.
        self._all_emojis: Tuple[Emoji, ...] = tuple(
            sorted(emojis, key=lambda emoji: len(emoji.unicode),
                   reverse=True))
        self._trie = EmojiTrie(emojis)
        LOGGER.info('EmojiManager built: %s emoji, %s aliases, %s tags',
                    len(self._all_emojis), len(self._emojis_by_alias),
                    len(self._emojis_by_tag))

    @classmethod
    def from_file(cls, path: Optional[str] = None) -> 'EmojiManager':
        '''Loads the catalog and builds a manager from it

        :param path: The catalog file. If None, the catalog is
                     searched in the default data directories.
        :raises FileNotFoundError: if the catalog cannot be found
        '''
        return cls(emoji_loader.load_emojis_from_path(path or ''))

    @property
    def trie(self) -> EmojiTrie:
        return self._trie

    def all_emojis(self) -> Tuple[Emoji, ...]:
        '''All emoji, the ones with the longest unicode first'''
        return self._all_emojis

    def all_tags(self) -> FrozenSet[str]:
        return frozenset(self._emojis_by_tag)

    def get_for_alias(self, alias: str) -> Optional[Emoji]:
        '''Returns the emoji for an alias like “smile” or “:smile:”

        At most one colon is removed from each end of the alias.
        '''
        if alias.startswith(':'):
            alias = alias[1:]
        if alias.endswith(':'):
            alias = alias[:-1]
        if not alias:
            return None
        return self._emojis_by_alias.get(alias)

    def get_for_tag(self, tag: str) -> Optional[FrozenSet[Emoji]]:
        if not tag:
            return None
        return self._emojis_by_tag.get(tag)

    def get_by_unicode(self, text: str) -> Optional[Emoji]:
        '''Returns the emoji at the very beginning of the text

        Skin tone and gender suffixes may follow the emoji.
        '''
        if not text:
            return None
        result = emoji_parser.get_emoji_in_position(self._trie, text, 0)
        if result is None:
            return None
        return result.emoji

    def is_emoji(self, text: str) -> bool:
        '''Whether the whole text is exactly one emoji, suffixes included'''
        if not text:
            return False
        result = emoji_parser.get_emoji_in_position(self._trie, text, 0)
        return result is not None and result.end == len(text)

    def contains_emoji(self, text: str) -> bool:
        return emoji_parser.get_next_emoji(self._trie, text) is not None

    def is_only_emojis(self, text: str) -> bool:
        '''Whether the text consists of emoji only

        An empty text counts as emoji only, there is nothing else in it.
        '''
        position = 0
        while position < len(text):
            result = emoji_parser.get_emoji_in_position(
                self._trie, text, position)
            if result is None:
                return False
            position = result.end
        return True

    def classify(self, sequence: Sequence[str]) -> Matches:
        return self._trie.classify(sequence)

    def search(self, query: str, match_limit: int = 20) -> List[SearchResult]:
        '''Finds emoji whose aliases, tags or description match a query

        :param query: The search string, “_” counts as a space
        :param match_limit: Return at most that many results
        :return: The best matches, the highest score first. Emoji
                 with the same score are sorted by canonical alias.
        '''
        query = emoji_util.normalize_label(query)
        if not query:
            return []
        results: List[SearchResult] = []
        for emoji in self._all_emojis:
            labels = list(emoji.aliases) + list(emoji.tags)
            if emoji.description:
                labels.append(emoji.description)
            best_label = ''
            best_score = 0.0
            for label in labels:
                score = _match_rapidfuzz(emoji_util.normalize_label(label),
                                         query)
                if score > best_score:
                    best_label = label
                    best_score = score
            if best_score > 0:
                results.append(SearchResult(emoji, best_label, best_score))
        results.sort(key=lambda result: (-result.score,
                                         result.emoji.aliases[0]))
        if emoji_util.DEBUG_LEVEL > 1:
            LOGGER.debug('search(%r): %s results', query, len(results))
        return results[:match_limit]

    def __repr__(self) -> str:
        return (f'EmojiManager(emojis={len(self._all_emojis)}, '
                f'trie={self._trie!r})')

if __name__ == "__main__":
    LOG_HANDLER = logging.StreamHandler(stream=sys.stderr)
    LOGGER.setLevel(logging.DEBUG)
    LOGGER.addHandler(LOG_HANDLER)
    import doctest
    (FAILED, ATTEMPTED) = doctest.testmod()
    LOGGER.info(
        '_match_rapidfuzz() cache info: %s',
        _match_rapidfuzz.cache_info()) # pylint: disable=no-value-for-parameter
    sys.exit(FAILED)
