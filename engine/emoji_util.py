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
Utility functions used in emojiparse
'''

from typing import Optional
import os
import sys
import functools
import unicodedata
import logging

LOGGER = logging.getLogger('emojiparse')

DEBUG_LEVEL = int(0)
try:
    DEBUG_LEVEL = int(str(os.getenv('EMOJIPARSE_DEBUG_LEVEL')))
except (TypeError, ValueError):
    DEBUG_LEVEL = int(0)

ZERO_WIDTH_JOINER = '\u200d'
VARIATION_SELECTOR_16 = '\ufe0f'

TRANS_TABLE = {
    ord('ẞ'): 'SS',
    ord('ß'): 'ss',
    ord('Ø'): 'O',
    ord('ø'): 'o',
    ord('Æ'): 'AE',
    ord('æ'): 'ae',
    ord('Œ'): 'OE',
    ord('œ'): 'oe',
    ord('Ł'): 'L',
    ord('ł'): 'l',
    ord('Þ'): 'TH',
}

@functools.lru_cache(maxsize=None)
def remove_accents(text: str) -> str:
    '''Removes accents from the text

    Used to fold search labels and queries before fuzzy matching
    them, “piñata” should be found when typing “pinata”.

    :param text: The text to change
    :return: The text with all accents removed, in NFC

    Examples:

    >>> remove_accents('Ångstrøm')
    'Angstrom'

    >>> remove_accents('piñata')
    'pinata'

    >>> remove_accents('crème brûlée')
    'creme brulee'
    '''
    result = ''.join([
        x for x in unicodedata.normalize('NFKD', text)
        if unicodedata.category(x) != 'Mn']).translate(TRANS_TABLE)
    return unicodedata.normalize('NFC', result)

def normalize_label(label: str) -> str:
    '''Turns an alias, tag or description into a search label

    Examples:

    >>> normalize_label('family_man_woman_boy')
    'family man woman boy'

    >>> normalize_label(':Heart_Eyes:')
    'heart eyes'

    >>> normalize_label('  ')
    ''
    '''
    return remove_accents(
        label.strip().strip(':').replace('_', ' ').lower()).strip()

def codepoints(text: str) -> str:
    '''Returns the code points of a text in “U+XXXX” notation

    Used in log messages, many emoji sequences contain invisible
    characters which are hard to see otherwise.

    Examples:

    >>> codepoints('a\u200db')
    'U+0061 U+200D U+0062'

    >>> codepoints('')
    ''
    '''
    return ' '.join([f'U+{ord(char):04X}' for char in text])

def xdg_save_data_path(*resource: str) -> str:
    '''
    Returns (and creates if necessary) a directory below
    $XDG_DATA_HOME, “~/.local/share” by default.
    '''
    xdg_data_home = os.environ.get('XDG_DATA_HOME') or os.path.join(
        os.path.expanduser('~'), '.local', 'share')
    resource_joined = os.path.join(*resource)
    assert not resource_joined.startswith('/')
    path = os.path.join(xdg_data_home, resource_joined)
    if not os.path.isdir(path):
        os.makedirs(path, exist_ok=True)
    return path

def xdg_data_path(*resource: str) -> Optional[str]:
    '''
    Like xdg_save_data_path() but never creates anything.

    Returns None if the directory does not exist.
    '''
    xdg_data_home = os.environ.get('XDG_DATA_HOME') or os.path.join(
        os.path.expanduser('~'), '.local', 'share')
    path = os.path.join(xdg_data_home, *resource)
    if os.path.isdir(path):
        return path
    return None

if __name__ == "__main__":
    LOG_HANDLER = logging.StreamHandler(stream=sys.stderr)
    LOGGER.setLevel(logging.DEBUG)
    LOGGER.addHandler(LOG_HANDLER)
    import doctest
    (FAILED, ATTEMPTED) = doctest.testmod()
    LOGGER.info('remove_accents() cache info: %s', remove_accents.cache_info())
    sys.exit(FAILED)
