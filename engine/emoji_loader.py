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
Loads the emoji catalog from a JSON file.

The file contains a JSON array of objects like this one:

    {
        "emoji": "😄",
        "description": "smiling face with open mouth and smiling eyes",
        "aliases": ["smile"],
        "tags": ["happy", "joy", "pleased"],
        "supports_fitzpatrick": false
    }

The file may be gzip compressed, then its name ends in “.gz”.
'''

from typing import Any
from typing import List
from typing import Tuple
from typing import Optional
from typing import Iterable
from typing import Callable
from typing import IO
import os
import sys
import gzip
import json
import logging

import emoji_util
import emoji_version
from emoji_types import Emoji

LOGGER = logging.getLogger('emojiparse')

DATADIR = os.path.join(os.path.dirname(__file__), '../data')
DATA_BASENAMES = ('emojis.json',)

def data_dirnames() -> Tuple[str, ...]:
    '''Returns the directories searched for the catalog, in order

    $EMOJIPARSE_DATA_DIR comes first if it is set, then the user
    data directory (“~/.local/share/emojiparse/data” by default),
    then the data directory next to the modules (a source checkout)
    and the one installed below the prefix.
    '''
    dirnames: List[str] = []
    env_dir = os.getenv('EMOJIPARSE_DATA_DIR')
    if env_dir:
        dirnames.append(env_dir)
    user_datadir = emoji_util.xdg_data_path('emojiparse', 'data')
    if user_datadir:
        dirnames.append(user_datadir)
    dirnames.append(DATADIR)
    dirnames.append(os.path.join(
        emoji_version.get_prefix(), 'share/emojiparse/data'))
    return tuple(dirnames)

def _find_path_and_open_function(
        dirnames: Iterable[str],
        basenames: Iterable[str]) -> Tuple[str, Optional[Callable[..., Any]]]:
    '''Find the first existing file of a list of basenames and dirnames

    For each file in “basenames”, tries whether that file or the
    file with “.gz” added can be found in the list of directories
    “dirnames”.

    Returns a tuple (path, open_function) where “path” is the
    complete path of the first file found and the open function
    is either “open()” or “gzip.open()”. Returns ('', None) if
    nothing is found.

    :param dirnames: A list of directories to search in
    :param basenames: A list of file names to search for
    '''
    for basename in basenames:
        for dirname in dirnames:
            path = os.path.join(dirname, basename)
            if os.path.exists(path):
                if path.endswith('.gz'):
                    return (path, gzip.open)
                return (path, open)
            path = os.path.join(dirname, basename + '.gz')
            if os.path.exists(path):
                return (path, gzip.open)
    return ('', None)

def find_emoji_data_path() -> str:
    '''Returns the path of the catalog file which would be used

    Returns an empty string if no catalog file can be found.
    '''
    (path, dummy_open_function) = _find_path_and_open_function(
        data_dirnames(), DATA_BASENAMES)
    return path

def _is_list_of_strings(value: Any) -> bool:
    return (isinstance(value, list)
            and all(isinstance(item, str) for item in value))

def build_emoji_from_json(json_object: Any) -> Optional[Emoji]:
    '''Creates an Emoji from one object of the catalog

    Returns None for objects without an “emoji” key, for
    objects without any aliases and for entries with values
    of the wrong type.

    Examples:

    >>> build_emoji_from_json({'emoji': '\U0001f466', 'aliases': ['boy'],
    ...                        'tags': ['child'],
    ...                        'supports_fitzpatrick': True})
    Emoji(unicode='\U0001f466', aliases=['boy'], supports_fitzpatrick=True)

    >>> build_emoji_from_json({'aliases': ['nothing']}) is None
    True

    >>> build_emoji_from_json({'emoji': 5, 'aliases': ['five']}) is None
    True
    '''
    if not isinstance(json_object, dict):
        LOGGER.warning('Skipping catalog entry which is not an object: %r',
                       json_object)
        return None
    unicode = json_object.get('emoji')
    if not unicode:
        if emoji_util.DEBUG_LEVEL > 1:
            LOGGER.debug('Skipping catalog entry without emoji: %r',
                         json_object)
        return None
    if not isinstance(unicode, str):
        LOGGER.warning('Skipping catalog entry with emoji %r of type %s',
                       unicode, type(unicode).__name__)
        return None
    aliases = json_object.get('aliases') or []
    if not _is_list_of_strings(aliases):
        LOGGER.warning('Skipping emoji %s: aliases are not a list of strings',
                       emoji_util.codepoints(unicode))
        return None
    if not aliases:
        LOGGER.warning('Skipping emoji %s without aliases',
                       emoji_util.codepoints(unicode))
        return None
    tags = json_object.get('tags') or []
    if not _is_list_of_strings(tags):
        LOGGER.warning('Skipping emoji %s: tags are not a list of strings',
                       emoji_util.codepoints(unicode))
        return None
    description = json_object.get('description')
    if description is not None and not isinstance(description, str):
        LOGGER.warning('Skipping emoji %s: description is not a string',
                       emoji_util.codepoints(unicode))
        return None
    return Emoji(
        unicode,
        description,
        aliases,
        tags,
        bool(json_object.get('supports_fitzpatrick', False)))

def load_emojis(stream: IO[str]) -> List[Emoji]:
    '''Parses a catalog from an open text stream

    :param stream: A text stream containing the JSON array
    :raises json.JSONDecodeError: if the stream does not contain JSON
    :raises ValueError: if the JSON is not an array
    '''
    emojis_json = json.load(stream)
    if not isinstance(emojis_json, list):
        raise ValueError(
            f'Emoji catalog must be a JSON array, not '
            f'{type(emojis_json).__name__}')
    emojis: List[Emoji] = []
    for json_object in emojis_json:
        emoji = build_emoji_from_json(json_object)
        if emoji is not None:
            emojis.append(emoji)
    return emojis

def load_emojis_from_path(path: str = '') -> List[Emoji]:
    '''Loads the catalog from a file

    :param path: The file to load, plain or gzip compressed JSON.
                 If empty, the catalog is searched for in
                 data_dirnames().
    :raises FileNotFoundError: if there is no such file
    '''
    if path:
        open_function: Optional[Callable[..., Any]] = (
            gzip.open if path.endswith('.gz') else open)
        if not os.path.exists(path):
            raise FileNotFoundError(f'Emoji catalog “{path}” not found')
    else:
        (path, open_function) = _find_path_and_open_function(
            data_dirnames(), DATA_BASENAMES)
        if not path or open_function is None:
            raise FileNotFoundError(
                f'Could not find {DATA_BASENAMES} in {data_dirnames()}')
    assert open_function is not None
    with open_function(path, mode='rt', encoding='utf-8') as emoji_file:
        emojis = load_emojis(emoji_file)
    LOGGER.info('Loaded %s emoji from %s', len(emojis), path)
    return emojis

if __name__ == "__main__":
    LOG_HANDLER = logging.StreamHandler(stream=sys.stderr)
    LOGGER.setLevel(logging.DEBUG)
    LOGGER.addHandler(LOG_HANDLER)
    import doctest
    (FAILED, ATTEMPTED) = doctest.testmod()
    sys.exit(FAILED)
