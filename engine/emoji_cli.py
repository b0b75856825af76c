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
The emojiparse command line tool

Converts the emoji in a text given as arguments or on standard
input, or looks up emoji in the catalog.
'''

from typing import Any
from typing import List
from typing import Optional
from typing import Sequence
import os
import sys
import io
import argparse
import logging
import logging.handlers

import emoji_util
import emoji_version
from emoji_types import FitzpatrickAction
from emoji_manager import EmojiManager
from emoji_parser import EmojiParser

LOGGER = logging.getLogger('emojiparse')

def parse_args(argv: Optional[Sequence[str]] = None) -> Any:
    '''
    Parse the command line arguments.
    '''
    parser = argparse.ArgumentParser(
        prog='emojiparse',
        description=('Convert the emoji in a text to aliases, HTML '
                     'character references or back to unicode. '
                     'The text is read from standard input if no TEXT '
                     'is given.'))
    parser.add_argument(
        'text',
        nargs='*',
        metavar='TEXT',
        help='The text to convert')
    modes = parser.add_mutually_exclusive_group()
    modes.add_argument(
        '--to-aliases',
        dest='mode',
        action='store_const',
        const='to_aliases',
        help='Replace emoji by aliases like “:smile:”, this is the default')
    modes.add_argument(
        '--to-unicode',
        dest='mode',
        action='store_const',
        const='to_unicode',
        help=('Replace aliases and HTML character references '
              'by emoji'))
    modes.add_argument(
        '--to-html-decimal',
        dest='mode',
        action='store_const',
        const='to_html_decimal',
        help='Replace emoji by HTML decimal character references')
    modes.add_argument(
        '--to-html-hex',
        dest='mode',
        action='store_const',
        const='to_html_hex',
        help='Replace emoji by HTML hexadecimal character references')
    modes.add_argument(
        '--remove',
        dest='mode',
        action='store_const',
        const='remove',
        help='Remove all emoji from the text')
    modes.add_argument(
        '--extract',
        dest='mode',
        action='store_const',
        const='extract',
        help='Print the emoji found in the text, one per line')
    modes.add_argument(
        '--alias',
        type=str,
        metavar='NAME',
        default=None,
        help='Print the emoji which has this alias')
    modes.add_argument(
        '--tag',
        type=str,
        metavar='NAME',
        default=None,
        help='Print all emoji which have this tag')
    modes.add_argument(
        '--search',
        type=str,
        metavar='QUERY',
        default=None,
        help='Search emoji by alias, tag and description')
    parser.add_argument(
        '--fitzpatrick-action',
        type=str,
        choices=[action.value for action in FitzpatrickAction],
        default=FitzpatrickAction.PARSE.value,
        help=('What to do with skin tone modifiers when converting '
              'emoji. default: %(default)s'))
    parser.add_argument(
        '--limit',
        type=int,
        default=0,
        help=('Maximum number of emoji to extract or to find when '
              'searching, 0 means no limit (20 when searching). '
              'default: %(default)s'))
    parser.add_argument(
        '--data-file',
        type=str,
        default='',
        help=('Load the emoji catalog from this file instead of '
              'searching it in the data directories.'))
    parser.add_argument(
        '-d', '--debug',
        action='store_true',
        default=False,
        help=('Write a debug log to '
              '~/.local/share/emojiparse/debug.log. '
              'default: %(default)s'))
    parser.add_argument(
        '-p', '--profile',
        action='store_true',
        default=False,
        help=('Write profiling information into the debug log. '
              'Implies --debug.'))
    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {emoji_version.get_version()}')
    args = parser.parse_args(argv)
    if args.limit < 0:
        parser.error('--limit must not be negative')
    if args.profile:
        args.debug = True
    if args.mode is None:
        args.mode = 'to_aliases'
    return args

def _setup_logging(debug: bool) -> List[logging.Handler]:
    '''Adds the handlers of the command line tool to the logger

    Returns the handlers added so that they can be removed again.
    '''
    log_formatter = logging.Formatter(
        '%(asctime)s %(filename)s '
        'line %(lineno)d %(funcName)s %(levelname)s: '
        '%(message)s')
    stream_handler = logging.StreamHandler(stream=sys.stderr)
    stream_handler.setLevel(logging.WARNING)
    stream_handler.setFormatter(logging.Formatter(
        'emojiparse: %(levelname)s: %(message)s'))
    handlers: List[logging.Handler] = [stream_handler]
    if debug:
        logfile = os.path.join(
            emoji_util.xdg_save_data_path('emojiparse'), 'debug.log')
        file_handler = logging.handlers.TimedRotatingFileHandler(
            logfile,
            when='midnight',
            interval=1,
            backupCount=7,
            encoding='UTF-8',
            delay=False,
            utc=False,
            atTime=None)
        file_handler.setFormatter(log_formatter)
        handlers.append(file_handler)
        LOGGER.setLevel(logging.DEBUG)
    else:
        LOGGER.setLevel(logging.INFO)
    for handler in handlers:
        LOGGER.addHandler(handler)
    return handlers

def _read_text(args: Any) -> str:
    if args.text:
        return ' '.join(args.text) + '\n'
    return sys.stdin.read()

def _convert(parser: EmojiParser, args: Any) -> int:
    '''Runs one of the text conversion modes'''
    action = FitzpatrickAction(args.fitzpatrick_action)
    text = _read_text(args)
    if args.mode == 'extract':
        for emoji_string in parser.extract_emoji_strings(
                text, limit=args.limit):
            print(emoji_string)
        return 0
    if args.mode == 'to_unicode':
        result = parser.parse_to_unicode(text)
    elif args.mode == 'to_html_decimal':
        result = parser.parse_to_html_decimal(text, action)
    elif args.mode == 'to_html_hex':
        result = parser.parse_to_html_hexadecimal(text, action)
    elif args.mode == 'remove':
        result = parser.remove_all_emojis(text)
    else:
        result = parser.parse_to_aliases(text, action)
    sys.stdout.write(result)
    return 0

def _lookup(manager: EmojiManager, args: Any) -> int:
    '''Runs one of the catalog lookup modes

    Returns 1 if nothing was found.
    '''
    if args.alias is not None:
        emoji = manager.get_for_alias(args.alias)
        if emoji is None:
            LOGGER.warning('No emoji with alias “%s”', args.alias)
            return 1
        print(f'{emoji.unicode} :{emoji.aliases[0]}: '
              f'{emoji.description or ""}'.rstrip())
        return 0
    if args.tag is not None:
        tagged = manager.get_for_tag(args.tag)
        if not tagged:
            LOGGER.warning('No emoji with tag “%s”', args.tag)
            return 1
        for emoji in sorted(tagged, key=lambda emoji: emoji.aliases[0]):
            print(f'{emoji.unicode} :{emoji.aliases[0]}:')
        return 0
    results = manager.search(args.search, match_limit=args.limit or 20)
    if not results:
        LOGGER.warning('No emoji found for “%s”', args.search)
        return 1
    for result in results:
        print(f'{result.emoji.unicode} :{result.emoji.aliases[0]}: '
              f'{result.label} ({result.score:.0f})')
    return 0

def run(args: Any) -> int:
    '''Loads the catalog and runs the mode selected by the arguments'''
    try:
        manager = EmojiManager.from_file(args.data_file or None)
    except (OSError, ValueError) as error:
        LOGGER.error('Cannot load the emoji catalog: %s', error)
        return 1
    if (args.alias is not None
            or args.tag is not None
            or args.search is not None):
        return _lookup(manager, args)
    return _convert(EmojiParser(manager), args)

def main(argv: Optional[Sequence[str]] = None) -> int:
    '''Main program'''
    args = parse_args(argv)
    handlers = _setup_logging(args.debug)
    LOGGER.info('********** STARTING **********')
    profile = None
    if args.profile:
        import cProfile # pylint: disable=import-outside-toplevel
        profile = cProfile.Profile()
        profile.enable()
    try:
        return run(args)
    finally:
        if profile is not None:
            import pstats # pylint: disable=import-outside-toplevel
            profile.disable()
            stats_stream = io.StringIO()
            stats = pstats.Stats(profile, stream=stats_stream)
            stats.strip_dirs()
            stats.sort_stats('cumulative')
            stats.print_stats('emoji_parser', 25)
            stats.print_stats('emoji_trie', 25)
            stats.print_stats('emoji_manager', 25)
            LOGGER.info('Profiling info:\n%s', stats_stream.getvalue())
        for handler in handlers:
            LOGGER.removeHandler(handler)
            handler.close()

if __name__ == '__main__':
    sys.exit(main())
