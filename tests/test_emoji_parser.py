#!/usr/bin/python3

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
This file implements test cases for finding and converting emoji in text
'''

import sys
import logging
import unittest

import testutils # pylint: disable=import-error
from testutils import (SMILE, BOY, MAN, WOMAN, FAMILY, RUNNER,
                       RUNNING_WOMAN, THUMBSUP, HEART, HASH_KEYCAP,
                       WHITE_FLAG, RAINBOW_FLAG, CAT, ZWJ, VS16,
                       FEMALE_SIGN, MALE_SIGN, TYPE_3, TYPE_6)

LOGGER = logging.getLogger('emojiparse')

# pylint: disable=wrong-import-position
sys.path.insert(0, testutils.ENGINE_DIR)
from emoji_types import Fitzpatrick # pylint: disable=import-error
from emoji_types import Gender # pylint: disable=import-error
from emoji_types import FitzpatrickAction # pylint: disable=import-error
from emoji_manager import EmojiManager # pylint: disable=import-error
from emoji_parser import EmojiParser # pylint: disable=import-error
from emoji_parser import EmojiResult # pylint: disable=import-error
sys.path.pop(0)
# pylint: enable=wrong-import-position

# pylint: disable=missing-function-docstring
# pylint: disable=missing-class-docstring
# pylint: disable=invalid-name

class ScannerTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.maxDiff = None
        self.manager = EmojiManager(testutils.small_catalog())
        self.parser = EmojiParser(self.manager)

    def tearDown(self) -> None:
        pass

    def test_boy_with_skin_tone(self) -> None:
        text = 'hi ' + BOY + TYPE_6 + ' there'
        results = self.parser.extract_emojis(text)
        self.assertEqual(len(results), 1)
        result = results[0]
        self.assertEqual(result.emoji.unicode, BOY)
        self.assertIs(result.fitzpatrick, Fitzpatrick.TYPE_6)
        self.assertIsNone(result.gender)
        self.assertEqual((result.start, result.end), (3, 5))
        self.assertTrue(result.has_fitzpatrick())
        self.assertEqual(result.fitzpatrick_type, 'type_6')
        self.assertEqual(result.fitzpatrick_unicode, TYPE_6)
        self.assertEqual(result.emoji_end_index, 4)
        self.assertEqual(result.fitzpatrick_end_index, 5)
        self.assertEqual(str(result), BOY + TYPE_6)

    def test_result_without_suffixes(self) -> None:
        result = self.parser.get_next_emoji('a' + SMILE)
        self.assertIsNotNone(result)
        self.assertFalse(result.has_fitzpatrick())
        self.assertEqual(result.fitzpatrick_type, '')
        self.assertEqual(result.fitzpatrick_unicode, '')
        self.assertEqual(result.emoji_end_index, 2)
        self.assertEqual(result.fitzpatrick_end_index, 2)

    def test_longest_match_wins(self) -> None:
        results = self.parser.extract_emojis(FAMILY)
        self.assertEqual(len(results), 1)
        self.assertEqual(results[0].emoji.aliases[0], 'family')
        self.assertEqual(results[0].end, len(FAMILY))

    def test_diverging_text_falls_back(self) -> None:
        text = MAN + ZWJ + WOMAN + 'x'
        self.assertEqual(
            self.parser.extract_emoji_strings(text), [MAN, WOMAN])

    def test_skin_tone_only_if_supported(self) -> None:
        text = SMILE + TYPE_6
        results = self.parser.extract_emojis(text)
        self.assertEqual(len(results), 1)
        self.assertIsNone(results[0].fitzpatrick)
        self.assertEqual(results[0].end, 1)

    def test_gender_without_skin_tone_support(self) -> None:
        text = SMILE + ZWJ + FEMALE_SIGN + VS16
        result = self.parser.get_emoji_in_position(text, 0)
        self.assertIsNotNone(result)
        self.assertIs(result.gender, Gender.FEMALE)
        self.assertEqual(result.end, 4)

    def test_skin_tone_then_gender(self) -> None:
        text = RUNNER + TYPE_3 + ZWJ + FEMALE_SIGN + VS16
        results = self.parser.extract_emojis(text)
        self.assertEqual(len(results), 1)
        result = results[0]
        self.assertEqual(result.emoji.unicode, RUNNER)
        self.assertIs(result.fitzpatrick, Fitzpatrick.TYPE_3)
        self.assertIs(result.gender, Gender.FEMALE)
        self.assertEqual(result.end, len(text))

    def test_gender_sequence_in_catalog(self) -> None:
        results = self.parser.extract_emojis(RUNNING_WOMAN)
        self.assertEqual(len(results), 1)
        self.assertEqual(results[0].emoji.aliases[0], 'running_woman')
        self.assertIsNone(results[0].gender)

    def test_male_gender(self) -> None:
        result = self.parser.get_emoji_in_position(
            RUNNER + ZWJ + MALE_SIGN, 0)
        self.assertIs(result.gender, Gender.MALE)
        self.assertEqual(result.end, 3)

    def test_truncated_suffixes(self) -> None:
        result = self.parser.get_emoji_in_position(BOY + ZWJ, 0)
        self.assertEqual(result.end, 1)
        result = self.parser.get_emoji_in_position(BOY + TYPE_6 + ZWJ, 0)
        self.assertEqual(result.end, 2)
        self.assertIsNone(result.gender)
        result = self.parser.get_emoji_in_position(BOY + ZWJ + 'x', 0)
        self.assertEqual(result.end, 1)

    def test_trailing_variation_selector(self) -> None:
        result = self.parser.get_emoji_in_position(HEART + VS16 + 'x', 0)
        self.assertEqual(result.emoji.unicode, HEART)
        self.assertEqual(result.end, 2)
        result = self.parser.get_emoji_in_position(WHITE_FLAG + VS16, 0)
        self.assertEqual(result.emoji.unicode, WHITE_FLAG)
        self.assertEqual(result.end, 2)
        result = self.parser.get_emoji_in_position(RAINBOW_FLAG, 0)
        self.assertEqual(result.emoji.unicode, RAINBOW_FLAG)

    def test_no_emoji(self) -> None:
        self.assertIsNone(self.parser.get_next_emoji('plain text'))
        self.assertIsNone(self.parser.get_next_emoji(''))
        self.assertEqual(self.parser.extract_emojis('plain text'), [])
        self.assertIsNone(self.parser.get_emoji_in_position('a' + SMILE, 0))

    def test_bounds(self) -> None:
        text = 'a' + SMILE
        self.assertIsNone(self.parser.get_next_emoji(text, len(text)))
        with self.assertRaises(IndexError):
            self.parser.get_next_emoji(text, len(text) + 1)
        with self.assertRaises(IndexError):
            self.parser.get_next_emoji(text, -1)
        with self.assertRaises(IndexError):
            self.parser.get_emoji_in_position(text, len(text) + 1)

    def test_get_next_emoji_from_start(self) -> None:
        text = SMILE + 'a' + CAT
        result = self.parser.get_next_emoji(text, 1)
        self.assertEqual(result.emoji.unicode, CAT)
        self.assertEqual(result.start, 2)

    def test_iter_limit_and_restart(self) -> None:
        text = 'a' + SMILE + 'b' + CAT + 'c' + THUMBSUP
        self.assertEqual(
            self.parser.extract_emoji_strings(text), [SMILE, CAT, THUMBSUP])
        self.assertEqual(
            self.parser.extract_emoji_strings(text, limit=2), [SMILE, CAT])
        first = list(self.parser.iter_emojis(text))
        second = list(self.parser.iter_emojis(text))
        self.assertEqual(first, second)
        self.assertEqual(
            [result.start for result in self.parser.iter_emojis(text, start=2)],
            [3, 5])

    def test_matches_do_not_overlap(self) -> None:
        text = FAMILY + BOY + TYPE_6 + HASH_KEYCAP
        previous_end = 0
        for result in self.parser.iter_emojis(text):
            self.assertGreaterEqual(result.start, previous_end)
            previous_end = result.end
        self.assertEqual(previous_end, len(text))

    def test_result_equality(self) -> None:
        text = 'x' + BOY + TYPE_6
        first = self.parser.get_next_emoji(text)
        self.assertEqual(first, self.parser.get_next_emoji(text))
        self.assertNotEqual(first, self.parser.get_next_emoji(BOY))
        self.assertIsInstance(first, EmojiResult)

class TransformTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.maxDiff = None
        self.manager = EmojiManager(testutils.small_catalog())
        self.parser = EmojiParser(self.manager)

    def tearDown(self) -> None:
        pass

    def test_parse_from_unicode(self) -> None:
        text = 'a' + SMILE + 'b' + BOY + TYPE_6 + 'c'
        self.assertEqual(
            self.parser.parse_from_unicode(
                text, lambda result: f'[{result.emoji.aliases[0]}]'),
            'a[smile]b[boy]c')
        self.assertEqual(
            self.parser.parse_from_unicode('no emoji', lambda result: '?'),
            'no emoji')

    def test_parse_to_aliases(self) -> None:
        text = 'hi ' + BOY + TYPE_6 + ' there'
        self.assertEqual(
            self.parser.parse_to_aliases(text), 'hi :boy|type_6: there')
        self.assertEqual(
            self.parser.parse_to_aliases(text, FitzpatrickAction.REMOVE),
            'hi :boy: there')
        self.assertEqual(
            self.parser.parse_to_aliases(text, FitzpatrickAction.IGNORE),
            'hi :boy:' + TYPE_6 + ' there')
        self.assertEqual(
            self.parser.parse_to_aliases(SMILE + FAMILY),
            ':smile::family:')
        self.assertEqual(self.parser.parse_to_aliases(THUMBSUP), ':+1:')

    def test_parse_to_aliases_drops_gender(self) -> None:
        text = RUNNER + TYPE_3 + ZWJ + FEMALE_SIGN + VS16
        self.assertEqual(
            self.parser.parse_to_aliases(text), ':runner|type_3:')

    def test_parse_to_html(self) -> None:
        text = 'a' + SMILE + 'b'
        self.assertEqual(
            self.parser.parse_to_html_decimal(text), 'a&#128516;b')
        self.assertEqual(
            self.parser.parse_to_html_hexadecimal(text), 'a&#x1f604;b')

    def test_parse_to_html_skin_tone(self) -> None:
        text = BOY + TYPE_6
        for action in (FitzpatrickAction.PARSE, FitzpatrickAction.REMOVE):
            self.assertEqual(
                self.parser.parse_to_html_decimal(text, action), '&#128102;')
            self.assertEqual(
                self.parser.parse_to_html_hexadecimal(text, action),
                '&#x1f466;')
        self.assertEqual(
            self.parser.parse_to_html_decimal(
                text, FitzpatrickAction.IGNORE),
            '&#128102;' + TYPE_6)
        self.assertEqual(
            self.parser.parse_to_html_hexadecimal(
                text, FitzpatrickAction.IGNORE),
            '&#x1f466;' + TYPE_6)

    def test_apply_fitzpatrick_action(self) -> None:
        text = BOY + TYPE_6
        self.assertEqual(
            self.parser.apply_fitzpatrick_action(
                text, FitzpatrickAction.REMOVE),
            BOY)
        self.assertEqual(
            self.parser.apply_fitzpatrick_action(
                text, FitzpatrickAction.IGNORE),
            BOY + TYPE_6)
        self.assertEqual(
            self.parser.apply_fitzpatrick_action(
                'x' + text + 'y', FitzpatrickAction.PARSE),
            'x' + text + 'y')

    def test_apply_fitzpatrick_action_keeps_gender(self) -> None:
        text = RUNNER + TYPE_3 + ZWJ + FEMALE_SIGN + VS16
        self.assertEqual(
            self.parser.apply_fitzpatrick_action(
                text, FitzpatrickAction.REMOVE),
            RUNNER + ZWJ + FEMALE_SIGN + VS16)

    def test_replace_and_remove(self) -> None:
        text = 'a' + SMILE + 'b' + BOY + TYPE_6 + 'c'
        self.assertEqual(self.parser.replace_all_emojis(text, '*'), 'a*b*c')
        self.assertEqual(self.parser.remove_all_emojis(text), 'abc')

    def test_remove_all_emojis_is_idempotent(self) -> None:
        text = ('x' + FAMILY + ' ' + HEART + VS16 + ' ' + RUNNER + TYPE_3
                + ZWJ + FEMALE_SIGN + VS16 + ' ' + HASH_KEYCAP + 'y')
        once = self.parser.remove_all_emojis(text)
        self.assertEqual(once, 'x   y')
        self.assertEqual(self.parser.remove_all_emojis(once), once)

    def test_remove_emojis(self) -> None:
        smile = self.manager.get_for_alias('smile')
        boy = self.manager.get_for_alias('boy')
        text = 'a' + SMILE + 'b' + BOY + TYPE_6 + 'c' + CAT
        self.assertEqual(
            self.parser.remove_emojis(text, [smile]),
            'ab' + BOY + TYPE_6 + 'c' + CAT)
        self.assertEqual(
            self.parser.remove_all_emojis_except(text, [boy]),
            'ab' + BOY + TYPE_6 + 'c')
        self.assertEqual(
            self.parser.remove_all_emojis_except(text, []), 'abc')

class ParseToUnicodeTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.maxDiff = None
        self.manager = EmojiManager(testutils.small_catalog())
        self.parser = EmojiParser(self.manager)

    def tearDown(self) -> None:
        pass

    def test_aliases(self) -> None:
        self.assertEqual(
            self.parser.parse_to_unicode('a :smile: b'), 'a ' + SMILE + ' b')
        self.assertEqual(
            self.parser.parse_to_unicode(':family_man_woman_boy:'), FAMILY)
        self.assertEqual(
            self.parser.parse_to_unicode(':smile::cat:'), SMILE + CAT)
        self.assertEqual(self.parser.parse_to_unicode(':+1:'), THUMBSUP)

    def test_alias_with_skin_tone(self) -> None:
        self.assertEqual(
            self.parser.parse_to_unicode('hi :boy|type_6: there'),
            'hi ' + BOY + TYPE_6 + ' there')
        self.assertEqual(
            self.parser.parse_to_unicode(':boy|type_9:'), BOY)
        # Emoji without skin tone support keep the text unchanged
        self.assertEqual(
            self.parser.parse_to_unicode(':smile|type_6:'), ':smile|type_6:')

    def test_unknown_or_malformed_aliases(self) -> None:
        for text in (':unknown:', '::', ':', 'ratio 2:1', ':smile',
                     'time: 10:30', ': smile:'):
            self.assertEqual(self.parser.parse_to_unicode(text), text)

    def test_aliases_with_extra_colons(self) -> None:
        self.assertEqual(self.parser.parse_to_unicode('::smile:'), ':' + SMILE)
        self.assertEqual(
            self.parser.parse_to_unicode('a::boy|type_6:'),
            'a:' + BOY + TYPE_6)
        self.assertEqual(
            self.parser.parse_to_unicode(':::smile:::'), '::' + SMILE + '::')

    def test_html_references(self) -> None:
        self.assertEqual(self.parser.parse_to_unicode('&#128516;'), SMILE)
        self.assertEqual(self.parser.parse_to_unicode('&#x1f604;'), SMILE)
        self.assertEqual(self.parser.parse_to_unicode('&#X1F604;'), SMILE)
        self.assertEqual(
            self.parser.parse_to_unicode(
                '&#128104;&#8205;&#128105;&#8205;&#128102;'),
            FAMILY)
        self.assertEqual(
            self.parser.parse_to_unicode(
                '&#x1f468;&#8205;&#x1f469;&#x200d;&#128102;'),
            FAMILY)
        self.assertEqual(
            self.parser.parse_to_unicode('&#35;&#65039;&#8419;'),
            HASH_KEYCAP)

    def test_html_references_longest_prefix(self) -> None:
        self.assertEqual(
            self.parser.parse_to_unicode('&#128104;&#8205;x'),
            MAN + '&#8205;x')
        self.assertEqual(
            self.parser.parse_to_unicode('&#128104;&#128105;'), MAN + WOMAN)

    def test_html_references_not_emoji(self) -> None:
        for text in ('&#65;', '&#;', '&#x;', '&#12a;', '&#128516',
                     '&#99999999999;', '&amp;', '&#8205;'):
            self.assertEqual(self.parser.parse_to_unicode(text), text)

    def test_round_trip(self) -> None:
        emojis = self.manager.all_emojis()
        text = ' '.join(emoji.unicode for emoji in emojis)
        aliases = self.parser.parse_to_aliases(text)
        self.assertEqual(self.parser.parse_to_unicode(aliases), text)
        html = self.parser.parse_to_html_decimal(text)
        self.assertEqual(self.parser.parse_to_unicode(html), text)
        html = self.parser.parse_to_html_hexadecimal(text)
        self.assertEqual(self.parser.parse_to_unicode(html), text)

    def test_round_trip_with_skin_tones(self) -> None:
        text = 'a ' + BOY + TYPE_6 + ' b ' + THUMBSUP + TYPE_3 + ' c'
        self.assertEqual(
            self.parser.parse_to_unicode(self.parser.parse_to_aliases(text)),
            text)

    def test_round_trip_bundled_catalog(self) -> None:
        manager = EmojiManager.from_file(testutils.DATA_FILE)
        parser = EmojiParser(manager)
        text = ' '.join(emoji.unicode for emoji in manager.all_emojis())
        self.assertEqual(
            parser.parse_to_unicode(parser.parse_to_aliases(text)), text)
        self.assertEqual(
            parser.parse_to_unicode(parser.parse_to_html_hexadecimal(text)),
            text)

if __name__ == '__main__':
    LOG_HANDLER = logging.StreamHandler(stream=sys.stderr)
    LOGGER.setLevel(logging.DEBUG)
    LOGGER.addHandler(LOG_HANDLER)
    unittest.main()
