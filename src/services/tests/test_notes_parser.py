"""Unit tests for the quick-add notes parser.

Ambiguous inputs resolve to the first match of a left-to-right scan.
"""

import unittest

from services.notes_parser import (
    DEFAULT_CALORIES,
    DEFAULT_DURATION,
    FALLBACK_TYPE,
    ParsedNotes,
    parse_notes,
)


class TestParseNotes(unittest.TestCase):

    def test_full_entry(self):
        self.assertEqual(
            parse_notes("Running for 30 min, 300 cal"),
            ParsedNotes(type='Running', duration=30, calories=300),
        )

    def test_no_signal_falls_back_to_defaults(self):
        self.assertEqual(
            parse_notes("just felt great today"),
            ParsedNotes(type='Other', duration=30, calories=200),
        )

    def test_empty_text(self):
        self.assertEqual(
            parse_notes(""),
            ParsedNotes(type=FALLBACK_TYPE, duration=DEFAULT_DURATION, calories=DEFAULT_CALORIES),
        )


class TestTypeMatching(unittest.TestCase):

    def test_case_insensitive(self):
        self.assertEqual(parse_notes("hiit circuit").type, 'HIIT')
        self.assertEqual(parse_notes("CROSSFIT wod").type, 'CrossFit')

    def test_anchored_at_start(self):
        self.assertEqual(parse_notes("Went running in the park").type, 'Other')

    def test_prefix_of_longer_word_matches(self):
        self.assertEqual(parse_notes("Yogalates class").type, 'Yoga')

    def test_every_known_type(self):
        for name in ('Running', 'Walking', 'Cycling', 'Swimming', 'Weightlifting', 'HIIT',
                     'Yoga', 'Pilates', 'CrossFit', 'Hiking', 'Dancing'):
            with self.subTest(name=name):
                self.assertEqual(parse_notes(f"{name} session").type, name)


class TestNumberExtraction(unittest.TestCase):

    def test_units_without_space(self):
        parsed = parse_notes("Swimming 40min 350calories")
        self.assertEqual((parsed.duration, parsed.calories), (40, 350))

    def test_units_are_case_insensitive(self):
        parsed = parse_notes("Cycling 45 MINUTES 500 Cal")
        self.assertEqual((parsed.duration, parsed.calories), (45, 500))

    def test_first_duration_wins(self):
        self.assertEqual(parse_notes("Running 10 min warmup then 30 min tempo").duration, 10)

    def test_first_calories_wins(self):
        self.assertEqual(parse_notes("HIIT 200 cal plus 100 cal cooldown").calories, 200)

    def test_numbers_anywhere_in_text(self):
        parsed = parse_notes("Felt tired, burned 250 kcal... no wait, 250 cal over 25 min")
        self.assertEqual(parsed.duration, 25)
        self.assertEqual(parsed.calories, 250)

    def test_other_units_are_ignored(self):
        parsed = parse_notes("Hiking 2 hours, 12 km")
        self.assertEqual((parsed.duration, parsed.calories), (DEFAULT_DURATION, DEFAULT_CALORIES))

    def test_number_must_precede_unit_directly(self):
        self.assertEqual(parse_notes("Walking min 20").duration, DEFAULT_DURATION)

    def test_oversized_numbers_fall_back_to_defaults(self):
        parsed = parse_notes("Running " + "9" * 5000 + " min " + "8" * 5000 + " cal")
        self.assertEqual(parsed, ParsedNotes(type="Running", duration=DEFAULT_DURATION, calories=DEFAULT_CALORIES))


if __name__ == '__main__':
    unittest.main()
