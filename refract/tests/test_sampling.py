"""
Unit tests for sample rate extraction.
"""

import unittest

from refract.sampling import (
    DEFAULT_SAMPLE_RATE,
    MAX_SAMPLE_RATE,
    MIN_SAMPLE_RATE,
    ZERO_SAMPLE_RATE,
    extract_sample_rate,
)


class TestExtractSampleRate(unittest.TestCase):
    """Tests for extract_sample_rate."""

    def test_numeric_string(self):
        attrs = {"sampleRate": "42", "spanName": "x"}
        self.assertEqual(extract_sample_rate(attrs), 42)
        self.assertEqual(attrs, {"spanName": "x"})

    def test_capitalized_key(self):
        attrs = {"SampleRate": 7}
        self.assertEqual(extract_sample_rate(attrs), 7)
        self.assertEqual(attrs, {})

    def test_missing_key(self):
        """Test no key yields zero and leaves the map untouched."""
        attrs = {"spanName": "x", "samplerate": 5}
        self.assertEqual(extract_sample_rate(attrs), ZERO_SAMPLE_RATE)
        self.assertEqual(attrs, {"spanName": "x", "samplerate": 5})

    def test_non_numeric_string(self):
        """Test an unparseable string keeps the default and drops the key."""
        attrs = {"sampleRate": "not-a-number"}
        self.assertEqual(extract_sample_rate(attrs), DEFAULT_SAMPLE_RATE)
        self.assertEqual(attrs, {})

    def test_first_key_wins(self):
        """Test sampleRate is preferred and SampleRate is left in place."""
        attrs = {"SampleRate": 3, "sampleRate": 9}
        self.assertEqual(extract_sample_rate(attrs), 9)
        self.assertEqual(attrs, {"SampleRate": 3})

    def test_large_int_clamped(self):
        attrs = {"sampleRate": 2**40}
        self.assertEqual(extract_sample_rate(attrs), MAX_SAMPLE_RATE)

    def test_large_numeric_string_clamped(self):
        attrs = {"sampleRate": str(2**35)}
        self.assertEqual(extract_sample_rate(attrs), MAX_SAMPLE_RATE)

    def test_small_int_clamped(self):
        attrs = {"sampleRate": -(2**40)}
        self.assertEqual(extract_sample_rate(attrs), MIN_SAMPLE_RATE)

    def test_non_ascii_or_padded_strings_use_default(self):
        """Test only plain ASCII decimal strings are parsed."""
        for value in (" 42 ", "4_2", "\u0664\u0662", "42.0", ""):
            attrs = {"sampleRate": value}
            self.assertEqual(extract_sample_rate(attrs), DEFAULT_SAMPLE_RATE)
            self.assertNotIn("sampleRate", attrs)

    def test_signed_strings(self):
        self.assertEqual(extract_sample_rate({"sampleRate": "+42"}), 42)
        self.assertEqual(extract_sample_rate({"sampleRate": "-3"}), -3)

    def test_unsupported_types_use_default(self):
        """Test floats, bools and None resolve to the default rate."""
        for value in (2.5, True, None, [1]):
            attrs = {"sampleRate": value}
            self.assertEqual(extract_sample_rate(attrs), DEFAULT_SAMPLE_RATE)
            self.assertNotIn("sampleRate", attrs)


if __name__ == "__main__":
    unittest.main()
