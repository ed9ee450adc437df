"""
Tests for the Hostname class and validate_hostname in the models module.
"""

import unittest

from hoststool.exceptions import HostnameRule, InvalidHostname
from hoststool.models import Hostname, validate_hostname


class TestHostname(unittest.TestCase):
    """Test the Hostname class functionality."""

    def assertRule(self, candidate, rule):
        with self.assertRaises(InvalidHostname) as ctx:
            Hostname(candidate)
        self.assertEqual(ctx.exception.rule, rule)
        self.assertEqual(ctx.exception.token, candidate)

    def test_valid_hostnames(self):
        """Test that well-formed hostnames construct."""
        valid = [
            "localhost",
            "localhost.localdomain",
            "a",
            "xn--fsqu00a.example.com",
            "123.example.com",
            "example-1.com",
            "the-quick-brown-fox-jumped-over-the-lazy-dog-0123456789.com",
            "a" * 63 + ".example.com",
        ]
        for name in valid:
            host = Hostname(name)
            self.assertEqual(host.name, name)
            self.assertTrue(Hostname.is_valid(name))

    def test_case_is_preserved(self):
        """Test that hostnames keep the case they were written in."""
        host = Hostname("MyHost.Example.COM")
        self.assertEqual(host.name, "MyHost.Example.COM")
        self.assertEqual(str(host), "MyHost.Example.COM")
        self.assertEqual(host.folded, "myhost.example.com")

    def test_matches_ignores_case(self):
        """Test case-insensitive comparison."""
        host = Hostname("LocalHost")
        self.assertTrue(host.matches("localhost"))
        self.assertTrue(host.matches(Hostname("LOCALHOST")))
        self.assertFalse(host.matches("localhost2"))
        # Equality compares the exact spelling
        self.assertNotEqual(host, Hostname("localhost"))
        self.assertEqual(host, Hostname("LocalHost"))

    def test_matches_folds_ascii_only(self):
        """Test that non-ASCII look-alikes never match an ASCII hostname."""
        host = Hostname("k")
        # KELVIN SIGN lowercases to "k" under str.lower()
        self.assertFalse(host.matches("\u212a"))
        self.assertFalse(Hostname("kernel").matches("\u212aernel"))
        self.assertTrue(host.matches("K"))

    def test_labels(self):
        self.assertEqual(Hostname("a.b.c").labels, ("a", "b", "c"))
        self.assertEqual(Hostname("single").labels, ("single",))

    def test_empty(self):
        """Test that empty hostnames are rejected."""
        self.assertRule("", HostnameRule.EMPTY)
        with self.assertRaises(InvalidHostname):
            Hostname(None)

    def test_empty_label(self):
        """Test that empty labels are rejected."""
        for name in ["a..b", ".example.com", "example.com.", "."]:
            self.assertRule(name, HostnameRule.EMPTY_LABEL)

    def test_label_too_long(self):
        self.assertRule("a" * 64 + ".com", HostnameRule.LABEL_TOO_LONG)

    def test_total_length(self):
        """Test the 253 character limit."""
        label = "a" * 63
        exactly = ".".join([label, label, label, "a" * 61])
        self.assertEqual(len(exactly), 253)
        Hostname(exactly)
        self.assertRule(exactly + "a", HostnameRule.TOO_LONG)

    def test_illegal_characters(self):
        """Test that characters outside [A-Za-z0-9-] are rejected."""
        for name in [
            "not_a_valid_host!",
            "under_score",
            "exam ple.com",
            "tab\there",
            "new\nline",
            "example.com/path",
            "example.com:8080",
            "user@example.com",
            "::1",
            "café.example",
        ]:
            self.assertRule(name, HostnameRule.ILLEGAL_CHARACTER)

    def test_whitespace_is_rejected(self):
        """Test that whitespace is never part of a hostname."""
        for name in [" localhost", "localhost ", "local host"]:
            with self.assertRaises(InvalidHostname):
                Hostname(name)

    def test_hyphen_placement(self):
        """Test that labels can't start or end with a hyphen."""
        for name in ["-host", "host-", "a.-b.c", "a.b-.c"]:
            self.assertRule(name, HostnameRule.HYPHEN_PLACEMENT)
        # Inner hyphens are fine
        Hostname("a-b.c--d")

    def test_address_as_hostname(self):
        """Test that an IPv4 address is not accepted as a hostname."""
        self.assertRule("0.0.0.0", HostnameRule.ADDRESS_AS_HOSTNAME)
        self.assertRule("192.168.1.1", HostnameRule.ADDRESS_AS_HOSTNAME)
        # Numeric labels that don't form an address are still hostnames
        Hostname("999.1.1.1")
        Hostname("1.2.3")

    def test_error_message(self):
        """Test the error message names the token and the violation."""
        with self.assertRaises(InvalidHostname) as ctx:
            validate_hostname("bad!")
        message = str(ctx.exception)
        self.assertIn("'bad!'", message)
        self.assertIn("illegal character '!'", message)
        self.assertIsInstance(ctx.exception, ValueError)

    def test_hostname_is_immutable(self):
        host = Hostname("localhost")
        with self.assertRaises(AttributeError):
            host.name = "other"


if __name__ == '__main__':
    unittest.main()
