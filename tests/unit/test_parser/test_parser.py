"""
Unit tests for the parser module.

Covers parse_data_line and classify_line, including the error each kind
of malformed line produces.
"""

import ipaddress

import pytest

from hoststool.exceptions import BadAddress, BadHost, HostnameRule, LineParseError, NoHosts
from hoststool.models import BlankLine, CommentLine, DataLine, Hostname, HostLine
from hoststool.parser import classify_line, parse_data_line, split_comment


class TestParseDataLine:
    """Tests for parse_data_line."""

    @pytest.mark.parametrize(
        "text,address,hosts",
        [
            ("127.0.0.1 localhost", "127.0.0.1", ["localhost"]),
            ("::1 localhost localhost.localdomain lh", "::1", ["localhost", "localhost.localdomain", "lh"]),
            ("10.0.0.1 \t  a\t\tb", "10.0.0.1", ["a", "b"]),
            ("fe80::1%eth0 router", "fe80::1%eth0", ["router"]),
            ("10.0.0.1 MixedCase", "10.0.0.1", ["MixedCase"]),
        ],
    )
    def test_valid_lines(self, text, address, hosts):
        line = parse_data_line(text)
        assert line.address == ipaddress.ip_address(address)
        assert [host.name for host in line.hostnames] == hosts

    def test_only_address(self):
        with pytest.raises(NoHosts) as exc_info:
            parse_data_line("10.0.0.1")
        assert exc_info.value.line == "10.0.0.1"

    def test_wrong_order(self):
        with pytest.raises(BadAddress) as exc_info:
            parse_data_line("localhost ::1")
        assert exc_info.value.token == "localhost"
        assert exc_info.value.line == "localhost ::1"

    def test_bad_address_keeps_full_line(self):
        with pytest.raises(BadAddress) as exc_info:
            parse_data_line("not-an-ip host1 host2")
        assert exc_info.value.line == "not-an-ip host1 host2"
        assert exc_info.value.token == "not-an-ip"

    def test_bad_host(self):
        with pytest.raises(BadHost) as exc_info:
            parse_data_line("10.0.0.1 not_a_valid_host!")
        error = exc_info.value
        assert error.token == "not_a_valid_host!"
        assert error.line == "10.0.0.1 not_a_valid_host!"
        assert error.cause.rule is HostnameRule.ILLEGAL_CHARACTER

    def test_second_address_is_bad_host(self):
        with pytest.raises(BadHost) as exc_info:
            parse_data_line("127.0.0.1 0.0.0.0")
        assert exc_info.value.cause.rule is HostnameRule.ADDRESS_AS_HOSTNAME

        with pytest.raises(BadHost) as exc_info:
            parse_data_line("::1 localhost ::1")
        assert exc_info.value.token == "::1"

    def test_first_bad_host_wins(self):
        with pytest.raises(BadHost) as exc_info:
            parse_data_line("10.0.0.1 good bad_one -worse")
        assert exc_info.value.token == "bad_one"

    def test_raw_line_and_number_reported(self):
        with pytest.raises(NoHosts) as exc_info:
            parse_data_line("10.0.0.1", raw_line="  10.0.0.1  # lonely", line_number=4)
        assert exc_info.value.line == "  10.0.0.1  # lonely"
        assert exc_info.value.line_number == 4
        assert str(exc_info.value).startswith("line 4: ")

    def test_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            parse_data_line("nope host")


class TestSplitComment:

    def test_no_comment(self):
        assert split_comment("10.0.0.1 a") == ("10.0.0.1 a", None)

    def test_first_hash_wins(self):
        assert split_comment("a # b # c") == ("a ", " b # c")

    def test_empty_comment(self):
        assert split_comment("#") == ("", "")


class TestClassifyLine:
    """Tests for classify_line."""

    @pytest.mark.parametrize("raw", ["", " ", "      \t    ", "\t"])
    def test_blank(self, raw):
        assert classify_line(raw) == BlankLine()

    def test_comment_only(self):
        line = classify_line("  # comment only")
        assert line == CommentLine(" comment only")
        assert line.comment == " comment only"

    def test_comment_text_is_verbatim(self):
        assert classify_line("   #   \t what? ").comment == "   \t what? "
        assert classify_line("#").comment == ""

    def test_data_line_with_comment(self):
        line = classify_line("127.0.0.1  \tlocalhost  \t   localhost.localdomain    lh#localhosts")
        assert isinstance(line, HostLine)
        assert line.comment == "localhosts"
        assert line.address == ipaddress.ip_address("127.0.0.1")
        assert [host.name for host in line.hostnames] == ["localhost", "localhost.localdomain", "lh"]

    def test_data_line_without_comment(self):
        line = classify_line("  10.0.0.1 a b  ")
        assert line == HostLine(DataLine("10.0.0.1", [Hostname("a"), Hostname("b")]))
        assert line.comment is None

    def test_line_number_is_stored(self):
        assert classify_line("# x", line_number=9).line_number == 9

    def test_errors_keep_raw_line(self):
        raw = "  10.0.0.1   # no hosts here"
        with pytest.raises(NoHosts) as exc_info:
            classify_line(raw, line_number=2)
        assert exc_info.value.line == raw
        assert exc_info.value.line_number == 2

    @pytest.mark.parametrize(
        "raw,error_type",
        [
            ("10.0.0.1", NoHosts),
            ("10.0.0.1 not_a_valid_host!", BadHost),
            ("not-an-ip host1 host2", BadAddress),
            ("300.1.1.1 host", BadAddress),
        ],
    )
    def test_malformed(self, raw, error_type):
        with pytest.raises(error_type) as exc_info:
            classify_line(raw)
        assert isinstance(exc_info.value, LineParseError)
        assert exc_info.value.line == raw
