"""Tests for the master file parser."""

import io

import pytest

from zonediff.models import Record, ZoneParseError
from zonediff.parser import ZoneParser, normalize_origin, unescape
from zonediff.rrtypes import RRClass, RRType


def rec(name, ttl, rrtype, *data, rrclass=RRClass.IN):
    return Record(name=name, ttl=ttl, rrclass=rrclass, rrtype=rrtype, data=tuple(data))


SOA_DATA = ("ns1.simple.zn.", "hostmaster.simple.zn.", "2024090906", "7200", "1800", "86400", "7200")


def test_simple_zone(open_zone):
    parser = open_zone("simple.zn")
    assert list(parser) == [
        rec("simple.zn.", 3600, RRType.SOA, *SOA_DATA),
        rec("simple.zn.", 3600, RRType.NS, "ns1.simple.zn."),
        rec("simple.zn.", 3600, RRType.NS, "ns2.simple.zn."),
        rec("info.simple.zn.", 3600, RRType.MX, "10", "mail.simple.zn."),
        rec("mail.simple.zn.", 3600, RRType.A, "1.2.3.4"),
        rec("mail.simple.zn.", 3600, RRType.AAAA, "1:2:3::4"),
    ]


def test_parser_is_single_pass(open_zone):
    parser = open_zone("simple.zn")
    assert len(list(parser)) == 6
    assert list(parser) == []


def test_directives(open_zone):
    parser = open_zone("directives.zn", origin="other.zn")
    assert next(parser).name == "simple.zn."
    assert parser.origin == "simple.zn."
    assert parser.default_ttl == 3600


def test_default_ttl_and_explicit_override(open_zone):
    parser = open_zone("directives.zn")
    next(parser)
    assert next(parser) == rec("simple.zn.", 300, RRType.NS, "ns1.simple.zn.")
    assert next(parser) == rec("simple.zn.", 3600, RRType.NS, "ns2.simple.zn.")
    with pytest.raises(StopIteration):
        next(parser)


def test_case_insensitivity(open_zone):
    records = list(open_zone("lc_and_uc.zn"))
    assert records == [
        rec(
            "simple.zn.",
            3600,
            RRType.SOA,
            "NS1.simple.zn.",
            "Hostmaster.Simple.Zn.",
            "2024090906",
            "7200",
            "1800",
            "86400",
            "7200",
        ),
        rec("www.simple.zn.", 3600, RRType.CNAME, "NS1.simple.zn."),
    ]


def test_relative_names(open_zone):
    names = [record.name for record in open_zone("relative.zn")]
    assert names == ["simple.zn.", "simple.zn.", "info.simple.zn.", "mail.simple.zn."]


def test_rdata_names_are_not_expanded(open_zone):
    soa = next(open_zone("relative.zn"))
    assert soa.data[:2] == ("ns1", "hostmaster")


def test_brackets_and_comments(open_zone):
    assert list(open_zone("brackets_and_comments.zn")) == [rec("simple.zn.", 3600, RRType.SOA, *SOA_DATA)]


def test_bracket_continuation_matches_single_line(parse_text):
    multi = parse_text("@ 60 IN SOA a. b. (\n 1\n 2 3\n 4 5 )\n")
    single = parse_text("@ 60 IN SOA a. b. 1 2 3 4 5\n")
    assert list(multi) == list(single)


def test_quotes(open_zone):
    records = list(open_zone("quotes.zn"))
    assert records[0] == rec("simple.zn.", 3600, RRType.TXT, "first quote", "Second QUOTE", "3. qt")
    assert records[1].data == ('foo bar"baz', "foo\\bar", "a  (b)")


def test_generic_type_syntax(open_zone):
    generic, plain = list(open_zone("generic.zn"))
    assert generic.rrtype == 65535
    assert generic.rrtype.name == "TYPE65535"
    assert generic.data == ("#", "5", "0102FFFEFC")
    assert plain.rrtype is RRType.A


def test_empty_owner_reuses_previous_name(parse_text):
    records = list(parse_text("www 10 IN A 192.0.2.1\n\t20 AAAA 2001:db8::1\n"))
    assert records[1] == rec("www.example.com.", 20, RRType.AAAA, "2001:db8::1")


def test_class_persists_between_records(parse_text):
    records = list(parse_text("a CH TXT x\nb TXT y\n"))
    assert [record.rrclass for record in records] == [RRClass.CH, RRClass.CH]


def test_ttl_without_default_persists(parse_text):
    records = list(parse_text("a 120 A 192.0.2.1\nb A 192.0.2.2\n"))
    assert [record.ttl for record in records] == [120, 120]


def test_missing_ttl_defaults_to_zero(parse_text):
    assert next(parse_text("a A 192.0.2.1\n")).ttl == 0


def test_class_and_ttl_in_either_order(parse_text):
    first, second = list(parse_text("a IN 60 A 192.0.2.1\nb 60 IN A 192.0.2.2\n"))
    assert (first.ttl, first.rrclass) == (second.ttl, second.rrclass) == (60, RRClass.IN)


def test_text_stream_and_crlf():
    parser = ZoneParser(io.StringIO("a IN A 192.0.2.1\r\n\r\nb IN A 192.0.2.2\r\n"), "example.com")
    assert [record.data for record in parser] == [("192.0.2.1",), ("192.0.2.2",)]


def test_last_line_without_newline(parse_text):
    assert list(parse_text("a IN A 192.0.2.1")) == [rec("a.example.com.", 0, RRType.A, "192.0.2.1")]


def test_relative_origin_directive(parse_text):
    parser = parse_text("$ORIGIN sub\nwww A 192.0.2.1\n")
    assert next(parser).name == "www.sub.example.com."


def test_absolute_name():
    parser = ZoneParser(io.BytesIO(b""), "example.com")
    assert parser.absolute_name("host.example.net.") == "host.example.net."
    assert parser.absolute_name("@") == "example.com."
    assert parser.absolute_name("www") == "www.example.com."
    with pytest.raises(ValueError):
        parser.absolute_name("")


def test_root_origin():
    parser = ZoneParser(io.BytesIO(b"com NS a.gtld-servers.net.\n"), "")
    assert parser.origin == "."
    assert next(parser).name == "com."


def test_normalize_origin():
    assert normalize_origin("Example.COM") == "example.com."
    assert normalize_origin("example.com.") == "example.com."
    assert normalize_origin(".") == "."


def test_unescape():
    assert unescape('foo\\"bar') == ('foo"bar', None)
    assert unescape("\\#") == ("#", None)
    assert unescape("\\065bc") == ("\\065bc", None)
    assert unescape('ab"cd', quoted=True) == ("ab", 2)
    assert unescape('ab"cd') == ('ab"cd', None)
    assert unescape("tail\\") == ("tail\\", None)


@pytest.mark.parametrize(
    "text, message",
    [
        ("a IN A 192.0.2.1 )\n", "unbalanced"),
        ("$INCLUDE other.zone\n", "unknown directive"),
        ("$TTL 1h\n", "invalid TTL"),
        ("$TTL\n", "missing value"),
        ("a bogus A 192.0.2.1\n", "invalid TTL"),
        ("a 4294967296 A 192.0.2.1\n", "out of range"),
        ('a TXT "open\n', "unterminated quoted string"),
        ("a SOA x. y. ( 1 2\n", "end of file inside parentheses"),
        ("a IN 60\n", "no type"),
        ('a TXT "x"y\n', "after closing quote"),
        ("  A 192.0.2.1\n", "no previous owner"),
        ("$TTL 10 extra\n", "after directive"),
        ("$ORIGIN example.net. more\n", "after directive"),
    ],
)
def test_malformed_input_is_fatal(parse_text, text, message):
    with pytest.raises(ZoneParseError, match=message):
        list(parse_text(text))


def test_parse_error_reports_line_number(parse_text):
    with pytest.raises(ZoneParseError) as excinfo:
        list(parse_text("a A 192.0.2.1\nb 1x A 192.0.2.2\n"))
    assert excinfo.value.line == 2
    assert str(excinfo.value).startswith("line 2:")


def test_undecodable_bytes_are_fatal():
    parser = ZoneParser(io.BytesIO(b"a TXT ok\nwww IN TXT caf\xff\n"), "example.com.")
    with pytest.raises(ZoneParseError, match="invalid UTF-8") as excinfo:
        list(parser)
    assert excinfo.value.line == 2


def test_literal_text_is_not_confused_with_raw_bytes():
    parser = ZoneParser(io.BytesIO(b"www IN TXT cafxff\n"), "example.com.")
    assert next(parser).data == ("cafxff",)
    with pytest.raises(ZoneParseError):
        list(ZoneParser(io.BytesIO(b"www IN TXT caf\xff\n"), "example.com."))


def test_utf8_data_is_kept(parse_text):
    assert next(parse_text("www TXT café\n")).data == ("café",)
