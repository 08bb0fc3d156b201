"""DNS class and type vocabulary."""

from __future__ import annotations

import enum
from typing import Iterable


class RRClass(enum.IntEnum):
    """Resource record classes understood by the parser."""

    IN = 1
    CH = 3
    HS = 4

    def __str__(self) -> str:
        return self.name


class RRType(enum.IntEnum):
    """Resource record types keyed by their IANA value.

    Values without a mnemonic resolve to pseudo-members named ``TYPEnnn``.
    ``NONE`` is the aggregate bucket used in reports and never the type of
    a parsed record.
    """

    NONE = 0
    A = 1
    NS = 2
    CNAME = 5
    SOA = 6
    PTR = 12
    HINFO = 13
    MX = 15
    TXT = 16
    RP = 17
    AFSDB = 18
    SIG = 24
    KEY = 25
    AAAA = 28
    LOC = 29
    SRV = 33
    NAPTR = 35
    KX = 36
    CERT = 37
    DNAME = 39
    APL = 42
    DS = 43
    SSHFP = 44
    IPSECKEY = 45
    RRSIG = 46
    NSEC = 47
    DNSKEY = 48
    DHCID = 49
    NSEC3 = 50
    NSEC3PARAM = 51
    TLSA = 52
    SMIMEA = 53
    HIP = 55
    CDS = 59
    CDNSKEY = 60
    OPENPGPKEY = 61
    CSYNC = 62
    ZONEMD = 63
    SVCB = 64
    HTTPS = 65
    EUI48 = 108
    EUI64 = 109
    TKEY = 249
    TSIG = 250
    URI = 256
    CAA = 257
    WALLET = 262
    TA = 32768
    DLV = 32769

    @classmethod
    def _missing_(cls, value):
        if not isinstance(value, int) or not 0 < value <= 0xFFFF:
            return None
        member = int.__new__(cls, value)
        member._name_ = f"TYPE{value}"
        member._value_ = value
        return member

    def __str__(self) -> str:
        return self.name

    @property
    def window(self) -> int:
        """Window block of this type in an NSEC type bitmap."""
        return self.value >> 8

    @property
    def mask(self) -> int:
        """256-bit mask of this type inside its window block."""
        return 1 << (255 - (self.value & 0xFF))


CLASS_BY_NAME: dict[str, RRClass] = {member.name.lower(): member for member in RRClass}
TYPE_BY_NAME: dict[str, RRType] = {
    member.name.lower(): member for member in RRType if member is not RRType.NONE
}

_GENERIC_TYPE_PREFIX = "type"


def rrclass_from_text(text: str) -> RRClass | None:
    """Return the class named by ``text`` or None."""
    return CLASS_BY_NAME.get(text.lower())


def rrtype_from_text(text: str) -> RRType | None:
    """Return the type named by ``text``, accepting the generic ``TYPEnnn`` form."""
    word = text.lower()
    found = TYPE_BY_NAME.get(word)
    if found is not None:
        return found
    if word.startswith(_GENERIC_TYPE_PREFIX):
        digits = word[len(_GENERIC_TYPE_PREFIX):]
        if digits.isascii() and digits.isdigit():
            value = int(digits)
            if 0 < value <= 0xFFFF:
                return RRType(value)
    return None


def type_bitmap(types: Iterable[RRType]) -> dict[int, int]:
    """Build a window block -> mask mapping covering ``types``."""
    bitmap: dict[int, int] = {}
    for rrtype in types:
        bitmap[rrtype.window] = bitmap.get(rrtype.window, 0) | rrtype.mask
    return bitmap


def bitmap_covers(bitmap: dict[int, int], rrtype: RRType) -> bool:
    """Return True when ``rrtype`` is set in ``bitmap``."""
    return bool(bitmap.get(rrtype.window, 0) & rrtype.mask)

