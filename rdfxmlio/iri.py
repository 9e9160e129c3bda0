"""IRI validation and resolution, and language tag validation."""

from __future__ import annotations

import re
import string
from dataclasses import dataclass

from rdfxmlio.errors import InvalidIriError, InvalidLanguageTagError

_REFERENCE = re.compile(
    r"(?:([^:/?#]+):)?(?://([^/?#]*))?([^?#]*)(?:\?([^#]*))?(?:#(.*))?",
    re.DOTALL,
)
_SCHEME = re.compile(r"[A-Za-z][A-Za-z0-9+\-.]*")
_BAD_PERCENT = re.compile(r"%(?![0-9A-Fa-f]{2})")
_IP_LITERAL = re.compile(
    r"[0-9A-Fa-f:.]+|[vV][0-9A-Fa-f]+\.[A-Za-z0-9\-._~!$&'()*+,;=:]+"
)

_UNRESERVED = frozenset(string.ascii_letters + string.digits + "-._~")
_SUB_DELIMS = frozenset("!$&'()*+,;=")

_UCS_RANGES = (
    (0xA0, 0xD7FF),
    (0xF900, 0xFDCF),
    (0xFDF0, 0xFFEF),
    *((plane << 16, (plane << 16) + 0xFFFD) for plane in range(1, 14)),
    (0xE1000, 0xEFFFD),
)
_PRIVATE_RANGES = ((0xE000, 0xF8FF), (0xF0000, 0xFFFFD), (0x100000, 0x10FFFD))

_LANGTAG = re.compile(
    r"(?:[a-z]{2,3}(?:-[a-z]{3}){0,3}|[a-z]{4,8})"
    r"(?:-[a-z]{4})?"
    r"(?:-(?:[a-z]{2}|[0-9]{3}))?"
    r"(?:-(?:[a-z0-9]{5,8}|[0-9][a-z0-9]{3}))*"
    r"(?:-[a-wyz0-9](?:-[a-z0-9]{2,8})+)*"
    r"(?:-x(?:-[a-z0-9]{1,8})+)?",
    re.IGNORECASE | re.ASCII,
)
_PRIVATE_USE = re.compile(r"x(?:-[a-z0-9]{1,8})+", re.IGNORECASE | re.ASCII)
_GRANDFATHERED = frozenset(
    tag.lower()
    for tag in (
        "en-GB-oed", "i-ami", "i-bnn", "i-default", "i-enochian", "i-hak",
        "i-klingon", "i-lux", "i-mingo", "i-navajo", "i-pwn", "i-tao", "i-tay",
        "i-tsu", "sgn-BE-FR", "sgn-BE-NL", "sgn-CH-DE", "art-lojban",
        "cel-gaulish", "no-bok", "no-nyn", "zh-guoyu", "zh-hakka", "zh-min",
        "zh-min-nan", "zh-xiang",
    )
)


@dataclass(frozen=True)
class _Reference:
    scheme: str | None
    authority: str | None
    path: str
    query: str | None
    fragment: str | None

    def __str__(self) -> str:
        text = ""
        if self.scheme is not None:
            text += self.scheme + ":"
        if self.authority is not None:
            text += "//" + self.authority
        text += self.path
        if self.query is not None:
            text += "?" + self.query
        if self.fragment is not None:
            text += "#" + self.fragment
        return text


def _in_ranges(code: int, ranges) -> bool:
    return any(low <= code <= high for low, high in ranges)


def _check_chars(
    iri: str, text: str, allowed: str, component: str, *, private: bool = False
) -> None:
    if _BAD_PERCENT.search(text):
        raise InvalidIriError(iri, f"invalid percent-encoding in {component}")
    for c in text:
        if c == "%" or c in _UNRESERVED or c in _SUB_DELIMS or c in allowed:
            continue
        code = ord(c)
        if _in_ranges(code, _UCS_RANGES):
            continue
        if private and _in_ranges(code, _PRIVATE_RANGES):
            continue
        raise InvalidIriError(iri, f"invalid character {c!r} in {component}")


def _check_authority(iri: str, authority: str) -> None:
    if "@" in authority:
        userinfo, _, hostport = authority.rpartition("@")
        _check_chars(iri, userinfo, ":", "user info")
    else:
        hostport = authority
    if hostport.startswith("["):
        end = hostport.find("]")
        if end == -1:
            raise InvalidIriError(iri, "unterminated IP literal in host")
        if not _IP_LITERAL.fullmatch(hostport[1:end]):
            raise InvalidIriError(iri, "invalid IP literal in host")
        rest = hostport[end + 1 :]
        if rest and not rest.startswith(":"):
            raise InvalidIriError(iri, "unexpected characters after IP literal")
        port = rest[1:]
    else:
        host, _, port = hostport.partition(":")
        if ":" in port:
            raise InvalidIriError(iri, "invalid port")
        _check_chars(iri, host, "", "host")
    if port and not port.isascii() or not port.isdigit() and port:
        raise InvalidIriError(iri, "invalid port")


def _parse_reference(value: str) -> _Reference:
    match = _REFERENCE.fullmatch(value)
    if match is None:
        raise InvalidIriError(value, "invalid IRI reference")
    scheme, authority, path, query, fragment = match.groups()
    if scheme is not None and not _SCHEME.fullmatch(scheme):
        raise InvalidIriError(value, "invalid scheme")
    if authority is not None:
        _check_authority(value, authority)
    _check_chars(value, path, ":@/", "path")
    if query is not None:
        _check_chars(value, query, ":@/?", "query", private=True)
    if fragment is not None:
        _check_chars(value, fragment, ":@/?", "fragment")
    return _Reference(scheme, authority, path, query, fragment)


def _parse_absolute(value: str) -> _Reference:
    reference = _parse_reference(value)
    if reference.scheme is None:
        raise InvalidIriError(value, "no scheme found in an absolute IRI")
    return reference


def _remove_dot_segments(path: str) -> str:
    output: list[str] = []
    while path:
        if path.startswith("../"):
            path = path[3:]
        elif path.startswith("./"):
            path = path[2:]
        elif path.startswith("/./"):
            path = path[2:]
        elif path == "/.":
            path = "/"
        elif path.startswith("/../"):
            path = path[3:]
            if output:
                output.pop()
        elif path == "/..":
            path = "/"
            if output:
                output.pop()
        elif path in (".", ".."):
            path = ""
        else:
            start = 1 if path.startswith("/") else 0
            end = path.find("/", start)
            if end == -1:
                end = len(path)
            output.append(path[:end])
            path = path[end:]
    return "".join(output)


def _merge(base: _Reference, path: str) -> str:
    if base.authority is not None and not base.path:
        return "/" + path
    return base.path[: base.path.rfind("/") + 1] + path


def parse_iri(value: str) -> str:
    """Check that ``value`` is an absolute IRI and return it unchanged."""
    _parse_absolute(value)
    return value


def resolve_iri(base: str, relative: str) -> str:
    """Resolve the IRI reference ``relative`` against the absolute IRI ``base``."""
    base_ref = _parse_absolute(base)
    ref = _parse_reference(relative)
    if ref.scheme is not None:
        target = _Reference(
            ref.scheme, ref.authority, _remove_dot_segments(ref.path), ref.query, ref.fragment
        )
    elif ref.authority is not None:
        target = _Reference(
            base_ref.scheme, ref.authority, _remove_dot_segments(ref.path), ref.query, ref.fragment
        )
    else:
        if not ref.path:
            path = base_ref.path
            query = ref.query if ref.query is not None else base_ref.query
        else:
            if ref.path.startswith("/"):
                path = _remove_dot_segments(ref.path)
            else:
                path = _remove_dot_segments(_merge(base_ref, ref.path))
            query = ref.query
        target = _Reference(base_ref.scheme, base_ref.authority, path, query, ref.fragment)
    return str(target)


def resolve(base_iri: str | None, relative_iri: str) -> str:
    """Resolve against ``base_iri`` if given, otherwise require an absolute IRI."""
    if base_iri is None:
        return parse_iri(relative_iri)
    return resolve_iri(base_iri, relative_iri)


def parse_language_tag(tag: str) -> str:
    """Check that ``tag`` is a well-formed BCP 47 language tag and return it."""
    if (
        _LANGTAG.fullmatch(tag)
        or _PRIVATE_USE.fullmatch(tag)
        or tag.lower() in _GRANDFATHERED
    ):
        return tag
    raise InvalidLanguageTagError(tag, "not a well-formed BCP 47 language tag")