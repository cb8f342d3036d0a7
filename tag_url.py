import logging
from collections import namedtuple
from enum import Enum

from errors import UnparsableIdentifier, UnrecognizedFormat
from tag_id import ID_B10_LENGTH, ID_B36_MAX_LENGTH, TECH_PREFIX_LENGTH, decode

log = logging.getLogger(__name__)

# Num parts in a counter url: https: / "" / host / idSlug / uidCounter
COUNTER_SEGMENTS = 5
# Tails shorter than this are custom slugs, not tag IDs
SHORT_SLUG_LENGTH = 5

AUTH_ARGS = {"id": "uid", "num": "tag_version", "sig": "vid"}
HID_ARGS = {"tagId": "hid", "tac": "vid"}


class UrlFormat(str, Enum):
    SIMPLE = "simple"
    AUTH = "auth"
    HID = "hid"
    COUNTER = "counter"
    OPAQUE = "opaque"
    UNRECOGNIZED = "unrecognized"


ClassifiedUrl = namedtuple("ClassifiedUrl", ["url", "format", "raw_id", "fields"])


def _strip_query(segment):
    return segment.split("?", 1)[0]


def parse_query_args(segment, expected_args):
    """Pick the expected query arguments out of a URL segment.

    expected_args maps query keys to outbound parameter names. Unknown keys
    are dropped and pairs without exactly one "=" are skipped.
    """
    if "?" not in segment:
        return {}
    params = {}
    for arg in segment.split("?", 1)[1].split("&"):
        parts = arg.split("=")
        if len(parts) != 2:
            log.debug(f"Skipping malformed query argument {arg!r}")
            continue
        name, value = parts
        if name in expected_args:
            params[expected_args[name]] = value
    return params


def classify(url):
    """Work out which tag URL format url is and extract its fields.

    Formats:
      https://mtag.io/njaix4                         -> simple
      https://mtag.io/njaix4?id=..&num=..&sig=..     -> auth
      https://mtag.io/njaix4?tagId=..&tac=..         -> hid
      https://mtag.io/njaix4/<uid>x<counter><fix>    -> counter
      https://example.com/abc                        -> opaque (short slug)

    Raises UnrecognizedFormat for any other shape and UnparsableIdentifier
    when the matched format has no identifier in it.
    """
    url_parts = url.split("/")
    tail = url_parts[-1]
    tail_path = _strip_query(tail)
    log.debug(f"url_parts: {url_parts}")

    if len(tail_path) < SHORT_SLUG_LENGTH:
        log.debug("Handling short slug as opaque url")
        return ClassifiedUrl(url, UrlFormat.OPAQUE, None, {})

    if len(tail) <= ID_B10_LENGTH + TECH_PREFIX_LENGTH or len(tail) <= ID_B36_MAX_LENGTH + TECH_PREFIX_LENGTH:
        log.debug("Handling simple url")
        tag_format, raw_id, fields = UrlFormat.SIMPLE, tail, {}
    elif "&sig" in tail:
        log.debug("Handling auth url")
        tag_format, raw_id, fields = UrlFormat.AUTH, tail_path, parse_query_args(tail, AUTH_ARGS)
    elif "&tac" in tail:
        log.debug("Handling hid url")
        tag_format, raw_id, fields = UrlFormat.HID, tail_path, parse_query_args(tail, HID_ARGS)
    elif len(url_parts) == COUNTER_SEGMENTS:
        log.debug("Handling counter url")
        tag_format, raw_id, fields = UrlFormat.COUNTER, _strip_query(url_parts[-2]), {"vid": tail_path}
    else:
        raise UnrecognizedFormat(f"Unknown URL structure: {url}")

    if len(raw_id) <= TECH_PREFIX_LENGTH:
        raise UnparsableIdentifier(f"No tag ID found in {tag_format.value} url {url}")
    return ClassifiedUrl(url, tag_format, raw_id, fields)


def build_params(classified, tag_id, tech="n"):
    """Assemble the parameters posted to the interactions route."""
    if classified.format is UrlFormat.OPAQUE:
        return {"url": classified.url}
    params = dict(classified.fields)
    params["tech"] = tech
    params["tag_id"] = tag_id
    return params


def parse_interaction(url, config=None):
    """Classify url, decode its tag ID and return (classified, tag_id, params).

    tag_id is None for opaque urls.
    """
    strict = config.strict_base36 if config is not None else False
    tech = config.tech if config is not None else "n"
    classified = classify(url)
    tag_id = None
    if classified.format is not UrlFormat.OPAQUE:
        tag_id = decode(classified.raw_id, strict_base36=strict)
    params = build_params(classified, tag_id, tech=tech)
    log.debug(f"Params: {params}")
    return classified, tag_id, params
