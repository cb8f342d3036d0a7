import re

from errors import InvalidIdentifier

# length of a base 10 tag ID body
ID_B10_LENGTH = 8
# longest base 36 tag ID body
ID_B36_MAX_LENGTH = 6
# length of the technology prefix in front of every tag ID
TECH_PREFIX_LENGTH = 1

_B36_LEADING = re.compile(r"[0-9a-zA-Z]*")


def _base36_to_base10(body, strict):
    """Convert a base 36 body to a base 10 string.

    In lenient mode this behaves like an unsigned C parse: only the leading
    run of valid digits is converted and an empty run gives "0".
    """
    digits = _B36_LEADING.match(body).group(0)
    if digits != body or not digits:
        if strict:
            raise InvalidIdentifier(f"Not a base 36 tag ID: {body!r}")
        if not digits:
            return "0"
    return str(int(digits, 36))


def convert_id_to_base10(body, strict_base36=False):
    """Convert a prefix-less tag ID body to its canonical base 10 form.

    An 8 character body must already be base 10 and is returned unchanged.
    Bodies of up to 6 characters are read as base 36, so an empty body is
    "0" unless strict_base36 is set. Anything else raises InvalidIdentifier.
    """
    if len(body) == ID_B10_LENGTH:
        # make sure it is actually base 10 and not just the right length
        if not (body.isascii() and body.isdigit()):
            raise InvalidIdentifier(f"Not a base 10 tag ID: {body!r}")
        return body
    if len(body) <= ID_B36_MAX_LENGTH:
        return _base36_to_base10(body, strict_base36)
    raise InvalidIdentifier(f"Unable to convert tag ID {body!r}")


def decode(raw_id, strict_base36=False):
    """Strip the technology prefix from raw_id and return the canonical tag ID."""
    return convert_id_to_base10(raw_id[TECH_PREFIX_LENGTH:], strict_base36=strict_base36)
