class TagError(Exception):
    """Base class for every error reported to an interaction delegate."""


class UnparsableIdentifier(TagError):
    """The URL matched a known format but carried no identifier."""


class UnrecognizedFormat(TagError):
    """The URL shape matched none of the known tag URL formats."""


class InvalidIdentifier(TagError):
    """The identifier was present but is not valid base-10 or base-36."""


class TransportFailure(TagError):
    """The registration request could not be completed."""


class MalformedResponse(TagError):
    """The registration endpoint answered with something other than a JSON object."""
