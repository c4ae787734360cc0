import re

from errors import InvalidIdentifierError

# Unquoted MySQL identifier, capped at the server's 64 character limit
_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_$]{0,63}$")


def validate_identifier(name):
    if not isinstance(name, str) or not _IDENTIFIER_RE.match(name):
        raise InvalidIdentifierError(name)
    return name


def quote_identifier(name):
    return f"`{validate_identifier(name)}`"
