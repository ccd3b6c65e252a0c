"""
The response record handed to callbacks when a mock request is settled successfully.

Responses have a fixed shape. Callers supply only the fields they care about and
L{fillResponse} fills the rest in with defaults.
"""

from collections import namedtuple


DEFAULT_STATUS = 200
DEFAULT_STATUS_TEXT = "OK"

Response = namedtuple("response", ["config", "data", "headers", "status", "status_text"])

# camelCase spellings accepted on input.
_ALIASES = {"statusText": "status_text"}


def defaultResponse():
    """
    Build a response made only of defaults. The mutable fields are fresh on every call.
    """
    return Response(config={}, data={}, headers={}, status=DEFAULT_STATUS,
                    status_text=DEFAULT_STATUS_TEXT)


def fillResponse(partial=None):
    """
    Overlay the fields given in C{partial} onto a default response.

    @param partial: C{None}, a L{Response}, or a mapping of response field names to values.
    @raise ValueError: If the mapping names a field that responses don't have.
    @rtype: L{Response}
    """
    if partial is None:
        return defaultResponse()
    if isinstance(partial, Response):
        return partial
    fields = {}
    for key, value in partial.items():
        fields[_ALIASES.get(key, key)] = value
    return defaultResponse()._replace(**fields)
