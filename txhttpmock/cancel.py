"""
Stand-ins for the HTTP client's request cancellation API.

Code under test often builds cancel tokens and checks errors with C{isCancel}; these give
it something real enough to work against. Nothing here cancels mock requests.
"""

from collections import namedtuple

from twisted.internet.defer import Deferred


class Cancel(Exception):
    """
    The reason a request was cancelled.
    """
    def __init__(self, message=None):
        self.message = message
        super(Cancel, self).__init__(message)

    def __repr__(self):
        return "Cancel(%r)" % (self.message,)


def isCancel(value):
    """
    Is C{value} a cancellation reason?
    """
    return isinstance(value, Cancel)


CancelTokenSource = namedtuple("CancelTokenSource", ["token", "cancel"])


class CancelToken(object):
    """
    A token that gets cancelled at most once.

    @ivar reason: The L{Cancel} the token was cancelled with, or C{None}.
    @ivar deferred: A L{Deferred} that fires with C{reason} when the token is cancelled.
    """

    def __init__(self, executor):
        """
        @param executor: Called immediately with a one-argument function that cancels this
            token with a message.
        """
        self.reason = None
        self.deferred = Deferred()
        executor(self._cancel)

    def _cancel(self, message=None):
        if self.reason is not None:
            return
        self.reason = Cancel(message)
        self.deferred.callback(self.reason)

    def throwIfRequested(self):
        if self.reason is not None:
            raise self.reason

    @classmethod
    def source(cls):
        """
        Make a token along with the function that cancels it.

        @rtype: L{CancelTokenSource}
        """
        cancellers = []
        token = cls(cancellers.append)
        return CancelTokenSource(token, cancellers[0])
