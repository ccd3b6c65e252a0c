"""
A mock asynchronous HTTP client for unit tests.

Nothing is ever sent over the network. Every request made through L{MockHTTPClient} is
queued and gets back a L{Deferred} that doesn't fire until the test settles it:

    http = MockHTTPClient()
    result = service.fetchUser(http, 1)      # calls http.get("/users/1")
    http.settleSuccess({"data": {"id": 1}})
    self.assertEqual(self.successResultOf(result), {"id": 1})

Deferreds fire synchronously, so the code under test has already run its callbacks by the
time C{settleSuccess} returns.

Every verb is wrapped in a L{Mock}, so tests can make assertions about how the client was
called (C{http.get.assert_called_once_with("/users/1")}).
"""

from unittest.mock import Mock

from zope.interface import implementer

from twisted.internet.defer import Deferred, gatherResults, succeed
from twisted.python import log
from twisted.python.failure import Failure

from .cancel import Cancel, CancelToken, isCancel
from .interfaces import IHTTPClient, IMockHTTPControl
from .queue import QueueEntry, RequestQueue, selectorFor
from .response import fillResponse


SHORTHAND_METHODS = ("get", "post", "put", "patch", "delete", "head", "options")

# Methods whose recorded calls are cleared by MockHTTPClient.reset. Calls made directly on the
# client are recorded on its "send" mock, which reset leaves alone.
TRACKED_METHODS = SHORTHAND_METHODS + ("request", "all")


class NoPendingRequestError(Exception):
    """
    Raised when a test tries to settle a request, but no pending request matches.
    """
    def __init__(self, selector):
        self.selector = selector
        super(NoPendingRequestError, self).__init__(
            "No pending request to respond to (selector: %r)" % (selector,))


class MockRequestError(Exception):
    """
    The failure given to a request's errback when the test settled it with something that
    isn't an exception.

    @ivar value: What the test settled the request with, possibly C{None}.
    """
    def __init__(self, value=None):
        self.value = value
        if value is None:
            super(MockRequestError, self).__init__("Mock request failed")
        else:
            super(MockRequestError, self).__init__("Mock request failed: %r" % (value,))


class InterceptorManager(object):
    """
    Accepts interceptor registrations and never runs them.
    """

    def __init__(self):
        self.handlers = []
        self.use = Mock(wraps=self._use)
        self.eject = Mock(wraps=self._eject)

    def _use(self, fulfilled=None, rejected=None):
        self.handlers.append((fulfilled, rejected))
        return len(self.handlers) - 1

    def _eject(self, handle):
        if 0 <= handle < len(self.handlers):
            self.handlers[handle] = None


class Interceptors(object):
    def __init__(self):
        self.request = InterceptorManager()
        self.response = InterceptorManager()


class Defaults(object):
    """
    Client-wide default settings. Only headers are kept.
    """
    def __init__(self, headers=None):
        self.headers = {"common": {}}
        if headers:
            self.headers.update(headers)


@implementer(IHTTPClient, IMockHTTPControl)
class MockHTTPClient(object):
    """
    An HTTP client whose requests are answered by the test.

    Each instance keeps its own queue of pending requests, so tests don't share state as long
    as each makes its own client (or calls L{reset} when it's done).
    """

    Cancel = Cancel
    CancelToken = CancelToken
    isCancel = staticmethod(isCancel)

    def __init__(self, defaults=None):
        """
        @param defaults: Default headers for L{defaults}, merged over C{{"common": {}}}.
        """
        self._queue = RequestQueue()
        self.defaults = Defaults(defaults)
        self.interceptors = Interceptors()

        self.send = Mock(wraps=self._newRequest)
        self.request = Mock(wraps=self._newRequest)
        self.all = Mock(wraps=self._all)
        for method in SHORTHAND_METHODS:
            setattr(self, method, Mock(wraps=self._shorthandRequest))

    def __call__(self, config=None):
        return self.send(config)

    def _newRequest(self, config=None):
        """
        Queue a request and return a Deferred that fires when the test settles it.
        """
        if config is None:
            config = {}
        entry = QueueEntry(config, Deferred(self._requestCancelled))
        self._queue.append(entry)
        log.msg("mock-request-queued", url=entry.url, pending=len(self._queue))
        return entry.deferred

    def _shorthandRequest(self, url, data=None, config=None):
        # config is only honoured alongside data.
        if data is not None and config is not None:
            merged = dict(config)
        else:
            merged = {}
        merged["data"] = data
        merged["url"] = url
        return self._newRequest(merged)

    def _requestCancelled(self, deferred):
        """
        The code under test cancelled a pending request, so stop tracking it.
        """
        entry = self._queue.removeByDeferred(deferred)
        if entry is not None:
            log.msg("mock-request-cancelled", url=entry.url, pending=len(self._queue))

    def _all(self, values):
        deferreds = []
        for value in values:
            if isinstance(value, Deferred):
                deferreds.append(value)
            else:
                deferreds.append(succeed(value))
        return gatherResults(deferreds, consumeErrors=True)

    def create(self, config=None):
        """
        Return this client. Code under test that makes its own client instance still ends up
        talking to the one the test controls.
        """
        return self

    def _popForSettlement(self, selector, silent):
        selector = selectorFor(selector)
        entry = self._queue.locateEntry(selector)
        if entry is None and not silent:
            raise NoPendingRequestError(selector)
        return entry

    def settleSuccess(self, response=None, selector=None, silent=False):
        """
        Respond to a pending request.

        @param response: A mapping of response fields (C{config}, C{data}, C{headers},
            C{status}, C{status_text}) or a L{txhttpmock.response.Response}. Fields that
            aren't given are filled in with defaults.
        @param selector: Which request to respond to; the oldest one by default.
        @param silent: If true and no request matches, do nothing instead of raising.
        @raise NoPendingRequestError: If no request matches and C{silent} is false.
        """
        response = fillResponse(response)
        entry = self._popForSettlement(selector, silent)
        if entry is None:
            return
        log.msg("mock-request-settled", url=entry.url, outcome="success",
                status=response.status, pending=len(self._queue))
        entry.deferred.callback(response)

    def settleFailure(self, error=None, selector=None, silent=False):
        """
        Fail a pending request.

        @param error: The exception or L{Failure} to fail with. Anything else (including
            C{None}) is wrapped in a L{MockRequestError}.
        @param selector: Which request to fail; the oldest one by default.
        @param silent: If true and no request matches, do nothing instead of raising.
        @raise NoPendingRequestError: If no request matches and C{silent} is false.
        """
        entry = self._popForSettlement(selector, silent)
        if entry is None:
            return
        if not isinstance(error, (BaseException, Failure)):
            error = MockRequestError(error)
        log.msg("mock-request-settled", url=entry.url, outcome="failure",
                pending=len(self._queue))
        entry.deferred.errback(error)

    def popEntry(self, entry=None):
        return self._queue.locateEntry(selectorFor(entry))

    def popDeferred(self, deferred=None):
        return self._queue.locate(selectorFor(deferred))

    def latestEntry(self):
        return self._queue.peekNewest()

    def latestDeferred(self):
        entry = self._queue.peekNewest()
        if entry is None:
            return None
        return entry.deferred

    def findByURL(self, url):
        return self._queue.findNewestByURL(url)

    @property
    def pending(self):
        """
        The pending requests, oldest first.
        """
        return self._queue.entries()

    def reset(self):
        """
        Forget every pending request and clear the calls recorded for each method.

        Pending Deferreds are abandoned: they never fire.
        """
        abandoned = len(self._queue)
        self._queue.clear()
        for method in TRACKED_METHODS:
            getattr(self, method).reset_mock()
        log.msg("mock-client-reset", abandoned=abandoned)
