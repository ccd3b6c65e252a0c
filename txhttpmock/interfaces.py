"""
Interfaces for the mock HTTP client.

Here's how the pieces fit together in a test:

IHTTPClient is what the code under test sees.
    It looks like an asynchronous HTTP client: every request returns a Deferred right away.
IMockHTTPControl is what the test sees.
    It lists the requests that are still waiting and settles them, one at a time, with a
    response or an error.

MockHTTPClient provides both.
"""

from zope.interface import Interface, Attribute


class IHTTPClient(Interface):
    """
    An asynchronous HTTP client.

    Requests are described by a configuration mapping, which must at least have a C{"url"}
    item for URL-based lookups to find them.
    """

    defaults = Attribute("Default settings, with a C{headers} mapping.")
    interceptors = Attribute("Request and response interceptor registries.")

    def __call__(config=None):
        """
        Send a request described by C{config}.

        @return: A L{Deferred} that fires with the response.
        """

    def request(config=None):
        """
        Same as calling the client.
        """

    def get(url, data=None, config=None):
        """
        Send a GET request. C{post}, C{put}, C{patch}, C{delete}, C{head} and C{options} take
        the same arguments.

        @return: A L{Deferred} that fires with the response.
        """

    def all(values):
        """
        Wait for every one of C{values}.

        @param values: Deferreds, or plain values to pass through.
        @return: A L{Deferred} that fires with a list of the results, in order.
        """

    def create(config=None):
        """
        Return a client configured with C{config}.
        """


class IMockHTTPControl(Interface):
    """
    The test side of a mock HTTP client.

    Wherever a C{selector} is taken, it can be C{None} (the oldest pending request), a
    pending request entry, the L{Deferred} that was returned for a request, or an explicit
    selector from L{txhttpmock.queue}.
    """

    def settleSuccess(response=None, selector=None, silent=False):
        """
        Fire a pending request's Deferred with a response.

        @param response: The response fields to use; missing fields get default values.
        @param silent: If true, do nothing when no request matches instead of raising.
        @raise NoPendingRequestError: If no request matches and C{silent} is false.
        """

    def settleFailure(error=None, selector=None, silent=False):
        """
        Fail a pending request's Deferred with C{error}.

        @raise NoPendingRequestError: If no request matches and C{silent} is false.
        """

    def popEntry(entry=None):
        """
        Remove a pending request without settling it.

        @return: The removed entry, or C{None}.
        """

    def popDeferred(deferred=None):
        """
        Remove a pending request without settling it.

        @return: The removed request's Deferred, or C{None}.
        """

    def latestEntry():
        """
        @return: The most recently made pending request, or C{None}.
        """

    def latestDeferred():
        """
        @return: The Deferred of the most recently made pending request, or C{None}.
        """

    def findByURL(url):
        """
        @return: The most recently made pending request for C{url}, or C{None}.
        """

    def reset():
        """
        Forget every pending request and clear recorded calls.
        """
