"""
Helpers for using L{MockHTTPClient} from trial test cases.
"""

from .client import MockHTTPClient


class MockHTTPClientMixin(object):
    """
    Mix into a L{twisted.trial.unittest.TestCase} (before it in the bases) to get a fresh
    L{MockHTTPClient} as C{self.http}, reset when the test finishes.
    """

    def setUp(self):
        super(MockHTTPClientMixin, self).setUp()
        self.http = MockHTTPClient()
        self.addCleanup(self.http.reset)

    def assertPendingURLs(self, urls):
        """
        Assert that the pending requests are for exactly C{urls}, oldest first.
        """
        self.assertEqual([entry.url for entry in self.http.pending], list(urls))
