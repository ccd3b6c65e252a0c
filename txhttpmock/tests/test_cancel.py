from twisted.trial.unittest import TestCase

from ..cancel import Cancel, CancelToken, CancelTokenSource, isCancel


class IsCancelTests(TestCase):

    def test_cancel(self):
        self.assertTrue(isCancel(Cancel("stop")))

    def test_not_cancel(self):
        """
        Only L{Cancel} instances count, whatever attributes other objects have.
        """
        class Lookalike(object):
            __CANCEL__ = True
        self.assertFalse(isCancel(Lookalike()))
        self.assertFalse(isCancel(Exception("stop")))
        self.assertFalse(isCancel(None))
        self.assertFalse(isCancel(Cancel))


class CancelTokenTests(TestCase):

    def test_executor_gets_canceller(self):
        """
        The executor is called right away with a function that cancels the token.
        """
        cancellers = []
        token = CancelToken(cancellers.append)
        self.assertIdentical(token.reason, None)
        self.assertNoResult(token.deferred)

        [cancel] = cancellers
        cancel("user gave up")
        self.assertTrue(isCancel(token.reason))
        self.assertEqual(token.reason.message, "user gave up")
        self.assertIs(self.successResultOf(token.deferred), token.reason)

    def test_cancel_once(self):
        """
        Cancelling a second time keeps the first reason.
        """
        source = CancelToken.source()
        source.cancel("first")
        source.cancel("second")
        self.assertEqual(source.token.reason.message, "first")

    def test_throw_if_requested(self):
        source = CancelToken.source()
        self.assertIsInstance(source, CancelTokenSource)
        source.token.throwIfRequested()
        source.cancel()
        exception = self.assertRaises(Cancel, source.token.throwIfRequested)
        self.assertIs(exception, source.token.reason)
        self.assertIdentical(exception.message, None)
