"""
The queue of mock requests that are still waiting for a response.

Entries are kept in the order they were made. Tests usually respond to the oldest request
first, but can also pick a specific request by its L{QueueEntry} or by the L{Deferred} the
code under test got back.
"""

from collections import deque

from twisted.internet.defer import Deferred


class QueueEntry(object):
    """
    One outstanding mock request.

    Entries are compared by identity: two requests for the same URL with the same payload are
    still two different entries.

    @ivar config: The configuration mapping the request was made with.
    @ivar url: The C{"url"} item of C{config}, or C{None}.
    @ivar data: The C{"data"} item of C{config}, or C{None}.
    @ivar deferred: The L{Deferred} that was returned to the caller.
    """

    def __init__(self, config, deferred):
        self.config = config
        self.url = config.get("url")
        self.data = config.get("data")
        self.deferred = deferred

    def __repr__(self):
        return "<QueueEntry url=%r data=%r>" % (self.url, self.data)


class ByEntry(object):
    """Select a specific L{QueueEntry}."""

    def __init__(self, entry):
        self.entry = entry

    def __repr__(self):
        return "ByEntry(%r)" % (self.entry,)


class ByDeferred(object):
    """Select the entry whose Deferred is the given one."""

    def __init__(self, deferred):
        self.deferred = deferred

    def __repr__(self):
        return "ByDeferred(%r)" % (self.deferred,)


class Oldest(object):
    """Select the entry that has been waiting the longest."""

    def __repr__(self):
        return "OLDEST"


OLDEST = Oldest()


def selectorFor(value):
    """
    Turn whatever a test passed to pick a request into a selector.

    @param value: C{None}, a L{QueueEntry}, a L{Deferred}, or a selector.
    @raise TypeError: For anything else.
    """
    if value is None:
        return OLDEST
    if isinstance(value, (ByEntry, ByDeferred, Oldest)):
        return value
    if isinstance(value, QueueEntry):
        return ByEntry(value)
    if isinstance(value, Deferred):
        return ByDeferred(value)
    raise TypeError("Can't select a pending request with %r" % (value,))


class RequestQueue(object):
    """
    A FIFO store of L{QueueEntry} objects.

    Nothing that only reads the queue changes its order, and an entry that has been removed
    is never put back.
    """

    def __init__(self):
        self._entries = deque()

    def __len__(self):
        return len(self._entries)

    def __iter__(self):
        return iter(list(self._entries))

    def entries(self):
        return list(self._entries)

    def append(self, entry):
        self._entries.append(entry)

    def removeAt(self, index):
        """
        Remove and return the entry at C{index}.

        @raise IndexError: If there is no entry at C{index}.
        """
        entry = self._entries[index]
        del self._entries[index]
        return entry

    def removeOldest(self):
        """
        Remove and return the oldest entry, or C{None} if the queue is empty.
        """
        if not self._entries:
            return None
        return self._entries.popleft()

    def removeByDeferred(self, deferred):
        for index, entry in enumerate(self._entries):
            if entry.deferred is deferred:
                return self.removeAt(index)
        return None

    def removeEntry(self, entry):
        for index, candidate in enumerate(self._entries):
            if candidate is entry:
                return self.removeAt(index)
        return None

    def peekNewest(self):
        if not self._entries:
            return None
        return self._entries[-1]

    def findNewestByURL(self, url):
        """
        Find the most recently made request for exactly C{url}, without removing it.
        """
        for entry in reversed(self._entries):
            if entry.url == url:
                return entry
        return None

    def clear(self):
        """
        Forget every entry. Their Deferreds are left as they are.
        """
        self._entries.clear()

    def locateEntry(self, selector):
        """
        Remove and return the entry picked by C{selector}.

        @param selector: L{ByEntry}, L{ByDeferred} or L{OLDEST}.
        @return: The removed L{QueueEntry}, or C{None} if nothing matched.
        @raise TypeError: If C{selector} isn't a selector.
        """
        if isinstance(selector, ByEntry):
            return self.removeEntry(selector.entry)
        elif isinstance(selector, ByDeferred):
            return self.removeByDeferred(selector.deferred)
        elif isinstance(selector, Oldest):
            return self.removeOldest()
        raise TypeError("Not a request selector: %r" % (selector,))

    def locate(self, selector):
        """
        Like L{locateEntry}, but return the removed entry's L{Deferred} (or C{None}).
        """
        entry = self.locateEntry(selector)
        if entry is None:
            return None
        return entry.deferred
