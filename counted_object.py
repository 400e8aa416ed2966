'''
Container pairing an arbitrary object with a mutable integer count
'''

class CountedObject:
    '''Wraps an object together with a counter that can be updated in place,
    so a frequency table can do

        table[obj].increment()

    instead of rebuilding an integer for every update.

    Two CountedObjects are equal iff their wrapped objects are equal,
    regardless of their counts; compare getCount() explicitly when the
    counts matter. Hashing follows the wrapped object for the same reason.

    Note: equality compares the wrapped object against the *other wrapped
    object*, not against the other wrapper itself.
    '''
    _value = None
    _count = 0

    def __init__(self, value, count=1):
        self._value = value
        self._count = count

    @property
    def value(self):
        return self._value

    @property
    def count(self):
        return self._count

    def getValue(self):
        return self._value

    getObject = getValue

    def getCount(self):
        return self._count

    def increment(self, n=1):
        '''Add n (default 1) to the counter; n may be negative'''
        self._count += n

    def decrement(self, n=1):
        '''Subtract n (default 1) from the counter; no lower bound is enforced'''
        self._count -= n

    def equals(self, other):
        return self == other

    def __eq__(self, other):
        if self is other:
            return True
        if not isinstance(other, CountedObject):
            return NotImplemented
        return self._value == other._value

    def __hash__(self):
        return hash(self._value)

    def __repr__(self):
        return 'CountedObject(%r, %d)' % (self._value, self._count)
