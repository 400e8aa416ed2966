'''
Frequency table over arbitrary hashable objects, backed by CountedObject
'''

import numpy as np
from hedgepig_logger import log
from counted_object import CountedObject

class FrequencyTable:
    '''Maps each distinct object to the CountedObject tracking how often
    it has been seen; iteration follows first-seen order.
    '''

    def __init__(self, items=None):
        self._table = {}
        if items is not None:
            self.update(items)

    def add(self, item, n=1):
        '''Count n more observations of item, returning its CountedObject
        '''
        counted = self._table.get(item, None)
        if counted is None:
            counted = CountedObject(item, n)
            self._table[item] = counted
        else:
            counted.increment(n)
        return counted

    def update(self, items, verbose=False):
        if verbose:
            log.track(message='  >> Counted {0:,} items', writeInterval=10000)
        for item in items:
            self.add(item)
            if verbose: log.tick()
        if verbose:
            log.flushTracker()

    def decrement(self, item, n=1):
        if not item in self._table:
            raise KeyError("Cannot decrement unseen item %r" % (item,))
        counted = self._table[item]
        counted.decrement(n)
        return counted

    def get(self, item, default=None):
        return self._table.get(item, default)

    def count(self, item):
        counted = self._table.get(item, None)
        return 0 if counted is None else counted.getCount()

    def total(self):
        return sum(counted.getCount() for counted in self._table.values())

    def mostCommon(self, k=None):
        '''Returns CountedObjects in descending order of count (ties keep
        first-seen order), restricted to the top k if k is given.
        '''
        ranked = sorted(
            self._table.values(),
            key=lambda counted: counted.getCount(),
            reverse=True
        )
        if k is None: return ranked
        elif k < 0:
            raise ValueError("k must be non-negative (got %d)" % k)
        else: return ranked[:k]

    def prune(self, min_count=1):
        '''Drop every entry whose count is below min_count; returns the
        number of entries removed.
        '''
        to_remove = [
            item
                for (item, counted) in self._table.items()
                if counted.getCount() < min_count
        ]
        for item in to_remove:
            del self._table[item]
        return len(to_remove)

    def toArrays(self):
        '''Returns (values, counts), with values as a list and counts as
        a numpy array, both in first-seen order.

        Counts are int64 unless one falls outside the int64 range, in which
        case the array holds the Python ints as dtype=object.
        '''
        values = list(self._table.keys())
        raw_counts = [
            self._table[v].getCount()
                for v in values
        ]
        bounds = np.iinfo(np.int64)
        if all(bounds.min <= c <= bounds.max for c in raw_counts):
            counts = np.array(raw_counts, dtype=np.int64)
        else:
            counts = np.array(raw_counts, dtype=object)
        return values, counts

    def frequencies(self):
        (_, counts) = self.toArrays()
        total = sum(counts.tolist())
        if total == 0:
            raise ValueError("Cannot compute relative frequencies with a total count of 0")
        return np.array([
            c / total
                for c in counts.tolist()
        ], dtype=np.float64)

    def __getitem__(self, item):
        return self._table[item]

    def __contains__(self, item):
        return item in self._table

    def __len__(self):
        return len(self._table)

    def __iter__(self):
        return iter(self._table.values())

def countTokens(stream, lower=False, table=None, verbose=False):
    '''Count whitespace-separated tokens in each line of stream
    '''
    if table is None:
        table = FrequencyTable()
    if verbose:
        log.track(message='  >> Read {0:,} lines', writeInterval=10000)
    for line in stream:
        tokens = line.split()
        if lower:
            tokens = [t.lower() for t in tokens]
        for token in tokens:
            table.add(token)
        if verbose: log.tick()
    if verbose:
        log.flushTracker()
    return table

if __name__ == '__main__':
    import sys
    import codecs

    def _cli():
        import optparse
        parser = optparse.OptionParser(usage='Usage: %prog [options] -o OUTF < TEXT',
                description='Counts whitespace-separated tokens read from stdin and writes'
                            ' "<count>\\t<token>" lines for the most frequent ones to OUTF')
        parser.add_option('-o', '--output', dest='outputf',
                help='file to write token counts to (required)',
                default=None)
        parser.add_option('-k', '--top-k', dest='top_k',
                help='number of most frequent tokens to write (default: all)',
                type='int', default=None)
        parser.add_option('--min-count', dest='min_count',
                help='drop tokens seen fewer than this many times (default: %default)',
                type='int', default=1)
        parser.add_option('--lower', dest='lower',
                action='store_true', default=False,
                help='lower-case tokens before counting')
        parser.add_option('-l', '--logfile', dest='logfile',
                help='name of file to write log contents to (empty for stdout)',
                default=None)
        (options, args) = parser.parse_args()
        if len(args) != 0 or not options.outputf:
            parser.print_help()
            exit()
        if (not options.top_k is None) and options.top_k < 1:
            print("Argument for --top-k must be a positive integer!")
            parser.print_help()
            exit()
        return options

    options = _cli()
    log.start(options.logfile)
    log.writeConfig([
        ('Output counts file', options.outputf),
        ('Number of tokens to write', ('all' if options.top_k is None else options.top_k)),
        ('Minimum count', options.min_count),
        ('Lower-casing tokens', options.lower),
    ], 'Token frequency counting')

    t = log.startTimer('Counting tokens from stdin...')
    table = countTokens(sys.stdin, lower=options.lower, verbose=True)
    log.stopTimer(t, message='Counted {0:,} tokens ({1:,} distinct) in {2}s.\n'.format(
        table.total(), len(table), '{0:.2f}'))

    if options.min_count > 1:
        n_removed = table.prune(options.min_count)
        log.writeln('Pruned {0:,} tokens seen fewer than {1} times.\n'.format(n_removed, options.min_count))

    ranked = table.mostCommon(options.top_k)
    with codecs.open(options.outputf, 'w', 'utf-8') as stream:
        for counted in ranked:
            stream.write('%d\t%s\n' % (counted.getCount(), counted.getValue()))
    log.writeln('Wrote {0:,} token counts to {1}.'.format(len(ranked), options.outputf))

    log.stop()
