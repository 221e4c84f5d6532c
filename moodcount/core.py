# Licensed to the Apache Software Foundation (ASF) under one
# or more contributor license agreements.  See the NOTICE file
# distributed with this work for additional information
# regarding copyright ownership.  The ASF licenses this file
# to you under the Apache License, Version 2.0 (the
# "License"); you may not use this file except in compliance
# with the License.  You may obtain a copy of the License at
#
# http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from collections import deque
from concurrent.futures import ThreadPoolExecutor

from moodcount.base import MapRedBase
from moodcount.util import Options, incrcounter, setstatus


class Error(Exception):
    pass


class InvariantViolation(Error):
    """Raised when a pipeline stage sees input an earlier stage must never produce."""


def getintopt(opts, key, default):
    value = Options(opts).first(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        raise Error('option -%s expects an integer, got %r' % (key, value))


##################################################################
## [!] The definitions above the import below are needed by the ##
##     grouping module, which imports them from here.           ##
##################################################################

from moodcount.grouping import HashGrouper, getgrouper


def mapfunc_iter(data, mapfunc):
    for (key, value) in data:
        for output in mapfunc(key, value):
            yield output


def itermap(data, mapfunc):
    try:
        return mapfunc(data)
    except TypeError:
        return mapfunc_iter(data, mapfunc)


def redfunc_iter(data, redfunc):
    for (key, values) in data:
        for output in redfunc(key, values):
            yield output


def iterreduce(groups, redfunc):
    """Apply `redfunc` to (key, values) groups produced by a grouper"""
    try:
        return redfunc(groups)
    except TypeError:
        return redfunc_iter(groups, redfunc)


def itergroup(data, grouper=None):
    if grouper is None:
        grouper = HashGrouper()
    grouper.extend(data)
    grouper.close()
    return iter(grouper)


def itermapred(data, mapfunc, redfunc, grouper=None):
    return iterreduce(itergroup(itermap(data, mapfunc), grouper), redfunc)


def boundedmap(pool, func, iterable, window):
    """Like pool.map, but with at most `window` calls in flight, so that
    `iterable` is consumed lazily. Results come back in input order."""
    pending = deque()
    for item in iterable:
        pending.append(pool.submit(func, item))
        if len(pending) >= window:
            yield pending.popleft().result()
    while pending:
        yield pending.popleft().result()


def instrument(func, name, method):
    """Returns (callable, configure, close) for a mapper or reducer,
    instantiating classes with MapRedBase mixed in"""
    if isinstance(func, type):
        cls = type(name, (func, MapRedBase), {})
        func = cls()
    conf = getattr(func, 'configure', None)
    close = getattr(func, 'close', None)
    if hasattr(func, method):
        func = getattr(func, method)
    return func, conf, close


def run(mapper, reducer, input, combiner=None, opts=None):
    """
    Runs one map / group / reduce pass over `input`, a stream of
    (key, value) records, yielding the reducer outputs.

    Each input record is one unit of emission work. All units complete
    and the grouper is closed before the first group is reduced, so
    nothing is yielded until every record has been grouped.

    Recognised opts: grouping, buffersize, sorttmpdir, workers.
    """
    opts = Options(opts)
    workers = getintopt(opts, 'workers', 1)
    if workers < 1:
        raise Error('option -workers must be at least 1, got %d' % workers)

    mapper, mapconf, mapclose = instrument(mapper, 'MoodCountMapper', 'map')
    reducer, redconf, redclose = instrument(reducer, 'MoodCountReducer', 'reduce')
    if combiner is not None:
        combiner, combconf, combclose = instrument(combiner, 'MoodCountCombiner', 'reduce')
    else:
        combconf = combclose = None

    def emit(record):
        outputs = itermap([record], mapper)
        if combiner is not None:
            outputs = iterreduce(itergroup(outputs), combiner)
        return list(outputs)

    def aggregate(group):
        return list(iterreduce([group], reducer))

    grouper = getgrouper(opts)
    pool = ThreadPoolExecutor(workers) if workers > 1 else None
    try:
        for conf in (mapconf, combconf):
            if conf:
                conf()

        setstatus('emitting')
        units = 0
        if pool:
            for records in boundedmap(pool, emit, input, 2 * workers):
                grouper.extend(records)
                units += 1
        else:
            for record in input:
                grouper.extend(emit(record))
                units += 1
        grouper.close()
        incrcounter('MoodCount', 'Map input records', units)
        incrcounter('MoodCount', 'Map output records', len(grouper))

        for close in (combclose, mapclose):
            if close:
                close()

        setstatus('aggregating')
        if redconf:
            redconf()
        groups = 0
        if pool:
            # reduce workers need values that outlive the grouper's scan
            materialized = ((key, list(values)) for key, values in grouper)
            for outputs in boundedmap(pool, aggregate, materialized,
                                      2 * workers):
                groups += 1
                for output in outputs:
                    yield output
        else:
            for outputs in map(aggregate, grouper):
                groups += 1
                for output in outputs:
                    yield output
        incrcounter('MoodCount', 'Reduce input groups', groups)
        if redclose:
            redclose()
        setstatus('done')
    finally:
        if pool:
            pool.shutdown(wait=True)
        grouper.cleanup()
