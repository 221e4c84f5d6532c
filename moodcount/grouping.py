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
"""
moodcount.grouping

Groupers partition a stream of (key, value) records into one group per
distinct key. Records are added while mappers run; `close()` marks the end
of the emission phase, and only then may the groups be iterated.

HashGrouper keeps every record in memory and is the fastest choice when the
intermediate data fits. SortGrouper holds at most `buffersize` records,
spilling sorted runs to temporary files and merging them when iterated,
much like `sort -S <size> -T <dir>` does between the map and reduce stages
of a streaming job.
"""

import heapq
import os
import sys
import tempfile
from collections import defaultdict
from itertools import groupby
from operator import itemgetter

import ujson

from moodcount.core import Error, InvariantViolation, getintopt
from moodcount.util import Options

DEFAULT_BUFFERSIZE = 100000

firstitem = itemgetter(0)


class Grouper(object):

    def __init__(self):
        self.closed = False
        self.records = 0

    def add(self, key, value):
        if self.closed:
            raise InvariantViolation('record for key %r added after the '
                                     'grouper was closed' % (key,))
        self._add(key, value)
        self.records += 1

    def extend(self, records):
        for key, value in records:
            self.add(key, value)

    def close(self):
        if not self.closed:
            self._close()
            self.closed = True

    def __iter__(self):
        if not self.closed:
            raise InvariantViolation('groups requested before the grouper '
                                     'was closed')
        return self._groups()

    def __len__(self):
        return self.records

    def cleanup(self):
        pass

    def _add(self, key, value):
        raise NotImplementedError

    def _close(self):
        pass

    def _groups(self):
        raise NotImplementedError


class HashGrouper(Grouper):
    """Groups come out in the order their keys were first seen"""

    def __init__(self):
        Grouper.__init__(self)
        self._table = defaultdict(list)

    def _add(self, key, value):
        self._table[key].append(value)

    def _groups(self):
        for key, values in self._table.items():
            yield key, iter(values)


def totuple(obj):
    if isinstance(obj, list):
        return tuple(totuple(item) for item in obj)
    return obj


def readrun(runfile):
    for line in runfile:
        key, value = ujson.loads(line)
        yield totuple(key), value


class SortGrouper(Grouper):
    """
    Groups come out in ascending key order, so keys must be mutually
    comparable. Keys and values must survive a JSON round trip, with
    JSON arrays being read back as tuples.
    """

    def __init__(self, buffersize=DEFAULT_BUFFERSIZE, tmpdir=None):
        Grouper.__init__(self)
        if buffersize < 1:
            raise Error('buffersize must be at least 1, got %d' % buffersize)
        self.buffersize = buffersize
        self.tmpdir = tmpdir
        self._buffer = []
        self._runs = []
        self._consumed = False

    def _add(self, key, value):
        self._buffer.append((key, value))
        if len(self._buffer) >= self.buffersize:
            self._spill()

    def _spill(self):
        self._buffer.sort(key=firstitem)
        fd, path = tempfile.mkstemp(prefix='moodcount-run-', suffix='.jsonl',
                                    dir=self.tmpdir)
        self._runs.append(path)
        with os.fdopen(fd, 'w', encoding='utf-8') as runfile:
            for record in self._buffer:
                runfile.write(ujson.dumps(record))
                runfile.write('\n')
        self._buffer = []

    def _close(self):
        self._buffer.sort(key=firstitem)
        if self._runs:
            print('INFO: merging %d sorted runs of up to %d records' %
                  (len(self._runs), self.buffersize), file=sys.stderr)

    def _groups(self):
        if self._consumed:
            raise InvariantViolation('sorted runs can only be scanned once')
        self._consumed = True
        runfiles = []
        try:
            for path in self._runs:
                runfiles.append(open(path, encoding='utf-8'))
            streams = [readrun(runfile) for runfile in runfiles]
            streams.append(iter(self._buffer))
            merged = heapq.merge(*streams, key=firstitem)
            for key, records in groupby(merged, firstitem):
                yield key, (value for _, value in records)
        finally:
            for runfile in runfiles:
                runfile.close()
            self.cleanup()

    def cleanup(self):
        while self._runs:
            path = self._runs.pop()
            try:
                os.remove(path)
            except FileNotFoundError:
                pass
        self._buffer = []


def getgrouper(opts=None):
    """Builds the grouper selected by the grouping, buffersize and
    sorttmpdir options"""
    opts = Options(opts)
    strategy = opts.first('grouping', 'hash')
    if strategy == 'hash':
        return HashGrouper()
    elif strategy == 'sort':
        buffersize = getintopt(opts, 'buffersize', DEFAULT_BUFFERSIZE)
        return SortGrouper(buffersize, opts.first('sorttmpdir'))
    raise Error('unknown grouping strategy: %s' % strategy)
