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
moodcount.mapredtest

Provide a simple way of unit-testing mappers and reducers locally.
This is loosely based on Cloudera's MRUnit design.

See for example discussion on unit-testing MR jobs:
http://www.cloudera.com/blog/2009/07/advice-on-qa-testing-your-mapreduce-jobs/
http://www.cloudera.com/blog/2009/07/debugging-mapreduce-programs-with-mrunit/
"""

import os
import inspect
from itertools import zip_longest

from moodcount.core import itergroup, itermap, itermapred, iterreduce
from moodcount.base import MapRedBase

__all__ = ['MapDriver', 'ReduceDriver', 'MapReduceDriver']


def assert_iters_equal(expected, actual):
    """:Raise AssertionError: If the elements of iterators `expected` and `actual`
    are not equal (or one has more elements than the other)."""
    sentinel = object()
    pairs = zip_longest(iter(expected), iter(actual), fillvalue=sentinel)
    expdiff, actdiff = next(((e, a) for e, a in pairs if e != a), (None, None))
    if expdiff is sentinel:
        raise AssertionError("expected sequence exhausted before actual at element {0}".format(actdiff))
    elif actdiff is sentinel:
        raise AssertionError("actual sequence exhausted before expected at element {0}".format(expdiff))
    elif expdiff != actdiff:
        raise AssertionError("Element {0} did not match expected output: {1}".format(actdiff, expdiff))


class BaseDriver(object):
    """A Generic test driver that passes
    input stream through a callable and
    checks output stream matches specified one."""

    def __init__(self, kallable):
        # Check if given callable is a function or a class
        # type that needs instantiation
        if inspect.isclass(kallable):
            # Re-derive class using the common MapRedBase object.
            kallable = self._instrument_class(kallable)
            self._callable = kallable()
        else:
            self._callable = kallable

        self._input_source = None
        self._output_source = None
        self._grouper = None

    def with_params(self, params):
        for k, v in params:
            os.environ[k] = v
        return self

    def with_input(self, input_source):
        """Bind input stream"""
        self._input_source = iter(input_source)
        return self

    def with_output(self, output_source):
        """Bind output stream"""
        self._output_source = iter(output_source)
        return self

    def with_grouper(self, grouper):
        """Group with `grouper` instead of a fresh HashGrouper"""
        self._grouper = grouper
        return self

    def run(self):
        raise NotImplementedError

    def _configure(self, kallable):
        if hasattr(kallable, 'configure'):
            kallable.configure()

    def _instrument_class(self, cls):
        """Instrument a class for use with moodcount mapreduce tests"""
        newcls = type('InstrumentedClass', (cls, MapRedBase), {})
        return newcls


class MapDriver(BaseDriver):
    """Driver for Map operations"""

    @property
    def mapper(self):
        return self._callable

    def run(self):
        """Run test"""
        self._configure(self.mapper)
        assert_iters_equal(self._output_source, itermap(self._input_source, self.mapper))


class ReduceDriver(BaseDriver):
    """Driver for Reduce operations, grouping the (key, value) input first"""

    @property
    def reducer(self):
        return self._callable

    def run(self):
        """Run test"""
        self._configure(self.reducer)
        groups = itergroup(self._input_source, self._grouper)
        assert_iters_equal(self._output_source, iterreduce(groups, self.reducer))


class MapReduceDriver(BaseDriver):
    """Driver for a full map, group and reduce pass"""

    def __init__(self, mapper, reducer):
        BaseDriver.__init__(self, None)

        if inspect.isclass(mapper):
            mapper = self._instrument_class(mapper)
            self._mapper = mapper()
        else:
            self._mapper = mapper

        if inspect.isclass(reducer):
            reducer = self._instrument_class(reducer)
            self._reducer = reducer()
        else:
            self._reducer = reducer

    @property
    def mapper(self):
        return self._mapper

    @property
    def reducer(self):
        return self._reducer

    def run(self):
        """Run test"""
        self._configure(self.mapper)
        self._configure(self.reducer)
        assert_iters_equal(self._output_source,
                           itermapred(self._input_source, self.mapper,
                                      self.reducer, self._grouper))
