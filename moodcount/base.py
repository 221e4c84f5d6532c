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

import os

from moodcount.util import incrcounter


class Params(object):
    """
    >>> os.environ["hi"] = "world"
    >>> p = Params()
    >>> "hi" in p
    True
    >>> p["hi"] == "world"
    True
    >>> p.get("hi") == "world"
    True
    >>> p.get("hello", "moodcount") == "moodcount"
    True
    >>>
    """
    def get(self, name, default=None):
        try:
            return os.environ[name]
        except KeyError:
            return default

    def __getitem__(self, key):
        return self.get(str(key))

    def __contains__(self, key):
        return self.get(str(key)) is not None


class Counter(object):

    def __init__(self, name, group='Program'):
        self.group = group
        self.name = name

    def incr(self, amount):
        incrcounter(self.group, self.name, amount)
        return self
    __iadd__ = incr


class Counters(object):

    def __init__(self, group='Program'):
        self.group = group
        self.counters = {}

    def __getitem__(self, key):
        try:
            return self.counters[key]
        except KeyError:
            counter = Counter(str(key), self.group)
            self.counters[key] = counter
            return counter

    def __setitem__(self, key, value):
        pass


class MapRedBase(object):

    params = Params()
    counters = Counters()

