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
import sys
from collections import defaultdict


def incrcounter(group, counter, amount):
    print('reporter:counter:%s,%s,%s' % (group, counter, amount),
          file=sys.stderr)


def setstatus(message):
    print('reporter:status:%s' % message, file=sys.stderr)


def dumptext(outputs):
    newoutput = []
    for output in outputs:
        for item in output:
            if isinstance(item, (tuple, list)):
                newoutput.append('\t'.join(map(str, item)))
            else:
                newoutput.append(str(item))
        yield newoutput
        newoutput = []


class Options(object):
    """
    Class that represents a set of options. A key can hold
    more than one value and keys are stored in lowercase.
    The order of the values is preserved per key.
    """

    def __init__(self, seq=None, **kwargs):
        """
        Initialize the option object

        Args:
         - seq: a list of (key, value) pairs
        """
        self._opts = defaultdict(list)  # not sets since order is important
        options = seq or []
        for k, v in kwargs.items():
            self.add(k, v)
        for k, v in options:
            self.add(k, v)

    def add(self, key, value):
        optlist = self._opts[key]
        try:
            optlist.remove(value)
        except ValueError:
            pass  # ignore "not in list" error
        optlist.append(value)

    def update(self, key, values):
        for value in values:
            self.add(key, value)

    def get(self, key):
        if key not in self._opts:
            return []
        return list(self._opts[key])

    def __getitem__(self, key):
        return self.get(key)

    def __iadd__(self, opts):
        if isinstance(opts, Options):
            for k, vs in opts._opts.items():
                self.update(k, vs)
            return self
        elif isinstance(opts, (list, tuple, set)):
            for k, v in opts:
                self.add(k, v)
            return self
        else:
            raise ValueError('Invalid opts type. Must be an iterable of (key, value)')

    def __iter__(self):
        return iter(self.allopts())

    def __contains__(self, key):
        return key in self._opts

    def __len__(self):
        return len(self.allopts())

    def __bool__(self):
        return bool(self._opts)

    def first(self, key, default=None):
        """Return the first value given for `key`, or `default`"""
        values = self.get(key)
        return values[0] if values else default

    def allopts(self):
        """Return a list with all the options in the form of (key, value)"""
        return [(k, v) for k, vs in self._opts.items() for v in vs]

    def __str__(self):
        ps = self.allopts()
        return "Options(%s)" % (', '.join('%s="%s"' % (k, v) for k, v in ps))
    __repr__ = __str__


def parseargs(args):
    (opts, key, values) = (Options(), None, [])
    for arg in args:
        if arg[0] == '-' and len(arg) > 1:
            if key:
                opts.add(key, ' '.join(values))
            (key, values) = (arg[1:], [])
        else:
            values.append(arg)
    if key:
        opts.add(key, ' '.join(values))
    return opts


CONFIG_FILES = ['/etc/moodcount.conf', os.path.join('~', '.moodcountrc')]


def configopts(section, prog=None, opts=None, files=None):
    from configparser import ConfigParser, NoSectionError
    if prog:
        prog = prog.split('/')[-1]
        prog = prog[:-3] if prog.endswith('.py') else prog
        defaults = {'prog': prog}
    else:
        defaults = {}
    try:
        defaults.update([('user', os.environ['USER']), ('pwd',
                        os.environ['PWD'])])
    except KeyError:
        pass
    for (key, value) in opts or Options():
        defaults[key.lower()] = value
    parser = ConfigParser(defaults)
    parser.read([os.path.expanduser(f) for f in (files or CONFIG_FILES)])
    (results, excludes) = ([], set(defaults))
    try:
        for (key, value) in parser.items(section):
            if not key.lower() in excludes:
                results.append((key.split('_', 1)[0], value))
    except NoSectionError:
        pass
    return results
