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
moodcount.lexicon

A lexicon maps words to categories. It is read from a text resource with
one `word<TAB>category` entry per line and is never modified after it has
been loaded, so a single instance can be shared by any number of mappers.

Words are trimmed and lower-cased when stored and when looked up. When a
word occurs more than once, the `duplicates` policy decides what happens:

 - 'last': the later entry replaces the earlier one (the default)
 - 'first': the earlier entry is kept
 - 'error': the duplicate is reported as a LexiconFormatError
"""

from collections.abc import Mapping
from types import MappingProxyType

from moodcount.core import Error

DUPLICATE_POLICIES = ('last', 'first', 'error')


class LexiconLoadError(Error):
    pass


class LexiconFormatError(Error):

    def __init__(self, message, source=None, lineno=None, line=None):
        self.message = message
        self.source = source
        self.lineno = lineno
        self.line = line
        if source is not None and lineno is not None:
            message = '%s:%d: %s' % (source, lineno, message)
        Error.__init__(self, message)


def normalize(word):
    return word.strip().lower()


def checkpolicy(duplicates):
    if duplicates not in DUPLICATE_POLICIES:
        raise Error('unknown duplicates policy: %s' % duplicates)


class Lexicon(Mapping):
    """
    Read-only mapping from normalized words to categories. `entries` may
    be a mapping or an iterable of (word, category) pairs.
    """

    __slots__ = ('_entries',)

    def __init__(self, entries=(), duplicates='last'):
        checkpolicy(duplicates)
        if isinstance(entries, Mapping):
            entries = entries.items()
        table = {}
        for word, category in entries:
            addentry(table, word, category, duplicates)
        self._entries = MappingProxyType(table)

    def __getitem__(self, word):
        return self._entries[normalize(word)]

    def __iter__(self):
        return iter(self._entries)

    def __len__(self):
        return len(self._entries)

    def categories(self):
        return sorted(set(self._entries.values()))

    def __repr__(self):
        return 'Lexicon(%d words, categories=%r)' % (len(self), self.categories())


def addentry(table, word, category, duplicates, source=None, lineno=None, line=None):
    word, category = normalize(word), category.strip()
    if not word or not category:
        raise LexiconFormatError('empty word or category', source, lineno, line)
    if word in table:
        if duplicates == 'first':
            return
        elif duplicates == 'error':
            raise LexiconFormatError('duplicate entry for %r' % word,
                                     source, lineno, line)
    table[word] = category


def parseline(line, source=None, lineno=None):
    fields = line.split('\t')
    if len(fields) != 2:
        raise LexiconFormatError('expected 2 tab-separated fields, found %d'
                                 % len(fields), source, lineno, line)
    return fields[0], fields[1]


def readlexicon(lexfile, source, duplicates):
    table, lineno = {}, 0
    try:
        for lineno, line in enumerate(lexfile, 1):
            line = line.rstrip('\r\n')
            word, category = parseline(line, source, lineno)
            addentry(table, word, category, duplicates, source, lineno, line)
    except (OSError, UnicodeDecodeError) as e:
        raise LexiconLoadError('cannot read lexicon %s after line %d: %s'
                               % (source, lineno, e)) from e
    if not table:
        raise LexiconFormatError('lexicon %s has no entries' % source)
    return Lexicon(table)


def loadlexicon(source, duplicates='last'):
    """
    Loads a lexicon from a path or an open text file. Raises
    LexiconLoadError when the source cannot be read and
    LexiconFormatError on the first malformed line.
    """
    checkpolicy(duplicates)
    if hasattr(source, 'read'):
        return readlexicon(source, getattr(source, 'name', '<lexicon>'),
                           duplicates)
    try:
        lexfile = open(source, encoding='utf-8-sig')
    except OSError as e:
        raise LexiconLoadError('cannot open lexicon %s: %s' % (source, e)) from e
    with lexfile:
        return readlexicon(lexfile, source, duplicates)
