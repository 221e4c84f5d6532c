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
moodcount.sentiment

Counts, per document, how many of its words fall into each lexicon
category. Documents are (document id, text) pairs; results are
AggregateResult triples, one per (document, category) that occurs.

    >>> lexicon = Lexicon({'happy': 'positive', 'sad': 'negative'})
    >>> docs = [('doc1', 'I am happy happy but also sad')]
    >>> sorted(countsentiments(docs, lexicon))
    [AggregateResult(document='doc1', category='negative', total=1), \
AggregateResult(document='doc1', category='positive', total=2)]
"""

import os
from collections import namedtuple

from moodcount.base import MapRedBase
from moodcount.core import Error, run
from moodcount.lexicon import Lexicon, loadlexicon
from moodcount.lib import sumcombiner, sumreducer
from moodcount.util import dumptext

AggregateResult = namedtuple('AggregateResult', 'document category total')


def tokenize(text):
    return text.split()


class Classifier(MapRedBase):
    """
    Mapper that emits ((document, category), 1) for every token of a
    document found in the lexicon. Without a lexicon, one is loaded on
    configure() from the path in the `lexicon` parameter.
    """

    def __init__(self, lexicon=None):
        self.lexicon = lexicon

    def configure(self):
        if self.lexicon is None:
            path = self.params['lexicon']
            if path is None:
                raise Error('no lexicon given and no lexicon parameter set')
            self.lexicon = loadlexicon(path, self.params.get('duplicates', 'last'))

    def __call__(self, document, text):
        lexicon = self.lexicon
        hits = misses = 0
        for token in tokenize(text):
            category = lexicon.get(token)
            if category is None:
                misses += 1
                continue
            hits += 1
            yield (document, category), 1
        if hits:
            self.counters['Classified tokens'] += hits
        if misses:
            self.counters['Unknown tokens'] += misses


def countsentiments(documents, lexicon, opts=None, combine=False):
    if not isinstance(lexicon, Lexicon):
        lexicon = loadlexicon(lexicon)
    combiner = sumcombiner if combine else None
    outputs = run(Classifier(lexicon), sumreducer, documents,
                  combiner=combiner, opts=opts)
    for (document, category), total in outputs:
        yield AggregateResult(document, category, total)


def readdocuments(paths):
    """Yields a (file name, contents) pair per path"""
    seen = set()
    for path in paths:
        document = os.path.basename(path)
        if document in seen:
            raise Error('duplicate document id %s (from %s)' % (document, path))
        seen.add(document)
        try:
            with open(path, encoding='utf-8') as docfile:
                text = docfile.read()
        except UnicodeDecodeError as e:
            raise Error('cannot decode document %s: %s' % (path, e)) from e
        yield document, text


def dumpresults(results):
    for fields in dumptext(results):
        yield '\t'.join(fields) + '\n'
