"""
The MoodCount Python module.

Counts, per document, the words that belong to each category of a
word -> category lexicon, as a map / group / reduce pipeline.
"""

from moodcount.core import run, itermap, iterreduce, itermapred, Error, InvariantViolation
from moodcount.base import MapRedBase, Counter
from moodcount.grouping import HashGrouper, SortGrouper, getgrouper
from moodcount.lexicon import Lexicon, loadlexicon, LexiconLoadError, LexiconFormatError
from moodcount.sentiment import AggregateResult, Classifier, countsentiments
from moodcount.lib import *

if __name__ == '__main__':
    import sys
    from moodcount.cmd import moodcount
    sys.exit(moodcount())
