"""
Counts lexicon categories per input file.

Usage: python sentimentcount.py <lexicon> <file> [<file> ...]
"""

import sys

from moodcount.lexicon import loadlexicon
from moodcount.sentiment import countsentiments, readdocuments


def main(args):
    lexicon = loadlexicon(args[0])
    for result in countsentiments(readdocuments(args[1:]), lexicon):
        print('%s\t%s\t%d' % result)


if __name__ == "__main__":
    main(sys.argv[1:])
