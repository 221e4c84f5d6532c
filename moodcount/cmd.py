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
import tempfile

from moodcount.core import Error
from moodcount.lexicon import loadlexicon
from moodcount.sentiment import countsentiments, dumpresults, readdocuments
from moodcount.util import Options, configopts, parseargs


def moodcount(argv=None):
    argv = sys.argv if argv is None else argv
    if len(argv) < 2:
        print('Usages:')
        print('  moodcount start -lexicon <path> -input <path> [-input <path> ...] '
              '-output <path> [<options>]')
        print('  moodcount check -lexicon <path> [<options>]')
        return 1
    if argv[1] == 'start':
        retval = start(parseargs(argv[2:]))
    elif argv[1] == 'check':
        retval = check(parseargs(argv[2:]))
    else:
        print('ERROR: unknown moodcount command:', argv[1], file=sys.stderr)
        retval = 1
    return retval


def withconfig(opts, command):
    opts = Options(opts)
    opts += Options(configopts('common'))
    opts += Options(configopts(command))
    return opts


def start(opts):
    opts = withconfig(opts, 'start')
    lexicon, output = opts.first('lexicon'), opts.first('output')
    inputs = [path for value in opts['input'] for path in value.split()]
    if not lexicon:
        print('ERROR: No lexicon specified', file=sys.stderr)
        return 1
    if not inputs:
        print('ERROR: No input path specified', file=sys.stderr)
        return 1
    if not output:
        print('ERROR: No output path specified', file=sys.stderr)
        return 1
    if os.path.exists(output) and 'yes' not in opts['overwrite']:
        print('ERROR: Output path exists already: %s' % output, file=sys.stderr)
        return 1

    outdir = os.path.dirname(os.path.abspath(output))
    fd = tmppath = None
    try:
        fd, tmppath = tempfile.mkstemp(prefix='.moodcount-', dir=outdir)
        lex = loadlexicon(lexicon, opts.first('duplicates', 'last'))
        print('INFO: loaded %d lexicon entries from %s' % (len(lex), lexicon),
              file=sys.stderr)
        results = countsentiments(readdocuments(inputs), lex, opts,
                                  combine='yes' in opts['combiner'])
        with os.fdopen(fd, 'w', encoding='utf-8') as outfile:
            fd = None
            outfile.writelines(dumpresults(results))
        os.replace(tmppath, output)
    except (Error, OSError) as e:
        print('ERROR: %s' % e, file=sys.stderr)
        return 1
    finally:
        if fd is not None:
            os.close(fd)
        if tmppath is not None and os.path.exists(tmppath):
            os.remove(tmppath)
    return 0


def check(opts):
    opts = withconfig(opts, 'check')
    lexicon = opts.first('lexicon')
    if not lexicon:
        print('ERROR: No lexicon specified', file=sys.stderr)
        return 1
    try:
        lex = loadlexicon(lexicon, opts.first('duplicates', 'last'))
    except Error as e:
        print('ERROR: %s' % e, file=sys.stderr)
        return 1
    print('%s: %d words, categories: %s' %
          (lexicon, len(lex), ', '.join(lex.categories())))
    return 0


def execute_and_exit():
    sys.exit(moodcount())


if __name__ == '__main__':
    execute_and_exit()
