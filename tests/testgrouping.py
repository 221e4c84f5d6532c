import os
import shutil
import tempfile
import unittest
from collections import Counter

from moodcount.core import Error, InvariantViolation
from moodcount.grouping import HashGrouper, SortGrouper, getgrouper
from moodcount.util import Options

RECORDS = [(('doc2', 'negative'), 1), (('doc1', 'positive'), 1),
           (('doc2', 'negative'), 1), (('doc1', 'neutral'), 1),
           (('doc1', 'positive'), 1), (('doc2', 'positive'), 3),
           (('doc1', 'positive'), 1)]


def collect(grouper):
    return [(key, list(values)) for key, values in grouper]


class GrouperTestCase(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.tmpdir)

    def makegroupers(self):
        return [HashGrouper(),
                SortGrouper(),
                SortGrouper(buffersize=1, tmpdir=self.tmpdir),
                SortGrouper(buffersize=3, tmpdir=self.tmpdir)]

    def test_hash_groups(self):
        grouper = HashGrouper()
        grouper.extend(RECORDS)
        grouper.close()
        self.assertEqual(collect(grouper),
                         [(('doc2', 'negative'), [1, 1]),
                          (('doc1', 'positive'), [1, 1, 1]),
                          (('doc1', 'neutral'), [1]),
                          (('doc2', 'positive'), [3])])

    def test_sort_groups(self):
        grouper = SortGrouper(buffersize=2, tmpdir=self.tmpdir)
        grouper.extend(RECORDS)
        grouper.close()
        self.assertEqual(collect(grouper),
                         [(('doc1', 'neutral'), [1]),
                          (('doc1', 'positive'), [1, 1, 1]),
                          (('doc2', 'negative'), [1, 1]),
                          (('doc2', 'positive'), [3])])

    def test_same_membership(self):
        expected = None
        for grouper in self.makegroupers():
            grouper.extend(RECORDS)
            grouper.close()
            groups = dict((key, sorted(values)) for key, values in collect(grouper))
            if expected is None:
                expected = groups
            self.assertEqual(groups, expected)

    def test_partition(self):
        records = [((i % 7, 'c%d' % (i % 3)), 1 + i % 2) for i in range(200)]
        for grouper in self.makegroupers():
            grouper.extend(records)
            grouper.close()
            self.assertEqual(len(grouper), len(records))
            groups = collect(grouper)
            keys = [key for key, _ in groups]
            self.assertEqual(len(keys), len(set(keys)))
            regrouped = Counter()
            for key, values in groups:
                for value in values:
                    regrouped[(key, value)] += 1
            self.assertEqual(regrouped, Counter(records))

    def test_spills_and_cleans_up(self):
        grouper = SortGrouper(buffersize=2, tmpdir=self.tmpdir)
        grouper.extend(RECORDS[:5])
        self.assertEqual(len(os.listdir(self.tmpdir)), 2)
        grouper.close()
        collect(grouper)
        self.assertEqual(os.listdir(self.tmpdir), [])

    def test_cleanup_without_scan(self):
        grouper = SortGrouper(buffersize=1, tmpdir=self.tmpdir)
        grouper.extend(RECORDS)
        grouper.close()
        self.assertEqual(len(os.listdir(self.tmpdir)), len(RECORDS))
        grouper.cleanup()
        self.assertEqual(os.listdir(self.tmpdir), [])

    def test_tuple_keys_survive_runs(self):
        key = ('doc1', ('nested', 'key'))
        grouper = SortGrouper(buffersize=1, tmpdir=self.tmpdir)
        grouper.extend([(key, 1), (key, 2)])
        grouper.close()
        groups = collect(grouper)
        self.assertEqual(groups, [(key, [1, 2])])
        self.assertTrue(isinstance(groups[0][0], tuple))
        self.assertTrue(isinstance(groups[0][0][1], tuple))

    def test_unicode_keys(self):
        grouper = SortGrouper(buffersize=1, tmpdir=self.tmpdir)
        grouper.extend([(('café', 'glück'), 1)] * 3)
        grouper.close()
        self.assertEqual(collect(grouper), [(('café', 'glück'), [1, 1, 1])])

    def test_barrier(self):
        for grouper in self.makegroupers():
            grouper.add(('doc1', 'positive'), 1)
            self.assertRaises(InvariantViolation, iter, grouper)
            grouper.close()
            self.assertRaises(InvariantViolation, grouper.add, ('doc1', 'positive'), 1)
            collect(grouper)

    def test_sorted_runs_scanned_once(self):
        grouper = SortGrouper(buffersize=1, tmpdir=self.tmpdir)
        grouper.extend(RECORDS)
        grouper.close()
        collect(grouper)
        self.assertRaises(InvariantViolation, collect, grouper)

    def test_empty(self):
        for grouper in self.makegroupers():
            grouper.close()
            self.assertEqual(collect(grouper), [])

    def test_bad_buffersize(self):
        self.assertRaises(Error, SortGrouper, 0)


class GetGrouperTestCase(unittest.TestCase):

    def test_default(self):
        self.assertTrue(isinstance(getgrouper(), HashGrouper))
        self.assertTrue(isinstance(getgrouper(Options([('grouping', 'hash')])), HashGrouper))

    def test_sort(self):
        grouper = getgrouper(Options([('grouping', 'sort'), ('buffersize', '5'),
                                      ('sorttmpdir', '/tmp')]))
        self.assertTrue(isinstance(grouper, SortGrouper))
        self.assertEqual(grouper.buffersize, 5)
        self.assertEqual(grouper.tmpdir, '/tmp')

    def test_errors(self):
        self.assertRaises(Error, getgrouper, [('grouping', 'random')])
        self.assertRaises(Error, getgrouper, [('grouping', 'sort'), ('buffersize', 'lots')])
        self.assertRaises(Error, getgrouper, [('grouping', 'sort'), ('buffersize', '0')])


if __name__ == "__main__":
    unittest.main(verbosity=2)
