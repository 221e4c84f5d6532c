import io
import os
import shutil
import tempfile
import unittest

from moodcount.core import Error
from moodcount.lexicon import (Lexicon, LexiconFormatError, LexiconLoadError,
                               loadlexicon, normalize)


class LexiconTestCase(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.tmpdir)

    def writelexicon(self, content, name='lexicon.txt'):
        path = os.path.join(self.tmpdir, name)
        mode = 'wb' if isinstance(content, bytes) else 'w'
        with open(path, mode) as lexfile:
            lexfile.write(content)
        return path

    def test_load_normalizes(self):
        path = self.writelexicon('Happy\tpositive\nsad\tnegative\r\n'
                                 ' Great \t positive \n')
        lexicon = loadlexicon(path)
        self.assertEqual(len(lexicon), 3)
        self.assertEqual(sorted(lexicon), ['great', 'happy', 'sad'])
        self.assertEqual(lexicon['happy'], 'positive')
        self.assertEqual(lexicon['HAPPY'], 'positive')
        self.assertEqual(lexicon['Happy '], 'positive')
        self.assertEqual(lexicon.get('  sad'), 'negative')
        self.assertEqual(lexicon['great'], 'positive')
        self.assertTrue('GREAT' in lexicon)
        self.assertEqual(lexicon.categories(), ['negative', 'positive'])

    def test_miss(self):
        lexicon = Lexicon({'happy': 'positive'})
        self.assertEqual(lexicon.get('xyz'), None)
        self.assertFalse('xyz' in lexicon)
        self.assertRaises(KeyError, lexicon.__getitem__, 'xyz')

    def test_load_from_fileobject(self):
        lexicon = loadlexicon(io.StringIO('happy\tpositive\nfine\tneutral\n'))
        self.assertEqual(dict(lexicon), {'happy': 'positive', 'fine': 'neutral'})

    def test_missing_delimiter(self):
        path = self.writelexicon('happy\tpositive\nonlyoneword\n')
        with self.assertRaises(LexiconFormatError) as cm:
            loadlexicon(path)
        self.assertEqual(cm.exception.lineno, 2)
        self.assertEqual(cm.exception.line, 'onlyoneword')
        self.assertEqual(cm.exception.source, path)
        self.assertTrue(str(cm.exception).startswith('%s:2:' % path))

    def test_too_many_fields(self):
        source = io.StringIO('happy\tpositive\tstrong\n')
        self.assertRaises(LexiconFormatError, loadlexicon, source)

    def test_blank_line(self):
        source = io.StringIO('happy\tpositive\n\nsad\tnegative\n')
        with self.assertRaises(LexiconFormatError) as cm:
            loadlexicon(source)
        self.assertEqual(cm.exception.lineno, 2)

    def test_empty_fields(self):
        self.assertRaises(LexiconFormatError, loadlexicon,
                          io.StringIO('\tpositive\n'))
        self.assertRaises(LexiconFormatError, loadlexicon,
                          io.StringIO('happy\t  \n'))

    def test_empty_lexicon(self):
        path = self.writelexicon('')
        self.assertRaises(LexiconFormatError, loadlexicon, path)

    def test_unreadable(self):
        missing = os.path.join(self.tmpdir, 'nothere.txt')
        self.assertRaises(LexiconLoadError, loadlexicon, missing)
        self.assertRaises(LexiconLoadError, loadlexicon, self.tmpdir)

    def test_undecodable(self):
        path = self.writelexicon(b'happy\tpositive\n\xff\xfe\tnegative\n')
        with self.assertRaises(LexiconLoadError) as cm:
            loadlexicon(path)
        self.assertTrue(isinstance(cm.exception.__cause__, UnicodeDecodeError))

    def test_byte_order_mark(self):
        path = self.writelexicon(b'\xef\xbb\xbfhappy\tpositive\nsad\tnegative\n')
        lexicon = loadlexicon(path)
        self.assertEqual(sorted(lexicon), ['happy', 'sad'])
        self.assertEqual(lexicon['happy'], 'positive')

    def test_errors_are_library_errors(self):
        self.assertTrue(issubclass(LexiconLoadError, Error))
        self.assertTrue(issubclass(LexiconFormatError, Error))

    def test_duplicates(self):
        content = 'happy\tpositive\nHAPPY\tnegative\n'
        self.assertEqual(loadlexicon(io.StringIO(content))['happy'], 'negative')
        self.assertEqual(loadlexicon(io.StringIO(content), 'last')['happy'], 'negative')
        self.assertEqual(loadlexicon(io.StringIO(content), 'first')['happy'], 'positive')
        with self.assertRaises(LexiconFormatError) as cm:
            loadlexicon(io.StringIO(content), 'error')
        self.assertEqual(cm.exception.lineno, 2)
        self.assertRaises(Error, loadlexicon, io.StringIO(content), 'random')

    def test_from_entries(self):
        lexicon = Lexicon([('Happy', 'positive'), ('happy', 'neutral')], 'first')
        self.assertEqual(lexicon['happy'], 'positive')
        self.assertRaises(LexiconFormatError, Lexicon,
                          [('happy', 'positive'), ('happy', 'neutral')], 'error')
        self.assertEqual(len(Lexicon()), 0)

    def test_read_only(self):
        lexicon = Lexicon({'happy': 'positive'})
        with self.assertRaises(TypeError):
            lexicon['sad'] = 'negative'
        with self.assertRaises(TypeError):
            lexicon._entries['sad'] = 'negative'
        self.assertEqual(len(lexicon), 1)

    def test_normalize(self):
        self.assertEqual(normalize('  HaPpY\t'), 'happy')


if __name__ == "__main__":
    unittest.main(verbosity=2)
