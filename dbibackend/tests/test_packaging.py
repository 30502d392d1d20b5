import os, unittest
from setuptools import find_packages

ROOT = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

@unittest.skipUnless(os.path.exists(os.path.join(ROOT, 'setup.py')), 'not a source tree')
class InstalledPackages(unittest.TestCase):
    """Installs leave the tests package out, as setup.py excludes it"""
    def runTest(self):
        self.assertEqual(find_packages(ROOT), ['dbibackend', 'dbibackend.tests'])
        self.assertEqual(find_packages(ROOT, exclude=['*.tests']), ['dbibackend'])
        with open(os.path.join(ROOT, 'setup.py')) as f:
            source = f.read()
        self.assertIn('exclusions += ["*.tests"]', source)
        self.assertIn('test_suite = "dbibackend.tests"', source)
