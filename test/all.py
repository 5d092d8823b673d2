import unittest

from . import simple, structs, gtfs_sample


def load_tests(loader=None, tests=None, pattern=None):
	loader = loader or unittest.defaultTestLoader
	suite = unittest.TestSuite()
	for mod in simple, structs, gtfs_sample:
		suite.addTests(loader.loadTestsFromModule(mod))
	return suite

class SpecificTestCasePicker:
	def __init__(self): self.suite = load_tests()
	def __getattr__(self, k):
		for test in iter_tests(self.suite):
			if test._testMethodName == k: return lambda: test
		raise AttributeError('No such test case: {}'.format(k))

def iter_tests(suite):
	for test in suite:
		if isinstance(test, unittest.TestSuite): yield from iter_tests(test)
		else: yield test

case = SpecificTestCasePicker()
