### Generic containers: grouping index and stopping-pattern bitmap

import itertools as it, operator as op, functools as ft


class MultiMap:
	'''Multi-valued map with per-key value lists.
		Values for each key keep their insertion order,
			while keys are always iterated in sorted order.
		There are no removal operations.'''

	def __init__(self): self.set_idx = dict()

	@classmethod
	def from_pairs(cls, pairs):
		self = cls()
		for k, v in pairs: self.insert(k, v)
		return self

	def insert(self, k, v): self.set_idx.setdefault(k, list()).append(v)

	def insert_bulk(self, k, values):
		vs = self.set_idx.get(k)
		if vs is None: self.set_idx[k] = list(values)
		else: vs.extend(values)

	def keys(self): return sorted(self.set_idx)
	def values(self): return list(map(self.set_idx.__getitem__, self.keys()))
	def items(self): return list((k, self.set_idx[k]) for k in self.keys())
	def get(self, k, default=None): return self.set_idx.get(k, default)

	def __getitem__(self, k): return self.set_idx[k]
	def __contains__(self, k): return k in self.set_idx
	def __iter__(self): return iter(self.keys())
	def __len__(self): return len(self.set_idx)
	def __repr__(self): return '<MultiMap keys={}>'.format(len(self))


@ft.total_ordering
class BitVec:
	'''Fixed-length bit vector, with bit 0 being the most significant one.
		Ordering between same-length vectors is lexicographic over bit positions.'''

	__slots__ = 'n', 'bits'

	def __init__(self, n, bits=0): self.n, self.bits = n, bits

	def set(self, idx):
		if not 0 <= idx < self.n:
			raise IndexError('index {} out of bounds for BitVec of length {}'.format(idx, self.n))
		self.bits |= 1 << (self.n - 1 - idx)

	def __getitem__(self, idx):
		if not 0 <= idx < self.n:
			raise IndexError('index {} out of bounds for BitVec of length {}'.format(idx, self.n))
		return bool(self.bits & (1 << (self.n - 1 - idx)))

	def to_list(self): return list(self[n] for n in range(self.n))

	def _cmp_key(self): return self.to_list()
	def __eq__(self, bv):
		if not isinstance(bv, BitVec): return NotImplemented
		return (self.n, self.bits) == (bv.n, bv.bits)
	def __lt__(self, bv):
		if not isinstance(bv, BitVec): return NotImplemented
		return self._cmp_key() < bv._cmp_key()
	def __hash__(self): return hash((self.n, self.bits))
	def __len__(self): return self.n
	def __repr__(self):
		return '<BitVec {}>'.format(''.join('01'[v] for v in self.to_list()))
