### Identity-keyed directed graph of "visited immediately after" stop relations
# Nodes are keyed by identity of the value object (interned Stop instance),
#  never by its field values, and carry a first-encounter sequence number,
#  which is used as a stable tie-breaker when linearizing the graph.

import itertools as it, operator as op, functools as ft
import heapq

from .. import utils as u


class GraphInvariantError(Exception):
	'Internal parent/child bookkeeping inconsistency, indicates a bug in the caller.'

class GraphConsumedError(GraphInvariantError):
	'Graph was already drained by Dag.flatten() and cannot be used again.'

class CycleError(Exception):
	'Graph edges form at least one cycle, so no consistent ordering exists.'

	def __init__(self, values):
		self.values = list(values)
		super(CycleError, self).__init__(
			'Cycle in graph ({} unresolved node(s))'.format(len(self.values)) )


@u.attr_struct(repr=False, eq=False)
class DagNode:
	value = u.attr_init()
	seq = u.attr_init()
	parents = u.attr_init(set)
	children = u.attr_init(set)
	def __repr__(self):
		return '<DagNode {} {!r} in={} out={}>'.format(
			self.seq, self.value, len(self.parents), len(self.children) )


class Dag:

	def __init__(self, log=None):
		self.nodes = dict() # {id(value): node}, node keeps value alive
		self.log = log or u.get_logger('dag')

	@staticmethod
	def key(value): return id(value)

	def _check_consumed(self):
		if self.nodes is None: raise GraphConsumedError('Graph was already flattened')

	def insert_child(self, parent, child):
		'''Ensure that node for child exists and, if parent is not None,
				add parent -> child edge, with node for parent required to exist already.
			Nodes get sequence numbers in the order they are first inserted.'''
		self._check_consumed()
		k = self.key(child)
		node = self.nodes.get(k)
		if not node: node = self.nodes[k] = DagNode(child, len(self.nodes))
		if parent is None: return node
		k_parent = self.key(parent)
		try: node_parent = self.nodes[k_parent]
		except KeyError:
			raise GraphInvariantError('Parent node not found: {!r}'.format(parent)) from None
		node.parents.add(k_parent)
		node_parent.children.add(k)
		return node

	def values(self):
		self._check_consumed()
		return list(node.value for node in self._nodes_ordered())

	def edges(self):
		'Iterate over (parent, child) value pairs, ordered by node sequence numbers.'
		self._check_consumed()
		for node in self._nodes_ordered():
			for node_child in sorted(
					map(self.nodes.__getitem__, node.children), key=op.attrgetter('seq') ):
				yield node.value, node_child.value

	def _nodes_ordered(self):
		return sorted(self.nodes.values(), key=op.attrgetter('seq'))

	def flatten(self):
		'''Drain the graph into a list of values, consistent with all of its edges.
			Nodes that become available simultaneously are emitted
				in the order they were first inserted (lowest sequence number first).
			Raises CycleError if some nodes can never become available.'''
		self._check_consumed()
		nodes, self.nodes = self.nodes, None

		heads, tails = list(), dict() # heap of (seq, k, node), {k: node}
		for k, node in nodes.items():
			if not node.parents: heads.append((node.seq, k, node))
			else: tails[k] = node
		heapq.heapify(heads)
		self.log.debug('{} heads; {} tails', len(heads), len(tails))

		output = list()
		while heads:
			seq, k, node = heapq.heappop(heads)
			output.append(node.value)
			for k_child in node.children:
				try: node_child = tails[k_child]
				except KeyError:
					raise GraphInvariantError(
						'Failed to find child node {!r} of {!r}'.format(
							nodes[k_child].value if k_child in nodes else k_child, node.value ) ) from None
				try: node_child.parents.remove(k)
				except KeyError:
					raise GraphInvariantError( 'Child node {!r} is missing'
						' parent {!r}'.format(node_child.value, node.value) ) from None
				if not node_child.parents:
					del tails[k_child]
					heapq.heappush(heads, (node_child.seq, k_child, node_child))

		if tails:
			raise CycleError(node.value for node in sorted(tails.values(), key=op.attrgetter('seq')))
		return output

	def __len__(self):
		self._check_consumed()
		return len(self.nodes)
