import itertools as it, operator as op, functools as ft
import unittest

from . import _common as c

t = c.rs.t


def mkstop(stop_id, lon=None, lat=None):
	return t.public.Stop(stop_id, 'Stop {}'.format(stop_id), lon, lat)


class MultiMapTests(unittest.TestCase):

	def test_insert_keeps_value_order(self):
		mm = t.base.MultiMap()
		for k, v in [('b', 1), ('a', 2), ('b', 3), ('a', 4), ('b', 5)]: mm.insert(k, v)
		self.assertEqual(mm['b'], [1, 3, 5])
		self.assertEqual(mm['a'], [2, 4])
		self.assertEqual(len(mm), 2)

	def test_sorted_key_iteration(self):
		mm = t.base.MultiMap.from_pairs([('c', 1), ('a', 2), ('b', 3)])
		self.assertEqual(list(mm), ['a', 'b', 'c'])
		self.assertEqual(mm.items(), [('a', [2]), ('b', [3]), ('c', [1])])
		self.assertEqual(mm.values(), [[2], [3], [1]])

	def test_insert_bulk(self):
		mm = t.base.MultiMap()
		mm.insert_bulk('a', iter([1, 2]))
		mm.insert('a', 3)
		mm.insert_bulk('a', [4, 5])
		mm.insert_bulk('b', [])
		self.assertEqual(mm['a'], [1, 2, 3, 4, 5])
		self.assertIn('b', mm)
		self.assertEqual(mm['b'], [])

	def test_missing_key(self):
		mm = t.base.MultiMap()
		with self.assertRaises(KeyError): mm['x']
		self.assertIsNone(mm.get('x'))
		self.assertNotIn('x', mm)

	def test_route_dir_key_order(self):
		D, RD = t.public.Direction, t.public.RouteDir
		keys = [ RD('b', D.none), RD('a', D.outbound),
			RD('a', D.none), RD('a', D.inbound), RD('10', D.outbound) ]
		mm = t.base.MultiMap.from_pairs((k, n) for n, k in enumerate(keys))
		self.assertEqual(list(mm), [
			RD('10', D.outbound), RD('a', D.none),
			RD('a', D.inbound), RD('a', D.outbound), RD('b', D.none) ])
		self.assertEqual(mm[RD('a', D.inbound)], [3])


class DagTests(unittest.TestCase):

	def test_first_stop_without_parent(self):
		dag, a = t.dag.Dag(), mkstop('a')
		dag.insert_child(None, a)
		dag.insert_child(None, a)
		self.assertEqual(len(dag), 1)
		self.assertEqual(dag.flatten(), [a])

	def test_missing_parent_is_invariant_error(self):
		dag = t.dag.Dag()
		with self.assertRaises(t.dag.GraphInvariantError):
			dag.insert_child(mkstop('a'), mkstop('b'))

	def test_identity_not_equality(self):
		# Two distinct instances with identical fields are separate nodes
		a1, a2, b = mkstop('a'), mkstop('a'), mkstop('b')
		dag = t.dag.Dag()
		dag.insert_child(None, a1)
		dag.insert_child(a1, b)
		dag.insert_child(None, a2)
		dag.insert_child(a2, b)
		self.assertEqual(len(dag), 3)
		stops = dag.flatten()
		self.assertEqual(list(map(id, stops)), list(map(id, [a1, a2, b])))

	def test_duplicate_edges_collapse(self):
		a, b = mkstop('a'), mkstop('b')
		dag = t.dag.Dag()
		for n in range(3):
			dag.insert_child(None, a)
			dag.insert_child(a, b)
		self.assertEqual(list(dag.edges()), [(a, b)])
		self.assertEqual(dag.values(), [a, b])

	def test_edges_order(self):
		a, b, c_, d = map(mkstop, 'abcd')
		dag = t.dag.Dag()
		for trip in [a, d, c_], [a, b, c_]:
			stop_prev = None
			for stop in trip:
				dag.insert_child(stop_prev, stop)
				stop_prev = stop
		self.assertEqual(list(dag.edges()), [(a, d), (a, b), (d, c_), (b, c_)])

	def test_flatten_consumes_graph(self):
		dag, a = t.dag.Dag(), mkstop('a')
		dag.insert_child(None, a)
		dag.flatten()
		with self.assertRaises(t.dag.GraphConsumedError): dag.flatten()
		with self.assertRaises(t.dag.GraphConsumedError): dag.insert_child(None, a)
		with self.assertRaises(t.dag.GraphConsumedError): len(dag)

	def test_cycle_error_values(self):
		a, b, c_ = map(mkstop, 'abc')
		dag = t.dag.Dag()
		dag.insert_child(None, a)
		dag.insert_child(a, b)
		dag.insert_child(b, c_)
		dag.insert_child(c_, b)
		with self.assertRaises(t.dag.CycleError) as ctx: dag.flatten()
		self.assertEqual(ctx.exception.values, [b, c_])
		self.assertIn('Cycle in graph', str(ctx.exception))

	def test_empty_graph(self):
		self.assertEqual(t.dag.Dag().flatten(), [])


class MergeDriverTests(unittest.TestCase):

	def test_merge_error_message(self):
		feed = c.feed_from_data(dict(t1=dict(stops='A B A', route='r7', direction='inbound')))
		with self.assertRaises(c.rs.merge.MergeError) as ctx:
			c.rs.merge.stops_by_route(feed.trips)
		err = ctx.exception
		self.assertEqual(err.route_dir, t.public.RouteDir('r7', t.public.Direction.inbound))
		self.assertIn('Cycle in graph', str(err))
		self.assertIn('r7 inbound', str(err))

	def test_grouping_order_independent_of_trip_order(self):
		trips = dict(
			t1=dict(stops='A B', route='r3'), t2=dict(stops='A B', route='r1', direction='outbound'),
			t3=dict(stops='A B', route='r2'), t4=dict(stops='A B', route='r1', direction='inbound') )
		for trip_ids in it.permutations(sorted(trips)):
			feed = c.feed_from_data(dict((k, trips[k]) for k in trip_ids))
			self.assertEqual(
				list(map(repr, c.rs.merge.stops_by_route(feed.trips))),
				[ '<RouteDir r1 inbound>', '<RouteDir r1 outbound>',
					'<RouteDir r2 none>', '<RouteDir r3 none>' ] )

	def test_unsorted_stops(self):
		feed = c.feed_from_data(dict(t1='A B A', t2='C B', t3=dict(stops='D', route='r2')))
		stops_by_route = c.rs.merge.stops_by_route_unsorted(feed.trips)
		self.assertEqual(list(s.id for s in stops_by_route[c.route_dir_from_str('r1')]), ['A', 'B', 'C'])
		self.assertEqual(list(s.id for s in stops_by_route[c.route_dir_from_str('r2')]), ['D'])

	def test_trips_by_route(self):
		feed = c.feed_from_data(dict(t1='A', t2=dict(stops='B', route='r0'), t3='C'))
		trips_by_route = c.rs.merge.trips_by_route(feed.trips)
		self.assertEqual(
			list((k.route_id, list(trip.id for trip in v)) for k, v in trips_by_route.items()),
			[('r0', ['t2']), ('r1', ['t1', 't3'])] )


class BitVecTests(unittest.TestCase):

	def test_set_and_list(self):
		bv = t.base.BitVec(11)
		for n in 0, 3, 10: bv.set(n)
		self.assertEqual(bv.to_list(), list((n in [0, 3, 10]) for n in range(11)))
		self.assertTrue(bv[3])
		self.assertFalse(bv[4])
		self.assertEqual(len(bv), 11)

	def test_out_of_bounds(self):
		bv = t.base.BitVec(3)
		with self.assertRaises(IndexError): bv.set(3)
		with self.assertRaises(IndexError): bv.set(-1)

	def test_ordering_and_hash(self):
		mk = lambda *idx_list: ft.reduce(lambda bv, n: bv.set(n) or bv, idx_list, t.base.BitVec(4))
		self.assertLess(mk(3), mk(2))
		self.assertLess(mk(1, 2, 3), mk(0))
		self.assertLess(mk(), mk(3))
		self.assertEqual(mk(0, 2), mk(2, 0))
		self.assertEqual(len({mk(0, 2), mk(2, 0), mk(1)}), 2)
		self.assertEqual(sorted([mk(0), mk(1), mk(0, 1), mk()]), [mk(), mk(1), mk(0), mk(0, 1)])


class TableTests(unittest.TestCase):

	def test_add_and_push_columns(self):
		tbl = c.rs.table.Table(['r1', 'r2'])
		col = tbl.add_column('c1', 0)
		col[1] = 5
		tbl.push_column('c2', [1, 2])
		self.assertEqual(tbl.col_headers, ['c1', 'c2'])
		self.assertEqual(list(tbl.rows()), [[0, 1], [5, 2]])
		with self.assertRaises(ValueError): tbl.push_column('c3', [1])

	def test_format_markdown(self):
		tbl = c.rs.table.Table(['a', 'long|row'])
		tbl.push_column('x', [1, 22])
		tbl.push_column('yyyy', [None, 3])
		text = tbl.format_markdown(
			cell_fmt=lambda v: '' if v is None else v, align=c.rs.table.Align.right )
		self.assertEqual(text.splitlines(), [
			'|           |   x | yyyy |',
			'| --------- | --: | ---: |',
			'| a         |   1 |      |',
			'| long\\|row |  22 |    3 |' ])

	def test_format_markdown_center(self):
		tbl = c.rs.table.Table(['stop'])
		tbl.push_column(1, [True])
		text = tbl.format_markdown(
			cell_fmt=lambda v: 'x' if v else '', align=c.rs.table.Align.center, corner='#' )
		self.assertEqual(text.splitlines(), [
			'| #    |  1  |', '| ---- | :-: |', '| stop |  x  |' ])


class RadiusTests(unittest.TestCase):

	def test_empty_and_single(self):
		self.assertEqual(c.rs.radius.radius_and_diameter([]), (0.0, 0.0))
		self.assertEqual(c.rs.radius.radius_and_diameter([(10, 20)]), (0.0, 0.0))

	def test_planar_distances(self):
		dist = lambda p1, p2: abs(p1[0] - p2[0]) + abs(p1[1] - p2[1])
		points = [(0, 0), (1, 0), (2, 0), (1, 3)]
		# eccentricities: 4, 3, 4, 4
		self.assertEqual(c.rs.radius.radius_and_diameter(points, dist), (3, 4))

	def test_geodesic_equator(self):
		deg_m = 6378137 * 3.141592653589793 / 180 # WGS84 equatorial radius
		r, d = c.rs.radius.radius_and_diameter([(0, 0), (1, 0), (2, 0)])
		self.assertAlmostEqual(r, deg_m, delta=0.01)
		self.assertAlmostEqual(d, 2 * deg_m, delta=0.01)


class PublicTypesTests(unittest.TestCase):

	def test_direction_from_gtfs(self):
		D = t.public.Direction
		self.assertIs(D.from_gtfs('0'), D.outbound)
		self.assertIs(D.from_gtfs(' 1 '), D.inbound)
		self.assertIs(D.from_gtfs(''), D.none)
		self.assertIs(D.from_gtfs(None), D.none)

	def test_direction_from_trip_name(self):
		D = t.public.Direction
		self.assertIs(D.from_trip_name('101'), D.outbound)
		self.assertIs(D.from_trip_name('12'), D.inbound)
		self.assertIs(D.from_trip_name('0'), D.inbound)
		self.assertIs(D.from_trip_name('12a'), D.none)
		self.assertIs(D.from_trip_name(None), D.none)

	def test_route_dir_format(self):
		routes = t.public.Routes()
		routes.add(t.public.Route('r1', None, '1', 'Market - Station'))
		routes.add(t.public.Route('r2', None, 'X9', None))
		D, RD = t.public.Direction, t.public.RouteDir
		self.assertEqual(RD('r1', D.inbound).format(routes), 'Market - Station (inbound)')
		self.assertEqual(RD('r1', D.outbound).format(routes, True), '1 (outbound)')
		self.assertEqual(RD('r1').format(routes, True), '1')
		self.assertEqual(RD('r2').format(routes), 'X9')
		self.assertEqual(RD('r3', D.inbound).format(routes), 'r3 (inbound)')

	def test_route_dir_hash_eq(self):
		D, RD = t.public.Direction, t.public.RouteDir
		self.assertEqual(RD('a', D.inbound), RD('a', 1))
		self.assertEqual(len({RD('a', D.inbound), RD('a', 1), RD('a', D.outbound)}), 2)

	def test_stops_interning(self):
		stops = t.public.Stops()
		a = stops.add(mkstop('a'))
		self.assertIs(stops.add(mkstop('a')), a)
		self.assertNotEqual(mkstop('a'), mkstop('a'))
		self.assertEqual(len(stops), 1)

	def test_dts(self):
		self.assertEqual(c.rs.u.dts_parse('25:01:02'), 25*3600 + 62)
		self.assertEqual(c.rs.u.dts_parse(' 8:05:00'), 8*3600 + 300)
		self.assertEqual(c.rs.u.dts_parse('08:05'), 8*3600 + 300)
		self.assertIsNone(c.rs.u.dts_parse(''))
		with self.assertRaises(ValueError): c.rs.u.dts_parse('1:2:3:4')
		self.assertEqual(c.rs.u.dts_format(25*3600 + 62), '25:01:02')
		self.assertEqual(c.rs.u.dts_format(None, '-'), '-')
