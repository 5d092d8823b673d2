### Consolidation of per-trip stop sequences into one stop list per route/direction

import itertools as it, operator as op, functools as ft

from . import utils as u, types as t


log = u.get_logger('merge')


class MergeError(Exception):
	'Failed to produce consistent stop ordering for all trips on a route/direction.'

	def __init__(self, route_dir, err):
		self.route_dir, self.err = route_dir, err
		super(MergeError, self).__init__('{} in route {!r}'.format(err, route_dir))


def trips_by_route(trips, direction_from_trip_name=False):
	'Group trips into MultiMap of {RouteDir: [trip, ...]}, keeping trip order for each.'
	return t.base.MultiMap.from_pairs(
		(t.public.RouteDir.from_trip(trip, direction_from_trip_name), trip) for trip in trips )

def build_dag(trips):
	'Build graph of stops, with edges between every two consecutive stops of any trip.'
	dag = t.dag.Dag(log=log)
	for trip in trips:
		stop_prev = None
		for ts in trip:
			dag.insert_child(stop_prev, ts.stop)
			stop_prev = ts.stop
	return dag

def merge_trips(trips):
	'Return list of all stops that trips go through, ordered consistently with all of them.'
	return build_dag(trips).flatten()


def stops_by_route(trips, direction_from_trip_name=False):
	'''Return MultiMap of {RouteDir: [stop, ...]} with consolidated stop lists.
		First route/direction that has no consistent
			ordering aborts the whole process with MergeError.'''
	stops_by_route = t.base.MultiMap()
	for route_dir, route_trips in trips_by_route(trips, direction_from_trip_name).items():
		try: stops = merge_trips(route_trips)
		except t.dag.CycleError as err: raise MergeError(route_dir, err) from err
		log.debug( 'Merged {} trip(s) for {!r} into {} stop(s)',
			len(route_trips), route_dir, len(stops) )
		stops_by_route.insert_bulk(route_dir, stops)
	return stops_by_route

def stops_by_route_unsorted(trips, direction_from_trip_name=False):
	'''Return MultiMap of {RouteDir: [stop, ...]}, where stop lists
		have all distinct stops for trips, without any particular ordering.'''
	stops_by_route = t.base.MultiMap()
	for route_dir, route_trips in trips_by_route(trips, direction_from_trip_name).items():
		stops, stop_ids = list(), set()
		for ts in it.chain.from_iterable(route_trips):
			if id(ts.stop) in stop_ids: continue
			stop_ids.add(id(ts.stop))
			stops.append(ts.stop)
		stops_by_route.insert_bulk(route_dir, stops)
	return stops_by_route
