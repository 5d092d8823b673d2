### Markdown reports for merged route/direction stop lists

import itertools as it, operator as op, functools as ft
from collections import Counter
import sys

from . import utils as u, types as t, merge, radius, table


log = u.get_logger('report')


@u.attr_struct(vals_to_attrs=True)
class ReportConf:

	use_short_name = False # use route short_name instead of long_name in headers
	# Use trip_short_name to determine direction:
	#  odd-numbered trips are outbound, even-numbered are inbound.
	direction_from_trip_name = False

	stop_glyph = '•' # stopping-patterns cell for a served stop
	time_placeholder = '' # time-table cell for a stop that trip skips


print_fmt = lambda tpl, *a, file=None, end='\n', **k:\
	print(tpl.format(*a,**k), file=file, end=end)

def route_header(route_dir, feed, conf, dst):
	print_fmt('## {}', route_dir.format(feed.routes, conf.use_short_name), file=dst)

def merged_stops(feed, conf):
	return merge.stops_by_route(feed.trips, conf.direction_from_trip_name)

def route_stops_lookup(stops_by_route, route_dir):
	try: return stops_by_route[route_dir]
	except KeyError: raise KeyError('missing route/dir: {!r}'.format(route_dir)) from None

def iter_trip_stop_positions(trip, stops):
	'''Yield (n, ts) for each TripStop in trip, where n is its position in stops list.
		Both trip and stops have same ordering, so a forward-only scan is enough.'''
	stops_iter = enumerate(stops)
	for ts in trip:
		for n, stop in stops_iter:
			if stop is ts.stop: break
		else:
			log.error('Failed to find stop {!r} (trip {}) in merged stop list', ts.stop, trip.id)
			break
		yield n, ts


def route_summary(feed, conf=None, dst=None):
	'List of all stops in order for each route/direction.'
	conf, dst = conf or ReportConf(), dst or sys.stdout
	for route_dir, stops in merged_stops(feed, conf).items():
		route_header(route_dir, feed, conf, dst)
		for stop in stops: print_fmt('- {}', stop.name, file=dst)
		print(file=dst)


def time_table(feed, conf=None, dst=None):
	'Table of times for every trip at every stop for each route/direction.'
	conf, dst = conf or ReportConf(), dst or sys.stdout
	stops_by_route, tables = merged_stops(feed, conf), dict()

	for trip in feed.trips:
		route_dir = t.public.RouteDir.from_trip(trip, conf.direction_from_trip_name)
		stops = route_stops_lookup(stops_by_route, route_dir)
		if route_dir not in tables: tables[route_dir] = table.Table(stops)
		col = tables[route_dir].add_column(trip.name)
		for n, ts in iter_trip_stop_positions(trip, stops): col[n] = ts.dts_any

	for route_dir in sorted(tables):
		route_header(route_dir, feed, conf, dst)
		print(file=dst)
		print(tables[route_dir].format_markdown(
			row_fmt=op.attrgetter('name'),
			cell_fmt=ft.partial(u.dts_format, default=conf.time_placeholder),
			align=table.Align.right ), file=dst)
		print(file=dst)


def stopping_patterns(feed, conf=None, dst=None):
	'''Table of distinct stopping patterns for each route/direction,
		with number of trips for each pattern as a column header.'''
	conf, dst = conf or ReportConf(), dst or sys.stdout
	stops_by_route, patterns_by_route = merged_stops(feed, conf), dict()

	for trip in feed.trips:
		route_dir = t.public.RouteDir.from_trip(trip, conf.direction_from_trip_name)
		stops = route_stops_lookup(stops_by_route, route_dir)
		pattern = t.base.BitVec(len(stops))
		for n, ts in iter_trip_stop_positions(trip, stops): pattern.set(n)
		patterns_by_route.setdefault(route_dir, Counter())[pattern] += 1

	for route_dir in sorted(patterns_by_route):
		tbl = table.Table(route_stops_lookup(stops_by_route, route_dir))
		for pattern, count in sorted(patterns_by_route[route_dir].items()):
			tbl.push_column(count, pattern.to_list())
		route_header(route_dir, feed, conf, dst)
		print(file=dst)
		print(tbl.format_markdown(
			row_fmt=op.attrgetter('name'),
			cell_fmt=lambda v: conf.stop_glyph if v else '',
			align=table.Align.center ), file=dst)
		print(file=dst)


def radius_diameter(feed, conf=None, dst=None):
	'Geodesic radius and diameter (in metres) of stop set for each route/direction.'
	conf, dst = conf or ReportConf(), dst or sys.stdout
	stops_by_route = merge.stops_by_route_unsorted(feed.trips, conf.direction_from_trip_name)
	print_fmt('Route | radius | diameter', file=dst)
	print_fmt('--- | --- | ---', file=dst)
	for route_dir, stops in stops_by_route.items():
		points = list( (stop.lon, stop.lat) for stop in stops
			if stop.lon is not None and stop.lat is not None )
		r, d = radius.radius_and_diameter(points)
		print_fmt( '{} | {:.3f} | {:.3f}',
			route_dir.format(feed.routes, conf.use_short_name), r, d, file=dst )
