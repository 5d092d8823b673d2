import itertools as it, operator as op, functools as ft
from collections import namedtuple, defaultdict
from pathlib import Path
import io, csv, zipfile, contextlib

from . import utils as u, types as t


log = u.get_logger('gtfs')


@u.attr_struct(vals_to_attrs=True)
class GTFSConf:

	# Use "parent_station" to group all stops into one under its id,
	#  which makes trips using different platforms of same station share a stop.
	group_stops_into_stations = False


class FeedFilterError(LookupError): pass


class GTFSSource:
	'Access to GTFS txt files, either in a directory or a zip archive.'

	def __init__(self, path):
		self.path = Path(path)
		self.zip = zipfile.ZipFile(str(self.path)) if self.path.is_file() else None
		if self.zip:
			# Some feeds are zipped with all files in a single subdirectory
			self.zip_names = dict((Path(name).name, name) for name in self.zip.namelist())

	def close(self):
		if self.zip: self.zip.close()

	@contextlib.contextmanager
	def open(self, filename):
		if not self.zip:
			with (self.path / filename).open(encoding='utf-8-sig', newline='') as src: yield src
		else:
			with self.zip.open(self.zip_names[filename]) as src:
				yield io.TextIOWrapper(src, encoding='utf-8-sig', newline='')


def iter_gtfs_tuples(src, filename):
	log.debug('Processing gtfs file: {}', filename)
	if filename.endswith('.txt'): filename = filename[:-4]
	tuple_t = ''.join(' '.join(filename.rstrip('s').split('_')).title().split())
	filename = '{}.txt'.format(filename)
	with src.open(filename) as src_file:
		src_csv = csv.reader(src_file)
		fields = list(v.strip() for v in next(src_csv))
		tuple_t = namedtuple(tuple_t, fields, rename=True)
		for line in src_csv:
			if not line: continue
			try: yield tuple_t(*line)
			except TypeError:
				log.debug('Skipping bogus CSV line (file: {}): {!r}', filename, line)

def parse_coord(v):
	v = (v or '').strip()
	return float(v) if v else None


def parse_feed(path, conf=None):
	'Parse Feed from GTFS data directory or zip file.'
	if not conf: conf = GTFSConf()
	src = GTFSSource(path)
	try: return _parse_feed(src, conf)
	finally: src.close()

def _parse_feed(src, conf):
	### Stops (incl. grouping by station)
	stop_dict, stations = dict(), dict() # {id: stop}, {id: parent_station}
	for s in iter_gtfs_tuples(src, 'stops'):
		stop_dict[s.stop_id] = t.public.Stop( s.stop_id, s.stop_name,
			parse_coord(getattr(s, 'stop_lon', '')), parse_coord(getattr(s, 'stop_lat', '')) )
		station = getattr(s, 'parent_station', '').strip()
		if station: stations[s.stop_id] = station
	if conf.group_stops_into_stations:
		for stop_id, station in stations.items():
			if station not in stop_dict:
				log.debug('Missing parent_station {!r} for stop {!r}', station, stop_id)
				continue
			stop_dict[stop_id] = stop_dict[station]

	### Routes
	routes = t.public.Routes()
	for s in iter_gtfs_tuples(src, 'routes'):
		routes.add(t.public.Route( s.route_id,
			getattr(s, 'agency_id', None) or None,
			getattr(s, 'route_short_name', None) or None,
			getattr(s, 'route_long_name', None) or None ))

	### Trips
	trip_stops = defaultdict(list)
	for s in iter_gtfs_tuples(src, 'stop_times'): trip_stops[s.trip_id].append(s)

	trips, stops = t.public.Trips(), t.public.Stops()
	for s in iter_gtfs_tuples(src, 'trips'):
		trip = t.public.Trip( s.trip_id, s.route_id,
			short_name=getattr(s, 'trip_short_name', None) or None,
			direction=t.public.Direction.from_gtfs(getattr(s, 'direction_id', None)),
			headsign=getattr(s, 'trip_headsign', None) or None )
		for stopidx, ts in enumerate(
				sorted(trip_stops.pop(s.trip_id, list()), key=lambda s: int(s.stop_sequence)) ):
			try: stop = stop_dict[ts.stop_id]
			except KeyError:
				log.debug('Skipping stop_time with unknown stop_id {!r} (trip: {})', ts.stop_id, s.trip_id)
				continue
			dts_arr, dts_dep = map(u.dts_parse, [ts.arrival_time, ts.departure_time])
			trip.add(t.public.TripStop(trip, stopidx, stops.add(stop), dts_arr, dts_dep))
		if trip: trips.add(trip)
		else: log.debug('Skipping trip without stop_times: {}', s.trip_id)
	if trip_stops:
		log.debug('Discarded stop_times for {:,} unknown trip(s)', len(trip_stops))

	return t.public.Feed(stops, routes, trips)


def filter_feed(feed, route_id=None, agency_id=None):
	'''Return Feed with only specified route and/or routes
		of specified agency, and trips only for routes that are left.'''
	routes = list(feed.routes)
	if route_id is not None:
		if route_id not in feed.routes:
			raise FeedFilterError('No route with id {}'.format(route_id))
		routes = [feed.routes[route_id]]
	if agency_id is not None:
		routes = list(route for route in routes if route.agency_id == agency_id)
	routes_new = t.public.Routes()
	for route in routes: routes_new.add(route)
	trips = t.public.Trips(trip for trip in feed.trips if trip.route_id in routes_new)
	return t.public.Feed(feed.stops, routes_new, trips)


def log_feed_info(source, feed, log=log):
	log.info('Loaded GTFS data from {}:', source)
	log.info('  Stops: {:,}', len(feed.stops))
	log.info('  Routes: {:,}', len(feed.routes))
	log.info( '  Trips: {:,} (mean-stops={:,.1f})',
		len(feed.trips), feed.trips.stat_mean_stops() )
