import itertools as it, operator as op, functools as ft
from collections import UserList
import enum

from .. import utils as u


### Transit data store records
# Stop instances are interned by Stops.add(), so that all trips visiting
#  the same stop reference one shared object, and are compared by identity.


@u.attr_struct(repr=False, eq=False)
class Stop:
	keys = 'id name lon lat'
	def __repr__(self):
		if self.id == self.name: return '<Stop {}>'.format(self.id)
		return '<Stop {} [{}]>'.format(self.name, self.id)

class Stops:
	def __init__(self): self.set_idx = dict()

	def add(self, stop):
		'Register stop, returning already-known instance with same id, if any.'
		if stop.id in self.set_idx: stop = self.set_idx[stop.id]
		else: self.set_idx[stop.id] = stop
		return stop

	def get(self, stop_id, default=None): return self.set_idx.get(stop_id, default)

	def __getitem__(self, stop_id): return self.set_idx[stop_id]
	def __contains__(self, stop_id): return stop_id in self.set_idx
	def __len__(self): return len(self.set_idx)
	def __iter__(self): return iter(self.set_idx.values())


@u.attr_struct(repr=False)
class TripStop:
	trip = u.attr_init()
	stopidx = u.attr_init()
	stop = u.attr_init()
	dts_arr = u.attr_init(None)
	dts_dep = u.attr_init(None)

	@property
	def dts_any(self):
		'Arrival time if known, departure otherwise.'
		return self.dts_arr if self.dts_arr is not None else self.dts_dep

	def __repr__(self):
		return '<TS {} [{}] {}>'.format(self.trip.id, self.stopidx, self.stop)


@u.attr_struct(repr=False, eq=False)
class Trip:
	id = u.attr_init()
	route_id = u.attr_init()
	short_name = u.attr_init(None)
	direction = u.attr_init(None)
	headsign = u.attr_init(None)
	stops = u.attr_init(list)

	@property
	def name(self): return self.short_name or self.id

	def add(self, ts): self.stops.append(ts)
	def __getitem__(self, n): return self.stops[n]
	def __len__(self): return len(self.stops)
	def __iter__(self): return iter(self.stops)
	def __repr__(self): return '<Trip {} [{}] stops={}>'.format(self.id, self.route_id, len(self))

class Trips(UserList):
	def add(self, trip): self.append(trip)

	def stat_mean_stops(self):
		return (sum(map(len, self)) / len(self)) if self else 0


@u.attr_struct
class Route:
	id = u.attr_init()
	agency_id = u.attr_init(None)
	short_name = u.attr_init(None)
	long_name = u.attr_init(None)

	def display_name(self, use_short_name=False):
		names = [self.short_name, self.long_name]
		if not use_short_name: names.reverse()
		for name in names:
			if name: return name
		return self.id

class Routes:
	def __init__(self): self.set_idx = dict()
	def add(self, route): self.set_idx[route.id] = route
	def get(self, route_id, default=None): return self.set_idx.get(route_id, default)
	def __getitem__(self, route_id): return self.set_idx[route_id]
	def __contains__(self, route_id): return route_id in self.set_idx
	def __len__(self): return len(self.set_idx)
	def __iter__(self): return iter(self.set_idx.values())


@u.attr_struct
class Feed: keys = 'stops routes trips'


class Direction(enum.IntEnum):
	'Trip direction, ordinal values define route/direction sort order.'
	none = 0
	inbound = 1
	outbound = 2

	@classmethod
	def from_gtfs(cls, direction_id):
		'Map GTFS trips.txt direction_id value (0 - outbound, 1 - inbound).'
		direction_id = (direction_id or '').strip()
		if not direction_id: return cls.none
		return {'0': cls.outbound, '1': cls.inbound}.get(direction_id, cls.none)

	@classmethod
	def from_trip_name(cls, short_name):
		'Odd-numbered trips are outbound, even-numbered are inbound.'
		try: n = int((short_name or '').strip())
		except ValueError: return cls.none
		return cls.outbound if n % 2 else cls.inbound


@u.attr_struct(frozen=True, hash=True, order=True, repr=False)
class RouteDir:
	route_id = u.attr_init()
	direction = u.attr_init(Direction.none, converter=Direction)

	@classmethod
	def from_trip(cls, trip, direction_from_trip_name=False):
		if direction_from_trip_name: direction = Direction.from_trip_name(trip.short_name)
		else: direction = trip.direction or Direction.none
		return cls(trip.route_id, direction)

	def format(self, routes, use_short_name=False):
		route = routes.get(self.route_id)
		name = route.display_name(use_short_name) if route else self.route_id
		if self.direction is Direction.none: return name
		return '{} ({})'.format(name, self.direction.name)

	def __repr__(self):
		return '<RouteDir {} {}>'.format(self.route_id, self.direction.name)
