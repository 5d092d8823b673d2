'''Radius and diameter of a set of geographic points.

Radius is the smallest distance such that there exists some point in the set
which is no further than that distance to any point in the set.
Diameter is the smallest distance such that no two points
in the set are further from each other than that distance.

Both are derived from point eccentricities (max distance to any other point),
as their min and max respectively, with distances in metres measured
along geodesics on the WGS84 ellipsoid.'''

import itertools as it, operator as op, functools as ft

from pyproj import Geod


geod_wgs84 = Geod(ellps='WGS84')

def geodesic_distance(p1, p2, geod=geod_wgs84):
	'Distance in metres between two (lon, lat) points.'
	(lon1, lat1), (lon2, lat2) = p1, p2
	az12, az21, dist = geod.inv(lon1, lat1, lon2, lat2)
	return dist

def radius_and_diameter(points, distance_func=geodesic_distance):
	'Return (radius, diameter) tuple for a list of (lon, lat) points, (0, 0) if empty.'
	points = list(points)
	if not points: return 0.0, 0.0
	ecc = [0.0] * len(points)
	for (n1, p1), (n2, p2) in it.combinations(enumerate(points), 2):
		dist = distance_func(p1, p2)
		ecc[n1], ecc[n2] = max(ecc[n1], dist), max(ecc[n2], dist)
	return min(ecc), max(ecc)
