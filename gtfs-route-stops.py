#!/usr/bin/env python3

import itertools as it, operator as op, functools as ft
import sys

import route_stops as rs


log = rs.u.get_logger('main')

def main(args=None):
	conf, conf_report = rs.gtfs.GTFSConf(), rs.report.ReportConf()

	import argparse
	parser = argparse.ArgumentParser(
		description='Produce markdown reports on stops served by'
			' each route/direction in GTFS data, with trip stop sequences merged'
			' into one consistent stop list for every route/direction.')
	parser.add_argument('gtfs_dir_or_pickle',
		help='Path to gtfs data directory or zip file to load'
			' data from, or a pickled feed object (see --cache-feed option).')

	group = parser.add_argument_group('Feed/parser options')
	group.add_argument('--cache-feed', metavar='path',
		help='Store parsed feed data (in pickle format) to specified file.'
			' This file can then be used in place of gtfs dir/zip, and should load much faster.'
			' Stored data is not affected by --agency and --route filters.')
	group.add_argument('-s', '--stops-to-stations', action='store_true',
		help='Convert/translate GTFS "stop" ids to "parent_station" ids,'
				' i.e. group all stops on the station into a single one.'
			' Only has effect when parsing GTFS data, not loading pickled feed.')
	group.add_argument('--agency', metavar='agency_id',
		help='Only include routes with this agency_id.')
	group.add_argument('--route', metavar='route_id',
		help='Only include route with this route_id.')

	group = parser.add_argument_group('Report options')
	group.add_argument('--use-short-name', action='store_true',
		help='Use route short_name instead of long_name when displaying route names.')
	group.add_argument('--direction-from-trip-name', action='store_true',
		help='Use trip_short_name to determine direction:'
			' odd-numbered trips are outbound, even-numbered are inbound.')
	group.add_argument('--report-conf', metavar='yaml-data',
		help='Override values for ReportConf as a YAML mapping.'
			' Example: {stop_glyph: x, time_placeholder: "-"}')
	group.add_argument('-o', '--output', metavar='path',
		help='Write report to specified file (atomically) instead of stdout.')

	group = parser.add_argument_group('Misc/debug options')
	group.add_argument('--dot-for-routes', metavar='path',
		help='Dump Stop graph for each route/direction'
			' (in graphviz dot format) to a specified file and exit.')
	group.add_argument('--dot-opts', metavar='yaml-data',
		help='Options for graphviz graph/nodes/edges to use with'
			' --dot-for-routes, as a YAML mappings. Example: {graph: {rankdir: LR}}')
	group.add_argument('--debug', action='store_true', help='Verbose operation mode.')

	cmds = parser.add_subparsers(title='Commands', dest='call')

	cmd = cmds.add_parser('cache',
		help='Only parse and store feed data (see --cache-feed) and exit.')

	cmd = cmds.add_parser('route-summary',
		help='List each route/direction pair and all stops served'
			' by trips on it, in order. If route has multiple branches,'
			' ordering between branches is unspecified, but stable.')
	cmd = cmds.add_parser('time-table',
		help='Table for each route/direction pair, showing'
			' all trips and their stop times at each stop on the route.')
	cmd = cmds.add_parser('stopping-patterns',
		help='Table for each route/direction pair,'
			' showing all distinct stopping patterns on the route.')
	cmd = cmds.add_parser('radius-diameter',
		help='List radius and diameter of each route/direction pair (in metres).')

	opts = parser.parse_args(sys.argv[1:] if args is None else args)

	rs.u.logging.basicConfig(
		format='%(asctime)s :: %(name)s %(levelname)s :: %(message)s',
		datefmt='%Y-%m-%d %H:%M:%S',
		level=rs.u.logging.DEBUG if opts.debug else rs.u.logging.WARNING )

	if opts.stops_to_stations: conf.group_stops_into_stations = True
	conf_report.use_short_name = opts.use_short_name
	conf_report.direction_from_trip_name = opts.direction_from_trip_name
	if opts.report_conf:
		import yaml
		for k, v in (yaml.safe_load(opts.report_conf) or dict()).items():
			if not hasattr(conf_report, k):
				parser.error('Unrecognized report conf option: {!r} (value: {!r})'.format(k, v))
			setattr(conf_report, k, v)

	feed = rs.load_feed( opts.gtfs_dir_or_pickle,
		feed_path_dump=opts.cache_feed, conf=conf, timer_func=rs.calc_timer )
	if opts.call == 'cache': return

	try: feed = rs.gtfs.filter_feed(feed, route_id=opts.route, agency_id=opts.agency)
	except rs.gtfs.FeedFilterError as err:
		log.error('{}', err)
		return 1

	if opts.dot_for_routes:
		dot_opts = dict()
		if opts.dot_opts:
			import yaml
			dot_opts = yaml.safe_load(opts.dot_opts)
		with rs.u.safe_replacement(opts.dot_for_routes, encoding='utf-8') as dst:
			rs.vis.dot_for_routes( feed, dst, dot_opts=dot_opts,
				direction_from_trip_name=conf_report.direction_from_trip_name,
				use_short_name=conf_report.use_short_name )
		return

	report_func = { 'route-summary': rs.report.route_summary,
		'time-table': rs.report.time_table,
		'stopping-patterns': rs.report.stopping_patterns,
		'radius-diameter': rs.report.radius_diameter }.get(opts.call)
	if not report_func: parser.error('Action not implemented: {}'.format(opts.call))

	# Report is fully generated before any output, so that nothing is printed on errors
	import io
	dst = io.StringIO()
	try: rs.calc_timer(report_func, feed, conf_report, dst)
	except rs.merge.MergeError as err:
		log.error('Failed to merge trip stop sequences: {}', err)
		return 1

	if opts.output:
		with rs.u.safe_replacement(opts.output, encoding='utf-8') as dst_file:
			dst_file.write(dst.getvalue())
	else: sys.stdout.write(dst.getvalue())

if __name__ == '__main__': sys.exit(main())
