# Visualization tools, mostly useful for debugging stop ordering conflicts

import itertools as it, operator as op, functools as ft
import contextlib, html

from . import merge


print_fmt = lambda tpl, *a, file=None, end='\n', **k:\
	print(tpl.format(*a,**k), file=file, end=end)

dot_str = lambda n: '"{}"'.format(n.replace('"', '\\"'))
dot_html = lambda n: '<{}>'.format(n)


@contextlib.contextmanager
def dot_graph(dst, dot_opts, indent=2):
	print_fmt('digraph {{', file=dst)
	if isinstance(indent, int): indent = ' '*indent
	p = lambda tpl, *a, end='\n', **k:\
		print_fmt(indent + tpl, *a, file=dst, end=end, **k)
	p('### Defaults')
	for t, opts in (dot_opts or dict()).items():
		p('{} [ {} ]'.format(t, ', '.join('{}={}'.format(k, v) for k, v in opts.items())))
	yield p
	print_fmt('}}', file=dst)


def dot_for_routes(feed, dst, direction_from_trip_name=False, use_short_name=False, dot_opts=None):
	'''Dump "visited immediately after" stop graphs for
		all route/directions as graphviz clusters, without merging them.'''
	trips_by_route = merge.trips_by_route(feed.trips, direction_from_trip_name)
	with dot_graph(dst, dot_opts) as p:
		for n, (route_dir, trips) in enumerate(trips_by_route.items()):
			dag, prefix = merge.build_dag(trips), 'r{}'.format(n)
			name = lambda stop: dot_str('{}-{}'.format(prefix, stop.id))

			p('')
			p('subgraph {} {{', dot_str('cluster_{}'.format(prefix)))
			p('  label={}', dot_str(route_dir.format(feed.routes, use_short_name)))
			for stop in dag.values():
				label = '<b>{}</b><br/>{}'.format(*map(html.escape, [stop.name, stop.id]))
				p('  {} [label={}]', name(stop), dot_html(label))
			for stop_src, stop_dst in dag.edges():
				p('  {} -> {}', name(stop_src), name(stop_dst))
			p('}}')
