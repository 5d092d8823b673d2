import itertools as it, operator as op, functools as ft
from pathlib import Path
import time, zipfile

from . import utils as u, types as t, gtfs, merge, table, radius, report, vis


def calc_timer(func, *args, log=u.get_logger('rs.timer'), timer_name=None, **kws):
	if not timer_name:
		func_base = func if not isinstance(func, ft.partial) else func.func
		timer_name = '.'.join([func_base.__module__.strip('_'), func_base.__qualname__])
	log.debug('[{}] Starting...', timer_name)
	td = time.monotonic()
	data = func(*args, **kws)
	td = time.monotonic() - td
	log.debug('[{}] Finished in: {:.1f}s', timer_name, td)
	return data


def load_feed( feed_path, feed_path_dump=None,
		conf=None, timer_func=None, log=u.get_logger('rs.init') ):
	'''Load Feed from GTFS directory/zip or from a pickled Feed file.
		If feed_path_dump is specified, parsed GTFS data gets pickled there.'''
	if not conf: conf = gtfs.GTFSConf()
	feed_func, feed_path = gtfs.parse_feed, Path(feed_path)
	if timer_func: feed_func = ft.partial(timer_func, feed_func)

	if feed_path.is_file() and not zipfile.is_zipfile(str(feed_path)):
		feed_load = u.pickle_load
		if timer_func: feed_load = ft.partial(timer_func, feed_load, timer_name='feed_load')
		feed = feed_load(feed_path, fail=True)
	else:
		feed = feed_func(feed_path, conf)
		if feed_path_dump: u.pickle_dump(feed, feed_path_dump)
	gtfs.log_feed_info(feed_path, feed, log=log)
	return feed
