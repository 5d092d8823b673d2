import itertools as it, operator as op, functools as ft
import enum


class Align(enum.Enum): left, right, center = range(3)


class Table:
	'''Table with row headers, stored in column-major order.
		Columns are added one at a time, each with a value for every row.'''

	def __init__(self, row_headers):
		self.row_headers, self.col_headers, self.cols = list(row_headers), list(), list()

	def add_column(self, header, default=None):
		'Add new column filled with default values and return it as a mutable list.'
		col = [default] * len(self.row_headers)
		self.col_headers.append(header)
		self.cols.append(col)
		return col

	def push_column(self, header, values):
		values = list(values)
		if len(values) != len(self.row_headers):
			raise ValueError( 'Column length mismatch: {} value(s)'
				' for {} row(s)'.format(len(values), len(self.row_headers)) )
		self.col_headers.append(header)
		self.cols.append(values)

	def rows(self):
		'Iterate over table rows, each being a list of values for all columns.'
		for n in range(len(self.row_headers)): yield list(col[n] for col in self.cols)

	def format_markdown( self,
			col_fmt=str, row_fmt=str, cell_fmt=str, align=Align.left, corner='' ):
		'''Return markdown table with formatted column headers in the first line
			and formatted row headers as a left-aligned first column.'''
		cell = lambda v: str(v).replace('|', r'\|')
		lines = [[cell(corner)] + list(cell(col_fmt(v)) for v in self.col_headers)]
		for header, row in zip(self.row_headers, self.rows()):
			lines.append([cell(row_fmt(header))] + list(cell(cell_fmt(v)) for v in row))
		widths = list(max(3, *map(len, vs)) for vs in zip(*lines))
		aligns = [Align.left] + [align] * len(self.col_headers)

		def fmt_line(vs):
			vs = ( {Align.left: v.ljust, Align.right: v.rjust, Align.center: v.center}[a](w)
				for v, w, a in zip(vs, widths, aligns) )
			return '| {} |'.format(' | '.join(vs))
		def fmt_sep(w, a):
			if a is Align.right: return '-'*(w-1) + ':'
			if a is Align.center: return ':' + '-'*(w-2) + ':'
			return '-'*w

		lines = list(map(fmt_line, lines))
		lines.insert(1, '| {} |'.format(' | '.join(it.starmap(fmt_sep, zip(widths, aligns)))))
		return '\n'.join(lines)

	def __len__(self): return len(self.cols)
