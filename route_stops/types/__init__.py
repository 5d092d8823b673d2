from . import public, base, dag
