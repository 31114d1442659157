"""Use-cases: cross evaluation, application of fold models, histogram fitting.

Use-cases accept their dependencies (artifact store, seed, progress callback)
explicitly instead of reaching for globals.
"""
