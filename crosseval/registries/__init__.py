"""Name-keyed registries for methods and fold splitters.

Import the concrete registries explicitly (``crosseval.registries.methods``,
``crosseval.registries.splitters``); this package stays import-light because the
formula function table is built on :class:`~crosseval.registries.base.Registry`.
"""
