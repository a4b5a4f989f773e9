"""Guard engine: reflection, rule resolution and enforcement.

Submodules are imported explicitly (`method_guards.core.guard`, ...) and
re-exported from :mod:`method_guards`.
"""
