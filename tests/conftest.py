"""Shared test configuration.

Registers a hypothesis profile without deadlines: graph sweeps are recursive
and their timing varies across machines.
"""

from hypothesis import settings

settings.register_profile("adcore", deadline=None, max_examples=50)
settings.load_profile("adcore")
