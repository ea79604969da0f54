"""Unit tests for individual components in isolation.

Coverage:
    - client/: Response handling, preconditions, payload normalization
    - storage/: Settings persistence and defaults
    - utils/: Size and date formatting
    - ui/: Console state bookkeeping

Remote calls go to the simulated API from conftest.
"""
