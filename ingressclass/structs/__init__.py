"""
All the data structures of the objects and settings, with no behaviour.

The objects are recognised by their kinds, but are interpreted elsewhere.
"""
