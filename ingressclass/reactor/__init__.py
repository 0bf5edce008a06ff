"""
The reactor groups all modules to decide on the objects and their events.

The low-level decisions are about the objects themselves: which class they
declare, if any, and whether they are the cluster's default class.

The high-level decisions are about the events of the objects: whether
the event should be queued for reconciliation by a specific class' controller.
"""
