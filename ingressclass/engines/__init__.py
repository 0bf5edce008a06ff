"""
Engines are things that run around the reactor (see `ingressclass.reactor`)
to help it to function, but are not part of it. For example, logging.
"""
