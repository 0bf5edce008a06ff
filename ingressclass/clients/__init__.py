"""
All the routines to talk to Kubernetes API.

Only the API discovery is needed: to check which resources are served,
not to read, list, or watch the objects themselves.
"""
