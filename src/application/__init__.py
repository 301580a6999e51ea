"""Use cases, split into commands (writes) and queries (reads).

Command handlers run inside a unit of work and return a Result; query
handlers read through the principal's access policy. See cqrs/registry.py
for the full list.
"""
