"""Declarative search criteria compiled into query predicates.

A search descriptor (a pydantic model or dataclass) tags its fields with intent markers; the
builder turns a descriptor instance into one predicate tree for a query engine.
"""
