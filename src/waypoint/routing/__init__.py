"""Routing: path templates compiled into an immutable, declaration-ordered table.

Routes are declared during setup through a ``RouteTableBuilder`` and
frozen before the first request is dispatched.
"""
