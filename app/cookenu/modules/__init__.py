"""
Feature modules live under this package.

Each module owns its table model, its data-access functions (service.py)
and its routes, while reusing the platform primitives (tokens, password
hashing, id generation, DB session, error taxonomy).
"""
