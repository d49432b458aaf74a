"""Authentication and authorization.

Learn: One authentication path: email/password -> JWT session token.
- password.py: bcrypt hashing
- jwt.py: 7-day signed tokens, verified without ever raising
- dependencies.py: the gate that turns a bearer header into an Identity

Every request resolves to an Identity or None; use cases decide what
anonymous callers may do.
"""
