"""journalgql — GraphQL API for a personal journaling app.

Users register and log in; authenticated users create, read, update
and delete their own journal entries. Nobody sees anyone else's.
"""

__version__ = "0.1.0"
