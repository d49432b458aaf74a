"""Password hashing utilities.

Learn: Uses bcrypt for password hashing. bcrypt includes a random salt
automatically and produces hashes starting with "$2b$". The work factor
defaults to 10 rounds; tests drop it to 4 to stay fast. Passwords are
truncated to 72 bytes (bcrypt's limit).

bcrypt is deliberately slow, so the async variants push the work onto a
thread so a login does not stall other requests on the event loop.
"""

import asyncio

import bcrypt

DEFAULT_ROUNDS = 10


class PasswordHasher:
    """Salted one-way hash + verify with a fixed work factor."""

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        self.rounds = rounds

    def hash(self, password: str) -> str:
        pw_bytes = password.encode("utf-8")[:72]
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(pw_bytes, salt).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Check a password against a bcrypt hash. Malformed hashes never match."""
        try:
            pw_bytes = password.encode("utf-8")[:72]
            return bcrypt.checkpw(pw_bytes, password_hash.encode("utf-8"))
        except (ValueError, TypeError):
            return False

    async def hash_async(self, password: str) -> str:
        return await asyncio.to_thread(self.hash, password)

    async def verify_async(self, password: str, password_hash: str) -> bool:
        return await asyncio.to_thread(self.verify, password, password_hash)
