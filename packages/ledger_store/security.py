"""Password credential hashing.

Treated as an opaque one-way capability: werkzeug produces salted, adaptive
hashes that embed their own method and parameters, so verification works
across changes to the configured method.
"""

from werkzeug.security import check_password_hash, generate_password_hash

DEFAULT_METHOD = "scrypt"


class PasswordHasher:
    def __init__(self, method: str = DEFAULT_METHOD):
        self.method = method
        # Verified against when the username is unknown, so both failure
        # paths do the same amount of work.
        self._dummy_hash = generate_password_hash("", method=method)

    def hash(self, password: str) -> str:
        return generate_password_hash(password, method=self.method)

    def verify(self, password_hash: str, password: str) -> bool:
        return check_password_hash(password_hash, password)

    def burn(self, password: str) -> None:
        check_password_hash(self._dummy_hash, password)
