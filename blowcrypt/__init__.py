"""Pure-Python bcrypt password hashing with crypt(3)-style salt generation."""

__version__ = "1.0.0"
__all__ = ["tables", "blowfish", "gensalt", "crypt", "api"]