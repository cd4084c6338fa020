# blowcrypt

blowcrypt is a bcrypt password hashing library written only in Python. The
hashes it produces are accepted by other bcrypt implementations, and it can
verify hashes that those implementations produced. It supports the `$2a$`,
`$2b$`, `$2x$` and `$2y$` prefixes.

## Installation

```
pip install blowcrypt
```

The package has no runtime dependencies.

## Hashing and checking passwords

```python
from blowcrypt.api import generate_hash, validate_password

hashed = generate_hash("password", 12)
assert validate_password("password", hashed)
assert not validate_password("secret", hashed)
```

You can also generate the salt and compute the hash as two separate steps:

```python
from blowcrypt.api import gensalt, hashpw, checkpw

salt = gensalt(10)             # "$2a$10$" plus 22 characters from 16 random bytes
hashed = hashpw("password", salt)
assert checkpw("password", hashed)
```

Behaviour of these functions:

- `gensalt` reads its random bytes from `os.urandom`. It always produces a
  `$2a$` setting. If the work factor is outside 4–31, it uses 12 instead.
- `hashpw` accepts a setting or a complete hash as the salt. It returns a
  hash of 60 characters.
- `checkpw` hashes the password again and compares the two hashes in
  constant time.
- `gensalt`, `hashpw` and `checkpw` raise `BcryptError` if a salt or hash
  cannot be produced. This happens, for example, when the setting is
  malformed or its cost is below 4.
- `validate_password` never raises. It treats any such error as a mismatch.
- A `str` password is encoded as UTF-8. Hashing stops at the first NUL byte,
  and only the first 72 bytes of the key are used.

The algorithm runs entirely in Python, so high work factors take a long time.
After each hash, a short built-in self-test also runs.

## crypt(3)-style interface

The functions in `blowcrypt.crypt` follow the conventions of the classic
`crypt` family:

```python
from blowcrypt.crypt import crypt, crypt_rn, crypt_gensalt

setting = crypt_gensalt("$2b$", 5, bytes(16))
hashed = crypt_rn("password", setting)
```

- `crypt_rn` raises `blowcrypt.blowfish.CryptError` when the setting is
  invalid. `CryptError` is a subclass of `ValueError`.
- `crypt` never raises in that case. It returns the failure token `"*0"`,
  or `"*1"` when the setting itself begins with `"*0"`. A failure token can
  therefore never equal the setting.
- `crypt_gensalt(prefix, count, data)` builds a setting from the bytes you
  pass in. `count` is the cost parameter of the scheme, and `0` selects the
  scheme's default. The supported schemes are:
  - the bcrypt prefixes `$2a$`, `$2b$` and `$2y$`: cost 4–31, default 5,
    at least 16 bytes of input
  - MD5, prefix `$1$`: count 0 or 1000; 4 salt characters from 3 bytes, or
    8 characters from 6 bytes
  - extended DES, prefix `_`: an odd count below 2**24, default 725
  - traditional DES: an empty prefix, or a prefix of two characters from
    the crypt alphabet; count 0 or 25

  It raises `CryptError` if `data` is `None`, if the prefix is unknown, or if
  the chosen scheme rejects the count or the input.

## Lower-level modules

The module `blowcrypt.blowfish` contains:

- `crypt_blowfish(key, setting)`: the Eksblowfish core.
- `bf_encode(data)` and `bf_decode(text, size)`: bcrypt's own base-64
  alphabet.
- `set_key(key, flags)`: key expansion. Flag bit 0 emulates the historical
  sign-extension bug (`$2x$`). Flag bit 1 enables the anti-collision safety
  measure (`$2a$`).
- `gensalt_blowfish(prefix, count, data)`: formats a bcrypt setting.
- `output_magic(setting)`: returns the failure token for a setting.

The module `blowcrypt.gensalt` formats salts for the schemes other than
bcrypt: `gensalt_traditional`, `gensalt_extended` and `gensalt_md5`.

The module `blowcrypt.tables` contains the Blowfish constants. The P-array
and S-boxes are computed from pi when the module is imported.
`initial_state()` returns fresh, mutable copies of them.

## What it does not do

- Only bcrypt hashing is implemented. `crypt_gensalt` can build MD5 and DES
  settings, but the package cannot hash with them. `crypt_rn` raises
  `CryptError` for such settings, and `crypt` returns `"*0"`.
- The package is a library only. It provides no command-line tool.