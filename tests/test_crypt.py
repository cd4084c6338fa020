import pytest

from blowcrypt.blowfish import CryptError
from blowcrypt.crypt import crypt, crypt_gensalt, crypt_rn
from blowcrypt.gensalt import gensalt_extended, gensalt_md5, gensalt_traditional

VECTORS = [
    ("$2a$05$CCCCCCCCCCCCCCCCCCCCC.E5YPO9kmyuRGyh0XouQYb4YMJKvyOeW", b"U*U"),
    ("$2a$05$CCCCCCCCCCCCCCCCCCCCC.VGOzA784oUp/Z0DY336zx7pLYAy0lwK", b"U*U*"),
    ("$2a$05$XXXXXXXXXXXXXXXXXXXXXOAcXxm9kjPGEMsLznoKqmqw7tc8WCx4a", b"U*U*U"),
    (
        "$2a$05$abcdefghijklmnopqrstuu5s2v8.iXieOjg/.AySBTTZIIVFJeBui",
        b"0123456789abcdefghijklmnopqrstuvwxyz"
        b"ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
        b"chars after 72 are ignored",
    ),
    ("$2x$05$/OK.fbVrR/bpIqNJ5ianF.CE5elHaaO4EbggVDjb8P19RukzXSM3e", b"\xa3"),
    ("$2x$05$/OK.fbVrR/bpIqNJ5ianF.CE5elHaaO4EbggVDjb8P19RukzXSM3e", b"\xff\xff\xa3"),
    ("$2y$05$/OK.fbVrR/bpIqNJ5ianF.CE5elHaaO4EbggVDjb8P19RukzXSM3e", b"\xff\xff\xa3"),
    ("$2a$05$/OK.fbVrR/bpIqNJ5ianF.nqd1wy.pTMdcvrRWxyiGL2eMz.2a85.", b"\xff\xff\xa3"),
    ("$2b$05$/OK.fbVrR/bpIqNJ5ianF.CE5elHaaO4EbggVDjb8P19RukzXSM3e", b"\xff\xff\xa3"),
    ("$2y$05$/OK.fbVrR/bpIqNJ5ianF.Sa7shbm4.OzKpvFnX1pQLmQW96oUlCq", b"\xa3"),
    ("$2a$05$/OK.fbVrR/bpIqNJ5ianF.Sa7shbm4.OzKpvFnX1pQLmQW96oUlCq", b"\xa3"),
    ("$2b$05$/OK.fbVrR/bpIqNJ5ianF.Sa7shbm4.OzKpvFnX1pQLmQW96oUlCq", b"\xa3"),
    ("$2x$05$/OK.fbVrR/bpIqNJ5ianF.o./n25XVfn6oAPaUvHe.Csk4zRfsYPi", b"1\xa3345"),
    ("$2x$05$/OK.fbVrR/bpIqNJ5ianF.o./n25XVfn6oAPaUvHe.Csk4zRfsYPi", b"\xff\xa3345"),
    (
        "$2x$05$/OK.fbVrR/bpIqNJ5ianF.o./n25XVfn6oAPaUvHe.Csk4zRfsYPi",
        b"\xff\xa334\xff\xff\xff\xa3345",
    ),
    (
        "$2y$05$/OK.fbVrR/bpIqNJ5ianF.o./n25XVfn6oAPaUvHe.Csk4zRfsYPi",
        b"\xff\xa334\xff\xff\xff\xa3345",
    ),
    (
        "$2a$05$/OK.fbVrR/bpIqNJ5ianF.ZC1JEJ8Z4gPfpe1JOr/oyPXTWl9EFd.",
        b"\xff\xa334\xff\xff\xff\xa3345",
    ),
    ("$2y$05$/OK.fbVrR/bpIqNJ5ianF.nRht2l/HRhr6zmCp9vYUvvsqynflf9e", b"\xff\xa3345"),
    ("$2a$05$/OK.fbVrR/bpIqNJ5ianF.nRht2l/HRhr6zmCp9vYUvvsqynflf9e", b"\xff\xa3345"),
    ("$2a$05$/OK.fbVrR/bpIqNJ5ianF.6IflQkJytoRVc1yuaNtHfiuq.FRlSIS", b"\xa3ab"),
    ("$2x$05$/OK.fbVrR/bpIqNJ5ianF.6IflQkJytoRVc1yuaNtHfiuq.FRlSIS", b"\xa3ab"),
    ("$2y$05$/OK.fbVrR/bpIqNJ5ianF.6IflQkJytoRVc1yuaNtHfiuq.FRlSIS", b"\xa3ab"),
    ("$2x$05$6bNw2HLQYeqHYyBfLMsv/OiwqTymGIGzFsA4hOTWebfehXHNprcAS", b"\xd1\x91"),
    (
        "$2x$05$6bNw2HLQYeqHYyBfLMsv/O9LIGgn8OMzuDoHfof8AQimSGfcSWxnS",
        b"\xd0\xc1\xd2\xcf\xcc\xd8",
    ),
    (
        "$2a$05$/OK.fbVrR/bpIqNJ5ianF.swQOIzjOiJ9GHEPuhEkvqrUyvWhEMx6",
        b"\xaa" * 72 + b"chars after 72 are ignored as usual",
    ),
    (
        "$2a$05$/OK.fbVrR/bpIqNJ5ianF.R9xrDjiycxMbQE2bp.vgqlYpW5wx2yy",
        b"\xaa\x55" * 36,
    ),
    (
        "$2a$05$/OK.fbVrR/bpIqNJ5ianF.9tQZzcJfm3uj2NvJ/n5xkhpqLrMpWCe",
        b"\x55\xaa\xff" * 24,
    ),
    ("$2a$05$CCCCCCCCCCCCCCCCCCCCC.7uG0VCzI2bS7j6ymqJi9CdcdxiRTWNy", b""),
]

FAILURES = [
    ("*0", "$2a$03$CCCCCCCCCCCCCCCCCCCCC."),
    ("*0", "$2a$32$CCCCCCCCCCCCCCCCCCCCC."),
    ("*0", "$2c$05$CCCCCCCCCCCCCCCCCCCCC."),
    ("*0", "$2z$05$CCCCCCCCCCCCCCCCCCCCC."),
    ("*0", "$2`$05$CCCCCCCCCCCCCCCCCCCCC."),
    ("*0", "$2{$05$CCCCCCCCCCCCCCCCCCCCC."),
    ("*1", "*0"),
]

RANDOM = bytes(range(0x30, 0x40))


@pytest.mark.parametrize("expected, key", VECTORS)
def test_crypt_with_full_hash(expected, key):
    assert crypt(key, expected) == expected


@pytest.mark.parametrize("expected, key", VECTORS[:4])
def test_crypt_with_setting_prefix(expected, key):
    assert crypt(key, expected[:29]) == expected


@pytest.mark.parametrize("expected, key", VECTORS[:3])
def test_crypt_rn_with_bytes_setting(expected, key):
    assert crypt_rn(key, expected.encode("ascii")) == expected


@pytest.mark.parametrize("token, setting", FAILURES)
def test_crypt_failure_token(token, setting):
    assert crypt(b"", setting) == token


@pytest.mark.parametrize("token, setting", FAILURES)
def test_crypt_rn_raises(token, setting):
    with pytest.raises(CryptError):
        crypt_rn(b"", setting)


def test_crypt_accepts_text_key():
    expected = "$2a$05$CCCCCCCCCCCCCCCCCCCCC.E5YPO9kmyuRGyh0XouQYb4YMJKvyOeW"
    assert crypt("U*U", expected) == expected


def test_gensalt_blowfish_prefix():
    setting = crypt_gensalt("$2a$", 12, RANDOM)
    assert setting.startswith("$2a$12$")
    assert len(setting) == 29


def test_gensalt_with_setting_as_prefix_is_stable():
    first = crypt_gensalt("$2a$", 12, RANDOM)
    assert crypt_gensalt(first, 12, RANDOM) == first


def test_gensalt_changes_with_input():
    first = crypt_gensalt("$2a$", 12, RANDOM)
    changed = bytes([RANDOM[0] + 1]) + RANDOM[1:]
    assert crypt_gensalt(first, 12, changed) != first


@pytest.mark.parametrize("prefix", ["$2b$", "$2y$"])
def test_gensalt_other_blowfish_prefixes(prefix):
    assert crypt_gensalt(prefix, 0, RANDOM).startswith(prefix + "05$")


def test_gensalt_result_usable_for_hashing():
    setting = crypt_gensalt("$2b$", 4, RANDOM)
    hashed = crypt(b"password", setting)
    assert hashed.startswith(setting[:28])
    assert len(hashed) == 60
    assert crypt(b"password", hashed) == hashed


def test_gensalt_md5_dispatch():
    assert crypt_gensalt("$1$", 0, RANDOM) == gensalt_md5("$1$", 0, RANDOM)


def test_gensalt_extended_dispatch():
    assert crypt_gensalt("_", 0, RANDOM) == gensalt_extended("_", 0, RANDOM)


@pytest.mark.parametrize("prefix", ["", "ab", "./"])
def test_gensalt_traditional_dispatch(prefix):
    assert crypt_gensalt(prefix, 0, RANDOM) == gensalt_traditional(prefix, 0, RANDOM)


@pytest.mark.parametrize("prefix", ["$3$", "a", "a!", "$2c$", "$"])
def test_gensalt_unknown_prefix(prefix):
    with pytest.raises(CryptError):
        crypt_gensalt(prefix, 0, RANDOM)


def test_gensalt_without_input():
    with pytest.raises(CryptError):
        crypt_gensalt("$2a$", 12, None)


@pytest.mark.parametrize("count", [3, 32])
def test_gensalt_blowfish_bad_count(count):
    with pytest.raises(CryptError):
        crypt_gensalt("$2a$", count, RANDOM)


def test_gensalt_blowfish_short_input():
    with pytest.raises(CryptError):
        crypt_gensalt("$2a$", 12, RANDOM[:15])