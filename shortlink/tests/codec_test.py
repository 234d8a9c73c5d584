import pytest

from shortlink.utils.encoding import LinkCodec


def test_round_trip(codec):
    """decode(encode(x)) == x across small and large identifiers."""
    for identifier in list(range(0, 500)) + [10**6, 2**31 - 1, 2**53]:
        assert codec.decode(codec.encode(identifier)) == identifier


def test_encode_is_deterministic():
    assert LinkCodec("abc", 5).encode(42) == LinkCodec("abc", 5).encode(42)


def test_codes_are_unique(codec):
    codes = {codec.encode(i) for i in range(1, 2001)}
    assert len(codes) == 2000


def test_min_length_enforced(codec):
    for identifier in range(0, 50):
        assert len(codec.encode(identifier)) >= 5


def test_salt_changes_codes():
    assert LinkCodec("abc", 5).encode(1) != LinkCodec("xyz", 5).encode(1)


def test_decode_rejects_code_from_other_salt():
    ours = LinkCodec("abc", 5)
    theirs = LinkCodec("xyz", 5)
    for identifier in range(1, 50):
        assert ours.decode(theirs.encode(identifier)) is None
        assert theirs.decode(ours.encode(identifier)) is None


def test_encode_rejects_negative(codec):
    with pytest.raises(ValueError):
        codec.encode(-1)


def test_encode_rejects_non_int(codec):
    with pytest.raises(ValueError):
        codec.encode("1")
    with pytest.raises(ValueError):
        codec.encode(True)


@pytest.mark.parametrize("code", ["", "zz-zz", "!!!!!", "abc de", "ü1234"])
def test_decode_rejects_malformed(codec, code):
    assert codec.decode(code) is None


def test_decode_rejects_non_string(codec):
    assert codec.decode(None) is None
    assert codec.decode(12345) is None


def test_decode_rejects_truncated_code(codec):
    code = codec.encode(7)
    assert codec.decode(code[:-1]) is None


def test_decode_rejects_other_min_length():
    short = LinkCodec("abc", 5)
    long = LinkCodec("abc", 10)
    assert long.decode(short.encode(3)) is None
    assert short.decode(long.encode(3)) is None


def test_decode_rejects_multi_number_hashid():
    from hashids import Hashids

    code = Hashids(salt="abc", min_length=5).encode(1, 2)
    assert LinkCodec("abc", 5).decode(code) is None


def test_custom_alphabet():
    codec = LinkCodec("abc", 6, alphabet="abcdefghijklmnopqrstuvwxyz0123456789")
    code = codec.encode(12345)
    assert code == code.lower()
    assert codec.decode(code) == 12345


def test_negative_min_length_rejected():
    with pytest.raises(ValueError):
        LinkCodec("abc", -1)
