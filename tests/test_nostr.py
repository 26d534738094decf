import pytest

from hubx.nostr import NostrProfile


def test_round_trip():
    data = {
        "banner": "b.png",
        "website": "https://example.com",
        "lud06": "lnurl1dp68gurn",
        "nip05": "alice@example.com",
        "picture": "p.png",
        "display_name": "Alice",
        "about": "hello",
        "name": "alice",
        "lud16": "alice@example.com",
        "nip05_verified": True,
    }
    profile = NostrProfile.from_dict(data)
    assert profile.to_dict() == data


def test_missing_keys_default_to_none():
    profile = NostrProfile.from_dict({"name": "bob"})
    assert profile.name == "bob"
    assert profile.display_name is None
    assert profile.nip05_verified is None


def test_unknown_keys_are_ignored():
    profile = NostrProfile.from_dict({"name": "carol", "extra": 5})
    assert "extra" not in profile.to_dict()
    assert profile.to_dict()["name"] == "carol"


def test_to_dict_contains_every_field():
    result = NostrProfile().to_dict()
    assert set(result) == {
        "banner", "website", "lud06", "nip05", "picture",
        "display_name", "about", "name", "lud16", "nip05_verified",
    }
    assert all(value is None for value in result.values())


def test_verification_flag_can_be_set():
    profile = NostrProfile(nip05="dave@example.com")
    profile.nip05_verified = False
    assert NostrProfile.from_dict(profile.to_dict()).nip05_verified is False


@pytest.mark.parametrize(
    "data",
    [{"name": 5}, {"nip05_verified": "yes"}, {"about": True}],
)
def test_wrong_types_rejected(data):
    with pytest.raises(TypeError):
        NostrProfile.from_dict(data)


def test_non_mapping_rejected():
    with pytest.raises(TypeError):
        NostrProfile.from_dict(["name", "alice"])