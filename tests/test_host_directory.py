from uuid import UUID

import pytest

from restadmin.models.player import PlayerProfile
from restadmin.services.host_directory import HostDataInvalid, JsonHostDirectory
from restadmin.services.io_utils import read_json, write_json
from restadmin.services.resolver import parse_uuid, resolve_profile

STEVE = PlayerProfile(id=UUID("11111111-1111-1111-1111-111111111111"), name="Steve")
# Nom d'affichage qui a la forme d'un UUID
UUID_NAMED = PlayerProfile(
    id=UUID("44444444-4444-4444-4444-444444444444"),
    name="33333333-3333-3333-3333-333333333333",
)


@pytest.fixture
def directory(tmp_path):
    write_json(
        tmp_path / "usercache.json",
        [
            {"name": STEVE.name, "uuid": str(STEVE.id), "expiresOn": "2030-01-01 00:00:00 +0000"},
            {"name": UUID_NAMED.name, "uuid": str(UUID_NAMED.id)},
            {"name": "NoUuid"},
            {"name": "BadUuid", "uuid": "not-a-uuid"},
            "garbage",
        ],
    )
    return JsonHostDirectory(tmp_path)


def test_usercache_loaded_and_malformed_entries_skipped(directory):
    assert directory.find_by_id(STEVE.id) == STEVE
    assert directory.find_by_name("Steve") == STEVE
    assert directory.find_by_name("NoUuid") is None
    assert directory.find_by_name("BadUuid") is None


def test_missing_files_mean_empty_directory(tmp_path):
    directory = JsonHostDirectory(tmp_path)
    assert directory.connected_players() == []
    assert directory.whitelisted_names() == []
    assert directory.find_by_name("Steve") is None


def test_whitelist_add_remove_and_save(directory):
    directory.add_to_whitelist(STEVE)
    directory.add_to_whitelist(STEVE)
    assert directory.is_whitelisted(STEVE)
    assert directory.whitelisted_names() == ["Steve"]

    directory.save_whitelist()
    assert read_json(directory.whitelist_path) == [{"uuid": str(STEVE.id), "name": "Steve"}]
    assert JsonHostDirectory(directory.server_dir).is_whitelisted(STEVE)

    directory.remove_from_whitelist(STEVE)
    directory.remove_from_whitelist(STEVE)
    assert not directory.is_whitelisted(STEVE)


def test_joined_player_enters_user_cache(directory):
    newcomer = PlayerProfile(id=UUID("55555555-5555-5555-5555-555555555555"), name="Alex")
    directory.player_joined(newcomer)

    assert directory.connected_players() == [newcomer]
    assert resolve_profile(directory, "Alex") == newcomer

    directory.player_left(newcomer.id)
    assert directory.connected_players() == []
    assert directory.find_by_id(newcomer.id) == newcomer


@pytest.mark.parametrize(
    "value,expected",
    [
        ("11111111-1111-1111-1111-111111111111", UUID("11111111-1111-1111-1111-111111111111")),
        ("ABCDEF01-2345-6789-ABCD-EF0123456789", UUID("abcdef01-2345-6789-abcd-ef0123456789")),
        ("11111111111111111111111111111111", None),
        ("{11111111-1111-1111-1111-111111111111}", None),
        ("urn:uuid:11111111-1111-1111-1111-111111111111", None),
        ("Steve", None),
    ],
)
def test_parse_uuid_only_accepts_canonical_form(value, expected):
    assert parse_uuid(value) == expected


def test_resolve_by_uuid_or_name(directory):
    assert resolve_profile(directory, str(STEVE.id)) == STEVE
    assert resolve_profile(directory, "Steve") == STEVE
    assert resolve_profile(directory, "Herobrine") is None


def test_uuid_shaped_name_goes_to_identifier_lookup(directory):
    assert resolve_profile(directory, UUID_NAMED.name) is None
    assert resolve_profile(directory, str(UUID_NAMED.id)) == UUID_NAMED


@pytest.mark.parametrize(
    "content",
    [b'{"uuid": "11111111-1111-1111-1111-111111111111", "name": "Steve"}', b"[not json"],
)
def test_unreadable_whitelist_refuses_to_load(tmp_path, content):
    (tmp_path / "whitelist.json").write_bytes(content)

    with pytest.raises(HostDataInvalid):
        JsonHostDirectory(tmp_path)
    # Fichier de l'opérateur intact
    assert (tmp_path / "whitelist.json").read_bytes() == content


def test_malformed_whitelist_entries_survive_save(tmp_path):
    legacy = {"name": "OldTimer"}
    write_json(tmp_path / "whitelist.json", [legacy, {"uuid": str(STEVE.id), "name": "Steve"}])
    directory = JsonHostDirectory(tmp_path)
    assert directory.whitelisted_names() == ["Steve"]

    directory.remove_from_whitelist(STEVE)
    directory.save_whitelist()

    assert read_json(directory.whitelist_path) == [legacy]
