import logging

import pytest

from starcommands import CommandException, CompletionContext, ConfigStorage, Messages
from starcommands.argtypes import (
    BooleanTag,
    ConfigListTag,
    CustomListTag,
    EmptyTag,
    EntityTag,
    FreeTextTag,
    MaterialTag,
    PlayerTag,
    RangeTag,
    SoundTag,
    WorldTag,
    parse_tag,
)

from conftest import EntityType, Material, Sound


@pytest.fixture
def ctx(server, config):
    return CompletionContext(
        server=server,
        custom_options={"ranks": ["member", "vip", "admin"]},
        config=config,
        messages=Messages(),
    )


@pytest.mark.parametrize(
    "tag, expected",
    [
        (".player", PlayerTag()),
        (".range(1-10)", RangeTag(1, 10)),
        (".material", MaterialTag()),
        (".boolean", BooleanTag()),
        (".sound", SoundTag()),
        (".world", WorldTag()),
        (".entity", EntityTag()),
        (".config(punish.reasons)", ConfigListTag("punish.reasons")),
        (".empty", EmptyTag()),
        (".text", FreeTextTag()),
        ("ranks", CustomListTag("ranks")),
        # malformed builtins fall through to custom ids
        (".range(5)", CustomListTag(".range(5)")),
        (".players", CustomListTag(".players")),
    ],
)
def test_parse_tag(tag, expected):
    assert parse_tag(tag) == expected


def test_parse_tag_passes_instances_through():
    tag = RangeTag(0, 3)
    assert parse_tag(tag) is tag


def test_range(ctx):
    tag = RangeTag(1, 10)

    assert tag.candidates(ctx) == [str(i) for i in range(1, 10)]
    tag.validate(ctx, "3")
    assert tag.coerce(ctx, "3") == 3

    with pytest.raises(CommandException) as exc:
        tag.validate(ctx, "abc")
    assert exc.value.message == "Invalid parameters. It needs to be a number."


def test_range_bounds_are_not_enforced(ctx):
    tag = RangeTag(1, 10)
    tag.validate(ctx, "42")
    tag.validate(ctx, "-5")
    assert tag.coerce(ctx, "42") == 42


def test_boolean(ctx):
    tag = BooleanTag()

    assert tag.candidates(ctx) == ["true", "false"]
    assert tag.coerce(ctx, "TRUE") is True
    assert tag.coerce(ctx, "false") is False

    with pytest.raises(CommandException, match="true or false"):
        tag.validate(ctx, "maybe")


def test_player(ctx, steve):
    tag = PlayerTag()

    assert tag.candidates(ctx) == ["Alex", "Mod", "Steve"]
    tag.validate(ctx, "steve")
    assert tag.coerce(ctx, "Steve") is steve

    with pytest.raises(CommandException, match="This player doesn't exist"):
        tag.validate(ctx, "Herobrine")


def test_player_candidates_follow_online_list(ctx, server, steve):
    server.players.remove(steve)
    assert PlayerTag().candidates(ctx) == ["Alex", "Mod"]

    with pytest.raises(CommandException):
        PlayerTag().validate(ctx, "Steve")


def test_world(ctx):
    tag = WorldTag()

    assert tag.candidates(ctx) == ["world", "world_nether"]
    assert tag.coerce(ctx, "world_nether").name == "world_nether"

    with pytest.raises(CommandException, match="This world doesn't exist"):
        tag.validate(ctx, "world_the_end")


def test_material(ctx):
    tag = MaterialTag()

    assert tag.candidates(ctx) == ["ACACIA_LOG", "DIAMOND_SWORD", "DIRT", "STONE"]
    assert tag.candidates(ctx) == tag.candidates(ctx)

    tag.validate(ctx, "diamond_sword")
    assert tag.coerce(ctx, "diamond_sword") is Material.DIAMOND_SWORD

    with pytest.raises(CommandException, match="material doesn't exist"):
        tag.validate(ctx, "bedrock")


def test_sound_and_entity(ctx):
    assert SoundTag().coerce(ctx, "entity_villager_no") is Sound.ENTITY_VILLAGER_NO
    assert EntityTag().candidates(ctx) == ["CREEPER", "PIG", "ZOMBIE"]
    assert EntityTag().coerce(ctx, "Zombie") is EntityType.ZOMBIE

    with pytest.raises(CommandException, match="sound doesn't exist"):
        SoundTag().validate(ctx, "boom")
    with pytest.raises(CommandException, match="entity type doesn't exist"):
        EntityTag().validate(ctx, "dragon")


def test_config_list(ctx):
    tag = ConfigListTag("punish.reasons")

    assert tag.candidates(ctx) == ["griefing", "spam"]
    tag.validate(ctx, "spam")
    assert tag.coerce(ctx, "spam") == "spam"

    with pytest.raises(CommandException, match="invalid parameter"):
        tag.validate(ctx, "hacking")


def test_config_list_missing_path(ctx):
    assert ConfigListTag("punish.durations").candidates(ctx) == []


def test_config_list_without_config(server):
    ctx = CompletionContext(server=server)
    assert ConfigListTag("punish.reasons").candidates(ctx) == []


def test_custom_list(ctx):
    tag = CustomListTag("ranks")

    assert tag.candidates(ctx) == ["member", "vip", "admin"]
    tag.validate(ctx, "vip")

    with pytest.raises(CommandException):
        tag.validate(ctx, "owner")


def test_custom_list_unregistered(ctx, caplog):
    tag = CustomListTag("homes")

    with caplog.at_level(logging.WARNING):
        assert tag.candidates(ctx) == []
    assert "homes" in caplog.text

    with pytest.raises(CommandException):
        tag.validate(ctx, "anything")


def test_free_text(ctx):
    for tag in (EmptyTag(), FreeTextTag()):
        assert tag.candidates(ctx) == []
        tag.validate(ctx, "anything at all")
        assert tag.coerce(ctx, "x") == "x"


def test_overridden_messages(server):
    ctx = CompletionContext(server=server, messages=Messages(not_a_number="Numbers only!"))

    with pytest.raises(CommandException, match="Numbers only!"):
        RangeTag(0, 5).validate(ctx, "five")


def test_config_list_from_file(server, tmp_path):
    path = tmp_path / "config.json"
    path.write_text('{"kits": {"names": ["starter", "pvp"]}}')

    ctx = CompletionContext(server=server, config=ConfigStorage(path))
    assert ConfigListTag("kits.names").candidates(ctx) == ["starter", "pvp"]
