from ._argtypes import CompletionContext, CompletionTag
from .basic import BooleanTag, EmptyTag, FreeTextTag, RangeTag
from .lists import ConfigListTag, CustomListTag, ListTag
from .players import PlayerTag, WorldTag
from .registries import EntityTag, MaterialTag, RegistryTag, SoundTag

BUILTIN_TAGS: tuple[type[CompletionTag], ...] = (
    PlayerTag,
    RangeTag,
    MaterialTag,
    BooleanTag,
    SoundTag,
    WorldTag,
    EntityTag,
    ConfigListTag,
    EmptyTag,
    FreeTextTag,
)


def parse_tag(tag: str | CompletionTag) -> CompletionTag:
    """
    Turn a ``@tab_completion`` entry into a tag.

    Builtin forms are ``.player``, ``.range(lo-hi)``, ``.material``,
    ``.boolean``, ``.sound``, ``.world``, ``.entity``, ``.config(path)``,
    ``.empty`` and ``.text``. Anything else is a custom list id.
    """
    if isinstance(tag, CompletionTag):
        return tag

    for tag_type in BUILTIN_TAGS:
        if tag_type.pattern is not None and (match := tag_type.pattern.fullmatch(tag)):
            return tag_type.from_match(match)
    return CustomListTag(tag)


__all__ = (
    "parse_tag",
    "BUILTIN_TAGS",
    # ./_argtypes.py
    "CompletionContext",
    "CompletionTag",
    # ./basic.py
    "RangeTag",
    "BooleanTag",
    "EmptyTag",
    "FreeTextTag",
    # ./players.py
    "PlayerTag",
    "WorldTag",
    # ./registries.py
    "RegistryTag",
    "MaterialTag",
    "SoundTag",
    "EntityTag",
    # ./lists.py
    "ListTag",
    "ConfigListTag",
    "CustomListTag",
)
