from screentime.commands import is_configured_guild


class FakeGuild:
    def __init__(self, guild_id: int) -> None:
        self.id = guild_id


class FakeInteraction:
    def __init__(self, guild: FakeGuild | None) -> None:
        self.guild = guild


def test_configured_guild_is_accepted() -> None:
    assert is_configured_guild(FakeInteraction(FakeGuild(123)), 123) is True


def test_other_guild_and_direct_messages_are_rejected() -> None:
    assert is_configured_guild(FakeInteraction(FakeGuild(999)), 123) is False
    assert is_configured_guild(FakeInteraction(None), 123) is False
