"""
Append-only registry of guilds. Guild ids are assigned from a 16 bit counter
and are never reused.
"""

from dataclasses import dataclass, field
from typing import Dict, List

from credential_nft.onchain.errors import GuildLimitReached, UnknownGuild

MAX_GUILD_ID = 2**16 - 1


@dataclass
class Guild:
    name: str
    admins: List[str]


@dataclass
class GuildRegistry:
    guilds: Dict[int, Guild] = field(default_factory=dict)
    counter: int = 0

    def add(self, name: str, admins: List[str]) -> int:
        if self.counter > MAX_GUILD_ID:
            raise GuildLimitReached(f"all {MAX_GUILD_ID + 1} guild ids are taken")
        guild_id = self.counter
        self.guilds[guild_id] = Guild(name, list(admins))
        self.counter += 1
        return guild_id

    def get(self, guild_id: int) -> Guild:
        guild = self.guilds.get(guild_id)
        if guild is None:
            raise UnknownGuild(f"guild {guild_id} does not exist")
        return guild

    def to_dict(self) -> dict:
        return {
            "counter": self.counter,
            "guilds": {
                str(k): {"name": g.name, "admins": list(g.admins)}
                for k, g in self.guilds.items()
            },
        }

    @classmethod
    def from_dict(cls, d: dict) -> "GuildRegistry":
        return cls(
            guilds={
                int(k): Guild(v["name"], list(v["admins"]))
                for k, v in d["guilds"].items()
            },
            counter=d["counter"],
        )
