from dataclasses import dataclass
from pathlib import Path


@dataclass
class Manifest:
    appid: str
    title: str          # trademark glyphs already stripped
    path: Path


@dataclass
class Descriptor:
    game_id: str
    game_name: str
    game_icon: str

    def as_env(self) -> dict:
        return {"GAME_ID": self.game_id, "GAME_NAME": self.game_name, "GAME_ICON": self.game_icon}
