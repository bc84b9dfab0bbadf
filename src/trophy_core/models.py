from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class AppSummary:
    """A catalog search row."""

    appid: int
    name: str
    type: str
    header_image: str | None = None
    background: str | None = None


@dataclass(frozen=True)
class Achievement:
    name: str
    display_name: str | None
    description: str | None
    icon: str | None
    icon_gray: str | None
    hidden: bool

    @classmethod
    def from_schema(cls, raw: dict[str, Any]) -> "Achievement":
        return cls(
            name=raw.get("name", ""),
            display_name=raw.get("displayName"),
            description=raw.get("description"),
            icon=raw.get("icon"),
            icon_gray=raw.get("icongray"),
            hidden=bool(raw.get("hidden", 0)),
        )


@dataclass(frozen=True)
class Platforms:
    windows: bool | None = None
    mac: bool | None = None
    linux: bool | None = None


@dataclass(frozen=True)
class SupportInfo:
    url: str | None = None
    email: str | None = None


@dataclass
class AppInfo:
    """
    Steam store details merged with the achievement schema.

    Every optional field is present; ``None`` means Steam did not provide it,
    which is not the same as a falsy value (``is_free=False``, ``dlc=[]``).
    ``achievements`` is ``None`` when the schema lookup found nothing.
    """

    appid: str
    name: str | None = None
    type: str | None = None
    website: str | None = None
    header_image: str | None = None
    is_free: bool | None = None
    legal_notice: str | None = None
    about_the_game: str | None = None
    short_description: str | None = None
    detailed_description: str | None = None
    background: str | None = None
    background_raw: str | None = None
    controller_support: str | None = None
    price_overview: dict[str, Any] | None = None
    release_date: dict[str, Any] | None = None
    supported_languages: str | None = None
    developers: list[str] | None = None
    publishers: list[str] | None = None
    dlc: list[int] | None = None
    platforms: Platforms | None = None
    support_info: SupportInfo | None = None
    achievements: list[Achievement] | None = None

    @property
    def store_url(self) -> str:
        return f"https://store.steampowered.com/app/{self.appid}/"

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
