from dataclasses import dataclass
from enum import Enum


class LanguageCode(str, Enum):
    """Print-language markers found in card codes."""

    EN = "EN"
    FR = "FR"
    DE = "DE"
    SP = "SP"
    IT = "IT"
    PT = "PT"
    JP = "JP"
    KR = "KR"
    ZH = "ZH"
    RU = "RU"


@dataclass(frozen=True, slots=True)
class LanguageDefinition:
    """A registered language with its display label and code aliases."""

    code: LanguageCode
    label: str
    aliases: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class LanguageDetectionResult:
    """
    Dominant language of a batch of card codes.

    Attributes:
        code: Winning language, or None if no code carried a language marker
        matches: Number of codes a language could be extracted from
        total: Number of codes examined
        confidence: Winner's share of matched codes (0.0-1.0, 2 decimals)
    """

    code: LanguageCode | None
    matches: int
    total: int
    confidence: float

    @property
    def detected(self) -> bool:
        return self.code is not None
