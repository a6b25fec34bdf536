"""Request and response payloads of the greeting API."""

from __future__ import annotations

from dataclasses import dataclass, field

from dataclasses_json import DataClassJsonMixin, LetterCase, config, dataclass_json

from models.stats_models import Stats

__all__: list[str] = ["GreetingRequest", "GreetingResponse"]


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass
class GreetingRequest(DataClassJsonMixin):
    """A greeting to produce.

    Attributes:
        recipient (str): Name placed in the greeting. Must not be empty.
        language (str): Target language code, e.g. "ja". Not validated locally.
    """

    recipient: str
    language: str

    @property
    def is_complete(self) -> bool:
        return bool(self.recipient) and bool(self.language)


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass
class GreetingResponse(DataClassJsonMixin):
    """Greeting text and, when the request used the cache or the provider, its statistics."""

    greeting: str
    stats: Stats | None = field(default=None, metadata=config(exclude=lambda value: value is None))
