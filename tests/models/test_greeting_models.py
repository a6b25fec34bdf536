from __future__ import annotations

import json

from models.greeting_models import GreetingRequest, GreetingResponse
from models.stats_models import Stats


def test_request_is_complete_only_with_both_fields() -> None:
    assert GreetingRequest(recipient="Ana", language="ja").is_complete is True
    assert GreetingRequest(recipient="", language="ja").is_complete is False
    assert GreetingRequest(recipient="Ana", language="").is_complete is False


def test_response_without_stats_omits_the_key() -> None:
    response = GreetingResponse(greeting="Good morning, Ana!")

    assert response.to_dict() == {"greeting": "Good morning, Ana!"}
    assert json.loads(response.to_json()) == {"greeting": "Good morning, Ana!"}


def test_response_with_stats_serialises_camel_case() -> None:
    response = GreetingResponse(greeting="¡Buenos días, Ana!", stats=Stats(api_calls=1, chars_sent=18))

    payload = json.loads(response.to_json())

    assert payload["greeting"] == "¡Buenos días, Ana!"
    assert payload["stats"] == {"apiCalls": 1, "charsSent": 18, "costEstimate": 0.0, "cacheHits": 0}


def test_request_from_dict() -> None:
    request = GreetingRequest.from_dict({"recipient": "Bo", "language": "de"})

    assert request == GreetingRequest(recipient="Bo", language="de")
