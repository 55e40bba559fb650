import json

import pytest

from core.config import AppSettings


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(_env_file=None, log_level="WARNING")


@pytest.fixture
def finto_body() -> str:
    return json.dumps(
        {
            "results": [
                {"prefLabel": "Climate change", "uri": "http://x/123", "lang": "en", "vocab": "koko"},
                {"prefLabel": "Climate change", "uri": "http://x/123", "lang": "en", "vocab": "koko"},
                {"prefLabel": "Climate policy", "uri": "http://x/456", "lang": "en", "vocab": "koko"},
            ]
        }
    )


@pytest.fixture
def openalex_body() -> str:
    return json.dumps(
        {
            "meta": {"count": 2},
            "results": [
                {
                    "id": "https://openalex.org/C132651083",
                    "display_name": "Climate change",
                    "hint": "Long-term change in weather patterns",
                    "external_id": "https://www.wikidata.org/wiki/Q125928",
                    "works_count": 402311,
                },
                {
                    "id": "https://openalex.org/C49204034",
                    "display_name": "Climatology",
                    "hint": None,
                },
            ],
        }
    )


@pytest.fixture
def ror_body() -> str:
    return json.dumps(
        {
            "number_of_results": 1,
            "items": [
                {
                    "id": "https://ror.org/05k73zm37",
                    "names": [
                        {"value": "Suomen Akatemia", "types": ["label"], "lang": "fi"},
                        {"value": "Research Council of Finland", "types": ["ror_display", "label"], "lang": "en"},
                    ],
                    "types": ["funder", "government"],
                    "locations": [{"geonames_details": {"country_name": "Finland"}}],
                }
            ],
        }
    )
