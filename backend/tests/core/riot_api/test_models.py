import pytest
from pydantic import ValidationError

from riftradar.core.config import Settings
from riftradar.core.riot_api.errors import RateLimitError, UpstreamErrorKind
from riftradar.core.riot_api.models import AccountDTO, MatchListOptions


def test_match_list_options_accept_riot_names():
    options = MatchListOptions(startTime=1700000000, endTime=1700500000, type="ranked")

    assert options.to_query_params() == {
        "startTime": 1700000000,
        "endTime": 1700500000,
        "type": "ranked",
        "start": 0,
        "count": 20,
    }


def test_match_list_options_bounds():
    with pytest.raises(ValidationError):
        MatchListOptions(count=101)
    with pytest.raises(ValidationError):
        MatchListOptions(start=-1)


def test_account_without_name_has_no_riot_id():
    assert AccountDTO(puuid="p").riot_id is None


def test_rate_limit_error_serialization():
    error = RateLimitError("slow down", tier="long", identifier="riotId:a-b-euw1")

    data = error.to_dict()

    assert data["kind"] == UpstreamErrorKind.RATE_LIMITED.value
    assert data["response_data"] == {"tier": "long", "identifier": "riotId:a-b-euw1"}
    assert "long window" in str(error)


def test_blank_api_key_is_not_configured():
    assert Settings(riot_api_key="   ", _env_file=None).riot_api_key is None


def test_rate_budget_must_be_positive():
    with pytest.raises(ValidationError):
        Settings(rate_limit_short_requests=0, _env_file=None)
