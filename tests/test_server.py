"""Tests for the HTTP interface."""

from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from openai import OpenAIError

from fpl_companion import __version__
from fpl_companion.api.client import FPLAPIError, FPLNotFoundError
from fpl_companion.assistant import AssistantClient
from fpl_companion.config import Settings
from fpl_companion.server import create_app


class FakeFPLClient:
    """In-memory stand-in for CachedFPLClient; set `fail` to make calls raise."""

    def __init__(self, bootstrap, fixtures):
        self.bootstrap = bootstrap
        self.fixtures = fixtures
        self.fail: dict[str, Exception] = {}
        self.search_calls = []

    def _check(self, name):
        if name in self.fail:
            raise self.fail[name]

    async def get_bootstrap_static(self, force_refresh=False):
        self._check("bootstrap")
        return self.bootstrap

    async def get_fixtures(self, force_refresh=False):
        self._check("fixtures")
        return self.fixtures

    async def get_manager_team(self, manager_id):
        self._check("team")
        return {"manager": {"id": manager_id}, "picks": {"picks": []}, "currentEvent": 10}

    async def search_teams_in_league(self, league_id, query, max_pages=10):
        self._check("search")
        self.search_calls.append((league_id, query, max_pages))
        entries = [
            {"entry": n, "entry_name": f"{query} {n}", "player_name": "Ann", "rank": n, "total": 100}
            for n in range(12)
        ]
        return entries, 2

    async def get_player_photo(self, code):
        self._check("photo")
        return b"\x89PNG"

    async def close(self):
        pass


class FakeCompletions:
    def __init__(self):
        self.error = None
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content="Advice."))])


@pytest.fixture
def fpl(raw_bootstrap, raw_fixtures):
    return FakeFPLClient(raw_bootstrap, raw_fixtures)


@pytest.fixture
def completions():
    return FakeCompletions()


@pytest.fixture
def client(fpl, completions):
    assistant = AssistantClient(
        api_key="",
        base_url="",
        model="test-model",
        client=SimpleNamespace(chat=SimpleNamespace(completions=completions)),
    )
    return TestClient(create_app(Settings(), fpl_client=fpl, assistant=assistant))


class TestHealth:
    def test_health(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "version": __version__, "llmConfigured": True}


class TestFPLRoutes:
    def test_bootstrap_passthrough(self, client, raw_bootstrap):
        response = client.get("/api/bootstrap")
        assert response.json() == raw_bootstrap

    def test_bootstrap_failure(self, client, fpl):
        fpl.fail["bootstrap"] = FPLAPIError("down", status_code=503)
        response = client.get("/api/bootstrap")

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to fetch FPL data"}

    def test_fixtures_failure(self, client, fpl):
        fpl.fail["fixtures"] = FPLAPIError("down")
        response = client.get("/api/fixtures")

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to fetch fixtures"}

    def test_team(self, client):
        response = client.get("/api/team/42")
        assert response.json()["manager"]["id"] == 42

    def test_team_not_found(self, client, fpl):
        fpl.fail["team"] = FPLNotFoundError("missing", status_code=404)
        response = client.get("/api/team/42")

        assert response.status_code == 404
        assert response.json() == {"error": "Team not found"}

    def test_team_failure(self, client, fpl):
        fpl.fail["team"] = FPLAPIError("down")
        assert client.get("/api/team/42").status_code == 500

    @pytest.mark.parametrize("query", ["", "ab"])
    def test_search_query_too_short(self, client, query):
        response = client.get("/api/search-team", params={"q": query})

        assert response.status_code == 400
        assert response.json() == {"error": "Search query must be at least 3 characters"}

    def test_search_defaults_and_limit(self, client, fpl):
        response = client.get("/api/search-team", params={"q": "abc"})
        body = response.json()

        assert fpl.search_calls == [(314, "abc", 10)]
        assert len(body["results"]) == 10
        assert body["results"][0] == {
            "teamId": 0,
            "teamName": "abc 0",
            "managerName": "Ann",
            "rank": 0,
            "totalPoints": 100,
        }
        assert body["searchedPages"] == 2

    def test_search_custom_league(self, client, fpl):
        client.get("/api/search-team", params={"q": "abc", "league": 99})
        assert fpl.search_calls[0][0] == 99

    def test_search_unknown_league(self, client, fpl):
        fpl.fail["search"] = FPLNotFoundError("no league", status_code=404)
        response = client.get("/api/search-team", params={"q": "abc"})

        assert response.status_code == 404
        assert response.json() == {"error": "League not found. Please check the League ID."}

    def test_search_failure(self, client, fpl):
        fpl.fail["search"] = FPLAPIError("down", status_code=503)
        response = client.get("/api/search-team", params={"q": "abc"})

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to search teams"}

    def test_player_image(self, client):
        response = client.get("/api/player-image/223340")

        assert response.status_code == 200
        assert response.content == b"\x89PNG"
        assert response.headers["content-type"] == "image/png"
        assert response.headers["cache-control"] == "public, max-age=86400"

    def test_player_image_failure_is_404(self, client, fpl):
        fpl.fail["photo"] = FPLAPIError("upstream 500", status_code=500)
        assert client.get("/api/player-image/1").status_code == 404


class TestAIRoutes:
    @pytest.fixture
    def analysis_body(self, raw_bootstrap, raw_fixtures):
        return {
            "players": raw_bootstrap["elements"],
            "teams": raw_bootstrap["teams"],
            "fixtures": raw_fixtures,
            "gameweek": 10,
        }

    def test_type_required(self, client, analysis_body):
        response = client.post("/api/ai-analysis", json=analysis_body)

        assert response.status_code == 400
        assert response.json() == {"error": "Analysis type is required"}

    @pytest.mark.parametrize(
        "kind,label",
        [("team", "team analysis"), ("captain", "captain analysis"), ("lineup", "lineup suggestion")],
    )
    def test_players_required(self, client, kind, label):
        response = client.post("/api/ai-analysis", json={"type": kind, "teams": [{"id": 1}]})

        assert response.status_code == 400
        assert response.json() == {"error": f"Players and teams data required for {label}"}

    def test_watchlist_requires_all_players(self, client, analysis_body):
        response = client.post("/api/ai-analysis", json={**analysis_body, "type": "watchlist"})

        assert response.status_code == 400
        assert response.json() == {"error": "All players and teams data required for watchlist"}

    def test_invalid_type(self, client, analysis_body):
        response = client.post("/api/ai-analysis", json={**analysis_body, "type": "horoscope"})

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid analysis type"}

    def test_captain_analysis(self, client, completions, analysis_body):
        response = client.post("/api/ai-analysis", json={**analysis_body, "type": "captain"})

        assert response.status_code == 200
        assert response.json() == {"result": "Advice."}
        prompt = completions.calls[0]["messages"][1]["content"]
        assert "Saka (ARS, MID)" in prompt
        assert "GW10: H vs BRE (FDR: 2)" in prompt

    def test_watchlist(self, client, completions, raw_bootstrap):
        body = {"type": "watchlist", "allPlayers": raw_bootstrap["elements"], "teams": raw_bootstrap["teams"]}
        response = client.post("/api/ai-analysis", json=body)

        assert response.json() == {"result": "Advice."}
        assert completions.calls[0]["max_tokens"] == 800

    def test_provider_failure(self, client, completions, analysis_body):
        completions.error = OpenAIError("quota")
        response = client.post("/api/ai-analysis", json={**analysis_body, "type": "team"})

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to generate analysis. Please try again."}

    def test_strategy(self, client, completions, analysis_body):
        body = {**analysis_body, "budget": 15, "freeTransfers": 2, "allowHits": True}
        response = client.post("/api/ai-strategy", json=body)

        assert response.json() == {"strategy": "Advice."}
        prompt = completions.calls[0]["messages"][1]["content"]
        assert "FREE TRANSFERS: 2" in prompt
        assert "WILLING TO TAKE HITS: Yes" in prompt

    def test_strategy_missing_data(self, client):
        response = client.post("/api/ai-strategy", json={"players": []})

        assert response.status_code == 400
        assert response.json() == {"error": "Missing required data"}

    def test_chat(self, client, completions, raw_bootstrap):
        body = {
            "messages": [{"role": "user", "content": "Captain?"}],
            "teamContext": {
                "players": raw_bootstrap["elements"][:1],
                "teams": raw_bootstrap["teams"],
                "budget": 5,
                "gameweek": 10,
            },
        }
        response = client.post("/api/ai-chat", json=body)

        assert response.json() == {"response": "Advice."}
        sent = completions.calls[0]["messages"]
        assert "Saka (ARS, MID)" in sent[0]["content"]
        assert sent[1] == {"role": "user", "content": "Captain?"}

    def test_chat_requires_messages(self, client):
        response = client.post("/api/ai-chat", json={})

        assert response.status_code == 400
        assert response.json() == {"error": "Messages array is required"}

    def test_chat_rejects_unknown_role(self, client):
        response = client.post("/api/ai-chat", json={"messages": [{"role": "system", "content": "x"}]})
        assert response.status_code == 400

    def test_chat_failure(self, client, completions):
        completions.error = OpenAIError("down")
        response = client.post("/api/ai-chat", json={"messages": [{"role": "user", "content": "hi"}]})

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to get response. Please try again."}


class TestTransferRoutes:
    def test_plan(self, client):
        response = client.post("/api/transfers/plan", json={"horizon": 3, "teamPlayerIds": [11]})
        body = response.json()

        assert response.status_code == 200
        assert body["currentGameweek"] == 10
        assert body["horizonEnd"] == 12
        assert set(body["topPicks"]) == {"midfielders", "forwards", "defenders"}
        assert body["transfers"][0]["playerOutId"] == 11

    def test_plan_without_fixtures(self, client, fpl):
        fpl.fail["fixtures"] = FPLAPIError("down")
        response = client.post("/api/transfers/plan", json={})

        assert response.status_code == 200
        assert response.json()["currentGameweek"] == 10

    def test_plan_bootstrap_failure(self, client, fpl):
        fpl.fail["bootstrap"] = FPLAPIError("down")
        response = client.post("/api/transfers/plan", json={})

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to generate transfer plan"}

    def test_plan_rejects_bad_horizon(self, client):
        response = client.post("/api/transfers/plan", json={"horizon": 20})

        assert response.status_code == 400
        assert response.json() == {"error": "Missing or invalid request data"}

    def test_suggestions(self, client):
        response = client.post("/api/transfers/suggestions", json={"playerIds": [11], "bank": 30})
        suggestions = response.json()["suggestions"]

        assert len(suggestions) == 1
        first = suggestions[0]
        assert first["playerOut"] == {"id": 11, "name": "Mbeumo"}
        assert first["playerIn"] == {"id": 10, "name": "Saka"}
        assert first["expectedGain"] == pytest.approx(8.01)
        assert first["metrics"]["form"] == 100.0

    def test_suggestions_need_ids(self, client):
        response = client.post("/api/transfers/suggestions", json={"bank": 5})
        assert response.status_code == 400

    def test_suggestions_failure(self, client, fpl):
        fpl.fail["bootstrap"] = FPLAPIError("down")
        response = client.post("/api/transfers/suggestions", json={"playerIds": [11]})

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to generate transfer suggestions"}
