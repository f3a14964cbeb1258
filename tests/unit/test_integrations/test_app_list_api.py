"""Tests for the public app listing client."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
import requests

from catalogdb.core.db import AppListItem
from catalogdb.integrations import AppListAPI


def _response(payload: dict, status_code: int = 200) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload
    response.raise_for_status = MagicMock()
    return response


class TestAppListAPIInit:
    """Tests for AppListAPI initialization."""

    def test_empty_api_key_raises_value_error(self) -> None:
        with pytest.raises(ValueError, match="must not be empty"):
            AppListAPI("")

    def test_whitespace_api_key_raises_value_error(self) -> None:
        with pytest.raises(ValueError, match="must not be empty"):
            AppListAPI("   ")

    def test_valid_api_key_accepted(self) -> None:
        """Valid API key is accepted and stripped."""
        api = AppListAPI("  my_key  ")
        assert api.api_key == "my_key"


class TestGetAppList:
    """Tests for paging through the listing."""

    @patch("catalogdb.integrations.app_list_api.requests.get")
    def test_single_page(self, mock_get: MagicMock) -> None:
        mock_get.return_value = _response(
            {"response": {"apps": [{"appid": 10, "name": "Counter-Strike"}, {"appid": 20, "name": "TFC"}]}}
        )

        apps = AppListAPI("test_key").get_app_list()

        assert apps == [AppListItem(10, "Counter-Strike"), AppListItem(20, "TFC")]
        assert mock_get.call_count == 1
        params = mock_get.call_args.kwargs["params"]
        assert params["key"] == "test_key"
        assert "last_appid" not in params

    @patch("catalogdb.integrations.app_list_api.requests.get")
    def test_follows_last_appid(self, mock_get: MagicMock) -> None:
        """have_more_results triggers a follow-up request from last_appid."""
        mock_get.side_effect = [
            _response({"response": {"apps": [{"appid": 10, "name": "A"}], "have_more_results": True, "last_appid": 10}}),
            _response({"response": {"apps": [{"appid": 20, "name": "B"}]}}),
        ]

        apps = AppListAPI("test_key").get_app_list()

        assert [app.app_id for app in apps] == [10, 20]
        assert mock_get.call_args_list[1].kwargs["params"]["last_appid"] == 10

    @patch("catalogdb.integrations.app_list_api.requests.get")
    def test_stops_when_paging_does_not_advance(self, mock_get: MagicMock) -> None:
        page = _response({"response": {"apps": [{"appid": 10, "name": "A"}], "have_more_results": True, "last_appid": 10}})
        mock_get.side_effect = [page, page]

        apps = AppListAPI("test_key").get_app_list()

        assert mock_get.call_count == 2
        assert len(apps) == 2

    @patch("catalogdb.integrations.app_list_api.requests.get")
    def test_malformed_records_dropped(self, mock_get: MagicMock) -> None:
        mock_get.return_value = _response(
            {"response": {"apps": [{"name": "No id"}, {"appid": 0, "name": "Zero"}, {"appid": 5, "name": "Five"}]}}
        )

        assert AppListAPI("test_key").get_app_list() == [AppListItem(5, "Five")]

    @patch("catalogdb.integrations.app_list_api.requests.get")
    def test_empty_response(self, mock_get: MagicMock) -> None:
        mock_get.return_value = _response({})
        assert AppListAPI("test_key").get_app_list() == []

    @patch("catalogdb.integrations.app_list_api.requests.get")
    def test_dlc_and_software_switches(self, mock_get: MagicMock) -> None:
        mock_get.return_value = _response({"response": {"apps": []}})

        AppListAPI("test_key", include_dlc=False, include_software=False).get_app_list()

        params = mock_get.call_args.kwargs["params"]
        assert params["include_dlc"] == "false"
        assert params["include_software"] == "false"
        assert params["include_games"] == "true"


class TestRateLimiting:
    """Tests for 429 handling."""

    @patch("catalogdb.integrations.app_list_api.time.sleep")
    @patch("catalogdb.integrations.app_list_api.requests.get")
    def test_retries_after_429(self, mock_get: MagicMock, mock_sleep: MagicMock) -> None:
        mock_get.side_effect = [
            _response({}, status_code=429),
            _response({"response": {"apps": [{"appid": 1, "name": "One"}]}}),
        ]

        apps = AppListAPI("test_key").get_app_list()

        assert apps == [AppListItem(1, "One")]
        mock_sleep.assert_called_once_with(1.0)

    @patch("catalogdb.integrations.app_list_api.time.sleep")
    @patch("catalogdb.integrations.app_list_api.requests.get")
    def test_exhausted_retries_raise(self, mock_get: MagicMock, mock_sleep: MagicMock) -> None:
        mock_get.return_value = _response({}, status_code=429)

        with pytest.raises(requests.HTTPError):
            AppListAPI("test_key").get_app_list()

        assert mock_get.call_count == 3
        assert [c.args[0] for c in mock_sleep.call_args_list] == [1.0, 2.0, 4.0]

    @patch("catalogdb.integrations.app_list_api.requests.get")
    def test_http_error_propagates(self, mock_get: MagicMock) -> None:
        response = _response({}, status_code=500)
        response.raise_for_status.side_effect = requests.HTTPError("500 Server Error")
        mock_get.return_value = response

        with pytest.raises(requests.HTTPError):
            AppListAPI("test_key").get_app_list()


class TestFetchIntoDatabase:
    """The client plugs into Database.fetch_integrate_app_list."""

    @patch("catalogdb.integrations.app_list_api.requests.get")
    def test_fetch_integrate(self, mock_get: MagicMock, populated_database) -> None:
        mock_get.return_value = _response(
            {"response": {"apps": [{"appid": 440, "name": "Team Fortress 2"}, {"appid": 730, "name": "CS2"}]}}
        )

        stats = populated_database.fetch_integrate_app_list(AppListAPI("test_key"))

        assert stats.games_imported == 1
        assert populated_database.get_name(730) == "CS2"
