"""Tests for the command-line interface."""

from unittest.mock import MagicMock, patch

import pytest

from tiation_sdk import main as cli
from tiation_sdk.config.settings import Settings
from tiation_sdk.exceptions import NotFoundError
from tiation_sdk.models import AnalyticsEvent, Page, Workflow, WorkflowRun


@pytest.fixture
def mock_settings():
    with patch("tiation_sdk.main.Settings.from_env") as from_env:
        from_env.return_value = Settings(api_key="cli-key-9876", base_url="https://api.example.test/v1")
        yield from_env


@pytest.fixture
def mock_client(mock_settings):
    with patch("tiation_sdk.main.TiationClient") as client_class:
        instance = MagicMock()
        client_class.return_value.__enter__.return_value = instance
        yield instance


def test_no_command_prints_help(capsys):
    assert cli.main([]) == 0
    assert "usage" in capsys.readouterr().out.lower()


def test_config_show_masks_key(mock_settings, capsys):
    assert cli.main(["config", "show"]) == 0

    out = capsys.readouterr().out
    assert "9876" in out
    assert "cli-key" not in out


def test_config_test_reports_invalid(mock_settings, capsys):
    mock_settings.return_value = Settings()

    assert cli.main(["config", "test"]) == 1
    assert "TIATION_API_KEY" in capsys.readouterr().out


def test_track_parses_properties(mock_client, capsys):
    mock_client.analytics.track.return_value = AnalyticsEvent(name="signup", event_id="evt_1")

    assert cli.main(["track", "signup", "-p", "plan=pro", "-p", "seats=3", "--user-id", "u_1"]) == 0

    mock_client.analytics.track.assert_called_once_with("signup", {"plan": "pro", "seats": "3"}, user_id="u_1")
    assert "evt_1" in capsys.readouterr().out


def test_track_bad_property_fails(mock_client, capsys):
    assert cli.main(["track", "signup", "-p", "oops"]) == 1
    assert "key=value" in capsys.readouterr().out


def test_workflows_list(mock_client, capsys):
    mock_client.automation.list_workflows.return_value = Page(
        items=[Workflow(id="wf_1", name="Welcome", steps=[{"type": "email"}])], total=1
    )

    assert cli.main(["workflows", "list"]) == 0
    assert "wf_1  Welcome (enabled, 1 steps)" in capsys.readouterr().out


def test_workflows_trigger_with_wait(mock_client, capsys):
    mock_client.automation.trigger_workflow.return_value = WorkflowRun(id="run_1", workflow_id="wf_1")
    mock_client.automation.wait_for_run.return_value = WorkflowRun(
        id="run_1", workflow_id="wf_1", status="failed", error="step 2 timed out"
    )

    assert cli.main(["workflows", "trigger", "wf_1", "-d", '{"order": 1}', "--wait"]) == 1

    mock_client.automation.trigger_workflow.assert_called_once_with("wf_1", {"order": 1})
    assert "step 2 timed out" in capsys.readouterr().out


def test_api_errors_exit_with_one(mock_client, capsys):
    mock_client.cms.list_content.side_effect = NotFoundError("no such type", status_code=404)

    assert cli.main(["content", "list", "--type", "recipe"]) == 1
    assert "no such type" in capsys.readouterr().out
