"""Tests for the command line entry point."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

import bonjour_github


def test_invalid_input_exits_with_one(capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        bonjour_github.main(['git@gitlab:example/app.git'])

    assert excinfo.value.code == 1
    assert 'destination_name' in capsys.readouterr().err


@patch('bonjour_github.MigrationOrchestrator')
def test_exit_code_comes_from_orchestrator(mock_orchestrator: MagicMock) -> None:
    mock_orchestrator.return_value.run.return_value = 0

    with pytest.raises(SystemExit) as excinfo:
        bonjour_github.main(['git@gitlab:example/app.git', 'app', '--topics', 'foo'])

    assert excinfo.value.code == 0
    (cfg,), _kwargs = mock_orchestrator.call_args
    assert cfg.requests[0].topics == ('foo',)
