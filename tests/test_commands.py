"""Tests for command execution, confirmation and the command service."""

from __future__ import annotations

from datetime import date
from unittest.mock import MagicMock

import pytest
from postgrest.exceptions import APIError

from homestead_voice.commands.confirmation import (
    BUSINESS_PLAN_MESSAGE,
    compose_confirmation,
)
from homestead_voice.commands.errors import (
    RETRY_MESSAGE,
    EmptyTranscriptError,
    PersistenceError,
    RecognitionError,
    RecognitionUnavailableError,
    VoiceCommandError,
)
from homestead_voice.commands.executor import (
    CreatedRecord,
    SupabaseCommandExecutor,
    execute_command,
)
from homestead_voice.commands.service import CommandService
from homestead_voice.parsing.models import (
    BusinessPlanCommand,
    InventoryCommand,
    ItemType,
    ProjectCommand,
    ProjectContext,
    TaskCommand,
)

ORCHARD = ProjectContext(id="p1", title="Orchard")


def _client_returning(rows: list[dict]) -> MagicMock:
    client = MagicMock()
    client.table.return_value.insert.return_value.execute.return_value.data = rows
    return client


class TestSupabaseCommandExecutor:
    def test_create_task(self) -> None:
        client = _client_returning([{"id": 42, "title": "order seeds"}])
        executor = SupabaseCommandExecutor(client, user_id="u1")

        record = executor.create_task(TaskCommand(title="order seeds"))

        assert record == CreatedRecord(id="42", title="order seeds")
        client.table.assert_called_once_with("tasks")
        row = client.table.return_value.insert.call_args[0][0]
        assert row["created_by"] == "u1"
        assert row["status"] == "todo"

    def test_create_inventory_item(self) -> None:
        client = _client_returning(
            [{"id": "i1", "title": "shovels", "item_type": "needed_supply"}]
        )
        executor = SupabaseCommandExecutor(client, user_id="u1")

        record = executor.create_inventory_item(InventoryCommand(title="shovels", quantity=5))

        assert record.item_type == ItemType.NEEDED_SUPPLY
        client.table.assert_called_once_with("items")
        row = client.table.return_value.insert.call_args[0][0]
        assert row["added_by"] == "u1"
        assert row["quantity_needed"] == 5

    def test_create_project(self) -> None:
        client = _client_returning([{"id": "pr1", "title": "Backyard Garden"}])
        executor = SupabaseCommandExecutor(client)

        record = executor.create_project(ProjectCommand(title="Backyard Garden"))

        assert record.id == "pr1"
        client.table.assert_called_once_with("projects")

    def test_api_error_becomes_persistence_error(self) -> None:
        client = MagicMock()
        client.table.return_value.insert.return_value.execute.side_effect = APIError(
            {"message": "violates row-level security", "code": "42501", "hint": "", "details": ""}
        )
        executor = SupabaseCommandExecutor(client)

        with pytest.raises(PersistenceError) as exc_info:
            executor.create_task(TaskCommand(title="x"))
        assert exc_info.value.user_message == RETRY_MESSAGE

    def test_empty_result_is_an_error(self) -> None:
        executor = SupabaseCommandExecutor(_client_returning([]))

        with pytest.raises(PersistenceError):
            executor.create_project(ProjectCommand(title="x"))

    def test_open_business_plan_writes_nothing(self) -> None:
        client = MagicMock()
        SupabaseCommandExecutor(client).open_business_plan(
            BusinessPlanCommand(project_id="p1", query="plan")
        )
        client.table.assert_not_called()


class TestExecuteCommand:
    def test_dispatches_by_variant(self) -> None:
        executor = MagicMock()
        executor.create_inventory_item.return_value = CreatedRecord("i1", "rope")

        record = execute_command(InventoryCommand(title="rope"), executor)

        assert record == CreatedRecord("i1", "rope")
        executor.create_task.assert_not_called()

    def test_business_plan_returns_none(self) -> None:
        executor = MagicMock()
        command = BusinessPlanCommand(project_id="p1", query="business plan")

        assert execute_command(command, executor) is None
        executor.open_business_plan.assert_called_once_with(command)


class TestComposeConfirmation:
    def test_task_without_project(self) -> None:
        message = compose_confirmation(
            TaskCommand(title="order seeds"), CreatedRecord("t1", "order seeds")
        )
        assert message == (
            'I\'ve created a new task: "order seeds". You can view it in your tasks list.'
        )

    def test_task_in_project(self) -> None:
        message = compose_confirmation(
            TaskCommand(title="prune"), CreatedRecord("t1", "prune"), ORCHARD
        )
        assert message.endswith('This task has been added to your project "Orchard".')

    def test_inventory_uses_record_item_type(self) -> None:
        message = compose_confirmation(
            InventoryCommand(title="tiller"),
            CreatedRecord("i1", "tiller", ItemType.BORROWED_OR_RENTAL),
        )
        assert message == (
            'I\'ve added "tiller" to your inventory as a borrowed or rental item. '
            "You can view it in your inventory list."
        )

    def test_inventory_in_project(self) -> None:
        message = compose_confirmation(
            InventoryCommand(title="rope", item_type=ItemType.OWNED_RESOURCE),
            CreatedRecord("i1", "rope"),
            ORCHARD,
        )
        assert "as an owned resource" in message
        assert message.endswith('associated with your project "Orchard".')

    def test_project(self) -> None:
        message = compose_confirmation(
            ProjectCommand(title="Garden"), CreatedRecord("pr1", "Garden")
        )
        assert message.startswith('I\'ve created a new project called "Garden".')

    def test_business_plan(self) -> None:
        command = BusinessPlanCommand(project_id="p1", query="plan")
        assert compose_confirmation(command, None, ORCHARD) == BUSINESS_PLAN_MESSAGE


class TestCommandService:
    def _executor(self) -> MagicMock:
        executor = MagicMock()
        executor.create_task.return_value = CreatedRecord("t1", "order seeds")
        return executor

    def test_handle_parses_executes_and_confirms(self) -> None:
        executor = self._executor()
        service = CommandService(executor, clock=lambda: date(2024, 1, 1))

        outcome = service.handle("remind me to order seeds by next Friday")

        sent = executor.create_task.call_args[0][0]
        assert sent.due_date == date(2024, 1, 5)
        assert outcome.record == CreatedRecord("t1", "order seeds")
        assert "order seeds" in outcome.message
        assert outcome.audio is None

    def test_speaks_confirmation(self) -> None:
        synthesizer = MagicMock(return_value=b"mp3")
        service = CommandService(self._executor(), synthesizer=synthesizer, voice="echo")

        outcome = service.handle("remind me to order seeds", speak=True)

        assert outcome.audio == b"mp3"
        synthesizer.assert_called_once_with(outcome.message, "echo")

    def test_synthesis_failure_keeps_outcome(self) -> None:
        synthesizer = MagicMock(side_effect=RuntimeError("tts down"))
        service = CommandService(self._executor(), synthesizer=synthesizer)

        outcome = service.handle("remind me to order seeds", speak=True)

        assert outcome.audio is None
        assert outcome.record is not None

    def test_no_speech_without_synthesizer(self) -> None:
        outcome = CommandService(self._executor()).handle("remind me to order seeds", speak=True)
        assert outcome.audio is None

    @pytest.mark.parametrize("transcript", ["", "   "])
    def test_empty_transcript(self, transcript: str) -> None:
        executor = self._executor()
        with pytest.raises(EmptyTranscriptError):
            CommandService(executor).handle(transcript)
        executor.create_task.assert_not_called()

    def test_persistence_error_propagates(self) -> None:
        executor = self._executor()
        executor.create_task.side_effect = PersistenceError("insert failed")

        with pytest.raises(PersistenceError):
            CommandService(executor).handle("remind me to order seeds")


class TestErrorTaxonomy:
    def test_generic_retry_message(self) -> None:
        assert PersistenceError("insert failed").user_message == RETRY_MESSAGE
        assert EmptyTranscriptError().user_message == RETRY_MESSAGE

    def test_recognition_errors_have_specific_messages(self) -> None:
        assert "not supported" in RecognitionUnavailableError().user_message
        assert RecognitionError("network").user_message.startswith("Error with speech recognition")

    def test_all_share_a_base(self) -> None:
        for error in (RecognitionUnavailableError, RecognitionError, PersistenceError):
            assert issubclass(error, VoiceCommandError)
