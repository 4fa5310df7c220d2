import logging
from pathlib import Path

import pytest

from tweetthread.config import Settings, SettingsStore
from tweetthread.constants import COMMAND_ID, EMPTY_NOTICE, SUCCESS_NOTICE
from tweetthread.errors import ErrorCode, TweetThreadError
from tweetthread.host import ActiveDocument
from tweetthread.workflow import create_thread, register_commands

from fakes import FakeHost

LOGGER = logging.getLogger("test.workflow")


def test_create_thread_writes_cleaned_chunks():
    host = FakeHost(ActiveDocument(name="Note", text="# Title\n**Hi** there. Bye now."))

    result = create_thread(host, 10, LOGGER)

    assert result.chunks == ["Title Hi", "there.", "Bye now."]
    assert result.path.startswith("TwitterThreads/Twitter Thread ")
    assert result.path.endswith(" for Note.md")
    assert host.files[result.path].startswith("**Chunk 1 of 3: 8 characters**\nTitle Hi")
    assert host.notices == [SUCCESS_NOTICE]
    assert result.to_dict()["chunk_lengths"] == [8, 6, 8]


def test_create_thread_uses_selection():
    host = FakeHost(ActiveDocument(name="Note", text="whole note text", selection="only this"))
    result = create_thread(host, 250, LOGGER)
    assert result.chunks == ["only this"]


def test_create_thread_empty_note_writes_nothing():
    host = FakeHost(ActiveDocument(name="Note", text="---\na: 1\n---\n   "))

    result = create_thread(host, 250, LOGGER)

    assert result.path is None
    assert result.chunks == []
    assert host.files == {}
    assert host.notices == [EMPTY_NOTICE]


def test_create_thread_without_document():
    with pytest.raises(TweetThreadError) as exc_info:
        create_thread(FakeHost(), 250, LOGGER)
    assert exc_info.value.code == ErrorCode.SOURCE_NOT_FOUND


def test_registered_command_uses_stored_settings(tmp_path: Path):
    store = SettingsStore(tmp_path / "settings.json")
    store.save(Settings(max_tweet_length=10))
    host = FakeHost(ActiveDocument(name="Note", text="Hi there. Bye now."))

    results = register_commands(host, store, LOGGER)
    name, callback = host.commands[COMMAND_ID]

    assert name == "Convert note to Twitter thread"
    assert callback(True) is True
    assert host.files == {}

    assert callback(False) is True
    assert results[-1].chunks == ["Hi there.", "Bye now."]
    assert results[-1].max_length == 10


def test_registered_command_override(tmp_path: Path):
    host = FakeHost(ActiveDocument(name="Note", text="Hi there. Bye now."))
    results = register_commands(host, SettingsStore(tmp_path / "settings.json"), LOGGER, max_length=250)

    host.commands[COMMAND_ID][1](False)
    assert results[-1].chunks == ["Hi there. Bye now."]


def test_registered_command_unavailable_without_document(tmp_path: Path):
    host = FakeHost()
    register_commands(host, SettingsStore(tmp_path / "settings.json"), LOGGER)
    assert host.commands[COMMAND_ID][1](True) is False
