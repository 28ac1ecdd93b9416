"""Tests for bot configuration helpers."""

import discord

from birthdaybot.config import BotConfig


def test_status_defaults_to_online(monkeypatch):
    monkeypatch.setattr(BotConfig, "STATUS", "")
    assert BotConfig.get_status() is discord.Status.online

    monkeypatch.setattr(BotConfig, "STATUS", "DND")
    assert BotConfig.get_status() is discord.Status.dnd


def test_activity_requires_name(monkeypatch):
    monkeypatch.setattr(BotConfig, "ACTIVITY_NAME", "")
    assert BotConfig.get_activity() is None


def test_activity_type_mapping(monkeypatch):
    monkeypatch.setattr(BotConfig, "ACTIVITY_NAME", "birthdays")
    monkeypatch.setattr(BotConfig, "ACTIVITY_TYPE", "watching")
    activity = BotConfig.get_activity()
    assert activity.type is discord.ActivityType.watching
    assert activity.name == "birthdays"

    monkeypatch.setattr(BotConfig, "ACTIVITY_TYPE", "unknown")
    assert BotConfig.get_activity().type is discord.ActivityType.playing
