from __future__ import annotations

import pytest

from alog_relay.domain import rules
from alog_relay.domain.colors import LineColor
from tests.os_markers import OS_AGNOSTIC

pytestmark = [OS_AGNOSTIC]


@pytest.mark.parametrize(
    "message",
    [
        "14:03:05.123 [INFO] hello",
        "1:2:3 short fields",
        "2:15:09 PM afternoon",
        "11:59:59 am lower-case meridiem",
        "2:15:09 PM (60 FPS) frame stamped",
        "[INFO] stamped late 10:11:12",
    ],
)
def test_timestamp_is_found_anywhere_in_the_line(message: str) -> None:
    assert rules.has_timestamp(message)


@pytest.mark.parametrize(
    "message",
    [
        "   at Foo.Bar() in Foo.cs",
        "ratio 3:4 only two fields",
        "",
    ],
)
def test_lines_without_time_of_day_have_no_timestamp(message: str) -> None:
    assert not rules.has_timestamp(message)


@pytest.mark.parametrize(
    "message, expected",
    [
        ("14:03:05.123 [INFO] hello", "[INFO] hello"),
        ("2:15:09 PM (60 FPS) ready", "ready"),
        ("10:00:00.000 [INFO] at 11:22:33 done", "[INFO] at done"),
        ("no timestamp here", "no timestamp here"),
    ],
)
def test_strip_timestamps_removes_every_token_and_trailing_whitespace(message: str, expected: str) -> None:
    assert rules.strip_timestamps(message) == expected


@pytest.mark.parametrize(
    "message",
    [
        "Session updated, forcing status update",
        "[DEBUG][ResoniteModLoader] Intercepting call to AppDomain.GetAssemblies()",
        "Rebuild: slot hierarchy",
        "[DEBUG] FeatureFlag lookup",
    ],
)
def test_noise_patterns_mark_lines_invalid(message: str) -> None:
    assert not rules.is_valid(message)


def test_ordinary_lines_are_valid() -> None:
    assert rules.is_valid("[INFO] world loaded")


@pytest.mark.parametrize(
    "message, expected",
    [
        ("[ERROR] boom", LineColor.RED),
        ("[FATAL] out of memory", LineColor.RED),
        ("NullReferenceException: Object reference not set", LineColor.RED),
        ("Exception in RunningCoroutine", LineColor.RED),
        ("Failed Load: Could not gather asset", LineColor.RED),
        ("at <0123456789abcdef0123456789abcdef>:0", LineColor.RED),
        ("Restoring currently updating root", LineColor.DARK_RED),
        ("[INFO] world loaded", LineColor.GREEN),
        ("[MESSAGE] hello from the host", LineColor.DARK_GREEN),
        ("[DEBUG] tick", LineColor.BLUE),
        ("[TRACE] tick", LineColor.BLUE),
        ("Resonite (Unity) Game Pack v2024", LineColor.BLUE),
        ("[WARN] cache is cold", LineColor.YELLOW),
        ("[WARNING] cache is cold", LineColor.YELLOW),
        ("Updated: https://example.invalid/record", LineColor.YELLOW),
        ("LastModifyingUser changed", LineColor.YELLOW),
        ("Unresolved reference", LineColor.YELLOW),
        ("User Joined bob", LineColor.DARK_YELLOW),
        ("Spawning User alice", LineColor.DARK_YELLOW),
        ("User bob Role: Admin", LineColor.DARK_YELLOW),
        ("SignalR connection established", LineColor.DARK_MAGENTA),
        ("Status initialized", LineColor.DARK_MAGENTA),
        ("Updated: 5 contacts", LineColor.DARK_MAGENTA),
        ("SendStatusToUser: bob", LineColor.MAGENTA),
        ("Running refresh on: World", LineColor.CYAN),
        ("Loading object from record abc", LineColor.DARK_CYAN),
        ("Source record resolved", LineColor.DARK_CYAN),
        ("nothing special", LineColor.GRAY),
    ],
)
def test_classify_assigns_colour_per_rule(message: str, expected: LineColor) -> None:
    assert rules.classify(message) is expected


@pytest.mark.parametrize(
    "message, expected",
    [
        ("[INFO] exception while saving", LineColor.RED),
        ("[WARN] user joined bob", LineColor.YELLOW),
        ("[DEBUG] loading from uri", LineColor.BLUE),
    ],
)
def test_first_matching_rule_wins(message: str, expected: LineColor) -> None:
    assert rules.classify(message) is expected


def test_tables_are_immutable_tuples() -> None:
    assert isinstance(rules.CLASSIFICATION_RULES, tuple)
    assert isinstance(rules.INVALID_RULES, tuple)
