"""Unit tests for `/port` comment parsing."""

import pytest

from portbot.backport import find_port_command, parse_targets, select_targets


@pytest.mark.unit
class TestParseTargets:
    """Tests for parse_targets."""

    def test_parses_targets_in_order(self) -> None:
        """Targets are returned in the order they were named."""
        assert parse_targets("please /port main,release-2.0") == ["main", "release-2.0"]

    def test_single_target(self) -> None:
        assert parse_targets("/port release-1.0") == ["release-1.0"]

    def test_without_command_yields_no_targets(self) -> None:
        """A comment without `/port` is never parsed as a target list."""
        assert find_port_command("backport this to main,release-2.0") is None
        assert parse_targets("backport this to main,release-2.0") == []

    def test_none_body_yields_no_targets(self) -> None:
        assert parse_targets(None) == []

    def test_command_with_nothing_after_it(self) -> None:
        """`/port` without arguments is distinct from a missing command."""
        assert find_port_command("/port") == ""
        assert parse_targets("/port") == [""]

    def test_whitespace_is_preserved(self) -> None:
        assert parse_targets("/port main, release-2.0 ") == ["main", " release-2.0 "]

    def test_trailing_comma_yields_empty_name(self) -> None:
        assert parse_targets("/port main,") == ["main", ""]

    def test_only_first_command_is_used(self) -> None:
        assert parse_targets("/port a,b /port c") == ["a", "b /port c"]

    def test_one_character_after_command_is_skipped(self) -> None:
        assert parse_targets("/port\nmain") == ["main"]

    def test_duplicates_are_kept_by_parser(self) -> None:
        assert parse_targets("/port main,main") == ["main", "main"]


@pytest.mark.unit
class TestSelectTargets:
    """Tests for select_targets."""

    def test_drops_empty_names(self) -> None:
        assert select_targets(["main", "", "  "]) == ["main"]

    def test_drops_repeated_names_keeping_first(self) -> None:
        assert select_targets(["b", "a", "b"]) == ["b", "a"]

    def test_keeps_names_as_written(self) -> None:
        assert select_targets([" main"]) == [" main"]

    def test_empty(self) -> None:
        assert select_targets([]) == []
