"""Tests for debuggable.errors - the Debuggable exception mixin."""

import pytest

from debuggable.errors import (
    Debuggable, HelpFormat, bulleted_list, make_stack_trace,
)
from debuggable.source_location import SourceLocation


class StorageError(Debuggable, Exception):
    possible_causes = ["empty cause"]
    suggested_fixes = ["empty suggested"]
    documentation_links = ["https://doc.github.com"]
    stack_overflow_questions = ["https://stackoverflow.com"]
    github_issues = ["xxxx"]

    def __init__(self, identifier="empty", reason="empty failure"):
        self.identifier = identifier
        self.reason = reason
        self.capture_stack_trace()
        super().__init__(reason)


class ShortError(Debuggable, Exception):
    identifier = "empty"
    reason = "empty short failure"

    def __init__(self):
        self.source_location = SourceLocation.capture(depth=1)
        super().__init__(self.reason)


class PlainError(Debuggable, Exception):
    """Error that sets only what it must."""

    def __init__(self, identifier, reason, causes=(), fixes=()):
        self.identifier = identifier
        self.reason = reason
        self.possible_causes = list(causes)
        self.suggested_fixes = list(fixes)
        super().__init__(reason)


class TestTypeNames:

    def test_readable_name(self):
        assert StorageError.readable_name() == "StorageError"

    def test_type_identifier(self):
        assert StorageError.type_identifier() == "StorageError"

    def test_type_identifier_nested_class(self):
        class Inner(Debuggable, Exception):
            pass
        assert Inner.type_identifier() == "Inner"

    def test_overridden_readable_name(self):
        class Named(Debuggable, Exception):
            @classmethod
            def readable_name(cls):
                return "Storage failure"
        assert Named.readable_name() == "Storage failure"
        assert Named.type_identifier() == "Named"

    def test_full_identifier(self):
        assert StorageError().full_identifier == "StorageError.empty"


class TestAttributes:

    def test_identifier_and_reason(self):
        err = StorageError()
        assert err.identifier == "empty"
        assert err.reason == "empty failure"

    def test_described_lists(self):
        err = StorageError()
        assert err.possible_causes == ["empty cause"]
        assert err.suggested_fixes == ["empty suggested"]
        assert err.documentation_links == ["https://doc.github.com"]
        assert err.stack_overflow_questions == ["https://stackoverflow.com"]
        assert err.github_issues == ["xxxx"]

    def test_defaults_are_empty(self):
        err = ShortError()
        assert err.possible_causes == ()
        assert err.suggested_fixes == ()
        assert err.documentation_links == ()
        assert err.stack_overflow_questions == ()
        assert err.github_issues == ()

    def test_defaults_not_shared_between_types(self):
        class First(Debuggable, Exception):
            pass

        class Second(Debuggable, Exception):
            pass

        with pytest.raises(AttributeError):
            First().possible_causes.append("leaked")
        first = First()
        first.possible_causes = ["only first"]
        assert Second().possible_causes == ()
        assert First().possible_causes == ()

    def test_source_location_default_none(self):
        assert StorageError().source_location is None

    def test_failure_reason(self):
        assert StorageError().failure_reason == "empty failure"

    def test_recovery_suggestion(self):
        assert StorageError().recovery_suggestion == "empty suggested"
        assert ShortError().recovery_suggestion is None

    def test_help_anchor(self):
        assert StorageError().help_anchor == "https://doc.github.com"
        assert ShortError().help_anchor is None


class TestStackTrace:

    def test_captured_at_init(self):
        trace = StorageError().stack_trace
        assert trace
        assert any("test_captured_at_init" in frame for frame in trace)

    def test_raised_error_uses_traceback(self):
        with pytest.raises(ShortError) as info:
            raise ShortError()
        trace = info.value.stack_trace
        assert trace
        assert any("raise ShortError()" in frame for frame in trace)

    def test_never_none(self):
        assert ShortError().stack_trace is not None

    def test_make_stack_trace(self):
        frames = make_stack_trace()
        assert frames
        assert "test_make_stack_trace" in frames[-1]


class TestShortDescription:

    def test_description(self):
        err = PlainError("mock", "mock failure",
                         causes=["authentication failure"],
                         fixes=["mock suggested"])
        expected = ("⚠️ [PlainError.mock: mock failure] "
                    "[Possible causes: authentication failure] "
                    "[Suggested fixes: mock suggested]")
        assert err.description == expected
        assert str(err) == expected

    def test_description_without_lists(self):
        err = PlainError("mock", "mock failure")
        assert str(err) == "⚠️ [PlainError.mock: mock failure]"

    def test_description_with_source_location(self):
        err = ShortError()
        assert "⚠️ [ShortError.empty: empty short failure] [" in err.description
        assert "test_errors.py:" in err.description

    def test_short_format_explicit(self):
        err = PlainError("a", "b")
        assert err.debuggable_help(HelpFormat.SHORT) == err.description


class TestLongDescription:

    def test_header(self):
        text = StorageError().debug_description
        assert "⚠️ StorageError: empty failure" in text
        assert "- id: StorageError.empty" in text

    def test_sections(self):
        text = StorageError().debug_description
        assert "Here are some possible causes: \n- empty cause" in text
        assert "These suggestions could address the issue: \n- empty suggested" in text
        assert "The documentation talks about this: \n- https://doc.github.com" in text
        assert ("These Stack Overflow links might be helpful: "
                "\n- https://stackoverflow.com") in text
        assert ("See these Github issues for discussion on this topic: "
                "\n- xxxx") in text
        assert text.endswith("\n")

    def test_empty_sections_omitted(self):
        text = PlainError("x", "y").debug_description
        assert "possible causes" not in text
        assert "Github issues" not in text

    def test_with_source_location(self):
        text = ShortError().debug_description
        assert "⚠️ ShortError: empty short failure" in text
        assert "File: " in text
        assert " - func: test_with_source_location" in text


def test_bulleted_list():
    assert bulleted_list(["a", "b"]) == "\n- a\n- b"
    assert bulleted_list([]) == ""
