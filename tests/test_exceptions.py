"""Tests for custom exceptions."""

from depexclude.exceptions import ConfigError, DepExcludeError, EntryAccessError, ExclusionApplyError, WalkError


class TestConfigError:
    """Test ConfigError exception."""

    def test_message_only(self):
        error = ConfigError("Cannot read configuration file")

        assert str(error) == "Cannot read configuration file"
        assert error.path is None
        assert error.line_number is None

    def test_with_path(self):
        error = ConfigError("Configuration path is not a directory", path="/cfg")

        assert str(error) == "Configuration path is not a directory (/cfg)"

    def test_with_path_and_line(self):
        error = ConfigError("Malformed sentinel rule", path="/cfg/sentinels", line_number=7)

        assert error.path == "/cfg/sentinels"
        assert error.line_number == 7
        assert str(error).endswith("(/cfg/sentinels:7)")


class TestWalkError:
    """Test WalkError exception."""

    def test_names_root(self):
        error = WalkError("/no/such/home", "Root path does not exist")

        assert error.root == "/no/such/home"
        assert str(error) == "Root path does not exist: /no/such/home"


class TestEntryAccessError:
    """Test EntryAccessError exception."""

    def test_without_cause(self):
        error = EntryAccessError("/home/u/private")

        assert error.path == "/home/u/private"
        assert error.cause is None
        assert str(error) == "Cannot read directory /home/u/private"

    def test_with_cause(self):
        cause = PermissionError(13, "Permission denied")
        error = EntryAccessError("/home/u/private", cause)

        assert error.cause is cause
        assert "Permission denied" in str(error)


class TestExclusionApplyError:
    """Test ExclusionApplyError exception."""

    def test_attributes(self):
        error = ExclusionApplyError("/home/u/app/node_modules", "tmutil not found")

        assert error.path == "/home/u/app/node_modules"
        assert error.reason == "tmutil not found"
        assert str(error) == "Failed to exclude /home/u/app/node_modules: tmutil not found"


def test_all_errors_share_a_base_class():
    """Test that every error can be caught as DepExcludeError."""
    errors = [
        ConfigError("x"),
        WalkError("/", "x"),
        EntryAccessError("/"),
        ExclusionApplyError("/", "x"),
    ]
    for error in errors:
        assert isinstance(error, DepExcludeError)
        assert isinstance(error, Exception)
