import pytest

from crud.identifiers import quote_identifier, validate_identifier
from errors import InvalidIdentifierError


class TestValidateIdentifier:
    """Test table name validation."""

    @pytest.mark.parametrize("name", ["TEST_TABLE", "t", "_tmp", "orders_2024", "a$b", "x" * 64])
    def test_valid_names(self, name):
        assert validate_identifier(name) == name

    @pytest.mark.parametrize("name", [
        "",
        "1table",
        "t; DROP DATABASE database",
        "t`",
        "db.table",
        "my table",
        "x" * 65,
        None,
        42,
    ])
    def test_invalid_names(self, name):
        with pytest.raises(InvalidIdentifierError):
            validate_identifier(name)

    def test_invalid_name_is_value_error(self):
        with pytest.raises(ValueError, match="Invalid table name"):
            validate_identifier("bad name")


def test_quote_identifier():
    assert quote_identifier("TEST_TABLE") == "`TEST_TABLE`"


def test_invalid_identifier_error_attributes():
    with pytest.raises(InvalidIdentifierError) as exc_info:
        validate_identifier("bad name")

    assert exc_info.value.identifier == "bad name"
    assert exc_info.value.message == "Invalid table name: 'bad name'"
    assert str(exc_info.value) == exc_info.value.message
