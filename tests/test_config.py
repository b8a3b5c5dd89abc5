import pytest
from pydantic import ValidationError

from jsonschema_deref import DerefSettings, JsonRef, SiblingPolicy


class TestDerefSettings:
    def test_defaults(self, monkeypatch):
        for name in ("REFERENCE_KEY", "SIBLING_POLICY", "HTTP_TIMEOUT"):
            monkeypatch.delenv(f"JSONSCHEMA_DEREF_{name}", raising=False)

        settings = DerefSettings()
        assert settings.reference_key is None
        assert settings.sibling_policy == SiblingPolicy.DISCARD
        assert settings.http_timeout == 10.0

    def test_read_from_environment(self, monkeypatch):
        monkeypatch.setenv("JSONSCHEMA_DEREF_REFERENCE_KEY", "__reference__")
        monkeypatch.setenv("JSONSCHEMA_DEREF_SIBLING_POLICY", "merge")
        monkeypatch.setenv("JSONSCHEMA_DEREF_HTTP_TIMEOUT", "2.5")

        settings = DerefSettings()
        assert settings.reference_key == "__reference__"
        assert settings.sibling_policy == SiblingPolicy.MERGE
        assert settings.http_timeout == 2.5

    def test_environment_applies_to_resolver(self, monkeypatch):
        monkeypatch.setenv("JSONSCHEMA_DEREF_REFERENCE_KEY", "__ref__")
        result = JsonRef().deref_value({"a": {"v": 1}, "b": {"$ref": "#/a"}})
        assert result["b"] == {"v": 1, "__ref__": {}}

    @pytest.mark.parametrize("field,value", [("sibling_policy", "preserve"), ("http_timeout", 0)])
    def test_invalid_values_rejected(self, field, value):
        with pytest.raises(ValidationError):
            DerefSettings(**{field: value})
