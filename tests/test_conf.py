"""Tests der Einstellungen über Umgebungsvariablen."""

import pytest

from zugferd_de.conf import DEFAULTS, get_setting


class TestGetSetting:
    """Tests von get_setting()."""

    def test_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("ZUGFERD_DE_PAYMENT_DUE_DAYS", raising=False)
        assert get_setting("PAYMENT_DUE_DAYS") == 14
        assert get_setting("SELLER_NAME") == "Ihr Unternehmen"

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ZUGFERD_DE_S3_BUCKET_NAME", "rechnungen")
        assert get_setting("S3_BUCKET_NAME") == "rechnungen"

    def test_numeric_coercion(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ZUGFERD_DE_PAYMENT_DUE_DAYS", "30")
        monkeypatch.setenv("ZUGFERD_DE_LOGO_TIMEOUT", "2.5")
        assert get_setting("PAYMENT_DUE_DAYS") == 30
        assert get_setting("LOGO_TIMEOUT") == 2.5

    def test_invalid_number_keeps_default(
        self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        monkeypatch.setenv("ZUGFERD_DE_PAYMENT_DUE_DAYS", "vierzehn")
        assert get_setting("PAYMENT_DUE_DAYS") == DEFAULTS["PAYMENT_DUE_DAYS"]
        assert "PAYMENT_DUE_DAYS" in caplog.text

    def test_empty_value_means_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ZUGFERD_DE_S3_REGION", "")
        assert get_setting("S3_REGION") == "auto"

    def test_unknown_setting(self) -> None:
        with pytest.raises(KeyError, match="GIBT_ES_NICHT"):
            get_setting("GIBT_ES_NICHT")
