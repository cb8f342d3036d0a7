import json
import pytest
from unittest.mock import patch, MagicMock


SAMPLE_CONFIG = {
    "api_url": "https://api.example.test/v2/interactions",
    "tech": "n",
}


@pytest.fixture
def config_file(tmp_path):
    p = tmp_path / "config.json"
    p.write_text(json.dumps(SAMPLE_CONFIG))
    return str(p)


class TestSimulateMode:
    def test_simulate_registers_once(self, config_file):
        from scanner import run
        with patch("scanner.interaction_was_received") as mock_interaction:
            run(config_path=config_file, simulate="https://mtag.io/njaix4")
        assert mock_interaction.call_count == 1
        url, _, config = mock_interaction.call_args[0]
        assert url == "https://mtag.io/njaix4"
        assert config.api_url == "https://api.example.test/v2/interactions"

    def test_simulate_reports_failure_on_delegate(self, config_file):
        from scanner import run
        with patch("urllib.request.urlopen") as mock_open:
            delegate = run(config_path=config_file, simulate="https://bb.io/p/1/foobar?bar=1")
        mock_open.assert_not_called()
        assert delegate.error.startswith("Unknown URL structure")


class TestLoopMode:
    def test_loop_registers_on_tag_read(self, config_file):
        from scanner import run
        mock_nfc = MagicMock()
        mock_nfc.read_tag.side_effect = ["https://mtag.io/njaix4", KeyboardInterrupt]
        with patch("scanner.MockNFC", return_value=mock_nfc), \
             patch("scanner.interaction_was_received") as mock_interaction:
            run(config_path=config_file)
        assert mock_interaction.call_count == 1

    def test_loop_skips_empty_reads(self, config_file):
        from scanner import run
        mock_nfc = MagicMock()
        mock_nfc.read_tag.side_effect = ["", "https://mtag.io/njaix4", EOFError]
        with patch("scanner.MockNFC", return_value=mock_nfc), \
             patch("scanner.interaction_was_received") as mock_interaction:
            run(config_path=config_file)
        assert mock_interaction.call_count == 1

    def test_loop_continues_after_error(self, config_file):
        from scanner import run
        mock_nfc = MagicMock()
        mock_nfc.read_tag.side_effect = [
            "https://mtag.io/njaix4",
            "https://mtag.io/njaix4",
            KeyboardInterrupt,
        ]
        with patch("scanner.MockNFC", return_value=mock_nfc), \
             patch("scanner.interaction_was_received",
                   side_effect=[Exception("network error"), None]) as mock_interaction:
            run(config_path=config_file)
        assert mock_interaction.call_count == 2


class TestParseMode:
    def test_prints_params(self, config_file, capsys):
        from scanner import parse_once
        params = parse_once("https://mtag.io/njaix4?tagId=999999&tac=888888", config_path=config_file)
        assert params == {"hid": "999999", "vid": "888888", "tech": "n", "tag_id": "32403784"}
        out = json.loads(capsys.readouterr().out)
        assert out["format"] == "hid"
        assert out["tag_id"] == "32403784"

    def test_does_not_hit_network(self, config_file):
        from scanner import parse_once
        with patch("urllib.request.urlopen") as mock_open:
            parse_once("https://mtag.io/njaix4", config_path=config_file)
        mock_open.assert_not_called()

    def test_bad_url_returns_none(self, config_file):
        from scanner import parse_once
        assert parse_once("https://bb.io/p/1/foobar?bar=1", config_path=config_file) is None

    def test_debug_config_lowers_log_level(self, tmp_path):
        import logging
        from scanner import parse_once
        p = tmp_path / "config.json"
        p.write_text(json.dumps({"debug": True}))
        root = logging.getLogger()
        level = root.level
        try:
            parse_once("https://mtag.io/njaix4", config_path=str(p))
            assert root.level == logging.DEBUG
        finally:
            root.setLevel(level)
