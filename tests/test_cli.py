"""Tests for the command-line interface."""

import json
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from payments_engine.cli import _with_default_command, main

SAMPLE = """type, client, tx, amount
deposit, 1, 1, 1.0
deposit, 2, 2, 2.0
deposit, 1, 3, 2.0
withdrawal, 1, 4, 1.5
withdrawal, 2, 5, 3.0
"""

ENV_VARS = (
    "LOCKED_ACCOUNT_POLICY",
    "AMOUNT_PRECISION",
    "CSV_DELIMITER",
    "OUTPUT_FORMAT",
    "OUTPUT_DIR",
    "TOPIC_PREFIX",
    "LOG_FORMAT",
    "LOG_LEVEL",
    "SEED",
)


@pytest.fixture
def sample_csv(tmp_path: Path) -> Path:
    path = tmp_path / "transactions.csv"
    path.write_text(SAMPLE, encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestDefaultCommand:
    """Tests for the bare-file shorthand."""

    def test_inserts_process(self) -> None:
        assert _with_default_command(["tx.csv"]) == ["process", "tx.csv"]

    def test_skips_global_option_values(self) -> None:
        assert _with_default_command(["--log-level", "DEBUG", "tx.csv"]) == [
            "--log-level",
            "DEBUG",
            "process",
            "tx.csv",
        ]

    def test_explicit_command_untouched(self) -> None:
        assert _with_default_command(["generate", "--seed", "1"]) == ["generate", "--seed", "1"]


class TestProcessCommand:
    """Tests for the process command."""

    def test_writes_accounts_to_stdout(self, sample_csv: Path, capsys: pytest.CaptureFixture) -> None:
        assert main([str(sample_csv)]) == 0

        out = capsys.readouterr().out.splitlines()
        assert out == [
            "client,available,held,total,locked",
            "1,1.5000,0.0000,1.5000,false",
            "2,2.0000,0.0000,2.0000,false",
        ]

    def test_explicit_process(self, sample_csv: Path, capsys: pytest.CaptureFixture) -> None:
        assert main(["process", str(sample_csv)]) == 0

        assert capsys.readouterr().out.startswith("client,available,held,total,locked\n")

    def test_rejections_logged_to_stderr(self, sample_csv: Path, capsys: pytest.CaptureFixture) -> None:
        assert main(["--log-level", "WARNING", str(sample_csv)]) == 0

        captured = capsys.readouterr()
        assert "Rejected withdrawal tx=5 client=2" in captured.err
        assert "Rejected" not in captured.out

    def test_csv_output_file(self, sample_csv: Path, tmp_path: Path) -> None:
        output = tmp_path / "accounts.csv"

        assert main(["process", str(sample_csv), "--output", str(output)]) == 0

        assert output.read_text(encoding="utf-8").splitlines()[1] == "1,1.5000,0.0000,1.5000,false"

    def test_json_output(self, sample_csv: Path, tmp_path: Path) -> None:
        output_dir = tmp_path / "out"

        assert main(["process", str(sample_csv), "--output-format", "json", "--output", str(output_dir)]) == 0

        data = json.loads((output_dir / "accounts.json").read_text(encoding="utf-8"))
        assert [account["client"] for account in data] == [1, 2]
        assert data[0]["available"] == "1.5000"

    @patch("payments_engine.sinks.kafka.Producer")
    def test_kafka_output(self, mock_producer_class: MagicMock, sample_csv: Path) -> None:
        mock_producer = MagicMock()
        mock_producer.flush.return_value = 0
        mock_producer_class.return_value = mock_producer

        assert main(["process", str(sample_csv), "--output-format", "kafka"]) == 0

        assert mock_producer.produce.call_count == 2
        assert mock_producer.produce.call_args[1]["topic"] == "payments.accounts"

    def test_locked_policy_flag(self, tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
        path = tmp_path / "locked.csv"
        path.write_text(
            "type,client,tx,amount\n"
            "deposit,1,1,5\n"
            "dispute,1,1,\n"
            "chargeback,1,1,\n"
            "deposit,1,2,3\n",
            encoding="utf-8",
        )

        assert main([str(path)]) == 0
        assert "1,0.0000,0.0000,0.0000,true" in capsys.readouterr().out

        assert main(["process", str(path), "--locked-policy", "allow"]) == 0
        assert "1,3.0000,0.0000,3.0000,true" in capsys.readouterr().out

    def test_missing_file(self, tmp_path: Path) -> None:
        assert main([str(tmp_path / "missing.csv")]) == 1

    def test_bad_header(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.csv"
        path.write_text("kind,who\ndeposit,1\n", encoding="utf-8")

        assert main([str(path)]) == 1

    def test_undecodable_input(self, tmp_path: Path) -> None:
        path = tmp_path / "latin1.csv"
        path.write_bytes(b"type,client,tx,amount\ndeposit,1,1,1.0\ndeposit,\xff,2,1.0\n")

        assert main([str(path)]) == 1

    @pytest.mark.parametrize("output_format", ["console", "kafka"])
    def test_output_path_refused_for_stream_formats(
        self, sample_csv: Path, tmp_path: Path, output_format: str
    ) -> None:
        target = tmp_path / "accounts"

        assert main(["process", str(sample_csv), "--output-format", output_format, "--output", str(target)]) == 1
        assert not target.exists()

    def test_invalid_environment(self, sample_csv: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOCKED_ACCOUNT_POLICY", "freeze")

        assert main([str(sample_csv)]) == 1


class TestGenerateCommand:
    """Tests for the generate command."""

    def test_generate_to_file(self, tmp_path: Path) -> None:
        output = tmp_path / "generated.csv"

        assert main(["generate", "--transactions", "50", "--seed", "7", "--output", str(output)]) == 0

        lines = output.read_text(encoding="utf-8").splitlines()
        assert lines[0] == "type,client,tx,amount"
        assert len(lines) == 51

    def test_generate_reproducible(self, capsys: pytest.CaptureFixture) -> None:
        main(["generate", "--transactions", "20", "--seed", "7"])
        first = capsys.readouterr().out
        main(["generate", "--transactions", "20", "--seed", "7"])
        second = capsys.readouterr().out

        assert first == second

    def test_generate_then_process(self, tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
        output = tmp_path / "generated.csv"
        main(["generate", "--clients", "3", "--transactions", "200", "--seed", "1", "--output", str(output)])

        assert main([str(output)]) == 0

        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == "client,available,held,total,locked"
        assert 1 <= len(lines) - 1 <= 3

    def test_invalid_clients(self) -> None:
        assert main(["generate", "--clients", "0"]) == 1
