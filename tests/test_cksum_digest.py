import io
import logging
import sys
from types import SimpleNamespace

import pytest

from cksum_digest import __version__
from cksum_digest.cksum_digest import cksum_digest, main
from cksum_digest.exit_codes import SOURCE_UNAVAILABLE, SUCCESS_EXIT_CODE


@pytest.fixture(autouse=True)
def remove_cli_log_handlers():
    handlers = logging.root.handlers[:]
    yield

    for handler in logging.root.handlers[:]:
        if handler not in handlers:
            logging.root.removeHandler(handler)
            handler.close()


def test_main_prints_checksum(tmp_path, capsys):
    filename = tmp_path / "hello.txt"
    filename.write_bytes(b'hello world')

    exit_code = main([str(filename)])

    captured = capsys.readouterr()
    assert exit_code == SUCCESS_EXIT_CODE
    assert captured.out == "1135714720\n"
    assert "checksum of" in captured.err
    assert "1135714720" in captured.err


def test_main_missing_file(tmp_path, capsys):
    exit_code = main([str(tmp_path / "missing.txt")])

    captured = capsys.readouterr()
    assert exit_code == SOURCE_UNAVAILABLE
    assert captured.out == ""
    assert "Unable to read" in captured.err


def test_main_log_file(tmp_path, capsys):
    filename = tmp_path / "abc.txt"
    filename.write_bytes(b'abc')
    log_filename = tmp_path / "logs" / "cksum.log"

    assert main(["--log-file", str(log_filename), str(filename)]) == SUCCESS_EXIT_CODE
    assert capsys.readouterr().out == "1219131554\n"
    assert "1219131554" in log_filename.read_text()


def test_main_rejects_invalid_chunk_size(tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        main(["--chunk-size", "0", str(tmp_path)])

    assert excinfo.value.code == 2


def test_main_version(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--version"])

    assert excinfo.value.code == 0
    assert __version__ in capsys.readouterr().out


def test_cksum_digest_stdin(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", SimpleNamespace(buffer=io.BytesIO(b'abc')))

    assert cksum_digest("-") == SUCCESS_EXIT_CODE
    assert capsys.readouterr().out == "1219131554\n"


if __name__ == '__main__':
    sys.exit(pytest.main([__file__]))
