import hashlib

import pytest

from sha2_cli import main


ABC_SHA256 = "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"


def test_hashes_message_with_sha256_by_default(capsys):
    assert main(["abc"]) == 0
    assert capsys.readouterr().out.strip() == ABC_SHA256


@pytest.mark.parametrize(
    "algorithm,expected",
    [
        ("sha224", "23097d223405d8228642a477bda255b32aadbce4bda0b3f7e36c9da7"),
        ("SHA-512/224", "4634270f707b6a54daae7530460842e20e37ed265ceee9a43e8924aa"),
        ("sha512_256", "53048e2681941ef99b2e29b76b4c7dabe4c2d0c634fc6d46e0e2f13107e7af23"),
    ],
)
def test_algorithm_option(capsys, algorithm, expected):
    assert main(["-a", algorithm, "abc"]) == 0
    assert capsys.readouterr().out.strip() == expected


def test_message_is_utf8_encoded(capsys):
    assert main(["ABCÀҚপṖ"]) == 0
    expected = hashlib.sha256(bytes.fromhex("414243c380d29ae0a6aae1b996")).hexdigest()
    assert capsys.readouterr().out.strip() == expected


def test_hashes_file_contents(tmp_path, capsys):
    path = tmp_path / "message.bin"
    path.write_bytes(b"abc")
    assert main(["-f", str(path)]) == 0
    assert capsys.readouterr().out.strip() == ABC_SHA256


def test_missing_file_is_an_error(tmp_path, capsys):
    assert main(["-f", str(tmp_path / "absent.bin")]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Error reading file" in captured.err


def test_message_and_file_together_is_an_error(tmp_path, capsys):
    path = tmp_path / "message.bin"
    path.write_bytes(b"abc")
    assert main(["-f", str(path), "abc"]) == 1
    assert "not both" in capsys.readouterr().err


def test_unknown_algorithm_is_an_error(capsys):
    assert main(["-a", "md5", "abc"]) == 1
    assert "Unknown SHA-2 variant" in capsys.readouterr().err


def test_no_input_prints_usage(capsys):
    assert main([]) == 1
    assert "usage" in capsys.readouterr().err


def test_list(capsys):
    assert main(["--list"]) == 0
    out = capsys.readouterr().out
    for name in ("sha224", "sha256", "sha384", "sha512", "sha512_224", "sha512_256"):
        assert name in out
    assert "224-bit digest, 64-bit words" in out


def test_self_test_passes(capsys):
    assert main(["--self-test"]) == 0
    out = capsys.readouterr().out
    assert "60 passed, 0 failed" in out
    assert "[FAIL]" not in out


def test_self_test_reports_failures(tmp_path, capsys):
    path = tmp_path / "bad.yaml"
    path.write_text(
        "vectors:\n"
        "  - algorithm: sha256\n"
        "    description: deliberately wrong\n"
        "    text: abc\n"
        f"    digest: '{'00' * 32}'\n"
    )
    assert main(["--self-test", "--vectors", str(path)]) == 1
    out = capsys.readouterr().out
    assert "[FAIL]" in out
    assert f"got      {ABC_SHA256}" in out
    assert "0 passed, 1 failed" in out


def test_self_test_with_unreadable_vectors(tmp_path, capsys):
    assert main(["--self-test", "--vectors", str(tmp_path / "absent.yaml")]) == 1
    assert "Error loading vectors" in capsys.readouterr().err
