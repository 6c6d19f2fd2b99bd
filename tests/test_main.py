import io

import pytest

from packurl.__main__ import main
from packurl.codec.q85 import q85_encode
from packurl.packer import pack


def run(argv, data: bytes) -> bytes:
    stdout = io.BytesIO()
    main(argv, stdin=io.BytesIO(data), stdout=stdout)
    return stdout.getvalue()


def test_encode_decode():
    assert run(["encode"], b"Testing data.") == b"v&CMN1[;L1pyFDHX)\n"
    assert run(["decode"], b"v&CMN1[;L1pyFDHX)\n") == b"Testing data."


def test_pack_unpack():
    packed = run(["pack"], b"<div>Test data.</div>")
    assert packed.endswith(b"\n")
    assert run(["unpack"], packed) == b"<div>Test data.</div>"


def test_file_argument(tmp_path):
    path = tmp_path / "input.bin"
    path.write_bytes(b"\x00\x01\x02\x00")
    assert run(["encode", str(path)], b"") == q85_encode(b"\x00\x01\x02\x00").encode() + b"\n"


def test_missing_action():
    with pytest.raises(SystemExit) as exc:
        main([])
    assert "action" in str(exc.value.code)


def test_unsupported_action():
    with pytest.raises(SystemExit) as exc:
        main(["compress"])
    assert "Unsupported action" in str(exc.value.code)


def test_decode_error():
    with pytest.raises(SystemExit) as exc:
        run(["decode"], b"abc%")
    assert str(exc.value.code).startswith("decode failed")


def test_max_length_env(monkeypatch):
    packed = pack(b"<div>Test data.</div>").encode("ascii")
    monkeypatch.setenv("PACKURL_MAX_LENGTH", "3")
    with pytest.raises(SystemExit) as exc:
        run(["unpack"], packed)
    assert str(exc.value.code).startswith("unpack failed")
    monkeypatch.setenv("PACKURL_MAX_LENGTH", "many")
    with pytest.raises(SystemExit):
        run(["unpack"], packed)


def test_verbose(monkeypatch, capsys):
    monkeypatch.setenv("PACKURL_VERBOSE", "1")
    run(["encode"], b"abc")
    assert capsys.readouterr().err == "encode: 3 -> 6 bytes\n"


def test_missing_file(tmp_path):
    path = tmp_path / "missing.bin"
    with pytest.raises(SystemExit) as exc:
        main(["encode", str(path)])
    assert str(exc.value.code).startswith("Cannot read")
