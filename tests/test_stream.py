from pathlib import Path

import httpx

from digisign.stream import FileResponse


def _response(content: bytes, headers=None) -> httpx.Response:
    return httpx.Response(200, content=content, headers=headers or {}, request=httpx.Request("GET", "https://x/y"))


def test_file_response_metadata():
    file = FileResponse(
        _response(b"%PDF", {"content-type": "application/pdf", "content-disposition": 'attachment; filename="a.pdf"'})
    )
    assert file.content_type == "application/pdf"
    assert file.filename == "a.pdf"
    assert b"".join(file.iter_bytes()) == b"%PDF"


def test_save_into_directory_uses_header_filename(tmp_path: Path):
    file = FileResponse(
        _response(b"%PDF-1.4", {"content-disposition": 'attachment; filename="My Contract.pdf"'})
    )
    path = file.save(tmp_path)
    assert path == tmp_path / "My_Contract.pdf"
    assert path.read_bytes() == b"%PDF-1.4"


def test_save_into_directory_guesses_extension(tmp_path: Path):
    file = FileResponse(_response(b"PK", {"content-type": "application/zip"}))
    path = file.save(tmp_path)
    assert path.name == "download.zip"


def test_save_to_explicit_file(tmp_path: Path):
    target = tmp_path / "nested" / "out.bin"
    with FileResponse(_response(b"abc")) as file:
        assert file.save(target) == target
    assert target.read_bytes() == b"abc"
