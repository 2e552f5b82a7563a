import gzip
import io
import tarfile
import zipfile

import pytest

from meshkit.archive import (
    ArchiveError,
    extract_tar_gz,
    extract_zip,
    is_tar_gz,
    is_yaml,
    is_zip,
    process_content,
)


@pytest.fixture
def zip_file(tmp_path):
    target = tmp_path / "bundle.zip"
    with zipfile.ZipFile(target, "w") as archive:
        archive.writestr("dir/", "")
        archive.writestr("dir/inner.txt", "inner contents")
        archive.writestr("top.txt", "top contents")
    return target


def _make_tar_gz(target, entries):
    with tarfile.open(target, "w:gz") as archive:
        for name, data in entries:
            info = tarfile.TarInfo(name)
            info.size = len(data)
            archive.addfile(info, io.BytesIO(data))
    return target


@pytest.fixture
def tar_file(tmp_path):
    return _make_tar_gz(tmp_path / "bundle.tar.gz", [("a/b.txt", b"bee"), ("c.txt", b"sea")])


def test_detection_of_zip(zip_file):
    assert is_zip(zip_file) is True
    assert is_tar_gz(zip_file) is False
    assert is_yaml(zip_file) is False


def test_detection_of_tar_gz(tar_file):
    assert is_tar_gz(tar_file) is True
    assert is_zip(tar_file) is False


def test_detection_of_yaml(tmp_path):
    manifest = tmp_path / "manifest.yaml"
    manifest.write_text("apiVersion: v1\nkind: Service\n")
    assert is_yaml(manifest) is True
    assert is_zip(manifest) is False


def test_detection_of_missing_file(tmp_path):
    missing = tmp_path / "absent"
    assert (is_zip(missing), is_tar_gz(missing), is_yaml(missing)) == (False, False, False)


def test_plain_gzip_is_tar_gz_by_signature(tmp_path):
    target = tmp_path / "data.gz"
    target.write_bytes(gzip.compress(b"payload"))
    assert is_tar_gz(target) is True


def test_extract_zip_round_trip(zip_file, tmp_path):
    out = tmp_path / "out"
    out.mkdir()
    extract_zip(out, zip_file)
    assert (out / "top.txt").read_text() == "top contents"
    assert (out / "dir" / "inner.txt").read_text() == "inner contents"


def test_extract_zip_bad_archive(tmp_path):
    bogus = tmp_path / "bogus.zip"
    bogus.write_bytes(b"not a zip")
    with pytest.raises(ArchiveError):
        extract_zip(tmp_path, bogus)


def test_extract_tar_gz_round_trip(tar_file, tmp_path):
    out = tmp_path / "out"
    extract_tar_gz(out, tar_file)
    assert (out / "a" / "b.txt").read_bytes() == b"bee"
    assert (out / "c.txt").read_bytes() == b"sea"


def test_extract_tar_gz_rejects_symlink(tmp_path):
    target = tmp_path / "links.tar.gz"
    with tarfile.open(target, "w:gz") as archive:
        info = tarfile.TarInfo("link")
        info.type = tarfile.SYMTYPE
        info.linkname = "elsewhere"
        archive.addfile(info)
    with pytest.raises(ArchiveError):
        extract_tar_gz(tmp_path / "out", target)


def test_extract_tar_gz_missing_file(tmp_path):
    with pytest.raises(ArchiveError):
        extract_tar_gz(tmp_path, tmp_path / "absent.tar.gz")


def test_extract_tar_gz_rejects_escaping_entry(tmp_path):
    target = _make_tar_gz(tmp_path / "evil.tar.gz", [("../escape.txt", b"x")])
    with pytest.raises(ArchiveError):
        extract_tar_gz(tmp_path / "out", target)
    assert not (tmp_path / "escape.txt").exists()


def test_process_content_directory(tmp_path):
    for name in ("b.txt", "a.txt", "c.txt"):
        (tmp_path / name).write_text(name)
    seen = []
    process_content(tmp_path, seen.append)
    assert [p.rsplit("/", 1)[-1].rsplit("\\", 1)[-1] for p in seen] == ["a.txt", "b.txt", "c.txt"]


def test_process_content_single_file(tmp_path):
    single = tmp_path / "one.yaml"
    single.write_text("x: 1")
    seen = []
    process_content(single, seen.append)
    assert seen == [str(single)]


def test_process_content_propagates_callback_error(tmp_path):
    (tmp_path / "f").write_text("")

    def fail(_path):
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        process_content(tmp_path, fail)


def test_process_content_missing_path(tmp_path):
    with pytest.raises(ArchiveError):
        process_content(tmp_path / "absent", lambda _p: None)