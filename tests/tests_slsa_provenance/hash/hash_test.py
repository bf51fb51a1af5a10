import hashlib
import os

import pytest

from slsa_provenance.error import HashError
from slsa_provenance.hash import dir_hash, file_hash


def test_hash():
    with open("to-hash.txt", "wb") as f:
        f.write(b"content\n")
    assert file_hash(f.name, "md5") == "f75b8179e4bbe7e2b4a074dcef62de95"
    assert file_hash(f.name, "sha1") == "7fe70820e08a1aac0ef224d9c66ab66831cc4ab1"
    assert (
        file_hash(f.name)
        == "434728a410a78f56fc1b5899c3593436e61ab0c731e9072d95e96db290205e53"
    )
    assert file_hash(f.name) == file_hash(f.name, "sha256")
    assert len(file_hash(f.name, "shake_128")) == 128

    with pytest.raises(HashError):
        file_hash("doesnotexist")

    with pytest.raises(HashError) as err:
        file_hash(f.name, "whirlpool")
    assert "Unsupported digest algorithm whirlpool" in err.value.args[0]


def test_dir_hash():
    os.makedirs("tree/sub")
    with open("tree/b.txt", "wb") as f:
        f.write(b"b\n")
    with open("tree/sub/a.txt", "wb") as f:
        f.write(b"a\n")
    with open("tree/a.txt", "wb") as f:
        f.write(b"content\n")

    lines = "".join(
        f"{hashlib.sha256(content).hexdigest()}  {name}\n"
        for name, content in (
            ("a.txt", b"content\n"),
            ("b.txt", b"b\n"),
            ("sub/a.txt", b"a\n"),
        )
    )
    assert dir_hash("tree") == hashlib.sha256(lines.encode("utf-8")).hexdigest()

    # Empty directories do not change the hash
    os.makedirs("tree/empty")
    assert dir_hash("tree") == hashlib.sha256(lines.encode("utf-8")).hexdigest()

    # Content changes do
    with open("tree/sub/a.txt", "wb") as f:
        f.write(b"A\n")
    assert dir_hash("tree") != hashlib.sha256(lines.encode("utf-8")).hexdigest()

    with pytest.raises(HashError):
        dir_hash("tree/b.txt")
    with pytest.raises(HashError):
        dir_hash("doesnotexist")
