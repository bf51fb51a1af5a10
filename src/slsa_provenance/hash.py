"""Digests of files and directory trees, as used in resource descriptors."""

from __future__ import annotations

import hashlib
import os

from pathlib import Path

from slsa_provenance.error import HashError

CHUNK_SIZE = 1024 * 1024


def __new_hash(algorithm: str):  # type: ignore[no-untyped-def]
    if algorithm not in hashlib.algorithms_guaranteed:
        raise HashError(
            f"Unsupported digest algorithm {algorithm}. Available algorithms "
            f"are: {', '.join(sorted(hashlib.algorithms_guaranteed))}",
            origin="hash",
        )
    return getattr(hashlib, algorithm)()


def __hexdigest(hash_obj, algorithm: str) -> str:  # type: ignore[no-untyped-def]
    # shake algorithms are variable length, use 64 bytes as dirhash does.
    if algorithm.startswith("shake_"):
        return hash_obj.hexdigest(64)
    return hash_obj.hexdigest()


def file_hash(path: str | Path, algorithm: str = "sha256") -> str:
    """Compute the hexadecimal digest of a file.

    :param path: path to a file
    :param algorithm: a :mod:`hashlib` algorithm name
    :return: the lowercase hexadecimal digest of the file content
    :raise HashError: if the file does not exist or the algorithm is unknown
    """
    if not os.path.isfile(path):
        raise HashError(f"cannot find {path}", origin="file_hash")

    result = __new_hash(algorithm)
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(CHUNK_SIZE), b""):
            result.update(chunk)
    return __hexdigest(result, algorithm)


def dir_hash(path: str | Path, algorithm: str = "sha256") -> str:
    r"""Directory hash.

    The `directory Hash1
    <https://cs.opensource.google/go/x/mod/+/refs/tags/v0.5.0:sumdb/dirhash/hash.go>`_
    function, omitting the ``h1:`` prefix and output in lowercase
    hexadecimal instead of base64.

    Equivalent to running the following command in *path*::

        find . -type f | cut -c3- | LC_ALL=C sort | xargs -r sha256sum \\
                       | sha256sum | cut -f1 -d' '

    The result is meant to be stored under the ``dirHash1`` digest key.

    :raise HashError: if *path* is not a directory or the algorithm is
        unknown
    """
    root = Path(path)
    if not root.is_dir():
        raise HashError(f"cannot find directory {path}", origin="dir_hash")

    folder_hash = __new_hash(algorithm)
    files = sorted(
        (p for p in root.rglob("*") if p.is_file()),
        key=lambda p: p.relative_to(root).as_posix().encode("utf-8"),
    )
    for filepath in files:
        rel_path = filepath.relative_to(root).as_posix()
        line = f"{file_hash(filepath, algorithm)}  {rel_path}\n"
        folder_hash.update(line.encode("utf-8"))

    return __hexdigest(folder_hash, algorithm)
