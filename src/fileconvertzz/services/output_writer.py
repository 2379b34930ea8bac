from __future__ import annotations
import os
import shutil
import tempfile
from pathlib import Path
from typing import Iterable

from fileconvertzz.types_job_types import OutputFile


class StagingDir:
    """Hidden temp folder inside ``target`` whose files are moved in on commit.

    Staging on the same filesystem keeps each move an atomic rename. On
    exit the folder is removed, along with anything not committed.
    """

    def __init__(self, target: Path, prefix: str = ".fileconvertzz_"):
        target.mkdir(parents=True, exist_ok=True)
        self.target = target
        self._path = Path(tempfile.mkdtemp(prefix=prefix, dir=target))
        self._staged: list[str] = []

    def stage(self, name: str, data: bytes) -> None:
        if name in self._staged:
            raise ValueError(f"output name staged twice: {name}")
        (self._path / name).write_bytes(data)
        self._staged.append(name)

    def commit(self) -> list[Path]:
        """Move every staged file into ``target``; on failure undo the moves already made.

        A file about to be replaced is first parked in the staging folder so a
        failed commit can put it back.
        """
        backups = self._path / ".replaced"
        backups.mkdir()
        written: list[Path] = []
        replaced: list[str] = []
        try:
            for name in self._staged:
                dest = self.target / name
                if dest.exists():
                    os.replace(dest, backups / name)
                    replaced.append(name)
                os.replace(self._path / name, dest)
                written.append(dest)
        except OSError:
            for dest in written:
                dest.unlink(missing_ok=True)
            for name in replaced:
                os.replace(backups / name, self.target / name)
            raise
        self._staged.clear()
        return written

    def cleanup(self) -> None:
        if self._path.exists():
            shutil.rmtree(self._path, ignore_errors=True)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.cleanup()


def unique_names(names: Iterable[str]) -> list[str]:
    """Suffix repeated names within one job: a.png, a (1).png, a (2).png.

    A suffix is never reused, even when another output already carries it.
    """
    used: set[str] = set()
    result: list[str] = []
    for name in names:
        candidate, count = name, 0
        stem, dot, ext = name.rpartition(".")
        while candidate in used:
            count += 1
            candidate = f"{stem} ({count}).{ext}" if dot else f"{name} ({count})"
        used.add(candidate)
        result.append(candidate)
    return result


def save_outputs(outputs: Iterable[OutputFile], out_dir: Path) -> list[Path]:
    """
    Write a job's output files into ``out_dir`` and return their paths.

    Nothing lands in ``out_dir`` unless every file was written. Existing
    files with the same name are replaced.
    """
    outputs = list(outputs)
    with StagingDir(Path(out_dir)) as staging:
        for out, name in zip(outputs, unique_names(o.name for o in outputs)):
            staging.stage(name, out.data)
        return staging.commit()
