"""Merging downloaded parts with ffmpeg."""

from __future__ import annotations

import contextlib
import os
import subprocess
from typing import Optional, Sequence


class MergeError(Exception):
    """Raised when ffmpeg fails to merge files."""


def _run_merge_cmd(
    cmd: list[str], paths: Sequence[str], merge_file_path: Optional[str] = None
) -> None:
    try:
        result = subprocess.run(cmd, stderr=subprocess.PIPE)
    except OSError as exc:
        raise MergeError(str(exc)) from exc
    if result.returncode != 0:
        stderr = (result.stderr or b"").decode("utf-8", errors="replace")
        raise MergeError(f"exit status {result.returncode}\n{stderr}")

    leftovers = [merge_file_path] if merge_file_path else []
    for path in [*leftovers, *paths]:
        with contextlib.suppress(OSError):
            os.remove(path)


def merge_files_with_same_extension(paths: Sequence[str], merged_file_path: str) -> None:
    """Merge files of one extension, e.g. a video and its audio track."""
    cmd = ["ffmpeg", "-y"]
    for path in paths:
        cmd += ["-i", path]
    cmd += ["-c:v", "copy", "-c:a", "copy", merged_file_path]
    _run_merge_cmd(cmd, paths)


def merge_to_mp4(paths: Sequence[str], merged_file_path: str, filename: str) -> None:
    """Concatenate video parts into one MP4 file."""
    merge_file_path = filename + ".txt"
    with open(merge_file_path, "w", encoding="utf-8") as merge_file:
        merge_file.writelines(f"file '{path}'\n" for path in paths)

    cmd = [
        "ffmpeg", "-y", "-f", "concat", "-safe", "0",
        "-i", merge_file_path, "-c", "copy", "-bsf:a", "aac_adtstoasc", merged_file_path,
    ]
    _run_merge_cmd(cmd, paths, merge_file_path)