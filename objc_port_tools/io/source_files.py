"""ソースファイルの収集・読み書き。"""

from typing import Iterable, List
from pathlib import Path
import difflib
import logging
import os
import tempfile

logger = logging.getLogger(__name__)

# 任意のバイト列を往復で保持するためのエラーハンドラー
_ENCODING = "utf-8"
_ERRORS = "surrogateescape"


def collect_source_files(paths: Iterable[str], extensions: Iterable[str]) -> List[str]:
    """ファイルとディレクトリの指定から処理対象ファイルを集める。

    ディレクトリは再帰的に走査し、拡張子が一致するファイルのみを対象とする。
    明示的に指定されたファイルは拡張子に関係なく対象とする。

    Args:
        paths: ファイルまたはディレクトリのパス
        extensions: 対象とする拡張子（例: ".m"）

    Returns:
        重複を除いたファイルパスのリスト（指定順、ディレクトリ内はソート順）
    """
    suffixes = {ext.lower() for ext in extensions}
    files: List[str] = []
    seen = set()

    for path_str in paths:
        path = Path(path_str)
        if path.is_dir():
            candidates = sorted(
                p for p in path.rglob("*")
                if p.is_file() and p.suffix.lower() in suffixes
            )
        elif path.exists():
            candidates = [path]
        else:
            logger.warning(f"Path does not exist: {path_str}")
            continue

        for candidate in candidates:
            key = str(candidate)
            if key not in seen:
                seen.add(key)
                files.append(key)

    logger.debug(f"Found {len(files)} source files")
    return files


def read_source(path: str) -> str:
    """ソースファイルを読み込む。改行コードはそのまま保持する。"""
    with open(path, "r", encoding=_ENCODING, errors=_ERRORS, newline="") as f:
        return f.read()


def write_source(path: str, text: str) -> None:
    """ソースファイルを置き換える。

    同じディレクトリの一時ファイルに書いてから置き換えるため、
    書き込み途中で失敗しても元のファイルは壊れない。

    Args:
        path: 書き込み先のパス
        text: 新しい内容
    """
    target = Path(path)
    fd, tmp_path = tempfile.mkstemp(
        dir=str(target.parent), prefix=f".{target.name}.", suffix=".tmp"
    )
    try:
        with os.fdopen(fd, "w", encoding=_ENCODING, errors=_ERRORS, newline="") as f:
            f.write(text)
        if target.exists():
            os.chmod(tmp_path, target.stat().st_mode & 0o7777)
        os.replace(tmp_path, target)
    except BaseException:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise


def unified_diff(path: str, before: str, after: str) -> str:
    """変更前後の統一差分テキストを返す。"""
    return "".join(difflib.unified_diff(
        before.splitlines(keepends=True),
        after.splitlines(keepends=True),
        fromfile=f"{path} (original)",
        tofile=f"{path} (processed)"
    ))
