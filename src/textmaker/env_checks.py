"""Environment checks and validations."""

import sys
from pathlib import Path
from typing import List, Optional


def check_mecab_dicdir(dicdir: Optional[str]) -> List[str]:
    """Return problems with a configured MeCab dictionary directory.

    No directory configured means MeCab falls back to its default dictionary,
    which is not checked here.
    """
    if not dicdir:
        return []

    path = Path(dicdir).expanduser()
    if not path.exists():
        return [f"dictionary directory does not exist: {path}"]
    if not path.is_dir():
        return [f"dictionary path is not a directory: {path}"]

    problems = []
    if not (path / "dicrc").is_file():
        problems.append(f"missing dicrc in {path}")
    if not (path / "sys.dic").is_file():
        problems.append(f"missing sys.dic in {path}")
    return problems


def assert_mecab_dicdir(dicdir: Optional[str]) -> None:
    """Exit with a helpful message when the dictionary directory is unusable.

    Raises SystemExit when problems are found.
    """
    problems = check_mecab_dicdir(dicdir)
    if not problems:
        return

    details = "\n".join(f"   • {p}" for p in problems)
    print(
        "❌ MeCab dictionary check failed!\n"
        "\n"
        f"{details}\n"
        "\n"
        "💡 To fix this:\n"
        "   • Point MECAB_DIC_DIR at a compiled dictionary (contains dicrc, sys.dic)\n"
        "   • Or unset MECAB_DIC_DIR to use the bundled unidic-lite dictionary\n"
        "   • Or run with --tokenizer dummy (no dictionary needed)\n",
        file=sys.stderr,
    )
    sys.exit(1)
