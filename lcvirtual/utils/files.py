"""Helpers for solution source files."""

import re
from pathlib import Path
from typing import Dict, Optional

from bs4 import BeautifulSoup


# language slug -> (file extension, line comment)
LANGS = {
    "bash": (".sh", "#"),
    "c": (".c", "//"),
    "cpp": (".cpp", "//"),
    "csharp": (".cs", "//"),
    "golang": (".go", "//"),
    "java": (".java", "//"),
    "javascript": (".js", "//"),
    "kotlin": (".kt", "//"),
    "mysql": (".sql", "--"),
    "php": (".php", "//"),
    "python": (".py", "#"),
    "python3": (".py", "#"),
    "ruby": (".rb", "#"),
    "rust": (".rs", "//"),
    "scala": (".scala", "//"),
    "swift": (".swift", "//"),
    "typescript": (".ts", "//"),
}

# Extension lookups prefer python3 over python
EXT_TO_LANG = {ext: lang for lang, (ext, _) in LANGS.items()}

HEADER_RE = re.compile(r"@lc\s+app=\S+\s+id=\S+\s+lang=(\S+)")

# Tags that end a paragraph and tags that end a line in problem descriptions
BLOCK_TAGS = ["p", "div", "pre", "ul", "ol", "blockquote", "h1", "h2", "h3", "h4"]
LINE_TAGS = ["li", "br"]


def exists(path: str) -> bool:
    return Path(path).is_file()


def slug_from_filename(path: str) -> str:
    """``1346.check-if-n-and-its-double-exist.cpp`` -> ``check-if-n-and-its-double-exist``."""
    parts = Path(path).name.split(".")
    return parts[1] if len(parts) > 1 else ""


def meta(path: str) -> Dict[str, Optional[str]]:
    """Detect the language of a source file.

    An ``@lc`` header written by ``--gen`` wins over the file extension.
    ``lang`` is None when neither is recognised.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            head = f.read(1024)
    except (IOError, UnicodeDecodeError):
        head = ""

    match = HEADER_RE.search(head)
    if match:
        return {"lang": match.group(1)}
    return {"lang": EXT_TO_LANG.get(Path(path).suffix)}


def html_to_text(html: str) -> str:
    """Render a problem description as plain text, one blank line per paragraph."""
    if not html:
        return ""
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup.find_all(BLOCK_TAGS):
        tag.insert_after("\n\n")
    for tag in soup.find_all(LINE_TAGS):
        tag.insert_after("\n")

    text = re.sub(r"[ \t]+\n", "\n", soup.get_text())
    return re.sub(r"\n{3,}", "\n\n", text).strip()


def source_filename(fid: str, slug: str, lang: str) -> str:
    ext, _ = LANGS.get(lang, (".txt", "#"))
    return f"{fid}.{slug}{ext}"


def generate_source(problem, lang: str, outdir: str, extra: bool = False) -> Path:
    """Write the code template of ``problem`` for ``lang`` into ``outdir``.

    Returns the path of the written file. An existing file is left alone.
    """
    ext, comment = LANGS.get(lang, (".txt", "#"))
    path = Path(outdir) / source_filename(problem.fid, problem.slug, lang)
    if path.exists():
        return path

    lines = [f"{comment} @lc app=leetcode id={problem.fid} lang={lang}"]
    lines.append(f"{comment} [{problem.fid}] {problem.name}")
    if extra:
        lines.append(comment)
        for line in html_to_text(problem.desc).splitlines():
            lines.append(f"{comment} {line}".rstrip())
    lines.append("")
    lines.append(problem.templates.get(lang, ""))

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write("\n".join(lines).rstrip() + "\n")
    return path
