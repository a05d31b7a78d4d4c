import re
import shlex
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Tuple
from PIL import Image

TRADEMARK_GLYPHS = "™®©"

# "key"  "value" on one line; block openers ("key" alone) never match
_KV_LINE = re.compile(r'^\s*"([^"]*)"\s+"((?:[^"\\]|\\.)*)"')
_SHELL_ESCAPED = re.compile(r"\\([$`])")


def kv_pairs(text: str) -> Iterator[Tuple[str, str]]:
    """Yield ``(key, value)`` for every single-line quoted pair.

    Nesting is ignored: a pair inside a block is reported like a top-level one.
    """
    for line in text.splitlines():
        m = _KV_LINE.match(line)
        if m:
            yield m.group(1), m.group(2).replace('\\"', '"').replace("\\\\", "\\")


def first_value(text: str, key: str) -> Optional[str]:
    for k, v in kv_pairs(text):
        if k.lower() == key.lower():
            return v
    return None


def strip_trademarks(title: str) -> str:
    return title.translate({ord(c): None for c in TRADEMARK_GLYPHS}).strip()


def digits_only(s: str) -> str:
    return "".join(c for c in s if c.isdigit())


def entry_stem(title: str) -> str:
    return title.replace(" ", "_").replace("/", "_")


def is_game(title: str, keywords: Iterable[str]) -> bool:
    low = title.lower()
    return not any(k and k.lower() in low for k in keywords)


def dump_env(values: Dict[str, str]) -> str:
    lines = []
    for k, v in values.items():
        v = str(v).replace("\\", "\\\\")
        for c in '"$`':
            v = v.replace(c, "\\" + c)
        lines.append(f'{k}="{v}"')
    return "\n".join(lines) + "\n"


def parse_env(text: str) -> Dict[str, str]:
    out: Dict[str, str] = {}
    for line in text.splitlines():
        s = line.strip()
        if not s or s.startswith("#"):
            continue
        for token in shlex.split(s, posix=True):
            key, sep, value = token.partition("=")
            if sep:
                # shlex keeps the backslash of \$ and \` inside double quotes
                out[key] = _SHELL_ESCAPED.sub(r"\1", value)
    return out


def pick_best_image(image_dir: Path, candidates: List[str], target_ar: float) -> Optional[str]:
    best = None
    best_score = float("inf")
    best_area = -1
    for name in candidates:
        f = image_dir / name
        try:
            with Image.open(f) as im:
                w, h = im.size
        except OSError:
            continue
        if w <= 0 or h <= 0:
            continue
        score = abs(w / h - target_ar)
        area = w * h
        if score < best_score or (abs(score - best_score) < 1e-6 and area > best_area):
            best, best_score, best_area = name, score, area
    return best
