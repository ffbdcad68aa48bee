import os
from typing import Iterable, List


def split_tokens(raw: str, sep: str = ";") -> List[str]:
    tokens: List[str] = []
    for part in raw.split(sep):
        token = part.strip()
        if not token:
            continue
        tokens.append(token)
    return tokens


def unique_sorted(values: Iterable[str]) -> List[str]:
    # Case-sensitive: "Foo.desktop" and "foo.desktop" are distinct handlers.
    return sorted(set(values))


def unique_paths(values: Iterable[str]) -> List[str]:
    seen = set()
    result: List[str] = []
    for value in values:
        path = str(value).strip()
        if not path:
            continue
        path = os.path.abspath(os.path.expanduser(path))
        if path in seen:
            continue
        seen.add(path)
        result.append(path)
    return result


def existing_files(paths: Iterable[str]) -> List[str]:
    return [path for path in paths if os.path.isfile(path)]
