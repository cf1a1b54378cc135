from typing import Iterable, List, Optional, Set, Tuple, Union, Iterator


# Make scalar string or container of strings iteratable...
def str_iter(strings: Union[None, str, List[str], Set[str], Tuple[str]]) -> Iterator[str]:
    if strings is None:
        return
    if isinstance(strings, (list, set, tuple)):
        for v in strings:
            assert isinstance(v, str)
            yield v
    else:
        assert isinstance(strings, str)
        yield strings


# Deduplicate while preserving order...
def unique(values: Iterable[str]) -> List[str]:
    seen: Set[str] = set()
    deduped: List[str] = []
    for value in values:
        if value not in seen:
            seen.add(value)
            deduped.append(value)
    return deduped


# Normalize an optional path list declaration, None stays None...
def optional_list(values: Union[None, str, List[str]]) -> Optional[List[str]]:
    if values is None:
        return None
    return list(str_iter(values))
