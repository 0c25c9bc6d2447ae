"""Player-name normalization and on-court dataset matching."""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Set
import re
import unicodedata

from hackstat.normalization.player import PlayerRow

_SUFFIXES = {"jr", "sr", "ii", "iii", "iv", "v", "vi"}

# Tried in this order; each strategy scans the whole dataset before the next.
MATCH_STRATEGIES = ("exact", "normalized", "token_subset", "surname")


@dataclass(frozen=True)
class OnCourtMatch:
    entry: Dict
    strategy: str


def normalize_name_for_matching(name: str) -> str:
    if not name:
        return ""
    text = unicodedata.normalize("NFKD", name).encode("ascii", "ignore").decode("ascii")
    text = text.lower()
    text = text.replace(",", " ").replace("/", " ").replace("-", " ")
    text = re.sub(r"[^\w\s]", "", text)
    parts = [part for part in text.split() if part not in _SUFFIXES]
    return " ".join(parts)


def _lower(value) -> str:
    return str(value or "").strip().lower()


def _swapped_forms(name: str) -> List[str]:
    """Both word orders of a "LAST, FIRST" name."""
    if "," not in name:
        return []
    parts = [part.strip() for part in name.split(",") if part.strip()]
    if len(parts) < 2:
        return []
    return [f"{parts[1]} {parts[0]}", f"{parts[0]} {parts[1]}"]


def _player_raw_keys(player: PlayerRow) -> Set[str]:
    keys = {_lower(player.name), _lower(player.code), _lower(player.slug)}
    if player.first_name or player.last_name:
        keys.add(f"{_lower(player.first_name)} {_lower(player.last_name)}".strip())
    keys.discard("")
    return keys


def _player_name_forms(player: PlayerRow) -> List[str]:
    forms = []
    if player.name:
        forms.append(player.name)
        forms.extend(_swapped_forms(player.name))
    if player.first_name or player.last_name:
        forms.append(f"{player.first_name} {player.last_name}")
    normalized = [normalize_name_for_matching(form) for form in forms]
    return [form for form in normalized if form]


def player_surname(player: PlayerRow) -> str:
    if player.last_name:
        return normalize_name_for_matching(player.last_name)
    name = player.name or ""
    if "," in name:
        return normalize_name_for_matching(name.split(",")[0])
    tokens = normalize_name_for_matching(name).split()
    return tokens[-1] if tokens else ""


def _entry_display(entry: Mapping) -> str:
    return f"{_lower(entry.get('firstname'))} {_lower(entry.get('surname'))}".strip()


def _entry_forms(entry: Mapping) -> List[str]:
    first = str(entry.get("firstname") or "")
    last = str(entry.get("surname") or "")
    forms = {
        normalize_name_for_matching(f"{first} {last}"),
        normalize_name_for_matching(f"{last} {first}"),
    }
    forms.discard("")
    return sorted(forms)


def _match_exact(entry: Mapping, player: PlayerRow) -> bool:
    keys = _player_raw_keys(player)
    display = _entry_display(entry)
    entry_id = _lower(entry.get("id"))
    return bool((display and display in keys) or (entry_id and entry_id in keys))


def _match_normalized(entry: Mapping, player: PlayerRow) -> bool:
    entry_forms = set(_entry_forms(entry))
    return any(form in entry_forms for form in _player_name_forms(player))


def _match_token_subset(entry: Mapping, player: PlayerRow) -> bool:
    entry_tokens = set(normalize_name_for_matching(_entry_display(entry)).split())
    if not entry_tokens:
        return False
    for form in _player_name_forms(player):
        tokens = set(form.split())
        if len(tokens) >= 2 and tokens <= entry_tokens:
            return True
        if len(entry_tokens) >= 2 and entry_tokens <= tokens:
            return True
    return False


_MATCHERS = {
    "exact": _match_exact,
    "normalized": _match_normalized,
    "token_subset": _match_token_subset,
}


def _unique_surname_match(entries: Sequence[Mapping], player: PlayerRow) -> Optional[Mapping]:
    surname = player_surname(player)
    if not surname:
        return None
    hits = [
        entry for entry in entries
        if normalize_name_for_matching(str(entry.get("surname") or "")) == surname
    ]
    return hits[0] if len(hits) == 1 else None


def find_on_court_entry(entries: Iterable, player: PlayerRow) -> Optional[OnCourtMatch]:
    """
    Resolve ``player`` against on-court dataset entries.

    Strategies run in MATCH_STRATEGIES order; within a strategy the first
    entry in dataset order wins. The surname fallback only accepts a
    surname carried by exactly one entry.
    """
    candidates = [entry for entry in entries or [] if isinstance(entry, Mapping)]
    if not candidates:
        return None

    for strategy in MATCH_STRATEGIES[:-1]:
        matcher = _MATCHERS[strategy]
        for entry in candidates:
            if matcher(entry, player):
                return OnCourtMatch(entry=dict(entry), strategy=strategy)

    entry = _unique_surname_match(candidates, player)
    if entry is not None:
        return OnCourtMatch(entry=dict(entry), strategy="surname")
    return None
