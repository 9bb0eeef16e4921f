"""
Image Resolver
==============

Works out where an image can actually be loaded from.

Each image reference expands into a fixed list of candidate URLs:

    [original, /api/images/<name>, <remote>/uploads/<name>, <remote>/images/<name>, placeholder]

The page starts on the first candidate (or on the one that already worked for the
same file name) and moves forward one candidate per load failure. The first candidate
that loads is remembered in a ResolutionCache keyed by canonical file name.
"""

import threading
from typing import Dict, List, Optional

from ...core.config import get_config_value

PROXY_PREFIX = '/api/images/'
DEFAULT_PLACEHOLDER = '/placeholder.jpg'
CANDIDATE_COUNT = 5


def canonical_file_name(ref: str) -> str:
    """Last path segment of *ref* with any query string removed."""
    clean = ref.split('?', 1)[0]
    return clean.rsplit('/', 1)[-1]


def cache_key(ref: str) -> str:
    """Cache key for *ref*: its canonical file name, or *ref* itself if that is empty."""
    return canonical_file_name(ref) or ref


def resolve(ref: str, remote_base: Optional[str] = None,
            placeholder: str = DEFAULT_PLACEHOLDER,
            proxy_prefix: str = PROXY_PREFIX) -> List[str]:
    """Build the ordered candidate list for *ref*.

    Always returns exactly five entries and the last one is always *placeholder*.
    Duplicates are kept so that indexes stay stable. *remote_base* defaults to the
    IMAGE_REMOTE_URL setting.
    """
    if not isinstance(ref, str) or not ref:
        raise ValueError("Image reference must be a non-empty string")

    name = canonical_file_name(ref)
    remote_base = (remote_base or get_config_value('IMAGE_REMOTE_URL')).rstrip('/')

    return [
        ref,
        f"{proxy_prefix}{name}",
        f"{remote_base}/uploads/{name}",
        f"{remote_base}/images/{name}",
        placeholder,
    ]


class ResolutionCache:
    """Canonical file name -> candidate URL that loaded first.

    Entries are written once and never replaced. One instance covers one page
    session: every image rendered on the page shares it, and the next full page
    load starts with a new, empty one.
    """

    def __init__(self):
        self._entries: Dict[str, str] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[str]:
        return self._entries.get(key)

    def set_if_absent(self, key: str, url: str) -> bool:
        """Store *url* under *key* unless already present. Returns True if written."""
        with self._lock:
            if key in self._entries:
                return False
            self._entries[key] = url
            return True

    def snapshot(self) -> Dict[str, str]:
        with self._lock:
            return dict(self._entries)

    def __contains__(self, key):
        return key in self._entries

    def __len__(self):
        return len(self._entries)


def initial_candidate_index(key: str, candidates: List[str], cache: ResolutionCache) -> int:
    """Index of the cached winner for *key* within *candidates*, else 0."""
    cached = cache.get(key)
    if cached is None:
        return 0
    try:
        return candidates.index(cached)
    except ValueError:
        return 0


def on_load_success(key: str, candidate: str, cache: ResolutionCache) -> bool:
    """Remember *candidate* for *key*; first writer wins."""
    return cache.set_if_absent(key, candidate)


def on_load_failure(index: int, candidates: List[str]) -> int:
    """Next candidate index after a failure. The last index is absorbing."""
    if index < len(candidates) - 1:
        return index + 1
    return index


class ResolutionState:
    """Per-image state machine: Trying(i) moving forward only, then Loaded."""

    def __init__(self, ref: str, cache: ResolutionCache,
                 remote_base: Optional[str] = None,
                 placeholder: str = DEFAULT_PLACEHOLDER):
        self.ref = ref
        self.cache = cache
        self.key = cache_key(ref)
        self.candidates = resolve(ref, remote_base=remote_base, placeholder=placeholder)
        self.index = initial_candidate_index(self.key, self.candidates, cache)
        self.loaded = False

    @property
    def current(self) -> str:
        return self.candidates[self.index]

    @property
    def exhausted(self) -> bool:
        return self.index == len(self.candidates) - 1

    def fail(self) -> str:
        """Record a load failure on the current candidate and return the new one."""
        if not self.loaded:
            self.index = on_load_failure(self.index, self.candidates)
        return self.current

    def succeed(self) -> str:
        """Record a successful load on the current candidate."""
        self.loaded = True
        on_load_success(self.key, self.current, self.cache)
        return self.current

    def to_dict(self):
        return {
            'ref': self.ref,
            'key': self.key,
            'candidates': list(self.candidates),
            'index': self.index,
            'current': self.current,
        }

    def __repr__(self):
        return f"<ResolutionState {self.key!r} index={self.index} loaded={self.loaded}>"


def image_references(project) -> List[str]:
    """Image references for a project record.

    Records carry either ``images`` (usable URLs) or ``serverImagePaths`` (paths
    that still need the proxy prefix).
    """
    if not project:
        return []
    images = project.get('images')
    if images:
        return [img for img in images if img]
    paths = project.get('serverImagePaths') or []
    return [f"{PROXY_PREFIX}{path.lstrip('/')}" for path in paths if path]
